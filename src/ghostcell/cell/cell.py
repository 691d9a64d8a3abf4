"""Scoped, revertible mutation cell.

Usage:
    data = [1, 2, 3]

    # Scope exit throws changes away
    with GhostCell(data) as cell:
        cell.get_mut().append(4)
        assert cell.get() == [1, 2, 3, 4]
    assert data == [1, 2, 3]

    # into_inner() keeps them, still without touching data
    with GhostCell(data) as cell:
        cell.get_mut().append(4)
        kept = cell.into_inner()
    assert kept == [1, 2, 3, 4]

    # Immutable values are replaced rather than mutated
    with GhostCell(10) as cell:
        cell.set(20)
        cell.update(lambda v: v + 1)
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

from ghostcell.cell.borrow import BorrowTracker, GhostBorrow, GhostBorrowMut
from ghostcell.config import GhostCellSettings, get_settings
from ghostcell.core.duplication import DuplicationStrategy, duplicate
from ghostcell.core.errors import CellClosedError
from ghostcell.core.types import CellState, Copy

logger = logging.getLogger(__name__)


class GhostCell[T]:
    """Wraps a borrowed value and absorbs writes into a private overlay.

    The wrapped value is never mutated. The first write access duplicates it
    into an overlay; later writes reuse that overlay until revert(). The
    overlay is dropped when the cell's scope ends, unless into_inner() moved
    it out first.

    Gotcha: get() returns the effective value by reference. While the cell
    is CLEAN that is the original itself, so mutate through get_mut() or
    borrow_mut(), never through get().

    Args:
        original: Value to wrap. Must be duplicable under the chosen strategy.
        strategy: Duplication strategy. Defaults to the configured one.
        duplicator: Custom duplication function, overrides strategy.
        settings: Settings to use instead of the process-wide ones.
    """

    __slots__ = (
        "_original",
        "_overlay",
        "_state",
        "_strategy",
        "_duplicator",
        "_warn_on_dirty_discard",
        "_tracker",
    )

    def __init__(
        self,
        original: T,
        *,
        strategy: DuplicationStrategy | None = None,
        duplicator: Callable[[T], T] | None = None,
        settings: GhostCellSettings | None = None,
    ) -> None:
        settings = settings if settings is not None else get_settings()
        self._original = original
        self._overlay: T | None = None
        self._state = CellState.CLEAN
        self._strategy = strategy if strategy is not None else settings.strategy
        self._duplicator = duplicator
        self._warn_on_dirty_discard = settings.warn_on_dirty_discard
        self._tracker = BorrowTracker()

    # Internal helpers shared with the borrow guards

    def _check_open(self, operation: str) -> None:
        if self._state.is_terminal:
            raise CellClosedError(
                f"Cannot {operation}: cell was {self._state.name.lower()}"
            )

    def _duplicate(self, value: T) -> T:
        return duplicate(value, self._strategy, self._duplicator)

    def _effective(self) -> T:
        if self._state is CellState.DIRTY:
            return self._overlay  # type: ignore[return-value]
        return self._original

    def _ensure_overlay(self) -> T:
        if self._state is CellState.CLEAN:
            # Duplicate before touching state so a failure leaves the cell CLEAN
            overlay = self._duplicate(self._original)
            self._overlay = overlay
            self._state = CellState.DIRTY
            logger.debug("Created overlay for %s", type(self._original).__name__)
        return self._overlay  # type: ignore[return-value]

    def _store(self, value: T) -> None:
        self._overlay = value
        self._state = CellState.DIRTY

    def _close(self) -> None:
        if self._state.is_terminal:
            return
        if self._state is CellState.DIRTY and self._warn_on_dirty_discard:
            warnings.warn(
                f"GhostCell over {type(self._original).__name__} discarded with "
                f"unsaved changes. Call into_inner() to keep them.",
                stacklevel=3,
            )
        self._overlay = None
        self._state = CellState.DISCARDED
        logger.debug("Discarded cell over %s", type(self._original).__name__)

    # Observers

    @property
    def state(self) -> CellState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_dirty(self) -> bool:
        """True while an overlay is present."""
        return self._state is CellState.DIRTY

    @property
    def is_closed(self) -> bool:
        """True once the cell was consumed or discarded."""
        return self._state.is_terminal

    @property
    def original(self) -> T:
        """The wrapped value, as passed to the constructor."""
        return self._original

    @property
    def strategy(self) -> DuplicationStrategy:
        """Duplication strategy used when no custom duplicator is set."""
        return self._strategy

    # Operations

    def get(self) -> T:
        """Get the effective value: the overlay if present, else the original.

        Never duplicates.

        Raises:
            BorrowError: If a borrow_mut() guard is live.
            CellClosedError: If the cell was consumed or discarded.
        """
        self._check_open("get")
        self._tracker.check_readable("get")
        return self._effective()

    def get_mut(self) -> T:
        """Get the overlay for in-place modification, creating it if needed.

        The first call after creation or revert() duplicates the original.
        Later calls return the same overlay without duplicating again.

        Returns:
            The cell's overlay. Mutating it never affects the original.

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was consumed or discarded.
            DuplicationFailedError: If the original could not be duplicated.
                The cell stays CLEAN.
        """
        self._check_open("get_mut")
        self._tracker.check_unborrowed("get_mut")
        return self._ensure_overlay()

    def set(self, value: T) -> None:
        """Replace the effective value outright.

        Does not duplicate the original. The cell takes ownership of value.

        Args:
            value: New effective value.

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was consumed or discarded.
        """
        self._check_open("set")
        self._tracker.check_unborrowed("set")
        self._store(value)

    def update(self, func: Callable[[T], T]) -> T:
        """Replace the effective value with func(duplicate of effective value).

        func always works on a fresh duplicate, and its return value becomes
        the new overlay only once it returns. If func raises, the cell is left
        exactly as it was. func must return the new value: an in-place
        function returning None makes the effective value None. Suited for
        immutable values: cell.update(lambda s: s + " world").

        Args:
            func: Function computing the new value.

        Returns:
            The new effective value.

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was consumed or discarded.
            DuplicationFailedError: If the effective value could not be duplicated.
        """
        self._check_open("update")
        self._tracker.check_unborrowed("update")
        new_value = func(self._duplicate(self._effective()))
        self._store(new_value)
        return new_value

    def revert(self) -> None:
        """Drop the overlay so reads see the original again. Idempotent.

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was consumed or discarded.
        """
        self._check_open("revert")
        self._tracker.check_unborrowed("revert")
        if self._state is CellState.DIRTY:
            self._overlay = None
            self._state = CellState.CLEAN
            logger.debug("Reverted cell over %s", type(self._original).__name__)

    def into_inner(self) -> Copy[T]:
        """Consume the cell and return its final value.

        Moves the overlay out if present, otherwise returns a duplicate of the
        original. This is the only way to keep changes made through the cell.
        The original is never touched.

        Returns:
            Final value, owned by the caller.

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was already consumed or discarded.
            DuplicationFailedError: If the original could not be duplicated.
                The cell stays usable.
        """
        self._check_open("into_inner")
        self._tracker.check_unborrowed("into_inner")
        if self._state is CellState.DIRTY:
            value = self._overlay
            self._overlay = None
        else:
            value = self._duplicate(self._original)
        self._state = CellState.CONSUMED
        logger.debug("Consumed cell over %s", type(self._original).__name__)
        return value  # type: ignore[return-value]

    def discard(self) -> None:
        """End the cell's life without keeping changes.

        Same as leaving a `with GhostCell(...)` block without into_inner().

        Raises:
            BorrowError: If any guard is live.
            CellClosedError: If the cell was already consumed or discarded.
        """
        self._check_open("discard")
        self._tracker.check_unborrowed("discard")
        self._close()

    def borrow(self) -> GhostBorrow[T]:
        """Open a shared read guard."""
        self._check_open("borrow")
        return GhostBorrow(self)

    def borrow_mut(self) -> GhostBorrowMut[T]:
        """Open an exclusive write guard, creating the overlay if needed."""
        self._check_open("borrow_mut")
        return GhostBorrowMut(self)

    def __enter__(self) -> Self:
        self._check_open("enter")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._close()

    def __repr__(self) -> str:
        if self._state.is_terminal:
            return f"GhostCell(state={self._state.name})"
        return f"GhostCell(state={self._state.name}, value={self._effective()!r})"


def speculate[T, R](
    original: T,
    func: Callable[[GhostCell[T]], R],
    **options: Any,
) -> R:
    """Run func against a throwaway cell over original and return its result.

    Whatever func writes is discarded afterwards, unless func itself calls
    into_inner().

    Args:
        original: Value to wrap.
        func: Function receiving the cell.
        **options: Forwarded to GhostCell (strategy, duplicator, settings).

    Returns:
        Whatever func returns.
    """
    with GhostCell(original, **options) as cell:
        return func(cell)
