"""Borrow guards with runtime borrow tracking.

Usage:
    with cell.borrow() as items:
        print(len(items))

    with cell.borrow_mut() as items:
        items.append(4)

    guard = cell.borrow_mut()
    guard.value = 20  # replace the effective value outright
    guard.release()

Rules (checked at runtime, violations raise BorrowError):
- Any number of shared guards may be live at once.
- An exclusive guard excludes every other guard.
- Plain cell accessors count as momentary borrows: get() is shared,
  everything that writes or ends the dirty period is exclusive.
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

from ghostcell.core.errors import BorrowError

if TYPE_CHECKING:
    from ghostcell.cell.cell import GhostCell


class BorrowTracker:
    """Counts live guards on one cell.

    Not thread-safe. A cell has exactly one tracker for its whole life.
    """

    __slots__ = ("_shared", "_exclusive")

    def __init__(self) -> None:
        self._shared = 0
        self._exclusive = False

    @property
    def shared_count(self) -> int:
        """Number of live shared guards."""
        return self._shared

    @property
    def is_exclusive(self) -> bool:
        """True while an exclusive guard is live."""
        return self._exclusive

    @property
    def is_borrowed(self) -> bool:
        """True while any guard is live."""
        return self._exclusive or self._shared > 0

    def check_readable(self, operation: str) -> None:
        """Ensure a read does not alias a live exclusive guard.

        Args:
            operation: Name of the attempted operation, for the error message.

        Raises:
            BorrowError: If an exclusive guard is live.
        """
        if self._exclusive:
            raise BorrowError(f"Cannot {operation}: cell is mutably borrowed")

    def check_unborrowed(self, operation: str) -> None:
        """Ensure no guard of any kind is live.

        Args:
            operation: Name of the attempted operation, for the error message.

        Raises:
            BorrowError: If any guard is live.
        """
        self.check_readable(operation)
        if self._shared:
            raise BorrowError(
                f"Cannot {operation}: cell is borrowed by {self._shared} shared guard(s)"
            )

    def acquire_shared(self) -> None:
        """Register a new shared guard."""
        self.check_readable("borrow")
        self._shared += 1

    def acquire_exclusive(self) -> None:
        """Register a new exclusive guard."""
        self.check_unborrowed("borrow_mut")
        self._exclusive = True

    def release_shared(self) -> None:
        if self._shared == 0:
            raise BorrowError("release_shared() without a live shared guard")
        self._shared -= 1

    def release_exclusive(self) -> None:
        if not self._exclusive:
            raise BorrowError("release_exclusive() without a live exclusive guard")
        self._exclusive = False


class _Guard[T]:
    """Shared plumbing for GhostBorrow and GhostBorrowMut."""

    __slots__ = ("_cell", "_released")

    def __init__(self, cell: GhostCell[T]) -> None:
        self._cell = cell
        self._released = False

    @property
    def released(self) -> bool:
        """True once the guard has been released."""
        return self._released

    def _check_live(self) -> None:
        if self._released:
            raise BorrowError(f"{type(self).__name__} used after release")

    def _release(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement _release()")

    def release(self) -> None:
        """Release the guard. Releasing twice is a no-op."""
        if self._released:
            return
        self._released = True
        self._release()

    def __enter__(self) -> T:
        return self.value

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    @property
    def value(self) -> T:
        raise NotImplementedError(f"{type(self).__name__} must implement value")


class GhostBorrow[T](_Guard[T]):
    """Shared read guard onto a cell's effective value."""

    __slots__ = ()

    def __init__(self, cell: GhostCell[T]) -> None:
        cell._check_open("borrow")
        cell._tracker.acquire_shared()
        super().__init__(cell)

    def _release(self) -> None:
        self._cell._tracker.release_shared()

    @property
    def value(self) -> T:
        """Current effective value (overlay if present, else original).

        Raises:
            BorrowError: If the guard was released.
            CellClosedError: If the cell was consumed or discarded.
        """
        self._check_live()
        self._cell._check_open("read through borrow")
        return self._cell._effective()


class GhostBorrowMut[T](_Guard[T]):
    """Exclusive write guard onto a cell's overlay.

    The overlay is created when the guard is constructed, so every read and
    write through the guard lands on the cell's private copy.
    """

    __slots__ = ()

    def __init__(self, cell: GhostCell[T]) -> None:
        cell._check_open("borrow_mut")
        cell._tracker.check_unborrowed("borrow_mut")
        cell._ensure_overlay()
        cell._tracker.acquire_exclusive()
        super().__init__(cell)

    def _release(self) -> None:
        self._cell._tracker.release_exclusive()

    @property
    def value(self) -> T:
        """The cell's overlay, safe to mutate in place.

        Raises:
            BorrowError: If the guard was released.
            CellClosedError: If the cell was consumed or discarded.
        """
        self._check_live()
        self._cell._check_open("write through borrow")
        return self._cell._ensure_overlay()

    @value.setter
    def value(self, new_value: T) -> None:
        self._check_live()
        self._cell._check_open("write through borrow")
        self._cell._store(new_value)
