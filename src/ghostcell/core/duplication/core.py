"""Duplication entry point used by cells.

Usage:
    from ghostcell.core.duplication import DuplicationStrategy, duplicate

    copy_of_items = duplicate(items)
    fast_copy = duplicate(record, DuplicationStrategy.AUTO)
    custom = duplicate(frame, duplicator=lambda f: f.copy())
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from ghostcell.core.errors import GhostCellError
from ghostcell.core.duplication.models import DuplicationStrategy

T = TypeVar("T")


class DuplicationFailedError(GhostCellError):
    """Raised when a value could not be duplicated.

    The exception raised by the duplication function is chained as __cause__.

    Attributes:
        value_type: Type of the value that failed to duplicate.
        strategy: Strategy in use, or None for a custom duplicator.
    """

    def __init__(self, value_type: type, strategy: DuplicationStrategy | None) -> None:
        self.value_type = value_type
        self.strategy = strategy
        how = f"strategy {strategy.value!r}" if strategy else "custom duplicator"
        super().__init__(f"Could not duplicate {value_type.__name__} using {how}")


def duplicate(
    value: T,
    strategy: DuplicationStrategy = DuplicationStrategy.DEEP,
    duplicator: Callable[[Any], Any] | None = None,
) -> T:
    """Duplicate a value with a custom duplicator or a strategy.

    Args:
        value: Value to duplicate.
        strategy: Strategy to use when no duplicator is given.
        duplicator: Optional custom function. Takes precedence over strategy.

    Returns:
        Independent duplicate of value.

    Raises:
        DuplicationFailedError: If the duplication function raised.
    """
    func = duplicator if duplicator is not None else strategy.get_strategy()
    try:
        return func(value)  # type: ignore[no-any-return]
    except Exception as e:
        raise DuplicationFailedError(
            type(value), None if duplicator is not None else strategy
        ) from e
