"""Pure functions for duplication strategies.

These are stateless functions, one per DuplicationStrategy member. None of
them mutate their argument.
"""

from __future__ import annotations

import copy
from typing import TypeVar, cast

from ghostcell.core.duplication.models import Duplicable

T = TypeVar("T")


def _is_pydantic(value: object) -> bool:
    """Check if value is a Pydantic model instance without importing pydantic.

    Args:
        value: Object to check.

    Returns:
        True if the value's class inherits from pydantic.BaseModel.
    """
    for base in type(value).__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def duplicate_deep(value: T) -> T:
    """Recursively copy the value.

    Args:
        value: Value to duplicate.

    Returns:
        Deep copy sharing no mutable state with value.
    """
    return copy.deepcopy(value)


def duplicate_using_protocol(value: T) -> T:
    """Duplicate using the Duplicable protocol.

    Args:
        value: Value to duplicate (must implement Duplicable).

    Returns:
        Result of value.__duplicate__().

    Raises:
        TypeError: If value doesn't implement Duplicable.
    """
    if not isinstance(value, Duplicable):
        raise TypeError(f"{type(value).__name__} does not implement Duplicable protocol")
    return cast(T, value.__duplicate__())


def duplicate_auto(value: T) -> T:
    """Pick the best available duplication for value.

    Tries in order:
    1. __duplicate__ if value implements Duplicable
    2. model_copy(deep=True) for Pydantic models
    3. copy.deepcopy

    Args:
        value: Value to duplicate.

    Returns:
        Duplicate of value.
    """
    if isinstance(value, Duplicable):
        return cast(T, value.__duplicate__())
    if _is_pydantic(value):
        return cast(T, value.model_copy(deep=True))  # type: ignore[attr-defined]
    return copy.deepcopy(value)
