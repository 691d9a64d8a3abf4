"""Duplication models: protocol and strategy selection.

A value held by a GhostCell must be duplicable. Deep copy covers plain Python
data; types that know a cheaper or more correct way to copy themselves
implement the Duplicable protocol.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, Self, runtime_checkable


class DuplicationStrategy(Enum):
    """How a cell produces its overlay from the current effective value."""

    DEEP = "deep"  # copy.deepcopy
    PROTOCOL = "protocol"  # value.__duplicate__(), error if missing
    AUTO = "auto"  # __duplicate__, then pydantic model_copy, then deepcopy

    def get_strategy(self) -> Callable[[Any], Any]:
        """Get the duplication function for this strategy.

        Returns:
            Pure function taking a value and returning its duplicate.
        """
        # Late import to avoid circular dependency
        from ghostcell.core.duplication import operations

        strategies = {
            DuplicationStrategy.DEEP: operations.duplicate_deep,
            DuplicationStrategy.PROTOCOL: operations.duplicate_using_protocol,
            DuplicationStrategy.AUTO: operations.duplicate_auto,
        }
        return strategies[self]


@runtime_checkable
class Duplicable(Protocol):
    """One instance → an independent, value-equal instance."""

    def __duplicate__(self) -> Self: ...
