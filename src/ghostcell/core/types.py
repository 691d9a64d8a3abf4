"""Core type definitions for ghostcell."""

from enum import Enum, auto

type Copy[T] = T
"""Type alias indicating a value is a duplicate owned by the caller.

When you see `Copy[T]` in a return type, the returned value is a fresh
duplicate (or a moved-out overlay). Mutating it never touches the value the
cell was created from.
"""


class CellState(Enum):
    """Lifecycle state of a GhostCell."""

    CLEAN = auto()  # No overlay, reads see the original
    DIRTY = auto()  # Overlay present, reads see the overlay
    CONSUMED = auto()  # into_inner() was called
    DISCARDED = auto()  # Scope ended without into_inner()

    @property
    def is_terminal(self) -> bool:
        """Whether the cell can no longer be used."""
        return self in (CellState.CONSUMED, CellState.DISCARDED)
