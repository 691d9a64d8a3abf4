"""Core functionalities: stateless types, errors, and duplication.

Architecture Note:
    core/ holds pure building blocks with no runtime state.
    The stateful cell and its guards live in cell/.
"""

from ghostcell.core.duplication import (
    Duplicable,
    DuplicationFailedError,
    DuplicationStrategy,
    duplicate,
)
from ghostcell.core.errors import BorrowError, CellClosedError, GhostCellError
from ghostcell.core.types import CellState, Copy

__all__ = [
    # Types
    "Copy",
    "CellState",
    # Errors
    "GhostCellError",
    "BorrowError",
    "CellClosedError",
    # Duplication
    "Duplicable",
    "DuplicationStrategy",
    "DuplicationFailedError",
    "duplicate",
]
