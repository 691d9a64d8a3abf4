"""ghostcell: scoped, revertible mutation cells.

Usage:
    from ghostcell import GhostCell

    data = [1, 2, 3]
    with GhostCell(data) as cell:
        cell.get_mut().append(4)
        assert cell.get() == [1, 2, 3, 4]
    assert data == [1, 2, 3]  # changes were discarded at scope exit

    with GhostCell(data) as cell:
        cell.get_mut().append(4)
        kept = cell.into_inner()  # keep them instead
"""

__version__ = "0.1.0"

# Core primitives
from ghostcell.core import (
    BorrowError,
    CellClosedError,
    CellState,
    Copy,
    Duplicable,
    DuplicationFailedError,
    DuplicationStrategy,
    GhostCellError,
    duplicate,
)

# Cell and guards
from ghostcell.cell import (
    BorrowTracker,
    GhostBorrow,
    GhostBorrowMut,
    GhostCell,
    speculate,
)

# Configuration
from ghostcell.config import GhostCellSettings, get_settings, reset_settings

__all__ = [
    # Version
    "__version__",
    # Core
    "Copy",
    "CellState",
    "Duplicable",
    "DuplicationStrategy",
    "duplicate",
    # Errors
    "GhostCellError",
    "BorrowError",
    "CellClosedError",
    "DuplicationFailedError",
    # Cell
    "GhostCell",
    "GhostBorrow",
    "GhostBorrowMut",
    "BorrowTracker",
    "speculate",
    # Config
    "GhostCellSettings",
    "get_settings",
    "reset_settings",
]
