"""The scoped mutation cell and its borrow guards."""

from ghostcell.cell.borrow import BorrowTracker, GhostBorrow, GhostBorrowMut
from ghostcell.cell.cell import GhostCell, speculate

__all__ = [
    "GhostCell",
    "speculate",
    "GhostBorrow",
    "GhostBorrowMut",
    "BorrowTracker",
]
