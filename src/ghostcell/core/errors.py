"""Exceptions raised by ghostcell."""


class GhostCellError(Exception):
    """Base class for all ghostcell errors."""

    pass


class BorrowError(GhostCellError):
    """Raised when an access conflicts with a live borrow guard."""

    pass


class CellClosedError(GhostCellError):
    """Raised when a consumed or discarded cell is used."""

    pass
