"""Duplication: protocol, strategies, and the duplicate() entry point."""

from ghostcell.core.duplication.core import DuplicationFailedError, duplicate
from ghostcell.core.duplication.models import Duplicable, DuplicationStrategy

__all__ = [
    # Models
    "Duplicable",
    "DuplicationStrategy",
    # Core
    "duplicate",
    "DuplicationFailedError",
]
