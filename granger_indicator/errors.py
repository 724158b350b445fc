"""Exception types raised by the Granger-causality engine."""
from __future__ import annotations

from typing import Dict


class GrangerError(Exception):
    """Base class for all Granger computation errors."""


class ShapeMismatch(GrangerError, ValueError):
    """Input series (or design rows) do not share the same length."""


class InsufficientData(GrangerError, ValueError):
    """Too few observations for the requested lag window and variable count."""

    def __init__(self, message: str, **sizes: int):
        super().__init__(message)
        self.sizes: Dict[str, int] = dict(sizes)


class SingularDesign(GrangerError, ArithmeticError):
    """The regression design matrix is rank deficient and cannot be solved."""

    def __init__(self, message: str, rank: int | None = None, columns: int | None = None):
        super().__init__(message)
        self.rank = rank
        self.columns = columns


__all__ = ["GrangerError", "ShapeMismatch", "InsufficientData", "SingularDesign"]
