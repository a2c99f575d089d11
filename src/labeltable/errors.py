"""Exception taxonomy for labeled table operations."""

from __future__ import annotations

from typing import Optional


class LabeledTableError(ValueError):
    """Base class for all structural and validation failures."""


class InvalidIndex(LabeledTableError, IndexError):
    """Raised when a row, column or permutation index is out of range."""


class DimensionMismatch(LabeledTableError):
    """Raised when two tables (or a table and a sequence) have incompatible sizes."""


class NotSquare(LabeledTableError):
    """Raised by operations that only accept square tables."""


class FactorizationFailed(LabeledTableError):
    """Raised when the LAPACK routine reports a nonzero status."""

    def __init__(self, message: str, info: int = 0):
        super().__init__(message)
        self.info = info


class MissingRowLabels(LabeledTableError):
    """Raised by label-keyed operations on a table without row labels."""


class LabelNotFound(LabeledTableError):
    """Raised when a label-keyed lookup does not match any label."""

    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class IncompatibleTables(LabeledTableError):
    """Raised when tables in a list differ in shape or labels."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class LabelsNotGrouped(LabeledTableError):
    """Raised when equal row labels do not form contiguous blocks."""


class LabelMismatchWarning(UserWarning):
    """Issued when appended tables disagree on row labels."""
