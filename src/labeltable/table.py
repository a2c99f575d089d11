"""Dense two-dimensional numeric table with optional row and column labels."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from labeltable.errors import DimensionMismatch, InvalidIndex

# Placeholder used when absent labels have to be rendered as text
ABSENT_LABEL_TEXT = "?"


def normalize_label(label: Optional[str]) -> str:
    """Comparison key for a label: absent and empty labels compare equal."""
    return "" if label is None else label


def is_absent(label: Optional[str]) -> bool:
    """True for absent (None) and empty labels."""
    return label is None or label == ""


def _as_labels(labels: Optional[Iterable[Optional[str]]], size: int, what: str) -> List[Optional[str]]:
    if labels is None:
        return [None] * size
    out = [None if label is None else str(label) for label in labels]
    if len(out) != size:
        raise DimensionMismatch(f"Expected {size} {what} labels, got {len(out)}.")
    return out


class LabeledTable:
    """
    Numeric matrix with one optional text label per row and per column.

    The table owns a private float64 copy of its data. Indices are 0-based;
    an absent label is ``None``.

    Parameters
    ----------
    data : array-like
        Two-dimensional numeric data with at least one row and one column.
    row_labels : Optional[Sequence[Optional[str]]]
        One label per row (default: all absent).
    column_labels : Optional[Sequence[Optional[str]]]
        One label per column (default: all absent).
    """

    __slots__ = ("_data", "_row_labels", "_column_labels")

    def __init__(
        self,
        data,
        row_labels: Optional[Sequence[Optional[str]]] = None,
        column_labels: Optional[Sequence[Optional[str]]] = None,
    ):
        arr = np.array(data, dtype=float, copy=True)
        if arr.ndim != 2:
            raise DimensionMismatch(f"Table data must be two-dimensional, got {arr.ndim} dimension(s).")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise DimensionMismatch(f"Table needs at least one row and one column, got shape {arr.shape}.")
        self._data = arr
        self._row_labels = _as_labels(row_labels, arr.shape[0], "row")
        self._column_labels = _as_labels(column_labels, arr.shape[1], "column")

    @classmethod
    def create(cls, n_rows: int, n_cols: int) -> "LabeledTable":
        """Zero-filled table without labels."""
        if n_rows < 1 or n_cols < 1:
            raise DimensionMismatch(f"Table needs at least one row and one column, got {n_rows} x {n_cols}.")
        return cls(np.zeros((n_rows, n_cols)))

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "LabeledTable":
        """Build a table from a DataFrame; the index becomes the row labels."""
        row_labels = [None if pd.isna(v) else str(v) for v in df.index]
        if isinstance(df.index, pd.RangeIndex):
            row_labels = None
        column_labels = [str(c) for c in df.columns]
        return cls(df.to_numpy(dtype=float), row_labels=row_labels, column_labels=column_labels)

    def to_dataframe(self) -> pd.DataFrame:
        """DataFrame view of a copy of the data, labels as index and columns."""
        return pd.DataFrame(
            self._data.copy(),
            index=pd.Index(self._row_labels, dtype=object),
            columns=pd.Index(self._column_labels, dtype=object),
        )

    def copy(self) -> "LabeledTable":
        return LabeledTable(self._data, self._row_labels, self._column_labels)

    def __copy__(self) -> "LabeledTable":
        return self.copy()

    def __deepcopy__(self, memo) -> "LabeledTable":
        return self.copy()

    @property
    def data(self) -> np.ndarray:
        """The owned data array; in-place modifications change the table."""
        return self._data

    @property
    def n_rows(self) -> int:
        return self._data.shape[0]

    @property
    def n_cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    @property
    def row_labels(self) -> List[Optional[str]]:
        return list(self._row_labels)

    @property
    def column_labels(self) -> List[Optional[str]]:
        return list(self._column_labels)

    def __repr__(self) -> str:
        return f"LabeledTable(n_rows={self.n_rows}, n_cols={self.n_cols})"

    # Index checks

    def check_row(self, i: int) -> int:
        if not 0 <= i < self.n_rows:
            raise InvalidIndex(f"Row number {i} not in valid range [0, {self.n_rows - 1}].")
        return i

    def check_column(self, j: int) -> int:
        if not 0 <= j < self.n_cols:
            raise InvalidIndex(f"Column number {j} not in valid range [0, {self.n_cols - 1}].")
        return j

    # Labels

    def set_row_label(self, i: int, text: Optional[str]) -> None:
        self._row_labels[self.check_row(i)] = None if text is None else str(text)

    def set_column_label(self, j: int, text: Optional[str]) -> None:
        self._column_labels[self.check_column(j)] = None if text is None else str(text)

    def get_row_label(self, i: int) -> Optional[str]:
        return self._row_labels[self.check_row(i)]

    def get_column_label(self, j: int) -> Optional[str]:
        return self._column_labels[self.check_column(j)]

    def set_row_labels(self, labels: Iterable[Optional[str]]) -> None:
        self._row_labels = _as_labels(labels, self.n_rows, "row")

    def set_column_labels(self, labels: Iterable[Optional[str]]) -> None:
        self._column_labels = _as_labels(labels, self.n_cols, "column")

    def label_to_index(self, text: str, by_column: bool = False) -> Optional[int]:
        """Index of the first row (or column) carrying ``text``, or None."""
        labels = self._column_labels if by_column else self._row_labels
        for i, label in enumerate(labels):
            if label is not None and label == text:
                return i
        return None

    def row_label_to_index(self, text: str) -> Optional[int]:
        return self.label_to_index(text, by_column=False)

    def column_label_to_index(self, text: str) -> Optional[int]:
        return self.label_to_index(text, by_column=True)

    def has_row_labels(self) -> bool:
        """True only if every row has a non-empty label."""
        return not any(is_absent(label) for label in self._row_labels)

    def has_column_labels(self) -> bool:
        """True only if every column has a non-empty label."""
        return not any(is_absent(label) for label in self._column_labels)

    def extract_row_labels(self) -> List[str]:
        return [ABSENT_LABEL_TEXT if label is None else label for label in self._row_labels]

    def extract_column_labels(self) -> List[str]:
        return [ABSENT_LABEL_TEXT if label is None else label for label in self._column_labels]

    def copy_labels(self, source: "LabeledTable", rows: Optional[str] = "rows", columns: Optional[str] = "columns") -> None:
        """
        Copy labels from another table.

        Parameters
        ----------
        source : LabeledTable
            Table to take the labels from.
        rows : Optional[str]
            ``"rows"`` copies the source row labels into the row labels,
            ``"columns"`` copies the source column labels, None leaves them.
        columns : Optional[str]
            Same for the column labels.
        """
        origins = {"rows": source._row_labels, "columns": source._column_labels, None: None}
        if rows not in origins or columns not in origins:
            raise ValueError(f"Label origin must be 'rows', 'columns' or None, got {rows!r}, {columns!r}")
        if origins[rows] is not None:
            self.set_row_labels(origins[rows])
        if origins[columns] is not None:
            self.set_column_labels(origins[columns])

    def set_sequential_row_labels(
        self, start: int, stop: int, prefix: str, number: int = 1, increment: int = 1
    ) -> None:
        """Label rows ``start..stop`` (inclusive) as prefix+number, prefix+(number+increment), ..."""
        self.check_row(start)
        self.check_row(stop)
        if start > stop:
            raise InvalidIndex(f"Wrong row indices: {start} > {stop}.")
        for i in range(start, stop + 1):
            self._row_labels[i] = f"{prefix}{number}"
            number += increment

    def set_sequential_column_labels(
        self, start: int, stop: int, prefix: str, number: int = 1, increment: int = 1
    ) -> None:
        """Label columns ``start..stop`` (inclusive) as prefix+number, ..."""
        self.check_column(start)
        self.check_column(stop)
        if start > stop:
            raise InvalidIndex(f"Wrong column indices: {start} > {stop}.")
        for j in range(start, stop + 1):
            self._column_labels[j] = f"{prefix}{number}"
            number += increment

    # Rows

    def copy_row_from(self, source: "LabeledTable", source_row: int, row: int) -> None:
        """Overwrite ``row`` with ``source_row`` of ``source``, label included."""
        source.check_row(source_row)
        self.check_row(row)
        if source.n_cols != self.n_cols:
            raise DimensionMismatch(
                f"Cannot copy a row of {source.n_cols} columns into a table with {self.n_cols} columns."
            )
        if source is self and source_row == row:
            return
        self._row_labels[row] = source._row_labels[source_row]
        self._data[row, :] = source._data[source_row, :]

    def equals(self, other: "LabeledTable") -> bool:
        """Same shape, identical data and identical labels."""
        return (
            self.shape == other.shape
            and np.array_equal(self._data, other._data)
            and self._row_labels == other._row_labels
            and self._column_labels == other._column_labels
        )
