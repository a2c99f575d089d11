"""Row and column reductions, centering, normalization and ranking."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy import stats as sp_stats

from labeltable.errors import LabelNotFound, LabelsNotGrouped
from labeltable.table import LabeledTable, normalize_label


def sorted_quantile(values: np.ndarray, quantile: float) -> float:
    """Linear-interpolation quantile of already sorted values.

    Args:
        values: Values sorted in ascending order
        quantile: Fraction in [0, 1]

    Returns:
        Interpolated quantile

    Notes:
        The interpolation place is ``quantile * n + 0.5`` (1-based), clamped so
        that the outermost pair of values is used near the ends. Returns NaN
        for an empty array.
    """
    a = np.asarray(values, dtype=float)
    n = a.size
    if n < 1:
        return np.nan
    if n == 1:
        return float(a[0])
    place = quantile * n + 0.5
    left = int(np.floor(place))
    left = min(max(left, 1), n - 1)
    lo, hi = a[left - 1], a[left]
    if hi == lo:
        return float(lo)
    return float(lo + (place - left) * (hi - lo))


def column_extrema(table: LabeledTable, col: int) -> Tuple[float, float]:
    """Return (minimum, maximum) of a column."""
    values = table.data[:, table.check_column(col)]
    return float(values.min()), float(values.max())


def row_sum(table: LabeledTable, row: int) -> float:
    return float(np.sum(table.data[table.check_row(row), :]))


def column_sum(table: LabeledTable, col: int) -> float:
    return float(np.sum(table.data[:, table.check_column(col)]))


def grand_sum(table: LabeledTable) -> float:
    return float(np.sum(table.data))


def row_sum_by_label(table: LabeledTable, label: str) -> float:
    row = table.row_label_to_index(label)
    if row is None:
        raise LabelNotFound(f'There is no "{label}" row label.', label=label)
    return row_sum(table, row)


def column_sum_by_label(table: LabeledTable, label: str) -> float:
    col = table.column_label_to_index(label)
    if col is None:
        raise LabelNotFound(f'There is no "{label}" column label.', label=label)
    return column_sum(table, col)


def column_quantile(table: LabeledTable, col: int, quantile: float) -> float:
    """Quantile of a column.

    Args:
        table: Input table
        col: Column index
        quantile: Fraction in [0, 1]

    Returns:
        Interpolated quantile, or NaN for an invalid column or fraction
    """
    if not 0 <= col < table.n_cols:
        return np.nan
    if not 0.0 <= quantile <= 1.0:
        return np.nan
    return sorted_quantile(np.sort(table.data[:, col]), quantile)


def column_index_at_maximum_in_row(table: LabeledTable, row: int) -> int:
    """Column holding the first maximum of a row."""
    return int(np.argmax(table.data[table.check_row(row), :]))


def column_label_at_maximum_in_row(table: LabeledTable, row: int) -> Optional[str]:
    return table.get_column_label(column_index_at_maximum_in_row(table, row))


def _centre_columns(a: np.ndarray) -> None:
    a -= a.mean(axis=0, keepdims=True)


def centre_columns(table: LabeledTable) -> None:
    """Subtract each column's mean, in place."""
    _centre_columns(table.data)


def centre_rows(table: LabeledTable) -> None:
    """Subtract each row's mean, in place."""
    a = table.data
    a -= a.mean(axis=1, keepdims=True)


def double_centre(table: LabeledTable) -> None:
    """Subtract row and column means and add back the grand mean, in place."""
    a = table.data
    row_means = a.mean(axis=1, keepdims=True)
    col_means = a.mean(axis=0, keepdims=True)
    grand_mean = a.mean()
    a -= row_means
    a -= col_means
    a += grand_mean


def centre_columns_by_row_label(table: LabeledTable) -> None:
    """Centre the columns of each block of equal row labels, in place.

    Rows must already be grouped so that equal labels are contiguous; use
    ``labeltable.permutation.sort_by_row_labels`` first otherwise.

    Raises:
        LabelsNotGrouped: If a label reappears after its block ended
    """
    keys = [normalize_label(label) for label in table.row_labels]
    blocks = []
    start = 0
    for i in range(1, len(keys) + 1):
        if i == len(keys) or keys[i] != keys[start]:
            blocks.append((start, i))
            start = i

    seen = set()
    for start, stop in blocks:
        if keys[start] in seen:
            raise LabelsNotGrouped(
                f'Row label "{keys[start]}" occurs in more than one block; sort the rows by label first.'
            )
        seen.add(keys[start])

    for start, stop in blocks:
        _centre_columns(table.data[start:stop, :])


def _scale_to_norm(a: np.ndarray, axis: Optional[int], norm: float) -> None:
    current = np.sqrt(np.sum(a * a, axis=axis, keepdims=axis is not None))
    # zero vectors stay zero
    factor = np.divide(norm, current, out=np.zeros_like(current, dtype=float), where=current > 0)
    a *= factor


def normalize_columns(table: LabeledTable, norm: float = 1.0) -> None:
    """Scale every column to Euclidean norm ``norm``, in place."""
    _scale_to_norm(table.data, 0, norm)


def normalize_rows(table: LabeledTable, norm: float = 1.0) -> None:
    """Scale every row to Euclidean norm ``norm``, in place."""
    _scale_to_norm(table.data, 1, norm)


def normalize_table(table: LabeledTable, norm: float = 1.0) -> None:
    """Scale the whole table to Frobenius norm ``norm``, in place."""
    _scale_to_norm(table.data, None, norm)


def table_norm(table: LabeledTable) -> float:
    return float(np.sqrt(np.sum(table.data * table.data)))


def _standardize(a: np.ndarray, axis: int) -> None:
    mean = a.mean(axis=axis, keepdims=True)
    sd = a.std(axis=axis, ddof=1, keepdims=True)
    centred = a - mean
    a[...] = np.divide(centred, sd, out=np.zeros_like(centred), where=sd > 0)


def standardize_columns(table: LabeledTable) -> None:
    """Give every column mean 0 and sample standard deviation 1, in place.

    A table with a single row, and any constant column, becomes all zeros.
    """
    if table.n_rows <= 1:
        table.data[...] = 0.0
        return
    _standardize(table.data, 0)


def standardize_rows(table: LabeledTable) -> None:
    """Give every row mean 0 and sample standard deviation 1, in place.

    A table with a single column, and any constant row, becomes all zeros.
    """
    if table.n_cols <= 1:
        table.data[...] = 0.0
        return
    _standardize(table.data, 1)


def check_non_negativity(table: LabeledTable) -> bool:
    return bool(np.all(table.data >= 0.0))


def rank_columns(table: LabeledTable) -> LabeledTable:
    """New table with each column replaced by its fractional ranks (1-based)."""
    ranked = table.copy()
    ranked.data[...] = sp_stats.rankdata(table.data, method="average", axis=0)
    return ranked
