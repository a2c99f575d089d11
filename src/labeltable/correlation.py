"""Row and column correlations between two tables, covariance and centroid."""

from __future__ import annotations

import numpy as np

from labeltable.errors import DimensionMismatch
from labeltable.table import LabeledTable


def _prepare(a: np.ndarray, axis: int, centre: bool, normalize: bool) -> np.ndarray:
    out = np.array(a, dtype=float, copy=True)
    if centre:
        out -= out.mean(axis=axis, keepdims=True)
    if normalize:
        norm = np.sqrt(np.sum(out * out, axis=axis, keepdims=True))
        out = np.divide(out, norm, out=np.zeros_like(out), where=norm > 0)
    return out


def _extended_dot(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    # accumulate in extended precision, narrow on store
    return np.matmul(x.astype(np.longdouble), y.astype(np.longdouble)).astype(np.float64)


def row_correlations(
    a: LabeledTable, b: LabeledTable, centre: bool = True, normalize: bool = True
) -> LabeledTable:
    """Dot products between the rows of ``a`` and the rows of ``b``.

    Args:
        a: First table (n x p)
        b: Second table (m x p)
        centre: Subtract each row's mean first
        normalize: Scale each row to unit Euclidean norm first

    Returns:
        n x m table; row labels from ``a``'s rows, column labels from ``b``'s rows

    Raises:
        DimensionMismatch: If the tables differ in number of columns
    """
    if a.n_cols != b.n_cols:
        raise DimensionMismatch(
            f"Both tables should have the same number of columns ({a.n_cols} != {b.n_cols})."
        )
    x = _prepare(a.data, 1, centre, normalize)
    y = _prepare(b.data, 1, centre, normalize)
    return LabeledTable(_extended_dot(x, y.T), row_labels=a.row_labels, column_labels=b.row_labels)


def column_correlations(
    a: LabeledTable, b: LabeledTable, centre: bool = True, normalize: bool = True
) -> LabeledTable:
    """Dot products between the columns of ``a`` and the columns of ``b``.

    With both options on, cell (j, k) is the Pearson correlation between
    column j of ``a`` and column k of ``b``.

    Raises:
        DimensionMismatch: If the tables differ in number of rows
    """
    if a.n_rows != b.n_rows:
        raise DimensionMismatch(
            f"Both tables should have the same number of rows ({a.n_rows} != {b.n_rows})."
        )
    x = _prepare(a.data, 0, centre, normalize)
    y = _prepare(b.data, 0, centre, normalize)
    return LabeledTable(_extended_dot(x.T, y), row_labels=a.column_labels, column_labels=b.column_labels)


def cross_correlations(
    a: LabeledTable, b: LabeledTable, by_columns: bool = False, centre: bool = True, normalize: bool = True
) -> LabeledTable:
    if by_columns:
        return column_correlations(a, b, centre, normalize)
    return row_correlations(a, b, centre, normalize)


def centroid(table: LabeledTable) -> np.ndarray:
    """Column means."""
    return table.data.mean(axis=0)


def covariance(table: LabeledTable) -> LabeledTable:
    """Sample covariance (n - 1 denominator) of the columns, labeled by column.

    A single-row table yields an all-NaN covariance.
    """
    n = table.n_rows
    centred = table.data - centroid(table)
    if n < 2:
        cov = np.full((table.n_cols, table.n_cols), np.nan)
    else:
        cov = _extended_dot(centred.T, centred) / (n - 1)
    labels = table.column_labels
    return LabeledTable(cov, row_labels=labels, column_labels=labels)
