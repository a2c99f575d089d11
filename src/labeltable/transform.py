"""Structural transforms producing new tables."""

from __future__ import annotations

import logging
import warnings
from typing import Optional, Sequence

import numpy as np

from labeltable.errors import (
    DimensionMismatch,
    FactorizationFailed,
    LabeledTableError,
    LabelMismatchWarning,
    NotSquare,
)
from labeltable.linalg import cholesky_factor, triangular_inverse
from labeltable.permutation import permute_rows, random_permutation
from labeltable.table import LabeledTable, normalize_label

logger = logging.getLogger(__name__)


def transpose(table: LabeledTable) -> LabeledTable:
    """Swap rows and columns together with their labels."""
    return LabeledTable(table.data.T, row_labels=table.column_labels, column_labels=table.row_labels)


def count_row_label_differences(a: LabeledTable, b: LabeledTable) -> int:
    """Number of positions where the row labels of two equal-height tables differ."""
    if a.n_rows != b.n_rows:
        raise DimensionMismatch(f"The numbers of rows should be equal ({a.n_rows} != {b.n_rows}).")
    return sum(
        normalize_label(x) != normalize_label(y) for x, y in zip(a.row_labels, b.row_labels)
    )


def append_columns(a: LabeledTable, b: LabeledTable) -> LabeledTable:
    """
    Place the columns of ``b`` to the right of those of ``a``.

    Row labels come from ``a``. Differing row labels do not stop the append;
    their count is reported with a :class:`LabelMismatchWarning`.

    Raises
    ------
    DimensionMismatch
        If the tables have different numbers of rows
    """
    label_diffs = count_row_label_differences(a, b)
    result = LabeledTable(
        np.hstack([a.data, b.data]),
        row_labels=a.row_labels,
        column_labels=a.column_labels + b.column_labels,
    )
    if label_diffs > 0:
        message = f"{label_diffs} row labels differed."
        logger.warning(message)
        warnings.warn(message, LabelMismatchWarning, stacklevel=2)
    return result


def append_columns_many(tables: Sequence[LabeledTable]) -> LabeledTable:
    """
    Concatenate the columns of all tables, left to right.

    Row labels come from the last table.

    Raises
    ------
    LabeledTableError
        If ``tables`` is empty
    DimensionMismatch
        If a table's number of rows differs from the first table's
    """
    if len(tables) == 0:
        raise LabeledTableError("No tables to append.")
    n_rows = tables[0].n_rows
    for i, table in enumerate(tables[1:], start=1):
        if table.n_rows != n_rows:
            raise DimensionMismatch(
                f"Number of rows in item {i} ({table.n_rows}) differs from previous ({n_rows})."
            )
    column_labels = []
    for table in tables:
        column_labels.extend(table.column_labels)
    return LabeledTable(
        np.hstack([table.data for table in tables]),
        row_labels=tables[-1].row_labels,
        column_labels=column_labels,
    )


def cholesky_decomposition(table: LabeledTable, upper: bool = False, inverse: bool = False) -> LabeledTable:
    """
    Cholesky factor of a square symmetric positive-definite table.

    Parameters
    ----------
    table : LabeledTable
        Square table; only the triangle selected by ``upper`` is used
    upper : bool
        Return U with ``A = U' U`` instead of L with ``A = L L'``
    inverse : bool
        Return the inverse of the triangular factor

    Raises
    ------
    NotSquare
        If the table is not square
    FactorizationFailed
        If the table is not positive definite, or the factor is singular
    """
    if table.n_rows != table.n_cols:
        raise NotSquare(f"The table should be square, got {table.n_rows} x {table.n_cols}.")

    work = table.data.copy()
    if upper:
        work[np.tril_indices_from(work, k=-1)] = 0.0
    else:
        work[np.triu_indices_from(work, k=1)] = 0.0

    lower = not upper
    factor, info = cholesky_factor(work, lower=lower)
    if info != 0:
        raise FactorizationFailed(f"Cholesky factorization failed (dpotrf info={info}).", info=info)
    if inverse:
        factor, info = triangular_inverse(factor, lower=lower)
        if info != 0:
            raise FactorizationFailed(f"Triangular inversion failed (dtrtri info={info}).", info=info)

    result = table.copy()
    result.data[...] = factor
    return result


def bootstrap(table: LabeledTable, rng: Optional[np.random.Generator] = None) -> LabeledTable:
    """
    Resample rows uniformly with replacement.

    The result has the same shape; each row, with its label, is a copy of a
    randomly drawn input row. On average about 1/e of the input rows are
    never drawn.
    """
    rng = np.random.default_rng() if rng is None else rng
    draws = rng.integers(0, table.n_rows, size=table.n_rows)
    labels = table.row_labels
    return LabeledTable(
        table.data[draws, :],
        row_labels=[labels[k] for k in draws],
        column_labels=table.column_labels,
    )


def randomize_rows(table: LabeledTable, rng: Optional[np.random.Generator] = None) -> LabeledTable:
    """Rows (with labels) in uniformly random order."""
    return permute_rows(table, random_permutation(table.n_rows, rng))
