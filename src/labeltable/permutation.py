"""Row/column permutations and label sorting."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from labeltable.errors import InvalidIndex
from labeltable.table import LabeledTable, normalize_label


def check_permutation(perm: Sequence[int], n: int) -> np.ndarray:
    """
    Validate that ``perm`` is a bijection on ``0..n-1``.

    Returns
    -------
    np.ndarray
        The permutation as an integer array.

    Raises
    ------
    InvalidIndex
        If the length is wrong, an entry is out of range, or an entry repeats.
    """
    p = np.asarray(perm)
    if p.ndim != 1 or p.size != n:
        raise InvalidIndex(f"Permutation must have {n} elements, got {p.size}.")
    if p.size and not np.issubdtype(p.dtype, np.integer):
        raise InvalidIndex("Permutation entries must be integers.")
    p = p.astype(np.intp)
    if n and (p.min() < 0 or p.max() >= n):
        raise InvalidIndex(f"One or more indices out of range [0, {n - 1}].")
    if np.unique(p).size != n:
        raise InvalidIndex("Permutation contains repeated indices.")
    return p


def invert_permutation(perm: Sequence[int]) -> np.ndarray:
    p = check_permutation(perm, len(perm))
    inverse = np.empty_like(p)
    inverse[p] = np.arange(p.size, dtype=np.intp)
    return inverse


def random_permutation(n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Uniformly random permutation of ``0..n-1``."""
    rng = np.random.default_rng() if rng is None else rng
    return rng.permutation(n).astype(np.intp)


def sorted_index_from_row_labels(table: LabeledTable) -> np.ndarray:
    """Stable lexicographic order of the row labels; absent labels sort as ''."""
    keys = [normalize_label(label) for label in table.row_labels]
    return np.array(sorted(range(len(keys)), key=keys.__getitem__), dtype=np.intp)


def permute_rows(table: LabeledTable, perm: Sequence[int]) -> LabeledTable:
    """New table whose row ``i`` is row ``perm[i]`` of ``table`` (labels travel)."""
    p = check_permutation(perm, table.n_rows)
    labels = table.row_labels
    return LabeledTable(
        table.data[p, :],
        row_labels=[labels[k] for k in p],
        column_labels=table.column_labels,
    )


def permute_columns(table: LabeledTable, perm: Sequence[int]) -> LabeledTable:
    """New table whose column ``j`` is column ``perm[j]`` of ``table``."""
    p = check_permutation(perm, table.n_cols)
    labels = table.column_labels
    return LabeledTable(
        table.data[:, p],
        row_labels=table.row_labels,
        column_labels=[labels[k] for k in p],
    )


def sort_rows_by_index(table: LabeledTable, index: Sequence[int], reverse: bool = False) -> LabeledTable:
    """
    Reorder rows by an index permutation.

    With ``reverse=False`` row ``i`` of the result is row ``index[i]``; with
    ``reverse=True`` row ``i`` is scattered to position ``index[i]``, undoing
    a previous forward sort with the same index.
    """
    p = check_permutation(index, table.n_rows)
    if reverse:
        p = invert_permutation(p)
    return permute_rows(table, p)


def sort_by_row_labels(table: LabeledTable) -> LabeledTable:
    """New table with rows in stable row-label order."""
    return permute_rows(table, sorted_index_from_row_labels(table))
