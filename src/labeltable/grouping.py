"""Aggregation of rows that share a row label."""

from __future__ import annotations

import logging

import numpy as np

from labeltable.errors import MissingRowLabels
from labeltable.permutation import sort_rows_by_index, sorted_index_from_row_labels
from labeltable.reduce import sorted_quantile
from labeltable.table import LabeledTable, is_absent, normalize_label

logger = logging.getLogger(__name__)


def _aggregate_block(block: np.ndarray, use_medians: bool) -> np.ndarray:
    if block.shape[0] < 2:
        return block[0].copy()
    if use_medians:
        ordered = np.sort(block, axis=0)
        return np.array([sorted_quantile(ordered[:, j], 0.5) for j in range(block.shape[1])])
    return block.mean(axis=0)


def means_by_row_labels(table: LabeledTable, expand: bool = False, use_medians: bool = False) -> LabeledTable:
    """Mean (or median) of the rows of each distinct row label.

    Args:
        table: Input table; left unchanged
        expand: If True, return one row per input row in the original order,
            each holding its group's aggregate. If False, return one row per
            distinct label in sorted label order.
        use_medians: Aggregate with the median instead of the mean

    Returns:
        New table with the column labels of ``table``

    Raises:
        MissingRowLabels: If no row carries a label
    """
    if all(is_absent(label) for label in table.row_labels):
        raise MissingRowLabels("Table has no row labels to group by.")

    index = sorted_index_from_row_labels(table)
    work = sort_rows_by_index(table, index)
    keys = [normalize_label(label) for label in work.row_labels]

    data = work.data
    n_groups = 0
    start = 0
    for i in range(1, work.n_rows + 1):
        if i < work.n_rows and keys[i] == keys[start]:
            continue
        aggregate = _aggregate_block(data[start:i, :], use_medians)
        if expand:
            data[start:i, :] = aggregate
        else:
            data[n_groups, :] = aggregate
            work.set_row_label(n_groups, work.get_row_label(start))
        n_groups += 1
        start = i

    logger.debug(f"Aggregated {table.n_rows} rows into {n_groups} label groups")

    if expand:
        # sorted rows carry the labels in sorted order; the original order
        # is restored by scattering back with the same index
        return sort_rows_by_index(work, index, reverse=True)

    return LabeledTable(
        data[:n_groups, :],
        row_labels=work.row_labels[:n_groups],
        column_labels=work.column_labels,
    )
