"""Operations over a list of tables."""

from __future__ import annotations

from typing import Sequence

from labeltable.errors import IncompatibleTables, LabeledTableError
from labeltable.table import LabeledTable, normalize_label
from labeltable.transform import append_columns_many


def _same_labels(x, y) -> bool:
    return [normalize_label(v) for v in x] == [normalize_label(v) for v in y]


def have_identical_dimensions(tables: Sequence[LabeledTable]) -> bool:
    """True if all tables share the first table's shape (labels are ignored)."""
    if len(tables) < 2:
        return True
    first = tables[0]
    return all(t.shape == first.shape for t in tables[1:])


def sum_tables(tables: Sequence[LabeledTable]) -> LabeledTable:
    """Element-wise sum of tables with identical shape and labels.

    Args:
        tables: Tables to add

    Returns:
        New table with the labels of the first table

    Raises:
        LabeledTableError: If ``tables`` is empty
        IncompatibleTables: If a table differs from the first in shape, row
            labels or column labels; ``index`` names that table
    """
    if len(tables) == 0:
        raise LabeledTableError("No tables to sum.")
    first = tables[0]
    for i, table in enumerate(tables[1:], start=1):
        if (
            table.shape != first.shape
            or not _same_labels(table.row_labels, first.row_labels)
            or not _same_labels(table.column_labels, first.column_labels)
        ):
            raise IncompatibleTables(f"Dimensions or labels differ for table {i}.", index=i)

    result = first.copy()
    for table in tables[1:]:
        result.data[...] += table.data
    return result


class TableList(list):
    """A list of :class:`LabeledTable` with aggregate operations."""

    def sum(self) -> LabeledTable:
        return sum_tables(self)

    def have_identical_dimensions(self) -> bool:
        return have_identical_dimensions(self)

    def append_columns(self) -> LabeledTable:
        return append_columns_many(self)
