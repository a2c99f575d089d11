"""Tests for permutations and label sorting."""

import pytest
import numpy as np

from labeltable.errors import InvalidIndex
from labeltable.permutation import (
    check_permutation,
    invert_permutation,
    permute_columns,
    permute_rows,
    random_permutation,
    sort_by_row_labels,
    sort_rows_by_index,
    sorted_index_from_row_labels,
)
from labeltable.table import LabeledTable


@pytest.fixture
def unsorted_table():
    return LabeledTable(
        [[1.0], [2.0], [3.0], [4.0]],
        row_labels=["b", "a", "b", "a"],
        column_labels=["v"],
    )


def test_check_permutation_rejects_repeats():
    """Test a repeated index is not a permutation."""
    with pytest.raises(InvalidIndex, match="repeated"):
        check_permutation([0, 0, 1], 3)


def test_check_permutation_rejects_out_of_range():
    """Test an out-of-range index is rejected."""
    with pytest.raises(InvalidIndex, match="out of range"):
        check_permutation([0, 3, 1], 3)


def test_check_permutation_rejects_wrong_length():
    with pytest.raises(InvalidIndex):
        check_permutation([0, 1], 3)


def test_invert_permutation():
    """Test composing a permutation with its inverse gives the identity."""
    p = np.array([2, 0, 3, 1])
    inv = invert_permutation(p)

    np.testing.assert_array_equal(p[inv], np.arange(4))


def test_random_permutation_is_reproducible():
    """Test an injected generator makes permutations deterministic."""
    p1 = random_permutation(10, np.random.default_rng(7))
    p2 = random_permutation(10, np.random.default_rng(7))

    np.testing.assert_array_equal(p1, p2)
    assert sorted(p1.tolist()) == list(range(10))


def test_sorted_index_is_stable(unsorted_table):
    """Test ties keep their original order."""
    index = sorted_index_from_row_labels(unsorted_table)

    assert index.tolist() == [1, 3, 0, 2]


def test_sorted_index_absent_labels_first():
    """Test absent labels sort like empty strings."""
    table = LabeledTable([[1.0], [2.0]], row_labels=["a", None])

    assert sorted_index_from_row_labels(table).tolist() == [1, 0]


def test_permute_rows_moves_labels(unsorted_table):
    """Test labels travel with their rows."""
    result = permute_rows(unsorted_table, [3, 2, 1, 0])

    assert result.row_labels == ["a", "b", "a", "b"]
    np.testing.assert_array_equal(result.data[:, 0], [4.0, 3.0, 2.0, 1.0])
    assert result.column_labels == ["v"]


def test_permute_columns():
    table = LabeledTable([[1.0, 2.0, 3.0]], column_labels=["x", "y", "z"])
    result = permute_columns(table, [2, 0, 1])

    assert result.column_labels == ["z", "x", "y"]
    np.testing.assert_array_equal(result.data[0], [3.0, 1.0, 2.0])


def test_sort_rows_by_index_reverse_undoes_forward(unsorted_table):
    """Test reverse sorting restores the original order."""
    index = sorted_index_from_row_labels(unsorted_table)
    sorted_table = sort_rows_by_index(unsorted_table, index)
    restored = sort_rows_by_index(sorted_table, index, reverse=True)

    assert restored.equals(unsorted_table)


def test_sort_by_row_labels(unsorted_table):
    result = sort_by_row_labels(unsorted_table)

    assert result.row_labels == ["a", "a", "b", "b"]
    np.testing.assert_array_equal(result.data[:, 0], [2.0, 4.0, 1.0, 3.0])
    # input untouched
    assert unsorted_table.row_labels == ["b", "a", "b", "a"]
