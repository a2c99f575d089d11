"""Tests for structural transforms."""

import logging

import pytest
import numpy as np

from labeltable.errors import DimensionMismatch, FactorizationFailed, LabelMismatchWarning, NotSquare
from labeltable.table import LabeledTable
from labeltable.transform import (
    append_columns,
    append_columns_many,
    bootstrap,
    cholesky_decomposition,
    count_row_label_differences,
    randomize_rows,
    transpose,
)


@pytest.fixture
def spd_table():
    """Symmetric positive-definite 3 x 3 table."""
    a = np.array([[4.0, 2.0, 0.6], [2.0, 5.0, 1.0], [0.6, 1.0, 3.0]])
    return LabeledTable(a, row_labels=["p", "q", "r"], column_labels=["p", "q", "r"])


def test_transpose_swaps_labels(small_table):
    """Test labels swap along with the data."""
    result = transpose(small_table)

    assert result.shape == (2, 3)
    assert result.row_labels == ["c1", "c2"]
    assert result.column_labels == ["r1", "r2", "r3"]
    np.testing.assert_array_equal(result.data, small_table.data.T)


def test_transpose_roundtrip(small_table):
    assert transpose(transpose(small_table)).equals(small_table)


def test_append_columns(small_table):
    """Test appending reproduces both inputs side by side."""
    other = LabeledTable([[7.0], [8.0], [9.0]], row_labels=["r1", "r2", "r3"], column_labels=["c3"])

    result = append_columns(small_table, other)

    assert result.shape == (3, 3)
    np.testing.assert_array_equal(result.data[:, : small_table.n_cols], small_table.data)
    np.testing.assert_array_equal(result.data[:, 2], [7.0, 8.0, 9.0])
    assert result.column_labels == ["c1", "c2", "c3"]
    assert result.row_labels == ["r1", "r2", "r3"]


def test_append_columns_label_diffs_warn(small_table, caplog):
    """Test differing row labels are reported but do not stop the append."""
    other = LabeledTable([[7.0], [8.0], [9.0]], row_labels=["r1", "x", "y"])

    with caplog.at_level(logging.WARNING):
        with pytest.warns(LabelMismatchWarning, match="2 row labels differed"):
            result = append_columns(small_table, other)

    assert result.row_labels == ["r1", "r2", "r3"]
    assert "2 row labels differed" in caplog.text
    assert count_row_label_differences(small_table, other) == 2


def test_append_columns_row_mismatch(small_table):
    with pytest.raises(DimensionMismatch):
        append_columns(small_table, LabeledTable.create(2, 1))


def test_append_columns_many():
    """Test N-ary append keeps every column label in order."""
    tables = [
        LabeledTable([[1.0], [2.0]], column_labels=["a"]),
        LabeledTable([[3.0, 4.0], [5.0, 6.0]], column_labels=["b", "c"]),
        LabeledTable([[7.0], [8.0]], row_labels=["u", "v"], column_labels=["d"]),
    ]

    result = append_columns_many(tables)

    np.testing.assert_array_equal(result.data, [[1.0, 3.0, 4.0, 7.0], [2.0, 5.0, 6.0, 8.0]])
    assert result.column_labels == ["a", "b", "c", "d"]
    assert result.row_labels == ["u", "v"]


def test_append_columns_many_names_offending_table():
    tables = [LabeledTable.create(2, 1), LabeledTable.create(2, 1), LabeledTable.create(3, 1)]

    with pytest.raises(DimensionMismatch, match="item 2"):
        append_columns_many(tables)


def test_cholesky_lower(spd_table):
    """Test L L' reproduces the input and labels are kept."""
    result = cholesky_decomposition(spd_table)

    lower = result.data
    assert np.allclose(np.triu(lower, k=1), 0.0)
    np.testing.assert_allclose(lower @ lower.T, spd_table.data)
    assert result.row_labels == ["p", "q", "r"]


def test_cholesky_upper(spd_table):
    """Test U' U reproduces the input."""
    upper = cholesky_decomposition(spd_table, upper=True).data

    assert np.allclose(np.tril(upper, k=-1), 0.0)
    np.testing.assert_allclose(upper.T @ upper, spd_table.data)


def test_cholesky_inverse(spd_table):
    """Test the inverted factor is the inverse of L."""
    lower = cholesky_decomposition(spd_table).data
    inverse = cholesky_decomposition(spd_table, inverse=True).data

    np.testing.assert_allclose(inverse @ lower, np.eye(3), atol=1e-12)


def test_cholesky_not_positive_definite():
    """Test a negative diagonal fails instead of returning a partial factor."""
    table = LabeledTable([[1.0, 0.0], [0.0, -2.0]])

    with pytest.raises(FactorizationFailed) as excinfo:
        cholesky_decomposition(table)

    assert excinfo.value.info > 0


def test_cholesky_not_square(small_table):
    with pytest.raises(NotSquare):
        cholesky_decomposition(small_table)


@pytest.mark.parametrize("n_rows", [1, 2, 7, 50])
def test_bootstrap_membership(n_rows):
    """Test every bootstrap row is an original row with its label."""
    rng = np.random.default_rng(n_rows)
    table = LabeledTable(
        rng.normal(size=(n_rows, 3)),
        row_labels=[f"s{i}" for i in range(n_rows)],
        column_labels=["a", "b", "c"],
    )

    result = bootstrap(table, rng=np.random.default_rng(0))

    assert result.shape == table.shape
    assert result.column_labels == ["a", "b", "c"]
    for i in range(n_rows):
        k = table.row_label_to_index(result.get_row_label(i))
        np.testing.assert_array_equal(result.data[i], table.data[k])


def test_bootstrap_is_reproducible(small_table):
    r1 = bootstrap(small_table, rng=np.random.default_rng(3))
    r2 = bootstrap(small_table, rng=np.random.default_rng(3))

    assert r1.equals(r2)


def test_randomize_rows_is_permutation(small_table):
    """Test randomized rows contain every original row exactly once."""
    result = randomize_rows(small_table, rng=np.random.default_rng(9))

    assert sorted(result.row_labels) == ["r1", "r2", "r3"]
    for i, label in enumerate(result.row_labels):
        k = small_table.row_label_to_index(label)
        np.testing.assert_array_equal(result.data[i], small_table.data[k])
