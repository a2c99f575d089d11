"""Pytest configuration and fixtures."""

import pytest
import numpy as np

from labeltable.table import LabeledTable


@pytest.fixture
def small_table():
    """3 x 2 table with full row and column labels."""
    return LabeledTable(
        [[1.0, 2.0], [3.0, 4.0], [5.0, 9.0]],
        row_labels=["r1", "r2", "r3"],
        column_labels=["c1", "c2"],
    )


@pytest.fixture
def grouped_table():
    """Rows labeled a, a, b as used for label aggregation."""
    return LabeledTable(
        [[1.0, 1.0], [3.0, 3.0], [10.0, 10.0]],
        row_labels=["a", "a", "b"],
        column_labels=["x", "y"],
    )


@pytest.fixture
def normal_sample():
    """200 samples from a 3-variate normal distribution."""
    rng = np.random.default_rng(42)
    cov = np.array([[1.0, 0.3, 0.1], [0.3, 2.0, 0.4], [0.1, 0.4, 1.5]])
    data = rng.multivariate_normal(np.zeros(3), cov, size=200)
    return LabeledTable(data, column_labels=["f1", "f2", "f3"])


@pytest.fixture
def temp_outdir(tmp_path):
    """Provide temporary output directory."""
    outdir = tmp_path / "derived"
    outdir.mkdir()
    return outdir
