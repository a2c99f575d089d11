"""Tests for the LAPACK wrappers."""

import pytest
import numpy as np

from labeltable.linalg import cholesky_factor, mahalanobis_squared, triangular_inverse, whiten


@pytest.fixture
def cov():
    return np.array([[2.0, 0.5], [0.5, 1.0]])


def test_cholesky_factor_success(cov):
    lower, info = cholesky_factor(cov, lower=True)

    assert info == 0
    np.testing.assert_allclose(lower @ lower.T, cov)


def test_cholesky_factor_reports_status():
    """Test a non-positive-definite matrix gives a positive info code."""
    _, info = cholesky_factor(np.array([[1.0, 2.0], [2.0, 1.0]]))

    assert info > 0


def test_triangular_inverse_singular():
    _, info = triangular_inverse(np.array([[1.0, 0.0], [3.0, 0.0]]), lower=True)

    assert info > 0


def test_mahalanobis_matches_explicit_inverse(cov):
    """Test the Cholesky route agrees with the explicit inverse."""
    lower, _ = cholesky_factor(cov)
    x = np.array([1.0, -2.0])
    y = np.array([0.5, 0.5])

    d = x - y
    expected = d @ np.linalg.inv(cov) @ d
    assert mahalanobis_squared(lower, x, y) == pytest.approx(expected)


def test_whiten_rows(cov):
    """Test whitened rows have identity covariance in expectation."""
    rng = np.random.default_rng(4)
    x = rng.multivariate_normal([1.0, 2.0], cov, size=5000)
    lower, _ = cholesky_factor(np.cov(x, rowvar=False))

    z = whiten(lower, x, x.mean(axis=0))

    np.testing.assert_allclose(np.cov(z, rowvar=False), np.eye(2), atol=1e-10)
