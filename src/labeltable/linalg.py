"""LAPACK-backed factorizations returning status codes."""

from __future__ import annotations

from typing import Tuple

import numpy as np
from scipy.linalg import lapack, solve_triangular


def cholesky_factor(a: np.ndarray, lower: bool = True) -> Tuple[np.ndarray, int]:
    """
    Cholesky factor of a symmetric positive-definite matrix.

    Only the ``lower`` (or upper) triangle of ``a`` is read; the other
    triangle of the factor is zero.

    Returns
    -------
    factor : np.ndarray
        L with ``a = L L'`` (lower) or U with ``a = U' U`` (upper)
    info : int
        0 on success, > 0 if the leading minor of that order is not
        positive definite, < 0 for an illegal argument
    """
    factor, info = lapack.dpotrf(np.asarray(a, dtype=float), lower=int(lower), clean=1)
    return factor, int(info)


def triangular_inverse(c: np.ndarray, lower: bool = True) -> Tuple[np.ndarray, int]:
    """Inverse of a non-unit triangular matrix; info > 0 when it is singular."""
    inverse, info = lapack.dtrtri(np.asarray(c, dtype=float), lower=int(lower))
    return inverse, int(info)


def whiten(lower: np.ndarray, x: np.ndarray, centre: np.ndarray) -> np.ndarray:
    """Rows of ``x`` minus ``centre``, mapped through ``L^-1``.

    Squared Euclidean distances between whitened rows are squared
    Mahalanobis distances for the covariance ``L L'``.
    """
    diff = np.atleast_2d(np.asarray(x, dtype=float) - centre)
    return solve_triangular(lower, diff.T, lower=True).T


def mahalanobis_squared(lower: np.ndarray, x: np.ndarray, y: np.ndarray) -> float:
    """Squared Mahalanobis distance ``(x-y)' (L L')^-1 (x-y)``."""
    z = whiten(lower, x, y)[0]
    return float(np.dot(z, z))
