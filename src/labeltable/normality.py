"""Multivariate normality testing with the BHEP statistic.

Henze & Wagner (1997), A new approach to the BHEP tests for multivariate
normality, Journal of Multivariate Analysis 62, 1-23.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import numpy as np
from scipy import stats
from scipy.spatial.distance import pdist

from labeltable.correlation import centroid, covariance
from labeltable.linalg import cholesky_factor, whiten
from labeltable.table import LabeledTable

logger = logging.getLogger(__name__)

SQRT1_2 = np.sqrt(0.5)


@dataclass
class BHEPResult:
    """Outcome of a BHEP normality test.

    Attributes:
        probability: Upper-tail probability of ``tnb`` under the log-normal
            approximation (small values reject normality)
        h: Smoothing parameter actually used
        tnb: BHEP test statistic
        lnmu: Location of the approximating log-normal distribution
        lnvar: Scale (sigma) of the approximating log-normal distribution
        singular: True when the covariance could not be factored and ``tnb``
            was set to ``4 n``
    """

    probability: float
    h: float
    tnb: float
    lnmu: float
    lnvar: float
    singular: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def default_smoothing(n: int, p: int) -> float:
    """Data-driven smoothing parameter h for n samples of p variables."""
    return SQRT1_2 / _beta_from_data(n, p)


def _beta_from_data(n: int, p: int) -> float:
    return SQRT1_2 * ((1.0 + 2.0 * p) / 4.0) ** (1.0 / (p + 4)) * n ** (1.0 / (p + 4))


def log_normal_q(x: float, zeta: float, sigma: float) -> float:
    """Upper-tail probability of a log-normal with log-mean zeta and log-sd sigma."""
    if not np.isfinite(x) or not np.isfinite(zeta) or not np.isfinite(sigma):
        return np.nan
    if x <= 0.0:
        return 1.0
    return float(stats.norm.sf((np.log(x) - zeta) / sigma))


def normality_test_bhep(table: LabeledTable, h: Optional[float] = None) -> BHEPResult:
    """Test whether the rows of ``table`` are a sample from a multivariate normal.

    Args:
        table: n samples (rows) of p variables (columns)
        h: Smoothing parameter; None or <= 0 selects the data-driven default

    Returns:
        BHEPResult. With fewer than 2 samples all numeric fields except ``h``
        are NaN.
    """
    n, p = table.n_rows, table.n_cols

    if h is not None and h > 0.0:
        beta = SQRT1_2 / h
    else:
        beta = _beta_from_data(n, p)
        h = SQRT1_2 / beta

    if n < 2 or p < 1:
        return BHEPResult(probability=np.nan, h=float(h), tnb=np.nan, lnmu=np.nan, lnvar=np.nan)

    p2 = p / 2.0
    beta2 = beta * beta
    beta4 = beta2 * beta2
    beta8 = beta4 * beta4
    gamma = 1.0 + 2.0 * beta2
    gamma2 = gamma * gamma
    gamma4 = gamma2 * gamma2
    delta = 1.0 + beta2 * (4.0 + 3.0 * beta2)
    delta2 = delta * delta

    cov = covariance(table).data
    lower, info = cholesky_factor(cov, lower=True)
    singular = info != 0
    if singular:
        logger.warning(f"Covariance is not positive definite (info={info}); using tnb = 4n")
        tnb = 4.0 * n
    else:
        # d[j][k] = (Y[j]-Y[k])' S^-1 (Y[j]-Y[k]); the diagonal (k == j) adds n
        z = whiten(lower, table.data, centroid(table))
        b1 = beta2 / 2.0
        b2 = b1 / (1.0 + beta2)
        sum_jk = 2.0 * np.sum(np.exp(-b1 * pdist(z, "sqeuclidean"))) + n
        sum_j = np.sum(np.exp(-b2 * np.sum(z * z, axis=1)))
        tnb = sum_jk / n - 2.0 * (1.0 + beta2) ** (-p2) * sum_j + n * gamma ** (-p2)

    mu = 1.0 - gamma ** (-p2) * (1.0 + p * beta2 / gamma + p * (p + 2) * beta4 / (2.0 * gamma2))
    var = (
        2.0 * (1.0 + 4.0 * beta2) ** (-p2)
        + 2.0 * gamma ** (-p) * (1.0 + 2 * p * beta4 / gamma2 + 3 * p * (p + 2) * beta8 / (4.0 * gamma4))
        - 4.0 * delta ** (-p2) * (1.0 + 3 * p * beta4 / (2.0 * delta) + p * (p + 2) * beta8 / (2.0 * delta2))
    )
    mu2 = mu * mu
    lnmu = 0.5 * np.log(mu2 * mu2 / (mu2 + var))
    lnvar = np.sqrt(np.log((mu2 + var) / mu2))
    prob = log_normal_q(tnb, lnmu, lnvar)

    return BHEPResult(
        probability=float(prob),
        h=float(h),
        tnb=float(tnb),
        lnmu=float(lnmu),
        lnvar=float(lnvar),
        singular=singular,
    )
