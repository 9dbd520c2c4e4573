"""
Created on 19 / 10 / 2026

Filename: GaussianCopula.py
Relative Path: src/rvine/GaussianCopula.py
"""

import numpy as np
from scipy.stats import norm, multivariate_normal

from rvine.PairCopula import PairCopula, _clip


class GaussianCopula(PairCopula):
    """Bivariate Gaussian pair-copula (family 1), par = correlation ρ."""

    def __init__(self) -> None:
        super().__init__(name="Gaussian", family=1)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if not -1.0 < par < 1.0:
            raise ValueError("ρ (par) must lie in (-1, 1) for the Gaussian copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        z = norm.ppf(np.column_stack([_clip(u1).ravel(), _clip(u2).ravel()]))   # Φ⁻¹(u)
        mvn = multivariate_normal(mean=np.zeros(2), cov=[[1.0, par], [par, 1.0]])
        return np.atleast_1d(mvn.cdf(z))

    def _h(self, x, y, par, par2):
        return norm.cdf((norm.ppf(x) - par * norm.ppf(y)) / np.sqrt(1.0 - par ** 2))

    def _hinv(self, w, y, par, par2):
        return norm.cdf(norm.ppf(w) * np.sqrt(1.0 - par ** 2) + par * norm.ppf(y))
