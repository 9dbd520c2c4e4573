"""
Created on 19 / 10 / 2026

Filename: FrankCopula.py
Relative Path: src/rvine/FrankCopula.py
"""

import numpy as np

from rvine.PairCopula import PairCopula, _clip


class FrankCopula(PairCopula):
    """Bivariate Frank pair-copula (family 5), radially symmetric."""

    def __init__(self) -> None:
        super().__init__(name="Frank", family=5)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if par == 0 or not np.isfinite(par):
            raise ValueError("θ (par) must be finite and ≠ 0 for the Frank copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """
        Frank copula CDF.

        C(u,v) = −1/θ · ln{ 1 + (e^−θu − 1)(e^−θv − 1) / (e^−θ − 1) }
        """
        a = np.expm1(-par * _clip(u1))
        b = np.expm1(-par * _clip(u2))
        return -np.log1p(a * b / np.expm1(-par)) / par

    def _h(self, x, y, par, par2):
        a = np.expm1(-par * x)
        b = np.expm1(-par * y)
        return np.exp(-par * y) * a / (np.expm1(-par) + a * b)

    def _hinv(self, w, y, par, par2):
        ey = np.exp(-par * y)
        b = w * np.expm1(-par) / (w + ey * (1.0 - w))
        return -np.log1p(b) / par
