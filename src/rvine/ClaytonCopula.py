"""
Created on 19 / 10 / 2026

Filename: ClaytonCopula.py
Relative Path: src/rvine/ClaytonCopula.py
"""

import numpy as np

from rvine.PairCopula import PairCopula, _clip


class ClaytonCopula(PairCopula):
    """Bivariate Clayton pair-copula (family 3)."""

    def __init__(self) -> None:
        super().__init__(name="Clayton", family=3)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if not par > 0:
            raise ValueError("θ (par) must be > 0 for the Clayton copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """
        Clayton copula CDF.

        C(u₁,u₂) = (u₁^−θ + u₂^−θ − 1)^(−1/θ)
        """
        u1, u2 = _clip(u1), _clip(u2)
        return np.power(np.power(u1, -par) + np.power(u2, -par) - 1.0,
                        -1.0 / par)

    def _h(self, x, y, par, par2):
        inner = np.power(x, -par) + np.power(y, -par) - 1.0
        return np.power(y, -par - 1.0) * np.power(inner, -1.0 - 1.0 / par)

    def _hinv(self, w, y, par, par2):
        s = np.power(w * np.power(y, par + 1.0), -par / (1.0 + par))
        return np.power(s + 1.0 - np.power(y, -par), -1.0 / par)
