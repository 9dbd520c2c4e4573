"""
Created on 19 / 10 / 2026

Filename: JoeCopula.py
Relative Path: src/rvine/JoeCopula.py
"""

import numpy as np

from rvine.PairCopula import PairCopula, _clip


class JoeCopula(PairCopula):
    """Bivariate Joe pair-copula (family 6).  The inverse h-function is numeric."""

    def __init__(self) -> None:
        super().__init__(name="Joe", family=6)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if not par > 1:
            raise ValueError("θ (par) must be > 1 for the Joe copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """
        Joe copula CDF.

        C(u,v) = 1 − [ ū^θ + v̄^θ − ū^θ v̄^θ ]^{1/θ},   ū = 1 − u
        """
        a = (1.0 - _clip(u1)) ** par
        b = (1.0 - _clip(u2)) ** par
        return 1.0 - np.power(a + b - a * b, 1.0 / par)

    def _h(self, x, y, par, par2):
        a = (1.0 - x) ** par
        b = (1.0 - y) ** par
        S = a + b - a * b
        return (1.0 - y) ** (par - 1.0) * (1.0 - a) * np.power(S, 1.0 / par - 1.0)
