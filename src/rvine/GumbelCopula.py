"""
Created on 19 / 10 / 2026

Filename: GumbelCopula.py
Relative Path: src/rvine/GumbelCopula.py
"""

import numpy as np

from rvine.PairCopula import PairCopula, _clip


class GumbelCopula(PairCopula):
    """Bivariate Gumbel pair-copula (family 4).  The inverse h-function is numeric."""

    def __init__(self) -> None:
        super().__init__(name="Gumbel", family=4)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if not par >= 1:
            raise ValueError("θ (par) must be ≥ 1 for the Gumbel copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """
        Gumbel copula CDF.

        C(u,v) = exp{ −[(−ln u)^θ + (−ln v)^θ]^{1/θ} }
        """
        a = (-np.log(_clip(u1))) ** par
        b = (-np.log(_clip(u2))) ** par
        return np.exp(-np.power(a + b, 1.0 / par))

    def _h(self, x, y, par, par2):
        ln_x, ln_y = -np.log(x), -np.log(y)
        A = ln_x ** par + ln_y ** par
        C = np.exp(-np.power(A, 1.0 / par))
        return C * np.power(A, 1.0 / par - 1.0) * ln_y ** (par - 1.0) / y
