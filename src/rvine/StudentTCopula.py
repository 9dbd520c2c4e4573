"""
Created on 19 / 10 / 2026

Filename: StudentTCopula.py
Relative Path: src/rvine/StudentTCopula.py
"""

import numpy as np
from scipy.stats import t, multivariate_t

from rvine.PairCopula import PairCopula, _clip


class StudentTCopula(PairCopula):
    """Bivariate Student‑t pair-copula (family 2): par = ρ, par2 = ν."""

    def __init__(self) -> None:
        super().__init__(name="StudentT", family=2)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if not -1.0 < par < 1.0:
            raise ValueError("ρ (par) must lie in (-1, 1) for the t copula.")
        if not par2 > 2.0:
            raise ValueError("ν (par2) must be > 2 for the t copula.")

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        x = t.ppf(np.column_stack([_clip(u1).ravel(), _clip(u2).ravel()]), df=par2)
        R = np.array([[1.0, par], [par, 1.0]])
        return np.atleast_1d(multivariate_t.cdf(x, shape=R, df=par2))

    def _h(self, x, y, par, par2):
        tx = t.ppf(x, df=par2)
        ty = t.ppf(y, df=par2)
        scale = np.sqrt((par2 + ty ** 2) * (1.0 - par ** 2) / (par2 + 1.0))
        return t.cdf((tx - par * ty) / scale, df=par2 + 1.0)

    def _hinv(self, w, y, par, par2):
        ty = t.ppf(y, df=par2)
        scale = np.sqrt((par2 + ty ** 2) * (1.0 - par ** 2) / (par2 + 1.0))
        tx = t.ppf(w, df=par2 + 1.0) * scale + par * ty
        return t.cdf(tx, df=par2)
