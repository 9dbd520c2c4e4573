"""
Created on 19 / 10 / 2026

Filename: RotatedCopula.py
Relative Path: src/rvine/RotatedCopula.py
"""

import numpy as np

from rvine.PairCopula import PairCopula, _clip


class RotatedCopula(PairCopula):
    """
    Rotation of an exchangeable base family by 90, 180 or 270 degrees.

    C₁₈₀(u,v) = u + v − 1 + C(1−u, 1−v)
    C₉₀(u,v)  = v − C(1−u, v)
    C₂₇₀(u,v) = u − C(u, 1−v)

    The 90/270 rotations model negative dependence and take the negated
    parameter of the base family (e.g. θ ≤ −1 for a rotated Gumbel).
    """

    OFFSETS = {180: 10, 90: 20, 270: 30}

    def __init__(self, base: PairCopula, rotation: int) -> None:
        if rotation not in self.OFFSETS:
            raise ValueError(f"Unsupported rotation {rotation}; use 90, 180 or 270.")
        super().__init__(name=f"{base.name}{rotation}",
                         family=base.family + self.OFFSETS[rotation])
        self.base = base
        self.rotation = rotation

    def _base_par(self, par: float) -> float:
        return par if self.rotation == 180 else -par

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        if self.rotation != 180 and par > 0:
            raise ValueError(
                f"{self.name}: rotated by {self.rotation}° requires a negative parameter.")
        self.base.check_parameters(self._base_par(par), par2)

    # ──────────────────────────────────────────────────────────────────────────
    # Analytical functions
    # ──────────────────────────────────────────────────────────────────────────
    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        u1, u2 = _clip(u1), _clip(u2)
        bp = self._base_par(par)
        if self.rotation == 180:
            return u1 + u2 - 1.0 + self.base.cdf(1.0 - u1, 1.0 - u2, bp, par2)
        if self.rotation == 90:
            return u2 - self.base.cdf(1.0 - u1, u2, bp, par2)
        return u1 - self.base.cdf(u1, 1.0 - u2, bp, par2)

    # ──────────────────────────────────────────────────────────────────────────
    # h-functions
    # ──────────────────────────────────────────────────────────────────────────
    def hfunc1(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        u1, u2 = _clip(u1), _clip(u2)
        bp = self._base_par(par)
        if self.rotation == 180:
            h = 1.0 - self.base._h(1.0 - u2, 1.0 - u1, bp, par2)
        elif self.rotation == 90:
            h = self.base._h(u2, 1.0 - u1, bp, par2)
        else:
            h = 1.0 - self.base._h(1.0 - u2, u1, bp, par2)
        return np.clip(h, 0.0, 1.0)

    def hfunc2(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        u1, u2 = _clip(u1), _clip(u2)
        bp = self._base_par(par)
        if self.rotation == 180:
            h = 1.0 - self.base._h(1.0 - u1, 1.0 - u2, bp, par2)
        elif self.rotation == 90:
            h = 1.0 - self.base._h(1.0 - u1, u2, bp, par2)
        else:
            h = self.base._h(u1, 1.0 - u2, bp, par2)
        return np.clip(h, 0.0, 1.0)

    def hinv2(self, w, u2, par: float, par2: float = 0.0) -> np.ndarray:
        w, u2 = _clip(w), _clip(u2)
        bp = self._base_par(par)
        if self.rotation == 180:
            u1 = 1.0 - self.base._hinv(1.0 - w, 1.0 - u2, bp, par2)
        elif self.rotation == 90:
            u1 = 1.0 - self.base._hinv(1.0 - w, u2, bp, par2)
        else:
            u1 = self.base._hinv(w, 1.0 - u2, bp, par2)
        return np.clip(u1, 0.0, 1.0)
