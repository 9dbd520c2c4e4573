"""
Base class for bivariate pair-copulas used on the edges of an R-vine.

Sub-classes implement `_h` (and, where a closed form exists, `_hinv`) for
the unrotated family; the public h-functions below clip their inputs and
take care of the argument order.  Keep all heavy maths in the child class;
this file is just the common skeleton.
"""

from typing import Optional

import numpy as np

UMIN = 1e-12
BISECTION_STEPS = 60


def _clip(u) -> np.ndarray:
    return np.clip(np.asarray(u, dtype=float), UMIN, 1.0 - UMIN)


class PairCopula:
    """Abstract exchangeable pair-copula family."""

    def __init__(self, name: str, family: int):
        self.name = name
        self.family = family

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(family={self.family})"

    # ──────────────────────────────────────────────────────────────────────────
    # Family specific pieces
    # ──────────────────────────────────────────────────────────────────────────
    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        """Raise ``ValueError`` if (par, par2) is outside the family's range."""
        raise NotImplementedError("Sub‑classes implement this.")

    def cdf(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        raise NotImplementedError("Sub‑classes implement this.")

    def _h(self, x: np.ndarray, y: np.ndarray, par: float, par2: float) -> np.ndarray:
        """P(X ≤ x | Y = y) for the unrotated family."""
        raise NotImplementedError("Sub‑classes implement this.")

    def _hinv(self, w: np.ndarray, y: np.ndarray, par: float, par2: float) -> np.ndarray:
        """
        Invert `_h` in its first argument by vectorised bisection.

        `_h` is non-decreasing in x, so halving [0, 1] converges for every
        element at once; families with a closed-form inverse override this.
        """
        lo = np.zeros_like(w)
        hi = np.ones_like(w)
        for _ in range(BISECTION_STEPS):
            mid = 0.5 * (lo + hi)
            below = self._h(_clip(mid), y, par, par2) < w
            lo = np.where(below, mid, lo)
            hi = np.where(below, hi, mid)
        return 0.5 * (lo + hi)

    # ──────────────────────────────────────────────────────────────────────────
    # h-functions
    # ──────────────────────────────────────────────────────────────────────────
    def hfunc1(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """Conditional distribution P(U2 ≤ u2 | U1 = u1)."""
        return np.clip(self._h(_clip(u2), _clip(u1), par, par2), 0.0, 1.0)

    def hfunc2(self, u1, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """Conditional distribution P(U1 ≤ u1 | U2 = u2)."""
        return np.clip(self._h(_clip(u1), _clip(u2), par, par2), 0.0, 1.0)

    def hinv2(self, w, u2, par: float, par2: float = 0.0) -> np.ndarray:
        """Return u1 such that ``hfunc2(u1, u2) == w``."""
        return np.clip(self._hinv(_clip(w), _clip(u2), par, par2), 0.0, 1.0)

    # ──────────────────────────────────────────────────────────────────────────
    # Simulation
    # ──────────────────────────────────────────────────────────────────────────
    def simulate(self, n_samples: int, par: float, par2: float = 0.0,
                 rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        Generate observations from the pair-copula.

        Parameters
        ----------
        n_samples : int
            Number of points to draw.
        par, par2 : float
            Family parameters, see `check_parameters`.
        rng : numpy.random.Generator, optional
            Source of randomness; a fresh default generator if omitted.

        Returns
        -------
        np.ndarray
            Shape ``(n_samples, 2)`` array of uniforms on [0, 1].
        """
        self.check_parameters(par, par2)
        rng = np.random.default_rng(rng)
        w = rng.random((n_samples, 2))
        u2 = w[:, 1]
        u1 = self.hinv2(w[:, 0], u2, par, par2)
        return np.column_stack([u1, u2])
