"""
Created on 19 / 10 / 2026

Filename: RVineSampler.py
Relative Path: src/rvine/RVineSampler.py
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Tuple

import numpy as np

from rvine.errors import SamplerError
from rvine.RVineMatrixValidator import PreparedRVine


class RVineSampler:
    """
    Joint sampling from a prepared R-vine by inverse Rosenblatt transform.

    Columns are visited from the last to the first.  The uniform drawn for a
    column's diagonal variable is read as its distribution conditional on
    all partners of the column and inverted edge by edge down to tree 1.
    Every conditional distribution value produced on the way, ``F(v | S)``,
    is kept under the key ``(v, S)`` so later columns can look up the
    values their own inversions are conditioned on.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    def sample(self, n: int, model: PreparedRVine,
               rng: np.random.Generator | None = None) -> np.ndarray:
        """
        Draw `n` independent joint samples.

        Returns
        -------
        np.ndarray
            Shape ``(n, d)``; column ``k`` holds variable ``k + 1``, every
            column is marginally uniform on [0, 1].
        """
        rng = np.random.default_rng(rng)
        w = rng.random((n, model.d))
        cond: Dict[Tuple[int, FrozenSet[int]], np.ndarray] = {}
        out = np.full((n, model.d), np.nan)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            for step, column in enumerate(model.columns):
                var = column.var
                v = w[:, step]
                cond[(var, column.conditioning)] = v

                for edge in column.edges:
                    self._check_edge(var, edge)
                    given = self._lookup(cond, edge.partner, edge.conditioning)
                    v = edge.copula.hinv2(v, given, edge.par, edge.par2)
                    cond[(var, edge.conditioning)] = v

                for edge in column.edges:
                    cond[(edge.partner, edge.conditioning | {var})] = edge.copula.hfunc1(
                        cond[(var, edge.conditioning)],
                        cond[(edge.partner, edge.conditioning)],
                        edge.par, edge.par2)

                out[:, var] = v

        if not np.all(np.isfinite(out)):
            raise SamplerError("Simulation produced non-finite values.")
        self.logger.debug("Drew %d samples of dimension %d.", n, model.d)
        return np.clip(out, 0.0, 1.0)

    # ──────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────
    @staticmethod
    def _check_edge(var: int, edge) -> None:
        try:
            edge.copula.check_parameters(edge.par, edge.par2)
        except ValueError as exc:
            raise SamplerError(
                f"Invalid pair-copula on edge ({var + 1}, {edge.partner + 1}): {exc}") from exc

    @staticmethod
    def _lookup(cond, var: int, conditioning: FrozenSet[int]) -> np.ndarray:
        try:
            return cond[(var, conditioning)]
        except KeyError:
            given = ",".join(str(v + 1) for v in sorted(conditioning)) or "-"
            raise SamplerError(
                f"Structure cannot be sampled: F({var + 1} | {given}) is not "
                "available; is the matrix a valid R-vine?") from None
