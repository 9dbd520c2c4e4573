"""
Created on 19 / 10 / 2026

Filename: RVineMatrix.py
Relative Path: src/rvine/RVineMatrix.py
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
import pandas as pd

from rvine.families import FAMILIES


class RVineMatrix:
    """
    R-vine copula model in matrix notation.

    Column ``j`` of the lower-triangular structure matrix holds the diagonal
    variable ``M[j, j]``; every entry below it, ``M[i, j]`` with ``i > j``,
    defines the edge

        M[j, j], M[i, j] | M[i+1], ..., M[d-1, j]

    in tree ``d - i`` (0-based ``i``).  ``family``, ``par`` and ``par2`` carry
    the pair-copula of that edge at the same position.  Upper-triangular
    matrices (rows and columns reversed) are accepted as well.

    Only the shapes are checked here; structural and parameter consistency
    is the job of `RVineMatrixValidator`.
    """

    # ──────────────────────────────────────────────────────────────────────
    # Construction
    # ──────────────────────────────────────────────────────────────────────
    def __init__(self, Matrix, family, par=None, par2=None,
                 names: Sequence[str] | None = None):
        self.Matrix = np.asarray(Matrix)
        if self.Matrix.ndim != 2 or self.Matrix.shape[0] != self.Matrix.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {self.Matrix.shape}.")

        d = self.Matrix.shape[0]
        self.family = np.asarray(family)
        self.par = np.zeros((d, d)) if par is None else np.asarray(par)
        self.par2 = np.zeros((d, d)) if par2 is None else np.asarray(par2)

        for label, values in (("family", self.family), ("par", self.par), ("par2", self.par2)):
            if values.shape != (d, d):
                raise ValueError(
                    f"{label} must have shape {(d, d)}, got {values.shape}.")

        self.names: List[str] = (
            [f"V{i + 1}" for i in range(d)] if names is None else list(names))

    @property
    def d(self) -> int:
        """Dimension of the model (number of variables)."""
        return self.Matrix.shape[0]

    def __repr__(self) -> str:
        return f"RVineMatrix(d={self.d}, names={self.names})"

    # ──────────────────────────────────────────────────────────────────────
    # Inspection
    # ──────────────────────────────────────────────────────────────────────
    def is_lower_triangular(self) -> bool:
        return bool(np.all(np.triu(self.Matrix, k=1) == 0))

    def summary(self) -> pd.DataFrame:
        """
        One row per edge: tree, edge label, family and parameters.

        Labels use the variable names, e.g. ``"V5,V1;V4"`` for the edge
        V5, V1 | V4.  Upper-triangular input is summarised in its lower form.
        """
        M, fam, par, par2 = self.Matrix, self.family, self.par, self.par2
        if not self.is_lower_triangular():
            M, fam, par, par2 = (x[::-1, ::-1] for x in (M, fam, par, par2))

        d = self.d
        rows = []
        for i in range(d - 1, 0, -1):
            for j in range(i):
                conditioned = f"{self._name(M[j, j])},{self._name(M[i, j])}"
                conditioning = ",".join(self._name(v) for v in M[i + 1:, j])
                code = fam[i, j]
                family = FAMILIES.get(int(code)) if float(code).is_integer() else None
                rows.append({
                    "tree": d - i,
                    "edge": conditioned + (f";{conditioning}" if conditioning else ""),
                    "family": code,
                    "name": family.name if family is not None else "unsupported",
                    "par": float(par[i, j]),
                    "par2": float(par2[i, j]),
                })
        return pd.DataFrame(rows, columns=["tree", "edge", "family", "name", "par", "par2"])

    def _name(self, label) -> str:
        index = int(label) - 1
        if 0 <= index < len(self.names):
            return self.names[index]
        return str(label)
