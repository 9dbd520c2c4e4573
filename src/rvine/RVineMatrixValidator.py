"""
Created on 19 / 10 / 2026

Filename: RVineMatrixValidator.py
Relative Path: src/rvine/RVineMatrixValidator.py

Structural / parameter consistency checks for `RVineMatrix` objects and the
compilation of a checked model into the plan `RVineSampler` walks through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple

import numpy as np

from rvine.errors import ConsistencyError, PreparationError
from rvine.families import get_family
from rvine.PairCopula import PairCopula
from rvine.RVineMatrix import RVineMatrix


@dataclass(frozen=True)
class PreparedEdge:
    """Edge ``var, partner | conditioning`` of one column (0-based labels)."""

    partner: int
    conditioning: FrozenSet[int]
    copula: PairCopula
    par: float
    par2: float


@dataclass(frozen=True)
class PreparedColumn:
    """
    Diagonal variable of a column and its edges, most conditioned first.

    `conditioning` is the set of all partners, i.e. the variables the
    column's uniform is conditioned on before inversion.
    """

    var: int
    conditioning: FrozenSet[int]
    edges: Tuple[PreparedEdge, ...]


@dataclass(frozen=True)
class PreparedRVine:
    """Canonical model: lower-triangular matrices plus the sampling plan."""

    d: int
    names: Tuple[str, ...]
    Matrix: np.ndarray = field(repr=False)
    family: np.ndarray = field(repr=False)
    par: np.ndarray = field(repr=False)
    par2: np.ndarray = field(repr=False)
    columns: Tuple[PreparedColumn, ...] = field(repr=False)


class RVineMatrixValidator:
    """Checks an `RVineMatrix` and prepares it for sampling."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    # ──────────────────────────────────────────────────────────────────────
    # Consistency
    # ──────────────────────────────────────────────────────────────────────
    def check(self, model: RVineMatrix) -> bool:
        """
        Verify that `model` is a valid R-vine with admissible pair-copulas.

        Returns ``True`` or raises `ConsistencyError` naming the first
        problem found.
        """
        d = model.d
        if d < 2:
            raise ConsistencyError("An R-vine needs at least two variables.")
        if len(model.names) != d:
            raise ConsistencyError(
                f"Expected {d} variable names, got {len(model.names)}.")

        M, family, par, par2 = self._lower(model, ConsistencyError)
        self._check_structure(M)
        self._check_pair_copulas(M, family, par, par2)
        self.logger.debug("R-vine of dimension %d passed the consistency check.", d)
        return True

    def _check_structure(self, M: np.ndarray) -> None:
        d = M.shape[0]
        diagonal = np.diag(M)
        if sorted(diagonal.tolist()) != list(range(1, d + 1)):
            raise ConsistencyError(
                f"The diagonal of the structure matrix must be a permutation of 1..{d}.")

        for j in range(d - 1):
            below = M[j + 1:, j]
            if sorted(below.tolist()) != sorted(diagonal[j + 1:].tolist()):
                raise ConsistencyError(
                    f"Column {j + 1} must contain the diagonal entries of the "
                    f"columns to its right, got {below.tolist()}.")

        previous = None
        for tree in range(1, d):
            i = d - tree
            nodes: List[Tuple[FrozenSet[int], FrozenSet[int]]] = []
            for j in range(i):
                conditioning = frozenset(M[i + 1:, j].tolist())
                nodes.append((conditioning | {int(M[j, j])}, conditioning | {int(M[i, j])}))

            if previous is None:
                universe = [frozenset({v}) for v in range(1, d + 1)]
            else:
                universe = previous
            self._check_tree(tree, nodes, universe)
            previous = [a | b for a, b in nodes]

    @staticmethod
    def _check_tree(tree: int, edges, universe) -> None:
        """The edges must join the nodes of the previous tree into one tree."""
        position = {node: k for k, node in enumerate(universe)}
        if len(position) != len(universe):
            raise ConsistencyError(f"Tree {tree - 1} contains duplicated edges.")

        parent = list(range(len(universe)))

        def find(k: int) -> int:
            while parent[k] != k:
                parent[k] = parent[parent[k]]
                k = parent[k]
            return k

        for a, b in edges:
            if a not in position or b not in position:
                raise ConsistencyError(
                    f"Tree {tree} violates the proximity condition: edge "
                    f"{sorted(a | b)} does not join two edges of tree {tree - 1}.")
            ra, rb = find(position[a]), find(position[b])
            if ra == rb:
                raise ConsistencyError(f"Tree {tree} contains a cycle.")
            parent[ra] = rb

    @staticmethod
    def _check_pair_copulas(M, family, par, par2) -> None:
        d = M.shape[0]
        for i in range(1, d):
            for j in range(i):
                location = f"edge ({i + 1}, {j + 1}) in tree {d - i}"
                try:
                    copula = get_family(family[i, j])
                except KeyError:
                    raise ConsistencyError(
                        f"Family {family[i, j]!r} at {location} is not supported.") from None
                try:
                    copula.check_parameters(float(par[i, j]), float(par2[i, j]))
                except (TypeError, ValueError) as exc:
                    raise ConsistencyError(f"{location}: {exc}") from exc

    # ──────────────────────────────────────────────────────────────────────
    # Canonical form
    # ──────────────────────────────────────────────────────────────────────
    def prepare(self, model: RVineMatrix) -> PreparedRVine:
        """
        Canonicalise `model` and compile the sampling plan.

        Upper-triangular input is turned into lower form, entries that do
        not belong to an edge are zeroed, ``par2`` is kept for t edges only.
        """
        d = model.d
        M, family, par, par2 = self._lower(model, PreparationError)
        if not np.all((M[np.tril_indices(d)] >= 1) & (M[np.tril_indices(d)] <= d)):
            raise PreparationError(f"Structure entries must lie in 1..{d}.")

        lower = np.tril(np.ones((d, d), dtype=bool), k=-1)
        family = np.where(lower, family, 0)
        par = np.where(lower & (family != 0), par, 0.0)
        par2 = np.where(lower & (family == 2), par2, 0.0)

        columns = []
        for j in range(d - 1, -1, -1):
            edges = []
            for i in range(j + 1, d):
                try:
                    copula = get_family(family[i, j])
                except KeyError:
                    raise PreparationError(
                        f"Family {family[i, j]!r} at edge ({i + 1}, {j + 1}) "
                        "is not supported.") from None
                edges.append(PreparedEdge(
                    partner=int(M[i, j]) - 1,
                    conditioning=frozenset(int(v) - 1 for v in M[i + 1:, j]),
                    copula=copula,
                    par=float(par[i, j]),
                    par2=float(par2[i, j]),
                ))
            columns.append(PreparedColumn(
                var=int(M[j, j]) - 1,
                conditioning=frozenset(e.partner for e in edges),
                edges=tuple(edges),
            ))

        self.logger.debug("Prepared R-vine of dimension %d (%d edges).",
                          d, d * (d - 1) // 2)
        return PreparedRVine(d=d, names=tuple(model.names), Matrix=M, family=family,
                             par=par, par2=par2, columns=tuple(columns))

    # ──────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────
    @staticmethod
    def _lower(model: RVineMatrix, error):
        """Numeric copies of the four matrices in lower-triangular form."""
        try:
            M = np.asarray(model.Matrix, dtype=float)
            family = np.asarray(model.family, dtype=float)
            par = np.asarray(model.par, dtype=float)
            par2 = np.asarray(model.par2, dtype=float)
        except (TypeError, ValueError) as exc:
            raise error(f"Model matrices must be numeric: {exc}") from exc

        if not np.all(np.isfinite(M)) or not np.all(M == np.round(M)):
            raise error("Structure matrix entries must be integers.")

        if not np.all(np.triu(M, k=1) == 0):
            if not np.all(np.tril(M, k=-1) == 0):
                raise error("Structure matrix must be lower or upper triangular.")
            M, family, par, par2 = (x[::-1, ::-1] for x in (M, family, par, par2))

        return M.astype(int), family, par, par2
