"""
Created on 19 / 10 / 2026

Filename: InputValidator.py
Relative Path: src/rvine/InputValidator.py

Ordered validation of the arguments of an R-vine CDF call.

Each stage takes the `QueryContext` produced by its predecessor and either
returns it (possibly transformed) or raises.  Nothing is sampled before the
last stage has passed.
"""

from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from rvine.errors import DomainError, MissingValueError, MissingValueWarning, ShapeError

NA_POLICIES = ("drop", "raise")


@dataclass(frozen=True)
class QueryContext:
    """Call arguments on their way through the pipeline."""

    data: Any
    model: Any
    n: int
    check_pars: bool = True
    na_policy: str = "drop"
    is_batch: bool = False
    index: Optional[pd.Index] = None
    dropped_rows: List[int] = field(default_factory=list)
    prepared: Any = None


class ValidationStage(ABC):
    """One step of the pipeline."""

    @abstractmethod
    def apply(self, context: QueryContext) -> QueryContext:
        """Return the (possibly transformed) context or raise."""

    def __repr__(self) -> str:
        return self.__class__.__name__


# ──────────────────────────────────────────────────────────────────────────
# Data stages
# ──────────────────────────────────────────────────────────────────────────
class CheckData(ValidationStage):
    """A numeric point of length d, or a table with d columns."""

    def apply(self, context: QueryContext) -> QueryContext:
        data, d = context.data, context.model.d
        index = None

        if isinstance(data, pd.DataFrame):
            names = list(getattr(context.model, "names", []) or [])
            if len(names) == d and set(data.columns) == set(names):
                data = data[names]
            index = data.index
        values = self._to_float(data)

        if values.ndim == 1:
            if values.shape[0] != d:
                raise ShapeError(
                    f"Query point has length {values.shape[0]}, model dimension is {d}.")
            is_batch = False
        elif values.ndim == 2:
            if values.shape[1] != d:
                raise ShapeError(
                    f"Query table has {values.shape[1]} columns, model dimension is {d}.")
            if values.shape[0] == 0:
                raise ShapeError("Query table has no rows.")
            is_batch = True
        else:
            raise ShapeError(
                f"Query data must be one point or a table, got {values.ndim} dimensions.")

        if is_batch and index is None:
            index = pd.RangeIndex(values.shape[0])
        return replace(context, data=values, is_batch=is_batch, index=index)

    @staticmethod
    def _to_float(data) -> np.ndarray:
        try:
            if isinstance(data, (pd.DataFrame, pd.Series)):
                return data.to_numpy(dtype=float, na_value=np.nan)
            return np.asarray(data, dtype=float)
        except (TypeError, ValueError) as exc:
            raise ShapeError(f"Query data must be numeric: {exc}") from exc


class FixMissing(ValidationStage):
    """
    Resolve missing values.

    ``"drop"`` removes incomplete batch rows and emits a
    `MissingValueWarning`; ``"raise"`` rejects any missing value.  A single
    point with a missing coordinate, or a batch without a single complete
    row, cannot be resolved under either policy.
    """

    def apply(self, context: QueryContext) -> QueryContext:
        values = context.data
        missing = np.isnan(values)
        if not missing.any():
            return context

        if not context.is_batch:
            raise MissingValueError("Query point contains missing values.")

        incomplete = missing.any(axis=1)
        rows = np.flatnonzero(incomplete).tolist()
        if context.na_policy == "raise":
            raise MissingValueError(f"Query rows {rows} contain missing values.")
        if incomplete.all():
            raise MissingValueError("Every query row contains missing values.")

        warnings.warn(
            f"{len(rows)} of {values.shape[0]} query rows contain missing values "
            f"and were removed (rows {rows}).",
            MissingValueWarning,
            stacklevel=4,
        )
        return replace(context, data=values[~incomplete], index=context.index[~incomplete],
                       dropped_rows=rows)


class CheckUnitInterval(ValidationStage):
    """All query values in the closed unit interval."""

    def apply(self, context: QueryContext) -> QueryContext:
        values = context.data
        outside = ~((values >= 0.0) & (values <= 1.0))
        if outside.any():
            bad = values[outside]
            raise DomainError(
                f"Query values must lie in [0, 1]; found {bad.size} outside, "
                f"e.g. {bad.flat[0]!r}.")
        return context


# ──────────────────────────────────────────────────────────────────────────
# Model stages
# ──────────────────────────────────────────────────────────────────────────
class CheckModel(ValidationStage):
    """Family/parameter consistency, skipped when ``check_pars`` is off."""

    def __init__(self, validator) -> None:
        self.validator = validator

    def apply(self, context: QueryContext) -> QueryContext:
        if context.check_pars:
            self.validator.check(context.model)
        return context


class PrepareModel(ValidationStage):
    """Canonical representation the sampler expects."""

    def __init__(self, validator) -> None:
        self.validator = validator

    def apply(self, context: QueryContext) -> QueryContext:
        return replace(context, prepared=self.validator.prepare(context.model))


class InputValidator:
    """Runs the stages in order; the first failure aborts the call."""

    def __init__(self, validator, stages: Optional[Sequence[ValidationStage]] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        if stages is None:
            stages = (CheckData(), FixMissing(), CheckUnitInterval(),
                      CheckModel(validator), PrepareModel(validator))
        self.stages = tuple(stages)

    def run(self, context: QueryContext) -> QueryContext:
        if context.na_policy not in NA_POLICIES:
            raise ValueError(
                f"na_policy must be one of {NA_POLICIES}, got {context.na_policy!r}.")
        for stage in self.stages:
            self.logger.debug("Running %r", stage)
            context = stage.apply(context)
        return context
