"""
Created on 19 / 10 / 2026

Filename: RVineCDF.py
Relative Path: src/rvine/RVineCDF.py

Cumulative distribution function of an R-vine copula model, evaluated by
naïve Monte-Carlo simulation: the CDF at u is estimated by the fraction of
simulated samples that are componentwise ≤ u.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from rvine.InputValidator import InputValidator, QueryContext
from rvine.RVineMatrixValidator import RVineMatrixValidator
from rvine.RVineSampler import RVineSampler

DEFAULT_N_SIMULATIONS = 10_000


class MonteCarloEstimator:
    """Empirical CDF of one query point against a fresh sample set."""

    def __init__(self, sampler) -> None:
        self.sampler = sampler

    def estimate(self, u: np.ndarray, n: int, model, rng: np.random.Generator) -> float:
        """
        Unbiased estimate of P(U ≤ u) with variance p(1 − p) / n.

        The comparison is non-strict, so samples equal to u (possible at the
        boundaries 0 and 1) count as hits.
        """
        samples = self.sampler.sample(n, model, rng)
        return float(np.mean(np.all(samples <= u, axis=1)))


class QueryDispatcher:
    """Routes a validated query to one or many estimator calls, in row order."""

    def __init__(self, estimator: MonteCarloEstimator) -> None:
        self.estimator = estimator
        self.logger = logging.getLogger(self.__class__.__name__)

    def dispatch(self, context: QueryContext, rng: np.random.Generator):
        if not context.is_batch:
            return self.estimator.estimate(context.data, context.n, context.prepared, rng)

        rows = context.data
        # one independent stream per row
        streams = rng.spawn(rows.shape[0])
        results = np.empty(rows.shape[0])
        for k, (row, stream) in enumerate(zip(rows, streams)):
            results[k] = self.estimator.estimate(row, context.n, context.prepared, stream)
            self.logger.debug("Row %d: %.6f", k, results[k])
        return results


class RVineCDF:
    """
    CDF of a d-dimensional R-vine copula by Monte-Carlo simulation.

    Parameters
    ----------
    validator
        Object with ``check(model)`` and ``prepare(model)``; defaults to
        `RVineMatrixValidator`.
    sampler
        Object with ``sample(n, prepared, rng)``; defaults to `RVineSampler`.
    na_policy
        ``"drop"`` (default) removes query rows with missing values and
        warns; ``"raise"`` rejects them.

    Calling the instance validates the arguments once and evaluates every
    query point; `evaluate_prepared` is the pre-validated core used for that.
    """

    def __init__(self, validator=None, sampler=None, na_policy: str = "drop") -> None:
        self.validator = validator if validator is not None else RVineMatrixValidator()
        self.sampler = sampler if sampler is not None else RVineSampler()
        self.na_policy = na_policy
        self.input_validator = InputValidator(self.validator)
        self.dispatcher = QueryDispatcher(MonteCarloEstimator(self.sampler))
        self.logger = logging.getLogger(self.__class__.__name__)

    def __call__(self, data, model, n: int = DEFAULT_N_SIMULATIONS,
                 check_pars: bool = True, random_state=None):
        """
        Evaluate the CDF of `model` at `data`.

        Parameters
        ----------
        data
            One point of length d, or an N × d table (array, nested list or
            DataFrame) of points with coordinates in [0, 1].
        model
            An `RVineMatrix` (or any descriptor the validator understands).
        n
            Number of Monte-Carlo samples per query point.
        check_pars
            If ``False`` the family/parameter consistency check is skipped
            (should only be used with care).
        random_state
            ``None``, a seed or a ``numpy.random.Generator``.

        Returns
        -------
        float for one point; for a table an array of N values, or a Series
        carrying the retained row index when `data` is a DataFrame.
        """
        if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)) or n < 1:
            raise ValueError(f"n must be a positive integer, got {n!r}.")

        context = QueryContext(data=data, model=model, n=int(n), check_pars=check_pars,
                               na_policy=self.na_policy)
        context = self.input_validator.run(context)
        self.logger.info(
            "Evaluating R-vine CDF: %s, d=%d, n=%d.",
            f"{context.data.shape[0]} points" if context.is_batch else "1 point",
            context.data.shape[-1], context.n)

        result = self.evaluate_prepared(context, random_state)
        if context.is_batch and isinstance(data, pd.DataFrame):
            return pd.Series(result, index=context.index, name="cdf")
        return result

    def evaluate_prepared(self, context: QueryContext, random_state=None):
        """Estimate the CDF for a context that already went through validation."""
        rng = np.random.default_rng(random_state)
        return self.dispatcher.dispatch(context, rng)


def rvine_cdf(data, model, n: int = DEFAULT_N_SIMULATIONS, check_pars: bool = True,
              random_state=None, na_policy: str = "drop", sampler=None,
              validator=None):
    """Functional shortcut for ``RVineCDF(...)(data, model, ...)``."""
    evaluator = RVineCDF(validator=validator, sampler=sampler, na_policy=na_policy)
    return evaluator(data, model, n=n, check_pars=check_pars, random_state=random_state)
