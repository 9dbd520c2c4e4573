import numpy as np
import pandas as pd
import pytest

from rvine.errors import (ConsistencyError, DomainError, MissingValueError,
                          MissingValueWarning, ShapeError)
from rvine.InputValidator import (CheckData, CheckModel, CheckUnitInterval, FixMissing,
                                  InputValidator, PrepareModel, QueryContext)
from rvine.RVineMatrixValidator import PreparedRVine


def _context(data, model, **kwargs):
    return QueryContext(data=data, model=model, n=100, **kwargs)


# ──────────────────────────────────────────────────────────────────────────
# Shape / type
# ──────────────────────────────────────────────────────────────────────────
def test_single_point(five_dim_model):
    ctx = CheckData().apply(_context([0.1, 0.2, 0.3, 0.4, 0.5], five_dim_model))
    assert not ctx.is_batch
    assert ctx.data.dtype == float and ctx.data.shape == (5,)


def test_table_gets_positional_index(five_dim_model):
    ctx = CheckData().apply(_context(np.full((3, 5), 0.5), five_dim_model))
    assert ctx.is_batch
    assert list(ctx.index) == [0, 1, 2]


def test_one_row_table_is_still_a_batch(five_dim_model):
    assert CheckData().apply(_context([[0.5] * 5], five_dim_model)).is_batch


def test_dataframe_columns_are_put_in_model_order(five_dim_model):
    frame = pd.DataFrame({"V5": [0.5], "V1": [0.1], "V3": [0.3], "V2": [0.2], "V4": [0.4]},
                         index=["a"])
    ctx = CheckData().apply(_context(frame, five_dim_model))
    assert np.allclose(ctx.data, [[0.1, 0.2, 0.3, 0.4, 0.5]])
    assert list(ctx.index) == ["a"]


def test_series_is_a_single_point(five_dim_model):
    ctx = CheckData().apply(_context(pd.Series([0.5] * 5), five_dim_model))
    assert not ctx.is_batch


@pytest.mark.parametrize("data", [
    [0.1, 0.2, 0.3, 0.4],
    np.full((2, 6), 0.5),
    np.zeros((0, 5)),
    np.full((2, 2, 5), 0.5),
    0.5,
    ["a", "b", "c", "d", "e"],
    [[0.1, 0.2], [0.3]],
])
def test_shape_errors(data, five_dim_model):
    with pytest.raises(ShapeError):
        CheckData().apply(_context(data, five_dim_model))


# ──────────────────────────────────────────────────────────────────────────
# Missing values
# ──────────────────────────────────────────────────────────────────────────
def _checked(data, model, **kwargs):
    return CheckData().apply(_context(data, model, **kwargs))


def test_complete_data_passes_unchanged(five_dim_model):
    ctx = _checked(np.full((2, 5), 0.5), five_dim_model)
    assert FixMissing().apply(ctx) is ctx


def test_incomplete_rows_are_dropped_with_a_warning(five_dim_model):
    data = np.full((3, 5), 0.5)
    data[1, 2] = np.nan
    ctx = _checked(data, five_dim_model)

    with pytest.warns(MissingValueWarning, match="1 of 3"):
        ctx = FixMissing().apply(ctx)

    assert ctx.data.shape == (2, 5)
    assert list(ctx.index) == [0, 2]
    assert ctx.dropped_rows == [1]


def test_incomplete_rows_rejected_under_raise_policy(five_dim_model):
    data = np.full((3, 5), 0.5)
    data[2, 0] = np.nan
    with pytest.raises(MissingValueError, match=r"\[2\]"):
        FixMissing().apply(_checked(data, five_dim_model, na_policy="raise"))


def test_unresolvable_missing_values(five_dim_model):
    with pytest.raises(MissingValueError):
        FixMissing().apply(_checked([0.1, None, 0.3, 0.4, 0.5], five_dim_model))
    with pytest.raises(MissingValueError, match="Every"):
        FixMissing().apply(_checked(np.full((2, 5), np.nan), five_dim_model))


# ──────────────────────────────────────────────────────────────────────────
# Domain
# ──────────────────────────────────────────────────────────────────────────
def test_closed_unit_interval_is_accepted(five_dim_model):
    ctx = _checked([0.0, 1.0, 0.5, 0.0, 1.0], five_dim_model)
    assert CheckUnitInterval().apply(ctx) is ctx


@pytest.mark.parametrize("bad", [1.5, -0.1, np.inf])
def test_values_outside_unit_interval(bad, five_dim_model):
    with pytest.raises(DomainError):
        CheckUnitInterval().apply(_checked([0.1, 0.2, bad, 0.4, 0.5], five_dim_model))


# ──────────────────────────────────────────────────────────────────────────
# Model stages
# ──────────────────────────────────────────────────────────────────────────
def test_model_check_only_runs_when_requested(spy_validator, five_dim_model):
    stage = CheckModel(spy_validator)
    stage.apply(_context(None, five_dim_model, check_pars=False))
    assert spy_validator.checked == 0
    stage.apply(_context(None, five_dim_model, check_pars=True))
    assert spy_validator.checked == 1


def test_prepare_stage_attaches_canonical_model(spy_validator, five_dim_model):
    ctx = PrepareModel(spy_validator).apply(_context(None, five_dim_model))
    assert isinstance(ctx.prepared, PreparedRVine)
    assert spy_validator.prepared == 1


# ──────────────────────────────────────────────────────────────────────────
# Pipeline
# ──────────────────────────────────────────────────────────────────────────
def test_pipeline_runs_every_stage(spy_validator, five_dim_model):
    ctx = InputValidator(spy_validator).run(_context([0.5] * 5, five_dim_model))
    assert ctx.prepared is not None
    assert (spy_validator.checked, spy_validator.prepared) == (1, 1)


def test_pipeline_stops_at_first_failure(spy_validator, five_dim_model):
    with pytest.raises(ShapeError):
        InputValidator(spy_validator).run(_context([0.5] * 6, five_dim_model))
    assert (spy_validator.checked, spy_validator.prepared) == (0, 0)


def test_consistency_failure_prevents_preparation(spy_validator, five_dim_model):
    five_dim_model.par[1, 0] = 1.5
    with pytest.raises(ConsistencyError):
        InputValidator(spy_validator).run(_context([0.5] * 5, five_dim_model))
    assert spy_validator.prepared == 0


def test_unknown_missing_value_policy(spy_validator, five_dim_model):
    with pytest.raises(ValueError, match="na_policy"):
        InputValidator(spy_validator).run(_context([0.5] * 5, five_dim_model, na_policy="impute"))
