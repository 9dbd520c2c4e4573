import numpy as np
import pytest
from scipy.stats import kendalltau, spearmanr

from rvine.errors import SamplerError
from rvine.RVineMatrix import RVineMatrix


def test_sample_shape_and_range(sampler, validator, five_dim_model):
    u = sampler.sample(1000, validator.prepare(five_dim_model), np.random.default_rng(1))
    assert u.shape == (1000, 5)
    assert u.min() >= 0.0 and u.max() <= 1.0


def test_sampling_is_reproducible_from_the_generator(sampler, validator, five_dim_model):
    prepared = validator.prepare(five_dim_model)
    a = sampler.sample(200, prepared, np.random.default_rng(3))
    b = sampler.sample(200, prepared, np.random.default_rng(3))
    c = sampler.sample(200, prepared, np.random.default_rng(4))
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


def test_marginals_are_uniform(sampler, validator, five_dim_model):
    u = sampler.sample(20_000, validator.prepare(five_dim_model), np.random.default_rng(5))
    for k in range(5):
        assert np.quantile(u[:, k], [0.1, 0.5, 0.9]) == pytest.approx([0.1, 0.5, 0.9], abs=0.02)


def test_first_tree_dependence_is_reproduced(sampler, validator, five_dim_model):
    u = sampler.sample(4000, validator.prepare(five_dim_model), np.random.default_rng(6))

    def tau(a, b):
        return kendalltau(u[:, a - 1], u[:, b - 1])[0]

    assert tau(5, 4) == pytest.approx(1 - 1 / 3.9, abs=0.03)                    # Gumbel
    assert tau(2, 1) == pytest.approx(2 / np.pi * np.arcsin(0.9), abs=0.03)     # Gaussian
    assert tau(3, 1) == pytest.approx(2 / np.pi * np.arcsin(0.5), abs=0.03)     # Gaussian
    assert tau(4, 1) == pytest.approx(4.8 / 6.8, abs=0.03)                      # Clayton


def test_bivariate_gaussian_rank_correlation(sampler, validator, make_pair_model):
    rho = 0.7
    u = sampler.sample(20_000, validator.prepare(make_pair_model(1, rho)),
                       np.random.default_rng(8))
    expected = 6 / np.pi * np.arcsin(rho / 2)
    assert spearmanr(u[:, 0], u[:, 1])[0] == pytest.approx(expected, abs=0.02)


def test_independence_vine_has_no_dependence(sampler, validator, independence_model):
    u = sampler.sample(20_000, validator.prepare(independence_model), np.random.default_rng(9))
    corr = np.corrcoef(u, rowvar=False)
    assert np.allclose(corr, np.eye(3), atol=0.03)


def test_invalid_parameters_fail_at_draw_time(sampler, validator, make_pair_model):
    prepared = validator.prepare(make_pair_model(1, 1.5))
    with pytest.raises(SamplerError, match="Invalid pair-copula"):
        sampler.sample(10, prepared, np.random.default_rng(0))


def test_structure_that_cannot_be_sampled(sampler, validator):
    M = np.array([[4, 0, 0, 0],
                  [2, 3, 0, 0],
                  [1, 1, 2, 0],
                  [3, 2, 1, 1]])
    prepared = validator.prepare(RVineMatrix(M, np.zeros((4, 4))))
    with pytest.raises(SamplerError, match="valid R-vine"):
        sampler.sample(10, prepared, np.random.default_rng(0))
