import numpy as np
import pytest

from rvine.RVineMatrix import RVineMatrix
from rvine.RVineMatrixValidator import RVineMatrixValidator
from rvine.RVineSampler import RVineSampler


def _by_column(values, d):
    """Fill a d × d matrix column by column."""
    return np.array(values, dtype=float).reshape(d, d).T


@pytest.fixture
def five_dim_model():
    Matrix = _by_column([5, 2, 3, 1, 4,
                         0, 2, 3, 4, 1,
                         0, 0, 3, 4, 1,
                         0, 0, 0, 4, 1,
                         0, 0, 0, 0, 1], 5).astype(int)
    family = _by_column([0, 1, 3, 4, 4,
                         0, 0, 3, 4, 1,
                         0, 0, 0, 4, 1,
                         0, 0, 0, 0, 3,
                         0, 0, 0, 0, 0], 5).astype(int)
    par = _by_column([0, 0.2, 0.9, 1.5, 3.9,
                      0, 0, 1.1, 1.6, 0.9,
                      0, 0, 0, 1.9, 0.5,
                      0, 0, 0, 0, 4.8,
                      0, 0, 0, 0, 0], 5)
    return RVineMatrix(Matrix=Matrix, family=family, par=par, par2=np.zeros((5, 5)),
                       names=["V1", "V2", "V3", "V4", "V5"])


def pair_model(family_code, par, par2=0.0):
    """Two-variable vine with a single pair-copula on the edge (2, 1)."""
    return RVineMatrix(Matrix=[[2, 0], [1, 1]],
                       family=[[0, 0], [family_code, 0]],
                       par=[[0, 0], [par, 0]],
                       par2=[[0, 0], [par2, 0]])


@pytest.fixture
def make_pair_model():
    return pair_model


@pytest.fixture
def independence_model():
    Matrix = np.array([[3, 0, 0],
                       [2, 2, 0],
                       [1, 1, 1]])
    return RVineMatrix(Matrix=Matrix, family=np.zeros((3, 3), dtype=int))


@pytest.fixture
def validator():
    return RVineMatrixValidator()


@pytest.fixture
def sampler():
    return RVineSampler()


class SpySampler:
    """Records every call and delegates to the real sampler."""

    def __init__(self):
        self.calls = []
        self.inner = RVineSampler()

    def sample(self, n, model, rng=None):
        self.calls.append(n)
        return self.inner.sample(n, model, rng)


class SpyValidator:
    """Counts check/prepare calls and delegates to the real validator."""

    def __init__(self):
        self.checked = 0
        self.prepared = 0
        self.inner = RVineMatrixValidator()

    def check(self, model):
        self.checked += 1
        return self.inner.check(model)

    def prepare(self, model):
        self.prepared += 1
        return self.inner.prepare(model)


@pytest.fixture
def spy_sampler():
    return SpySampler()


@pytest.fixture
def spy_validator():
    return SpyValidator()
