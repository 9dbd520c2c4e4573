import numpy as np

from rvine.PairCopula import PairCopula, _clip


class IndependenceCopula(PairCopula):
    """Product copula (family 0); parameters are ignored."""

    def __init__(self) -> None:
        super().__init__(name="Independence", family=0)

    def check_parameters(self, par: float, par2: float = 0.0) -> None:
        return None

    def cdf(self, u1, u2, par: float = 0.0, par2: float = 0.0) -> np.ndarray:
        return _clip(u1) * _clip(u2)

    def _h(self, x, y, par, par2):
        return x * np.ones_like(y)

    def _hinv(self, w, y, par, par2):
        return w * np.ones_like(y)
