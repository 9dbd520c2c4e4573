"""
Registry of supported pair-copula families, keyed by their R-vine family code.

    0  independence          1  Gaussian         2  Student t
    3  Clayton               4  Gumbel           5  Frank        6  Joe
    13/14/16  survival (180°) Clayton / Gumbel / Joe
    23/24/26  90° rotated     Clayton / Gumbel / Joe
    33/34/36  270° rotated    Clayton / Gumbel / Joe
"""

from typing import Dict

from rvine.ClaytonCopula import ClaytonCopula
from rvine.FrankCopula import FrankCopula
from rvine.GaussianCopula import GaussianCopula
from rvine.GumbelCopula import GumbelCopula
from rvine.IndependenceCopula import IndependenceCopula
from rvine.JoeCopula import JoeCopula
from rvine.PairCopula import PairCopula
from rvine.RotatedCopula import RotatedCopula
from rvine.StudentTCopula import StudentTCopula


def _build_registry() -> Dict[int, PairCopula]:
    registry: Dict[int, PairCopula] = {}
    for copula in (IndependenceCopula(), GaussianCopula(), StudentTCopula(),
                   ClaytonCopula(), GumbelCopula(), FrankCopula(), JoeCopula()):
        registry[copula.family] = copula

    for base in (registry[3], registry[4], registry[6]):
        for rotation in (180, 90, 270):
            rotated = RotatedCopula(base, rotation)
            registry[rotated.family] = rotated
    return registry


FAMILIES: Dict[int, PairCopula] = _build_registry()


def get_family(code) -> PairCopula:
    """Return the pair-copula for `code`; ``KeyError`` if unsupported."""
    try:
        key = int(code)
    except (TypeError, ValueError) as exc:
        raise KeyError(code) from exc
    if key != code:
        raise KeyError(code)
    return FAMILIES[key]
