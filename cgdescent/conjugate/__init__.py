"""Nonlinear conjugate gradient methods."""

from .engine import (
    ConjugateGradientDescent,
    FletcherReevesCG,
    HagerZhangCG,
    PolakRibiereCG,
)
from .factory import LINE_SEARCHES, METHODS, create_line_search, create_solver, minimize
from .strategies import (
    BetaStrategy,
    FletcherReeves,
    HagerZhang,
    HagerZhangState,
    PolakRibiere,
    PolakRibiereState,
)

__all__ = [
    "BetaStrategy",
    "ConjugateGradientDescent",
    "FletcherReeves",
    "FletcherReevesCG",
    "HagerZhang",
    "HagerZhangCG",
    "HagerZhangState",
    "LINE_SEARCHES",
    "METHODS",
    "PolakRibiere",
    "PolakRibiereCG",
    "PolakRibiereState",
    "create_line_search",
    "create_solver",
    "minimize",
]
