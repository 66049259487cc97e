"""Model functions and the least-squares objectives built from them."""

from .base import DataPoint, DifferentiableHypothesis, Hypothesis
from .cost import FunctionValueObjective, ResidualSumOfSquares
from .exponential import UnivariateExponentialHypothesis
from .linear import LinearHypothesis
from .rosenbrock import RosenbrockHypothesis

__all__ = [
    "DataPoint",
    "DifferentiableHypothesis",
    "FunctionValueObjective",
    "Hypothesis",
    "LinearHypothesis",
    "ResidualSumOfSquares",
    "RosenbrockHypothesis",
    "UnivariateExponentialHypothesis",
]
