"""Objectives built from hypotheses."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .base import Array, DataPoint, DifferentiableHypothesis, Hypothesis


class ResidualSumOfSquares:
    """
    Least-squares fit of a hypothesis' coefficients to a training set.

    ``cost(c) = Σ ‖h(c, xᵢ) - yᵢ‖² / (2N)`` and
    ``gradient(c) = Σ Jᵢᵀ (h(c, xᵢ) - yᵢ) / N``, where ``Jᵢ`` is the
    coefficient Jacobian at sample ``i``.
    """

    def __init__(self, hypothesis: Hypothesis, training_set: Iterable[DataPoint]) -> None:
        self.hypothesis = hypothesis
        self.training_set = tuple(training_set)
        if not self.training_set:
            raise ValueError("training_set must contain at least one data point.")

    def _errors(self, coefficients: Array, point: DataPoint) -> Array:
        return np.asarray(self.hypothesis.evaluate(coefficients, point.inputs), dtype=float) - point.outputs

    def cost(self, coefficients: Array) -> float:
        total = 0.0
        for point in self.training_set:
            errors = self._errors(coefficients, point)
            total += float(np.dot(errors, errors))
        return total / (2.0 * len(self.training_set))

    def gradient(self, coefficients: Array) -> Array:
        coefficients = np.asarray(coefficients, dtype=float)
        total = np.zeros_like(coefficients)
        for point in self.training_set:
            errors = self._errors(coefficients, point)
            jacobian = np.asarray(
                self.hypothesis.coefficient_jacobian(coefficients, point.inputs), dtype=float
            )
            total += jacobian.T @ errors
        return total / len(self.training_set)


class FunctionValueObjective:
    """
    Minimize the (single) output of a hypothesis over its inputs.

    The coefficients are fixed; the optimization variable is the input
    vector. ``FunctionValueObjective(RosenbrockHypothesis(), [1, 100])`` is the
    classic Rosenbrock function.
    """

    def __init__(self, hypothesis: DifferentiableHypothesis, coefficients: Array) -> None:
        self.hypothesis = hypothesis
        self.coefficients = np.asarray(coefficients, dtype=float)

    def cost(self, x: Array) -> float:
        return float(self.hypothesis.evaluate(self.coefficients, x)[0])

    def gradient(self, x: Array) -> Array:
        return np.asarray(self.hypothesis.jacobian(self.coefficients, x), dtype=float)[0]


__all__ = ["FunctionValueObjective", "ResidualSumOfSquares"]
