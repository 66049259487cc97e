"""Parameterized Rosenbrock function."""

from __future__ import annotations

import numpy as np

from .base import Array


def _unpack(coefficients: Array, inputs: Array) -> tuple[float, float, float, float]:
    coefficients = np.asarray(coefficients, dtype=float)
    inputs = np.asarray(inputs, dtype=float)
    if coefficients.shape != (2,) or inputs.shape != (2,):
        raise ValueError(
            "Rosenbrock expects 2 coefficients and 2 inputs, got shapes "
            f"{coefficients.shape} and {inputs.shape}."
        )
    a, b = coefficients
    x, y = inputs
    return float(a), float(b), float(x), float(y)


class RosenbrockHypothesis:
    """
    ``h((a, b), (x, y)) = (a - x)² + b·(y - x²)²``.

    With ``a = 1, b = 100`` this is the classic banana-shaped test function
    with its minimum at ``(x, y) = (1, 1)``.
    """

    def evaluate(self, coefficients: Array, inputs: Array) -> Array:
        a, b, x, y = _unpack(coefficients, inputs)
        return np.array([(a - x) ** 2 + b * (y - x * x) ** 2])

    def jacobian(self, coefficients: Array, inputs: Array) -> Array:
        a, b, x, y = _unpack(coefficients, inputs)
        return np.array([[2.0 * (x - a) - 4.0 * b * x * (y - x * x), 2.0 * b * (y - x * x)]])

    def hessian_diagonal(self, coefficients: Array, inputs: Array) -> Array:
        """Unmixed second derivatives with respect to ``x`` and ``y``."""
        a, b, x, y = _unpack(coefficients, inputs)
        return np.array([[12.0 * b * x * x - 4.0 * b * y + 2.0, 2.0 * b]])

    def coefficient_jacobian(self, coefficients: Array, inputs: Array) -> Array:
        a, b, x, y = _unpack(coefficients, inputs)
        return np.array([[2.0 * (a - x), (y - x * x) ** 2]])

    def __repr__(self) -> str:
        return "RosenbrockHypothesis()"


__all__ = ["RosenbrockHypothesis"]
