"""Power-law curve ``offset + a·x^b``."""

from __future__ import annotations

import numpy as np

from .base import Array


class UnivariateExponentialHypothesis:
    """
    Single-input model ``y = offset + a·x^b`` with coefficients ``(offset, a, b)``.

    Inputs must be positive; the derivative with respect to ``b`` involves
    ``log(x)``. Powers are taken with numpy, so a step the line search takes
    into an overflowing region yields ``inf`` rather than an exception.
    """

    @staticmethod
    def _unpack(
        coefficients: Array, inputs: Array
    ) -> tuple[np.float64, np.float64, np.float64, np.float64]:
        coefficients = np.asarray(coefficients, dtype=float)
        inputs = np.atleast_1d(np.asarray(inputs, dtype=float))
        if coefficients.shape != (3,) or inputs.shape != (1,):
            raise ValueError(
                "Expected 3 coefficients and 1 input, got shapes "
                f"{coefficients.shape} and {inputs.shape}."
            )
        offset, a, b = coefficients
        return offset, a, b, inputs[0]

    def evaluate(self, coefficients: Array, inputs: Array) -> Array:
        offset, a, b, x = self._unpack(coefficients, inputs)
        return np.array([offset + a * np.power(x, b)])

    def jacobian(self, coefficients: Array, inputs: Array) -> Array:
        _, a, b, x = self._unpack(coefficients, inputs)
        return np.array([[a * b * np.power(x, b - 1.0)]])

    def hessian_diagonal(self, coefficients: Array, inputs: Array) -> Array:
        _, a, b, x = self._unpack(coefficients, inputs)
        return np.array([[a * b * (b - 1.0) * np.power(x, b - 2.0)]])

    def coefficient_jacobian(self, coefficients: Array, inputs: Array) -> Array:
        _, a, b, x = self._unpack(coefficients, inputs)
        power = np.power(x, b)
        return np.array([[1.0, power, a * power * np.log(x)]])

    def __repr__(self) -> str:
        return "UnivariateExponentialHypothesis()"


__all__ = ["UnivariateExponentialHypothesis"]
