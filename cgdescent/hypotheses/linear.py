"""Affine hypothesis."""

from __future__ import annotations

import numpy as np

from .base import Array


class LinearHypothesis:
    """
    Single-output affine model ``y = c0 + c1·x1 + ... + cn·xn``.

    Args:
        n_inputs: Number of inputs ``n``. The model has ``n + 1`` coefficients,
            the first being the offset.
    """

    def __init__(self, n_inputs: int = 1) -> None:
        if n_inputs <= 0:
            raise ValueError(f"n_inputs must be positive, got {n_inputs}.")
        self.n_inputs = int(n_inputs)

    @property
    def n_coefficients(self) -> int:
        return self.n_inputs + 1

    def _check(self, coefficients: Array, inputs: Array) -> tuple[Array, Array]:
        coefficients = np.asarray(coefficients, dtype=float)
        inputs = np.atleast_1d(np.asarray(inputs, dtype=float))
        if inputs.shape != (self.n_inputs,):
            raise ValueError(f"Expected {self.n_inputs} inputs, got shape {inputs.shape}.")
        if coefficients.shape != (self.n_coefficients,):
            raise ValueError(
                f"Expected {self.n_coefficients} coefficients, got shape {coefficients.shape}."
            )
        return coefficients, inputs

    def evaluate(self, coefficients: Array, inputs: Array) -> Array:
        coefficients, inputs = self._check(coefficients, inputs)
        return np.array([coefficients[0] + float(np.dot(coefficients[1:], inputs))])

    def jacobian(self, coefficients: Array, inputs: Array) -> Array:
        coefficients, inputs = self._check(coefficients, inputs)
        return coefficients[1:].reshape(1, -1).copy()

    def hessian_diagonal(self, coefficients: Array, inputs: Array) -> Array:
        self._check(coefficients, inputs)
        return np.zeros((1, self.n_inputs))

    def coefficient_jacobian(self, coefficients: Array, inputs: Array) -> Array:
        _, inputs = self._check(coefficients, inputs)
        return np.concatenate(([1.0], inputs)).reshape(1, -1)

    def __repr__(self) -> str:
        return f"LinearHypothesis(n_inputs={self.n_inputs})"


__all__ = ["LinearHypothesis"]
