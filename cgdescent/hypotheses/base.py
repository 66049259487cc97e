"""Hypothesis interface and the training data container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class DataPoint:
    """One training sample: an input vector and the observed output vector."""

    inputs: Array
    outputs: Array

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", np.atleast_1d(np.asarray(self.inputs, dtype=float)))
        object.__setattr__(self, "outputs", np.atleast_1d(np.asarray(self.outputs, dtype=float)))


@runtime_checkable
class Hypothesis(Protocol):
    """Parametric model ``h(coefficients, inputs) -> outputs``."""

    def evaluate(self, coefficients: Array, inputs: Array) -> Array:
        """Outputs of the model, shape ``(n_outputs,)``."""
        ...

    def coefficient_jacobian(self, coefficients: Array, inputs: Array) -> Array:
        """Derivatives of the outputs, shape ``(n_outputs, n_coefficients)``."""
        ...


@runtime_checkable
class DifferentiableHypothesis(Hypothesis, Protocol):
    """Hypothesis that is also differentiable with respect to its inputs."""

    def jacobian(self, coefficients: Array, inputs: Array) -> Array:
        """Derivatives of the outputs, shape ``(n_outputs, n_inputs)``."""
        ...


__all__ = ["DataPoint", "DifferentiableHypothesis", "Hypothesis"]
