"""Core interfaces shared by the line searches and the conjugate gradient engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

import numpy as np

from .utils import approx_grad

Array = np.ndarray
CostFn = Callable[[Array], float]
GradientFn = Callable[[Array], Array]


@runtime_checkable
class Objective(Protocol):
    """Differentiable scalar cost over a coefficient vector.

    Both methods must be pure and deterministic for the same ``x``; the
    gradient has the same length as ``x``.
    """

    def cost(self, x: Array) -> float:
        ...

    def gradient(self, x: Array) -> Array:
        ...


@dataclass(frozen=True)
class FunctionObjective:
    """Adapt a pair of plain callables to the :class:`Objective` protocol.

    If ``grad`` is omitted the gradient is approximated with central
    differences.
    """

    fun: CostFn
    grad: Optional[GradientFn] = None

    def cost(self, x: Array) -> float:
        return float(self.fun(x))

    def gradient(self, x: Array) -> Array:
        if self.grad is not None:
            return np.asarray(self.grad(x), dtype=float)
        return approx_grad(self.fun, x)


@dataclass(frozen=True)
class Problem:
    """An objective bundled with the coefficients the search starts from."""

    objective: Objective
    initial_coefficients: Array

    def __post_init__(self) -> None:
        coefficients = np.array(self.initial_coefficients, dtype=float).ravel()
        if coefficients.size == 0:
            raise ValueError("initial_coefficients must not be empty.")
        object.__setattr__(self, "initial_coefficients", coefficients)

    @property
    def dim(self) -> int:
        return int(self.initial_coefficients.size)


@dataclass(frozen=True)
class OptimizationResult:
    """Final coefficients and cost of one minimization run.

    Attributes:
        coefficients: Read-only copy of the final coefficient vector.
        cost: Objective value at ``coefficients``.
        nit: Number of outer iterations (line searches) performed.
        nfev: Number of cost evaluations.
        njev: Number of gradient evaluations.
        restarts: Number of times the search direction was reset.
        converged: Whether the relative residual test was satisfied.
        message: Human readable termination reason.
    """

    coefficients: Array
    cost: float
    nit: int = 0
    nfev: int = 0
    njev: int = 0
    restarts: int = 0
    converged: bool = False
    message: str = ""

    def __post_init__(self) -> None:
        coefficients = np.array(self.coefficients, dtype=float, copy=True)
        coefficients.flags.writeable = False
        object.__setattr__(self, "coefficients", coefficients)
        object.__setattr__(self, "cost", float(self.cost))


__all__ = [
    "Array",
    "CostFn",
    "FunctionObjective",
    "GradientFn",
    "Objective",
    "OptimizationResult",
    "Problem",
]
