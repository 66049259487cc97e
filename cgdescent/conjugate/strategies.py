"""Conjugation coefficient ("beta") strategies.

A strategy turns the new residual ``r = -∇f(θ)`` and the previous direction
into the next search direction. Each strategy creates a private state object
in :meth:`initialize` whose lifetime is exactly one minimization run; the
engine owns it and passes it back on every :meth:`update`.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from ..core import Problem
from ..utils import normalize, safe_solve

Array = np.ndarray
Preconditioner = Callable[[Array], Array]


@runtime_checkable
class BetaStrategy(Protocol):
    """Direction update of a nonlinear conjugate gradient method."""

    def initialize(self, problem: Problem, theta: Array, residuals: Array) -> Tuple[Any, Array]:
        """Return ``(state, direction)`` for the start of a run."""
        ...

    def update(
        self, state: Any, theta: Array, residuals: Array, direction: Array, delta: float
    ) -> Tuple[Array, float, bool]:
        """Return ``(direction, delta, proceed)``.

        ``delta`` is the squared residual norm carried between calls. When
        ``proceed`` is False the engine calls :meth:`restart`.
        """
        ...

    def restart(self, state: Any, theta: Array, residuals: Array) -> Array:
        """Return the direction a restart resets to."""
        ...


class FletcherReeves:
    """``β = (r·r) / (r_prev·r_prev)``; restarts once the direction stops descending."""

    def initialize(self, problem: Problem, theta: Array, residuals: Array) -> Tuple[None, Array]:
        return None, normalize(residuals)

    def update(
        self, state: None, theta: Array, residuals: Array, direction: Array, delta: float
    ) -> Tuple[Array, float, bool]:
        new_delta = float(np.dot(residuals, residuals))
        beta = new_delta / delta
        direction = residuals + beta * direction
        descending = float(np.dot(residuals, direction)) > 0.0
        return direction, new_delta, descending

    def restart(self, state: None, theta: Array, residuals: Array) -> Array:
        return normalize(residuals)

    def __repr__(self) -> str:
        return "FletcherReeves()"


@dataclass
class PolakRibiereState:
    """Preconditioned residual of the previous iteration."""

    preconditioned_residuals: Array


class PolakRibiere:
    """
    Preconditioned Polak–Ribière update.

    ``β = (r·s - r·s_prev) / δ_prev`` with ``s = P⁻¹r``. A non-positive β
    (or a non-finite one) signals a restart; otherwise ``d ← s + β·d``.

    Args:
        preconditioner: Callable mapping the coefficients to a symmetric
            positive definite matrix ``P``. Defaults to the identity, in which
            case ``s = r``.
    """

    def __init__(self, preconditioner: Optional[Preconditioner] = None) -> None:
        self.preconditioner = preconditioner

    def _precondition(self, theta: Array, residuals: Array) -> Array:
        if self.preconditioner is None:
            return np.array(residuals, dtype=float, copy=True)
        matrix = np.asarray(self.preconditioner(theta), dtype=float)
        return safe_solve(matrix, residuals)

    def initialize(
        self, problem: Problem, theta: Array, residuals: Array
    ) -> Tuple[PolakRibiereState, Array]:
        preconditioned = self._precondition(theta, residuals)
        return PolakRibiereState(preconditioned), normalize(preconditioned)

    def update(
        self,
        state: PolakRibiereState,
        theta: Array,
        residuals: Array,
        direction: Array,
        delta: float,
    ) -> Tuple[Array, float, bool]:
        mid_delta = float(np.dot(residuals, state.preconditioned_residuals))
        preconditioned = self._precondition(theta, residuals)
        new_delta = float(np.dot(residuals, preconditioned))
        beta = (new_delta - mid_delta) / delta
        state.preconditioned_residuals = preconditioned

        if not beta > 0.0 or not math.isfinite(beta):
            return direction, new_delta, False
        return preconditioned + beta * direction, new_delta, True

    def restart(self, state: PolakRibiereState, theta: Array, residuals: Array) -> Array:
        # the state always holds P⁻¹r for the current residual
        return normalize(state.preconditioned_residuals)

    def __repr__(self) -> str:
        return f"PolakRibiere(preconditioner={self.preconditioner!r})"


@dataclass
class HagerZhangState:
    """Raw gradient ``g = -r`` of the previous iteration."""

    previous_gradient: Array


class HagerZhang:
    """
    CG_DESCENT direction update of Hager and Zhang.

    With ``g = -r`` and ``y = g - g_prev``::

        β = (y - 2·d·(y·y)/(d·y)) · g / (d·y)
        β = max(β, -1 / (‖d‖·min(η, ‖g‖)))
        d ← -g + β·d

    The lower bound keeps every direction a descent direction, so the only
    restart signal is a numerical one: ``d·y == 0`` or a non-finite result.

    Args:
        eta: Lower-bound parameter η, finite and ``> 0``. Defaults to 0.01.
    """

    def __init__(self, eta: float = 0.01) -> None:
        self.eta = eta

    @property
    def eta(self) -> float:
        return self._eta

    @eta.setter
    def eta(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"eta must be a real number, got {type(value).__name__}.")
        value = float(value)
        if not math.isfinite(value) or value <= 0.0:
            raise ValueError(f"eta must be positive and finite, got {value}.")
        self._eta = value

    def initialize(
        self, problem: Problem, theta: Array, residuals: Array
    ) -> Tuple[HagerZhangState, Array]:
        return HagerZhangState(-np.asarray(residuals, dtype=float)), normalize(residuals)

    def update(
        self,
        state: HagerZhangState,
        theta: Array,
        residuals: Array,
        direction: Array,
        delta: float,
    ) -> Tuple[Array, float, bool]:
        gradient = -np.asarray(residuals, dtype=float)
        y = gradient - state.previous_gradient
        state.previous_gradient = gradient
        new_delta = float(np.dot(gradient, gradient))

        dy = float(np.dot(direction, y))
        if dy == 0.0 or not math.isfinite(dy):
            return direction, new_delta, False

        yy = float(np.dot(y, y))
        beta = float(np.dot(y - 2.0 * direction * (yy / dy), gradient)) / dy

        bound = float(np.linalg.norm(direction)) * min(self._eta, math.sqrt(new_delta))
        lower = -1.0 / bound if bound > 0.0 else -math.inf
        beta = max(beta, lower)

        new_direction = -gradient + beta * direction
        if not np.all(np.isfinite(new_direction)):
            return direction, new_delta, False
        return new_direction, new_delta, True

    def restart(self, state: HagerZhangState, theta: Array, residuals: Array) -> Array:
        return normalize(residuals)

    def __repr__(self) -> str:
        return f"HagerZhang(eta={self._eta!r})"


__all__ = [
    "BetaStrategy",
    "FletcherReeves",
    "HagerZhang",
    "HagerZhangState",
    "PolakRibiere",
    "PolakRibiereState",
    "Preconditioner",
]
