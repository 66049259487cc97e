"""Validated configuration for the engine and the line searches.

All tunables live in frozen dataclasses that check their ranges in
``__post_init__``. Invalid values raise immediately; nothing is clamped.
Instances are immutable, so one configuration can be shared by any number of
concurrent runs. Use :func:`dataclasses.replace` to derive a modified copy,
which re-runs the validation.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Optional


def _check_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}.")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}.")
    return value


def _check_open(name: str, value: float, low: float, high: float) -> None:
    if not low < value < high:
        raise ValueError(f"{name} must be in range ({low}, {high}), got {value}.")


def _check_closed(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be in range [{low}, {high}], got {value}.")


def _check_positive_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}.")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}.")


@dataclass(frozen=True)
class CGConfig:
    """
    Settings of the conjugate gradient outer loop.

    Args:
        max_iterations: Upper bound on the number of line searches. Must be a
            positive integer. Defaults to 400.
        error_tolerance: Relative residual tolerance ε in (0, 1]. The run
            stops once ``r·r <= ε²·r0·r0``. Defaults to 1e-10.
    """

    max_iterations: int = 400
    error_tolerance: float = 1e-10

    def __post_init__(self) -> None:
        _check_positive_int("max_iterations", self.max_iterations)
        tolerance = _check_finite("error_tolerance", self.error_tolerance)
        if not 0.0 < tolerance <= 1.0:
            raise ValueError(
                f"error_tolerance must be in range (0, 1], got {tolerance}."
            )

    @property
    def error_tolerance_squared(self) -> float:
        return self.error_tolerance * self.error_tolerance


@dataclass(frozen=True)
class SecantConfig:
    """
    Settings of the secant-method line search.

    Args:
        max_line_search_iterations: Maximum number of secant updates.
            Defaults to 40.
        line_search_step_size: Length of the probing step used to obtain the
            second slope sample. Finite and non-negative. Defaults to 1e-5.
        error_tolerance: The search stops once the secant update is shorter
            than this, in (0, 1]. Defaults to 1e-10.
    """

    max_line_search_iterations: int = 40
    line_search_step_size: float = 1e-5
    error_tolerance: float = 1e-10

    def __post_init__(self) -> None:
        _check_positive_int(
            "max_line_search_iterations", self.max_line_search_iterations
        )
        step = _check_finite("line_search_step_size", self.line_search_step_size)
        if step < 0.0:
            raise ValueError(f"line_search_step_size must be non-negative, got {step}.")
        tolerance = _check_finite("error_tolerance", self.error_tolerance)
        if not 0.0 < tolerance <= 1.0:
            raise ValueError(
                f"error_tolerance must be in range (0, 1], got {tolerance}."
            )

    @property
    def error_tolerance_squared(self) -> float:
        return self.error_tolerance * self.error_tolerance


@dataclass(frozen=True)
class HagerZhangConfig:
    """
    Tunables of the Hager–Zhang approximate-Wolfe line search.

    The names follow Hager & Zhang, "Algorithm 851: CG_DESCENT" (2006).

    Args:
        delta: δ, sufficient decrease constant of the Wolfe conditions, in
            (0, 0.5).
        sigma: σ, curvature constant of the Wolfe conditions, in (δ, 1).
        epsilon: ε, tolerated increase of the cost in the approximate Wolfe
            conditions, ``>= 0``.
        omega: ω, switch threshold between the Wolfe and approximate Wolfe
            conditions, in [0, 1]. Only used with ``adaptive_wolfe``.
        decay: Δ, decay factor of the running cost average, in [0, 1]. Only
            used with ``adaptive_wolfe``.
        theta: θ, weight of the bisection point used when a candidate
            interval violates the opposite slope condition, in (0, 1).
        gamma: γ, required shrink factor per double-secant step; otherwise a
            bisection step is forced. In (0, 1).
        rho: ρ, expansion factor of the bracketing phase, ``> 1``.
        psi0: ψ0, scale of the very first trial step, in (0, 1).
        psi1: ψ1, scale of the QuadStep probe point, in (0, 1).
        psi2: ψ2, growth factor applied to the previous step, ``> 1``.
        quad_step: Whether QuadStep interpolation is attempted.
        alpha0: Fixed trial step for the first call of a run. ``None`` lets
            the line search derive one from the starting point.
        max_bracketing_iterations: Cap on the expansion and bisection loops.
        max_iterations: Cap on the double-secant loop.
        adaptive_wolfe: Only accept the approximate Wolfe conditions once the
            cost has settled (CG_DESCENT's ω/Δ rule). When False both
            condition sets are always accepted.
    """

    delta: float = 0.1
    sigma: float = 0.9
    epsilon: float = 1e-6
    omega: float = 1e-3
    decay: float = 0.7
    theta: float = 0.5
    gamma: float = 0.66
    rho: float = 5.0
    psi0: float = 0.01
    psi1: float = 0.1
    psi2: float = 2.0
    quad_step: bool = True
    alpha0: Optional[float] = None
    max_bracketing_iterations: int = 50
    max_iterations: int = 250
    adaptive_wolfe: bool = False

    def __post_init__(self) -> None:
        delta = _check_finite("delta", self.delta)
        _check_open("delta", delta, 0.0, 0.5)
        sigma = _check_finite("sigma", self.sigma)
        _check_open("sigma", sigma, delta, 1.0)

        if _check_finite("epsilon", self.epsilon) < 0.0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}.")
        _check_closed("omega", _check_finite("omega", self.omega), 0.0, 1.0)
        _check_closed("decay", _check_finite("decay", self.decay), 0.0, 1.0)

        for name in ("theta", "gamma", "psi0", "psi1"):
            _check_open(name, _check_finite(name, getattr(self, name)), 0.0, 1.0)
        for name in ("rho", "psi2"):
            value = _check_finite(name, getattr(self, name))
            if value <= 1.0:
                raise ValueError(f"{name} must be greater than 1, got {value}.")

        if self.alpha0 is not None:
            if _check_finite("alpha0", self.alpha0) <= 0.0:
                raise ValueError(f"alpha0 must be positive, got {self.alpha0}.")

        _check_positive_int("max_bracketing_iterations", self.max_bracketing_iterations)
        _check_positive_int("max_iterations", self.max_iterations)


def config_property(field_name: str, doc: Optional[str] = None) -> property:
    """Expose ``self.config.<field_name>`` as a validated, settable property.

    The owning class must keep its frozen configuration in ``self.config``.
    Assignment rebuilds the configuration, so an invalid value raises and
    the previous configuration stays in place.
    """

    def getter(self):
        return getattr(self.config, field_name)

    def setter(self, value) -> None:
        self.config = replace(self.config, **{field_name: value})

    return property(getter, setter, doc=doc or f"Validated ``{field_name}`` setting.")


__all__ = [
    "CGConfig",
    "HagerZhangConfig",
    "SecantConfig",
    "config_property",
]
