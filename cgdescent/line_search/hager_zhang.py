"""
Hager–Zhang line search.

Implements the approximate-Wolfe line search of W. W. Hager and H. Zhang,
"A new conjugate gradient method with guaranteed descent and an efficient
line search" (SIAM J. Optim., 2005) and "Algorithm 851: CG_DESCENT" (ACM TOMS,
2006). The search works on the one-dimensional restriction

    φ(α) = f(x + α·d),    φ'(α) = ∇f(x + α·d)·d,

and keeps a bracket ``[a, b]`` satisfying

    φ'(a) < 0,    φ(a) <= φ(0) + ε,    φ'(b) >= 0

while it shrinks the bracket with double secant steps.
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Optional

import numpy as np

from ..config import HagerZhangConfig, config_property
from ..core import Objective
from ..diagnostics import assert_descent_direction, is_debug_enabled
from ..logging import get_logger
from ..utils import is_finite, sup_norm

logger = get_logger(__name__)

_COLLAPSE_TOLERANCE = 4.0 * np.finfo(float).eps


class Bracket(NamedTuple):
    """Closed interval ``[start, end]`` of step lengths."""

    start: float
    end: float

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.start + self.end)


class LineFunction:
    """
    Restriction of an objective to a ray, memoized per step length.

    Every α is evaluated at most once, so the bracketing logic can query
    ``phi`` and ``dphi`` freely.
    """

    def __init__(
        self, objective: Objective, location: np.ndarray, direction: np.ndarray
    ) -> None:
        self.objective = objective
        self.location = np.asarray(location, dtype=float)
        self.direction = np.asarray(direction, dtype=float)
        self.allow_approximate = True
        self._values: Dict[float, float] = {}
        self._slopes: Dict[float, float] = {}

        self.gradient0 = np.asarray(objective.gradient(self.location), dtype=float)
        self.dphi0 = float(np.dot(self.gradient0, self.direction))
        self._slopes[0.0] = self.dphi0
        self.phi0 = self.phi(0.0)

    def point(self, alpha: float) -> np.ndarray:
        return self.location + alpha * self.direction

    def phi(self, alpha: float) -> float:
        value = self._values.get(alpha)
        if value is None:
            value = float(self.objective.cost(self.point(alpha)))
            self._values[alpha] = value
        return value

    def dphi(self, alpha: float) -> float:
        slope = self._slopes.get(alpha)
        if slope is None:
            gradient = self.objective.gradient(self.point(alpha))
            slope = float(np.dot(gradient, self.direction))
            self._slopes[alpha] = slope
        return slope

    @property
    def evaluations(self) -> int:
        """Number of distinct step lengths at which φ or φ' was computed."""
        return len(self._values.keys() | self._slopes.keys())


class HagerZhangLineSearch:
    """
    Line search returning a step that satisfies the Wolfe or approximate
    Wolfe conditions.

    Args:
        config: Search tunables. Defaults to
            :class:`~cgdescent.config.HagerZhangConfig`.

    Every tunable of the configuration is also exposed as a property;
    assigning one validates the new value and rebuilds ``config``.
    """

    delta = config_property("delta")
    sigma = config_property("sigma")
    epsilon = config_property("epsilon")
    omega = config_property("omega")
    decay = config_property("decay")
    theta = config_property("theta")
    gamma = config_property("gamma")
    rho = config_property("rho")
    psi0 = config_property("psi0")
    psi1 = config_property("psi1")
    psi2 = config_property("psi2")
    quad_step = config_property("quad_step")
    alpha0 = config_property("alpha0")
    max_bracketing_iterations = config_property("max_bracketing_iterations")
    max_iterations = config_property("max_iterations")
    adaptive_wolfe = config_property("adaptive_wolfe")

    def __init__(self, config: Optional[HagerZhangConfig] = None) -> None:
        self.config = config if config is not None else HagerZhangConfig()
        self.reset()

    def reset(self) -> None:
        """Forget the running cost average used by ``adaptive_wolfe``."""
        self._cost_weight = 0.0
        self._cost_average = 0.0
        self._previous_cost: Optional[float] = None
        self._approximate_wolfe = False

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def minimize(
        self,
        objective: Objective,
        location: np.ndarray,
        direction: np.ndarray,
        previous_step_width: float = 0.0,
    ) -> float:
        """
        Return a step length along ``direction``.

        Parameters
        ----------
        objective:
            Function to minimize.
        location:
            Current point ``x``.
        direction:
            Search direction ``d``. Must be a descent direction
            (``∇f(x)·d < 0``); otherwise ``0.0`` is returned, or
            ``ValueError`` is raised in debug mode.
        previous_step_width:
            Step accepted by the previous call of the same run, or ``0.0``.

        Returns
        -------
        float
            A step satisfying the Wolfe or approximate Wolfe conditions, or
            the best bracket endpoint if the iteration cap runs out.
        """
        config = self.config
        line = LineFunction(objective, location, direction)

        if is_debug_enabled():
            assert_descent_direction(-line.gradient0, line.direction)
        if not line.dphi0 < 0.0:
            logger.warning(
                "Search direction is not a descent direction (slope %r); "
                "returning a zero step.",
                line.dphi0,
            )
            return 0.0

        line.allow_approximate = self._update_cost_average(line.phi0)

        c = self.determine_initial_search_point(line, previous_step_width)
        if self.should_terminate(line, c):
            return c

        bracket = self.bracket_starting_point(line, c)
        for alpha in bracket:
            if self.should_terminate(line, alpha):
                return alpha

        for iteration in range(config.max_iterations):
            candidate = self.double_secant(line, bracket)
            for alpha in candidate:
                if self.should_terminate(line, alpha):
                    return alpha

            if candidate.width > config.gamma * bracket.width:
                c = candidate.midpoint
                if self.should_terminate(line, c):
                    return c
                candidate = self.update_bracketing(line, candidate, c)

            logger.debug(
                "Iteration %d: bracket [%g, %g].", iteration, candidate.start, candidate.end
            )
            bracket = candidate
            if bracket.width <= _COLLAPSE_TOLERANCE * max(1.0, abs(bracket.end)):
                logger.debug("Bracket collapsed at [%g, %g].", bracket.start, bracket.end)
                return self._best_endpoint(line, bracket)

        logger.info(
            "Line search stopped after %d iterations without meeting the Wolfe "
            "conditions; bracket [%g, %g].",
            config.max_iterations,
            bracket.start,
            bracket.end,
        )
        return self._best_endpoint(line, bracket)

    # ------------------------------------------------------------------
    # Initial step (I0–I2 in CG_DESCENT)
    # ------------------------------------------------------------------

    def determine_initial_search_point(
        self, line: LineFunction, previous_step_width: float = 0.0
    ) -> float:
        """Choose the first trial step from the previous step or the start point."""
        config = self.config

        if previous_step_width == 0.0:
            if config.alpha0 is not None:
                return config.alpha0
            x_norm = sup_norm(line.location)
            if x_norm > 0.0:
                return config.psi0 * x_norm / sup_norm(line.gradient0)
            if abs(line.phi0) > 0.0:
                return config.psi0 * abs(line.phi0) / float(
                    np.dot(line.gradient0, line.gradient0)
                )
            return 1.0

        if config.quad_step:
            r = config.psi1 * previous_step_width
            phi_r = line.phi(r)
            if phi_r <= line.phi0:
                # φ(α) ≈ φ0 + φ'0·α + a·α² through φ(r)
                a = (phi_r - line.phi0 - r * line.dphi0) / (r * r)
                if a > 0.0:
                    minimizer = -line.dphi0 / (2.0 * a)
                    if minimizer >= 0.0 and is_finite(minimizer):
                        return minimizer

        return config.psi2 * previous_step_width

    # ------------------------------------------------------------------
    # Bracketing
    # ------------------------------------------------------------------

    def bracket_starting_point(self, line: LineFunction, c: float) -> Bracket:
        """
        Expand from ``c`` until an interval with the bracket property is found.

        Implements B0–B3 of CG_DESCENT. Each trial point that is not yet
        acceptable is multiplied by ``rho``.
        """
        config = self.config
        threshold = line.phi0 + config.epsilon
        tried = []

        for _ in range(config.max_bracketing_iterations):
            if line.dphi(c) >= 0.0:
                for previous in reversed(tried):
                    if line.phi(previous) <= threshold:
                        return Bracket(previous, c)
                return Bracket(0.0, c)

            if not line.phi(c) <= threshold:
                return self.update_bracket_in_range(line, Bracket(0.0, c))

            tried.append(c)
            c *= config.rho

        logger.warning(
            "No bracket found after %d expansions; using [0, %g].",
            config.max_bracketing_iterations,
            c,
        )
        return Bracket(0.0, c)

    def update_bracketing(self, line: LineFunction, bracket: Bracket, c: float) -> Bracket:
        """Shrink ``bracket`` using the trial point ``c`` (U0–U3)."""
        start, end = bracket
        if not start < c < end:
            return bracket

        if line.dphi(c) >= 0.0:
            return Bracket(start, c)
        if line.phi(c) <= line.phi0 + self.config.epsilon:
            return Bracket(c, end)
        return self.update_bracket_in_range(line, Bracket(start, c))

    def update_bracket_in_range(self, line: LineFunction, bracket: Bracket) -> Bracket:
        """
        Bisect ``bracket`` until its right end has a non-negative slope.

        Entered when the right end rose above ``φ0 + ε`` while still sloping
        downward (U3a–U3c). The loop is capped by
        ``max_bracketing_iterations``.
        """
        config = self.config
        threshold = line.phi0 + config.epsilon
        start, end = bracket

        for _ in range(config.max_bracketing_iterations):
            d = (1.0 - config.theta) * start + config.theta * end
            if line.dphi(d) >= 0.0:
                return Bracket(start, d)
            if line.phi(d) <= threshold:
                start = d
            else:
                end = d

        logger.warning(
            "Bisection did not restore the bracket after %d steps; using [%g, %g].",
            config.max_bracketing_iterations,
            start,
            end,
        )
        return Bracket(start, end)

    # ------------------------------------------------------------------
    # Secant steps
    # ------------------------------------------------------------------

    @staticmethod
    def secant(line: LineFunction, bracket: Bracket) -> float:
        """Zero of the linear interpolant of φ' through both ends of ``bracket``."""
        a, b = bracket
        dphi_a = line.dphi(a)
        dphi_b = line.dphi(b)
        denominator = dphi_b - dphi_a
        if denominator != 0.0:
            c = (a * dphi_b - b * dphi_a) / denominator
            if is_finite(c):
                return c
        return bracket.midpoint

    def double_secant(self, line: LineFunction, bracket: Bracket) -> Bracket:
        """One secant step plus a second one if it replaced a bracket end (S1–S4)."""
        c = self.secant(line, bracket)
        updated = self.update_bracketing(line, bracket, c)

        if c == updated.end:
            c = self.secant(line, Bracket(updated.end, bracket.end))
            return self.update_bracketing(line, updated, c)
        if c == updated.start:
            c = self.secant(line, Bracket(bracket.start, updated.start))
            return self.update_bracketing(line, updated, c)
        return updated

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def wolfe_conditions(self, line: LineFunction, alpha: float) -> bool:
        """Sufficient decrease and curvature conditions at ``alpha``."""
        config = self.config
        dphi_alpha = line.dphi(alpha)
        return (
            line.phi(alpha) - line.phi0 <= config.delta * alpha * line.dphi0
            and dphi_alpha >= config.sigma * line.dphi0
        )

    def approximate_wolfe_conditions(self, line: LineFunction, alpha: float) -> bool:
        """Approximate Wolfe conditions ``(2δ-1)φ'0 >= φ'(α) >= σφ'0``, ``φ(α) <= φ0+ε``."""
        config = self.config
        dphi_alpha = line.dphi(alpha)
        return (
            (2.0 * config.delta - 1.0) * line.dphi0 >= dphi_alpha
            and dphi_alpha >= config.sigma * line.dphi0
            and line.phi(alpha) <= line.phi0 + config.epsilon
        )

    def should_terminate(self, line: LineFunction, alpha: float) -> bool:
        if not is_finite(alpha):
            return False
        if self.wolfe_conditions(line, alpha):
            return True
        return line.allow_approximate and self.approximate_wolfe_conditions(line, alpha)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update_cost_average(self, cost: float) -> bool:
        """Track ``C_k`` and report whether approximate Wolfe is admissible."""
        config = self.config
        if not config.adaptive_wolfe:
            return True

        self._cost_weight = 1.0 + self._cost_weight * config.decay
        self._cost_average += (abs(cost) - self._cost_average) / self._cost_weight
        previous, self._previous_cost = self._previous_cost, cost
        if previous is not None and abs(cost - previous) <= config.omega * self._cost_average:
            self._approximate_wolfe = True
        return self._approximate_wolfe

    @staticmethod
    def _best_endpoint(line: LineFunction, bracket: Bracket) -> float:
        candidates = [
            alpha for alpha in bracket if alpha > 0.0 and is_finite(line.phi(alpha))
        ]
        if not candidates:
            # only the origin has a finite cost
            return bracket.start
        return min(candidates, key=line.phi)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config!r})"


__all__ = ["Bracket", "HagerZhangLineSearch", "LineFunction"]
