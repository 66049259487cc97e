"""Nonlinear conjugate gradient engine."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import CGConfig, config_property
from ..core import Array, Objective, OptimizationResult, Problem
from ..diagnostics import assert_finite, assert_gradient_shape, is_debug_enabled
from ..line_search import HagerZhangLineSearch, LineSearch, SecantMethod
from ..logging import get_logger
from ..utils import is_finite
from .strategies import BetaStrategy, FletcherReeves, HagerZhang, PolakRibiere, Preconditioner

logger = get_logger(__name__)


class _CountingObjective:
    """Objective wrapper tallying evaluations for :class:`OptimizationResult`."""

    def __init__(self, objective: Objective) -> None:
        self._objective = objective
        self.nfev = 0
        self.njev = 0

    def cost(self, x: Array) -> float:
        self.nfev += 1
        return float(self._objective.cost(x))

    def gradient(self, x: Array) -> Array:
        self.njev += 1
        gradient = np.asarray(self._objective.gradient(x), dtype=float)
        if self.njev == 1 or is_debug_enabled():
            assert_gradient_shape(gradient, np.asarray(x))
            if is_debug_enabled():
                assert_finite("gradient", gradient)
        return gradient


class ConjugateGradientDescent:
    """
    Minimize a differentiable objective with nonlinear conjugate gradients.

    Each outer iteration performs one line search along the current direction,
    evaluates the gradient once at the new point and lets the beta strategy
    compute the next direction. The direction is reset to the strategy's
    restart direction (the normalized residual, preconditioned for
    :class:`PolakRibiere` when a preconditioner is set) every ``n`` iterations
    (``n`` being the problem dimension), when the strategy requests it, or
    when the direction stops descending.

    Args:
        strategy: Direction update, e.g. :class:`FletcherReeves`.
        line_search: Step length search, e.g. :class:`SecantMethod`.
        config: Iteration cap and relative residual tolerance.

    Example:
        >>> import numpy as np
        >>> from cgdescent import FletcherReevesCG, FunctionObjective, Problem
        >>> objective = FunctionObjective(lambda x: float(x @ x), lambda x: 2 * x)
        >>> result = FletcherReevesCG().minimize(Problem(objective, [1.0, -2.0]))
        >>> bool(np.allclose(result.coefficients, 0.0))
        True
    """

    max_iterations = config_property("max_iterations")
    error_tolerance = config_property("error_tolerance")

    def __init__(
        self,
        strategy: BetaStrategy,
        line_search: LineSearch,
        config: Optional[CGConfig] = None,
    ) -> None:
        self.strategy = strategy
        self.line_search = line_search
        self.config = config if config is not None else CGConfig()

    def minimize(self, problem: Problem) -> OptimizationResult:
        """
        Run the conjugate gradient iteration on ``problem``.

        Exhausting ``max_iterations`` is not an error: the last coefficients
        are returned with ``converged=False``.
        """
        config = self.config
        objective = _CountingObjective(problem.objective)
        theta = np.array(problem.initial_coefficients, dtype=float, copy=True)
        n = problem.dim

        reset = getattr(self.line_search, "reset", None)
        if callable(reset):
            reset()

        residuals = -objective.gradient(theta)
        state, direction = self.strategy.initialize(problem, theta, residuals)

        delta = float(np.dot(residuals, residuals))
        delta0 = delta
        tolerance = config.error_tolerance_squared * delta0

        countdown = n
        previous_alpha = 0.0
        restarts = 0
        nit = 0
        converged = False

        if delta0 == 0.0:
            logger.info("Initial point is stationary; nothing to do.")
            return self._result(objective, theta, nit, restarts, True, "Initial point is stationary.")

        for iteration in range(config.max_iterations):
            if delta <= tolerance:
                converged = True
                break

            if not float(np.dot(residuals, direction)) > 0.0:
                logger.debug("Iteration %d: direction is not descending, restarting.", iteration)
                direction = self.strategy.restart(state, theta, residuals)
                countdown = n
                previous_alpha = 0.0
                restarts += 1

            alpha = self.line_search.minimize(objective, theta, direction, previous_alpha)
            nit += 1
            if not is_finite(alpha):
                logger.warning(
                    "Iteration %d: line search returned %r; discarding the step and restarting.",
                    iteration,
                    alpha,
                )
                direction = self.strategy.restart(state, theta, residuals)
                countdown = n
                previous_alpha = 0.0
                restarts += 1
                continue

            theta = theta + alpha * direction
            previous_alpha = alpha
            residuals = -objective.gradient(theta)

            direction, delta, proceed = self.strategy.update(
                state, theta, residuals, direction, delta
            )

            countdown -= 1
            if countdown == 0 or not proceed:
                direction = self.strategy.restart(state, theta, residuals)
                countdown = n
                previous_alpha = 0.0
                restarts += 1

            logger.debug(
                "Iteration %d: alpha=%.6g, |r|^2=%.6g, restart=%s",
                iteration,
                alpha,
                delta,
                countdown == n,
            )
        else:
            converged = delta <= tolerance

        if converged:
            message = "Relative residual below tolerance."
            logger.info("Converged after %d iterations (%d restarts).", nit, restarts)
        else:
            message = "Maximum number of iterations reached."
            logger.info(
                "Stopped after %d iterations without convergence; |r|^2=%.6g.", nit, delta
            )
        return self._result(objective, theta, nit, restarts, converged, message)

    @staticmethod
    def _result(
        objective: _CountingObjective,
        theta: Array,
        nit: int,
        restarts: int,
        converged: bool,
        message: str,
    ) -> OptimizationResult:
        cost = objective.cost(theta)
        return OptimizationResult(
            coefficients=theta,
            cost=cost,
            nit=nit,
            nfev=objective.nfev,
            njev=objective.njev,
            restarts=restarts,
            converged=converged,
            message=message,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(strategy={self.strategy!r}, "
            f"line_search={self.line_search!r}, config={self.config!r})"
        )


class FletcherReevesCG(ConjugateGradientDescent):
    """Fletcher–Reeves CG, with the secant line search unless told otherwise."""

    def __init__(
        self, line_search: Optional[LineSearch] = None, config: Optional[CGConfig] = None
    ) -> None:
        super().__init__(
            FletcherReeves(),
            line_search if line_search is not None else SecantMethod(),
            config,
        )


class PolakRibiereCG(ConjugateGradientDescent):
    """Polak–Ribière CG with an optional preconditioner."""

    def __init__(
        self,
        line_search: Optional[LineSearch] = None,
        preconditioner: Optional[Preconditioner] = None,
        config: Optional[CGConfig] = None,
    ) -> None:
        super().__init__(
            PolakRibiere(preconditioner),
            line_search if line_search is not None else SecantMethod(),
            config,
        )


class HagerZhangCG(ConjugateGradientDescent):
    """
    CG_DESCENT: the Hager–Zhang direction update with the Hager–Zhang line search.

    The line search tunables are reachable through ``self.line_search``.
    """

    def __init__(
        self,
        eta: float = 0.01,
        line_search: Optional[LineSearch] = None,
        config: Optional[CGConfig] = None,
    ) -> None:
        super().__init__(
            HagerZhang(eta),
            line_search if line_search is not None else HagerZhangLineSearch(),
            config,
        )

    @property
    def eta(self) -> float:
        return self.strategy.eta

    @eta.setter
    def eta(self, value: float) -> None:
        self.strategy.eta = value


__all__ = [
    "ConjugateGradientDescent",
    "FletcherReevesCG",
    "HagerZhangCG",
    "PolakRibiereCG",
]
