"""Secant-method line search.

The search drives the directional derivative ``η(α) = ∇f(x + α·u)·u`` to zero
by secant updates, where ``u`` is the unit search direction. On a locally
quadratic objective the first update lands on the line minimizer, so the
search is cheap but makes no sufficient-decrease guarantee.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import SecantConfig, config_property
from ..core import Objective
from ..logging import get_logger
from ..utils import is_finite

logger = get_logger(__name__)


class SecantMethod:
    """
    Line search locating the zero of the directional derivative.

    Args:
        config: Iteration cap, probing step and tolerance. Defaults to
            :class:`~cgdescent.config.SecantConfig`.

    Example:
        >>> import numpy as np
        >>> from cgdescent import FunctionObjective, SecantMethod
        >>> parabola = FunctionObjective(lambda x: float(x @ x), lambda x: 2 * x)
        >>> step = SecantMethod().minimize(parabola, np.array([3.0]), np.array([1.0]))
        >>> round(step, 6)
        -3.0
    """

    max_line_search_iterations = config_property("max_line_search_iterations")
    line_search_step_size = config_property("line_search_step_size")
    error_tolerance = config_property("error_tolerance")

    def __init__(self, config: Optional[SecantConfig] = None) -> None:
        self.config = config if config is not None else SecantConfig()

    def minimize(
        self,
        objective: Objective,
        location: np.ndarray,
        direction: np.ndarray,
        previous_step_width: float = 0.0,
    ) -> float:
        """
        Return the step along ``direction`` at which the slope vanishes.

        The direction does not need to be normalized: the search runs along
        the unit direction and the result is expressed in units of
        ``direction``. ``previous_step_width`` is accepted for interface
        compatibility and ignored.
        """
        config = self.config
        epsilon_squared = config.error_tolerance_squared
        initial_step = config.line_search_step_size

        norm = float(np.linalg.norm(direction))
        if norm == 0.0:
            return 0.0
        unit = direction / norm

        theta = np.array(location, dtype=float, copy=True)
        previous_eta = float(np.dot(objective.gradient(theta + initial_step * unit), unit))

        # alpha holds the last step taken; the probe sits one step "behind" theta
        alpha = -initial_step
        travelled = 0.0

        for _ in range(config.max_line_search_iterations):
            if alpha * alpha <= epsilon_squared:
                break

            eta = float(np.dot(objective.gradient(theta), unit))
            denominator = previous_eta - eta
            if denominator == 0.0 or not is_finite(denominator):
                logger.debug("Secant stopped: slope difference is %r.", denominator)
                break

            alpha = alpha * eta / denominator
            if not is_finite(alpha):
                logger.warning("Secant update produced a non-finite step; stopping.")
                break

            previous_eta = eta
            theta = theta + alpha * unit
            travelled += alpha

        return travelled / norm

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config!r})"


__all__ = ["SecantMethod"]
