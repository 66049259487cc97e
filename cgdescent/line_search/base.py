"""Interface shared by the line searches."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from ..core import Objective


@runtime_checkable
class LineSearch(Protocol):
    """One-dimensional minimization along a fixed search direction."""

    def minimize(
        self,
        objective: Objective,
        location: np.ndarray,
        direction: np.ndarray,
        previous_step_width: float = 0.0,
    ) -> float:
        """Return a step length α for ``location + α·direction``.

        ``previous_step_width`` is the step accepted by the previous call of
        the same run, or ``0.0`` on the first call and after a restart.
        """
        ...
