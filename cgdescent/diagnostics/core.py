"""Sanity checks for objectives and search directions."""

from __future__ import annotations

import numpy as np

from ..core import Objective
from ..utils import approx_grad


def assert_finite(name: str, value: np.ndarray | float) -> None:
    """
    Raise if ``value`` contains NaN or infinite entries.

    Parameters
    ----------
    name:
        Label used in the error message.
    value:
        Scalar or array to check.

    Raises
    ------
    ValueError
        If any entry is not finite.
    """
    if not np.all(np.isfinite(value)):
        raise ValueError(f"{name} contains non-finite values: {value!r}")


def assert_gradient_shape(gradient: np.ndarray, coefficients: np.ndarray) -> None:
    """
    Raise if an objective returned a gradient of the wrong shape.

    Raises
    ------
    ValueError
        If ``gradient.shape`` differs from ``coefficients.shape``.
    """
    if gradient.shape != coefficients.shape:
        raise ValueError(
            f"Objective gradient has shape {gradient.shape}, "
            f"expected {coefficients.shape}."
        )


def assert_descent_direction(residuals: np.ndarray, direction: np.ndarray) -> None:
    """
    Raise unless ``direction`` points downhill, i.e. ``r·d > 0``.

    Raises
    ------
    ValueError
        If the direction is not a descent direction.
    """
    slope = float(np.dot(residuals, direction))
    if not slope > 0.0:
        raise ValueError(f"Not a descent direction: r·d = {slope}.")


def check_gradient(
    objective: Objective,
    x: np.ndarray,
    eps: float = 1e-6,
    rtol: float = 1e-4,
    atol: float = 1e-6,
) -> bool:
    """
    Compare an analytic gradient against central finite differences.

    Parameters
    ----------
    objective:
        Objective whose ``gradient`` is checked against its ``cost``.
    x:
        Point of comparison.
    eps:
        Finite-difference step.
    rtol, atol:
        Tolerances forwarded to :func:`numpy.allclose`.

    Returns
    -------
    bool
        True if both gradients agree within the tolerances.
    """
    x = np.asarray(x, dtype=float)
    analytic = np.asarray(objective.gradient(x), dtype=float)
    numeric = approx_grad(objective.cost, x, eps=eps)
    return bool(np.allclose(analytic, numeric, rtol=rtol, atol=atol))
