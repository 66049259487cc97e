"""Small numeric helpers shared by the line searches and the CG engine.

These utilities avoid any dependency on SciPy and provide deterministic,
pure NumPy implementations.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

Array = np.ndarray
CostFunction = Callable[[Array], float]


def is_finite(value: float) -> bool:
    """Return True if ``value`` is neither NaN nor infinite."""
    return math.isfinite(value)


def sup_norm(vec: Array) -> float:
    """Supremum (infinity) norm, ``max |v_i|``."""
    if vec.size == 0:
        return 0.0
    return float(np.max(np.abs(vec)))


def normalize(vec: Array) -> Array:
    """Return ``vec / ||vec||_2``.

    A zero vector is returned unchanged (as a copy) instead of producing NaNs.
    """
    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        return np.array(vec, dtype=float, copy=True)
    return vec / norm


def approx_grad(
    fun: CostFunction, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Cost function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    return_evals:
        Also return the number of cost evaluations spent.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad[i] = (fx_plus - fx_minus) / (2.0 * eps)
    if return_evals:
        return grad, evals
    return grad


def safe_solve(mat: Array, vec: Array, reg: float = 1e-12) -> Array:
    """Solve linear system with ridge fallback for singular matrices."""
    try:
        return np.linalg.solve(mat, vec)
    except np.linalg.LinAlgError:
        eye = np.eye(mat.shape[0], dtype=mat.dtype)
        return np.linalg.solve(mat + reg * eye, vec)


__all__ = [
    "Array",
    "CostFunction",
    "approx_grad",
    "is_finite",
    "normalize",
    "safe_solve",
    "sup_norm",
]
