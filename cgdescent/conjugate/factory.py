"""Name-based construction of conjugate gradient solvers."""

from __future__ import annotations

from typing import Any, Optional, Union

from ..config import CGConfig
from ..core import OptimizationResult, Problem
from ..line_search import HagerZhangLineSearch, LineSearch, SecantMethod
from .engine import ConjugateGradientDescent, FletcherReevesCG, HagerZhangCG, PolakRibiereCG

METHODS = ("fletcher-reeves", "polak-ribiere", "hager-zhang")
LINE_SEARCHES = ("secant", "hager-zhang")

_CONFIG_OPTIONS = ("max_iterations", "error_tolerance")


def create_line_search(name: str) -> LineSearch:
    """
    Create a line search with default settings from its name.

    Args:
        name: ``"secant"`` or ``"hager-zhang"`` (case insensitive).

    Raises:
        ValueError: If the name is not supported.
    """
    name_lower = name.lower()
    if name_lower == "secant":
        return SecantMethod()
    elif name_lower == "hager-zhang":
        return HagerZhangLineSearch()
    else:
        raise ValueError(
            f"Unsupported line search '{name}'. Supported names: {list(LINE_SEARCHES)}"
        )


def create_solver(
    method: str = "hager-zhang",
    line_search: Union[str, LineSearch, None] = None,
    **options: Any,
) -> ConjugateGradientDescent:
    """
    Create a conjugate gradient solver from a method name.

    Args:
        method: ``"fletcher-reeves"``, ``"polak-ribiere"`` or ``"hager-zhang"``.
        line_search: A line search instance, a line search name, or None for
            the method's default (secant for Fletcher–Reeves and Polak–Ribière,
            Hager–Zhang for CG_DESCENT).
        **options: ``max_iterations`` and ``error_tolerance`` for the engine,
            ``preconditioner`` for Polak–Ribière, ``eta`` for Hager–Zhang.

    Returns:
        A configured :class:`ConjugateGradientDescent`.

    Raises:
        ValueError: If a name is not supported or an option is out of range.
        TypeError: If an option does not apply to the chosen method.
    """
    search: Optional[LineSearch]
    if isinstance(line_search, str):
        search = create_line_search(line_search)
    else:
        search = line_search

    config_options = {key: options.pop(key) for key in _CONFIG_OPTIONS if key in options}
    config = CGConfig(**config_options)

    name_lower = method.lower()
    if name_lower == "fletcher-reeves":
        solver: ConjugateGradientDescent = FletcherReevesCG(search, config)
    elif name_lower == "polak-ribiere":
        solver = PolakRibiereCG(search, options.pop("preconditioner", None), config)
    elif name_lower == "hager-zhang":
        solver = HagerZhangCG(options.pop("eta", 0.01), search, config)
    else:
        raise ValueError(
            f"Unsupported method '{method}'. Supported names: {list(METHODS)}"
        )

    if options:
        raise TypeError(
            f"Unexpected options for method '{method}': {sorted(options)}"
        )
    return solver


def minimize(
    problem: Problem,
    method: str = "hager-zhang",
    line_search: Union[str, LineSearch, None] = None,
    **options: Any,
) -> OptimizationResult:
    """
    Minimize ``problem`` with the named conjugate gradient method.

    Shorthand for ``create_solver(method, line_search, **options).minimize(problem)``.

    Example:
        >>> from cgdescent import FunctionObjective, Problem, minimize
        >>> objective = FunctionObjective(lambda x: float((x[0] - 3.0) ** 2))
        >>> result = minimize(Problem(objective, [0.0]), method="fletcher-reeves")
        >>> round(float(result.coefficients[0]), 3)
        3.0
    """
    return create_solver(method, line_search, **options).minimize(problem)


__all__ = [
    "LINE_SEARCHES",
    "METHODS",
    "create_line_search",
    "create_solver",
    "minimize",
]
