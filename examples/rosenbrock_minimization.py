"""
Example: Minimizing the Rosenbrock function

Runs the Hager-Zhang conjugate gradient method with its approximate-Wolfe line
search on f(x, y) = (1 - x)^2 + 100 (y - x^2)^2, then repeats the run with the
adaptive Wolfe switch enabled and with the secant line search for comparison.
Set CGDESCENT_DEBUG=1 to validate every gradient during the runs.
"""

import logging

import numpy as np

from cgdescent import (
    FunctionValueObjective,
    HagerZhangCG,
    HagerZhangConfig,
    HagerZhangLineSearch,
    Problem,
    RosenbrockHypothesis,
    SecantMethod,
    configure_logging,
)


def run(label, solver, problem):
    result = solver.minimize(problem)
    print(f"{label}:")
    print(f"  Minimizer: {np.round(result.coefficients, 6)}")
    print(f"  Cost: {result.cost:.3e}")
    print(f"  Iterations: {result.nit} (restarts: {result.restarts})")
    print(f"  Evaluations: {result.nfev} cost, {result.njev} gradient")
    print(f"  {result.message}")
    print()
    return result


def main():
    configure_logging(level=logging.WARNING)

    objective = FunctionValueObjective(RosenbrockHypothesis(), [1.0, 100.0])
    problem = Problem(objective, [-1.2, 1.0])

    solver = HagerZhangCG()
    solver.max_iterations = 5000
    solver.error_tolerance = 1e-8
    result = run("Hager-Zhang CG, approximate Wolfe", solver, problem)

    adaptive = HagerZhangCG(line_search=HagerZhangLineSearch(HagerZhangConfig(adaptive_wolfe=True)))
    adaptive.max_iterations = 5000
    adaptive.error_tolerance = 1e-8
    run("Hager-Zhang CG, adaptive Wolfe switch", adaptive, problem)

    secant = HagerZhangCG(line_search=SecantMethod())
    secant.max_iterations = 5000
    secant.error_tolerance = 1e-8
    run("Hager-Zhang CG, secant line search", secant, problem)

    print(f"Distance to (1, 1): {np.linalg.norm(result.coefficients - 1.0):.3e}")


if __name__ == "__main__":
    main()
