"""
Example: Fitting model coefficients with nonlinear conjugate gradients

Each model is fitted by minimizing the mean residual sum of squares over a
small synthetic training set. The three direction updates (Fletcher-Reeves,
Polak-Ribiere, Hager-Zhang) are compared on the same problems.
"""

import numpy as np

from cgdescent import (
    DataPoint,
    LinearHypothesis,
    Problem,
    ResidualSumOfSquares,
    RosenbrockHypothesis,
    UnivariateExponentialHypothesis,
    minimize,
)

METHODS = ("fletcher-reeves", "polak-ribiere", "hager-zhang")


def make_training_set(hypothesis, truth, inputs, noise=0.0, seed=0):
    rng = np.random.default_rng(seed)
    points = []
    for x in inputs:
        outputs = hypothesis.evaluate(truth, x)
        points.append(DataPoint(x, outputs + noise * rng.standard_normal(outputs.shape)))
    return points


def report(truth, problem):
    print(f"True coefficients: {truth}")
    for method in METHODS:
        result = minimize(problem, method=method)
        print(
            f"  {method:16s} -> {np.round(result.coefficients, 4)} "
            f"cost={result.cost:.3e} nit={result.nit} "
            f"converged={result.converged}"
        )
    print()


def example_linear_regression():
    """Example: y = 0.5 + 2x - 1.5z with mild noise."""
    print("=" * 60)
    print("Example 1: Linear Regression")
    print("=" * 60)

    hypothesis = LinearHypothesis(2)
    truth = np.array([0.5, 2.0, -1.5])
    inputs = np.random.default_rng(1).uniform(-3.0, 3.0, size=(25, 2))
    points = make_training_set(hypothesis, truth, inputs, noise=0.05)

    problem = Problem(ResidualSumOfSquares(hypothesis, points), np.zeros(3))
    report(truth, problem)


def example_rosenbrock_parameters():
    """Example: recover (a, b) of the Rosenbrock surface from samples."""
    print("=" * 60)
    print("Example 2: Rosenbrock Parameter Estimation")
    print("=" * 60)

    hypothesis = RosenbrockHypothesis()
    truth = np.array([1.0, 105.0])
    inputs = np.random.default_rng(2).uniform(-10.0, 10.0, size=(10, 2))
    points = make_training_set(hypothesis, truth, inputs)

    problem = Problem(ResidualSumOfSquares(hypothesis, points), [2.0, 200.0])
    report(truth, problem)


def example_power_law():
    """Example: y = offset + a * x^b on positive inputs."""
    print("=" * 60)
    print("Example 3: Power-Law Curve")
    print("=" * 60)

    hypothesis = UnivariateExponentialHypothesis()
    truth = np.array([0.2, 1.5, 0.8])
    inputs = np.linspace(0.5, 4.0, 15)
    points = make_training_set(hypothesis, truth, inputs)

    problem = Problem(ResidualSumOfSquares(hypothesis, points), [0.0, 1.0, 1.0])
    report(truth, problem)


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("cgdescent - Curve Fitting Examples")
    print("=" * 60 + "\n")

    example_linear_regression()
    example_rosenbrock_parameters()
    example_power_law()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
