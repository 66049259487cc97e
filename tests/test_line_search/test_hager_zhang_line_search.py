import numpy as np
import pytest

from cgdescent.config import HagerZhangConfig
from cgdescent.core import FunctionObjective
from cgdescent.hypotheses import FunctionValueObjective, RosenbrockHypothesis
from cgdescent.line_search import Bracket, HagerZhangLineSearch, LineFunction, LineSearch


def rosenbrock() -> FunctionValueObjective:
    return FunctionValueObjective(RosenbrockHypothesis(), np.array([1.0, 100.0]))


def random_quadratic(rng: np.random.Generator, dim: int = 5) -> tuple:
    m = rng.standard_normal((dim, dim))
    matrix = m.T @ m + 0.1 * np.eye(dim)
    vector = rng.standard_normal(dim)
    objective = FunctionObjective(
        lambda x: float(0.5 * x @ matrix @ x - vector @ x),
        lambda x: matrix @ x - vector,
    )
    return objective, matrix


def steepest_descent_line(objective, location: np.ndarray) -> LineFunction:
    gradient = objective.gradient(location)
    direction = -gradient / np.linalg.norm(gradient)
    return LineFunction(objective, location, direction)


def assert_bracket(line: LineFunction, bracket: Bracket) -> None:
    assert bracket.start < bracket.end
    assert line.dphi(bracket.start) < 0.0
    assert line.dphi(bracket.end) >= 0.0


def test_line_search_protocol():
    assert isinstance(HagerZhangLineSearch(), LineSearch)


def test_rosenbrock_regression_step():
    objective = rosenbrock()
    location = np.array([-1.5, 0.6])
    gradient = objective.gradient(location)
    direction = -gradient / np.linalg.norm(gradient)

    alpha = HagerZhangLineSearch().minimize(objective, location, direction, 0.0)

    assert alpha == pytest.approx(0.235552763819095, abs=1e-5)


def test_rosenbrock_step_satisfies_wolfe():
    objective = rosenbrock()
    location = np.array([-1.5, 0.6])
    search = HagerZhangLineSearch()
    line = steepest_descent_line(objective, location)

    alpha = search.minimize(objective, location, line.direction)

    assert search.wolfe_conditions(line, alpha) or search.approximate_wolfe_conditions(line, alpha)
    assert objective.cost(location + alpha * line.direction) < objective.cost(location)


def test_initial_search_point_heuristics():
    search = HagerZhangLineSearch()
    objective = rosenbrock()

    line = steepest_descent_line(objective, np.array([-1.5, 0.6]))
    assert search.determine_initial_search_point(line) == pytest.approx(0.01 * 1.5 / 995.0)

    # x == 0: scale by |f0| / |g0|^2
    parabola = FunctionObjective(lambda x: float((x - 2.0) @ (x - 2.0)), lambda x: 2.0 * (x - 2.0))
    line = steepest_descent_line(parabola, np.zeros(2))
    expected = 0.01 * 8.0 / 32.0
    assert search.determine_initial_search_point(line) == pytest.approx(expected)

    # x == 0 and f0 == 0
    shifted = FunctionObjective(
        lambda x: float((x - 2.0) @ (x - 2.0)) - 8.0, lambda x: 2.0 * (x - 2.0)
    )
    line = steepest_descent_line(shifted, np.zeros(2))
    assert search.determine_initial_search_point(line) == 1.0

    search.alpha0 = 0.3
    assert search.determine_initial_search_point(line) == 0.3


def test_quad_step_is_exact_on_parabola():
    search = HagerZhangLineSearch()
    parabola = FunctionObjective(lambda x: float(x @ x), lambda x: 2.0 * x)
    line = LineFunction(parabola, np.array([3.0]), np.array([-1.0]))

    # the interpolant through φ0, φ'0 and φ(r) is φ itself
    assert search.determine_initial_search_point(line, 1.0) == pytest.approx(3.0)


def test_quad_step_fallback_uses_psi2():
    search = HagerZhangLineSearch(HagerZhangConfig(quad_step=False))
    parabola = FunctionObjective(lambda x: float(x @ x), lambda x: 2.0 * x)
    line = LineFunction(parabola, np.array([3.0]), np.array([-1.0]))
    assert search.determine_initial_search_point(line, 1.5) == pytest.approx(3.0)


def test_quad_step_rejected_for_concave_fit():
    search = HagerZhangLineSearch()
    # φ(α) = 1 - α - α², the fit has a negative leading coefficient
    concave = FunctionObjective(lambda x: float(1.0 + x[0] - x[0] ** 2), lambda x: np.array([1.0 - 2.0 * x[0]]))
    line = LineFunction(concave, np.array([0.0]), np.array([-1.0]))
    assert search.determine_initial_search_point(line, 2.0) == pytest.approx(4.0)


@pytest.mark.parametrize("seed", range(10))
def test_bracket_starting_point_invariant(seed):
    rng = np.random.default_rng(seed)
    objective, _ = random_quadratic(rng)
    location = rng.standard_normal(5) * 3.0
    search = HagerZhangLineSearch()
    line = steepest_descent_line(objective, location)

    for start in (1e-6, 1e-2, 1.0, 1e3):
        bracket = search.bracket_starting_point(line, start)
        assert_bracket(line, bracket)


@pytest.mark.parametrize("seed", range(10))
def test_update_bracketing_invariant(seed):
    rng = np.random.default_rng(seed)
    objective, _ = random_quadratic(rng)
    location = rng.standard_normal(5) * 3.0
    search = HagerZhangLineSearch()
    line = steepest_descent_line(objective, location)
    bracket = search.bracket_starting_point(line, 1e-3)

    for fraction in rng.uniform(0.0, 1.0, size=5):
        c = bracket.start + fraction * bracket.width
        updated = search.update_bracketing(line, bracket, c)
        assert_bracket(line, updated)
        assert updated.width <= bracket.width
        bracket = updated

    assert_bracket(line, search.double_secant(line, bracket))


def test_update_bracketing_ignores_point_outside():
    search = HagerZhangLineSearch()
    line = steepest_descent_line(rosenbrock(), np.array([-1.5, 0.6]))
    bracket = Bracket(0.1, 0.2)
    assert search.update_bracketing(line, bracket, 0.3) == bracket
    assert search.update_bracketing(line, bracket, 0.05) == bracket


def bumpy_line() -> LineFunction:
    # φ(α) = -0.1α + (3/2π)(1 - cos 2πα): descends, climbs a bump, descends again
    scale = 3.0 / (2.0 * np.pi)

    def cost(x):
        return float(-0.1 * x[0] + scale * (1.0 - np.cos(2.0 * np.pi * x[0])))

    def grad(x):
        return np.array([-0.1 + 3.0 * np.sin(2.0 * np.pi * x[0])])

    return LineFunction(FunctionObjective(cost, grad), np.array([0.0]), np.array([1.0]))


def test_update_bracket_in_range_on_nonconvex_line():
    search = HagerZhangLineSearch()
    line = bumpy_line()
    # descending again at 0.9, but above φ0 + ε
    assert line.dphi(0.9) < 0.0
    assert line.phi(0.9) > line.phi0 + search.epsilon

    bracket = search.update_bracket_in_range(line, Bracket(0.0, 0.9))

    assert_bracket(line, bracket)
    assert bracket == Bracket(0.0, 0.45)


def test_bracket_starting_point_bisects_after_overshoot():
    search = HagerZhangLineSearch()
    line = bumpy_line()
    bracket = search.bracket_starting_point(line, 0.9)
    assert_bracket(line, bracket)
    assert bracket.end < 0.9


def test_update_bracketing_falls_through_to_bisection():
    search = HagerZhangLineSearch()
    line = bumpy_line()
    bracket = Bracket(0.0, 1.2)
    assert_bracket(line, bracket)

    updated = search.update_bracketing(line, bracket, 0.9)

    assert_bracket(line, updated)
    assert updated.end <= 0.9


def test_secant_falls_back_to_midpoint():
    search = HagerZhangLineSearch()
    linear = FunctionObjective(lambda x: float(-x[0]), lambda x: np.array([-1.0]))
    line = LineFunction(linear, np.array([0.0]), np.array([1.0]))
    assert search.secant(line, Bracket(1.0, 3.0)) == 2.0


def test_secant_is_root_of_linear_slope():
    search = HagerZhangLineSearch()
    parabola = FunctionObjective(lambda x: float((x[0] - 0.7) ** 2), lambda x: np.array([2.0 * (x[0] - 0.7)]))
    line = LineFunction(parabola, np.array([0.0]), np.array([1.0]))
    assert search.secant(line, Bracket(0.0, 2.0)) == pytest.approx(0.7)


@pytest.mark.parametrize("seed", range(5))
def test_minimize_on_quadratics(seed):
    rng = np.random.default_rng(seed)
    objective, _ = random_quadratic(rng)
    location = rng.standard_normal(5)
    search = HagerZhangLineSearch()
    line = steepest_descent_line(objective, location)

    alpha = search.minimize(objective, location, line.direction, 0.0)

    assert alpha > 0.0
    assert search.should_terminate(line, alpha)
    assert objective.cost(location + alpha * line.direction) < objective.cost(location)


def test_non_descent_direction_returns_zero():
    objective = rosenbrock()
    location = np.array([-1.5, 0.6])
    uphill = objective.gradient(location)
    assert HagerZhangLineSearch().minimize(objective, location, uphill) == 0.0


def test_line_function_memoizes_evaluations():
    calls = {"cost": 0, "grad": 0}

    def cost(x):
        calls["cost"] += 1
        return float(x @ x)

    def grad(x):
        calls["grad"] += 1
        return 2.0 * x

    line = LineFunction(FunctionObjective(cost, grad), np.array([1.0]), np.array([-1.0]))
    assert calls == {"cost": 1, "grad": 1}
    assert line.phi0 == 1.0
    assert line.dphi0 == -2.0

    for _ in range(3):
        line.phi(0.5)
        line.dphi(0.5)
    assert calls == {"cost": 2, "grad": 2}
    assert line.evaluations == 2


def test_adaptive_wolfe_switch():
    search = HagerZhangLineSearch(HagerZhangConfig(adaptive_wolfe=True))
    # first call of a run: no previous cost, only the Wolfe conditions apply
    assert search._update_cost_average(10.0) is False
    assert search._update_cost_average(5.0) is False
    # cost change below omega * C switches permanently
    assert search._update_cost_average(5.0) is True
    assert search._update_cost_average(1.0) is True

    search.reset()
    assert search._update_cost_average(1.0) is False


def test_properties_validate_and_keep_previous_value():
    search = HagerZhangLineSearch()

    search.sigma = 0.5
    assert search.config.sigma == 0.5

    invalid = [
        ("delta", 0.0),
        ("delta", 0.5),
        ("sigma", 0.05),
        ("sigma", 1.0),
        ("epsilon", -1e-3),
        ("omega", 1.5),
        ("decay", -0.1),
        ("theta", 1.0),
        ("gamma", 0.0),
        ("rho", 1.0),
        ("psi0", 1.0),
        ("psi1", 0.0),
        ("psi2", 0.5),
        ("alpha0", -1.0),
        ("alpha0", float("inf")),
        ("max_bracketing_iterations", 0),
        ("max_iterations", -3),
    ]
    for name, value in invalid:
        with pytest.raises(ValueError):
            setattr(search, name, value)

    with pytest.raises(TypeError):
        search.max_iterations = 1.5
    with pytest.raises(TypeError):
        search.delta = "0.1"

    assert search.sigma == 0.5
    assert search.config == HagerZhangConfig(sigma=0.5)


def test_best_endpoint_skips_non_finite_costs():
    def cost(x):
        return float(x[0] ** 2) if x[0] < 1.0 else float("inf")

    objective = FunctionObjective(cost, lambda x: np.array([2.0 * x[0]]))
    line = LineFunction(objective, np.array([0.0]), np.array([1.0]))

    assert HagerZhangLineSearch._best_endpoint(line, Bracket(0.5, 2.0)) == 0.5
    assert HagerZhangLineSearch._best_endpoint(line, Bracket(0.0, 2.0)) == 0.0
