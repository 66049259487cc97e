import numpy as np
import pytest

from cgdescent.utils import approx_grad, is_finite, normalize, safe_solve, sup_norm


def test_approx_grad_quadratic():
    def f(x):
        return float(x @ x)

    x = np.array([1.0, -2.0, 0.5])
    assert np.allclose(approx_grad(f, x), 2.0 * x, atol=1e-6)


def test_approx_grad_counts_evaluations():
    grad, evals = approx_grad(lambda x: float(np.sum(x)), np.zeros(4), return_evals=True)
    assert evals == 8
    assert np.allclose(grad, 1.0)


def test_approx_grad_rejects_non_positive_step():
    with pytest.raises(ValueError):
        approx_grad(lambda x: 0.0, np.zeros(2), eps=0.0)


def test_normalize():
    assert np.allclose(normalize(np.array([3.0, 4.0])), [0.6, 0.8])

    zero = np.zeros(3)
    result = normalize(zero)
    assert np.array_equal(result, zero)
    assert result is not zero


def test_sup_norm_and_is_finite():
    assert sup_norm(np.array([1.0, -7.0, 3.0])) == 7.0
    assert sup_norm(np.array([])) == 0.0
    assert is_finite(1.0)
    assert not is_finite(float("nan"))
    assert not is_finite(float("-inf"))


def test_safe_solve_regularizes_singular_system():
    mat = np.array([[1.0, 0.0], [0.0, 0.0]])
    vec = np.array([2.0, 0.0])
    solution = safe_solve(mat, vec)
    assert np.all(np.isfinite(solution))
    assert solution[0] == pytest.approx(2.0)

    assert np.allclose(safe_solve(np.diag([2.0, 4.0]), np.array([2.0, 4.0])), [1.0, 1.0])
