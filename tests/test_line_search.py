import numpy as np
import pytest

from descentopt.errors import DimensionMismatch, EvaluationError, LineSearchFailure
from descentopt.line_search import (
    MoreThuenteLineSearch,
    _cubic_minimizer,
    _quadratic_minimizer,
    wolfe_conditions,
)
from descentopt.testfunctions import rosenbrock_2d, rosenbrock_2d_derivative


def _sphere_evaluate(x):
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x)), 2.0 * x


def _assert_strong_wolfe(evaluate, x, d, res, c1=1e-4, c2=0.9, tol=1e-6):
    f0, g0 = evaluate(x)
    slope0 = float(np.dot(g0, d))
    f_new, g_new = evaluate(x + res.alpha * d)
    slope_new = float(np.dot(g_new, d))

    assert res.alpha > 0.0
    assert f_new <= f0 + c1 * res.alpha * slope0 + tol
    assert abs(slope_new) <= c2 * abs(slope0) + tol


def test_exact_step_on_sphere_along_negative_gradient():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)
    d = -g0

    res = MoreThuenteLineSearch().search(_sphere_evaluate, x, d, f0, g0)

    assert res.alpha == pytest.approx(0.5)
    assert res.cost == pytest.approx(0.0, abs=1e-12)
    np.testing.assert_allclose(res.point, [0.0, 0.0], atol=1e-12)
    _assert_strong_wolfe(_sphere_evaluate, x, d, res)


def test_wolfe_postcondition_on_fixed_quadratic_and_direction(quadratic_evaluate):
    x = np.array([3.0, 1.0])
    f0, g0 = quadratic_evaluate(x)
    d = np.array([-1.0, -0.5])

    ls = MoreThuenteLineSearch()
    res = ls.search(quadratic_evaluate, x, d, f0, g0)

    _assert_strong_wolfe(quadratic_evaluate, x, d, res)
    # значення, повернуті пошуком, збігаються з прямим обчисленням у новій точці
    f_direct, g_direct = quadratic_evaluate(x + res.alpha * d)
    assert res.cost == f_direct
    np.testing.assert_array_equal(res.gradient, g_direct)


def test_first_trial_accepted_when_both_conditions_hold():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)
    d = np.array([-1.0, 0.0])

    res = MoreThuenteLineSearch().search(_sphere_evaluate, x, d, f0, g0)

    assert res.alpha == 1.0
    assert res.iterations == 1
    assert res.meta["phase"] == "bracket"


def test_short_initial_step_is_extrapolated():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)
    d = -g0

    res = MoreThuenteLineSearch(initial_step=1e-3).search(_sphere_evaluate, x, d, f0, g0)

    assert res.alpha > 1e-3
    assert res.iterations > 1
    _assert_strong_wolfe(_sphere_evaluate, x, d, res)


def test_rosenbrock_overshoot_is_zoomed_back():
    evaluate = lambda p: (rosenbrock_2d(p), rosenbrock_2d_derivative(p))
    x = np.array([1.0, -2.0])
    f0, g0 = evaluate(x)
    d = -g0

    res = MoreThuenteLineSearch().search(evaluate, x, d, f0, g0)

    assert res.meta["phase"] == "zoom"
    assert res.cost < f0
    assert res.func_evals == res.iterations
    _assert_strong_wolfe(evaluate, x, d, res)


def test_initial_step_override_per_call():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)

    res = MoreThuenteLineSearch().search(
        _sphere_evaluate, x, np.array([-1.0, 0.0]), f0, g0, initial_step=2.0
    )
    assert res.alpha == 2.0


def test_non_descent_direction_fails():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)

    with pytest.raises(LineSearchFailure) as excinfo:
        MoreThuenteLineSearch().search(_sphere_evaluate, x, g0, f0, g0)
    assert excinfo.value.iterations == 0


def test_step_budget_exhausted():
    evaluate = lambda p: (rosenbrock_2d(p), rosenbrock_2d_derivative(p))
    x = np.array([1.0, -2.0])
    f0, g0 = evaluate(x)

    with pytest.raises(LineSearchFailure) as excinfo:
        MoreThuenteLineSearch(max_iter=1).search(evaluate, x, -g0, f0, g0)

    assert excinfo.value.iterations == 1
    assert excinfo.value.bracket == (0.0, 1.0)


def test_non_finite_trial_fails():
    def evaluate(p):
        p = np.asarray(p, dtype=float)
        if np.linalg.norm(p) < 1.0:
            return float("nan"), 2.0 * p
        return float(np.dot(p, p)), 2.0 * p

    x = np.array([5.0, -3.0])
    f0, g0 = evaluate(x)

    with pytest.raises(LineSearchFailure):
        MoreThuenteLineSearch().search(evaluate, x, -g0, f0, g0)


def test_evaluation_error_is_chained():
    def evaluate(p):
        raise EvaluationError(p, "outside domain")

    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)

    with pytest.raises(LineSearchFailure) as excinfo:
        MoreThuenteLineSearch().search(evaluate, x, -g0, f0, g0)
    assert isinstance(excinfo.value.__cause__, EvaluationError)


def test_alpha_max_limits_extrapolation():
    x = np.array([5.0, -3.0])
    f0, g0 = _sphere_evaluate(x)

    with pytest.raises(LineSearchFailure):
        MoreThuenteLineSearch(initial_step=1e-3, alpha_max=1e-2).search(
            _sphere_evaluate, x, -g0, f0, g0
        )


def test_bracket_collapse_on_kinked_function():
    # |φ'| = 1 всюди, умова кривизни з c2 < 1 недосяжна
    def evaluate(p):
        p = np.asarray(p, dtype=float)
        return float(abs(p[0] - 0.7)), np.sign(p - 0.7)

    x = np.array([0.0])
    f0, g0 = evaluate(x)

    with pytest.raises(LineSearchFailure) as excinfo:
        MoreThuenteLineSearch().search(evaluate, x, np.array([1.0]), f0, g0)

    assert "Ширина дужки" in str(excinfo.value)
    lo, hi = excinfo.value.bracket
    assert min(lo, hi) <= 0.7 <= max(lo, hi)
    assert abs(hi - lo) <= 1e-10
    assert excinfo.value.iterations < 100


def test_gradient_dimension_mismatch_is_not_truncated():
    x = np.array([1.0, 2.0, 3.0])
    with pytest.raises(DimensionMismatch):
        MoreThuenteLineSearch().search(
            _sphere_evaluate, x, np.array([-1.0, -1.0]), 14.0, np.array([1.0, 1.0])
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"c1": 0.9, "c2": 0.1},
        {"c1": 0.0},
        {"c2": 1.0},
        {"initial_step": 0.0},
        {"max_iter": 0},
        {"width_tol": 0.0},
    ],
)
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        MoreThuenteLineSearch(**kwargs)


def test_wolfe_conditions_helper():
    # φ(α) = (1 - α)^2: φ(0) = 1, φ'(0) = -2
    assert wolfe_conditions(1.0, -2.0, 1.0, 0.0, 0.0) == (True, True)
    assert wolfe_conditions(1.0, -2.0, 2.0, 1.0, 2.0) == (False, False)
    assert wolfe_conditions(1.0, -2.0, 0.01, 0.98, -1.98) == (True, False)


def test_interpolation_minimizers_on_exact_models():
    # (α - 0.3)^2: обидві моделі точні
    f = lambda a: (a - 0.3) ** 2
    df = lambda a: 2.0 * (a - 0.3)
    assert _quadratic_minimizer(0.0, f(0.0), df(0.0), 1.0, f(1.0)) == pytest.approx(0.3)
    assert _cubic_minimizer(0.0, f(0.0), df(0.0), 1.0, f(1.0), df(1.0)) == pytest.approx(0.3)
    # вгнута парабола мінімуму не має
    assert _quadratic_minimizer(0.0, 0.0, 1.0, 1.0, 0.0) is None
