import numpy as np
import pytest

from descentopt.functions import (
    FunctionProblem,
    Problem,
    numerical_gradient,
    numerical_hessian,
)
from descentopt.testfunctions import (
    FUNCTIONS,
    Rosenbrock,
    Sphere,
    rosenbrock_2d,
    rosenbrock_2d_derivative,
    rosenbrock_2d_hessian,
)


class CostOnly(Problem):
    name = "cost_only"

    def cost(self, p):
        return float(np.sum(p))

    def gradient(self, p):
        return np.ones_like(p)


def test_rosenbrock_minimum_and_reference_value():
    assert rosenbrock_2d([1.0, 1.0]) == 0.0
    np.testing.assert_allclose(rosenbrock_2d_derivative([1.0, 1.0]), [0.0, 0.0])
    assert rosenbrock_2d([1.0, -2.0], 1.0, 100.0) == pytest.approx(900.0)


def test_rosenbrock_derivatives_match_finite_differences():
    x = np.array([-0.7, 1.3])
    f = lambda p: rosenbrock_2d(p, 1.0, 100.0)

    np.testing.assert_allclose(
        rosenbrock_2d_derivative(x), numerical_gradient(f, x), rtol=1e-5
    )
    np.testing.assert_allclose(
        rosenbrock_2d_hessian(x), numerical_hessian(f, x), rtol=1e-3, atol=1e-2
    )


def test_sphere_problem_any_dimension():
    problem = Sphere()
    x = np.array([1.0, -2.0, 3.0])
    assert problem.cost(x) == pytest.approx(14.0)
    np.testing.assert_allclose(problem.gradient(x), [2.0, -4.0, 6.0])
    np.testing.assert_allclose(problem.hessian(x), 2.0 * np.eye(3))


def test_function_problem_falls_back_to_numerical_derivatives():
    problem = FunctionProblem(lambda x: float((x[0] - 4.0) ** 2 + 3.0 * x[1] ** 2))
    x = np.array([1.0, 2.0])

    np.testing.assert_allclose(problem.gradient(x), [-6.0, 12.0], rtol=1e-6)
    np.testing.assert_allclose(problem.hessian(x), [[2.0, 0.0], [0.0, 6.0]], atol=1e-4)
    assert problem.has_hessian


def test_hessian_is_optional_capability():
    problem = CostOnly()
    assert not problem.has_hessian
    assert Rosenbrock().has_hessian
    with pytest.raises(NotImplementedError):
        problem.hessian(np.zeros(2))


def test_gradient_does_not_alias_point():
    problem = Sphere()
    x = np.array([1.0, 2.0])
    grad = problem.gradient(x)
    grad[0] = 100.0
    np.testing.assert_array_equal(x, [1.0, 2.0])


@pytest.mark.parametrize("problem", [Rosenbrock(), Sphere()])
def test_evaluations_are_bit_identical(problem):
    x = np.array([0.3141592653589793, -1.2345678901234567])
    assert problem.cost(x) == problem.cost(x.copy())
    assert np.array_equal(problem.gradient(x), problem.gradient(x.copy()))


def test_registry_entries_are_minimized_at_declared_point():
    for key, target in FUNCTIONS.items():
        problem = target.factory()
        assert problem.cost(target.minimizer) == pytest.approx(0.0), key
        np.testing.assert_allclose(problem.gradient(target.minimizer), 0.0, atol=1e-6)
