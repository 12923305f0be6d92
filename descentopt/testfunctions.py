"""
testfunctions.py

Тестові цільові функції з аналітичними градієнтами та Гессіанами.

    - rosenbrock_2d(x, a, b)  = (a - x1)^2 + b (x2 - x1^2)^2
    - sphere(x)               = |x|^2

Для кожної функції є клас-задача (Rosenbrock, Sphere) та запис у реєстрі
FUNCTIONS для зручного вибору за ключем.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from .functions import ArrayLike, FunctionProblem, Problem


# ---------------------------------------------------------------------------
# Функція Розенброка (2-D)
# ---------------------------------------------------------------------------

def rosenbrock_2d(x: ArrayLike, a: float = 1.0, b: float = 100.0) -> float:
    """
    f(x1, x2) = (a - x1)^2 + b * (x2 - x1^2)^2
    Мінімум f = 0 у точці (a, a^2).
    """
    x1, x2 = np.asarray(x, dtype=float)
    return float((a - x1) ** 2 + b * (x2 - x1 ** 2) ** 2)


def rosenbrock_2d_derivative(x: ArrayLike, a: float = 1.0, b: float = 100.0) -> ArrayLike:
    x1, x2 = np.asarray(x, dtype=float)
    return np.array(
        [
            -2.0 * (a - x1) - 4.0 * b * x1 * (x2 - x1 ** 2),
            2.0 * b * (x2 - x1 ** 2),
        ],
        dtype=float,
    )


def rosenbrock_2d_hessian(x: ArrayLike, a: float = 1.0, b: float = 100.0) -> ArrayLike:
    x1, x2 = np.asarray(x, dtype=float)
    h11 = 2.0 - 4.0 * b * x2 + 12.0 * b * x1 ** 2
    h12 = -4.0 * b * x1
    return np.array([[h11, h12], [h12, 2.0 * b]], dtype=float)


# ---------------------------------------------------------------------------
# Сфера |x|^2 (будь-яка розмірність)
# ---------------------------------------------------------------------------

def sphere(x: ArrayLike) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x))


def sphere_derivative(x: ArrayLike) -> ArrayLike:
    return 2.0 * np.asarray(x, dtype=float)


def sphere_hessian(x: ArrayLike) -> ArrayLike:
    n = np.asarray(x).shape[0]
    return 2.0 * np.eye(n, dtype=float)


# ---------------------------------------------------------------------------
# Класи-задачі
# ---------------------------------------------------------------------------

class Rosenbrock(Problem):
    """Функція Розенброка з параметрами a, b."""

    def __init__(self, a: float = 1.0, b: float = 100.0) -> None:
        self.a = float(a)
        self.b = float(b)
        self.name = f"rosenbrock_2d(a={self.a:g}, b={self.b:g})"

    def cost(self, p: ArrayLike) -> float:
        return rosenbrock_2d(p, self.a, self.b)

    def gradient(self, p: ArrayLike) -> ArrayLike:
        return rosenbrock_2d_derivative(p, self.a, self.b)

    def hessian(self, p: ArrayLike) -> ArrayLike:
        return rosenbrock_2d_hessian(p, self.a, self.b)


class Sphere(Problem):
    """Опукла квадратична функція f(x) = |x|^2."""

    name = "sphere"

    def cost(self, p: ArrayLike) -> float:
        return sphere(p)

    def gradient(self, p: ArrayLike) -> ArrayLike:
        return sphere_derivative(p)

    def hessian(self, p: ArrayLike) -> ArrayLike:
        return sphere_hessian(p)


# ---------------------------------------------------------------------------
# Реєстр функцій
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TargetFunction:
    key: str
    name: str
    factory: Callable[[], Problem]
    minimizer: ArrayLike


FUNCTIONS: Dict[str, TargetFunction] = {
    "rosenbrock": TargetFunction(
        key="rosenbrock",
        name="f(x1, x2) = (1 - x1)^2 + 100 * (x2 - x1^2)^2",
        factory=Rosenbrock,
        minimizer=np.array([1.0, 1.0]),
    ),
    "sphere": TargetFunction(
        key="sphere",
        name="f(x1, x2) = x1^2 + x2^2",
        factory=Sphere,
        minimizer=np.array([0.0, 0.0]),
    ),
    "shifted_quadratic": TargetFunction(
        key="shifted_quadratic",
        name="f(x1, x2) = (x1 - 4)^2 + (x2 - 4)^2",
        factory=lambda: FunctionProblem(
            lambda x: float((x[0] - 4.0) ** 2 + (x[1] - 4.0) ** 2),
            grad=lambda x: np.array([2.0 * (x[0] - 4.0), 2.0 * (x[1] - 4.0)]),
            name="shifted_quadratic",
        ),
        minimizer=np.array([4.0, 4.0]),
    ),
}


__all__ = [
    "rosenbrock_2d",
    "rosenbrock_2d_derivative",
    "rosenbrock_2d_hessian",
    "sphere",
    "sphere_derivative",
    "sphere_hessian",
    "Rosenbrock",
    "Sphere",
    "TargetFunction",
    "FUNCTIONS",
]
