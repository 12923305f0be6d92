"""
functions.py

Інтерфейс задачі оптимізації (Problem) та чисельні похідні.

Задача - це набір можливостей {cost, gradient, hessian (опційно)} над
точкою x: numpy.ndarray форми (N,).

    - Problem          - абстрактний базовий клас; конкретна задача
                         переозначає cost() і gradient(), за потреби hessian();
    - FunctionProblem  - задача поверх звичайних функцій f, ∇f, H;
                         якщо ∇f або H не передані - центральні різниці.

Обчислення мають бути чистими: два виклики в тій самій точці дають
побітово однакові результати.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

ArrayLike = np.ndarray
ScalarFunction = Callable[[ArrayLike], float]
VectorFunction = Callable[[ArrayLike], ArrayLike]
MatrixFunction = Callable[[ArrayLike], ArrayLike]


# ---------------------------------------------------------------------------
# Чисельні похідні (центральні різниці)
# ---------------------------------------------------------------------------

def numerical_gradient(
    func: ScalarFunction,
    x: ArrayLike,
    h: float = 1e-6,
) -> ArrayLike:
    """
    Чисельний градієнт за центральною різницею.

    ∂f/∂x_i ≈ (f(x + h e_i) - f(x - h e_i)) / (2h)
    """
    x = np.asarray(x, dtype=float)
    grad = np.zeros_like(x, dtype=float)

    for i in range(len(x)):
        x_fwd = x.copy()
        x_bwd = x.copy()
        x_fwd[i] += h
        x_bwd[i] -= h
        grad[i] = (func(x_fwd) - func(x_bwd)) / (2.0 * h)

    return grad


def numerical_hessian(
    func: ScalarFunction,
    x: ArrayLike,
    h: float = 1e-4,
) -> ArrayLike:
    """
    Чисельний Гессіан за центральною різницею.

    Діагональ:
        ∂²f/∂x_i² ≈ (f(x+h e_i) - 2f(x) + f(x-h e_i)) / h²

    Поза діагоналлю (i != j):
        ∂²f/∂x_i∂x_j ≈
            ( f(x_i+h, x_j+h) - f(x_i+h, x_j-h)
            - f(x_i-h, x_j+h) + f(x_i-h, x_j-h) ) / (4 h²)
    """
    x = np.asarray(x, dtype=float)
    n = len(x)
    H = np.zeros((n, n), dtype=float)

    f_x = func(x)

    for i in range(n):
        x_fwd = x.copy()
        x_bwd = x.copy()
        x_fwd[i] += h
        x_bwd[i] -= h
        H[i, i] = (func(x_fwd) - 2.0 * f_x + func(x_bwd)) / (h ** 2)

    for i in range(n):
        for j in range(i + 1, n):
            x_pp = x.copy()
            x_pm = x.copy()
            x_mp = x.copy()
            x_mm = x.copy()

            x_pp[i] += h; x_pp[j] += h
            x_pm[i] += h; x_pm[j] -= h
            x_mp[i] -= h; x_mp[j] += h
            x_mm[i] -= h; x_mm[j] -= h

            value = (func(x_pp) - func(x_pm) - func(x_mp) + func(x_mm)) / (4.0 * h ** 2)
            H[i, j] = H[j, i] = value

    return H


# ---------------------------------------------------------------------------
# Інтерфейс задачі
# ---------------------------------------------------------------------------

class Problem(ABC):
    """
    Абстрактна задача мінімізації.

    Обов'язкові можливості: cost(), gradient().
    Опційна: hessian() - потрібна методам типу Ньютона, найшвидший
    спуск її не викликає.
    """

    name: str = "problem"

    @abstractmethod
    def cost(self, p: ArrayLike) -> float:
        """Значення цільової функції f(p)."""
        raise NotImplementedError

    @abstractmethod
    def gradient(self, p: ArrayLike) -> ArrayLike:
        """Градієнт ∇f(p), та сама розмірність, що й p."""
        raise NotImplementedError

    def hessian(self, p: ArrayLike) -> ArrayLike:
        """Гессіан H(p) розміру N×N (за замовчуванням не підтримується)."""
        raise NotImplementedError(
            f"Задача {self.name!r} не надає Гессіан."
        )

    @property
    def has_hessian(self) -> bool:
        return type(self).hessian is not Problem.hessian


class FunctionProblem(Problem):
    """
    Задача, задана звичайними функціями.

    Parameters
    ----------
    func : ScalarFunction
        Цільова функція f(x).
    grad : Optional[VectorFunction]
        Аналітичний градієнт; якщо None - numerical_gradient.
    hess : Optional[MatrixFunction]
        Аналітичний Гессіан; якщо None - numerical_hessian.
    name : Optional[str]
        Назва задачі для логів / таблиць.
    """

    def __init__(
        self,
        func: ScalarFunction,
        grad: Optional[VectorFunction] = None,
        hess: Optional[MatrixFunction] = None,
        name: Optional[str] = None,
    ) -> None:
        self.func = func
        self._grad = grad
        self._hess = hess
        self.name = name or getattr(func, "__name__", "function")

    def cost(self, p: ArrayLike) -> float:
        return float(self.func(np.asarray(p, dtype=float)))

    def gradient(self, p: ArrayLike) -> ArrayLike:
        x_arr = np.asarray(p, dtype=float)
        if self._grad is not None:
            return np.array(self._grad(x_arr), dtype=float)
        # fallback — чисельний градієнт
        return numerical_gradient(self.func, x_arr)

    def hessian(self, p: ArrayLike) -> ArrayLike:
        x_arr = np.asarray(p, dtype=float)
        if self._hess is not None:
            return np.array(self._hess(x_arr), dtype=float)
        return numerical_hessian(self.func, x_arr)


__all__ = [
    "ArrayLike",
    "ScalarFunction",
    "VectorFunction",
    "MatrixFunction",
    "numerical_gradient",
    "numerical_hessian",
    "Problem",
    "FunctionProblem",
]
