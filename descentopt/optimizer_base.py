"""
optimizer_base.py

Базовий клас розв'язувача та результат одного кроку.

Ідея:
    - Optimizer володіє лічильниками обчислень і перевіряє кожне обчислення
      задачі: розмірність градієнта / Гессіана та скінченність значень;
    - конкретний метод (SteepestDescent) реалізує initialize(), step() та
      check_convergence(), а Executor керує циклом.

Життєвий цикл одного запуску:
    opt.reset(problem)
    opt.initialize(state)            # INIT -> ITERATING
    while opt.check_convergence(state) is None:
        res = opt.step(state)        # StepResult
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import numpy as np

from .errors import DimensionMismatch, EvaluationError
from .functions import ArrayLike, Problem
from .vector_ops import all_finite

if TYPE_CHECKING:
    from .state import IterationState


# ---------------------------------------------------------------------------
# Результат одного кроку методу оптимізації
# ---------------------------------------------------------------------------

@dataclass
class StepResult:
    """
    Результат одного кроку оптимізації.

    Атрибути:
        x_new       - нова точка x_{k+1}
        f_new       - f(x_{k+1})
        grad_new    - ∇f(x_{k+1})
        step_length - крок α_k, знайдений лінійним пошуком
        step_norm   - норма кроку ||x_{k+1} - x_k||
        meta        - додаткова інформація (напрямок, лінійний пошук, ...)
    """
    x_new: np.ndarray
    f_new: float
    grad_new: np.ndarray
    step_length: float
    step_norm: float
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Базовий клас Optimizer
# ---------------------------------------------------------------------------

class Optimizer(ABC):
    """
    Абстрактний базовий клас розв'язувачів.

    Прапорці requires_gradient / requires_hessian описують, які можливості
    задачі потрібні методу.
    """

    requires_gradient: bool = False
    requires_hessian: bool = False

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        self.options: Dict[str, Any] = options or {}
        self.name: str = name or self.__class__.__name__
        self.problem: Optional[Problem] = None

        # Лічильники викликів (потрапляють у OptimizationResult)
        self.func_evals: int = 0
        self.grad_evals: int = 0
        self.hess_evals: int = 0

    # ------------------------------------------------------------------
    # Обчислення f, ∇f, H із підрахунком викликів та перевірками
    # ------------------------------------------------------------------

    def _require_problem(self) -> Problem:
        if self.problem is None:
            raise RuntimeError(
                f"{self.name}: задача не прив'язана, викличте reset(problem)."
            )
        return self.problem

    def eval_cost(self, x: ArrayLike) -> float:
        """Обчислити f(x); нескінченне значення -> EvaluationError."""
        problem = self._require_problem()
        self.func_evals += 1
        value = float(problem.cost(x))
        if not all_finite(value):
            raise EvaluationError(x, f"f(x) = {value} не є скінченним у точці {list(x)}.")
        return value

    def eval_grad(self, x: ArrayLike) -> np.ndarray:
        """Обчислити ∇f(x); перевіряє розмірність та скінченність."""
        problem = self._require_problem()
        self.grad_evals += 1
        grad = np.array(problem.gradient(x), dtype=float)
        expected = int(np.shape(x)[0])
        if grad.ndim != 1 or grad.shape[0] != expected:
            raise DimensionMismatch(
                expected=expected,
                actual=int(grad.shape[0]) if grad.ndim == 1 else grad.size,
                message=(
                    f"Градієнт має розмірність {grad.shape}, "
                    f"а точка - ({expected},)."
                ),
            )
        if not all_finite(grad):
            raise EvaluationError(x, f"∇f(x) містить нескінченні значення у точці {list(x)}.")
        return grad

    def eval_hess(self, x: ArrayLike) -> np.ndarray:
        """Обчислити H(x); очікується матриця N×N."""
        problem = self._require_problem()
        self.hess_evals += 1
        hess = np.array(problem.hessian(x), dtype=float)
        n = int(np.shape(x)[0])
        if hess.shape != (n, n):
            raise DimensionMismatch(
                expected=n,
                actual=hess.shape[0] if hess.ndim else 0,
                message=f"Гессіан має форму {hess.shape}, очікувалось ({n}, {n}).",
            )
        if not all_finite(hess):
            raise EvaluationError(x, f"H(x) містить нескінченні значення у точці {list(x)}.")
        return hess

    def eval_cost_grad(self, x: ArrayLike) -> Tuple[float, np.ndarray]:
        """Пара (f(x), ∇f(x)) - саме так її споживає лінійний пошук."""
        return self.eval_cost(x), self.eval_grad(x)

    # ------------------------------------------------------------------
    # Життєвий цикл
    # ------------------------------------------------------------------

    def reset(self, problem: Problem) -> None:
        """
        Прив'язати задачу та скинути лічильники перед новим запуском.
        Викликається Executor-ом перед initialize().
        """
        self.problem = problem
        self.func_evals = 0
        self.grad_evals = 0
        self.hess_evals = 0

    @abstractmethod
    def initialize(self, state: "IterationState") -> None:
        """Перехід INIT -> ITERATING: обчислити f та ∇f у початковій точці."""
        raise NotImplementedError

    @abstractmethod
    def step(self, state: "IterationState") -> StepResult:
        """Один крок методу з поточної точки state.param."""
        raise NotImplementedError

    @abstractmethod
    def check_convergence(self, state: "IterationState") -> Optional[str]:
        """Назва виконаного критерію збіжності або None."""
        raise NotImplementedError


__all__ = [
    "StepResult",
    "Optimizer",
]
