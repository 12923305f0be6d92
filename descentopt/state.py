"""
state.py

Конфігурація запуску та змінний стан ітераційного процесу.

    - RunConfig       - незмінна конфігурація {param, max_iters, target_cost};
    - SolverStatus    - стани автомата розв'язувача;
    - IterationState  - стан одного запуску, яким володіє лише Executor.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .vector_ops import as_vector, check_dimensions, norm


class SolverStatus(Enum):
    INIT = "init"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITER_EXCEEDED = "max_iter_exceeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self not in (SolverStatus.INIT, SolverStatus.ITERATING)


class TerminationReason(Enum):
    CONVERGED = "converged"
    MAX_ITER_EXCEEDED = "max_iter_exceeded"
    FAILED = "failed"

    @classmethod
    def from_status(cls, status: SolverStatus) -> "TerminationReason":
        if not status.is_terminal:
            raise ValueError(f"Стан {status.value!r} не є термінальним.")
        return cls(status.value)


# ---------------------------------------------------------------------------
# Конфігурація запуску
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class RunConfig:
    """
    Конфігурація одного запуску оптимізації.

    Атрибути:
        param       - початкова точка x0 (обов'язкова для найшвидшого спуску;
                      перевіряється розв'язувачем)
        max_iters   - максимальна кількість ітерацій (default: sys.maxsize,
                      тобто практично без обмеження)
        target_cost - зупинитися, коли f(x_k) <= target_cost (опційно)
    """
    param: Optional[np.ndarray] = None
    max_iters: int = sys.maxsize
    target_cost: Optional[float] = None

    def __post_init__(self) -> None:
        if self.param is not None:
            x0 = as_vector(self.param)
            x0.flags.writeable = False
            object.__setattr__(self, "param", x0)

        if isinstance(self.max_iters, bool) or not isinstance(self.max_iters, (int, np.integer)):
            raise TypeError(
                f"RunConfig: max_iters повинен бути цілим, отримано {type(self.max_iters).__name__}."
            )
        if self.max_iters < 1:
            raise ValueError(f"RunConfig: max_iters повинен бути > 0, отримано {self.max_iters}.")
        object.__setattr__(self, "max_iters", int(self.max_iters))

        if self.target_cost is not None:
            target = float(self.target_cost)
            if math.isnan(target):
                raise ValueError("RunConfig: target_cost не може бути NaN.")
            object.__setattr__(self, "target_cost", target)


# ---------------------------------------------------------------------------
# Стан ітераційного процесу
# ---------------------------------------------------------------------------

@dataclass
class IterationState:
    """
    Змінний стан одного запуску.

    Створюється Executor-ом на старті, змінюється раз за ітерацію,
    після завершення лише читається.
    """
    config: RunConfig
    param: Optional[np.ndarray] = None
    cost: float = math.inf
    grad: Optional[np.ndarray] = None
    grad_norm: float = math.inf
    iteration: int = 0
    step_length: float = 0.0

    best_param: Optional[np.ndarray] = None
    best_cost: float = math.inf
    best_iteration: int = 0

    status: SolverStatus = SolverStatus.INIT
    stopped_by: Optional[str] = None

    @property
    def dim(self) -> int:
        return 0 if self.param is None else int(self.param.shape[0])

    def start(self, param: np.ndarray, cost: float, grad: np.ndarray) -> None:
        """Записати початкову точку та перейти в ITERATING."""
        self.param = as_vector(param)
        self.cost = float(cost)
        self.grad = as_vector(grad)
        check_dimensions(self.dim, self.grad)
        self.grad_norm = norm(self.grad)
        self.iteration = 0
        self.step_length = 0.0
        self.best_param = self.param.copy()
        self.best_cost = self.cost
        self.best_iteration = 0
        self.status = SolverStatus.ITERATING

    def advance(
        self,
        param: np.ndarray,
        cost: float,
        grad: np.ndarray,
        step_length: float,
    ) -> None:
        """Прийняти нову точку: лічильник +1, оновити найкраще значення."""
        if self.status is not SolverStatus.ITERATING:
            raise RuntimeError(f"advance() у стані {self.status.value!r}.")
        new_param = as_vector(param)
        new_grad = as_vector(grad)
        check_dimensions(self.dim, new_param, new_grad)

        self.param = new_param
        self.cost = float(cost)
        self.grad = new_grad
        self.grad_norm = norm(new_grad)
        self.step_length = float(step_length)
        self.iteration += 1

        if self.cost <= self.best_cost:
            self.best_param = self.param.copy()
            self.best_cost = self.cost
            self.best_iteration = self.iteration

    def finish(self, status: SolverStatus, stopped_by: str) -> None:
        if not status.is_terminal:
            raise ValueError(f"Стан {status.value!r} не є термінальним.")
        self.status = status
        self.stopped_by = stopped_by

    @property
    def max_iters_reached(self) -> bool:
        return self.iteration >= self.config.max_iters


__all__ = [
    "SolverStatus",
    "TerminationReason",
    "RunConfig",
    "IterationState",
]
