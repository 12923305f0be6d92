"""
engine.py

Executor - ітераційний двигун для запуску розв'язувача (Optimizer) на задачі.

Функціонал:
    - приймає задачу, розв'язувач та RunConfig {param, max_iters, target_cost};
    - створює окремий IterationState на кожен запуск;
    - доводить автомат розв'язувача до термінального стану;
    - веде історію ітерацій (cost, ||∇f||, α) та найкращу точку;
    - рахує виклики f, ∇f, H;
    - фіксує причину зупинки;
    - підтримує callback на кожній ітерації.

Помилки:
    - MissingInitialParam, DimensionMismatch, EvaluationError у початковій
      точці - піднімаються до виклику, цикл не стартує;
    - LineSearchFailure / EvaluationError під час ітерацій (останню піднімає
      step() розв'язувача, що обчислює f поза лінійним пошуком) - запуск
      завершується зі статусом FAILED, помилка зберігається в result.error.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .errors import EvaluationError, LineSearchFailure, OptimizationError
from .functions import Problem
from .iteration_result import IterationResult
from .optimizer_base import Optimizer
from .state import IterationState, RunConfig, SolverStatus, TerminationReason
from .vector_ops import check_dimensions

logger = logging.getLogger("descentopt")


@dataclass
class OptimizationResult:
    """
    Підсумок одного запуску оптимізації.

    Атрибути:
        method_name        - назва розв'язувача (Optimizer.name)
        problem_name       - назва задачі
        best_param         - найкраща знайдена точка
        best_cost          - f(best_param), поточний мінімум за запуск
        best_iteration     - ітерація, на якій знайдено best_param
        param, cost        - остання прийнята точка та f у ній
        grad_norm          - ||∇f|| в останній точці
        iterations         - кількість виконаних ітерацій (без k=0)
        termination_reason - CONVERGED / MAX_ITER_EXCEEDED / FAILED
        stopped_by         - деталізація ("target_cost", "grad_tol",
                             "max_iters", "line_search", "evaluation")
        history            - список IterationResult (k = 0, 1, ...)
        func_evals, grad_evals, hess_evals - лічильники викликів
        elapsed            - час роботи, с
        error              - виняток, що зупинив запуск (лише для FAILED)
    """
    method_name: str
    problem_name: str
    best_param: np.ndarray
    best_cost: float
    best_iteration: int
    param: np.ndarray
    cost: float
    grad_norm: float
    iterations: int
    termination_reason: TerminationReason
    stopped_by: str
    history: List[IterationResult] = field(default_factory=list)
    func_evals: int = 0
    grad_evals: int = 0
    hess_evals: int = 0
    elapsed: float = 0.0
    error: Optional[OptimizationError] = None

    @property
    def converged(self) -> bool:
        return self.termination_reason is TerminationReason.CONVERGED

    @property
    def failed(self) -> bool:
        return self.termination_reason is TerminationReason.FAILED

    def raise_for_failure(self) -> "OptimizationResult":
        """Підняти збережену помилку, якщо запуск завершився FAILED."""
        if self.error is not None:
            raise self.error
        return self

    def history_rows(self) -> List[Dict[str, Any]]:
        return [rec.as_row() for rec in self.history]

    def __str__(self) -> str:
        lines = [
            f"OptimizationResult ({self.method_name} / {self.problem_name}):",
            f"    param (best):  {self.best_param.tolist()}",
            f"    cost (best):   {self.best_cost:.10g}",
            f"    iters (best):  {self.best_iteration}",
            f"    param:         {self.param.tolist()}",
            f"    cost:          {self.cost:.10g}",
            f"    grad norm:     {self.grad_norm:.6g}",
            f"    iterations:    {self.iterations}",
            f"    termination:   {self.termination_reason.value} ({self.stopped_by})",
            f"    evaluations:   cost={self.func_evals}, gradient={self.grad_evals}, "
            f"hessian={self.hess_evals}",
            f"    time:          {self.elapsed:.4f} s",
        ]
        if self.error is not None:
            lines.append(f"    error:         {self.error}")
        return "\n".join(lines)


# Тип callback'а для логів / графіків
IterationCallback = Callable[[IterationResult], None]


class Executor:
    """
    Запускає Optimizer на Problem з конфігурацією RunConfig.

    Використання:
        res = Executor(problem, SteepestDescent(), RunConfig(param=[1.0, -2.0],
                       max_iters=1000, target_cost=0.0)).run()
    """

    def __init__(
        self,
        problem: Problem,
        solver: Optimizer,
        config: Optional[RunConfig] = None,
    ) -> None:
        self.problem = problem
        self.solver = solver
        self.config = config if config is not None else RunConfig()

    def run(self, callback: Optional[IterationCallback] = None) -> OptimizationResult:
        """
        Запустити процес оптимізації до термінального стану.
        """
        solver = self.solver
        config = self.config
        problem_name = getattr(self.problem, "name", type(self.problem).__name__)

        state = IterationState(config=config)
        solver.reset(self.problem)
        started = time.perf_counter()

        logger.info(
            "Start %s on %s: max_iters=%d, target_cost=%s",
            solver.name, problem_name, config.max_iters, config.target_cost,
        )

        # INIT -> ITERATING (помилки тут не перехоплюються)
        solver.initialize(state)
        n = state.dim

        history: List[IterationResult] = []
        rec0 = IterationResult(
            index=0,
            x=state.param.copy(),
            cost=state.cost,
            grad_norm=state.grad_norm,
            meta={"initial": True, "best_cost": state.best_cost},
        )
        history.append(rec0)
        if callback is not None:
            callback(rec0)

        error: Optional[OptimizationError] = None

        while True:
            criterion = solver.check_convergence(state)
            if criterion is not None:
                state.finish(SolverStatus.CONVERGED, criterion)
                break

            if state.max_iters_reached:
                state.finish(SolverStatus.MAX_ITER_EXCEEDED, "max_iters")
                break

            try:
                step_res = solver.step(state)
            except LineSearchFailure as exc:
                error = exc
                state.finish(SolverStatus.FAILED, "line_search")
                break
            except EvaluationError as exc:
                error = exc
                state.finish(SolverStatus.FAILED, "evaluation")
                break

            state.advance(step_res.x_new, step_res.f_new, step_res.grad_new, step_res.step_length)
            check_dimensions(n, state.param, state.grad)

            rec = IterationResult(
                index=state.iteration,
                x=state.param.copy(),
                cost=state.cost,
                grad_norm=state.grad_norm,
                step_length=state.step_length,
                step_norm=step_res.step_norm,
                meta={**step_res.meta, "best_cost": state.best_cost},
            )
            history.append(rec)
            if callback is not None:
                callback(rec)

            logger.debug(
                "k=%d cost=%.10g |g|=%.4g alpha=%.4g",
                state.iteration, state.cost, state.grad_norm, state.step_length,
            )

        elapsed = time.perf_counter() - started
        reason = TerminationReason.from_status(state.status)

        if error is not None:
            logger.warning(
                "%s failed after %d iterations: %s", solver.name, state.iteration, error
            )
        else:
            logger.info(
                "%s finished: %s (%s) after %d iterations, best cost=%.10g",
                solver.name, reason.value, state.stopped_by, state.iteration, state.best_cost,
            )

        return OptimizationResult(
            method_name=solver.name,
            problem_name=problem_name,
            best_param=state.best_param.copy(),
            best_cost=state.best_cost,
            best_iteration=state.best_iteration,
            param=state.param.copy(),
            cost=state.cost,
            grad_norm=state.grad_norm,
            iterations=state.iteration,
            termination_reason=reason,
            stopped_by=state.stopped_by,
            history=history,
            func_evals=solver.func_evals,
            grad_evals=solver.grad_evals,
            hess_evals=solver.hess_evals,
            elapsed=elapsed,
            error=error,
        )


__all__ = [
    "OptimizationResult",
    "IterationCallback",
    "Executor",
]
