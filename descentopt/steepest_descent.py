"""
steepest_descent.py

Метод найшвидшого спуску (Коші) з лінійним пошуком за умовами Вольфе.

Ідея:
    x_{k+1} = x_k + α_k * p_k,
    де p_k = -∇f(x_k),
        α_k знаходить MoreThuenteLineSearch (сильні умови Вольфе).

Автомат станів:
    INIT --initialize()--> ITERATING --> CONVERGED | MAX_ITER_EXCEEDED | FAILED
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .errors import MissingInitialParam
from .line_search import MoreThuenteLineSearch
from .optimizer_base import Optimizer, StepResult
from .state import IterationState
from .vector_ops import as_vector, check_dimensions, dot, norm, scale

logger = logging.getLogger("descentopt")


class SteepestDescent(Optimizer):
    """
    Метод найшвидшого спуску.

    Особливості:
        - напрямок p_k = -∇f(x_k), обчислюється заново на кожній ітерації;
        - крок α_k - з лінійного пошуку (за замовчуванням MoreThuenteLineSearch
          з c1=1e-4, c2=0.9, α_0=1.0, не більше 100 проб);
        - f та ∇f у новій точці беруться з результату лінійного пошуку
          (вони обчислені в тій самій точці x_k + α_k p_k);
        - Гессіан не використовується.

    Налаштування (options):
        grad_tol : поріг норми градієнта для збіжності (default: 1e-8)
    """

    requires_gradient: bool = True
    requires_hessian: bool = False

    def __init__(
        self,
        line_search: Optional[MoreThuenteLineSearch] = None,
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(options=options, name=name or "Steepest descent")
        self.line_search = line_search if line_search is not None else MoreThuenteLineSearch()

        grad_tol = float(self.options.get("grad_tol", 1e-8))
        if grad_tol < 0.0:
            raise ValueError("SteepestDescent: grad_tol повинен бути >= 0.")
        self.grad_tol = grad_tol

    def initialize(self, state: IterationState) -> None:
        """
        INIT -> ITERATING. Потрібна початкова точка з конфігурації.
        """
        if state.config.param is None:
            raise MissingInitialParam()

        x0 = as_vector(state.config.param)
        f0 = self.eval_cost(x0)
        g0 = self.eval_grad(x0)
        state.start(x0, f0, g0)
        logger.debug(
            "%s: x0=%s, f0=%g, |g0|=%g", self.name, x0.tolist(), f0, state.grad_norm
        )

    def check_convergence(self, state: IterationState) -> Optional[str]:
        target = state.config.target_cost
        if target is not None and state.cost <= target:
            return "target_cost"
        if state.grad_norm < self.grad_tol:
            return "grad_tol"
        return None

    def step(self, state: IterationState) -> StepResult:
        """
        Один крок із точки state.param.
        """
        x_k = state.param
        g_k = state.grad
        n = state.dim

        # Напрямок спуску
        p_k = scale(g_k, -1.0)
        check_dimensions(n, x_k, g_k, p_k)

        ls_result = self.line_search.search(
            self.eval_cost_grad,
            x_k,
            p_k,
            state.cost,
            g_k,
        )

        x_new = ls_result.point
        check_dimensions(n, x_new, ls_result.gradient)

        meta = {
            "direction": p_k,
            "directional_derivative": dot(g_k, p_k),
            "line_search_method": self.line_search.name,
            "line_search_iterations": ls_result.iterations,
            "line_search_evals": ls_result.func_evals,
            "line_search_meta": ls_result.meta,
        }

        return StepResult(
            x_new=x_new,
            f_new=ls_result.cost,
            grad_new=ls_result.gradient,
            step_length=ls_result.alpha,
            step_norm=norm(x_new - x_k),
            meta=meta,
        )


__all__ = [
    "SteepestDescent",
]
