"""
results_summary.py

Зведена таблиця результатів кількох запусків оптимізації
(наприклад, різні початкові точки або налаштування лінійного пошуку).

Працює поверх OptimizationResult:
    - method_name, problem_name
    - best_param, best_cost
    - iterations
    - func_evals, grad_evals, hess_evals
    - termination_reason, stopped_by
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .engine import OptimizationResult


@dataclass
class ResultsSummary:
    """
    Зведення результатів кількох запусків.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run(res_a)
        summary.add_run(res_b)
        rows = summary.as_rows()  # для pandas / CSV
    """
    runs: List[OptimizationResult] = field(default_factory=list)

    def add_run(self, run: OptimizationResult) -> None:
        """Додати результат одного запуску до зведення."""
        self.runs.append(run)

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Список dict-рядків для pandas.DataFrame або CSV.

        Поля рядка:
            method, problem, x_star, f_star, n_iter,
            func_evals, grad_evals, hess_evals, termination, stopped_by
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            rows.append(
                {
                    "method": run.method_name,
                    "problem": run.problem_name,
                    "x_star": run.best_param.tolist(),
                    "f_star": float(run.best_cost),
                    "n_iter": int(run.iterations),
                    "func_evals": int(run.func_evals),
                    "grad_evals": int(run.grad_evals),
                    "hess_evals": int(run.hess_evals),
                    "termination": run.termination_reason.value,
                    "stopped_by": run.stopped_by,
                }
            )

        return rows

    def best_by_cost(self) -> Optional[OptimizationResult]:
        """
        Запуск з найменшим best_cost серед запусків, що не завершились FAILED.
        Порожнє зведення -> None.
        """
        best_run: Optional[OptimizationResult] = None

        for run in self.runs:
            if run.failed:
                continue
            if best_run is None or run.best_cost < best_run.best_cost:
                best_run = run

        return best_run

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas (extra "dataframe").
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


__all__ = ["ResultsSummary"]
