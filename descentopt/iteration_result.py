"""
iteration_result.py

Запис діагностики однієї ітерації. Executor додає такі записи до історії
запуску (тільки додавання, порядок = номер ітерації).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np


@dataclass
class IterationResult:
    """
    Опис однієї ітерації оптимізаційного процесу.

    Атрибути:
        index       - номер ітерації (0 - початкова точка)
        x           - x_k
        cost        - f(x_k)
        grad_norm   - ||∇f(x_k)||
        step_length - α_{k-1}, крок лінійного пошуку (для k=0 = 0.0)
        step_norm   - ||x_k - x_{k-1}|| (для k=0 = 0.0)
        meta        - довільна додаткова інформація
    """
    index: int
    x: np.ndarray
    cost: float
    grad_norm: float
    step_length: float = 0.0
    step_norm: float = 0.0
    meta: Dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> Dict[str, Any]:
        return {
            "k": self.index,
            "x": self.x.tolist(),
            "cost": self.cost,
            "grad_norm": self.grad_norm,
            "step_length": self.step_length,
            "step_norm": self.step_norm,
        }


__all__ = [
    "IterationResult",
]
