"""
errors.py

Типи помилок рушія оптимізації.

Ієрархія:
    OptimizationError
        ├── DimensionMismatch    - вектори різної довжини (помилка викликача)
        ├── MissingInitialParam  - не задано початкову точку
        ├── EvaluationError      - f(x) або ∇f(x) не скінченні / x поза областю
        └── LineSearchFailure    - лінійний пошук не знайшов допустимого кроку
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np


class OptimizationError(Exception):
    """Базовий клас для помилок рушія оптимізації."""


class DimensionMismatch(OptimizationError):
    """Розмірності векторів не узгоджені."""

    def __init__(
        self,
        expected: int,
        actual: int,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = (
                f"Невідповідність розмірностей: очікувалось {expected}, "
                f"отримано {actual}."
            )
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class MissingInitialParam(OptimizationError):
    """Розв'язувач запущено без початкової точки."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "Початкова точка (param) не задана в конфігурації запуску."
        )


class EvaluationError(OptimizationError):
    """
    Задача повернула нескінченне / NaN значення або точка поза областю.

    Атрибути:
        point - точка, у якій обчислення не вдалося (копія)
    """

    def __init__(self, point, message: Optional[str] = None) -> None:
        self.point = None if point is None else np.array(point, dtype=float, copy=True)
        if message is None:
            message = f"Некоректне обчислення у точці {self.point!r}."
        super().__init__(message)


class LineSearchFailure(OptimizationError):
    """
    Лінійний пошук не знайшов кроку, що задовольняє сильні умови Вольфе.

    Атрибути:
        bracket    - остання дужка (α_lo, α_hi)
        iterations - кількість виконаних пробних кроків
    """

    def __init__(
        self,
        message: str,
        bracket: Tuple[float, float] = (0.0, 0.0),
        iterations: int = 0,
    ) -> None:
        super().__init__(f"{message} (дужка: {bracket}, кроків: {iterations})")
        self.bracket = (float(bracket[0]), float(bracket[1]))
        self.iterations = int(iterations)


__all__ = [
    "OptimizationError",
    "DimensionMismatch",
    "MissingInitialParam",
    "EvaluationError",
    "LineSearchFailure",
]
