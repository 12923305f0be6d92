"""
vector_ops.py

Операції над векторами фіксованої довжини (1-D numpy.ndarray).

Усі функції чисто функціональні: вхідні масиви не змінюються, результат -
завжди новий масив. Вхід різної довжини -> DimensionMismatch.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .errors import DimensionMismatch


def as_vector(x) -> np.ndarray:
    """Перетворити x на новий 1-D масив float (завжди копія)."""
    arr = np.array(x, dtype=float, copy=True)
    if arr.ndim != 1:
        raise DimensionMismatch(
            expected=1,
            actual=arr.ndim,
            message=f"Очікувався одновимірний вектор, отримано масив форми {arr.shape}.",
        )
    return arr


def check_dimensions(expected: int, *vectors: np.ndarray) -> None:
    """Перевірити, що всі вектори мають довжину expected."""
    for v in vectors:
        size = int(np.shape(v)[0]) if np.ndim(v) == 1 else -1
        if size != expected:
            raise DimensionMismatch(expected=expected, actual=size)


def _pair(a, b) -> tuple[np.ndarray, np.ndarray]:
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    if a_arr.ndim != 1 or b_arr.ndim != 1 or a_arr.shape[0] != b_arr.shape[0]:
        raise DimensionMismatch(
            expected=a_arr.shape[0] if a_arr.ndim == 1 else -1,
            actual=b_arr.shape[0] if b_arr.ndim == 1 else -1,
        )
    return a_arr, b_arr


def dot(a, b) -> float:
    """Скалярний добуток a·b."""
    a_arr, b_arr = _pair(a, b)
    return float(np.dot(a_arr, b_arr))


def norm(a) -> float:
    """Евклідова норма ||a||."""
    return float(np.linalg.norm(np.asarray(a, dtype=float), ord=2))


def scale(a, s: float) -> np.ndarray:
    """Новий вектор s·a."""
    return np.asarray(a, dtype=float) * float(s)


def axpy(a, s: float, b) -> np.ndarray:
    """Новий вектор a + s·b (поелементно)."""
    a_arr, b_arr = _pair(a, b)
    return a_arr + float(s) * b_arr


def all_finite(*values: Iterable[float]) -> bool:
    """True, якщо всі скаляри / масиви скінченні (без NaN та ±inf)."""
    return all(bool(np.all(np.isfinite(v))) for v in values)


__all__ = [
    "as_vector",
    "check_dimensions",
    "dot",
    "norm",
    "scale",
    "axpy",
    "all_finite",
]
