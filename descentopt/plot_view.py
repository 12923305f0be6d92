"""
plot_view.py

Графіки процесу мінімізації на matplotlib.Figure (без pyplot та GUI):
    - plot_cost_history(...)       - графік f(k);
    - plot_contour_trajectory(...) - контурні лінії + траєкторія (лише R²).

Кожна функція приймає готові осі (ax) або створює нову Figure і
повертає осі, на яких малювала.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from matplotlib.figure import Figure

from .engine import OptimizationResult
from .functions import Problem

_ACCENT = "#4f8cff"
_ACCENT_ALT = "#ff7a59"
_MUTED = "#7a7f8c"


def _new_axes():
    figure = Figure(figsize=(6.0, 4.5), tight_layout=True)
    return figure.add_subplot(111)


def plot_cost_history(result: OptimizationResult, ax=None, log_scale: bool = True):
    """Графік f(x_k) від номера ітерації k."""
    if ax is None:
        ax = _new_axes()

    ks = [rec.index for rec in result.history]
    fs = [rec.cost for rec in result.history]

    ax.plot(ks, fs, marker="o", linestyle="-", linewidth=1.5, markersize=3, color=_ACCENT)
    # логарифмічна шкала має сенс лише для додатних значень
    if log_scale and fs and min(fs) > 0.0:
        ax.set_yscale("log")

    ax.set_xlabel("k")
    ax.set_ylabel("f(x_k)")
    ax.set_title(f"{result.method_name}: {result.problem_name}")
    ax.grid(True, alpha=0.3)
    return ax


def plot_contour_trajectory(
    problem: Problem,
    result: OptimizationResult,
    ax=None,
    levels: int = 30,
    margin: float = 0.5,
    resolution: int = 120,
    bounds: Optional[tuple] = None,
):
    """
    Контурні лінії f(x1, x2) і траєкторія x_0, x_1, ..., x_k.

    bounds = ((x1_min, x1_max), (x2_min, x2_max)); за замовчуванням -
    охоплює траєкторію з відступом margin.
    """
    traj = np.array([rec.x for rec in result.history], dtype=float)
    if traj.ndim != 2 or traj.shape[1] != 2:
        raise ValueError("plot_contour_trajectory: контури доступні лише для задачі в R².")

    if ax is None:
        ax = _new_axes()

    if bounds is None:
        x1_min, x2_min = traj.min(axis=0) - margin
        x1_max, x2_max = traj.max(axis=0) + margin
    else:
        (x1_min, x1_max), (x2_min, x2_max) = bounds

    x1 = np.linspace(x1_min, x1_max, resolution)
    x2 = np.linspace(x2_min, x2_max, resolution)
    X1, X2 = np.meshgrid(x1, x2)
    Z = np.array(
        [[problem.cost(np.array([a, b])) for a, b in zip(row1, row2)] for row1, row2 in zip(X1, X2)],
        dtype=float,
    )

    ax.contour(X1, X2, Z, levels=levels, colors=_MUTED, linewidths=0.6)
    ax.contourf(X1, X2, Z, levels=levels, cmap="magma", alpha=0.45)

    ax.plot(traj[:, 0], traj[:, 1], marker="o", linestyle="-", linewidth=1.2, markersize=3, color=_ACCENT)
    ax.scatter(traj[0, 0], traj[0, 1], color=_ACCENT_ALT, marker="s", s=50, zorder=5)
    ax.scatter(result.best_param[0], result.best_param[1], color=_ACCENT, marker="*", s=120, zorder=6)

    ax.set_xlabel("x₁")
    ax.set_ylabel("x₂")
    ax.set_title(f"Траєкторія: {result.problem_name}")
    return ax


__all__ = [
    "plot_cost_history",
    "plot_contour_trajectory",
]
