"""
line_search.py

Лінійний пошук вздовж напрямку спуску з сильними умовами Вольфе
(дужка + звуження, у стилі Море–Тюнте).

Позначення:
    φ(α)  = f(x + α d)
    φ'(α) = ∇f(x + α d)^T d

Шукаємо α > 0 таке, що:
    1) достатнє зменшення:  φ(α) <= φ(0) + c1 α φ'(0)
    2) кривизна:            |φ'(α)| <= c2 |φ'(0)|

Алгоритм:
    - фаза дужки: стартуємо з α_0 (за замовчуванням 1.0) і α_lo = 0;
      поки умова 1 виконується, а похідна ще від'ємна - збільшуємо α
      (екстраполяція кубічною інтерполяцією з обмеженнями);
    - як тільки проба порушує умову 1, не зменшує φ або має φ' >= 0,
      маємо дужку і переходимо до звуження (zoom): кубічна інтерполяція
      по (α, φ, φ') на кінцях, далі квадратична, а якщо кандидат
      виходить за внутрішні межі дужки - бісекція.

Публічний інтерфейс:
    - LineSearchResult         – результат пошуку;
    - MoreThuenteLineSearch    – налаштування + search(...);
    - wolfe_conditions(...)    – перевірка обох умов для готового кроку.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from .errors import EvaluationError, LineSearchFailure
from .vector_ops import all_finite, axpy, dot

logger = logging.getLogger("descentopt")

# evaluate(x) -> (f(x), ∇f(x))
CostGradientFunction = Callable[[np.ndarray], Tuple[float, np.ndarray]]

# Частки ширини дужки, в межах яких інтерполяцію не приймаємо
_CUBIC_MARGIN = 0.2
_QUADRATIC_MARGIN = 0.1


# ---------------------------------------------------------------------------
# Результат лінійного пошуку
# ---------------------------------------------------------------------------

@dataclass
class LineSearchResult:
    """
    Результат лінійного пошуку.

    Атрибути:
        alpha       - знайдений крок α* > 0;
        cost        - f(x + α* d);
        gradient    - ∇f(x + α* d);
        point       - нова точка x + α* d;
        iterations  - кількість пробних кроків;
        func_evals  - кількість обчислень (f, ∇f) під час пошуку;
        meta        - службова інформація (фаза, кінцева дужка, φ'(α*), ...).
    """
    alpha: float
    cost: float
    gradient: np.ndarray
    point: np.ndarray
    iterations: int
    func_evals: int
    meta: Dict[str, Any] = field(default_factory=dict)


def wolfe_conditions(
    f0: float,
    slope0: float,
    alpha: float,
    f_alpha: float,
    slope_alpha: float,
    c1: float = 1e-4,
    c2: float = 0.9,
) -> Tuple[bool, bool]:
    """
    Перевірити сильні умови Вольфе.

    Returns
    -------
    (sufficient_decrease, curvature)
    """
    sufficient = f_alpha <= f0 + c1 * alpha * slope0
    curvature = abs(slope_alpha) <= c2 * abs(slope0)
    return bool(sufficient), bool(curvature)


# ---------------------------------------------------------------------------
# Інтерполяція
# ---------------------------------------------------------------------------

def _cubic_minimizer(
    a: float, fa: float, ga: float,
    b: float, fb: float, gb: float,
) -> Optional[float]:
    """Мінімум кубіки через (a, f(a), f'(a)) та (b, f(b), f'(b)), або None."""
    if a == b:
        return None
    d1 = ga + gb - 3.0 * (fa - fb) / (a - b)
    rad = d1 * d1 - ga * gb
    if not math.isfinite(rad) or rad < 0.0:
        return None
    d2 = math.copysign(math.sqrt(rad), b - a)
    denom = gb - ga + 2.0 * d2
    if denom == 0.0 or not math.isfinite(denom):
        return None
    x = b - (b - a) * (gb + d2 - d1) / denom
    return x if math.isfinite(x) else None


def _quadratic_minimizer(
    a: float, fa: float, ga: float,
    b: float, fb: float,
) -> Optional[float]:
    """Мінімум параболи через (a, f(a), f'(a)) та (b, f(b)), або None."""
    dx = b - a
    denom = fb - fa - ga * dx
    if dx == 0.0 or not math.isfinite(denom) or denom <= 0.0:
        return None
    x = a - ga * dx * dx / (2.0 * denom)
    return x if math.isfinite(x) else None


# ---------------------------------------------------------------------------
# Пробна точка
# ---------------------------------------------------------------------------

@dataclass
class _Trial:
    alpha: float
    phi: float
    dphi: float
    point: np.ndarray
    gradient: np.ndarray


class _WolfeSearch:
    """Стан одного виклику search(): лічильники, φ(0), φ'(0), дужка."""

    def __init__(
        self,
        params: "MoreThuenteLineSearch",
        evaluate: CostGradientFunction,
        x: np.ndarray,
        direction: np.ndarray,
        f0: float,
        g0: np.ndarray,
    ) -> None:
        self.params = params
        self.evaluate = evaluate
        self.x = x
        self.direction = direction
        self.f0 = float(f0)
        self.slope0 = dot(g0, direction)
        self.start = _Trial(0.0, self.f0, self.slope0, x.copy(), np.array(g0, dtype=float))
        self.iterations = 0
        self.func_evals = 0
        self.interpolation: Optional[str] = None

    # ------------------------------------------------------------------

    def fail(self, reason: str, lo: float, hi: float) -> LineSearchFailure:
        logger.debug("Line search failed: %s, bracket=(%g, %g)", reason, lo, hi)
        return LineSearchFailure(reason, bracket=(lo, hi), iterations=self.iterations)

    def trial(self, alpha: float, bracket: Tuple[float, float]) -> _Trial:
        if self.iterations >= self.params.max_iter:
            raise self.fail(
                f"Перевищено максимальну кількість кроків ({self.params.max_iter})",
                *bracket,
            )
        self.iterations += 1

        point = axpy(self.x, alpha, self.direction)
        try:
            phi, grad = self.evaluate(point)
        except EvaluationError as exc:
            raise self.fail(
                f"Обчислення не вдалося при α={alpha:g}", *bracket
            ) from exc
        self.func_evals += 1

        grad = np.array(grad, dtype=float)
        phi = float(phi)
        dphi = dot(grad, self.direction)
        if not all_finite(phi, dphi):
            raise self.fail(f"Нескінченне значення при α={alpha:g}", *bracket)
        return _Trial(alpha, phi, dphi, point, grad)

    def accept(self, trial: _Trial, phase: str, bracket: Tuple[float, float]) -> LineSearchResult:
        return LineSearchResult(
            alpha=trial.alpha,
            cost=trial.phi,
            gradient=trial.gradient,
            point=trial.point,
            iterations=self.iterations,
            func_evals=self.func_evals,
            meta={
                "phase": phase,
                "bracket": bracket,
                "initial_slope": self.slope0,
                "final_slope": trial.dphi,
                "interpolation": self.interpolation,
            },
        )

    def wolfe(self, trial: _Trial) -> Tuple[bool, bool]:
        return wolfe_conditions(
            self.f0, self.slope0, trial.alpha, trial.phi, trial.dphi,
            self.params.c1, self.params.c2,
        )

    # ------------------------------------------------------------------
    # Фаза дужки
    # ------------------------------------------------------------------

    def run(self, alpha: float) -> LineSearchResult:
        if not all_finite(self.f0, self.slope0):
            raise self.fail("Нескінченне значення в початковій точці", 0.0, 0.0)
        if self.slope0 >= 0.0:
            raise self.fail(
                f"Напрямок не є напрямком спуску (φ'(0) = {self.slope0:g})", 0.0, 0.0
            )

        prev = self.start
        alpha = min(alpha, self.params.alpha_max)

        while True:
            cur = self.trial(alpha, (prev.alpha, alpha))
            sufficient, curvature = self.wolfe(cur)

            if not sufficient or (self.iterations > 1 and cur.phi >= prev.phi):
                return self.zoom(prev, cur)

            if curvature:
                return self.accept(cur, "bracket", (prev.alpha, cur.alpha))

            if cur.dphi >= 0.0:
                return self.zoom(cur, prev)

            if cur.alpha >= self.params.alpha_max:
                raise self.fail(
                    f"Крок досяг межі alpha_max={self.params.alpha_max:g}",
                    prev.alpha, cur.alpha,
                )

            alpha = self.extrapolate(prev, cur)
            prev = cur

    def extrapolate(self, prev: _Trial, cur: _Trial) -> float:
        delta = cur.alpha - prev.alpha
        lower = cur.alpha + 1.1 * delta
        upper = cur.alpha + self.params.extrapolation * delta

        candidate = _cubic_minimizer(
            prev.alpha, prev.phi, prev.dphi, cur.alpha, cur.phi, cur.dphi
        )
        if candidate is None:
            candidate = upper
        candidate = min(max(candidate, lower), upper)
        return min(candidate, self.params.alpha_max)

    # ------------------------------------------------------------------
    # Фаза звуження (zoom)
    # ------------------------------------------------------------------

    def interpolate(self, lo: _Trial, hi: _Trial) -> Tuple[float, str]:
        left = min(lo.alpha, hi.alpha)
        right = max(lo.alpha, hi.alpha)
        width = right - left

        cubic = _cubic_minimizer(lo.alpha, lo.phi, lo.dphi, hi.alpha, hi.phi, hi.dphi)
        margin = _CUBIC_MARGIN * width
        if cubic is not None and left + margin <= cubic <= right - margin:
            return cubic, "cubic"

        quad = _quadratic_minimizer(lo.alpha, lo.phi, lo.dphi, hi.alpha, hi.phi)
        margin = _QUADRATIC_MARGIN * width
        if quad is not None and left + margin <= quad <= right - margin:
            return quad, "quadratic"

        return left + 0.5 * width, "bisection"

    def zoom(self, lo: _Trial, hi: _Trial) -> LineSearchResult:
        """
        Звуження дужки між lo та hi.

        Інваріанти:
            - lo задовольняє умову достатнього зменшення і має найменше φ
              серед перевірених точок дужки;
            - φ'(lo) (hi - lo) < 0, тобто мінімум лежить між lo та hi.
        """
        while True:
            width = abs(hi.alpha - lo.alpha)
            scale = max(1.0, abs(lo.alpha), abs(hi.alpha))
            if width <= self.params.width_tol * scale:
                raise self.fail(
                    f"Ширина дужки {width:g} менша за допуск", lo.alpha, hi.alpha
                )

            alpha, self.interpolation = self.interpolate(lo, hi)
            cur = self.trial(alpha, (lo.alpha, hi.alpha))
            sufficient, curvature = self.wolfe(cur)

            if not sufficient or cur.phi >= lo.phi:
                hi = cur
                continue

            if curvature:
                return self.accept(cur, "zoom", (lo.alpha, hi.alpha))

            if cur.dphi * (hi.alpha - lo.alpha) >= 0.0:
                hi = lo
            lo = cur


# ---------------------------------------------------------------------------
# Публічний клас
# ---------------------------------------------------------------------------

class MoreThuenteLineSearch:
    """
    Лінійний пошук із сильними умовами Вольфе.

    Налаштування:
        c1            : константа достатнього зменшення (default: 1e-4)
        c2            : константа кривизни, c1 < c2 < 1 (default: 0.9)
        initial_step  : початкове α (default: 1.0)
        max_iter      : максимум пробних кроків на один пошук (default: 100)
        width_tol     : відносний допуск ширини дужки (default: 1e-10)
        alpha_max     : верхня межа α (default: inf)
        extrapolation : максимальний множник розширення кроку (default: 4.0)
    """

    name = "More-Thuente (strong Wolfe)"

    def __init__(
        self,
        c1: float = 1e-4,
        c2: float = 0.9,
        initial_step: float = 1.0,
        max_iter: int = 100,
        width_tol: float = 1e-10,
        alpha_max: float = math.inf,
        extrapolation: float = 4.0,
    ) -> None:
        if not 0.0 < c1 < c2 < 1.0:
            raise ValueError(
                f"MoreThuenteLineSearch: потрібно 0 < c1 < c2 < 1, отримано c1={c1}, c2={c2}."
            )
        if not initial_step > 0.0 or not math.isfinite(initial_step):
            raise ValueError("MoreThuenteLineSearch: initial_step повинен бути > 0.")
        if int(max_iter) < 1:
            raise ValueError("MoreThuenteLineSearch: max_iter повинен бути >= 1.")
        if not width_tol > 0.0:
            raise ValueError("MoreThuenteLineSearch: width_tol повинен бути > 0.")
        if not alpha_max > 0.0:
            raise ValueError("MoreThuenteLineSearch: alpha_max повинен бути > 0.")
        if not extrapolation > 1.1:
            raise ValueError("MoreThuenteLineSearch: extrapolation повинен бути > 1.1.")

        self.c1 = float(c1)
        self.c2 = float(c2)
        self.initial_step = float(initial_step)
        self.max_iter = int(max_iter)
        self.width_tol = float(width_tol)
        self.alpha_max = float(alpha_max)
        self.extrapolation = float(extrapolation)

    def search(
        self,
        evaluate: CostGradientFunction,
        x: np.ndarray,
        direction: np.ndarray,
        f0: float,
        g0: np.ndarray,
        initial_step: Optional[float] = None,
    ) -> LineSearchResult:
        """
        Знайти крок α уздовж direction з точки x.

        Parameters
        ----------
        evaluate : Callable[[np.ndarray], (float, np.ndarray)]
            Обчислення (f, ∇f) у точці; зазвичай лічильникова обгортка
            розв'язувача.
        x, direction : np.ndarray
            Поточна точка та напрямок спуску.
        f0, g0 : float, np.ndarray
            f(x) та ∇f(x) (вже обчислені, повторно не рахуються).
        initial_step : Optional[float]
            Початкове α для цього виклику (за замовчуванням self.initial_step).

        Raises
        ------
        LineSearchFailure
            Якщо допустимий крок не знайдено.
        """
        alpha0 = self.initial_step if initial_step is None else float(initial_step)
        if not alpha0 > 0.0:
            raise ValueError("MoreThuenteLineSearch.search: initial_step повинен бути > 0.")

        state = _WolfeSearch(
            self,
            evaluate,
            np.asarray(x, dtype=float),
            np.asarray(direction, dtype=float),
            f0,
            np.asarray(g0, dtype=float),
        )
        result = state.run(alpha0)
        logger.debug(
            "Line search: alpha=%g, cost=%g, trials=%d, phase=%s",
            result.alpha, result.cost, result.iterations, result.meta["phase"],
        )
        return result

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(c1={self.c1:g}, c2={self.c2:g}, "
            f"initial_step={self.initial_step:g}, max_iter={self.max_iter})"
        )


__all__ = [
    "CostGradientFunction",
    "LineSearchResult",
    "MoreThuenteLineSearch",
    "wolfe_conditions",
]
