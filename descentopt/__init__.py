"""
descentopt

Рушій безумовної градієнтної оптимізації: найшвидший спуск з лінійним
пошуком за сильними умовами Вольфе.

    from descentopt import Executor, RunConfig, SteepestDescent
    from descentopt.testfunctions import Rosenbrock

    res = Executor(
        Rosenbrock(a=1.0, b=100.0),
        SteepestDescent(),
        RunConfig(param=[1.0, -2.0], max_iters=1000, target_cost=0.0),
    ).run()
    print(res)
"""

from .engine import Executor, IterationCallback, OptimizationResult
from .errors import (
    DimensionMismatch,
    EvaluationError,
    LineSearchFailure,
    MissingInitialParam,
    OptimizationError,
)
from .functions import FunctionProblem, Problem
from .iteration_result import IterationResult
from .line_search import LineSearchResult, MoreThuenteLineSearch, wolfe_conditions
from .optimizer_base import Optimizer, StepResult
from .results_summary import ResultsSummary
from .state import IterationState, RunConfig, SolverStatus, TerminationReason
from .steepest_descent import SteepestDescent

__version__ = "0.1.0"

__all__ = [
    "Executor",
    "IterationCallback",
    "OptimizationResult",
    "DimensionMismatch",
    "EvaluationError",
    "LineSearchFailure",
    "MissingInitialParam",
    "OptimizationError",
    "FunctionProblem",
    "Problem",
    "IterationResult",
    "LineSearchResult",
    "MoreThuenteLineSearch",
    "wolfe_conditions",
    "Optimizer",
    "StepResult",
    "ResultsSummary",
    "IterationState",
    "RunConfig",
    "SolverStatus",
    "TerminationReason",
    "SteepestDescent",
]
