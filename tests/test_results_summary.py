import pytest

from descentopt import Executor, RunConfig, SteepestDescent, TerminationReason
from descentopt.functions import FunctionProblem
from descentopt.results_summary import ResultsSummary
from descentopt.testfunctions import Rosenbrock, Sphere


@pytest.fixture
def summary():
    s = ResultsSummary()
    s.add_run(Executor(Sphere(), SteepestDescent(), RunConfig(param=[5.0, -3.0])).run())
    s.add_run(
        Executor(Rosenbrock(), SteepestDescent(), RunConfig(param=[1.0, -2.0], max_iters=10)).run()
    )
    return s


def test_rows_have_one_entry_per_run(summary):
    rows = summary.as_rows()

    assert len(rows) == 2
    assert rows[0]["problem"] == "sphere"
    assert rows[0]["termination"] == "converged"
    assert rows[1]["termination"] == "max_iter_exceeded"
    assert rows[1]["n_iter"] == 10
    assert isinstance(rows[0]["x_star"], list)


def test_best_by_cost_skips_failed_runs(summary):
    assert summary.best_by_cost().problem_name == "sphere"

    failed = Executor(
        FunctionProblem(lambda x: float(x[0] ** 2) if abs(x[0]) > 1.0 else float("nan")),
        SteepestDescent(),
        RunConfig(param=[5.0]),
    ).run()
    assert failed.termination_reason is TerminationReason.FAILED

    only_failed = ResultsSummary(runs=[failed])
    assert only_failed.best_by_cost() is None
    assert ResultsSummary().best_by_cost() is None


def test_to_dataframe(summary):
    pd = pytest.importorskip("pandas")
    df = summary.to_dataframe()

    assert isinstance(df, pd.DataFrame)
    assert list(df["method"]) == ["Steepest descent", "Steepest descent"]
    assert df["f_star"].iloc[0] == pytest.approx(0.0)
