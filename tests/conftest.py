"""Спільні фікстури та маркування тестів.

Тести лежать пласко в `tests/`; маркери `unit` / `e2e` ставляться за назвою
файлу, щоб можна було запускати підмножини (`pytest -m unit`).
"""

from __future__ import annotations

import pathlib

import numpy as np
import pytest

from descentopt.testfunctions import Rosenbrock, Sphere


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    for item in items:
        name = pathlib.Path(str(item.fspath)).name.lower()
        if "engine" in name:
            item.add_marker(pytest.mark.e2e)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def sphere():
    return Sphere()


@pytest.fixture
def rosenbrock():
    return Rosenbrock(a=1.0, b=100.0)


@pytest.fixture
def quadratic_evaluate():
    """(f, ∇f) для f(x) = x1^2 + 10 x2^2."""
    weights = np.array([1.0, 10.0])

    def evaluate(x):
        x = np.asarray(x, dtype=float)
        return float(np.dot(weights, x * x)), 2.0 * weights * x

    return evaluate
