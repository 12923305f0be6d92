import numpy as np
import pytest

from descentopt.errors import DimensionMismatch
from descentopt.vector_ops import (
    all_finite,
    as_vector,
    axpy,
    check_dimensions,
    dot,
    norm,
    scale,
)


def test_dot_and_norm():
    assert dot([1.0, 2.0, 3.0], [4.0, -5.0, 6.0]) == pytest.approx(12.0)
    assert norm([3.0, 4.0]) == pytest.approx(5.0)
    assert norm([0.0, 0.0]) == 0.0


def test_scale_and_axpy_return_new_vectors():
    a = np.array([1.0, -2.0])
    b = np.array([0.5, 0.5])

    scaled = scale(a, -2.0)
    combined = axpy(a, 2.0, b)

    np.testing.assert_allclose(scaled, [-2.0, 4.0])
    np.testing.assert_allclose(combined, [2.0, -1.0])
    # входи не змінюються
    np.testing.assert_array_equal(a, [1.0, -2.0])
    np.testing.assert_array_equal(b, [0.5, 0.5])
    assert scaled is not a
    assert combined is not a


@pytest.mark.parametrize("op", [dot, lambda a, b: axpy(a, 1.0, b)])
def test_length_mismatch_raises(op):
    with pytest.raises(DimensionMismatch) as excinfo:
        op([1.0, 2.0, 3.0], [1.0, 2.0])
    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 2


def test_as_vector_copies_and_rejects_matrices():
    src = [1, 2]
    v = as_vector(src)
    assert v.dtype == float
    v[0] = 10.0
    assert src[0] == 1

    with pytest.raises(DimensionMismatch):
        as_vector([[1.0, 2.0], [3.0, 4.0]])


def test_check_dimensions():
    check_dimensions(2, np.zeros(2), np.ones(2))
    with pytest.raises(DimensionMismatch):
        check_dimensions(2, np.zeros(2), np.zeros(3))


def test_all_finite():
    assert all_finite(1.0, np.array([0.0, -3.0]))
    assert not all_finite(1.0, np.array([np.nan, 0.0]))
    assert not all_finite(np.inf)
