import numpy as np
import pytest

from constants import MATRIX_DTYPE, VALUE_RANGE
from errors import ResourceError
from matrix_generator import allocate_matrix, generate_matrix, make_rng


def test_allocate_is_zeroed_float32():
    mat = allocate_matrix(3, 4)
    assert mat.shape == (3, 4)
    assert mat.dtype == MATRIX_DTYPE
    assert not mat.any()


def test_allocation_failure_is_resource_error():
    with pytest.raises(ResourceError):
        allocate_matrix(2 ** 40, 2 ** 40)


def test_values_in_range():
    start, end = VALUE_RANGE
    mat = generate_matrix(allocate_matrix(20, 20), start, end, make_rng(1))
    assert mat.min() >= start
    assert mat.max() < end


def test_same_seed_is_bit_identical():
    first = generate_matrix(allocate_matrix(8, 8), -100, 101, make_rng(42))
    second = generate_matrix(allocate_matrix(8, 8), -100, 101, make_rng(42))
    assert first.tobytes() == second.tobytes()


def test_different_seed_differs():
    first = generate_matrix(allocate_matrix(8, 8), -100, 101, make_rng(1))
    second = generate_matrix(allocate_matrix(8, 8), -100, 101, make_rng(2))
    assert not np.array_equal(first, second)


class AlmostOneRng:
    def random(self, size):
        return np.full(size, 1.0 - 2.0 ** -53)


def test_upper_bound_excluded_after_rounding():
    mat = generate_matrix(allocate_matrix(2, 2), -100, 101, AlmostOneRng())
    assert (mat < 101).all()
