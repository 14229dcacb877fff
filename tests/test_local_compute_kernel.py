import numpy as np
import pytest

from constants import MATRIX_DTYPE
from local_compute_kernel import row_block_multiplication, sequential_matrix_multiplication
from matrix_generator import allocate_matrix, generate_matrix, make_rng


def random_matrix(rows, cols, seed):
    return generate_matrix(allocate_matrix(rows, cols), -100, 101, make_rng(seed))


def test_matches_triple_loop_exactly():
    A = random_matrix(6, 6, 1)
    B = random_matrix(6, 6, 2)
    assert np.array_equal(row_block_multiplication(A, B), sequential_matrix_multiplication(A, B))


def test_row_block_matches_rows_of_full_product():
    A = random_matrix(8, 8, 3)
    B = random_matrix(8, 8, 4)
    full = sequential_matrix_multiplication(A, B)
    assert np.array_equal(row_block_multiplication(A[2:4], B), full[2:4])


def test_output_buffer_is_zeroed_first():
    A = np.eye(3, dtype=MATRIX_DTYPE)
    B = np.arange(9, dtype=MATRIX_DTYPE).reshape(3, 3)
    out = np.full((3, 3), 123.0, dtype=MATRIX_DTYPE)
    result = row_block_multiplication(A, B, out=out)
    assert result is out
    assert np.array_equal(out, B)


def test_single_precision_result():
    A = random_matrix(2, 4, 5)
    B = random_matrix(4, 4, 6)
    assert row_block_multiplication(A, B).dtype == MATRIX_DTYPE
    assert sequential_matrix_multiplication(A, B).dtype == MATRIX_DTYPE


def test_close_to_numpy():
    A = random_matrix(5, 5, 7)
    B = random_matrix(5, 5, 8)
    expected = np.matmul(A.astype(np.float64), B.astype(np.float64))
    assert np.allclose(row_block_multiplication(A, B), expected, rtol=1e-4, atol=1e-1)


def test_incompatible_dimensions():
    with pytest.raises(ValueError):
        row_block_multiplication(np.zeros((2, 3), MATRIX_DTYPE), np.zeros((4, 4), MATRIX_DTYPE))
    with pytest.raises(ValueError):
        sequential_matrix_multiplication(np.zeros((2, 3), MATRIX_DTYPE),
                                         np.zeros((4, 4), MATRIX_DTYPE))
