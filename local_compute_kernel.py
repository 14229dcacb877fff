import numpy as np

from constants import MATRIX_DTYPE
from matrix_generator import allocate_matrix


def row_block_multiplication(local_A, B, out=None):
    """
    Compute this worker's rows of C = A . B.
    local_A: row-block of A (rows_per_process x n)
    B: full matrix (n x n)
    out: optional output buffer (rows_per_process x n), zeroed before use
    Returns: row-block of C (rows_per_process x n)
    """
    num_rows, n = local_A.shape
    if B.shape[0] != n:
        raise ValueError("Matrix dimensions incompatible for multiplication")

    if out is None:
        out = allocate_matrix(num_rows, B.shape[1])
    else:
        out.fill(0)

    # C[i][j] += A[i][k] * B[k][j] for k = 0..n-1, every (i, j) at once.
    # Each step rounds to float32, matching the scalar triple loop exactly.
    product = np.empty_like(out)
    for k in range(n):
        np.multiply.outer(local_A[:, k], B[k, :], out=product)
        out += product

    return out


def sequential_matrix_multiplication(A, B):
    """
    Sequential matrix multiplication.
    A: matrix (m x n)
    B: matrix (n x p)
    Returns: result matrix C (m x p)
    """
    if A.shape[1] != B.shape[0]:
        raise ValueError("Matrix dimensions incompatible for multiplication")

    m, n = A.shape
    n, p = B.shape

    C = np.zeros((m, p), dtype=MATRIX_DTYPE)

    for i in range(m):
        for j in range(p):
            for k in range(n):
                C[i, j] += A[i, k] * B[k, j]

    return C
