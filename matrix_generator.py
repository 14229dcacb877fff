import numpy as np

from constants import MATRIX_DTYPE
from errors import ResourceError


def make_rng(seed):
    """Seeded random source; one stream fills A and then B."""
    return np.random.default_rng(seed)


def allocate_matrix(rows, cols, zero=True):
    """
    Allocate a row-major rows x cols single precision buffer.
    Raises ResourceError if the memory cannot be obtained.
    """
    try:
        if zero:
            return np.zeros((rows, cols), dtype=MATRIX_DTYPE)
        return np.empty((rows, cols), dtype=MATRIX_DTYPE)
    except (MemoryError, ValueError) as exc:
        raise ResourceError(f"Memory allocation failed for a {rows}x{cols} matrix") from exc


def generate_matrix(mat, start, end, rng):
    """
    Fill mat in place with uniform random values in [start, end).
    mat: float32 buffer (n x n)
    rng: numpy Generator, see make_rng
    """
    r = rng.random(mat.size)
    values = (start + r * (end - start)).astype(MATRIX_DTYPE)

    # Rounding to single precision can land exactly on `end`
    upper = np.nextafter(MATRIX_DTYPE(end), MATRIX_DTYPE(start))
    np.minimum(values, upper, out=values)

    np.copyto(mat, values.reshape(mat.shape))
    return mat
