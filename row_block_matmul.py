from collections import namedtuple

from constants import DEFAULT_SEED, VALUE_RANGE
from errors import ResourceError
from local_compute_kernel import row_block_multiplication
from matrix_generator import allocate_matrix, generate_matrix, make_rng
from partition_planner import plan_partition

RunResult = namedtuple("RunResult", ["A", "B", "C", "elapsed", "n", "size", "seed"])


def row_block_matrix_multiplication(group, n, seed=DEFAULT_SEED, value_range=VALUE_RANGE,
                                    verbose=True):
    """
    SPMD matrix multiplication C = A . B, run by every member of `group`.
    group: WorkerGroup handle of this participant
    n: matrix size (n x n)
    Returns: RunResult on the coordinator, None on every other participant
    """
    size = group.size

    # Raises identically on every participant, before any collective
    plan = plan_partition(n, size)
    rows_per_process = plan.rows_per_process

    # Each process holds the entire B and a chunk of A and C
    A = C = None
    try:
        B = allocate_matrix(n, n)
        local_C = allocate_matrix(rows_per_process, n)
        if group.is_coordinator:
            A = allocate_matrix(n, n)
            C = allocate_matrix(n, n)
    except ResourceError:
        group.abort()
        raise

    if group.is_coordinator:
        rng = make_rng(seed)
        start, end = value_range
        generate_matrix(A, start, end, rng)
        generate_matrix(B, start, end, rng)

    group.barrier()  # ensure all processes start together

    if group.is_coordinator and verbose:
        print(f"Starting matrix multiplication with {size} processes...")
    start_time = group.wtime()

    group.replicate(B)
    local_A = group.partition_send(A, plan)

    row_block_multiplication(local_A, B, out=local_C)

    group.gather(local_C, out=C)

    group.barrier()  # ensure all processes end together
    end_time = group.wtime()

    if not group.is_coordinator:
        return None

    if verbose:
        print("Finished Multiplication.")
    return RunResult(A, B, C, end_time - start_time, n, size, seed)
