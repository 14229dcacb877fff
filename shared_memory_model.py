import multiprocessing as mp
import threading
import time

import numpy as np

from collectives import WorkerGroup
from constants import COORDINATOR, DEFAULT_SEED, VALUE_RANGE
from errors import GroupAbortedError, ResourceError
from matrix_generator import allocate_matrix
from row_block_matmul import row_block_matrix_multiplication


class SharedMemoryContext:
    """
    State shared by the threads of one worker group.
    slots[r] is written only by rank r and read by others between two
    rendezvous, so no slot is ever mutated concurrently.
    """

    def __init__(self, size):
        self.size = size
        self.barrier = threading.Barrier(size)
        self.slots = [None] * size


class SharedMemoryWorkerGroup(WorkerGroup):
    """Worker group over threads of one process, data handed off by copy."""

    def __init__(self, context, rank, root=COORDINATOR):
        super().__init__(rank, context.size, root)
        self.context = context

    def _rendezvous(self):
        try:
            self.context.barrier.wait()
        except threading.BrokenBarrierError:
            raise GroupAbortedError(
                f"Worker {self.rank}: worker group aborted by another participant") from None

    def _allocate(self, rows, cols):
        try:
            return allocate_matrix(rows, cols, zero=False)
        except ResourceError:
            self.abort()
            raise

    def replicate(self, buffer):
        slots = self.context.slots
        if self.is_coordinator:
            slots[self.rank] = buffer
        self._rendezvous()

        if not self.is_coordinator:
            np.copyto(buffer, slots[self.root])
        self._rendezvous()

        slots[self.rank] = None
        return buffer

    def partition_send(self, buffer, plan):
        slots = self.context.slots
        if self.is_coordinator:
            slots[self.rank] = buffer
        self._rendezvous()

        start_row, end_row = plan.row_range(self.rank)
        local = self._allocate(plan.rows_per_process, plan.n)
        np.copyto(local, slots[self.root][start_row:end_row])
        self._rendezvous()

        slots[self.rank] = None
        return local

    def gather(self, partial, out=None):
        slots = self.context.slots
        slots[self.rank] = partial
        self._rendezvous()

        full = None
        if self.is_coordinator:
            rows_per_process, n = partial.shape
            full = out if out is not None else self._allocate(rows_per_process * self.size, n)
            for rank in range(self.size):
                start_row = rank * rows_per_process
                full[start_row:start_row + rows_per_process] = slots[rank]
        self._rendezvous()

        slots[self.rank] = None
        return full

    def barrier(self):
        self._rendezvous()

    def wtime(self):
        return time.time()

    def abort(self):
        self.context.barrier.abort()


def run_worker_group(program, num_workers, args=(), kwargs=None,
                     group_class=SharedMemoryWorkerGroup):
    """
    Run `program(group, *args, **kwargs)` on num_workers threads at once.
    Returns: list of per-rank return values
    Raises the first failure that was not caused by another worker aborting.
    """
    if num_workers < 1:
        raise ValueError(f"worker group size must be positive, got {num_workers}")
    kwargs = kwargs or {}
    context = SharedMemoryContext(num_workers)
    results = [None] * num_workers
    errors = [None] * num_workers

    def worker(rank):
        group = group_class(context, rank)
        try:
            results[rank] = program(group, *args, **kwargs)
        except Exception as exc:
            errors[rank] = exc
            group.abort()

    threads = [threading.Thread(target=worker, args=(rank,), name=f"worker-{rank}")
               for rank in range(num_workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    failures = [exc for exc in errors if exc is not None]
    if failures:
        root_causes = [exc for exc in failures if not isinstance(exc, GroupAbortedError)]
        raise (root_causes or failures)[0]

    return results


def shared_memory_matrix_multiplication(n, num_processes=None, seed=DEFAULT_SEED,
                                        value_range=VALUE_RANGE, verbose=True):
    """
    Parallel matrix multiplication using shared memory model.
    n: matrix size (n x n)
    num_processes: worker group size (default is number of CPU cores)
    Returns: RunResult from the coordinator
    """
    # Use all CPU cores if not specified
    if num_processes is None:
        num_processes = mp.cpu_count()

    results = run_worker_group(
        row_block_matrix_multiplication, num_processes, args=(n,),
        kwargs={"seed": seed, "value_range": value_range, "verbose": verbose})
    return results[COORDINATOR]
