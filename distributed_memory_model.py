import sys

from mpi4py import MPI

from collectives import WorkerGroup
from constants import COORDINATOR, DEFAULT_SEED, VALUE_RANGE
from errors import ResourceError
from matrix_generator import allocate_matrix
from row_block_matmul import row_block_matrix_multiplication


class MPIWorkerGroup(WorkerGroup):
    """
    Worker group over an MPI communicator, one process per participant.
    Run with mpiexec -n <num_processes> python matmul.py <matrix_size>
    """

    def __init__(self, comm=None, root=COORDINATOR):
        # The default communicator is COMM_WORLD, all of the launched processes
        self.comm = comm if comm is not None else MPI.COMM_WORLD
        super().__init__(self.comm.Get_rank(), self.comm.Get_size(), root)

    def _allocate(self, rows, cols):
        try:
            return allocate_matrix(rows, cols, zero=False)
        except ResourceError:
            self.abort()
            raise

    def replicate(self, buffer):
        # this gives each process the entire buffer
        self.comm.Bcast(buffer, root=self.root)
        return buffer

    def partition_send(self, buffer, plan):
        local = self._allocate(plan.rows_per_process, plan.n)
        # Spreads out the row-blocks of buffer across all processes
        self.comm.Scatter(buffer if self.is_coordinator else None, local, root=self.root)
        return local

    def gather(self, partial, out=None):
        full = None
        if self.is_coordinator:
            rows_per_process, n = partial.shape
            full = out if out is not None else self._allocate(rows_per_process * self.size, n)
        self.comm.Gather(partial, full, root=self.root)
        return full

    def barrier(self):
        self.comm.Barrier()

    def wtime(self):
        return MPI.Wtime()

    def abort(self):
        print(f"Process {self.rank}: aborting all {self.size} processes", file=sys.stderr, flush=True)
        self.comm.Abort(1)


def distributed_memory_matrix_multiplication(n, comm=None, seed=DEFAULT_SEED,
                                             value_range=VALUE_RANGE, verbose=True):
    """
    Parallel matrix multiplication using distributed memory model with MPI.
    n: matrix size (n x n)
    comm: MPI communicator (default COMM_WORLD)
    Returns: RunResult - only available at root process
    """
    group = MPIWorkerGroup(comm)
    return row_block_matrix_multiplication(group, n, seed=seed, value_range=value_range,
                                           verbose=verbose)
