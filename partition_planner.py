from collections import namedtuple

from errors import ConfigurationError


class PartitionPlan(namedtuple("PartitionPlan", ["n", "size", "rows_per_process"])):
    """
    Row-block decomposition of an n x n matrix over `size` workers.
    Worker `rank` owns rows [rank * rows_per_process, (rank + 1) * rows_per_process).
    """
    __slots__ = ()

    def row_range(self, rank):
        if not 0 <= rank < self.size:
            raise ValueError(f"rank {rank} outside worker group of size {self.size}")
        start_row = rank * self.rows_per_process
        return start_row, start_row + self.rows_per_process


def plan_partition(n, size):
    """
    Split n rows into `size` equal contiguous blocks.
    Every worker calls this with the same arguments before any data moves,
    so either the whole group proceeds or the whole group fails.
    """
    if size <= 0:
        raise ValueError(f"worker group size must be positive, got {size}")
    if n <= 0:
        raise ConfigurationError(ConfigurationError.NON_POSITIVE_SIZE, n, size)
    # we must be able to give equal sized chunks to each process
    if n % size != 0:
        raise ConfigurationError(ConfigurationError.NOT_DIVISIBLE, n, size)

    return PartitionPlan(n, size, n // size)
