from abc import ABC, abstractmethod

from constants import COORDINATOR


class WorkerGroup(ABC):
    """
    One participant's handle on a fixed-size worker group.

    Every collective is a blocking rendezvous: all `size` participants must
    call it, in the same order, before any of them returns. Buffers change
    owner only inside a collective; nothing is mutated by two participants.
    """

    def __init__(self, rank, size, root=COORDINATOR):
        if size <= 0:
            raise ValueError(f"worker group size must be positive, got {size}")
        if not 0 <= root < size:
            raise ValueError(f"root {root} outside worker group of size {size}")
        self.rank = rank
        self.size = size
        self.root = root

    @property
    def is_coordinator(self):
        return self.rank == self.root

    @abstractmethod
    def replicate(self, buffer):
        """Copy the root's buffer into `buffer` on every participant. Returns buffer."""

    @abstractmethod
    def partition_send(self, buffer, plan):
        """
        Send row-block `rank` of the root's buffer to each participant.
        buffer: full n x n matrix on the root, ignored elsewhere
        plan: PartitionPlan shared by the whole group
        Returns: this participant's own (rows_per_process x n) block
        """

    @abstractmethod
    def gather(self, partial, out=None):
        """
        Collect every participant's row-block on the root, in rank order.
        Returns: the full matrix on the root, None elsewhere
        """

    @abstractmethod
    def barrier(self):
        """Rendezvous with no payload."""

    @abstractmethod
    def wtime(self):
        """Wall clock time in seconds."""

    @abstractmethod
    def abort(self):
        """Tear the whole group down after an unrecoverable failure."""
