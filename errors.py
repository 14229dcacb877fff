class MatmulError(Exception):
    """Base class for errors raised by the matrix multiplication run."""


class UsageError(MatmulError):
    """Missing or malformed command line arguments."""


class ConfigurationError(MatmulError):
    """
    Matrix size that cannot be split across the worker group.
    reason: NON_POSITIVE_SIZE or NOT_DIVISIBLE
    """
    NON_POSITIVE_SIZE = "non-positive size"
    NOT_DIVISIBLE = "not divisible by worker count"

    def __init__(self, reason, n, size):
        self.reason = reason
        self.n = n
        self.size = size
        if reason == self.NON_POSITIVE_SIZE:
            message = "Invalid matrix size: must be a positive integer."
        else:
            message = (f"Invalid matrix size: {n} must be divisible by "
                       f"number of processes ({size}).")
        super().__init__(message)


class ResourceError(MatmulError):
    """Buffer allocation failed on a participant."""


class GroupAbortedError(ResourceError):
    """Another participant aborted the group while this one was waiting."""


class IOWarning(UserWarning):
    """The report file could not be written."""
