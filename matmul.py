"""
Row-block parallel matrix multiplication C = A . B

Usage:
    mpiexec -n <num_processes> python matmul.py <matrix_size>
    python matmul.py <matrix_size> --backend shared --workers <num_workers>

A and B are generated on the coordinator from a fixed seed, B is broadcast,
A is scattered by row-blocks, every worker multiplies its rows and C is
gathered back on the coordinator, which prints the timing and writes the
report file.
"""
import argparse
import sys

from constants import DEFAULT_SEED, OUTPUT_FILE
from errors import ConfigurationError, MatmulError, UsageError
from report import emit_report


class MatmulArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def worker_count(value):
    workers = int(value)
    if workers < 1:
        raise argparse.ArgumentTypeError(f"worker count must be at least 1, got {workers}")
    return workers


def build_parser():
    parser = MatmulArgumentParser(
        prog="matmul.py",
        description="Parallel dense matrix multiplication with row-block decomposition")
    parser.add_argument("matrix_size", type=int, help="size N of the N x N matrices")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED,
                        help="seed of the random generator for A and B")
    parser.add_argument("--output", default=OUTPUT_FILE, help="path of the report file")
    parser.add_argument("--backend", choices=["mpi", "shared"], default="mpi",
                        help="run over MPI processes or over threads of this process")
    parser.add_argument("--workers", type=worker_count, default=None,
                        help="worker count for the shared backend (default: CPU cores)")
    parser.add_argument("--quiet", action="store_true", help="do not print progress messages")
    return parser


def parse_arguments(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    # the MPI group size comes from mpiexec -n
    if args.workers is not None and args.backend == "mpi":
        parser.error("--workers only applies to --backend shared")
    return args


def run(args):
    """Run the multiplication on the chosen backend. Returns the RunResult or None."""
    if args.backend == "shared":
        from shared_memory_model import shared_memory_matrix_multiplication
        return shared_memory_matrix_multiplication(
            args.matrix_size, num_processes=args.workers, seed=args.seed,
            verbose=not args.quiet)

    from distributed_memory_model import MPIWorkerGroup
    from row_block_matmul import row_block_matrix_multiplication
    group = MPIWorkerGroup()
    try:
        return row_block_matrix_multiplication(group, args.matrix_size, seed=args.seed,
                                               verbose=not args.quiet)
    except ConfigurationError:
        # every process fails the same way, only the coordinator reports it
        if group.is_coordinator:
            raise
        raise SystemExit(1)


def main(argv=None):
    try:
        args = parse_arguments(argv)
    except UsageError as exc:
        print(f"Usage: {sys.argv[0]} <matrix_size> ({exc})", file=sys.stderr)
        return 1

    try:
        result = run(args)
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return 1
    except MatmulError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result is not None:
        emit_report(result, output_path=args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
