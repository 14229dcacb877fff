import sys
import warnings

from constants import MAX_CONSOLE_MATRIX_SIZE, MAX_FILE_MATRIX_SIZE, OUTPUT_FILE
from errors import IOWarning


def get_matrix_string(title, mat):
    """
    Render a matrix as a title line followed by aligned rows.
    Every value is printed with 3 decimals, right-aligned to the widest one.
    """
    formatted = [[f"{value:.3f}" for value in row] for row in mat]
    max_width = max((len(text) for row in formatted for text in row), default=0)

    lines = [f"{title}:\n"]
    for row in formatted:
        lines.append("".join(f"{text:>{max_width}} " for text in row) + "\n")
    return "".join(lines)


def format_run_summary(result):
    return (f"Execution Time: {result.elapsed:f} seconds\n"
            f"Matrix Size: {result.n}x{result.n}\n"
            f"Number of Processes: {result.size}\n"
            f"Seed: {result.seed}\n\n")


def write_report(path, summary, matrix_strings):
    """
    Write the report file. A failure is reported as an IOWarning.
    Returns: True if the file was written
    """
    try:
        with open(path, "w") as f:
            f.write(summary)
            if matrix_strings:
                f.write("\n".join(matrix_strings) + "\n")
    except OSError as exc:
        warnings.warn(f"Failed to open file for writing: {path} ({exc})", IOWarning)
        return False
    return True


def emit_report(result, output_path=OUTPUT_FILE, stream=None):
    """
    Print the run summary and write the report file on the coordinator.
    Matrices go to the console only for n <= MAX_CONSOLE_MATRIX_SIZE and
    to the file only for n <= MAX_FILE_MATRIX_SIZE.
    """
    stream = stream if stream is not None else sys.stdout
    summary = format_run_summary(result)
    print(summary, end="", file=stream)

    matrix_strings = []
    if result.n <= MAX_FILE_MATRIX_SIZE:
        matrix_strings = [get_matrix_string("Matrix A", result.A),
                          get_matrix_string("Matrix B", result.B),
                          get_matrix_string("Matrix C", result.C)]

        # Print to the console if the matrix is small enough
        if result.n <= MAX_CONSOLE_MATRIX_SIZE:
            print("\n".join(matrix_strings), end="", file=stream)

    return write_report(output_path, summary, matrix_strings)
