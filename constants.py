import numpy as np


MATRIX_DTYPE = np.float32

# Seed shared by A and B so a run can be reproduced bit for bit
DEFAULT_SEED = 42
# Inclusive lower bound, exclusive upper bound of generated values
VALUE_RANGE = (-100, 101)

# Rank that owns the full A, B and C matrices and writes the report
COORDINATOR = 0

# Largest N whose matrices are echoed to the console / written to the report
MAX_CONSOLE_MATRIX_SIZE = 16
MAX_FILE_MATRIX_SIZE = 256
OUTPUT_FILE = "matrix_calculation.txt"
