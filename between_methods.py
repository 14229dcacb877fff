import os
import time

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.ticker import ScalarFormatter

from constants import DEFAULT_SEED
from local_compute_kernel import sequential_matrix_multiplication
from shared_memory_model import shared_memory_matrix_multiplication

SEQUENTIAL = 'Sequential'
TIME = 'Time (seconds)'


def benchmark_single_run(size, num_processes_list=(1, 2, 4, 8), seed=DEFAULT_SEED, verify=True):
    """
    Time every usable worker count on one matrix size, then the sequential
    triple loop on the same inputs.
    Returns: list of records (Size, Implementation, Workers, Time)
    """
    records = []
    run = None

    for num_proc in num_processes_list:
        # Only run if we have enough cores and the rows split evenly
        if num_proc > os.cpu_count() or size % num_proc != 0:
            continue
        run = shared_memory_matrix_multiplication(size, num_processes=num_proc, seed=seed,
                                                  verbose=False)
        records.append({'Size': size, 'Implementation': f'Row-block-{num_proc}',
                        'Workers': num_proc, TIME: run.elapsed})

    if run is None:
        raise ValueError(f"No worker count in {list(num_processes_list)} can split size {size}")

    start_time = time.time()
    expected_C = sequential_matrix_multiplication(run.A, run.B)
    records.append({'Size': size, 'Implementation': SEQUENTIAL, 'Workers': 1,
                    TIME: time.time() - start_time})

    if verify:
        assert np.array_equal(run.C, expected_C), f"Result incorrect for size {size}"

    return records


def run_benchmarks(sizes=(16, 32, 64, 128), num_processes_list=(1, 2, 4, 8), seed=DEFAULT_SEED):
    """Benchmark every size; one row per (size, implementation)"""
    records = []
    for size in sizes:
        print(f"\nBenchmarking matrices of size {size}x{size}")
        size_records = benchmark_single_run(size, num_processes_list, seed=seed)
        for record in size_records:
            print(f"  {record['Implementation']}: {record[TIME]:.4f} seconds")
        records.extend(size_records)

    return pd.DataFrame(records, columns=['Size', 'Implementation', 'Workers', TIME])


def calculate_speedup(results_df):
    """
    Speedup of each row-block run over the sequential loop of the same size,
    and efficiency = speedup / workers.
    """
    sequential = (results_df[results_df['Implementation'] == SEQUENTIAL]
                  .set_index('Size')[TIME].rename('Sequential time'))
    parallel = results_df[results_df['Implementation'] != SEQUENTIAL]

    speedup_df = parallel.join(sequential, on='Size')
    speedup_df['Speedup'] = speedup_df['Sequential time'] / speedup_df[TIME]
    speedup_df['Efficiency'] = speedup_df['Speedup'] / speedup_df['Workers']
    return speedup_df.drop(columns='Sequential time').reset_index(drop=True)


def plot_metric(df, value_name, title, filename, baseline=None, log_y=False):
    plt.figure(figsize=(12, 8))
    sns.lineplot(data=df, x='Size', y=value_name,
                 hue='Implementation', marker='o', linewidth=2.5)

    plt.xscale('log')
    if log_y:
        plt.yscale('log')
    plt.grid(True, which="both", ls="--", alpha=0.7)
    if baseline is not None:
        plt.axhline(y=baseline, color='r', linestyle='--', alpha=0.7)

    plt.title(title, fontsize=16)
    plt.xlabel('Matrix Size (n × n)', fontsize=14)
    plt.ylabel(value_name, fontsize=14)
    plt.gca().xaxis.set_major_formatter(ScalarFormatter())

    plt.legend(title='Implementation', bbox_to_anchor=(1.05, 1), loc='upper left')
    plt.tight_layout()
    plt.savefig(filename, dpi=300)
    plt.close()


def create_comparison_table(results_df, speedup_df):
    """One row per size: sequential time, then time and speedup per worker count"""
    table_df = (results_df[results_df['Implementation'] == SEQUENTIAL]
                .set_index('Size')[[TIME]]
                .rename(columns={TIME: 'Sequential (s)'}))

    per_workers = speedup_df.pivot(index='Size', columns='Workers', values=[TIME, 'Speedup'])
    for workers in sorted(speedup_df['Workers'].unique()):
        table_df[f'{workers} workers (s)'] = per_workers[(TIME, workers)]
        table_df[f'{workers} workers Speedup'] = per_workers[('Speedup', workers)]

    return table_df.reset_index()


def main():
    # Write PNG files without a display
    matplotlib.use("Agg")

    cpu_count = os.cpu_count()
    print(f"Running on a machine with {cpu_count} CPU cores")

    process_counts = [p for p in (1, 2, 4, 8) if p <= cpu_count]

    print("\nRunning benchmarks...")
    results_df = run_benchmarks(num_processes_list=process_counts)
    speedup_df = calculate_speedup(results_df)

    print("\nCreating visualizations...")
    plot_metric(results_df, TIME, 'Matrix Multiplication Performance Comparison',
                'matrix_multiplication_time_comparison.png', log_y=True)
    plot_metric(speedup_df, 'Speedup', 'Speedup of Row-Block Matrix Multiplication',
                'matrix_multiplication_speedup_comparison.png', baseline=1)
    plot_metric(speedup_df, 'Efficiency', 'Efficiency of Row-Block Matrix Multiplication',
                'matrix_multiplication_efficiency_comparison.png', baseline=1)

    table_df = create_comparison_table(results_df, speedup_df)
    print("\nPerformance Comparison Table:")
    print(table_df.to_string(index=False))
    table_df.to_csv('matrix_multiplication_results.csv', index=False)

    print("\nAnalysis complete. Visualization files saved.")


if __name__ == "__main__":
    main()
