import matplotlib
import pandas as pd
import pytest

from between_methods import (TIME, benchmark_single_run, calculate_speedup,
                             create_comparison_table)


def test_single_run_times_every_method():
    records = benchmark_single_run(4, num_processes_list=[1])
    assert [r['Implementation'] for r in records] == ['Row-block-1', 'Sequential']
    assert all(r['Size'] == 4 and r[TIME] >= 0 for r in records)


def test_worker_counts_that_do_not_split_are_skipped():
    records = benchmark_single_run(3, num_processes_list=[1, 2])
    assert 2 not in [r['Workers'] for r in records if r['Implementation'] != 'Sequential']


def test_no_usable_worker_count():
    with pytest.raises(ValueError):
        benchmark_single_run(3, num_processes_list=[2])


def sample_results():
    return pd.DataFrame({
        'Size': [8, 8, 8, 16, 16, 16],
        'Implementation': ['Row-block-1', 'Row-block-2', 'Sequential'] * 2,
        'Workers': [1, 2, 1] * 2,
        TIME: [2.0, 1.0, 2.0, 8.0, 2.0, 8.0],
    })


def test_speedup_and_efficiency_per_worker_count():
    speedup_df = calculate_speedup(sample_results())
    two_workers = speedup_df[speedup_df['Workers'] == 2]
    assert list(two_workers['Speedup']) == [2.0, 4.0]
    assert list(two_workers['Efficiency']) == [1.0, 2.0]
    assert 'Sequential' not in set(speedup_df['Implementation'])


def test_comparison_table_one_row_per_size():
    results_df = sample_results()
    table_df = create_comparison_table(results_df, calculate_speedup(results_df))
    assert list(table_df.columns) == ['Size', 'Sequential (s)',
                                      '1 workers (s)', '1 workers Speedup',
                                      '2 workers (s)', '2 workers Speedup']
    assert list(table_df['Size']) == [8, 16]
    assert list(table_df['2 workers Speedup']) == [2.0, 4.0]


def test_import_leaves_plotting_backend_alone():
    backend = matplotlib.get_backend()
    import between_methods  # noqa: F401
    assert matplotlib.get_backend() == backend
