import pytest

from errors import ConfigurationError
from partition_planner import PartitionPlan, plan_partition


def test_even_split():
    plan = plan_partition(8, 4)
    assert plan == PartitionPlan(8, 4, 2)


def test_row_ranges_cover_all_rows_once():
    plan = plan_partition(12, 3)
    rows = []
    for rank in range(plan.size):
        start_row, end_row = plan.row_range(rank)
        rows.extend(range(start_row, end_row))
    assert rows == list(range(12))


def test_single_worker_owns_everything():
    assert plan_partition(5, 1).row_range(0) == (0, 5)


@pytest.mark.parametrize("n", [0, -4])
def test_non_positive_size(n):
    with pytest.raises(ConfigurationError) as excinfo:
        plan_partition(n, 2)
    assert excinfo.value.reason == ConfigurationError.NON_POSITIVE_SIZE


def test_not_divisible():
    with pytest.raises(ConfigurationError) as excinfo:
        plan_partition(5, 2)
    assert excinfo.value.reason == ConfigurationError.NOT_DIVISIBLE
    assert "divisible" in str(excinfo.value)


def test_rank_outside_group():
    with pytest.raises(ValueError):
        plan_partition(4, 2).row_range(2)


def test_empty_group_rejected():
    with pytest.raises(ValueError):
        plan_partition(4, 0)
