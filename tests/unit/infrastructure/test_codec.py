from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.jobstats.domain.models import (
    COUNTER_MAX,
    JobRegisterStatistics,
    JobRunningStatistics,
    StatisticInterval,
    TaskResultStatistics,
    TaskRunningStatistics,
)
from src.jobstats.exceptions import InvalidArgumentError
from src.jobstats.infrastructure.sqlalchemy import codec
from src.jobstats.infrastructure.sqlalchemy.schema import (
    job_register_statistics,
    job_running_statistics,
    task_result_tables,
    task_running_statistics,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("interval", list(StatisticInterval))
def test_task_result_routes_to_interval_table(interval, t0) -> None:
    table, values = codec.encode_record(TaskResultStatistics(100, 2, interval, t0))

    assert table is task_result_tables[interval]
    assert table.name == f"TASK_RESULT_STATISTICS_{interval.value}"
    assert values == {
        "success_count": 100,
        "failed_count": 2,
        "statistics_time": t0,
    }


@pytest.mark.parametrize(
    ("record", "table", "column"),
    [
        (TaskRunningStatistics(5, datetime(2025, 1, 1)), task_running_statistics, "running_count"),
        (JobRunningStatistics(6, datetime(2025, 1, 1)), job_running_statistics, "running_count"),
        (JobRegisterStatistics(7, datetime(2025, 1, 1)), job_register_statistics, "registered_count"),
    ],
)
def test_counter_records_route_to_family_table(record, table, column) -> None:
    encoded_table, values = codec.encode_record(record)

    assert encoded_table is table
    assert set(values) == {column, "statistics_time"}
    assert values["statistics_time"].tzinfo is timezone.utc


def test_encode_accepts_epoch_millis() -> None:
    _, values = codec.encode_record(JobRegisterStatistics(1, 0))

    assert values["statistics_time"] == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_encode_rejects_none_record() -> None:
    with pytest.raises(InvalidArgumentError, match="record must not be None"):
        codec.encode_record(None)


def test_encode_rejects_unknown_record_type() -> None:
    with pytest.raises(InvalidArgumentError, match="unsupported statistics record"):
        codec.encode_record(object())  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "record",
    [
        TaskResultStatistics(-1, 0, StatisticInterval.MINUTE, datetime(2025, 1, 1)),
        TaskResultStatistics(0, -3, StatisticInterval.DAY, datetime(2025, 1, 1)),
        TaskRunningStatistics(-1, datetime(2025, 1, 1)),
        JobRegisterStatistics(-10, datetime(2025, 1, 1)),
    ],
)
def test_encode_rejects_negative_counters(record) -> None:
    with pytest.raises(InvalidArgumentError, match="non-negative"):
        codec.encode_record(record)


def test_encode_rejects_counters_wider_than_storage_column() -> None:
    with pytest.raises(InvalidArgumentError, match="exceeds"):
        codec.encode_record(JobRunningStatistics(COUNTER_MAX + 1, datetime(2025, 1, 1)))


def test_encode_rejects_non_integer_counters() -> None:
    with pytest.raises(InvalidArgumentError, match="must be an integer"):
        codec.encode_record(JobRunningStatistics(True, datetime(2025, 1, 1)))


def test_encode_rejects_missing_timestamp() -> None:
    with pytest.raises(InvalidArgumentError, match="statistics_time must not be None"):
        codec.encode_record(TaskRunningStatistics(1, None))  # type: ignore[arg-type]


def test_encode_rejects_unknown_interval(t0) -> None:
    record = TaskResultStatistics(1, 1, "WEEK", t0)  # type: ignore[arg-type]

    with pytest.raises(InvalidArgumentError, match="unknown statistic interval"):
        codec.encode_record(record)


def test_coerce_interval_accepts_enum_values() -> None:
    assert codec.coerce_interval("DAY") is StatisticInterval.DAY


def test_decode_task_result_restores_store_assigned_fields() -> None:
    row = {
        "id": 42,
        "success_count": 10,
        "failed_count": 1,
        "statistics_time": datetime(2025, 1, 1, 12, 0),
        "creation_time": datetime(2025, 1, 1, 12, 0, 5),
    }

    record = codec.decode_task_result(row, StatisticInterval.HOUR)

    assert record == TaskResultStatistics(
        success_count=10,
        failed_count=1,
        statistic_interval=StatisticInterval.HOUR,
        statistics_time=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        id=42,
        creation_time=datetime(2025, 1, 1, 12, 0, 5, tzinfo=timezone.utc),
    )


def test_decode_counter_row_builds_family_record() -> None:
    row = {
        "id": 3,
        "registered_count": 200,
        "statistics_time": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "creation_time": None,
    }

    record = codec.decode_counter_row(row, codec.JOB_REGISTER)

    assert isinstance(record, JobRegisterStatistics)
    assert record.registered_count == 200
    assert record.id == 3
    assert record.creation_time is None
