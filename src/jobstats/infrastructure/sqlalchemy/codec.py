"""Row codec mapping statistics records to and from table rows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping

from sqlalchemy import Table

from ...domain.clock import as_utc, from_epoch_millis
from ...domain.models import (
    COUNTER_MAX,
    JobRegisterStatistics,
    JobRunningStatistics,
    StatisticInterval,
    StatisticsRecord,
    TaskResultStatistics,
    TaskRunningStatistics,
)
from ...exceptions import InvalidArgumentError, ensure_argument
from .schema import (
    job_register_statistics,
    job_running_statistics,
    task_result_tables,
    task_running_statistics,
)


@dataclass(frozen=True, slots=True)
class CounterFamily:
    """Single-counter family stored in one table."""

    record_type: Callable[..., StatisticsRecord]
    table: Table
    counter: str


TASK_RUNNING = CounterFamily(TaskRunningStatistics, task_running_statistics, "running_count")
JOB_RUNNING = CounterFamily(JobRunningStatistics, job_running_statistics, "running_count")
JOB_REGISTER = CounterFamily(
    JobRegisterStatistics, job_register_statistics, "registered_count"
)

_COUNTER_FAMILIES: Mapping[type, CounterFamily] = {
    TaskRunningStatistics: TASK_RUNNING,
    JobRunningStatistics: JOB_RUNNING,
    JobRegisterStatistics: JOB_REGISTER,
}


def coerce_interval(value: object) -> StatisticInterval:
    """Return ``value`` as a :class:`StatisticInterval` or raise."""

    if isinstance(value, StatisticInterval):
        return value
    ensure_argument(value, name="interval")
    try:
        return StatisticInterval(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"unknown statistic interval: {value!r}") from exc


def coerce_timestamp(value: object, *, name: str = "statistics_time") -> datetime:
    """Accept aware/naive datetimes or UTC epoch milliseconds."""

    ensure_argument(value, name=name)
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return from_epoch_millis(value)
    raise InvalidArgumentError(
        f"{name} must be a datetime or epoch milliseconds, got {type(value).__name__}"
    )


def _counter(value: object, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {value}")
    if value > COUNTER_MAX:
        raise InvalidArgumentError(f"{name} exceeds {COUNTER_MAX}, got {value}")
    return value


def encode_record(record: StatisticsRecord | None) -> tuple[Table, dict[str, Any]]:
    """Validate ``record`` and return the target table with its column values."""

    ensure_argument(record, name="record")
    if isinstance(record, TaskResultStatistics):
        interval = coerce_interval(record.statistic_interval)
        return task_result_tables[interval], {
            "success_count": _counter(record.success_count, name="success_count"),
            "failed_count": _counter(record.failed_count, name="failed_count"),
            "statistics_time": coerce_timestamp(record.statistics_time),
        }
    family = _COUNTER_FAMILIES.get(type(record))
    if family is None:
        raise InvalidArgumentError(
            f"unsupported statistics record: {type(record).__name__}"
        )
    return family.table, {
        family.counter: _counter(getattr(record, family.counter), name=family.counter),
        "statistics_time": coerce_timestamp(record.statistics_time),
    }


def _creation_time(row: Mapping[str, Any]) -> datetime | None:
    value = row.get("creation_time")
    return as_utc(value) if value is not None else None


def decode_task_result(
    row: Mapping[str, Any], interval: StatisticInterval
) -> TaskResultStatistics:
    return TaskResultStatistics(
        success_count=int(row["success_count"]),
        failed_count=int(row["failed_count"]),
        statistic_interval=interval,
        statistics_time=as_utc(row["statistics_time"]),
        id=row["id"],
        creation_time=_creation_time(row),
    )


def decode_counter_row(
    row: Mapping[str, Any], family: CounterFamily
) -> StatisticsRecord:
    return family.record_type(
        int(row[family.counter]),
        as_utc(row["statistics_time"]),
        id=row["id"],
        creation_time=_creation_time(row),
    )


__all__ = [
    "CounterFamily",
    "JOB_REGISTER",
    "JOB_RUNNING",
    "TASK_RUNNING",
    "coerce_interval",
    "coerce_timestamp",
    "decode_counter_row",
    "decode_task_result",
    "encode_record",
]
