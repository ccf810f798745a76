"""SQLAlchemy metadata describing the statistics tables."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Table,
    func,
)

from ...domain.models import StatisticInterval

metadata = MetaData()

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
_IdType = BigInteger().with_variant(Integer(), "sqlite")


def _statistics_table(name: str, *counter_columns: str) -> Table:
    table = Table(
        name,
        metadata,
        Column("id", _IdType, primary_key=True, autoincrement=True),
        *(Column(column, Integer, nullable=False) for column in counter_columns),
        Column("statistics_time", DateTime(timezone=True), nullable=False),
        Column(
            "creation_time",
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
    )
    Index(f"ix_{name.lower()}_statistics_time", table.c.statistics_time)
    return table


def task_result_table_name(interval: StatisticInterval) -> str:
    return f"TASK_RESULT_STATISTICS_{interval.table_suffix}"


task_result_tables: Mapping[StatisticInterval, Table] = MappingProxyType(
    {
        interval: _statistics_table(
            task_result_table_name(interval), "success_count", "failed_count"
        )
        for interval in StatisticInterval
    }
)

task_running_statistics = _statistics_table("TASK_RUNNING_STATISTICS", "running_count")
job_running_statistics = _statistics_table("JOB_RUNNING_STATISTICS", "running_count")
job_register_statistics = _statistics_table(
    "JOB_REGISTER_STATISTICS", "registered_count"
)


def _check_interval_routing() -> None:
    missing = [
        interval.name
        for interval in StatisticInterval
        if interval not in task_result_tables
    ]
    if missing:
        raise RuntimeError(f"No task result table routed for intervals: {missing}")


_check_interval_routing()

__all__ = [
    "metadata",
    "job_register_statistics",
    "job_running_statistics",
    "task_result_table_name",
    "task_result_tables",
    "task_running_statistics",
]
