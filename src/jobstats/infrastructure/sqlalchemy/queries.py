"""Pre-built SQLAlchemy Core statements for the statistics tables.

Statements are compiled once per table and shared between callers; the only
per-call input is the ``from_time`` bind parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

import sqlalchemy as sa

from ...domain.models import StatisticInterval
from .schema import (
    job_register_statistics,
    job_running_statistics,
    task_result_tables,
    task_running_statistics,
)

FROM_TIME = "from_time"

SUMMED_TASK_RESULT_COLUMNS = ("success_count", "failed_count")


@dataclass(frozen=True, slots=True)
class TableStatements:
    """Insert and select statements bound to one statistics table."""

    table: sa.Table
    insert: sa.Insert
    find_since: sa.Select
    find_latest: sa.Select
    sum_since: sa.Select | None = None


def build_statements(
    table: sa.Table, *, summed_columns: Iterable[str] = ()
) -> TableStatements:
    since = sa.bindparam(FROM_TIME, type_=table.c.statistics_time.type)
    window = table.c.statistics_time >= since
    sum_since = None
    summed = tuple(summed_columns)
    if summed:
        sum_since = sa.select(
            *(
                sa.func.coalesce(sa.func.sum(table.c[column]), 0).label(column)
                for column in summed
            )
        ).where(window)
    return TableStatements(
        table=table,
        insert=sa.insert(table),
        find_since=(
            sa.select(table)
            .where(window)
            .order_by(table.c.statistics_time.asc(), table.c.id.asc())
        ),
        find_latest=(
            sa.select(table)
            .order_by(table.c.statistics_time.desc(), table.c.id.desc())
            .limit(1)
        ),
        sum_since=sum_since,
    )


@dataclass(frozen=True, slots=True)
class StatementSet:
    """Immutable statement catalogue covering every statistics table."""

    task_result: Mapping[StatisticInterval, TableStatements]
    by_table: Mapping[str, TableStatements]

    def for_table(self, table: sa.Table) -> TableStatements:
        return self.by_table[table.name]


def build_statement_set() -> StatementSet:
    task_result = {
        interval: build_statements(table, summed_columns=SUMMED_TASK_RESULT_COLUMNS)
        for interval, table in task_result_tables.items()
    }
    by_table = {statements.table.name: statements for statements in task_result.values()}
    for table in (
        task_running_statistics,
        job_running_statistics,
        job_register_statistics,
    ):
        by_table[table.name] = build_statements(table)
    return StatementSet(
        task_result=MappingProxyType(task_result),
        by_table=MappingProxyType(by_table),
    )


__all__ = [
    "FROM_TIME",
    "SUMMED_TASK_RESULT_COLUMNS",
    "StatementSet",
    "TableStatements",
    "build_statement_set",
    "build_statements",
]
