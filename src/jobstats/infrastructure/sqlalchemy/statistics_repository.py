"""SQLAlchemy implementation of :class:`StatisticsRepository`."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

import structlog
from sqlalchemy.engine import Engine

from ...db.db_init import init_db
from ...domain.models import (
    ABSENT,
    COUNTER_MAX,
    JobRegisterStatistics,
    JobRunningStatistics,
    Latest,
    Present,
    StatisticInterval,
    StatisticsRecord,
    TaskResultStatistics,
    TaskRunningStatistics,
)
from ...exceptions import (
    StorageUnavailableError,
    TransientStorageError,
    ensure_argument,
    handle_sqlalchemy_errors,
)
from ..statistics_repository import StatisticsRepository
from .codec import (
    JOB_REGISTER,
    JOB_RUNNING,
    TASK_RUNNING,
    CounterFamily,
    coerce_interval,
    coerce_timestamp,
    decode_counter_row,
    decode_task_result,
    encode_record,
)
from .queries import (
    FROM_TIME,
    SUMMED_TASK_RESULT_COLUMNS,
    StatementSet,
    TableStatements,
    build_statement_set,
)

logger = structlog.get_logger(__name__)

_Row = Mapping[str, Any]


class SqlAlchemyStatisticsRepository(StatisticsRepository):
    """Persist and query statistics using SQLAlchemy Core.

    The engine is the only shared resource: every operation borrows one
    connection for its duration and returns it on every exit path. Storage
    errors raised after provisioning are logged and converted to ``False``
    (writes) or to an empty result (reads).
    """

    def __init__(self, engine: Engine, *, provision: bool = True) -> None:
        ensure_argument(engine, name="engine")
        self._engine = engine
        self._statements: StatementSet = build_statement_set()
        self._ready = False
        if provision:
            self.provision()

    @property
    def is_ready(self) -> bool:
        return self._ready

    def provision(self) -> None:
        """Create the schema if needed and mark the repository ready."""

        init_db(self._engine)
        self._ready = True

    def add(self, record: StatisticsRecord) -> bool:
        self._ensure_ready()
        table, values = encode_record(record)
        statements = self._statements.for_table(table)
        try:
            with handle_sqlalchemy_errors(entity=table.name):
                with self._engine.begin() as conn:
                    conn.execute(statements.insert, values)
        except TransientStorageError as exc:
            logger.warning(
                "statistics_add_failed",
                table=table.name,
                error=str(exc),
                exc_info=exc,
            )
            return False
        return True

    def find_task_result_statistics(
        self, from_time: datetime, interval: StatisticInterval
    ) -> list[TaskResultStatistics]:
        self._ensure_ready()
        interval = coerce_interval(interval)
        statements = self._statements.task_result[interval]
        rows = self._fetch_since(statements, from_time)
        return [decode_task_result(row, interval) for row in rows]

    def get_summed_task_result_statistics(
        self, from_time: datetime, interval: StatisticInterval
    ) -> TaskResultStatistics:
        self._ensure_ready()
        interval = coerce_interval(interval)
        since = coerce_timestamp(from_time, name="from_time")
        statements = self._statements.task_result[interval]
        table_name = statements.table.name
        sums = dict.fromkeys(SUMMED_TASK_RESULT_COLUMNS, 0)
        try:
            with handle_sqlalchemy_errors(entity=table_name):
                with self._engine.connect() as conn:
                    row = conn.execute(
                        statements.sum_since, {FROM_TIME: since}
                    ).mappings().one()
        except TransientStorageError as exc:
            self._log_query_failure("get_summed_task_result_statistics", table_name, exc)
        else:
            for column in SUMMED_TASK_RESULT_COLUMNS:
                sums[column] = self._saturate(
                    int(row[column] or 0), table=table_name, column=column
                )
        return TaskResultStatistics(
            success_count=sums["success_count"],
            failed_count=sums["failed_count"],
            statistic_interval=interval,
            statistics_time=since,
        )

    def find_latest_task_result_statistics(
        self, interval: StatisticInterval
    ) -> Latest[TaskResultStatistics]:
        self._ensure_ready()
        interval = coerce_interval(interval)
        row = self._fetch_latest(self._statements.task_result[interval])
        if row is None:
            return ABSENT
        return Present(decode_task_result(row, interval))

    def find_task_running_statistics(
        self, from_time: datetime
    ) -> list[TaskRunningStatistics]:
        return self._find_counter_rows(TASK_RUNNING, from_time)

    def find_latest_task_running_statistics(self) -> Latest[TaskRunningStatistics]:
        return self._find_latest_counter_row(TASK_RUNNING)

    def find_job_running_statistics(
        self, from_time: datetime
    ) -> list[JobRunningStatistics]:
        return self._find_counter_rows(JOB_RUNNING, from_time)

    def find_latest_job_running_statistics(self) -> Latest[JobRunningStatistics]:
        return self._find_latest_counter_row(JOB_RUNNING)

    def find_job_register_statistics(
        self, from_time: datetime
    ) -> list[JobRegisterStatistics]:
        return self._find_counter_rows(JOB_REGISTER, from_time)

    def find_latest_job_register_statistics(self) -> Latest[JobRegisterStatistics]:
        return self._find_latest_counter_row(JOB_REGISTER)

    def _find_counter_rows(
        self, family: CounterFamily, from_time: datetime
    ) -> list[Any]:
        self._ensure_ready()
        rows = self._fetch_since(self._statements.for_table(family.table), from_time)
        return [decode_counter_row(row, family) for row in rows]

    def _find_latest_counter_row(self, family: CounterFamily) -> Latest[Any]:
        self._ensure_ready()
        row = self._fetch_latest(self._statements.for_table(family.table))
        if row is None:
            return ABSENT
        return Present(decode_counter_row(row, family))

    def _fetch_since(
        self, statements: TableStatements, from_time: datetime
    ) -> Sequence[_Row]:
        since = coerce_timestamp(from_time, name="from_time")
        table_name = statements.table.name
        try:
            with handle_sqlalchemy_errors(entity=table_name):
                with self._engine.connect() as conn:
                    return (
                        conn.execute(statements.find_since, {FROM_TIME: since})
                        .mappings()
                        .all()
                    )
        except TransientStorageError as exc:
            self._log_query_failure("find_since", table_name, exc)
            return []

    def _fetch_latest(self, statements: TableStatements) -> _Row | None:
        table_name = statements.table.name
        try:
            with handle_sqlalchemy_errors(entity=table_name):
                with self._engine.connect() as conn:
                    return conn.execute(statements.find_latest).mappings().first()
        except TransientStorageError as exc:
            self._log_query_failure("find_latest", table_name, exc)
            return None

    def _ensure_ready(self) -> None:
        if not self._ready:
            raise StorageUnavailableError("statistics repository is not provisioned")

    @staticmethod
    def _log_query_failure(
        operation: str, table_name: str, exc: TransientStorageError
    ) -> None:
        logger.warning(
            "statistics_query_failed",
            operation=operation,
            table=table_name,
            error=str(exc),
            exc_info=exc,
        )

    @staticmethod
    def _saturate(total: int, *, table: str, column: str) -> int:
        if total > COUNTER_MAX:
            logger.warning(
                "statistics_sum_saturated",
                table=table,
                column=column,
                total=total,
                limit=COUNTER_MAX,
            )
            return COUNTER_MAX
        return total


__all__ = ["SqlAlchemyStatisticsRepository"]
