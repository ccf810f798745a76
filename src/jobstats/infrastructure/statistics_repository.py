"""Repository interface for job and task statistics."""

from __future__ import annotations

from datetime import datetime

from ..domain.models import (
    JobRegisterStatistics,
    JobRunningStatistics,
    Latest,
    StatisticInterval,
    StatisticsRecord,
    TaskResultStatistics,
    TaskRunningStatistics,
)


class StatisticsRepository:
    """Append-only store for the counters collected by the job scheduler.

    Write failures surface as a ``False`` return and read failures as "no
    data"; implementations log every absorbed error.
    """

    def add(self, record: StatisticsRecord) -> bool:
        """Persist ``record`` in the table selected by its family."""

        raise NotImplementedError

    def find_task_result_statistics(
        self, from_time: datetime, interval: StatisticInterval
    ) -> list[TaskResultStatistics]:
        """Return rows with ``statistics_time >= from_time`` in time order."""

        raise NotImplementedError

    def get_summed_task_result_statistics(
        self, from_time: datetime, interval: StatisticInterval
    ) -> TaskResultStatistics:
        """Return success/failure sums over rows since ``from_time``."""

        raise NotImplementedError

    def find_latest_task_result_statistics(
        self, interval: StatisticInterval
    ) -> Latest[TaskResultStatistics]:
        raise NotImplementedError

    def find_task_running_statistics(
        self, from_time: datetime
    ) -> list[TaskRunningStatistics]:
        raise NotImplementedError

    def find_latest_task_running_statistics(self) -> Latest[TaskRunningStatistics]:
        raise NotImplementedError

    def find_job_running_statistics(
        self, from_time: datetime
    ) -> list[JobRunningStatistics]:
        raise NotImplementedError

    def find_latest_job_running_statistics(self) -> Latest[JobRunningStatistics]:
        raise NotImplementedError

    def find_job_register_statistics(
        self, from_time: datetime
    ) -> list[JobRegisterStatistics]:
        raise NotImplementedError

    def find_latest_job_register_statistics(self) -> Latest[JobRegisterStatistics]:
        raise NotImplementedError
