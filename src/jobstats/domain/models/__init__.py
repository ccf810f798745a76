"""Domain models for the job statistics repository.

Four counter families are persisted: task results (success/failure counts
per interval bucket), running tasks, running jobs and registered jobs. The
records are plain dataclasses; validation happens when a record is encoded
for storage so that the repository decides what it is willing to persist.

``id`` and ``creation_time`` are assigned by the store and stay ``None`` on
records that have not been written yet.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union

COUNTER_MAX = 2**31 - 1
"""Largest counter value representable by the ``INT`` storage columns."""


class StatisticInterval(str, Enum):
    """Bucket granularity of task result statistics.

    Each member selects its own physical table and describes the window the
    collecting scheduler aggregates over.
    """

    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"

    @property
    def table_suffix(self) -> str:
        return self.value

    @property
    def window(self) -> timedelta:
        return _WINDOWS[self]

    @property
    def cron(self) -> str:
        """Quartz-style expression firing once per bucket."""

        return _CRON_EXPRESSIONS[self]


_WINDOWS = {
    StatisticInterval.MINUTE: timedelta(minutes=1),
    StatisticInterval.HOUR: timedelta(hours=1),
    StatisticInterval.DAY: timedelta(days=1),
}

_CRON_EXPRESSIONS = {
    StatisticInterval.MINUTE: "0 * * * * ?",
    StatisticInterval.HOUR: "0 0 * * * ?",
    StatisticInterval.DAY: "0 0 0 * * ?",
}


@dataclass(slots=True)
class TaskResultStatistics:
    """Success and failure counters accumulated within one interval bucket."""

    success_count: int
    failed_count: int
    statistic_interval: StatisticInterval
    statistics_time: datetime
    id: int | None = None
    creation_time: datetime | None = None


@dataclass(slots=True)
class TaskRunningStatistics:
    """Number of running tasks sampled at ``statistics_time``."""

    running_count: int
    statistics_time: datetime
    id: int | None = None
    creation_time: datetime | None = None


@dataclass(slots=True)
class JobRunningStatistics:
    """Number of running jobs sampled at ``statistics_time``."""

    running_count: int
    statistics_time: datetime
    id: int | None = None
    creation_time: datetime | None = None


@dataclass(slots=True)
class JobRegisterStatistics:
    """Running total of registered jobs sampled at ``statistics_time``."""

    registered_count: int
    statistics_time: datetime
    id: int | None = None
    creation_time: datetime | None = None


StatisticsRecord = Union[
    TaskResultStatistics,
    TaskRunningStatistics,
    JobRunningStatistics,
    JobRegisterStatistics,
]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Present(Generic[T]):
    """A latest-row lookup that found a row."""

    value: T

    @property
    def is_present(self) -> bool:
        return True

    def get(self) -> T:
        return self.value


class Absent:
    """A latest-row lookup against an empty table.

    Distinct from a present row whose counters happen to be zero.
    """

    __slots__ = ()

    @property
    def is_present(self) -> bool:
        return False

    def get(self) -> NoReturn:
        raise LookupError("no statistics row present")

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

Latest = Union[Present[T], Absent]


__all__ = [
    "ABSENT",
    "COUNTER_MAX",
    "Absent",
    "JobRegisterStatistics",
    "JobRunningStatistics",
    "Latest",
    "Present",
    "StatisticInterval",
    "StatisticsRecord",
    "TaskResultStatistics",
    "TaskRunningStatistics",
]
