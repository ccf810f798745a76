"""Domain layer exports for the job statistics repository."""

from .models import (
    ABSENT,
    COUNTER_MAX,
    Absent,
    JobRegisterStatistics,
    JobRunningStatistics,
    Latest,
    Present,
    StatisticInterval,
    StatisticsRecord,
    TaskResultStatistics,
    TaskRunningStatistics,
)

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
