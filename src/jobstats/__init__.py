"""Time-bucketed statistics repository for the elastic job scheduler.

Counters for task results, running tasks, running jobs and registered jobs
are appended by the scheduler and read back by dashboards.
"""

from .domain.models import (
    ABSENT,
    Absent,
    JobRegisterStatistics,
    JobRunningStatistics,
    Present,
    StatisticInterval,
    TaskResultStatistics,
    TaskRunningStatistics,
)
from .exceptions import (
    InvalidArgumentError,
    StorageUnavailableError,
    TransientStorageError,
)
from .infrastructure.sqlalchemy.statistics_repository import (
    SqlAlchemyStatisticsRepository,
)
from .infrastructure.statistics_repository import StatisticsRepository

__all__ = [
    "ABSENT",
    "Absent",
    "InvalidArgumentError",
    "JobRegisterStatistics",
    "JobRunningStatistics",
    "Present",
    "SqlAlchemyStatisticsRepository",
    "StatisticInterval",
    "StatisticsRepository",
    "StorageUnavailableError",
    "TaskResultStatistics",
    "TaskRunningStatistics",
    "TransientStorageError",
]
