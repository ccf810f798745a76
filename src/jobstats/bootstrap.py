"""Wiring helpers for processes that record or read statistics."""

from __future__ import annotations

from .core.config import StatisticsConfig
from .db.engine import build_engine
from .infrastructure.sqlalchemy.statistics_repository import (
    SqlAlchemyStatisticsRepository,
)
from .logging import configure_logging


def create_statistics_repository(
    config: StatisticsConfig | None = None,
) -> SqlAlchemyStatisticsRepository:
    """Configure logging, build the engine and return a provisioned repository."""

    settings = config or StatisticsConfig.build_default()
    configure_logging(settings.log_level)
    return SqlAlchemyStatisticsRepository(build_engine(settings))


__all__ = ["create_statistics_repository"]
