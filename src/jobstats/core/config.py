"""Configuration for processes that host the statistics repository.

The repository itself only receives an :class:`~sqlalchemy.engine.Engine`;
these settings are read by the bootstrap helpers that build one.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StatisticsConfig(BaseSettings):
    """Pydantic settings container for the statistics store."""

    model_config = SettingsConfigDict(env_prefix="JOBSTATS_")

    database_url: str = Field(
        default="sqlite:///./var/statistics.db",
        description="SQLAlchemy URL of the statistics store",
    )
    echo_sql: bool = Field(
        default=False,
        description="Log every SQL statement emitted by the engine.",
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Test pooled connections before handing them out.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging.",
    )

    @classmethod
    def build_default(cls) -> "StatisticsConfig":
        """Construct configuration from the environment and defaults."""

        return cls()


__all__ = ["StatisticsConfig"]
