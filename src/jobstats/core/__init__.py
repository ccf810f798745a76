"""Core configuration for the statistics repository."""

from .config import StatisticsConfig

__all__ = ["StatisticsConfig"]
