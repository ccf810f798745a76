"""Timestamp helpers shared by repository callers and test fixtures.

Statistics timestamps are UTC instants. Callers that think in epoch
milliseconds convert through :func:`from_epoch_millis`; callers that collect
task results align ``statistics_time`` to the bucket start with
:func:`floor_to_interval` before handing the record to the repository.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .models import StatisticInterval

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Interpret naive values as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


def to_epoch_millis(value: datetime) -> int:
    delta = as_utc(value) - _EPOCH
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000


def floor_to_interval(value: datetime, interval: StatisticInterval) -> datetime:
    """Return the start of the ``interval`` bucket containing ``value``."""

    current = as_utc(value).replace(second=0, microsecond=0)
    if interval is StatisticInterval.MINUTE:
        return current
    if interval is StatisticInterval.HOUR:
        return current.replace(minute=0)
    if interval is StatisticInterval.DAY:
        return current.replace(hour=0, minute=0)
    raise ValueError(f"Unsupported statistic interval: {interval}")


__all__ = [
    "as_utc",
    "floor_to_interval",
    "from_epoch_millis",
    "to_epoch_millis",
    "utcnow",
]
