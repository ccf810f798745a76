"""Unit coverage for timestamp and interval helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.jobstats.domain import clock
from src.jobstats.domain.models import StatisticInterval

pytestmark = pytest.mark.unit


def test_as_utc_treats_naive_values_as_utc() -> None:
    naive = datetime(2025, 1, 1, 12, 0, 0)

    assert clock.as_utc(naive) == datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_as_utc_converts_offsets() -> None:
    plus_three = timezone(timedelta(hours=3))
    value = datetime(2025, 1, 1, 15, 0, 0, tzinfo=plus_three)

    converted = clock.as_utc(value)

    assert converted.tzinfo is timezone.utc
    assert converted.hour == 12


def test_epoch_millis_round_trip_is_exact() -> None:
    millis = 1_741_944_413_589

    value = clock.from_epoch_millis(millis)

    assert value.microsecond == 589_000
    assert clock.to_epoch_millis(value) == millis


def test_to_epoch_millis_handles_instants_before_epoch() -> None:
    value = datetime(1969, 12, 31, 23, 59, 59, 500_000, tzinfo=timezone.utc)

    assert clock.to_epoch_millis(value) == -500


@pytest.mark.parametrize(
    ("interval", "expected"),
    [
        (StatisticInterval.MINUTE, datetime(2025, 3, 14, 9, 26, tzinfo=timezone.utc)),
        (StatisticInterval.HOUR, datetime(2025, 3, 14, 9, 0, tzinfo=timezone.utc)),
        (StatisticInterval.DAY, datetime(2025, 3, 14, 0, 0, tzinfo=timezone.utc)),
    ],
)
def test_floor_to_interval_returns_bucket_start(
    interval: StatisticInterval, expected: datetime
) -> None:
    value = datetime(2025, 3, 14, 9, 26, 53, 589_000, tzinfo=timezone.utc)

    floored = clock.floor_to_interval(value, interval)

    assert floored == expected
    assert value - floored < interval.window


def test_utcnow_is_timezone_aware() -> None:
    assert clock.utcnow().tzinfo is timezone.utc
