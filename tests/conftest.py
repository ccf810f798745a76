from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest
import sqlalchemy as sa
from sqlalchemy.engine import Engine

from src.jobstats.infrastructure.sqlalchemy.statistics_repository import (
    SqlAlchemyStatisticsRepository,
)

T0 = datetime(2025, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)
YESTERDAY = T0 - timedelta(milliseconds=86_400_000)


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = sa.create_engine("sqlite:///:memory:", future=True)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine: Engine) -> SqlAlchemyStatisticsRepository:
    return SqlAlchemyStatisticsRepository(engine)


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def yesterday() -> datetime:
    return YESTERDAY
