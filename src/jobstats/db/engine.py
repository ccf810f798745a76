"""Engine construction for the statistics store."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from ..core.config import StatisticsConfig


def build_engine(config: StatisticsConfig) -> Engine:
    """Create an engine for ``config.database_url``.

    File-backed SQLite databases get their parent directory created so a
    fresh node can start without manual preparation.
    """

    url = make_url(config.database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        url,
        echo=config.echo_sql,
        pool_pre_ping=config.pool_pre_ping,
    )


__all__ = ["build_engine"]
