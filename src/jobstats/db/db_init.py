"""Database initialization helpers."""

from __future__ import annotations

import structlog
from sqlalchemy import MetaData
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Engine

from ..exceptions import StorageUnavailableError
from ..infrastructure.sqlalchemy.schema import metadata as statistics_metadata

logger = structlog.get_logger(__name__)


def init_db(engine: Engine, metadata: MetaData = statistics_metadata) -> None:
    """Create statistics tables and their indices if they are missing.

    Every table and index is created independently, so a node racing another
    one against a shared store converges on retry.
    """

    for table in metadata.sorted_tables:
        _create(engine, table, kind="table")
        for index in sorted(table.indexes, key=lambda item: item.name or ""):
            _create(engine, index, kind="index")
    logger.info("statistics_schema_ready", tables=len(metadata.sorted_tables))


def _create(engine: Engine, element, *, kind: str) -> None:
    try:
        element.create(engine, checkfirst=True)
    except sa_exc.DBAPIError as exc:
        if _already_exists(exc):
            logger.debug(
                "statistics_schema_already_exists", kind=kind, name=element.name
            )
            return
        raise StorageUnavailableError(
            f"failed to create {kind} {element.name}: {exc.orig}"
        ) from exc
    except sa_exc.SQLAlchemyError as exc:
        raise StorageUnavailableError(
            f"failed to create {kind} {element.name}: {exc}"
        ) from exc


def _already_exists(exc: sa_exc.DBAPIError) -> bool:
    return "already exists" in str(exc.orig).lower()


__all__ = ["init_db"]
