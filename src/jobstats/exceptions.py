"""Domain level exceptions and helpers for repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "InvalidArgumentError",
    "RepositoryError",
    "StorageUnavailableError",
    "TransientStorageError",
    "ensure_argument",
    "handle_sqlalchemy_errors",
]


class AppError(Exception):
    """Base class for application specific errors."""


class InvalidArgumentError(AppError, ValueError):
    """Raised for programming errors such as ``None`` records or negative counters."""


class RepositoryError(AppError):
    """Base class for persistence layer failures."""


class StorageUnavailableError(RepositoryError):
    """Raised when the schema cannot be provisioned or the repository is not ready."""


class TransientStorageError(RepositoryError):
    """Raised for a failed statement after the repository became ready."""


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def ensure_argument(value: object | None, *, name: str) -> object:
    """Ensure a required argument was supplied, otherwise raise :class:`InvalidArgumentError`."""

    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def _translate_sqlalchemy_error(
    exc: sa_exc.SQLAlchemyError, *, context: _EntityContext
) -> RepositoryError:
    if isinstance(exc, sa_exc.DBAPIError):
        return TransientStorageError(
            context.format(f"database operation failed: {exc.orig}")
        )
    return TransientStorageError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into :class:`TransientStorageError`."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
