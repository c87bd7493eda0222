"""Shared helpers for read-only repositories."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    ResourceClosedError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

from payroll.core.errors import DatabaseConnectionError, ParameterError, QueryExecutionError


class BaseRepository:
    """Base repository providing parameter checks, execution and coercion helpers.

    Repositories hold no state; every query runs on the session handed in by
    the caller, who also owns its transaction and lifetime.
    """

    @staticmethod
    def _require_text(name: str, value: Any) -> str:
        if value is None:
            raise ParameterError(name, "must not be None")
        if not isinstance(value, str):
            raise ParameterError(name, f"expected str, got {type(value).__name__}")
        return value

    @staticmethod
    def _require_limit(name: str, value: Any) -> int:
        if value is None:
            raise ParameterError(name, "must not be None")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParameterError(name, f"expected int, got {type(value).__name__}")
        if value < 0:
            raise ParameterError(name, "must be non-negative")
        return value

    @staticmethod
    def _check_session(session: Any) -> Session:
        if not isinstance(session, Session):
            raise DatabaseConnectionError(
                f"Expected an open SQLAlchemy Session, got {type(session).__name__}"
            )
        if not session.is_active:
            raise DatabaseConnectionError(
                "Session transaction is inactive; roll it back before querying"
            )
        try:
            session.connection()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError(f"Could not acquire a connection: {exc}") from exc
        return session

    def _execute(self, session: Any, statement: Executable) -> Result[Any]:
        """Run ``statement`` on ``session`` and translate driver failures."""

        session = self._check_session(session)
        try:
            return session.execute(statement)
        except (DisconnectionError, ResourceClosedError, InterfaceError) as exc:
            raise DatabaseConnectionError(str(exc)) from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise DatabaseConnectionError(str(exc)) from exc
            raise QueryExecutionError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise QueryExecutionError(str(exc)) from exc

    @staticmethod
    def _to_optional_decimal(value: Any) -> Decimal | None:
        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        if value is None:
            return Decimal(0)
        return Decimal(str(value))
