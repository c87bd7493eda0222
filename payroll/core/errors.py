"""Exception hierarchy raised by the payroll query layer."""
from __future__ import annotations


class PayrollError(Exception):
    """Base class for all errors raised by this package."""


class QueryError(PayrollError):
    """An access-layer call could not produce a result."""


class DatabaseConnectionError(QueryError):
    """The session is unusable or no connection could be acquired."""


class ParameterError(QueryError, ValueError):
    """A bound parameter is missing or has an invalid value."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid parameter '{name}': {reason}")
        self.name = name
        self.reason = reason


class QueryExecutionError(QueryError):
    """The database engine rejected the statement."""


class ConfigurationError(PayrollError, ValueError):
    """An environment setting could not be parsed."""
