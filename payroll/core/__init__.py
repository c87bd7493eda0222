"""Core utilities shared across the package."""

from .config import Settings, get_settings  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DatabaseConnectionError,
    ParameterError,
    PayrollError,
    QueryError,
    QueryExecutionError,
)
from .log import get_logger  # noqa: F401

__all__ = [
    "ConfigurationError",
    "DatabaseConnectionError",
    "ParameterError",
    "PayrollError",
    "QueryError",
    "QueryExecutionError",
    "Settings",
    "get_logger",
    "get_settings",
]
