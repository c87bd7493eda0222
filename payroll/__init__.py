"""Read-only query layer over employees, organizations and payments."""

from .core import get_logger, get_settings
from .repositories import EmployeeRepository

__all__ = ["EmployeeRepository", "get_logger", "get_settings"]
