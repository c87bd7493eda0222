"""Read-only data access for the payroll schema."""

from .base import BaseRepository
from .employee_repository import EmployeeAverage, EmployeeRepository, OrganizationAverage

__all__ = [
    "BaseRepository",
    "EmployeeAverage",
    "EmployeeRepository",
    "OrganizationAverage",
]
