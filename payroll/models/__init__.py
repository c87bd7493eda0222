"""Database models for the payroll domain."""
from __future__ import annotations

from .base import Base, IdentifiableEntity
from .employees import Employee
from .organizations import Organization
from .payments import Payment

__all__ = [
    "Base",
    "IdentifiableEntity",
    "Employee",
    "Organization",
    "Payment",
]
