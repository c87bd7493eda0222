"""Pydantic schemas for serializing query results."""

from .reports import (
    AveragePaymentOut,
    EmployeeAverageOut,
    EmployeeOut,
    OrganizationAverageOut,
    PaymentOut,
)

__all__ = [
    "AveragePaymentOut",
    "EmployeeAverageOut",
    "EmployeeOut",
    "OrganizationAverageOut",
    "PaymentOut",
]
