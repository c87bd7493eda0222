"""Serializable views of query results."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer


class EmployeeOut(BaseModel):
    """An employee as returned by the listing queries."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    birthday: date | None = None
    organization_id: int | None = None


class PaymentOut(BaseModel):
    """A payment together with its receiver."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    receiver: EmployeeOut

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return format(value, "f")


class AveragePaymentOut(BaseModel):
    """Average payment for one first/last name pair."""

    first_name: str
    last_name: str
    average_amount: Decimal | None = None

    @field_serializer("average_amount")
    def _serialize_average(self, value: Decimal | None) -> str | None:
        return None if value is None else format(value, "f")


class OrganizationAverageOut(BaseModel):
    """Average payment per organization."""

    model_config = ConfigDict(from_attributes=True)

    organization_name: str
    average_amount: Decimal

    @field_serializer("average_amount")
    def _serialize_average(self, value: Decimal) -> str:
        return format(value, "f")


class EmployeeAverageOut(BaseModel):
    """An employee paired with their personal average payment."""

    model_config = ConfigDict(from_attributes=True)

    employee: EmployeeOut
    average_amount: Decimal

    @field_serializer("average_amount")
    def _serialize_average(self, value: Decimal) -> str:
        return format(value, "f")
