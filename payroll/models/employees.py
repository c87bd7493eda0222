"""ORM model for employees."""
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import ID_TYPE, Base, IdentifiableEntity

if TYPE_CHECKING:
    from .organizations import Organization
    from .payments import Payment


class Employee(IdentifiableEntity, Base):
    """A person on an organization's payroll."""

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    birthday: Mapped[date | None] = mapped_column(Date)
    organization_id: Mapped[int | None] = mapped_column(
        ID_TYPE, ForeignKey("organizations.id"), nullable=True, index=True
    )

    organization: Mapped[Optional["Organization"]] = relationship(back_populates="employees")
    payments: Mapped[list["Payment"]] = relationship(back_populates="receiver")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return (
            f"Employee(id={self.id!r}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, birthday={self.birthday!r})"
        )
