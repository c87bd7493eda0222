"""ORM model for organizations that employ staff."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdentifiableEntity

if TYPE_CHECKING:
    from .employees import Employee


class Organization(IdentifiableEntity, Base):
    """An employer. Names are expected to be unique but this is not enforced."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(160), nullable=False)

    employees: Mapped[list["Employee"]] = relationship(back_populates="organization")

    def __repr__(self) -> str:
        return f"Organization(id={self.id!r}, name={self.name!r})"
