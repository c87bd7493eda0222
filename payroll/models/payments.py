"""ORM model for payments made to employees."""
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import ID_TYPE, Base, IdentifiableEntity

if TYPE_CHECKING:
    from .employees import Employee


class Payment(IdentifiableEntity, Base):
    """A single payout. Its organization is the receiver's organization."""

    __tablename__ = "payments"

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    receiver_id: Mapped[int] = mapped_column(
        ID_TYPE, ForeignKey("employees.id"), nullable=False, index=True
    )

    receiver: Mapped["Employee"] = relationship(back_populates="payments")

    def __repr__(self) -> str:
        return f"Payment(id={self.id!r}, amount={self.amount!r}, receiver_id={self.receiver_id!r})"
