"""Declarative base and identity mixin shared by all ORM models."""
from __future__ import annotations

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass


class IdentifiableEntity:
    """Mixin providing the storage-assigned surrogate key."""

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
