"""DDL helpers for the employees/organizations/payments schema."""
from __future__ import annotations

from sqlalchemy.engine import Connection, Engine

from payroll.core.log import get_logger
from payroll.models import Base

LOGGER = get_logger(__name__)


def create_schema(bind: Engine | Connection) -> None:
    """Create any missing tables. Existing tables are left untouched."""

    LOGGER.info("Creating tables: %s", ", ".join(sorted(Base.metadata.tables)))
    Base.metadata.create_all(bind)
