"""Read-only queries over employees, their organizations and their payments."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select

from payroll.core.log import get_logger, timeit
from payroll.models import Employee, Organization, Payment

from .base import BaseRepository

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class OrganizationAverage:
    organization_name: str
    average_amount: Decimal


@dataclass(frozen=True)
class EmployeeAverage:
    employee: Employee
    average_amount: Decimal


class EmployeeRepository(BaseRepository):
    """Query façade for the employee/organization/payment schema.

    Construct it once and share it freely: it keeps no state between calls.
    Every method takes the caller's open ``Session`` and issues a single
    ``SELECT``.
    """

    def find_all(self, session: Any) -> list[Employee]:
        """Return every employee in storage order."""

        with timeit("find_all", logger=LOGGER) as timer:
            employees = list(self._execute(session, select(Employee)).scalars())
            timer.set_count(len(employees))
        return employees

    def find_all_by_first_name(self, session: Any, first_name: str) -> list[Employee]:
        """Return employees whose first name matches exactly."""

        first_name = self._require_text("first_name", first_name)
        LOGGER.debug("Finding employees with first_name=%r", first_name)

        statement = select(Employee).where(Employee.first_name == first_name)
        with timeit("find_all_by_first_name", logger=LOGGER) as timer:
            employees = list(self._execute(session, statement).scalars())
            timer.set_count(len(employees))
        return employees

    def find_limited_ordered_by_birthday(self, session: Any, limit: int) -> list[Employee]:
        """Return at most ``limit`` employees, oldest birthday first.

        Ties on birthday come back in whatever order the database chooses.
        """

        limit = self._require_limit("limit", limit)
        LOGGER.debug("Finding %d employees ordered by birthday", limit)

        statement = select(Employee).order_by(Employee.birthday.asc()).limit(limit)
        with timeit("find_limited_ordered_by_birthday", logger=LOGGER) as timer:
            employees = list(self._execute(session, statement).scalars())
            timer.set_count(len(employees))
        return employees

    def find_all_by_organization_name(
        self, session: Any, organization_name: str
    ) -> list[Employee]:
        """Return employees of the organization(s) named ``organization_name``."""

        organization_name = self._require_text("organization_name", organization_name)
        LOGGER.debug("Finding employees of organization %r", organization_name)

        statement = (
            select(Employee)
            .join(Employee.organization)
            .where(Organization.name == organization_name)
        )
        with timeit("find_all_by_organization_name", logger=LOGGER) as timer:
            employees = list(self._execute(session, statement).scalars())
            timer.set_count(len(employees))
        return employees

    def find_all_payments_by_organization_name(
        self, session: Any, organization_name: str
    ) -> list[Payment]:
        """Return payments received by the organization's employees.

        Ordered by receiver first name, then amount; payment id breaks any
        remaining ties so the order is stable across calls.
        """

        organization_name = self._require_text("organization_name", organization_name)
        LOGGER.debug("Finding payments for organization %r", organization_name)

        statement = (
            select(Payment)
            .join(Payment.receiver)
            .join(Employee.organization)
            .where(Organization.name == organization_name)
            .order_by(Employee.first_name.asc(), Payment.amount.asc(), Payment.id.asc())
        )
        with timeit("find_all_payments_by_organization_name", logger=LOGGER) as timer:
            payments = list(self._execute(session, statement).scalars())
            timer.set_count(len(payments))
        return payments

    def find_average_payment_amount(
        self, session: Any, first_name: str, last_name: str
    ) -> Decimal | None:
        """Average payment to employees named ``first_name last_name``.

        Returns ``None`` when no such employee has been paid.
        """

        first_name = self._require_text("first_name", first_name)
        last_name = self._require_text("last_name", last_name)
        LOGGER.debug("Averaging payments for %r %r", first_name, last_name)

        statement = (
            select(func.avg(Payment.amount))
            .select_from(Payment)
            .join(Payment.receiver)
            .where(Employee.first_name == first_name, Employee.last_name == last_name)
        )
        with timeit("find_average_payment_amount", logger=LOGGER):
            value = self._execute(session, statement).scalar_one_or_none()
        return self._to_optional_decimal(value)

    def find_organization_average_payments(self, session: Any) -> list[OrganizationAverage]:
        """Average payment per organization, ordered by organization name.

        Organizations without any payments are omitted.
        """

        average_amount = func.avg(Payment.amount).label("average_amount")
        statement = (
            select(Organization.name, average_amount)
            .select_from(Payment)
            .join(Payment.receiver)
            .join(Employee.organization)
            .group_by(Organization.id, Organization.name)
            .order_by(Organization.name.asc())
        )
        with timeit("find_organization_average_payments", logger=LOGGER) as timer:
            rows = [
                OrganizationAverage(
                    organization_name=str(name),
                    average_amount=self._to_decimal(value),
                )
                for name, value in self._execute(session, statement)
            ]
            timer.set_count(len(rows))
        return rows

    def find_employees_above_organization_average(self, session: Any) -> list[EmployeeAverage]:
        """Employees whose own average payment beats their organization's average.

        The organization average is taken over all payments to that
        organization's employees, not over per-employee averages. The
        comparison is strict. Employees without an organization are skipped.
        Ordered by first name.
        """

        organization_average = (
            select(
                Employee.organization_id.label("organization_id"),
                func.avg(Payment.amount).label("average_amount"),
            )
            .select_from(Payment)
            .join(Payment.receiver)
            .where(Employee.organization_id.is_not(None))
            .group_by(Employee.organization_id)
            .subquery("organization_average")
        )
        personal_average = func.avg(Payment.amount)
        statement = (
            select(Employee, personal_average.label("average_amount"))
            .join(Employee.payments)
            .join(
                organization_average,
                organization_average.c.organization_id == Employee.organization_id,
            )
            .group_by(Employee.id, organization_average.c.average_amount)
            .having(personal_average > organization_average.c.average_amount)
            .order_by(Employee.first_name.asc())
        )
        with timeit("find_employees_above_organization_average", logger=LOGGER) as timer:
            rows = [
                EmployeeAverage(employee=employee, average_amount=self._to_decimal(value))
                for employee, value in self._execute(session, statement)
            ]
            timer.set_count(len(rows))
        return rows
