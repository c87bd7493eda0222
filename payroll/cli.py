"""Run the payroll queries from the command line.

Examples::

    payroll-report --url sqlite:///payroll.db init-db
    payroll-report employees --organization "Acme Corp"
    payroll-report --json above-average
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Callable, Sequence

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payroll.core.config import LoggingSettings, get_settings
from payroll.core.errors import PayrollError
from payroll.core.log import get_logger, init_logging
from payroll.db import create_schema, create_sync_engine, session_scope
from payroll.models import Employee
from payroll.repositories import EmployeeRepository
from payroll.schemas import (
    AveragePaymentOut,
    EmployeeAverageOut,
    EmployeeOut,
    OrganizationAverageOut,
    PaymentOut,
)

LOGGER = get_logger("payroll.cli")

_EMPLOYEE_COLUMNS = ["ID", "First name", "Last name", "Birthday", "Organization ID"]


@dataclass
class Report:
    """Query output ready to be rendered as a table or JSON."""

    title: str
    columns: list[str]
    rows: list[tuple[str, ...]]
    items: list[BaseModel]


def _employee_cells(employee: Employee) -> tuple[str, ...]:
    return (
        str(employee.id),
        employee.first_name,
        employee.last_name,
        employee.birthday.isoformat() if employee.birthday else "",
        "" if employee.organization_id is None else str(employee.organization_id),
    )


def _employee_report(title: str, employees: list[Employee]) -> Report:
    return Report(
        title=title,
        columns=_EMPLOYEE_COLUMNS,
        rows=[_employee_cells(employee) for employee in employees],
        items=[EmployeeOut.model_validate(employee) for employee in employees],
    )


def _employees(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    if args.first_name is not None:
        employees = repository.find_all_by_first_name(session, args.first_name)
        return _employee_report(f"Employees named {args.first_name}", employees)
    if args.organization is not None:
        employees = repository.find_all_by_organization_name(session, args.organization)
        return _employee_report(f"Employees of {args.organization}", employees)
    return _employee_report("Employees", repository.find_all(session))


def _by_birthday(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    employees = repository.find_limited_ordered_by_birthday(session, args.limit)
    return _employee_report(f"First {args.limit} employees by birthday", employees)


def _payments(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    payments = repository.find_all_payments_by_organization_name(session, args.organization)
    return Report(
        title=f"Payments to employees of {args.organization}",
        columns=["Payment ID", "Receiver", "Amount"],
        rows=[
            (str(payment.id), payment.receiver.full_name, format(payment.amount, "f"))
            for payment in payments
        ],
        items=[PaymentOut.model_validate(payment) for payment in payments],
    )


def _average(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    average = repository.find_average_payment_amount(session, args.first_name, args.last_name)
    item = AveragePaymentOut(
        first_name=args.first_name,
        last_name=args.last_name,
        average_amount=average,
    )
    return Report(
        title="Average payment",
        columns=["First name", "Last name", "Average amount"],
        rows=[(args.first_name, args.last_name, "" if average is None else format(average, "f"))],
        items=[item],
    )


def _org_averages(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    averages = repository.find_organization_average_payments(session)
    return Report(
        title="Average payment per organization",
        columns=["Organization", "Average amount"],
        rows=[(row.organization_name, format(row.average_amount, "f")) for row in averages],
        items=[OrganizationAverageOut.model_validate(row) for row in averages],
    )


def _above_average(repository: EmployeeRepository, session: Session, args: argparse.Namespace) -> Report:
    rows = repository.find_employees_above_organization_average(session)
    return Report(
        title="Employees paid above their organization's average",
        columns=["Employee", "Organization ID", "Average amount"],
        rows=[
            (
                row.employee.full_name,
                "" if row.employee.organization_id is None else str(row.employee.organization_id),
                format(row.average_amount, "f"),
            )
            for row in rows
        ],
        items=[EmployeeAverageOut.model_validate(row) for row in rows],
    )


Handler = Callable[[EmployeeRepository, Session, argparse.Namespace], Report]

_HANDLERS: dict[str, Handler] = {
    "employees": _employees,
    "by-birthday": _by_birthday,
    "payments": _payments,
    "average": _average,
    "org-averages": _org_averages,
    "above-average": _above_average,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="payroll-report", description=__doc__.splitlines()[0])
    parser.add_argument("--url", help="SQLAlchemy database URL (defaults to DB_* settings)")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL)")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("init-db", help="Create the employees/organizations/payments tables")

    employees = commands.add_parser("employees", help="List employees")
    group = employees.add_mutually_exclusive_group()
    group.add_argument("--first-name", help="Only employees with this exact first name")
    group.add_argument("--organization", help="Only employees of this organization")

    by_birthday = commands.add_parser("by-birthday", help="Oldest employees first")
    by_birthday.add_argument("--limit", type=int, required=True)

    payments = commands.add_parser("payments", help="Payments to an organization's employees")
    payments.add_argument("--organization", required=True)

    average = commands.add_parser("average", help="Average payment for one employee name")
    average.add_argument("--first-name", required=True)
    average.add_argument("--last-name", required=True)

    commands.add_parser("org-averages", help="Average payment per organization")
    commands.add_parser(
        "above-average", help="Employees paid more on average than their organization"
    )
    return parser


def _render(report: Report, as_json: bool) -> None:
    if as_json:
        print(json.dumps([item.model_dump(mode="json") for item in report.items], indent=2))
        return

    table = Table(title=report.title)
    for column in report.columns:
        table.add_column(column)
    for row in report.rows:
        table.add_row(*row)
    Console().print(table)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging_settings = LoggingSettings.from_env()
    init_logging(
        level=args.log_level or logging_settings.level,
        log_dir=logging_settings.log_dir,
    )

    try:
        get_settings()
        if args.command == "init-db":
            engine = create_sync_engine(args.url)
            try:
                create_schema(engine)
            finally:
                engine.dispose()
            return 0

        repository = EmployeeRepository()
        with session_scope(args.url) as session:
            report = _HANDLERS[args.command](repository, session, args)
            _render(report, args.json)
    except (PayrollError, SQLAlchemyError) as exc:
        LOGGER.error("%s failed: %s", args.command, exc)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
