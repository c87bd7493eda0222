from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterator

# Keep test runs from writing daily log files into the working directory.
os.environ["LOG_DIR"] = ""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from payroll.db import create_schema
from payroll.models import Employee, Organization, Payment
from payroll.repositories import EmployeeRepository


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine("sqlite://", future=True)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine, autoflush=False, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def repository() -> EmployeeRepository:
    return EmployeeRepository()


def _employee(
    first_name: str,
    last_name: str,
    birthday: date,
    organization: Organization | None,
) -> Employee:
    return Employee(
        first_name=first_name,
        last_name=last_name,
        birthday=birthday,
        organization=organization,
    )


@dataclass
class PayrollData:
    organizations: dict[str, Organization]
    employees: dict[str, Employee]


@pytest.fixture
def payroll_data(session: Session) -> PayrollData:
    """Four organizations, seven employees, ten payments.

    Acme: 6 payments totalling 1400; Alice Green averages 300, above the
    organization's 233.33. Globex: 3 payments totalling 210 (average 70);
    Dan averages 90. Initech has an unpaid employee, Umbrella has nobody and
    Eve has no organization at all.
    """

    acme = Organization(name="Acme")
    globex = Organization(name="Globex")
    initech = Organization(name="Initech")
    umbrella = Organization(name="Umbrella")
    session.add_all([acme, globex, initech, umbrella])

    employees = {
        "alice_smith": _employee("Alice", "Smith", date(1990, 5, 1), acme),
        "alice_green": _employee("Alice", "Green", date(1995, 1, 20), acme),
        "bob": _employee("Bob", "Jones", date(1985, 2, 10), acme),
        "carol": _employee("Carol", "White", date(1992, 11, 30), globex),
        "dan": _employee("Dan", "Black", date(1992, 11, 30), globex),
        "dave": _employee("Dave", "Brown", date(1979, 7, 15), initech),
        "eve": _employee("Eve", "Stone", date(1988, 3, 3), None),
    }
    session.add_all(employees.values())
    session.flush()

    for key, amount in [
        ("alice_smith", "300"),
        ("alice_smith", "100"),
        ("alice_green", "500"),
        ("alice_green", "100"),
        ("bob", "250"),
        ("bob", "150"),
        ("carol", "80"),
        ("carol", "40"),
        ("dan", "90"),
        ("eve", "1000"),
    ]:
        session.add(Payment(amount=Decimal(amount), receiver=employees[key]))
        session.flush()

    session.commit()
    return PayrollData(
        organizations={
            "acme": acme,
            "globex": globex,
            "initech": initech,
            "umbrella": umbrella,
        },
        employees=employees,
    )
