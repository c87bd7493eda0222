from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from payroll.cli import build_parser, main
from payroll.core.config import get_settings
from payroll.models import Employee, Organization, Payment


@pytest.fixture
def database_url(tmp_path) -> str:
    url = f"sqlite:///{tmp_path / 'payroll.db'}"
    assert main(["--url", url, "init-db"]) == 0

    engine = create_engine(url, future=True)
    with Session(engine) as session:
        org_a = Organization(name="A")
        org_b = Organization(name="B")
        alice = Employee(first_name="Alice", last_name="Ames", birthday=date(1991, 4, 2), organization=org_a)
        bob = Employee(first_name="Bob", last_name="Byrne", birthday=date(1987, 9, 12), organization=org_a)
        carol = Employee(first_name="Carol", last_name="Cole", birthday=date(1993, 6, 5), organization=org_b)
        session.add_all(
            [
                Payment(amount=Decimal("100"), receiver=alice),
                Payment(amount=Decimal("200"), receiver=bob),
                Payment(amount=Decimal("50"), receiver=carol),
            ]
        )
        session.commit()
    engine.dispose()
    return url


def _json(capsys) -> list[dict]:
    return json.loads(capsys.readouterr().out)


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_employee_filters_are_mutually_exclusive() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["employees", "--first-name", "A", "--organization", "B"])


def test_above_average_json(database_url, capsys) -> None:
    assert main(["--url", database_url, "--json", "above-average"]) == 0

    payload = _json(capsys)
    assert len(payload) == 1
    assert payload[0]["employee"]["first_name"] == "Bob"
    assert Decimal(payload[0]["average_amount"]) == Decimal("200")


def test_org_averages_json(database_url, capsys) -> None:
    assert main(["--url", database_url, "--json", "org-averages"]) == 0

    payload = _json(capsys)
    assert [row["organization_name"] for row in payload] == ["A", "B"]
    assert [Decimal(row["average_amount"]) for row in payload] == [Decimal("150"), Decimal("50")]


def test_payments_json_includes_receiver(database_url, capsys) -> None:
    assert main(["--url", database_url, "--json", "payments", "--organization", "A"]) == 0

    payload = _json(capsys)
    assert [row["receiver"]["first_name"] for row in payload] == ["Alice", "Bob"]
    assert [Decimal(row["amount"]) for row in payload] == [Decimal("100"), Decimal("200")]


def test_average_without_match_is_null(database_url, capsys) -> None:
    assert main(
        ["--url", database_url, "--json", "average", "--first-name", "Zed", "--last-name", "Zane"]
    ) == 0

    assert _json(capsys) == [{"first_name": "Zed", "last_name": "Zane", "average_amount": None}]


def test_employees_by_birthday_json(database_url, capsys) -> None:
    assert main(["--url", database_url, "--json", "by-birthday", "--limit", "2"]) == 0

    payload = _json(capsys)
    assert [row["first_name"] for row in payload] == ["Bob", "Alice"]
    assert payload[0]["birthday"] == "1987-09-12"


def test_employees_table_output(database_url, capsys) -> None:
    assert main(["--url", database_url, "employees", "--organization", "B"]) == 0

    out = capsys.readouterr().out
    assert "Carol" in out
    assert "Alice" not in out


def test_invalid_limit_exits_with_error(database_url, capsys) -> None:
    assert main(["--url", database_url, "by-birthday", "--limit", "-1"]) == 1
    assert capsys.readouterr().out == ""


def test_missing_schema_exits_with_error(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'empty.db'}"
    assert main(["--url", url, "employees"]) == 1


def test_invalid_port_setting_exits_with_error(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("DB_PORT", "not-a-port")
    get_settings.cache_clear()
    try:
        assert main(["--url", f"sqlite:///{tmp_path / 'payroll.db'}", "init-db"]) == 1
    finally:
        monkeypatch.delenv("DB_PORT")
        get_settings.cache_clear()

    assert capsys.readouterr().out == ""
