"""Translation of session and driver failures into the package's error types."""
from __future__ import annotations

from unittest.mock import create_autospec

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, ProgrammingError, ResourceClosedError
from sqlalchemy.orm import Session

from payroll.core.errors import (
    DatabaseConnectionError,
    ParameterError,
    QueryError,
    QueryExecutionError,
)
from payroll.repositories import EmployeeRepository


def _mock_session() -> Session:
    session = create_autospec(Session, instance=True)
    session.is_active = True
    return session


def test_non_session_is_rejected(repository) -> None:
    with pytest.raises(DatabaseConnectionError):
        repository.find_all(None)

    with pytest.raises(DatabaseConnectionError):
        repository.find_all_by_first_name(object(), "Alice")


def test_parameters_are_checked_before_the_session(repository) -> None:
    with pytest.raises(ParameterError):
        repository.find_all_by_organization_name(None, None)


def test_closed_connection_raises_connection_error(repository) -> None:
    engine = create_engine("sqlite://", future=True)
    connection = engine.connect()
    session = Session(bind=connection)
    connection.close()

    with pytest.raises(DatabaseConnectionError):
        repository.find_all(session)

    engine.dispose()


def test_unreachable_database_raises_connection_error(repository, tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'payroll.db'}", future=True)

    with Session(engine) as session:
        with pytest.raises(DatabaseConnectionError) as excinfo:
            repository.find_organization_average_payments(session)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    engine.dispose()


def test_missing_schema_raises_execution_error(repository) -> None:
    engine = create_engine("sqlite://", future=True)

    with Session(engine) as session:
        with pytest.raises(QueryExecutionError):
            repository.find_all(session)

    engine.dispose()


def test_invalidated_connection_during_query() -> None:
    session = _mock_session()
    session.execute.side_effect = OperationalError(
        "SELECT 1", {}, Exception("server has gone away"), connection_invalidated=True
    )

    with pytest.raises(DatabaseConnectionError):
        EmployeeRepository().find_all(session)


def test_closed_resource_during_query() -> None:
    session = _mock_session()
    session.execute.side_effect = ResourceClosedError("This Connection is closed")

    with pytest.raises(DatabaseConnectionError):
        EmployeeRepository().find_all_by_first_name(session, "Alice")


def test_rejected_statement_raises_execution_error() -> None:
    session = _mock_session()
    session.execute.side_effect = ProgrammingError(
        "SELECT", {}, Exception("column employees.birthday does not exist")
    )

    with pytest.raises(QueryExecutionError) as excinfo:
        EmployeeRepository().find_limited_ordered_by_birthday(session, 5)

    assert isinstance(excinfo.value, QueryError)
    assert isinstance(excinfo.value.__cause__, ProgrammingError)


def test_inactive_session_is_rejected() -> None:
    session = _mock_session()
    session.is_active = False

    with pytest.raises(DatabaseConnectionError):
        EmployeeRepository().find_all(session)
    session.execute.assert_not_called()


def test_closed_session_is_reopened_on_next_query(session, repository, payroll_data) -> None:
    session.close()

    assert len(repository.find_all(session)) == 7
