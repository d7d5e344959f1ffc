"""Unit tests for ``TransactionExecutor`` atomicity and resource handling."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError

from school.core.errors import ConnectivityFailure, NotFound, TransactionFailure
from school.models import Group, Student
from school.uow import SQLAlchemyUnitOfWork, TransactionExecutor
from tests.helpers.utils import count_rows


class TestTransactionExecutor:
    """Validate commit, rollback and connection release of one unit of work."""

    @pytest.fixture()
    def executor(self, db) -> TransactionExecutor:
        return TransactionExecutor()

    def test_commits_and_returns_result(self, executor):
        """A clean action is committed and its result returned."""
        student_id = executor.run(
            lambda uow: uow.students.add(Student(first_name="Ann", last_name="Lee")).id
        )

        assert student_id > 0
        assert count_rows("students", id=student_id) == 1

    def test_rolls_back_every_write_when_action_fails(self, executor):
        """Two writes with the second failing leave no trace."""

        def _action(uow):
            uow.groups.add(Group(name="AA-11"))
            uow.students.add(Student(first_name="Ann", last_name="Lee"))
            raise RuntimeError("boom")

        with pytest.raises(TransactionFailure) as excinfo:
            executor.run(_action)

        assert isinstance(excinfo.value.cause, RuntimeError)
        assert excinfo.value.__cause__ is excinfo.value.cause
        assert count_rows("groups") == 0
        assert count_rows("students") == 0

    def test_store_failure_on_second_insert_discards_the_first(self, executor):
        """A unique violation in the second insert undoes the first one."""

        def _action(uow):
            uow.groups.add(Group(name="AA-11"))
            uow.groups.add(Group(name="AA-11"))

        with pytest.raises(TransactionFailure) as excinfo:
            executor.run(_action)

        assert isinstance(excinfo.value.cause, IntegrityError)
        assert count_rows("groups") == 0

    def test_failure_is_final_unless_cause_is_retryable(self, executor):
        def _action(uow):
            raise ValueError("bad input")

        with pytest.raises(TransactionFailure) as excinfo:
            executor.run(_action)

        assert excinfo.value.retryable is False

    @pytest.mark.parametrize("fails", [False, True])
    def test_connection_released_on_every_exit_path(self, db, executor, fails):
        """The pool holds no checked-out connection once ``run`` returns."""

        def _action(uow):
            assert uow.connection is not None
            assert db.engine.pool.checkedout() == 1
            if fails:
                raise RuntimeError("boom")

        if fails:
            with pytest.raises(TransactionFailure):
                executor.run(_action)
        else:
            executor.run(_action)

        assert db.engine.pool.checkedout() == 0

    def test_unreachable_store_raises_connectivity_failure(self, app, tmp_path):
        """Acquisition failure surfaces unwrapped and the action never runs."""
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'school.db'}")
        executor = TransactionExecutor(lambda: SQLAlchemyUnitOfWork(engine=engine))
        calls = []

        with pytest.raises(ConnectivityFailure) as excinfo:
            executor.run(calls.append)

        assert calls == []
        assert excinfo.value.retryable is True
        engine.dispose()

    def test_logs_commit_and_rollback_with_elapsed_time(self, executor, caplog):
        caplog.set_level(logging.DEBUG, logger="school.uow.executor")

        executor.run(lambda uow: None)
        with pytest.raises(TransactionFailure):
            executor.run(lambda uow: 1 / 0)

        committed = [r for r in caplog.records if r.getMessage() == "Unit of work committed"]
        rolled_back = [
            r
            for r in caplog.records
            if r.name == "school.uow.executor" and r.levelno == logging.WARNING
        ]
        assert committed and committed[0].elapsed_ms >= 0
        assert rolled_back and "ZeroDivisionError" in rolled_back[0].getMessage()

    def test_failed_rollback_still_raises_transaction_failure(self, db, caplog):
        """A rollback that itself fails does not mask the original failure."""

        class _RollbackFails(SQLAlchemyUnitOfWork):
            def rollback(self) -> None:
                raise RuntimeError("connection dropped")

        executor = TransactionExecutor(_RollbackFails)

        with pytest.raises(TransactionFailure) as excinfo:
            executor.run(lambda uow: 1 / 0)

        assert isinstance(excinfo.value.cause, ZeroDivisionError)
        assert excinfo.value.__cause__ is excinfo.value.cause
        assert db.engine.pool.checkedout() == 0
        assert any(
            r.levelno == logging.ERROR and r.getMessage().startswith("Rollback failed")
            for r in caplog.records
        )

    def test_domain_failures_are_logged_below_warning(self, executor, caplog):
        caplog.set_level(logging.DEBUG, logger="school.uow.executor")

        def _action(uow):
            raise NotFound("Student", 99)

        with pytest.raises(TransactionFailure):
            executor.run(_action)

        rolled_back = [r for r in caplog.records if "rolled back" in r.getMessage()]
        assert [r.levelno for r in rolled_back] == [logging.INFO]
