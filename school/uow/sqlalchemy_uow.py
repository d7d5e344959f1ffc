"""
SQLAlchemy units of work.

Every unit of work opens its own :class:`~sqlalchemy.orm.Session` on the
application engine, checks out one connection when entered and gives it back
when left, whatever the exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session

from school.core.errors import ConnectivityFailure, TransactionFailure
from school.core.extensions import db
from school.repositories import (
    CourseRepository,
    GroupRepository,
    StudentAssignmentRepository,
    StudentRepository,
)
from school.uow.base import UnitOfWork

LOGGER = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Read-write unit of work.

    Entering checks out the connection and begins the transaction; nothing is
    committed until :meth:`commit`. Leaving without an explicit outcome
    commits on a clean exit and rolls back when an exception escapes. The
    session is always closed, so the connection returns to the engine.

    :param engine: Engine to connect to; defaults to ``db.engine``.
    :type engine: :class:`sqlalchemy.engine.Engine` | None
    """

    def __init__(self, *, engine: Engine | None = None) -> None:
        self.engine = engine if engine is not None else db.engine
        self.session = Session(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.groups = GroupRepository(self.session)
        self.students = StudentRepository(self.session)
        self.courses = CourseRepository(self.session)
        self.assignments = StudentAssignmentRepository(self.session)
        self.connection: Connection | None = None
        self._finished = False

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        self.connection = self._checkout()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._finished:
                return
            if exc_type is not None:
                try:
                    self.rollback()
                except Exception:
                    LOGGER.exception("Rollback failed while leaving the unit of work")
                return
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        finally:
            self.close()

    def commit(self) -> None:
        self.session.commit()
        self._finished = True

    def rollback(self) -> None:
        self.session.rollback()
        self._finished = True

    def close(self) -> None:
        """Release the connection; the unit of work cannot be reused afterwards."""
        self.session.close()
        self.connection = None

    @property
    def target(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def _checkout(self) -> Connection:
        """Check out the connection, which begins the transaction.

        :raises ConnectivityFailure: When the store refuses the connection.
        """
        try:
            return self.session.connection()
        except DBAPIError as exc:
            self.session.close()
            LOGGER.error("Connection to %s failed: %s", self.target, exc)
            raise ConnectivityFailure(self.target) from exc


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyUnitOfWork):
    """
    Read-only unit of work.

    * On PostgreSQL and MySQL the transaction is opened with the requested
      isolation level and, when ``enforce_db_readonly`` is set, ``READ ONLY``.
    * On every store, including SQLite, write guards reject ORM flushes with
      pending changes and any DML/DDL statement reaching the cursor.
    * ``commit()`` is refused; leaving always rolls back.
    * A store error escaping the block is re-raised as
      :class:`~school.core.errors.TransactionFailure`.

    :param isolation_level: e.g. ``"READ COMMITTED"``; ``None`` keeps the default.
    :param enforce_db_readonly: Also ask the store for a read-only transaction.
    """

    WRITE_KEYWORDS = frozenset(
        {
            "insert",
            "update",
            "delete",
            "merge",
            "replace",
            "upsert",
            "create",
            "alter",
            "drop",
            "truncate",
            "grant",
            "revoke",
        }
    )
    ISOLATION_LEVELS = frozenset(
        {"READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"}
    )
    TX_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})

    def __init__(
        self,
        *,
        engine: Engine | None = None,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(engine=engine)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._guards: list[tuple[Any, str, Callable[..., Any]]] = []

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self.connection = self._checkout()
        try:
            self._apply_transaction_mode(self.connection)
        except Exception:
            self.close()
            raise
        self._guard(self.session, "before_flush", self._reject_flush)
        self._guard(self.connection, "before_cursor_execute", self._reject_write_sql)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """
        Roll back and release the connection.

        :raises TransactionFailure: When a store error escaped the block.
        """
        try:
            self._unguard()
            self.session.rollback()
        except SQLAlchemyError:
            if exc is None:
                raise
            LOGGER.exception("Rollback failed while leaving the read-only unit of work")
        finally:
            self.close()
        if isinstance(exc, SQLAlchemyError):
            LOGGER.warning("Read-only unit of work failed: %s: %s", type(exc).__name__, exc)
            raise TransactionFailure(exc) from exc

    def commit(self) -> None:
        """
        Refuse to commit.

        :raises RuntimeError: always.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    # ------------------------------ Transaction mode -------------------------

    def _apply_transaction_mode(self, connection: Connection) -> None:
        if connection.dialect.name not in self.TX_DIALECTS:
            return
        if self.isolation_level:
            level = self.isolation_level.strip().upper()
            if level not in self.ISOLATION_LEVELS:
                LOGGER.warning("Unknown isolation level %r; passing it through.", level)
            self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))
        if self.enforce_db_readonly:
            self.session.execute(text("SET TRANSACTION READ ONLY"))

    # ----------------------------------- Guards ------------------------------

    @staticmethod
    def _reject_flush(session: Session, flush_context: Any, instances: Any) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (pending new/dirty/deleted objects)."
            )

    def _reject_write_sql(
        self, conn, cursor, statement: str, parameters, context, executemany
    ) -> None:
        keyword = statement.lstrip().split(None, 1)[0].lower() if statement.strip() else ""
        if keyword in self.WRITE_KEYWORDS:
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {keyword.upper()}")

    def _guard(self, target: Any, name: str, fn: Callable[..., Any]) -> None:
        event.listen(target, name, fn)
        self._guards.append((target, name, fn))

    def _unguard(self) -> None:
        while self._guards:
            target, name, fn = self._guards.pop()
            try:
                event.remove(target, name, fn)
            except InvalidRequestError:
                LOGGER.debug("Guard %s already removed", name)
