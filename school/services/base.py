"""Shared plumbing for the registry services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import TypeVar

from sqlalchemy.engine import Engine

from school.core.errors import DOMAIN_FAILURES, TransactionFailure
from school.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork, TransactionExecutor

R = TypeVar("R")


class BaseService:
    """
    Services hold no session between calls.

    Writes go through :meth:`transact`, reads through :meth:`ro_uow`; both
    open a fresh unit of work per call and hand back frozen snapshots rather
    than mapped rows.

    :param executor: Runs write actions; built on ``engine`` when omitted.
    :param engine: Engine for every unit of work; ``None`` means ``db.engine``.
    """

    READ_ISOLATION = "READ COMMITTED"

    def __init__(
        self,
        *,
        executor: TransactionExecutor | None = None,
        engine: Engine | None = None,
    ) -> None:
        self.engine = engine
        if executor is None:
            executor = TransactionExecutor(self._writer)
        self.executor = executor

    def _writer(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(engine=self.engine)

    def ro_uow(self, *, isolation: str | None = None) -> SQLAlchemyReadOnlyUnitOfWork:
        """Read-only unit of work at ``isolation`` (``READ_ISOLATION`` by default)."""
        return SQLAlchemyReadOnlyUnitOfWork(
            engine=self.engine,
            isolation_level=isolation or self.READ_ISOLATION,
        )

    def transact(self, action: Callable[[SQLAlchemyUnitOfWork], R]) -> R:
        """
        Run ``action`` in one transaction and return its result after commit.

        A rollback caused by :class:`NotFound` or :class:`DuplicateAssignment`
        is re-raised as a copy of that failure, chained to the
        :class:`TransactionFailure` whose ``cause`` is the original.

        :raises NotFound: The action looked up a missing row.
        :raises DuplicateAssignment: The action repeated an enrollment.
        :raises TransactionFailure: Anything else that failed inside the unit of work.
        """
        try:
            return self.executor.run(action)
        except TransactionFailure as failure:
            if not isinstance(failure.cause, DOMAIN_FAILURES):
                raise
            raise replace(failure.cause) from failure
