"""
Unit-of-Work Executor.

:class:`TransactionExecutor` runs a caller-supplied action inside one
read-write unit of work and turns the outcome into all-or-nothing: the action
either commits entirely or leaves no trace and surfaces as
:class:`~school.core.errors.TransactionFailure`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from school.core.errors import DOMAIN_FAILURES, TransactionFailure
from school.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

#: Work performed inside a unit of work; receives the open unit of work.
Action = Callable[[SQLAlchemyUnitOfWork], T]


class TransactionExecutor:
    """
    Run actions atomically against the store.

    * One call = one unit of work = one connection, released on every exit
      path (including when the action raises).
    * Manual commit: the transaction begins when the connection is acquired
      and is committed only after the action returns.
    * Any exception from the action or from the commit rolls the transaction
      back and is re-raised wrapped in :class:`TransactionFailure`, with the
      original available as ``failure.cause`` and ``__cause__``.
    * Connection acquisition failures escape as
      :class:`~school.core.errors.ConnectivityFailure` untouched.

    Not safe for sharing one unit of work across threads; each call owns its
    own connection.

    :param uow_factory: Builds a fresh unit of work per call.
    :type uow_factory: Callable[[], SQLAlchemyUnitOfWork] | None
    """

    def __init__(self, uow_factory: Callable[[], SQLAlchemyUnitOfWork] | None = None) -> None:
        self._uow_factory = uow_factory or SQLAlchemyUnitOfWork

    def run(self, action: Action[T]) -> T:
        """
        Execute ``action`` in one transaction.

        :param action: Callable receiving the open unit of work.
        :returns: Whatever ``action`` returns, after the commit succeeded.
        :raises TransactionFailure: When the action or the commit failed.
        :raises ConnectivityFailure: When no connection could be acquired.
        """
        started = time.perf_counter()
        with self._uow_factory() as uow:
            try:
                result = action(uow)
                uow.commit()
            except Exception as exc:
                try:
                    uow.rollback()
                except Exception:
                    LOGGER.exception("Rollback failed after %s", type(exc).__name__)
                level = logging.INFO if isinstance(exc, DOMAIN_FAILURES) else logging.WARNING
                LOGGER.log(
                    level,
                    "Unit of work rolled back: %s: %s",
                    type(exc).__name__,
                    exc,
                    extra={"elapsed_ms": _elapsed_ms(started)},
                )
                raise TransactionFailure(exc) from exc
        LOGGER.debug("Unit of work committed", extra={"elapsed_ms": _elapsed_ms(started)})
        return result


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
