"""Unit of Work abstractions and concrete implementations.

This package re-exports the SQLAlchemy-backed units of work and the executor
that runs actions atomically, alongside the abstract contract the service
layer depends on.
"""

from .base import UnitOfWork
from .executor import TransactionExecutor
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
    "TransactionExecutor",
]
