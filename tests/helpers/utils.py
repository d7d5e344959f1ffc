"""Tiny helpers shared across test modules."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect

from school.core.extensions import db
from school.uow import SQLAlchemyReadOnlyUnitOfWork


def count_rows(repo_name: str, **filters: Any) -> int:
    """Count rows through a fresh read-only unit of work.

    Parameters
    ----------
    repo_name: str
        Repository attribute on the unit of work (``"students"``, ``"assignments"``...).
    filters:
        Equality filters forwarded to :meth:`BaseRepository.count`.
    """
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        return getattr(uow, repo_name).count(**filters)


def table_names() -> set[str]:
    """Return the tables currently present in the application store."""
    return set(inspect(db.engine).get_table_names())
