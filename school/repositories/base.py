"""Generic repository base for the registry tables.

Repositories are persistence-only:

- They are bound to the session of exactly one unit of work and never commit
  or roll back; the unit of work owns the transaction.
- Listings are deterministic: rows come back in primary-key order.
- They hold no business rules (existence or duplicate policies live in the
  services).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

E = TypeVar("E")  # mapped entity


class BaseRepository(Generic[E]):
    """Single-table repository over a session owned by a unit of work.

    Subclasses set ``model`` and may override:

    * ``_pk_attr`` when the table has no single ``id`` key;
    * ``_filterable_fields`` to restrict equality filters to a whitelist.
    """

    model: type[E]

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """Session of the unit of work this repository belongs to."""
        return self._session

    # ------------------------------ Hooks ------------------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]] | None:
        """Whitelisted filter keys; ``None`` allows any mapped attribute."""
        return None

    # ---------------------------- Statement helpers --------------------------

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        """Add ``attr == value`` criteria; keys outside the whitelist are dropped."""
        allowed = self._filterable_fields()
        for key, value in filters.items():
            column = getattr(self.model, key) if allowed is None else allowed.get(key)
            if column is not None:
                stmt = stmt.where(column == value)
        return stmt

    def _by_pk(self, entity_id: Any) -> Select[Any]:
        pk = self._pk_attr()
        if pk is None:
            raise RuntimeError(f"{type(self).__name__} has no single-column primary key.")
        return select(self.model).where(pk == entity_id)

    def _first(self, stmt: Select[Any]) -> E | None:
        return self.session.execute(stmt).scalars().first()

    # --------------------------------- Reads ---------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Return the row with primary key ``entity_id`` (findById), or ``None``."""
        return self._first(self._by_pk(entity_id))

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but locks the row ``FOR UPDATE`` where the store supports it."""
        return self._first(self._by_pk(entity_id).with_for_update())

    def count(self, **filters: Any) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def list(self) -> list[E]:
        """Every row (findAll), in primary-key order."""
        stmt = select(self.model)
        pk = self._pk_attr()
        if pk is not None:
            stmt = stmt.order_by(pk.asc())
        return list(self.session.execute(stmt).scalars().all())

    # --------------------------------- Writes --------------------------------

    def add(self, instance: E) -> E:
        """Insert ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def delete_by_id(self, entity_id: Any) -> E | None:
        """Delete by primary key (deleteById); returns the removed row or ``None``."""
        instance = self.get(entity_id)
        if instance is not None:
            self.delete(instance)
        return instance

    def flush(self) -> None:
        self.session.flush()
