"""Schema lifecycle: create every table at startup, drop them at shutdown."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import MetaData
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from school.core.errors import ConnectivityFailure, SchemaError
from school.core.extensions import db

LOGGER = logging.getLogger(__name__)


class SchemaLifecycle:
    """
    Bootstrap and tear down the relational schema.

    Both scripts derive from the mapped metadata, so they always match the
    models: ``bootstrap`` drops leftovers and creates every table in a single
    transaction, ``teardown`` drops every table that still exists.

    :param engine: Engine to run against; defaults to ``db.engine``.
    :param metadata: Table metadata; defaults to ``db.metadata``.
    """

    def __init__(self, engine: Engine | None = None, metadata: MetaData | None = None) -> None:
        self.engine = engine if engine is not None else db.engine
        self.metadata = metadata if metadata is not None else db.metadata

    @property
    def target(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def _connect(self) -> Connection:
        try:
            return self.engine.connect()
        except DBAPIError as exc:
            LOGGER.error("Connection to %s failed: %s", self.target, exc)
            raise ConnectivityFailure(self.target) from exc

    def bootstrap(self) -> None:
        """
        Create all tables; runs once before any other operation.

        :raises ConnectivityFailure: When the store is unreachable.
        :raises SchemaError: When the script fails; nothing is left half-created.
        """
        conn = self._connect()
        try:
            with conn, conn.begin():
                self.metadata.drop_all(conn, checkfirst=True)
                self.metadata.create_all(conn)
        except SQLAlchemyError as exc:
            LOGGER.error("Schema bootstrap failed: %s", exc)
            raise SchemaError(f"Schema bootstrap failed: {exc}") from exc
        LOGGER.info("Schema created (%d tables)", len(self.metadata.tables))

    def teardown(self) -> bool:
        """
        Drop all tables; runs once at shutdown.

        Failures are logged, never raised, so the process can always exit.
        Dropping an already-dropped schema is a no-op.

        :returns: ``True`` when the schema is gone, ``False`` on failure.
        :rtype: bool
        """
        try:
            with self.engine.begin() as conn:
                self.metadata.drop_all(conn, checkfirst=True)
        except SQLAlchemyError:
            LOGGER.exception("Schema teardown failed")
            return False
        LOGGER.info("Schema dropped")
        return True

    @contextmanager
    def managed(self) -> Iterator[SchemaLifecycle]:
        """Bootstrap on entry and always tear down on exit."""
        self.bootstrap()
        try:
            yield self
        finally:
            self.teardown()
