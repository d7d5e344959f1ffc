"""The shared ``db`` handle, constraint naming and SQLite transaction setup."""

from __future__ import annotations

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData, event
from sqlalchemy.engine import Engine

# Deterministic constraint names, so schema errors name the rule that failed
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)

# Global singleton (import-safe); units of work open their own sessions on db.engine
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)


def install_sqlite_transactions(engine: Engine) -> None:
    """Make SQLite behave like a transactional store for units of work.

    * ``PRAGMA foreign_keys=ON`` on every connection so ``ON DELETE CASCADE``
      removes a deleted student's assignments.
    * WAL journaling for file databases so an idle reader never blocks a
      committing writer.
    * pysqlite's implicit transaction handling is disabled and an explicit
      ``BEGIN`` is emitted instead, which puts reads and writes of one unit of
      work (and DDL) inside the same store transaction.

    Parameters
    ----------
    engine:
        SQLite engine to instrument.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # pragma: no cover - driver glue
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
            if engine.url.database not in (None, "", ":memory:"):
                cursor.execute("PRAGMA journal_mode=WAL")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):  # pragma: no cover - driver glue
        conn.exec_driver_sql("BEGIN")


def init_app(app: Flask) -> None:
    """Bind ``db`` to ``app`` and register every model table on ``metadata``.

    SQLite engines additionally get :func:`install_sqlite_transactions`.
    """
    db.init_app(app)

    # Ensure models are imported so the metadata knows every table
    from school import models as _models  # noqa: F401

    with app.app_context():
        engine = db.engine
        if engine.dialect.name == "sqlite":
            install_sqlite_transactions(engine)
