"""Pytest fixtures wiring the application to a throwaway SQLite store.

Each test gets its own application bound to a fresh database file, so units
of work, which open their own sessions and commit for real, never leak data
between cases.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from flask import Flask
from sqlalchemy.orm import Session

from school.core.extensions import db as _db
from school.core.schema import SchemaLifecycle
from school.factory import create_app


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - ``SQLALCHEMY_DATABASE_URI`` is filled in per test by the ``app`` fixture.
    - Seeds a small deterministic data set.
    """

    ENV_NAME = "testing"
    TESTING = True
    DEBUG = False
    LOG_LEVEL = "WARNING"
    SQLALCHEMY_ECHO = False
    SEED_GROUPS = 3
    SEED_STUDENTS = 40
    SEED = 1337


@pytest.fixture()
def make_app(monkeypatch) -> Callable[[str], Flask]:
    """Return a builder creating an application bound to the given store URI."""
    # Ensure env-based config does not leak into tests
    monkeypatch.delenv("DATABASE_URL", raising=False)

    def _make(uri: str) -> Flask:
        config = type("PerTestConfig", (TestConfig,), {"SQLALCHEMY_DATABASE_URI": uri})
        return create_app(config, instance_relative_config=False)

    return _make


@pytest.fixture()
def app(make_app, tmp_path) -> Generator[Flask, None, None]:
    """Create an application bound to ``<tmp_path>/school.db`` with a pushed context."""
    app = make_app(f"sqlite:///{tmp_path / 'school.db'}")
    with app.app_context():
        yield app
        _db.engine.dispose()


@pytest.fixture()
def db(app):
    """Bootstrap the schema before the test and drop it afterwards."""
    lifecycle = SchemaLifecycle()
    lifecycle.bootstrap()
    yield _db
    lifecycle.teardown()


@pytest.fixture()
def session(db) -> Generator[Session, None, None]:
    """Session used by factories and repository tests.

    Factories commit, so rows they create are visible to every unit of work.
    """
    sess = Session(bind=db.engine, autoflush=False, expire_on_commit=False)
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the pytest session --------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "db" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
