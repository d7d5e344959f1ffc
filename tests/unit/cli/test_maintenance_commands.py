"""Tests for the ``schema`` and ``seed`` command groups."""

from __future__ import annotations

import pytest

from tests.helpers.utils import count_rows, table_names


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


def test_schema_bootstrap_and_teardown(app, runner):
    result = runner.invoke(args=["schema", "bootstrap"])
    assert result.exit_code == 0, result.output
    assert "Schema created on sqlite:///" in result.output
    assert table_names() == {"groups", "students", "courses", "students_courses"}

    result = runner.invoke(args=["schema", "teardown"])
    assert result.exit_code == 0, result.output
    assert table_names() == set()


def test_seed_run_uses_config_defaults(db, runner):
    result = runner.invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    assert count_rows("groups") == 3
    assert count_rows("students") == 40


def test_seed_fresh_recreates_schema(db, runner):
    runner.invoke(args=["seed", "run"])

    result = runner.invoke(args=["seed", "--students", "12", "fresh", "--yes"])

    assert result.exit_code == 0, result.output
    assert count_rows("students") == 12


def test_seed_fresh_requires_confirmation(db, runner):
    result = runner.invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code == 1
    assert count_rows("students") == 0


def test_seed_fresh_refused_in_production(app, db, runner):
    app.config.update(ENV_NAME="production", TESTING=False)

    result = runner.invoke(args=["seed", "fresh", "--yes"])

    assert result.exit_code == 2
    assert "restricted to non-production" in result.output
