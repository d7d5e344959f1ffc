"""Flask CLI commands that run the schema scripts on their own."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from school.core.errors import ConnectivityFailure, SchemaError
from school.core.schema import SchemaLifecycle


@click.group("schema")
def schema_cli() -> None:
    """Create or drop the registry tables."""


@schema_cli.command("bootstrap")
@with_appcontext
def bootstrap_command() -> None:
    """Drop leftovers and create every table."""
    lifecycle = SchemaLifecycle()
    try:
        lifecycle.bootstrap()
    except (ConnectivityFailure, SchemaError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Schema created on {lifecycle.target}")


@schema_cli.command("teardown")
@with_appcontext
def teardown_command() -> None:
    """Drop every table that still exists."""
    lifecycle = SchemaLifecycle()
    if not lifecycle.teardown():
        raise click.ClickException(f"Schema teardown failed on {lifecycle.target}")
    click.echo(f"Schema dropped on {lifecycle.target}")
