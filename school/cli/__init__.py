"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask
from flask.cli import FlaskGroup

from .schema import schema_cli
from .seed import seed_cli
from .shell import console_command, run_command


def init_app(app: Flask) -> None:
    """Register application-specific CLI commands.

    Parameters
    ----------
    app:
        Flask application instance whose CLI registry will receive the
        console, schema and seed commands.
    """
    app.cli.add_command(run_command)
    app.cli.add_command(console_command)
    app.cli.add_command(schema_cli)
    app.cli.add_command(seed_cli)


def _create_app() -> Flask:
    from school.factory import create_app

    return create_app()


cli = FlaskGroup(
    create_app=_create_app,
    add_default_commands=False,
    help="Student registry console and maintenance commands.",
)


def main() -> None:
    """Entry point of the ``school`` script."""
    cli(prog_name="school")
