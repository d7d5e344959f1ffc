"""``school seed``: fill the registry with random groups, courses and students."""

from __future__ import annotations

import logging
import random

import click
from flask import current_app
from flask.cli import with_appcontext

from school.core.errors import ConnectivityFailure, SchemaError, TransactionFailure
from school.core.schema import SchemaLifecycle
from school.seeds import seed_data

LOGGER = logging.getLogger(__name__)

Summary = dict[str, dict[str, int]]


def _print_summary(summary: Summary) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (nothing generated)")
        return
    pad = max(map(len, summary))
    for table in sorted(summary):
        click.echo(f"  {table:<{pad}}  created={summary[table].get('created', 0):>4}")


def _generate(options: dict[str, int | None]) -> Summary:
    """Seed using command-line overrides, falling back to ``SEED_*`` config."""
    config = current_app.config

    def pick(option: str, key: str, fallback: int | None) -> int | None:
        value = options.get(option)
        return config.get(key, fallback) if value is None else value

    try:
        return seed_data.run_all(
            groups=pick("groups", "SEED_GROUPS", 10),
            students=pick("students", "SEED_STUDENTS", 200),
            rng=random.Random(pick("seed", "SEED", None)),
        )
    except (TransactionFailure, ConnectivityFailure) as exc:
        raise click.ClickException(f"Seeding failed: {exc}") from exc


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every generated row.")
@click.option("--groups", type=click.IntRange(min=0), help="Number of groups (default: SEED_GROUPS).")
@click.option(
    "--students", type=click.IntRange(min=0), help="Number of students (default: SEED_STUDENTS)."
)
@click.option("--seed", type=int, help="Random seed (default: SEED, or random).")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool, **options: int | None) -> None:
    """Generate random test data."""
    ctx.obj = options
    if verbose:
        logging.getLogger("school.seeds").setLevel(logging.DEBUG)


@seed_cli.command("run")
@click.pass_obj
@with_appcontext
def run_command(options: dict[str, int | None]) -> None:
    """Add random data to the existing schema."""
    _print_summary(_generate(options))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping the tables.")
@click.pass_obj
@with_appcontext
def fresh_command(options: dict[str, int | None], yes: bool) -> None:
    """Recreate the schema from scratch, then add random data."""
    config = current_app.config
    if config.get("ENV_NAME") == "production" and not config.get("TESTING"):
        raise click.UsageError("'seed fresh' is restricted to non-production environments.")
    if not yes:
        click.confirm("Drop and recreate every registry table?", abort=True)

    LOGGER.info("Rebuilding schema before seeding")
    try:
        SchemaLifecycle().bootstrap()
    except (ConnectivityFailure, SchemaError) as exc:
        raise click.ClickException(f"Schema rebuild failed: {exc}") from exc
    _print_summary(_generate(options))
