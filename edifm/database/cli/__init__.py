#!/usr/bin/env python3
"""
Station Database Management CLI
-------------------------------

Command-line interface for schema management.

Command Structure:
    - Setup & Initialization (init)
    - Migration Management (migration upgrade, migration status)

Usage:
    stationdb --help
    stationdb init
    stationdb migration upgrade
    stationdb --database-url postgresql://... migration status
"""
import click
import logging
from pathlib import Path

from edifm.core.paths import DATABASE_URL, ALEMBIC_DIR, LOG_DIR
from edifm.database import StationDB


@click.group()
@click.option(
    "--database-url",
    default=DATABASE_URL,
    show_default=True,
    help="SQLAlchemy database URL (env: DATABASE_URL)",
)
@click.option(
    "--alembic-dir",
    type=click.Path(),
    default=str(ALEMBIC_DIR),
    help="Path to Alembic directory",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, database_url, alembic_dir, log_dir, verbose):
    """EDIFM Station Database Management CLI"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url
    ctx.obj["alembic_dir"] = Path(alembic_dir)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose


def get_db(ctx) -> StationDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = StationDB(
            database_url=ctx.obj["database_url"],
            alembic_dir=ctx.obj["alembic_dir"],
            log_dir=ctx.obj["log_dir"],
        )
        ctx.obj["logger"] = ctx.obj["db"].logger
    return ctx.obj["db"]


# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .migration import migration  # noqa: E402

cli.add_command(init)
cli.add_command(migration)


if __name__ == "__main__":
    cli(obj={})
