"""
Setup & Initialization Commands
--------------------------------

Commands:
    - init: Create the schema on an empty database
"""
import click

from edifm.core.logging_manager import handle_cli_error
from edifm.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the station database schema."""
    try:
        click.echo("🚀 Initializing station database...")
        db = get_db(ctx)
        status = db.get_migration_history()
        click.echo(f"🗄️  Schema revision: {status.get('current_revision') or 'unversioned'}")
        click.echo("✅ Database ready!")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
