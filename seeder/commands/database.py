"""``seed db``: create or drop the schema."""

import click

from seeder.core.context import SeedContext
from seeder.core.prompts import success
from seeder.db.base import drop_db, init_db


@click.group("db")
def database():
    """Manage the seeder database schema."""


@database.command()
@click.pass_obj
def init(obj: SeedContext):
    """Create every table."""
    init_db(obj.engine)
    success("Database schema created.")


@database.command()
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def drop(obj: SeedContext, force: bool):
    """Drop every table and its data."""
    if not force:
        click.confirm("This will drop every table and all seeded data. Are you sure?", abort=True)
    drop_db(obj.engine)
    success("Database schema dropped.")
