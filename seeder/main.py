"""Command line entry point: ``seed <group> <command>``."""

import logging

import click

from seeder import __version__
from seeder.commands.database import database
from seeder.commands.posts import posts
from seeder.commands.products import products
from seeder.commands.users import users
from seeder.core.config import settings
from seeder.core.context import SeedContext
from seeder.core.errors import SeederError

logger = logging.getLogger(__name__)


class SeederGroup(click.Group):
    """Report ``SeederError`` as a regular CLI error (exit code 1, ``Error: ...``)."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except SeederError as exc:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(exc)) from exc


@click.group(cls=SeederGroup)
@click.option(
    "--database-url",
    envvar="DATABASE_URL",
    default=None,
    help="SQLAlchemy database URL (overrides config).",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducible fake data.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
@click.version_option(__version__, prog_name=settings.PROJECT_NAME)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None, seed: int | None, verbose: bool):
    """Fill a content database with dummy products, posts, terms and users."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    context = SeedContext(database_url, seed if seed is not None else settings.FAKER_SEED)
    ctx.obj = context
    ctx.call_on_close(context.close)


cli.add_command(database)
cli.add_command(products)
cli.add_command(posts)
cli.add_command(users)


if __name__ == "__main__":
    cli()
