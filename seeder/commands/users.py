"""``seed users``: dummy user accounts."""

import logging

import click
from faker.exceptions import UniquenessException

from seeder.core.config import settings
from seeder.core.context import SeedContext
from seeder.core.errors import ValidationError
from seeder.core.prompts import success, validate_count
from seeder.core.security import generate_password
from seeder.models.user import RoleType
from seeder.services.content import ContentStore

logger = logging.getLogger(__name__)


@click.group()
def users():
    """Seed and delete user accounts."""


@users.command()
@click.option(
    "--number",
    default=None,
    show_default=str(settings.DEFAULT_USERS),
    help="How many users to generate.",
)
@click.option(
    "--role",
    type=click.Choice([role.value for role in RoleType]),
    default=RoleType.SUBSCRIBER.value,
    show_default=True,
    help="Role given to every generated user.",
)
@click.pass_obj
def generate(obj: SeedContext, number, role: str):
    """Create users with random names, logins and passwords."""
    count = validate_count(number if number is not None else settings.DEFAULT_USERS, "--number")

    faker = obj.faker
    with obj.session() as session:
        ContentStore.require_installed(session)
        content = ContentStore(session)

        with click.progressbar(length=count, label="Generating users") as bar:
            for _ in bar:
                try:
                    user_login = faker.unique.user_name()
                    email = faker.unique.email()
                except UniquenessException as exc:
                    raise ValidationError("Ran out of distinct user names or emails.") from exc

                content.create_user(
                    user_login=user_login,
                    email=email,
                    password=generate_password(),
                    first_name=faker.first_name(),
                    last_name=faker.last_name(),
                    role=RoleType(role),
                )

    logger.info(f"Generated {count} users with role {role}")
    success(f"Successfully generated {count} users.")


@users.command()
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(obj: SeedContext, force: bool):
    """Delete every user except administrators."""
    if not force:
        click.confirm("Are you sure you want to delete all users?", abort=True)

    with obj.session() as session:
        ContentStore.require_installed(session)
        content = ContentStore(session)
        user_ids = content.deletable_user_ids()
        with click.progressbar(user_ids, label="Deleting users") as bar:
            for user_id in bar:
                content.delete_user(user_id)

    success("All users have been deleted.")
