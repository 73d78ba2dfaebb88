"""``seed posts``: dummy posts and taxonomy terms for any registered post type."""

import logging

import click

from seeder.commands.terms import create_fake_terms, delete_terms, delete_terms_with_progress
from seeder.core.context import SeedContext
from seeder.core.errors import PreconditionError, ValidationError
from seeder.core.prompts import ask_number, ask_select, confirm, success, validate_count
from seeder.services.content import ContentStore
from seeder.services.content_types import (
    get_post_types,
    get_taxonomies_for_post_type,
    search_post_types,
)
from seeder.services.taxonomy import SqlTaxonomyStore

logger = logging.getLogger(__name__)


@click.group()
def posts():
    """Seed posts, pages and their terms."""


def _choose_post_type(post_type: str | None) -> str:
    if post_type is None:
        search = click.prompt("Search post types", default="", show_default=False)
        matches = search_post_types(search.strip())
        if not matches:
            raise ValidationError(f"No post type matches '{search}'.")
        post_type = ask_select("Which post type do you want to seed?", matches)

    if post_type not in get_post_types():
        raise ValidationError(f"Unknown post type '{post_type}'.")
    return post_type


def _delete_posts(content: ContentStore, post_type: str) -> int:
    post_ids = content.post_ids(post_type)
    with click.progressbar(post_ids, label=f'Deleting all "{post_type}" posts') as bar:
        for post_id in bar:
            content.delete_post(post_id)
    content.session.commit()
    return len(post_ids)


@posts.command()
@click.option("--post-type", default=None, help="Post type to seed.")
@click.option("--number", default=None, help="How many posts to create.")
@click.option(
    "--delete-existing/--keep-existing",
    default=None,
    help="Delete the existing posts of this type first.",
)
@click.pass_obj
def generate(obj: SeedContext, post_type: str | None, number, delete_existing: bool | None):
    """Create posts with random titles and content."""
    post_type = _choose_post_type(post_type)

    if number is None:
        count = ask_number(f'How many "{post_type}" do you want to seed?')
    else:
        count = validate_count(number, "--number", minimum=0)

    if delete_existing is None:
        delete_existing = confirm(
            f'Do you want to delete all existing "{post_type}" before seeding?'
        )

    faker = obj.faker
    with obj.session() as session:
        ContentStore.require_installed(session)
        content = ContentStore(session)
        if delete_existing:
            _delete_posts(content, post_type)

        with click.progressbar(length=count, label="Seeding posts") as bar:
            for _ in bar:
                content.create_post(
                    post_type,
                    title=faker.sentence(),
                    content="\n\n".join(faker.paragraphs(nb=3)),
                )

    logger.info(f"Seeded {count} {post_type} posts")
    success(f'Seeded {count} "{post_type}" posts.')


@posts.command()
@click.option("--post-type", default=None, help="Post type whose taxonomies are seeded.")
@click.option("--taxonomy", default=None, help="Taxonomy to seed.")
@click.option("--number", default=None, help="How many terms to create.")
@click.pass_obj
def terms(obj: SeedContext, post_type: str | None, taxonomy: str | None, number):
    """Create random terms for a taxonomy of a post type."""
    post_type = _choose_post_type(post_type)

    taxonomies = get_taxonomies_for_post_type(post_type)
    if not taxonomies:
        raise PreconditionError(f'The "{post_type}" post type has no taxonomies to seed.')

    if taxonomy is None:
        taxonomy = ask_select("Which taxonomy do you want to seed?", {t: t for t in taxonomies})
    elif taxonomy not in taxonomies:
        raise ValidationError(f"'{taxonomy}' is not a taxonomy of the \"{post_type}\" post type.")

    if number is None:
        count = ask_number(f'How many "{taxonomy}" terms do you want to seed?')
    else:
        count = validate_count(number, "--number")

    with obj.session() as session:
        ContentStore.require_installed(session)
        if confirm("Do you want to delete all existing terms before seeding?"):
            delete_terms_with_progress(session, taxonomy)

        click.echo("Generating terms...")
        store = SqlTaxonomyStore(session, taxonomy)
        term_ids = create_fake_terms(obj.faker, store, count)
        success(f'Seeded {count} "{taxonomy}" terms.')

        if term_ids and confirm("Do you want to assign the terms to the posts?"):
            number_posts = ask_number(
                f'How many "{post_type}" posts do you want to assign terms to?'
            )
            content = ContentStore(session)
            generated = [store.get(term_id) for term_id in term_ids]

            targets = content.random_posts(post_type, number_posts)
            with click.progressbar(targets, label="Assigning terms to posts") as bar:
                for post in bar:
                    content.assign_term(post, obj.random.choice(generated))
            success("Terms have been assigned to posts.")


@posts.command()
@click.option("--post-type", default="post", show_default=True, help="Post type to delete.")
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(obj: SeedContext, post_type: str, force: bool):
    """Delete every post of a post type."""
    if post_type not in get_post_types():
        raise ValidationError(f"Unknown post type '{post_type}'.")
    if not force:
        click.confirm(f'Are you sure you want to delete all "{post_type}" posts?', abort=True)

    with obj.session() as session:
        ContentStore.require_installed(session)
        deleted = _delete_posts(ContentStore(session), post_type)

    success(f'Deleted {deleted} "{post_type}" posts.')


posts.add_command(delete_terms)
