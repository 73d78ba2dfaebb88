"""Term generation and deletion shared by the product and post commands."""

import logging
from uuid import UUID

import click
from faker import Faker
from faker.exceptions import UniquenessException
from sqlalchemy.orm import Session

from seeder.core.context import SeedContext
from seeder.core.errors import PreconditionError, ValidationError
from seeder.core.prompts import success
from seeder.db.base import has_tables
from seeder.services.content_types import is_known_taxonomy
from seeder.services.taxonomy import SqlTaxonomyStore

logger = logging.getLogger(__name__)


def delete_terms_with_progress(session: Session, taxonomy: str, label: str | None = None) -> int:
    """Delete every term of ``taxonomy`` one by one behind a progress bar."""
    store = SqlTaxonomyStore(session, taxonomy)
    term_ids = store.term_ids()
    if not term_ids:
        click.echo(f"No terms found in {taxonomy}. Nothing to delete.")
        return 0

    with click.progressbar(term_ids, label=label or f"Deleting all terms from {taxonomy}") as bar:
        for term_id in bar:
            store.delete(term_id)
    session.commit()

    logger.info(f"Deleted {len(term_ids)} terms from {taxonomy}")
    success(f"All terms from {taxonomy} have been deleted.")
    return len(term_ids)


def create_fake_terms(
    faker: Faker, store: SqlTaxonomyStore, count: int, label: str = "Generating terms"
) -> list[UUID]:
    """Create ``count`` root terms named after distinct random words.

    A word that already names a root term of the taxonomy reuses that term.
    """
    term_ids: list[UUID] = []
    with click.progressbar(length=count, label=label) as bar:
        for _ in bar:
            try:
                name = faker.unique.word()
            except UniquenessException as exc:
                raise ValidationError(
                    f"Ran out of distinct words after {len(term_ids)} {store.taxonomy} terms."
                ) from exc
            term_id = store.find(None, name)
            if term_id is None:
                term_id = store.create(None, name)
            term_ids.append(term_id)
    return term_ids


@click.command("delete-terms")
@click.option("--taxonomy", default="category", show_default=True, help="Taxonomy to empty.")
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete_terms(obj: SeedContext, taxonomy: str, force: bool):
    """Delete all terms of a taxonomy."""
    if not is_known_taxonomy(taxonomy):
        raise ValidationError(f"Unknown taxonomy '{taxonomy}'.")

    if not force:
        click.confirm(f"Are you sure you want to delete all terms from {taxonomy}?", abort=True)

    with obj.session() as session:
        if not has_tables(session, "terms"):
            raise PreconditionError("The terms table is not installed. Run 'seed db init' first.")
        delete_terms_with_progress(session, taxonomy)
