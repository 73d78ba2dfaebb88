"""``seed products``: catalog seeding from the dataset plus random catalog tweaks."""

import logging
from collections.abc import Callable
from pathlib import Path

import click
import httpx
from sqlalchemy.orm import Session

from seeder.commands.terms import create_fake_terms, delete_terms, delete_terms_with_progress
from seeder.core.config import settings
from seeder.core.context import SeedContext
from seeder.core.errors import PreconditionError
from seeder.core.prompts import ask_number, ask_select, confirm, success, validate_count, warning
from seeder.models.attribute import Attribute
from seeder.models.product import Product, STOCK_STATUSES
from seeder.models.term import Term
from seeder.schemas.dataset import ProductRecord
from seeder.services.catalog import CATEGORY_TAXONOMY, TAG_TAXONOMY, CatalogStore
from seeder.services.category_hierarchy import build_all, canonical_path, deepest_paths
from seeder.services.dataset import SourceDataset
from seeder.services.media import download_image
from seeder.services.taxonomy import SqlTaxonomyStore

logger = logging.getLogger(__name__)

# (attribute label, attribute slug, record field)
DATASET_ATTRIBUTES = (
    ("Brand", "brand", "brand"),
    ("Type", "product_type", "type"),
)


@click.group()
def products():
    """Seed WooCommerce-style products, categories, attributes and reviews."""


# ── generate ─────────────────────────────────────────


def _process_categories(session: Session, records: list[ProductRecord]) -> dict[str, list]:
    """Rebuild ``product_cat`` and map each canonical path to its chain, root first."""
    delete_terms_with_progress(
        session, CATEGORY_TAXONOMY, label="Deleting existing product categories"
    )

    store = SqlTaxonomyStore(session, CATEGORY_TAXONOMY)
    leaves = build_all(deepest_paths(records), store)
    click.echo("Required product categories have been created.")

    return {path: list(reversed(store.ancestors(leaf_id))) for path, leaf_id in leaves.items()}


def _process_attributes(
    session: Session, catalog: CatalogStore, records: list[ProductRecord]
) -> list[tuple[Attribute, str, SqlTaxonomyStore]]:
    """Recreate the brand and type terms found in ``records``."""
    stores = []
    for label, slug, field in DATASET_ATTRIBUTES:
        attribute = catalog.ensure_attribute(label, slug)
        delete_terms_with_progress(session, attribute.taxonomy)

        store = SqlTaxonomyStore(session, attribute.taxonomy)
        names = ((getattr(r, field) or "").strip() for r in records)
        values = list(dict.fromkeys(name for name in names if name))
        with click.progressbar(values, label=f"Creating {label.lower()} terms") as bar:
            for value in bar:
                if store.find(None, value) is None:
                    store.create(None, value)
        stores.append((attribute, field, store))

    click.echo("Required product attributes have been created.")
    return stores


def _category_ids(record: ProductRecord, chains: dict[str, list], categories: SqlTaxonomyStore):
    if record.category_path:
        return chains.get(canonical_path(record.category_path), [])

    ids = []
    for name in record.categories:
        term = categories.get_by_name(name)
        if term is not None:
            ids.append(term.id)
    return ids


def _fetch_image(client: httpx.Client, record: ProductRecord) -> str | None:
    try:
        return download_image(client, record.image, settings.MEDIA_DIR).as_posix()
    except httpx.HTTPError as exc:
        logger.warning(f"Image download failed for {record.image}: {exc}")
        warning(f"Could not download image: {exc}")
        return None


def _process_products(
    session: Session,
    catalog: CatalogStore,
    records: list[ProductRecord],
    chains: dict[str, list],
    attribute_stores: list[tuple[Attribute, str, SqlTaxonomyStore]],
    skip_images: bool,
) -> None:
    existing = catalog.product_ids()
    with click.progressbar(existing, label="Deleting existing products") as bar:
        for product_id in bar:
            catalog.delete_product(product_id)
    session.commit()

    categories = SqlTaxonomyStore(session, CATEGORY_TAXONOMY)
    with httpx.Client(timeout=settings.IMAGE_TIMEOUT) as client:
        with click.progressbar(records, label="Generating products") as bar:
            for record in bar:
                attributes = []
                for attribute, field, store in attribute_stores:
                    value = (getattr(record, field) or "").strip()
                    term = store.get_by_name(value) if value else None
                    if term is not None:
                        attributes.append((attribute, [term]))

                image_url = None
                if record.image and not skip_images:
                    image_url = _fetch_image(client, record)

                catalog.create_product(
                    record,
                    category_ids=_category_ids(record, chains, categories),
                    attributes=attributes,
                    image_url=image_url,
                )


@products.command()
@click.option(
    "--items",
    default=None,
    show_default=str(settings.DEFAULT_ITEMS),
    help="How many items to generate.",
)
@click.option("--skip-images", is_flag=True, help="Do not download product images.")
@click.option(
    "--dataset",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON or JSON-lines file with product records.",
)
@click.pass_obj
def generate(obj: SeedContext, items, skip_images: bool, dataset: Path | None):
    """Seed the database with products from the dataset."""
    count = validate_count(
        items if items is not None else settings.DEFAULT_ITEMS, "--items", maximum=settings.MAX_ITEMS
    )

    with obj.session() as session:
        CatalogStore.require_installed(session)
        records = SourceDataset(dataset or settings.DATASET_PATH).load(count)
        catalog = CatalogStore(session)

        chains = _process_categories(session, records)
        attribute_stores = _process_attributes(session, catalog, records)
        _process_products(session, catalog, records, chains, attribute_stores, skip_images)

    logger.info(f"Seeded {len(records)} products")
    success(f"Seeded the database with {len(records)} items.")


# ── categories / tags / attributes ───────────────────


def _assign_random_subsets(
    obj: SeedContext,
    catalog: CatalogStore,
    terms: list[Term],
    noun: str,
    assign: Callable[[Product, list[Term]], None],
) -> None:
    number = ask_number(f"Enter the number of products to assign {noun} to")
    targets = catalog.random_products(number)

    with click.progressbar(targets, label=f"Assigning {noun} to products") as bar:
        for product in bar:
            picked = obj.random.sample(terms, obj.random.randint(1, len(terms)))
            assign(product, picked)

    success(f"{noun.capitalize()} have been assigned to products.")


def _seed_product_terms(obj: SeedContext, taxonomy: str, noun: str, assign_attr: str) -> None:
    if not confirm(f"Do you want to generate product {noun}?"):
        return

    with obj.session() as session:
        CatalogStore.require_installed(session)
        if confirm(f"Do you want to delete all existing {noun} first?"):
            delete_terms_with_progress(session, taxonomy)

        click.echo("")
        number = ask_number(f"Enter the number of {noun} to generate")
        store = SqlTaxonomyStore(session, taxonomy)
        create_fake_terms(obj.faker, store, number, label=f"Generating {noun}")
        success(f"{noun.capitalize()} have been generated.")
        click.echo("")

        terms = store.list_terms()
        if terms and confirm(f"Do you want to assign {noun} to products?"):
            catalog = CatalogStore(session)
            _assign_random_subsets(obj, catalog, terms, noun, getattr(catalog, assign_attr))


@products.command()
@click.pass_obj
def categories(obj: SeedContext):
    """Generate random product categories."""
    _seed_product_terms(obj, CATEGORY_TAXONOMY, "categories", "set_categories")


@products.command()
@click.pass_obj
def tags(obj: SeedContext):
    """Generate random product tags."""
    _seed_product_terms(obj, TAG_TAXONOMY, "tags", "set_tags")


@products.command()
@click.pass_obj
def attributes(obj: SeedContext):
    """Generate random terms for an existing product attribute."""
    if not confirm("Do you want to generate product attributes?"):
        return

    with obj.session() as session:
        CatalogStore.require_installed(session)
        catalog = CatalogStore(session)

        available = catalog.list_attributes()
        if not available:
            raise PreconditionError("No attributes found.")

        slug = ask_select("Select an attribute", {a.slug: a.name for a in available})
        attribute = catalog.get_attribute(slug)

        if confirm("Do you want to delete all terms for this attribute?"):
            delete_terms_with_progress(session, attribute.taxonomy)
            click.echo("")

        number = ask_number("Enter the number of terms to generate")
        store = SqlTaxonomyStore(session, attribute.taxonomy)
        create_fake_terms(obj.faker, store, number)
        success("Terms have been generated.")
        click.echo("")

        terms = store.list_terms()
        if terms and confirm("Do you want to assign terms to products?"):

            def assign(product: Product, picked: list[Term]) -> None:
                catalog.attach_attribute_terms(product, attribute, picked)

            _assign_random_subsets(obj, catalog, terms, "terms", assign)


# ── reviews ──────────────────────────────────────────


@products.command()
@click.option("--items", default=None, help="How many random products receive reviews.")
@click.option(
    "--max-reviews",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    help="Upper bound of reviews per product.",
)
@click.pass_obj
def reviews(obj: SeedContext, items, max_reviews: int):
    """Add random customer reviews to random products."""
    if items is None:
        count = ask_number("Enter the number of products to review", minimum=1)
    else:
        count = validate_count(items, "--items")

    faker = obj.faker
    total = 0
    with obj.session() as session:
        CatalogStore.require_installed(session)
        catalog = CatalogStore(session)
        targets = catalog.random_products(count)
        if not targets:
            raise PreconditionError("No products found. Run 'seed products generate' first.")

        with click.progressbar(targets, label="Generating reviews") as bar:
            for product in bar:
                for _ in range(obj.random.randint(1, max_reviews)):
                    catalog.add_review(
                        product,
                        author_name=faker.name(),
                        author_email=faker.email(),
                        content=faker.paragraph(nb_sentences=3),
                        rating=obj.random.randint(1, 5),
                        verified=faker.boolean(chance_of_getting_true=70),
                    )
                    total += 1

    success(f"Generated {total} reviews for {len(targets)} products.")


# ── random batch updates ─────────────────────────────


def _update_random_products(
    obj: SeedContext, items, label: str, update: Callable[[CatalogStore, Product], None]
) -> int:
    count = validate_count(items, "--items")
    with obj.session() as session:
        CatalogStore.require_installed(session)
        catalog = CatalogStore(session)
        targets = catalog.random_products(count)
        with click.progressbar(targets, label=label) as bar:
            for product in bar:
                update(catalog, product)
    return len(targets)


def batch_options(func):
    func = click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")(func)
    func = click.option(
        "--items",
        default=settings.DEFAULT_BATCH,
        show_default=True,
        help="How many random products to update.",
    )(func)
    return func


@products.command()
@batch_options
@click.pass_obj
def sale(obj: SeedContext, items, yes: bool):
    """Give random products a sale price of 80% of their price."""
    if not yes:
        click.confirm(
            "Are you sure you want to generate discounted prices for products?", abort=True
        )
    _update_random_products(
        obj, items, "Generating sale prices", lambda catalog, p: catalog.set_sale_price(p)
    )
    success("Sale prices have been generated.")


@products.command()
@batch_options
@click.pass_obj
def featured(obj: SeedContext, items, yes: bool):
    """Mark random products as featured."""
    if not yes:
        click.confirm("This will set random products as featured. Are you sure?", abort=True)
    _update_random_products(
        obj, items, "Generating featured products", lambda catalog, p: catalog.set_featured(p)
    )
    success("Featured products have been generated.")


@products.command("stock_status")
@batch_options
@click.option("--status", type=click.Choice(list(STOCK_STATUSES)), default=None, help="Stock status to set.")
@click.pass_obj
def stock_status(obj: SeedContext, items, yes: bool, status: str | None):
    """Set the stock status of random products."""
    if not yes:
        click.confirm(
            "This will update the stock status for random products. Are you sure?", abort=True
        )
    if status is None:
        status = ask_select("Select a stock status", STOCK_STATUSES, default="instock")

    _update_random_products(
        obj,
        items,
        "Updating stock status",
        lambda catalog, p: catalog.set_stock_status(p, status),
    )
    success("Stock status has been updated.")


@products.command("stock_quantity")
@batch_options
@click.pass_obj
def stock_quantity(obj: SeedContext, items, yes: bool):
    """Manage stock on random products with a quantity between 1 and 100."""
    if not yes:
        click.confirm(
            "This will update the stock quantity for random products. Are you sure?", abort=True
        )
    _update_random_products(
        obj,
        items,
        "Updating stock quantity",
        lambda catalog, p: catalog.set_stock_quantity(p, obj.random.randint(1, 100)),
    )
    success("Stock quantity has been updated.")


# ── delete ───────────────────────────────────────────


@products.command()
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(obj: SeedContext, force: bool):
    """Delete every product."""
    if not force:
        click.confirm("Are you sure you want to delete all products?", abort=True)

    with obj.session() as session:
        CatalogStore.require_installed(session)
        catalog = CatalogStore(session)
        product_ids = catalog.product_ids()
        with click.progressbar(product_ids, label="Deleting products") as bar:
            for product_id in bar:
                catalog.delete_product(product_id)

    success("All products have been deleted.")


products.add_command(delete_terms)
