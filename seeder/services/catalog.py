"""Catalog storage: products, attributes and reviews."""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from seeder.core.errors import PreconditionError, ValidationError
from seeder.db.base import has_tables
from seeder.models.attribute import Attribute, ProductAttribute
from seeder.models.product import Product, STOCK_STATUSES
from seeder.models.review import ProductReview
from seeder.models.term import Term
from seeder.schemas.dataset import ProductRecord
from seeder.services.slugs import slugify, unique_slug

logger = logging.getLogger(__name__)

CATEGORY_TAXONOMY = "product_cat"
TAG_TAXONOMY = "product_tag"

CATALOG_TABLES = ("products", "attributes", "product_attributes", "product_reviews", "terms")

CENTS = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class CatalogStore:
    def __init__(self, session: Session):
        self.session = session

    # ── Installation check ───────────────────────────

    @staticmethod
    def is_installed(session: Session) -> bool:
        return has_tables(session, *CATALOG_TABLES)

    @staticmethod
    def require_installed(session: Session) -> None:
        if not CatalogStore.is_installed(session):
            raise PreconditionError("The catalog schema is not installed. Run 'seed db init' first.")

    # ── Products ─────────────────────────────────────

    def product_ids(self) -> list[UUID]:
        return list(self.session.scalars(select(Product.id)))

    def count_products(self) -> int:
        return self.session.scalar(select(func.count()).select_from(Product)) or 0

    def delete_product(self, product_id: UUID) -> None:
        self.session.execute(delete(Product).where(Product.id == product_id))

    def random_products(self, limit: int) -> list[Product]:
        return list(self.session.scalars(select(Product).order_by(func.random()).limit(limit)))

    def terms_by_id(self, term_ids: Iterable[UUID]) -> list[Term]:
        term_ids = list(term_ids)
        if not term_ids:
            return []
        return list(self.session.scalars(select(Term).where(Term.id.in_(term_ids))))

    def create_product(
        self,
        record: ProductRecord,
        category_ids: Sequence[UUID] = (),
        attributes: Sequence[tuple[Attribute, list[Term]]] = (),
        image_url: str | None = None,
    ) -> Product:
        price = _money(record.price)
        product = Product(
            name=record.name,
            slug=unique_slug(self.session, Product.slug, record.name, max_length=255),
            description=record.description,
            status="publish",
            catalog_visibility="visible",
            price=price,
            regular_price=price,
            image_url=image_url,
            source_id=record.object_id,
        )
        product.categories = self.terms_by_id(category_ids)
        self.session.add(product)

        for attribute, terms in attributes:
            self.attach_attribute_terms(product, attribute, terms)

        self.session.flush()
        logger.debug(f"Created product {product.slug} with {len(product.categories)} categories")
        return product

    def set_categories(self, product: Product, terms: Sequence[Term]) -> None:
        product.categories = list(terms)

    def set_tags(self, product: Product, terms: Sequence[Term]) -> None:
        product.tags = list(terms)

    def set_sale_price(self, product: Product, ratio: Decimal = Decimal("0.8")) -> None:
        product.sale_price = _money(product.price * ratio)

    def set_featured(self, product: Product, featured: bool = True) -> None:
        product.featured = featured

    def set_stock_status(self, product: Product, status: str) -> None:
        if status not in STOCK_STATUSES:
            raise ValidationError(
                f"Unknown stock status '{status}'. Use one of: {', '.join(STOCK_STATUSES)}"
            )
        product.stock_status = status

    def set_stock_quantity(self, product: Product, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative.")
        product.manage_stock = True
        product.stock_quantity = quantity
        product.stock_status = "instock" if quantity > 0 else "outofstock"

    # ── Attributes ───────────────────────────────────

    def list_attributes(self) -> list[Attribute]:
        return list(self.session.scalars(select(Attribute).order_by(Attribute.name)))

    def get_attribute(self, slug: str) -> Attribute | None:
        return self.session.scalars(select(Attribute).where(Attribute.slug == slug)).first()

    def ensure_attribute(self, name: str, slug: str | None = None) -> Attribute:
        """Return the attribute with this slug, creating a select-type attribute if missing."""
        slug = slug or slugify(name, max_length=28).replace("-", "_")
        attribute = self.get_attribute(slug)
        if attribute is None:
            attribute = Attribute(
                name=name, slug=slug, type="select", order_by="menu_order", has_archives=False
            )
            self.session.add(attribute)
            self.session.flush()
            logger.info(f"Created attribute {slug}")
        return attribute

    def attach_attribute_terms(
        self, product: Product, attribute: Attribute, terms: Sequence[Term], position: int = 0
    ) -> ProductAttribute:
        """Set ``terms`` as the product's options for ``attribute``, replacing earlier ones."""
        for link in product.attributes:
            if link.attribute_id == attribute.id or link.attribute is attribute:
                link.options = list(terms)
                return link

        link = ProductAttribute(
            attribute=attribute,
            position=position,
            is_visible=True,
            is_variation=False,
            options=list(terms),
        )
        product.attributes.append(link)
        return link

    # ── Reviews ──────────────────────────────────────

    def add_review(
        self,
        product: Product,
        author_name: str,
        author_email: str,
        content: str,
        rating: int,
        verified: bool = False,
    ) -> ProductReview:
        if not 1 <= rating <= 5:
            raise ValidationError("Review rating must be between 1 and 5.")

        review = ProductReview(
            product_id=product.id,
            author_name=author_name,
            author_email=author_email,
            content=content,
            rating=rating,
            is_verified=verified,
        )
        self.session.add(review)
        self.session.flush()

        average, count = self.session.execute(
            select(func.avg(ProductReview.rating), func.count(ProductReview.id)).where(
                ProductReview.product_id == product.id
            )
        ).one()
        product.review_count = count
        product.average_rating = _money(Decimal(str(average or 0)))
        return review
