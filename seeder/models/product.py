"""Product model."""

from decimal import Decimal

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, ForeignKey, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seeder.db.base import Base
from seeder.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("term_id", Uuid, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)

product_tags = Table(
    "product_tags",
    Base.metadata,
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("term_id", Uuid, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)

STOCK_STATUSES: dict[str, str] = {
    "instock": "In stock",
    "outofstock": "Out of stock",
    "onbackorder": "On backorder",
}


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="publish", nullable=False)
    catalog_visibility: Mapped[str] = mapped_column(String(20), default="visible", nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    regular_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    sale_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    stock_status: Mapped[str] = mapped_column(String(20), default="instock", nullable=False)
    manage_stock: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    stock_quantity: Mapped[int | None] = mapped_column(Integer)

    image_url: Mapped[str | None] = mapped_column(String(500))
    average_rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), default=Decimal("0"), nullable=False)
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # objectID of the dataset record the product was built from
    source_id: Mapped[str | None] = mapped_column(String(64), index=True)

    # Relationships
    categories = relationship("Term", secondary=product_categories, lazy="selectin")
    tags = relationship("Term", secondary=product_tags, lazy="selectin")
    attributes = relationship(
        "ProductAttribute",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ProductAttribute.position",
    )
    reviews = relationship(
        "ProductReview", back_populates="product", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Product {self.slug}: {self.name}>"
