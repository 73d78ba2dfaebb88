"""Product attribute models - global attributes and their per-product options."""

import uuid

from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, Table, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seeder.db.base import Base
from seeder.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

ATTRIBUTE_TAXONOMY_PREFIX = "pa_"

product_attribute_terms = Table(
    "product_attribute_terms",
    Base.metadata,
    Column(
        "product_attribute_id",
        Uuid,
        ForeignKey("product_attributes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("term_id", Uuid, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)


def attribute_taxonomy(slug: str) -> str:
    return f"{ATTRIBUTE_TAXONOMY_PREFIX}{slug}"


class Attribute(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "attributes"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(28), unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), default="select", nullable=False)
    order_by: Mapped[str] = mapped_column(String(20), default="menu_order", nullable=False)
    has_archives: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    @property
    def taxonomy(self) -> str:
        return attribute_taxonomy(self.slug)

    def __repr__(self) -> str:
        return f"<Attribute {self.slug}>"


class ProductAttribute(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "product_attributes"
    __table_args__ = (
        UniqueConstraint("product_id", "attribute_id", name="uq_product_attribute"),
    )

    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_variation: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Foreign keys
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    attribute_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("attributes.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    product = relationship("Product", back_populates="attributes")
    attribute = relationship("Attribute", lazy="selectin")
    options = relationship("Term", secondary=product_attribute_terms, lazy="selectin")

    def __repr__(self) -> str:
        return f"<ProductAttribute product={self.product_id} attribute={self.attribute_id}>"
