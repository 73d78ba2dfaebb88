"""Term model - hierarchical taxonomy terms (categories, tags, attribute values)."""

import uuid

from sqlalchemy import String, Text, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seeder.db.base import Base
from seeder.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

MAX_TERM_NAME_LENGTH = 200


class Term(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "terms"
    __table_args__ = (
        UniqueConstraint("taxonomy", "slug", name="uq_terms_taxonomy_slug"),
        Index("ix_terms_taxonomy_parent_name", "taxonomy", "parent_id", "name"),
    )

    taxonomy: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(MAX_TERM_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_TERM_NAME_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Self-referential for child terms
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("terms.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    parent = relationship("Term", remote_side="Term.id", back_populates="children")
    children = relationship("Term", back_populates="parent", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Term {self.taxonomy}:{self.slug}>"
