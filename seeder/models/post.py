"""Post model - generic content records of any post type."""

import uuid

from sqlalchemy import Column, String, Text, ForeignKey, Index, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seeder.db.base import Base
from seeder.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin

post_terms = Table(
    "post_terms",
    Base.metadata,
    Column("post_id", Uuid, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("term_id", Uuid, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)


class Post(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_type_slug", "post_type", "slug", unique=True),
    )

    post_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="publish", nullable=False)

    # Foreign keys
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL")
    )

    # Relationships
    author = relationship("User", back_populates="posts")
    terms = relationship("Term", secondary=post_terms, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Post {self.post_type}:{self.slug}>"
