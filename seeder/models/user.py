"""User model."""

import enum

from sqlalchemy import String, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seeder.db.base import Base
from seeder.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class RoleType(str, enum.Enum):
    ADMINISTRATOR = "administrator"
    EDITOR = "editor"
    AUTHOR = "author"
    CONTRIBUTOR = "contributor"
    SUBSCRIBER = "subscriber"
    SHOP_MANAGER = "shop_manager"
    CUSTOMER = "customer"


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    user_login: Mapped[str] = mapped_column(String(60), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    display_name: Mapped[str] = mapped_column(String(250), nullable=False)
    role: Mapped[RoleType] = mapped_column(
        Enum(RoleType), default=RoleType.SUBSCRIBER, nullable=False, index=True
    )

    # Relationships
    posts = relationship("Post", back_populates="author", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<User {self.user_login}>"
