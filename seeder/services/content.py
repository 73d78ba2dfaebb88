"""Content storage: posts of any post type and user accounts."""

import logging
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from seeder.core.errors import PreconditionError, RecordCreationError
from seeder.core.security import hash_password
from seeder.db.base import has_tables
from seeder.models.post import Post
from seeder.models.term import Term
from seeder.models.user import RoleType, User
from seeder.services.slugs import unique_slug

logger = logging.getLogger(__name__)


class ContentStore:
    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def require_installed(session: Session) -> None:
        if not has_tables(session, "posts", "users", "terms"):
            raise PreconditionError("The content schema is not installed. Run 'seed db init' first.")

    # ── Posts ────────────────────────────────────────

    def create_post(
        self,
        post_type: str,
        title: str,
        content: str,
        status: str = "publish",
        author_id: UUID | None = None,
    ) -> Post:
        post = Post(
            post_type=post_type,
            title=title,
            slug=unique_slug(self.session, Post.slug, title, Post.post_type == post_type),
            content=content,
            status=status,
            author_id=author_id,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def post_ids(self, post_type: str) -> list[UUID]:
        return list(self.session.scalars(select(Post.id).where(Post.post_type == post_type)))

    def count_posts(self, post_type: str) -> int:
        return self.session.scalar(
            select(func.count()).select_from(Post).where(Post.post_type == post_type)
        ) or 0

    def delete_post(self, post_id: UUID) -> None:
        self.session.execute(delete(Post).where(Post.id == post_id))

    def random_posts(self, post_type: str, limit: int) -> list[Post]:
        return list(
            self.session.scalars(
                select(Post).where(Post.post_type == post_type).order_by(func.random()).limit(limit)
            )
        )

    def assign_term(self, post: Post, term: Term, append: bool = True) -> None:
        if not append:
            post.terms = [t for t in post.terms if t.taxonomy != term.taxonomy]
        if term not in post.terms:
            post.terms.append(term)

    # ── Users ────────────────────────────────────────

    def create_user(
        self,
        user_login: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: RoleType = RoleType.SUBSCRIBER,
    ) -> User:
        existing = self.session.scalars(
            select(User).where(or_(User.user_login == user_login, User.email == email))
        ).first()
        if existing is not None:
            field = "username" if existing.user_login == user_login else "email address"
            raise RecordCreationError(f"Sorry, that {field} already exists!")

        display_name = " ".join(part for part in (first_name, last_name) if part) or user_login
        user = User(
            user_login=user_login,
            email=email,
            hashed_password=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            role=role,
        )
        self.session.add(user)
        self.session.flush()
        logger.debug(f"Created user {user_login} ({role.value})")
        return user

    def deletable_user_ids(self) -> list[UUID]:
        """Every user except administrators."""
        return list(self.session.scalars(select(User.id).where(User.role != RoleType.ADMINISTRATOR)))

    def delete_user(self, user_id: UUID) -> None:
        self.session.execute(delete(User).where(User.id == user_id))
