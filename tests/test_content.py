"""Unit tests for posts, users and the post type registry."""

import pytest

from seeder.core.errors import RecordCreationError
from seeder.core.security import verify_password
from seeder.models.user import RoleType, User
from seeder.services.content import ContentStore
from seeder.services.content_types import (
    get_taxonomies_for_post_type,
    is_known_taxonomy,
    search_post_types,
)
from seeder.services.taxonomy import SqlTaxonomyStore


@pytest.fixture
def content(session):
    return ContentStore(session)


# ── Posts ──────────────────────────────────────────

def test_create_post(content):
    post = content.create_post("post", "Hello World", "Body")
    assert post.slug == "hello-world"
    assert post.status == "publish"
    assert content.count_posts("post") == 1
    assert content.count_posts("page") == 0


def test_slugs_unique_per_post_type(content):
    first = content.create_post("post", "About", "Body")
    second = content.create_post("post", "About", "Body")
    page = content.create_post("page", "About", "Body")

    assert first.slug == "about"
    assert second.slug == "about-2"
    assert page.slug == "about"


def test_delete_post(session, content):
    post = content.create_post("post", "Doomed", "Body")
    content.delete_post(post.id)
    session.flush()
    assert content.post_ids("post") == []


def test_assign_term(session, content):
    store = SqlTaxonomyStore(session, "category")
    news = store.get(store.create(None, "News"))
    sports = store.get(store.create(None, "Sports"))
    post = content.create_post("post", "Match report", "Body")

    content.assign_term(post, news)
    content.assign_term(post, news)
    content.assign_term(post, sports)
    assert {t.name for t in post.terms} == {"News", "Sports"}

    content.assign_term(post, news, append=False)
    assert [t.name for t in post.terms] == ["News"]


# ── Users ──────────────────────────────────────────

def test_create_user_hashes_password(content):
    user = content.create_user("jdoe", "jdoe@example.com", "s3cret-pass", "Jane", "Doe")
    assert user.hashed_password != "s3cret-pass"
    assert verify_password("s3cret-pass", user.hashed_password)
    assert user.display_name == "Jane Doe"
    assert user.role == RoleType.SUBSCRIBER


def test_display_name_falls_back_to_login(content):
    user = content.create_user("anon", "anon@example.com", "pw")
    assert user.display_name == "anon"


def test_duplicate_login_rejected(content):
    content.create_user("jdoe", "jdoe@example.com", "pw")
    with pytest.raises(RecordCreationError) as exc_info:
        content.create_user("jdoe", "other@example.com", "pw")
    assert "username" in str(exc_info.value)


def test_duplicate_email_rejected(content):
    content.create_user("jdoe", "jdoe@example.com", "pw")
    with pytest.raises(RecordCreationError) as exc_info:
        content.create_user("other", "jdoe@example.com", "pw")
    assert "email address" in str(exc_info.value)


def test_administrators_are_not_deletable(session, content):
    admin = content.create_user("admin", "admin@example.com", "pw", role=RoleType.ADMINISTRATOR)
    editor = content.create_user("ed", "ed@example.com", "pw", role=RoleType.EDITOR)

    assert content.deletable_user_ids() == [editor.id]

    content.delete_user(editor.id)
    session.flush()
    assert session.get(User, admin.id) is not None


def test_deleting_author_keeps_posts(session, content):
    author = content.create_user("writer", "writer@example.com", "pw", role=RoleType.AUTHOR)
    post = content.create_post("post", "Kept", "Body", author_id=author.id)
    session.commit()

    content.delete_user(author.id)
    session.commit()
    session.expire_all()

    assert content.count_posts("post") == 1
    assert content.random_posts("post", 1)[0].author_id is None
    assert post.id in content.post_ids("post")


# ── Post type registry ─────────────────────────────

def test_search_post_types():
    assert search_post_types("po") == {"post": "Posts"}
    assert set(search_post_types("")) == {"post", "page"}
    assert search_post_types("nothing") == {}


def test_post_format_is_not_seeded():
    assert get_taxonomies_for_post_type("post") == ["category", "post_tag"]
    assert get_taxonomies_for_post_type("page") == []
    assert get_taxonomies_for_post_type("product") == []


def test_known_taxonomies():
    assert is_known_taxonomy("category")
    assert is_known_taxonomy("product_cat")
    assert is_known_taxonomy("pa_color")
    assert not is_known_taxonomy("genre")
