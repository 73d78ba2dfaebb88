"""Unit tests for category path parsing and tree building."""

import itertools
import uuid
from unittest.mock import MagicMock

import pytest

from seeder.core.errors import MalformedPathError, TermCreationError
from seeder.models.term import Term
from seeder.schemas.dataset import ProductRecord
from seeder.services.category_hierarchy import (
    build_all,
    canonical_path,
    deepest_paths,
    ensure_chain,
    parse_path,
)
from seeder.services.taxonomy import SqlTaxonomyStore


@pytest.fixture
def store(session):
    return SqlTaxonomyStore(session, "product_cat")


def tree_shape(store):
    """Set of (parent name, name) pairs, root parents reported as None."""
    terms = {term.id: term for term in store.list_terms()}
    return {
        (terms[t.parent_id].name if t.parent_id else None, t.name) for t in terms.values()
    }


# ── parse_path ─────────────────────────────────────

def test_parse_path_splits_and_trims():
    assert parse_path("A > B > C") == ["A", "B", "C"]
    assert parse_path("  Audio > Headphones  ") == ["Audio", "Headphones"]


def test_parse_path_keeps_bare_angle_bracket_in_name():
    assert parse_path("Cables > HDMI>DVI Adapters") == ["Cables", "HDMI>DVI Adapters"]


def test_parse_path_single_segment():
    assert parse_path("Electronics") == ["Electronics"]


@pytest.mark.parametrize("path", ["A > B > C", "TV & Home Theater > TVs", "Solo", "Cables > HDMI>DVI Adapters"])
def test_parse_path_round_trip(path):
    assert " > ".join(parse_path(path)) == path.strip()


@pytest.mark.parametrize("path", ["", "   ", None])
def test_parse_path_rejects_blank(path):
    with pytest.raises(MalformedPathError):
        parse_path(path)


@pytest.mark.parametrize("path", ["A >  > C", " > A", "A > "])
def test_parse_path_rejects_empty_segment(path):
    with pytest.raises(MalformedPathError) as exc_info:
        parse_path(path)
    assert exc_info.value.path == path


def test_canonical_path_normalizes_spacing():
    assert canonical_path("  A >  B > C ") == "A > B > C"
    assert canonical_path("A>B") == "A>B"


# ── ensure_chain ───────────────────────────────────

def test_ensure_chain_twice_creates_once(store):
    first = ensure_chain(["A", "B", "C"], store)
    second = ensure_chain(["A", "B", "C"], store)

    assert first == second
    assert len(store.term_ids()) == 3


def test_ensure_chain_reuses_shared_prefix(store):
    ensure_chain(["A", "B"], store)
    ensure_chain(["A", "C"], store)

    assert tree_shape(store) == {(None, "A"), ("A", "B"), ("A", "C")}


def test_ensure_chain_returns_leaf(store):
    leaf_id = ensure_chain(["Audio", "Headphones"], store)
    leaf = store.get(leaf_id)
    assert leaf.name == "Headphones"
    assert leaf.parent.name == "Audio"


def test_same_name_under_different_parents(store):
    ensure_chain(["Laptops", "Accessories"], store)
    ensure_chain(["Phones", "Accessories"], store)

    assert len(store.term_ids()) == 4
    assert tree_shape(store) >= {("Laptops", "Accessories"), ("Phones", "Accessories")}


def test_ensure_chain_rejects_empty_segments(store):
    with pytest.raises(MalformedPathError):
        ensure_chain([], store)


def test_ensure_chain_wraps_store_failure():
    """A store error while creating a level aborts the chain with TermCreationError."""
    root_id = uuid.uuid4()
    store = MagicMock()
    store.find.return_value = None
    store.create.side_effect = [root_id, RuntimeError("disk full")]

    with pytest.raises(TermCreationError) as exc_info:
        ensure_chain(["A", "B", "C"], store)

    assert exc_info.value.name == "B"
    assert exc_info.value.parent_id == root_id
    assert "disk full" in str(exc_info.value)
    assert store.create.call_count == 2


def test_ensure_chain_keeps_earlier_levels_on_failure(store, monkeypatch):
    real_create = store.create

    def failing_create(parent_id, name, description=None):
        if name == "C":
            raise TermCreationError(name, parent_id, "boom")
        return real_create(parent_id, name, description)

    monkeypatch.setattr(store, "create", failing_create)

    with pytest.raises(TermCreationError):
        ensure_chain(["A", "B", "C"], store)

    assert tree_shape(store) == {(None, "A"), ("A", "B")}


# ── build_all ──────────────────────────────────────

def test_build_all_three_distinct_nodes(store):
    leaves = build_all(["A > B", "A > B", "A > C"], store)

    assert set(leaves) == {"A > B", "A > C"}
    assert tree_shape(store) == {(None, "A"), ("A", "B"), ("A", "C")}


@pytest.mark.parametrize(
    "paths", list(itertools.permutations(["A > B", "A > B", "A > C"]))
)
def test_build_all_order_independent(session, paths):
    store = SqlTaxonomyStore(session, "product_cat")
    build_all(paths, store)
    assert tree_shape(store) == {(None, "A"), ("A", "B"), ("A", "C")}


def test_build_all_electronics_tree(store):
    paths = [
        "Electronics > Audio > Headphones",
        "Electronics > Audio > Speakers",
        "Electronics > Video",
    ]
    leaves = build_all(paths, store)

    assert len(store.term_ids()) == 5
    assert tree_shape(store) == {
        (None, "Electronics"),
        ("Electronics", "Audio"),
        ("Audio", "Headphones"),
        ("Audio", "Speakers"),
        ("Electronics", "Video"),
    }
    assert store.get(leaves["Electronics > Video"]).name == "Video"


def test_build_all_treats_spacing_variants_as_one_path(store):
    leaves = build_all(["A > B", " A > B ", "A  > B"], store)
    assert list(leaves) == ["A > B"]
    assert len(store.term_ids()) == 2


def test_build_all_bare_angle_bracket_is_one_level(store):
    leaves = build_all(["HDMI>DVI"], store)
    assert list(leaves) == ["HDMI>DVI"]
    assert tree_shape(store) == {(None, "HDMI>DVI")}


def test_build_all_rebuilds_after_delete(store):
    paths = ["Electronics > Audio > Headphones", "Electronics > Video", "Toys"]
    build_all(paths, store)
    before = tree_shape(store)

    assert store.delete_all() == 5
    assert store.term_ids() == []

    build_all(paths, store)
    assert tree_shape(store) == before


def test_build_all_malformed_path_creates_nothing(store):
    with pytest.raises(MalformedPathError):
        build_all(["A > B", "A >  > C"], store)
    assert store.term_ids() == []


def test_build_all_leaves_other_taxonomies_alone(session, store):
    tags = SqlTaxonomyStore(session, "product_tag")
    tags.create(None, "A")

    build_all(["A > B"], store)

    assert len(tags.term_ids()) == 1
    assert len(store.term_ids()) == 2


# ── deepest_paths ──────────────────────────────────

def test_deepest_paths_skips_uncategorised():
    records = [
        ProductRecord(
            name="Speaker",
            price=10,
            hierarchicalCategories={"lvl0": "Audio", "lvl1": "Audio > Speakers"},
        ),
        ProductRecord(name="Mystery box", price=5),
    ]
    assert deepest_paths(records) == ["Audio > Speakers"]


def test_terms_created_are_plain_rows(session, store):
    ensure_chain(["A"], store)
    term = session.get(Term, store.term_ids()[0])
    assert term.taxonomy == "product_cat"
    assert term.slug == "a"
