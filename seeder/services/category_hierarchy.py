"""Turn delimited category paths into a parent-linked term tree.

``"Electronics > Audio > Headphones"`` becomes three terms, each parented to
the previous one. Lookups go through the store by ``(parent_id, name)`` before
anything is created, so paths sharing a prefix reuse the same ancestors and
running the same input twice creates nothing new.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from seeder.core.errors import MalformedPathError, TermCreationError
from seeder.schemas.dataset import ProductRecord
from seeder.services.taxonomy import TaxonomyStore

logger = logging.getLogger(__name__)

SEPARATOR = " > "


def parse_path(path: str) -> list[str]:
    """Split a category path on ``" > "`` into trimmed names, root first.

    A ``>`` without the surrounding spaces is part of a name.

    >>> parse_path("A > B > C")
    ['A', 'B', 'C']
    >>> parse_path("Cables > HDMI>DVI Adapters")
    ['Cables', 'HDMI>DVI Adapters']
    """
    if path is None or not path.strip():
        raise MalformedPathError(path)

    segments = [segment.strip() for segment in path.split(SEPARATOR)]
    if any(not segment for segment in segments):
        raise MalformedPathError(path, "empty category name between separators")
    return segments


def canonical_path(path: str) -> str:
    return SEPARATOR.join(parse_path(path))


def ensure_chain(segments: Sequence[str], store: TaxonomyStore) -> UUID:
    """Find or create every level of ``segments`` and return the leaf id."""
    if not segments:
        raise MalformedPathError("", "no category names to create")

    parent_id: UUID | None = None
    for name in segments:
        term_id = store.find(parent_id, name)
        if term_id is None:
            try:
                term_id = store.create(parent_id, name)
            except TermCreationError:
                raise
            except Exception as exc:
                raise TermCreationError(name, parent_id, str(exc)) from exc
        parent_id = term_id
    return parent_id


def build_all(paths: Iterable[str], store: TaxonomyStore) -> dict[str, UUID]:
    """Create the tree implied by ``paths``.

    Returns ``{canonical path: leaf id}``. Identical paths, including ones that
    only differ in spaces around a name, are processed once. Existing terms are
    reused and never deleted.
    """
    distinct: dict[str, list[str]] = {}
    for path in paths:
        segments = parse_path(path)
        distinct.setdefault(SEPARATOR.join(segments), segments)

    leaves: dict[str, UUID] = {}
    for key in sorted(distinct):
        leaves[key] = ensure_chain(distinct[key], store)

    logger.info(f"Category tree ready: {len(leaves)} distinct paths")
    return leaves


def deepest_paths(records: Iterable[ProductRecord]) -> list[str]:
    """The deepest hierarchical category path of each record, skipping uncategorised ones."""
    return [record.category_path for record in records if record.category_path]
