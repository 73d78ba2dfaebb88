"""URL slug helpers shared by terms, posts and products."""

import re
import unicodedata

from sqlalchemy import select
from sqlalchemy.orm import Session

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s_]+")


def slugify(value: str, max_length: int = 200) -> str:
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = _NON_WORD.sub("", normalized.lower())
    slug = _SEPARATORS.sub("-", normalized).strip("-")
    return slug[:max_length].rstrip("-") or "item"


def unique_slug(session: Session, column, value: str, *criteria, max_length: int = 200) -> str:
    """Slugify ``value`` and append ``-2``, ``-3``... until no row in ``column`` uses it.

    ``criteria`` narrows the collision check, e.g. ``Term.taxonomy == "product_cat"``.
    """
    base = slugify(value, max_length=max_length)
    # suffixed candidates may be truncated, so match on a shorter prefix
    prefix = base[: max(1, max_length - 8)]
    taken = set(
        session.scalars(
            select(column).where(column.startswith(prefix, autoescape=True), *criteria)
        )
    )
    if base not in taken:
        return base

    suffix = 2
    while True:
        tail = f"-{suffix}"
        candidate = f"{base[: max_length - len(tail)]}{tail}"
        if candidate not in taken:
            return candidate
        suffix += 1
