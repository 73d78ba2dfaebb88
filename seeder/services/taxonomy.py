"""Taxonomy term storage.

``SqlTaxonomyStore`` is bound to one session and one taxonomy key. Lookups are
keyed by ``(parent_id, name)``; ``create`` commits every new term at once so
terms created before a later failure stay usable on the next run.
"""

import logging
import threading
from typing import Protocol
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seeder.core.errors import TermCreationError
from seeder.models.term import Term, MAX_TERM_NAME_LENGTH
from seeder.services.slugs import unique_slug

logger = logging.getLogger(__name__)


class TaxonomyStore(Protocol):
    def find(self, parent_id: UUID | None, name: str) -> UUID | None: ...

    def create(self, parent_id: UUID | None, name: str) -> UUID: ...

    def delete_all(self, taxonomy: str | None = None) -> int: ...


class SqlTaxonomyStore:
    def __init__(self, session: Session, taxonomy: str):
        self.session = session
        self.taxonomy = taxonomy
        self._lock = threading.Lock()

    def _where_sibling(self, parent_id: UUID | None, name: str):
        parent_clause = Term.parent_id.is_(None) if parent_id is None else Term.parent_id == parent_id
        return (Term.taxonomy == self.taxonomy, parent_clause, Term.name == name)

    def find(self, parent_id: UUID | None, name: str) -> UUID | None:
        name = (name or "").strip()
        return self.session.scalars(
            select(Term.id).where(*self._where_sibling(parent_id, name)).limit(1)
        ).first()

    def get(self, term_id: UUID) -> Term | None:
        return self.session.scalars(
            select(Term).where(Term.id == term_id, Term.taxonomy == self.taxonomy)
        ).first()

    def get_by_name(self, name: str) -> Term | None:
        """First term of the taxonomy with this name, whatever its parent."""
        name = (name or "").strip()
        return self.session.scalars(
            select(Term).where(Term.taxonomy == self.taxonomy, Term.name == name).limit(1)
        ).first()

    def create(self, parent_id: UUID | None, name: str, description: str | None = None) -> UUID:
        name = (name or "").strip()
        if not name:
            raise TermCreationError(name, parent_id, "term name is empty")
        if len(name) > MAX_TERM_NAME_LENGTH:
            raise TermCreationError(
                name, parent_id, f"term name is longer than {MAX_TERM_NAME_LENGTH} characters"
            )

        with self._lock:
            if parent_id is not None and self.get(parent_id) is None:
                raise TermCreationError(name, parent_id, "parent term does not exist")
            if self.find(parent_id, name) is not None:
                raise TermCreationError(
                    name, parent_id, "a term with this name already exists under the same parent"
                )

            term = Term(
                taxonomy=self.taxonomy,
                name=name,
                slug=unique_slug(self.session, Term.slug, name, Term.taxonomy == self.taxonomy),
                description=description,
                parent_id=parent_id,
            )
            self.session.add(term)
            try:
                self.session.commit()
            except SQLAlchemyError as exc:
                self.session.rollback()
                raise TermCreationError(name, parent_id, str(exc)) from exc

        logger.debug(f"Created {self.taxonomy} term '{name}' ({term.id}) under {parent_id}")
        return term.id

    def term_ids(self) -> list[UUID]:
        return list(self.session.scalars(select(Term.id).where(Term.taxonomy == self.taxonomy)))

    def list_terms(self) -> list[Term]:
        return list(
            self.session.scalars(
                select(Term).where(Term.taxonomy == self.taxonomy).order_by(Term.name)
            )
        )

    def ancestors(self, term_id: UUID) -> list[UUID]:
        """Ids from ``term_id`` up to its root, the term itself first."""
        chain: list[UUID] = []
        current = self.get(term_id)
        while current is not None and current.id not in chain:
            chain.append(current.id)
            current = self.get(current.parent_id) if current.parent_id else None
        return chain

    def delete(self, term_id: UUID) -> None:
        """Delete one term. Children are re-parented to the root by the database."""
        self.session.execute(
            delete(Term).where(Term.id == term_id, Term.taxonomy == self.taxonomy)
        )

    def delete_all(self, taxonomy: str | None = None) -> int:
        taxonomy = taxonomy or self.taxonomy
        result = self.session.execute(delete(Term).where(Term.taxonomy == taxonomy))
        self.session.commit()
        logger.info(f"Deleted {result.rowcount} terms from {taxonomy}")
        return result.rowcount
