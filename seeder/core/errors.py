"""Seeder error types. The CLI turns every SeederError into a non-zero exit."""

from uuid import UUID


class SeederError(Exception):
    """Base class for errors reported to the user as-is."""


class MalformedPathError(SeederError):
    def __init__(self, path: str | None, reason: str = "no category names found"):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed category path {path!r}: {reason}")


class TermCreationError(SeederError):
    def __init__(self, name: str, parent_id: UUID | None, reason: str):
        self.name = name
        self.parent_id = parent_id
        self.reason = reason
        parent = parent_id if parent_id is not None else "root"
        super().__init__(f"Could not create term '{name}' under {parent}: {reason}")


class ValidationError(SeederError):
    """A count or dataset value is out of bounds or not a number."""


class PreconditionError(SeederError):
    """Something the command relies on is missing (schema, dataset, attributes)."""


class RecordCreationError(SeederError):
    """The database refused a new post, product or user."""
