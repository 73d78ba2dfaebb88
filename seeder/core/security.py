"""Password generation and hashing for seeded user accounts."""

import secrets

from passlib.context import CryptContext

from seeder.core.config import settings

# Portable phpass hashes, the format WordPress stores in user_pass.
pwd_context = CryptContext(schemes=["phpass"], phpass__default_rounds=8)


def generate_password(length: int | None = None) -> str:
    """Generate a random URL-safe password of exactly ``length`` characters."""
    length = length or settings.PASSWORD_LENGTH
    return secrets.token_urlsafe(length)[:length]


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)
