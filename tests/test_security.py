"""Unit tests for password generation and hashing."""

from seeder.core.config import settings
from seeder.core.security import generate_password, hash_password, verify_password


# ── Password hashing ──────────────────────────────

def test_hash_and_verify():
    plain = "SecurePass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed)
    assert not verify_password("wrong", hashed)


def test_hash_is_portable_phpass():
    assert hash_password("secret").startswith("$P$")


def test_same_password_hashes_differently():
    assert hash_password("secret") != hash_password("secret")


# ── Password generation ───────────────────────────

def test_generate_password_default_length():
    assert len(generate_password()) == settings.PASSWORD_LENGTH


def test_generate_password_custom_length():
    password = generate_password(24)
    assert len(password) == 24
    assert password != generate_password(24)
