"""Seed a content database with dummy posts, terms, users and products."""

__version__ = "0.1.0"
