"""Identifier generation for phrases, categories and tags."""

from ulid import ULID


def generate_id(prefix: str = "phrase") -> str:
    """Generate a sortable, unique ID using ULID."""
    return f"{prefix}_{ULID()}"
