"""
Ports (interfaces) for persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import Category, Phrase, Tag, UserStats


class PhraseRepository(ABC):
    """
    Port for the phrase collection.

    Implementations:
        - InMemoryPhraseRepository: dict-backed, for tests and ephemeral sessions.
        - YamlPhraseRepository: single YAML document on disk.
    """

    @abstractmethod
    async def get_all(self) -> list[Phrase]:
        """
        Return every phrase in storage order.
        """
        pass

    @abstractmethod
    async def get_by_id(self, phrase_id: str) -> Phrase | None:
        """
        Return the phrase, or None when the id is unknown.
        """
        pass

    @abstractmethod
    async def add(self, phrase: Phrase) -> None:
        """
        Insert a new phrase.

        Raises:
            PersistenceError: If a phrase with the same id already exists.
        """
        pass

    @abstractmethod
    async def update(self, phrase_id: str, fields: dict[str, Any]) -> Phrase:
        """
        Apply a partial update in a single write and return the stored result.

        Either every field in `fields` is written or none is.

        Raises:
            PhraseNotFoundError: If the id is unknown.
        """
        pass

    @abstractmethod
    async def delete(self, phrase_id: str) -> None:
        """
        Raises:
            PhraseNotFoundError: If the id is unknown.
        """
        pass


class StatsStore(ABC):
    """Port for the single persisted counter record."""

    @abstractmethod
    async def get(self) -> UserStats:
        """Return the stored counters, or a zeroed record if none exists yet."""
        pass

    @abstractmethod
    async def save(self, stats: UserStats) -> None:
        pass


class CatalogRepository(ABC):
    """Port for categories and tags. Neither is owned by phrases."""

    @abstractmethod
    async def get_categories(self) -> list[Category]:
        pass

    @abstractmethod
    async def add_category(self, category: Category) -> None:
        pass

    @abstractmethod
    async def count_categories(self) -> int:
        pass

    @abstractmethod
    async def get_tags(self) -> list[Tag]:
        pass

    @abstractmethod
    async def add_tag(self, tag: Tag) -> None:
        pass
