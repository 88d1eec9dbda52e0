"""
In-memory adapters.

Dict-backed implementations of the persistence ports. Objects are deep-copied
on the way in and out so callers can never mutate stored state behind the
repository's back.
"""

import copy
from dataclasses import fields, replace
from typing import Any

from phraseforge.domain.errors import PersistenceError, PhraseNotFoundError
from phraseforge.domain.models import Category, Phrase, Tag, UserStats
from phraseforge.domain.ports import CatalogRepository, PhraseRepository, StatsStore

PHRASE_FIELDS = frozenset(f.name for f in fields(Phrase))


def apply_fields(phrase: Phrase, updates: dict[str, Any]) -> Phrase:
    """Return `phrase` with `updates` applied, refusing unknown or identity fields."""
    unknown = updates.keys() - PHRASE_FIELDS
    if unknown:
        raise PersistenceError(f"Unknown phrase fields: {sorted(unknown)}")
    if "id" in updates and updates["id"] != phrase.id:
        raise PersistenceError("Phrase id is immutable")
    return replace(phrase, **copy.deepcopy(updates))


class InMemoryPhraseRepository(PhraseRepository):
    def __init__(self, phrases: list[Phrase] | None = None):
        self._items: dict[str, Phrase] = {}
        for phrase in phrases or []:
            self._items[phrase.id] = copy.deepcopy(phrase)

    async def get_all(self) -> list[Phrase]:
        return [copy.deepcopy(p) for p in self._items.values()]

    async def get_by_id(self, phrase_id: str) -> Phrase | None:
        phrase = self._items.get(phrase_id)
        return copy.deepcopy(phrase) if phrase is not None else None

    async def add(self, phrase: Phrase) -> None:
        if phrase.id in self._items:
            raise PersistenceError(f"Phrase already exists: {phrase.id}")
        self._items[phrase.id] = copy.deepcopy(phrase)

    async def update(self, phrase_id: str, fields: dict[str, Any]) -> Phrase:
        current = self._items.get(phrase_id)
        if current is None:
            raise PhraseNotFoundError(phrase_id)
        updated = apply_fields(current, fields)
        self._items[phrase_id] = updated
        return copy.deepcopy(updated)

    async def delete(self, phrase_id: str) -> None:
        if phrase_id not in self._items:
            raise PhraseNotFoundError(phrase_id)
        del self._items[phrase_id]


class InMemoryStatsStore(StatsStore):
    def __init__(self, stats: UserStats | None = None):
        self._stats = copy.deepcopy(stats) if stats else UserStats()

    async def get(self) -> UserStats:
        return copy.deepcopy(self._stats)

    async def save(self, stats: UserStats) -> None:
        self._stats = copy.deepcopy(stats)


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self):
        self._categories: dict[str, Category] = {}
        self._tags: dict[str, Tag] = {}

    async def get_categories(self) -> list[Category]:
        return [copy.deepcopy(c) for c in self._categories.values()]

    async def add_category(self, category: Category) -> None:
        if category.id in self._categories:
            raise PersistenceError(f"Category already exists: {category.id}")
        self._categories[category.id] = copy.deepcopy(category)

    async def count_categories(self) -> int:
        return len(self._categories)

    async def get_tags(self) -> list[Tag]:
        return [copy.deepcopy(t) for t in self._tags.values()]

    async def add_tag(self, tag: Tag) -> None:
        if tag.id in self._tags:
            raise PersistenceError(f"Tag already exists: {tag.id}")
        self._tags[tag.id] = copy.deepcopy(tag)
