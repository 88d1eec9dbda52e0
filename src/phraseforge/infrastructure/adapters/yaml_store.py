"""
YAML document store: Infrastructure adapter for a single file on disk.

The whole collection (phrases, categories, tags and counters) lives in one
YAML document. Every operation reads the document, applies its change and
writes it back atomically (temp file + os.replace), so a failed write leaves
the previous file untouched.
"""

import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

import yaml

from phraseforge.domain.constants import DEFAULT_DIFFICULTY
from phraseforge.domain.errors import PersistenceError, PhraseNotFoundError
from phraseforge.domain.intervals import parse_interval
from phraseforge.domain.models import Category, Phrase, ReviewRecord, Tag, UserStats
from phraseforge.domain.ports import CatalogRepository, PhraseRepository, StatsStore

from .memory import apply_fields

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

T = TypeVar("T")


# ---------- Serialization ----------


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def record_to_dict(record: ReviewRecord) -> dict[str, Any]:
    return {
        "date": _dt(record.date),
        "interval": str(record.interval),
        "difficulty": record.difficulty,
    }


def record_from_dict(data: dict[str, Any]) -> ReviewRecord:
    raw = data.get("interval")
    interval = parse_interval(raw)
    if interval is None:
        logger.warning(f"Unrecognized review interval in store: {raw!r}")
    return ReviewRecord(
        date=_parse_dt(data["date"]),
        interval=interval if interval is not None else str(raw),
        difficulty=float(data.get("difficulty", DEFAULT_DIFFICULTY)),
    )


def phrase_to_dict(phrase: Phrase) -> dict[str, Any]:
    return {
        "id": phrase.id,
        "english": phrase.english,
        "japanese": phrase.japanese,
        "pronunciation": phrase.pronunciation,
        "tags": list(phrase.tags),
        "category_id": phrase.category_id,
        "next_review_date": _dt(phrase.next_review_date),
        "review_history": [record_to_dict(r) for r in phrase.review_history],
        "created_at": _dt(phrase.created_at),
        "updated_at": _dt(phrase.updated_at),
    }


def phrase_from_dict(data: dict[str, Any]) -> Phrase:
    return Phrase(
        id=data["id"],
        english=data["english"],
        japanese=data["japanese"],
        pronunciation=data.get("pronunciation"),
        tags=list(data.get("tags") or []),
        category_id=data.get("category_id", ""),
        next_review_date=_parse_dt(data["next_review_date"]),
        review_history=[record_from_dict(r) for r in data.get("review_history") or []],
        created_at=_parse_dt(data["created_at"]),
        updated_at=_parse_dt(data["updated_at"]),
    )


def stats_to_dict(stats: UserStats) -> dict[str, Any]:
    return {
        "total_phrases": stats.total_phrases,
        "phrases_learned": stats.phrases_learned,
        "current_streak": stats.current_streak,
        "longest_streak": stats.longest_streak,
        "total_reviews": stats.total_reviews,
        "last_review_date": _dt(stats.last_review_date),
    }


def stats_from_dict(data: dict[str, Any] | None) -> UserStats:
    if not data:
        return UserStats()
    return UserStats(
        total_phrases=int(data.get("total_phrases", 0)),
        phrases_learned=int(data.get("phrases_learned", 0)),
        current_streak=int(data.get("current_streak", 0)),
        longest_streak=int(data.get("longest_streak", 0)),
        total_reviews=int(data.get("total_reviews", 0)),
        last_review_date=_parse_dt(data.get("last_review_date")),
    )


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "color": category.color,
        "icon": category.icon,
        "created_at": _dt(category.created_at),
        "updated_at": _dt(category.updated_at),
    }


def category_from_dict(data: dict[str, Any]) -> Category:
    return Category(
        id=data["id"],
        name=data["name"],
        color=data.get("color"),
        icon=data.get("icon"),
        created_at=_parse_dt(data["created_at"]),
        updated_at=_parse_dt(data["updated_at"]),
    )


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    return {"id": tag.id, "name": tag.name, "color": tag.color, "created_at": _dt(tag.created_at)}


def tag_from_dict(data: dict[str, Any]) -> Tag:
    return Tag(
        id=data["id"],
        name=data["name"],
        color=data.get("color"),
        created_at=_parse_dt(data["created_at"]),
    )


# ---------- Document store ----------


class YamlDocumentStore:
    """
    Owns the YAML file and hands out the three port implementations.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.phrases = YamlPhraseRepository(self)
        self.stats = YamlStatsStore(self)
        self.catalog = YamlCatalogRepository(self)

    def _empty(self) -> dict[str, Any]:
        return {
            "version": SCHEMA_VERSION,
            "stats": None,
            "categories": [],
            "tags": [],
            "phrases": [],
        }

    def read(self) -> dict[str, Any]:
        if not self.path.exists():
            return self._empty()
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read {self.path}: {e}")
            raise PersistenceError(f"Could not read store at {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"Store at {self.path} is not a mapping")
        doc = self._empty()
        doc.update(data)
        return doc

    def decode(self, decoder: Callable[[Any], T], data: Any) -> T:
        """Run one of the *_from_dict helpers, reporting malformed entries as PersistenceError."""
        try:
            return decoder(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed entry in {self.path}: {e!r}")
            raise PersistenceError(f"Malformed entry in store at {self.path}: {e!r}") from e

    def write(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, delete=False, suffix=".yaml", encoding="utf-8"
            ) as tmp:
                yaml.safe_dump(doc, tmp, sort_keys=False, allow_unicode=True)
            os.replace(tmp.name, self.path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to write {self.path}: {e}")
            raise PersistenceError(f"Could not write store at {self.path}: {e}") from e


class YamlPhraseRepository(PhraseRepository):
    def __init__(self, store: YamlDocumentStore):
        self._store = store

    async def get_all(self) -> list[Phrase]:
        return [self._store.decode(phrase_from_dict, d) for d in self._store.read()["phrases"]]

    async def get_by_id(self, phrase_id: str) -> Phrase | None:
        for d in self._store.read()["phrases"]:
            if d.get("id") == phrase_id:
                return self._store.decode(phrase_from_dict, d)
        return None

    async def add(self, phrase: Phrase) -> None:
        doc = self._store.read()
        if any(d.get("id") == phrase.id for d in doc["phrases"]):
            raise PersistenceError(f"Phrase already exists: {phrase.id}")
        doc["phrases"].append(phrase_to_dict(phrase))
        self._store.write(doc)

    async def update(self, phrase_id: str, fields: dict[str, Any]) -> Phrase:
        doc = self._store.read()
        for index, d in enumerate(doc["phrases"]):
            if d.get("id") == phrase_id:
                updated = apply_fields(self._store.decode(phrase_from_dict, d), fields)
                doc["phrases"][index] = phrase_to_dict(updated)
                self._store.write(doc)
                return updated
        raise PhraseNotFoundError(phrase_id)

    async def delete(self, phrase_id: str) -> None:
        doc = self._store.read()
        remaining = [d for d in doc["phrases"] if d.get("id") != phrase_id]
        if len(remaining) == len(doc["phrases"]):
            raise PhraseNotFoundError(phrase_id)
        doc["phrases"] = remaining
        self._store.write(doc)


class YamlStatsStore(StatsStore):
    def __init__(self, store: YamlDocumentStore):
        self._store = store

    async def get(self) -> UserStats:
        return self._store.decode(stats_from_dict, self._store.read()["stats"])

    async def save(self, stats: UserStats) -> None:
        doc = self._store.read()
        doc["stats"] = stats_to_dict(stats)
        self._store.write(doc)


class YamlCatalogRepository(CatalogRepository):
    def __init__(self, store: YamlDocumentStore):
        self._store = store

    async def get_categories(self) -> list[Category]:
        return [self._store.decode(category_from_dict, d) for d in self._store.read()["categories"]]

    async def add_category(self, category: Category) -> None:
        doc = self._store.read()
        if any(d.get("id") == category.id for d in doc["categories"]):
            raise PersistenceError(f"Category already exists: {category.id}")
        doc["categories"].append(category_to_dict(category))
        self._store.write(doc)

    async def count_categories(self) -> int:
        return len(self._store.read()["categories"])

    async def get_tags(self) -> list[Tag]:
        return [self._store.decode(tag_from_dict, d) for d in self._store.read()["tags"]]

    async def add_tag(self, tag: Tag) -> None:
        doc = self._store.read()
        if any(d.get("id") == tag.id for d in doc["tags"]):
            raise PersistenceError(f"Tag already exists: {tag.id}")
        doc["tags"].append(tag_to_dict(tag))
        self._store.write(doc)
