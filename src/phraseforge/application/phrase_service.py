"""
Phrase Service: creation, editing, deletion and lookup of phrases.

Every mutation keeps the persisted total_phrases counter in step and
invalidates cached statistics.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Literal

from phraseforge.application.duplicates import detect_duplicates, merge_phrases
from phraseforge.application.id_service import generate_id
from phraseforge.application.scheduling.due_set import get_due_set
from phraseforge.application.scheduling.recommender import recommend_interval
from phraseforge.application.stats.service import StatsService
from phraseforge.domain.constants import DEFAULT_CATEGORY_ID
from phraseforge.domain.errors import PhraseNotFoundError, ValidationError
from phraseforge.domain.intervals import ReviewInterval
from phraseforge.domain.models import Phrase
from phraseforge.domain.ports import PhraseRepository, StatsStore

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["allow", "reject", "merge"]

# Fields owned by the review recorder or fixed at creation.
PROTECTED_FIELDS = frozenset({"id", "created_at", "review_history"})
EDITABLE_FIELDS = frozenset(
    {"english", "japanese", "pronunciation", "tags", "category_id", "next_review_date"}
)


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value.strip()


def _normalize_tags(tags: Any) -> list[str]:
    if tags is None:
        return []
    if isinstance(tags, str) or not all(isinstance(t, str) for t in tags):
        raise ValidationError("tags must be a list of strings")
    cleaned = [t.strip() for t in tags if t.strip()]
    return list(dict.fromkeys(cleaned))


class PhraseService:
    def __init__(
        self,
        phrase_repo: PhraseRepository,
        stats_store: StatsStore,
        stats_service: StatsService | None = None,
    ):
        self._phrases = phrase_repo
        self._stats = stats_store
        self._stats_service = stats_service

    # ---------- Mutations ----------

    async def add_phrase(
        self,
        english: str,
        japanese: str,
        category_id: str = DEFAULT_CATEGORY_ID,
        pronunciation: str | None = None,
        tags: list[str] | None = None,
        next_review_date: datetime | None = None,
        on_duplicate: DuplicatePolicy = "allow",
        now: datetime | None = None,
    ) -> Phrase:
        """
        Create a phrase, due immediately unless `next_review_date` is given.

        Args:
            on_duplicate: "allow" adds regardless, "reject" raises on an exact
                or English-only match, "merge" folds the new data into the
                best exact match instead of adding.

        Raises:
            ValidationError: Missing text, bad tags, or a rejected duplicate.
        """
        if on_duplicate not in ("allow", "reject", "merge"):
            raise ValidationError(f"Unknown duplicate policy: {on_duplicate!r}")
        now = now or datetime.now()
        phrase = Phrase(
            id=generate_id(),
            english=_require_text("english", english),
            japanese=_require_text("japanese", japanese),
            category_id=category_id,
            pronunciation=pronunciation or None,
            tags=_normalize_tags(tags),
            next_review_date=next_review_date or now,
            review_history=[],
            created_at=now,
            updated_at=now,
        )

        if on_duplicate != "allow":
            existing = await self._phrases.get_all()
            matches = [
                m
                for m in detect_duplicates(phrase.english, phrase.japanese, existing)
                if m.match_type != "similar"
            ]
            if matches and on_duplicate == "reject":
                best = matches[0]
                raise ValidationError(
                    f"Duplicate of existing phrase {best.phrase.id} ({best.match_type})"
                )
            exact = [m for m in matches if m.match_type == "exact"]
            if exact and on_duplicate == "merge":
                merged = merge_phrases(exact[0].phrase, phrase, now)
                logger.info(f"Merged duplicate into {merged.id}")
                return await self._write(
                    merged.id,
                    {
                        "pronunciation": merged.pronunciation,
                        "tags": merged.tags,
                        "next_review_date": merged.next_review_date,
                        "updated_at": merged.updated_at,
                    },
                )

        try:
            await self._phrases.add(phrase)
        finally:
            self._invalidate()
        await self._bump_total(+1)
        logger.info(f"Added phrase {phrase.id}")
        return phrase

    async def update_phrase(
        self, phrase_id: str, updates: dict[str, Any], now: datetime | None = None
    ) -> Phrase:
        """
        Apply a partial edit. Review history, id and created_at cannot be edited here.
        """
        blocked = PROTECTED_FIELDS & updates.keys()
        if blocked:
            raise ValidationError(f"Fields cannot be edited directly: {sorted(blocked)}")
        unknown = updates.keys() - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown phrase fields: {sorted(unknown)}")

        fields = dict(updates)
        if "english" in fields:
            fields["english"] = _require_text("english", fields["english"])
        if "japanese" in fields:
            fields["japanese"] = _require_text("japanese", fields["japanese"])
        if "tags" in fields:
            fields["tags"] = _normalize_tags(fields["tags"])
        fields["updated_at"] = now or datetime.now()

        return await self._write(phrase_id, fields)

    async def delete_phrase(self, phrase_id: str) -> None:
        try:
            await self._phrases.delete(phrase_id)
        finally:
            self._invalidate()
        await self._bump_total(-1)
        logger.info(f"Deleted phrase {phrase_id}")

    # ---------- Queries ----------

    async def get_phrase(self, phrase_id: str) -> Phrase:
        phrase = await self._phrases.get_by_id(phrase_id)
        if phrase is None:
            raise PhraseNotFoundError(phrase_id)
        return phrase

    async def list_phrases(self) -> list[Phrase]:
        return await self._phrases.get_all()

    async def due_phrases(self, as_of: datetime | None = None) -> list[Phrase]:
        return get_due_set(await self._phrases.get_all(), as_of)

    async def recommend(self, phrase_id: str) -> ReviewInterval:
        phrase = await self.get_phrase(phrase_id)
        return recommend_interval(phrase.review_history)

    async def search(self, query: str) -> list[Phrase]:
        """Case-insensitive substring match on either side of the card."""
        needle = query.lower()
        return [
            p
            for p in await self._phrases.get_all()
            if needle in p.english.lower() or needle in p.japanese.lower()
        ]

    async def filter_by_tag(self, tag: str) -> list[Phrase]:
        return [p for p in await self._phrases.get_all() if tag in p.tags]

    async def filter_by_category(self, category_id: str) -> list[Phrase]:
        return [p for p in await self._phrases.get_all() if p.category_id == category_id]

    # ---------- Internals ----------

    async def _write(self, phrase_id: str, fields: dict[str, Any]) -> Phrase:
        try:
            return await self._phrases.update(phrase_id, fields)
        finally:
            self._invalidate()

    async def _bump_total(self, delta: int) -> None:
        counters = await self._stats.get()
        await self._stats.save(
            replace(counters, total_phrases=max(0, counters.total_phrases + delta))
        )

    def _invalidate(self) -> None:
        if self._stats_service is not None:
            self._stats_service.invalidate()
