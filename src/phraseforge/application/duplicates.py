"""
Duplicate detection for phrases.

Used before adding a phrase so the same card does not end up in the
collection twice with two separate review histories.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from phraseforge.domain.constants import (
    ENGLISH_ONLY_SIMILARITY,
    EXACT_SIMILARITY,
    SIMILARITY_THRESHOLD,
)
from phraseforge.domain.models import Phrase

MatchType = Literal["exact", "english_only", "similar"]


@dataclass(frozen=True)
class DuplicateMatch:
    phrase: Phrase
    similarity: float
    match_type: MatchType


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j - 1] + cost,  # substitution
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1]; 1 means identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein_distance(a.lower(), b.lower()) / longest


def detect_duplicates(
    english: str,
    japanese: str | None,
    existing: Iterable[Phrase],
) -> list[DuplicateMatch]:
    """
    Find existing phrases that look like the candidate.

    Returns:
        Matches sorted by similarity, highest first.
    """
    matches: list[DuplicateMatch] = []
    for phrase in existing:
        if phrase.english == english and phrase.japanese == japanese:
            matches.append(DuplicateMatch(phrase, EXACT_SIMILARITY, "exact"))
            continue

        if phrase.english == english:
            matches.append(DuplicateMatch(phrase, ENGLISH_ONLY_SIMILARITY, "english_only"))
            continue

        if english:
            score = similarity(phrase.english, english)
            if score > SIMILARITY_THRESHOLD:
                matches.append(DuplicateMatch(phrase, score, "similar"))

    matches.sort(key=lambda m: m.similarity, reverse=True)
    return matches


def merge_phrases(
    existing: Phrase,
    incoming: Phrase,
    now: datetime | None = None,
) -> Phrase:
    """
    Fold `incoming` into `existing`.

    The existing review history is kept, tags are unioned, a non-empty
    incoming pronunciation wins and the earlier next review date is kept.
    """
    tags = list(dict.fromkeys([*existing.tags, *incoming.tags]))
    return replace(
        existing,
        pronunciation=incoming.pronunciation or existing.pronunciation,
        tags=tags,
        review_history=list(existing.review_history),
        next_review_date=min(existing.next_review_date, incoming.next_review_date),
        updated_at=now or datetime.now(),
    )
