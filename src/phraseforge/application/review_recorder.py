"""
Review recorder.

The single mutation path for completing a review: validate, append the
record, reschedule, bump the counters and invalidate cached statistics.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime

from phraseforge.application.scheduling.next_date import next_review_date
from phraseforge.application.stats.service import StatsService
from phraseforge.application.stats.streaks import advance_streak
from phraseforge.domain.constants import DEFAULT_DIFFICULTY, MAX_DIFFICULTY, MIN_DIFFICULTY
from phraseforge.domain.errors import (
    PersistenceError,
    PhraseNotFoundError,
    ValidationError,
)
from phraseforge.domain.intervals import ReviewInterval, parse_interval
from phraseforge.domain.models import Phrase, ReviewRecord
from phraseforge.domain.ports import PhraseRepository, StatsStore

logger = logging.getLogger(__name__)


def validate_difficulty(value: object) -> float:
    """Return the difficulty as a float, rejecting anything outside [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Difficulty must be a number, got {value!r}")
    if math.isnan(value) or not MIN_DIFFICULTY <= value <= MAX_DIFFICULTY:
        raise ValidationError(
            f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {value}"
        )
    return float(value)


def validate_interval(value: ReviewInterval | str) -> ReviewInterval:
    parsed = parse_interval(value)
    if parsed is None:
        raise ValidationError(f"Unknown review interval: {value!r}")
    return parsed


def apply_review(
    phrase: Phrase,
    interval: ReviewInterval | str,
    difficulty: float = DEFAULT_DIFFICULTY,
    now: datetime | None = None,
) -> Phrase:
    """
    Return a copy of `phrase` with one review applied. The input is not touched.

    Raises:
        ValidationError: On an unknown interval, an out-of-range difficulty or
            a review dated before the last recorded one.
    """
    chosen = validate_interval(interval)
    difficulty = validate_difficulty(difficulty)
    now = now or datetime.now()
    last = phrase.last_review
    if last is not None and now < last.date:
        raise ValidationError(
            f"Review at {now.isoformat()} predates the last review at {last.date.isoformat()}"
        )

    record = ReviewRecord(date=now, interval=chosen, difficulty=difficulty)
    return replace(
        phrase,
        review_history=[*phrase.review_history, record],
        next_review_date=next_review_date(chosen, now),
        updated_at=now,
    )


class ReviewRecorder:
    """
    Persists completed reviews.

    The phrase write happens in a single repository update so the history and
    the next review date can never disagree; a failed counter write rolls the
    phrase back before the error propagates.
    """

    def __init__(
        self,
        phrase_repo: PhraseRepository,
        stats_store: StatsStore,
        stats_service: StatsService | None = None,
    ):
        self._phrases = phrase_repo
        self._stats = stats_store
        self._stats_service = stats_service

    async def record_review(
        self,
        phrase_id: str,
        interval: ReviewInterval | str,
        difficulty: float = DEFAULT_DIFFICULTY,
        now: datetime | None = None,
    ) -> Phrase:
        """
        Record a review of `phrase_id` and reschedule it.

        Args:
            phrase_id: Phrase being reviewed.
            interval: Interval the user picked (or accepted from the recommender).
            difficulty: Self-reported hardness in [0, 1].
            now: Recording time; defaults to the wall clock.

        Returns:
            The phrase as stored after the review.

        Raises:
            ValidationError: Bad interval or difficulty, or `now` is earlier than
                the last recorded review. Nothing is written.
            PhraseNotFoundError: The phrase is not in the store.
            PersistenceError: The store failed; prior state is kept.
        """
        chosen = validate_interval(interval)
        difficulty = validate_difficulty(difficulty)
        now = now or datetime.now()

        phrase = await self._phrases.get_by_id(phrase_id)
        if phrase is None:
            raise PhraseNotFoundError(phrase_id)

        reviewed = apply_review(phrase, chosen, difficulty, now)

        try:
            stored = await self._phrases.update(
                phrase_id,
                {
                    "review_history": reviewed.review_history,
                    "next_review_date": reviewed.next_review_date,
                    "updated_at": reviewed.updated_at,
                },
            )
        finally:
            self._invalidate()

        try:
            counters = await self._stats.get()
            current, longest = advance_streak(counters, now)
            last_review_date = now
            if counters.last_review_date is not None:
                last_review_date = max(counters.last_review_date, now)
            await self._stats.save(
                replace(
                    counters,
                    total_reviews=counters.total_reviews + 1,
                    last_review_date=last_review_date,
                    current_streak=current,
                    longest_streak=longest,
                )
            )
        except PersistenceError as e:
            logger.warning(f"Counter update failed, restoring phrase {phrase_id}")
            try:
                await self._phrases.update(
                    phrase_id,
                    {
                        "review_history": phrase.review_history,
                        "next_review_date": phrase.next_review_date,
                        "updated_at": phrase.updated_at,
                    },
                )
            except PersistenceError as rollback_error:
                logger.error(f"Could not restore phrase {phrase_id}: {rollback_error}")
                raise e from rollback_error
            raise
        finally:
            self._invalidate()

        logger.info(
            f"Reviewed {phrase_id}: {chosen.value} (difficulty={difficulty:.2f}), "
            f"next review {stored.next_review_date.isoformat()}"
        )
        return stored

    def _invalidate(self) -> None:
        if self._stats_service is not None:
            self._stats_service.invalidate()
