"""
Statistics aggregator for the phrase collection.

This is a pure computation module with no I/O.
"""

import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from phraseforge.application.utils.dates import (
    start_of_month,
    start_of_next_month,
    trailing_days,
)
from phraseforge.domain.constants import (
    BEGINNER_MAX_REVIEWS,
    DAILY_STATS_WINDOW,
    DEFAULT_DIFFICULTY,
    INTERMEDIATE_MAX_REVIEWS,
)
from phraseforge.domain.models import Phrase, UserStats
from phraseforge.domain.stats.models import (
    CategoryCount,
    DailyCount,
    MasteryLevels,
    StatsSnapshot,
    TagCount,
)

from .streaks import derive_streaks, is_live


def mastery_level(review_count: int) -> str:
    if review_count <= BEGINNER_MAX_REVIEWS:
        return "beginner"
    if review_count <= INTERMEDIATE_MAX_REVIEWS:
        return "intermediate"
    return "advanced"


class StatsAggregator:
    """
    Derives a StatsSnapshot from the phrase collection and persisted counters.

    Stateless and side-effect free.
    """

    def compute(
        self,
        phrases: Sequence[Phrase],
        counters: UserStats | None = None,
        now: datetime | None = None,
    ) -> StatsSnapshot:
        now = now or datetime.now()
        counters = counters or UserStats()

        mastery = self._mastery_levels(phrases)
        review_dates = [r.date for p in phrases for r in p.review_history]

        derived_current, derived_longest = derive_streaks(review_dates, now)
        current = derived_current
        if is_live(counters.last_review_date, now):
            current = max(current, counters.current_streak)
        longest = max(derived_longest, counters.longest_streak, current)

        last_review_date = max(review_dates, default=None)
        if counters.last_review_date is not None and (
            last_review_date is None or counters.last_review_date > last_review_date
        ):
            last_review_date = counters.last_review_date

        return StatsSnapshot(
            total_phrases=len(phrases),
            phrases_learned=mastery.advanced,
            current_streak=current,
            longest_streak=longest,
            total_reviews=max(counters.total_reviews, len(review_dates)),
            last_review_date=last_review_date,
            category_stats=self._category_stats(phrases),
            tag_stats=self._tag_stats(phrases),
            daily_stats=self._daily_stats(phrases, now),
            mastery_levels=mastery,
            monthly_reviews=self._monthly_reviews(phrases, now),
            average_mastery=self._average_mastery(phrases),
            computed_at=now,
        )

    def _category_stats(self, phrases: Sequence[Phrase]) -> list[CategoryCount]:
        counts: dict[str, int] = {}
        for phrase in phrases:
            counts[phrase.category_id] = counts.get(phrase.category_id, 0) + 1
        return [CategoryCount(category_id=k, count=v) for k, v in counts.items()]

    def _tag_stats(self, phrases: Sequence[Phrase]) -> list[TagCount]:
        counts: dict[str, int] = {}
        for phrase in phrases:
            for tag in phrase.tags:
                counts[tag] = counts.get(tag, 0) + 1
        return [TagCount(tag=k, count=v) for k, v in counts.items()]

    def _daily_stats(self, phrases: Sequence[Phrase], now: datetime) -> list[DailyCount]:
        """
        Phrases reviewed on each of the trailing calendar days, oldest first.

        A phrase reviewed several times in one day counts once for that day.
        """
        daily = []
        for day_start in trailing_days(now, DAILY_STATS_WINDOW):
            day_end = day_start + timedelta(days=1)
            count = sum(
                1
                for phrase in phrases
                if any(day_start <= r.date < day_end for r in phrase.review_history)
            )
            daily.append(DailyCount(day=day_start.date(), count=count))
        return daily

    def _mastery_levels(self, phrases: Sequence[Phrase]) -> MasteryLevels:
        buckets = {"beginner": 0, "intermediate": 0, "advanced": 0}
        for phrase in phrases:
            buckets[mastery_level(len(phrase.review_history))] += 1
        return MasteryLevels(**buckets)

    def _monthly_reviews(self, phrases: Sequence[Phrase], now: datetime) -> int:
        month_start = start_of_month(now)
        month_end = start_of_next_month(now)
        return sum(
            1
            for phrase in phrases
            for r in phrase.review_history
            if month_start <= r.date < month_end
        )

    def _average_mastery(self, phrases: Sequence[Phrase]) -> int:
        """
        Mean of each phrase's latest difficulty, as a rounded percentage.

        Unreviewed phrases count as the neutral default difficulty.
        """
        if not phrases:
            return 0
        latest = [
            p.review_history[-1].difficulty if p.review_history else DEFAULT_DIFFICULTY
            for p in phrases
        ]
        return math.floor(sum(latest) / len(latest) * 100 + 0.5)


def compute_stats(
    all_phrases: Sequence[Phrase],
    persisted_counters: UserStats | None = None,
    now: datetime | None = None,
) -> StatsSnapshot:
    """Functional entry point around StatsAggregator.compute."""
    return StatsAggregator().compute(all_phrases, persisted_counters, now)
