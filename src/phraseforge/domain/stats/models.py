"""
Domain models for aggregate statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class CategoryCount:
    category_id: str
    count: int


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int


@dataclass(frozen=True)
class DailyCount:
    """
    Attributes:
        day: The calendar day.
        count: Phrases with at least one review recorded on that day.
    """

    day: date
    count: int


@dataclass(frozen=True)
class MasteryLevels:
    """Phrases bucketed by review count: 0-2, 3-5, 6+."""

    beginner: int = 0
    intermediate: int = 0
    advanced: int = 0


@dataclass
class StatsSnapshot:
    """
    Everything the statistics screen shows, derived from the phrase
    collection plus the persisted counters.
    """

    # Counters
    total_phrases: int
    phrases_learned: int
    current_streak: int
    longest_streak: int
    total_reviews: int
    last_review_date: datetime | None

    # Breakdowns
    category_stats: list[CategoryCount] = field(default_factory=list)
    tag_stats: list[TagCount] = field(default_factory=list)
    daily_stats: list[DailyCount] = field(default_factory=list)
    mastery_levels: MasteryLevels = field(default_factory=MasteryLevels)
    monthly_reviews: int = 0
    average_mastery: int = 0  # percent, 0-100

    # When this snapshot was computed
    computed_at: datetime | None = None
