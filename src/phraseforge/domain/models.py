"""
Domain models for phrases and their review ledger.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .constants import DEFAULT_DIFFICULTY
from .intervals import ReviewInterval


@dataclass(frozen=True)
class ReviewRecord:
    """
    One completed review.

    Attributes:
        date: Wall-clock time the review was recorded.
        interval: Interval chosen at that review. Unrecognized values read
            back from storage are kept as plain strings.
        difficulty: Self-reported hardness, 0.0 (trivial) to 1.0 (very hard).
    """

    date: datetime
    interval: ReviewInterval | str
    difficulty: float = DEFAULT_DIFFICULTY


@dataclass
class Phrase:
    """
    A learnable card: English front, Japanese back, plus scheduling state.
    """

    id: str
    english: str
    japanese: str
    category_id: str
    next_review_date: datetime
    pronunciation: str | None = None
    tags: list[str] = field(default_factory=list)
    review_history: list[ReviewRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def review_count(self) -> int:
        return len(self.review_history)

    @property
    def last_review(self) -> ReviewRecord | None:
        return self.review_history[-1] if self.review_history else None


@dataclass
class Category:
    id: str
    name: str
    color: str | None = None
    icon: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class Tag:
    id: str
    name: str
    color: str | None = None
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class UserStats:
    """
    Persisted counter record.

    total_reviews and the streak fields are maintained incrementally by the
    review recorder; everything else can be recomputed from the phrases.
    """

    total_phrases: int = 0
    phrases_learned: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_reviews: int = 0
    last_review_date: datetime | None = None
