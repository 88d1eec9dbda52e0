"""
Review interval table.

The single source of truth for interval names, their labels and day counts.
Everything that needs "how long is one_week" reads it from here.
"""

from dataclasses import dataclass
from enum import Enum


class ReviewInterval(str, Enum):
    TOMORROW = "tomorrow"
    THREE_DAYS = "three_days"
    ONE_WEEK = "one_week"
    TWO_WEEKS = "two_weeks"
    ONE_MONTH = "one_month"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntervalSpec:
    """
    Attributes:
        label: Human-readable label shown next to the choice.
        days: Nominal length of the interval in days.
    """

    label: str
    days: int


REVIEW_INTERVALS: dict[ReviewInterval, IntervalSpec] = {
    ReviewInterval.TOMORROW: IntervalSpec(label="Tomorrow", days=1),
    ReviewInterval.THREE_DAYS: IntervalSpec(label="In 3 days", days=3),
    ReviewInterval.ONE_WEEK: IntervalSpec(label="In 1 week", days=7),
    ReviewInterval.TWO_WEEKS: IntervalSpec(label="In 2 weeks", days=14),
    ReviewInterval.ONE_MONTH: IntervalSpec(label="In 1 month", days=30),
}


def parse_interval(value: "ReviewInterval | str | None") -> ReviewInterval | None:
    """Return the matching ReviewInterval, or None for anything unrecognized."""
    if isinstance(value, ReviewInterval):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ReviewInterval(value.strip())
    except ValueError:
        return None


def interval_days(interval: ReviewInterval | str) -> int:
    """Day count for an interval. Raises KeyError for unknown names."""
    parsed = parse_interval(interval)
    if parsed is None:
        raise KeyError(interval)
    return REVIEW_INTERVALS[parsed].days


def interval_label(interval: ReviewInterval | str) -> str:
    parsed = parse_interval(interval)
    if parsed is None:
        raise KeyError(interval)
    return REVIEW_INTERVALS[parsed].label


def ordered_intervals() -> list[ReviewInterval]:
    """All intervals, shortest first."""
    return sorted(REVIEW_INTERVALS, key=lambda i: REVIEW_INTERVALS[i].days)
