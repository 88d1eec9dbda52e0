"""
Study-streak bookkeeping.

A study day is a calendar day with at least one recorded review. The current
streak is the run of consecutive study days ending today, or ending yesterday
when nothing has been reviewed yet today.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from phraseforge.domain.models import UserStats


def study_days(review_dates: Iterable[datetime]) -> set[date]:
    return {moment.date() for moment in review_dates}


def longest_run(days: set[date]) -> int:
    best = 0
    for day in days:
        if day - timedelta(days=1) in days:
            continue  # not the start of a run
        length = 1
        while day + timedelta(days=length) in days:
            length += 1
        best = max(best, length)
    return best


def current_run(days: set[date], today: date) -> int:
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    length = 0
    while cursor in days:
        length += 1
        cursor -= timedelta(days=1)
    return length


def derive_streaks(review_dates: Iterable[datetime], now: datetime) -> tuple[int, int]:
    """Return (current, longest) streaks derived from review dates alone."""
    days = study_days(review_dates)
    return current_run(days, now.date()), longest_run(days)


def is_live(last_review: datetime | None, now: datetime) -> bool:
    """Whether a streak ending at `last_review` can still be extended today."""
    if last_review is None:
        return False
    return (now.date() - last_review.date()).days <= 1


def advance_streak(counters: UserStats, now: datetime) -> tuple[int, int]:
    """
    Incremental update for one new review at `now`.

    Same day as the last review leaves the streak alone, the next day extends
    it, anything else starts over at 1.
    """
    last = counters.last_review_date
    if last is None:
        current = 1
    else:
        gap = (now.date() - last.date()).days
        if gap <= 0:
            current = max(counters.current_streak, 1)
        elif gap == 1:
            current = counters.current_streak + 1
        else:
            current = 1
    return current, max(counters.longest_streak, current)
