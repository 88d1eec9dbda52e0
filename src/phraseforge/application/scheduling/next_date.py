"""
Next review date calculation.

Short intervals are added as whole days, mid-length ones as calendar weeks
and long ones as calendar months, so "two weeks" lands on the same weekday
and "one month" on the same day of the next month.
"""

import math
from datetime import datetime

from dateutil.relativedelta import relativedelta

from phraseforge.domain.constants import (
    DAY_STEP_LIMIT,
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    WEEK_STEP_LIMIT,
)
from phraseforge.domain.errors import ValidationError
from phraseforge.domain.intervals import REVIEW_INTERVALS, ReviewInterval, parse_interval


def add_interval_days(now: datetime, days: int) -> datetime:
    """
    Step `now` forward by a nominal day count.

    <= 7 days: whole days. <= 14 days: floor(days / 7) weeks.
    Otherwise: floor(days / 30) months (clamped to the month's last day).
    """
    if days <= DAY_STEP_LIMIT:
        return now + relativedelta(days=days)
    if days <= WEEK_STEP_LIMIT:
        return now + relativedelta(weeks=days // DAYS_PER_WEEK)
    return now + relativedelta(months=days // DAYS_PER_MONTH)


def next_review_date(interval: ReviewInterval | str, now: datetime | None = None) -> datetime:
    """
    Compute the concrete next review date for a chosen interval.

    Raises:
        ValidationError: If the interval is not in the interval table.
    """
    parsed = parse_interval(interval)
    if parsed is None:
        raise ValidationError(f"Unknown review interval: {interval!r}")
    return add_interval_days(now or datetime.now(), REVIEW_INTERVALS[parsed].days)


def describe_next_review(when: datetime, now: datetime | None = None) -> str:
    """Short relative description such as 'tomorrow' or 'in 2 weeks'."""
    now = now or datetime.now()
    diff_days = math.ceil((when - now).total_seconds() / 86400)

    if diff_days < 0:
        return "overdue"
    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days <= DAY_STEP_LIMIT:
        return f"in {diff_days} days"
    if diff_days <= DAYS_PER_MONTH:
        return f"in {math.ceil(diff_days / DAYS_PER_WEEK)} weeks"
    return f"in {math.ceil(diff_days / DAYS_PER_MONTH)} months"
