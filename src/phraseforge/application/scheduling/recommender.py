"""
Adaptive interval recommender.

A simple ladder rather than SM-2: easy recent reviews move one rung up,
adequate ones hold, struggling ones move one rung down.
"""

import logging
from collections.abc import Sequence

from phraseforge.domain.constants import HOLD_THRESHOLD, PROMOTE_THRESHOLD, SUCCESS_WINDOW
from phraseforge.domain.intervals import ReviewInterval, parse_interval
from phraseforge.domain.models import ReviewRecord

logger = logging.getLogger(__name__)

PROMOTIONS: dict[ReviewInterval, ReviewInterval] = {
    ReviewInterval.TOMORROW: ReviewInterval.THREE_DAYS,
    ReviewInterval.THREE_DAYS: ReviewInterval.ONE_WEEK,
    ReviewInterval.ONE_WEEK: ReviewInterval.TWO_WEEKS,
    ReviewInterval.TWO_WEEKS: ReviewInterval.ONE_MONTH,
    ReviewInterval.ONE_MONTH: ReviewInterval.ONE_MONTH,
}

DEMOTIONS: dict[ReviewInterval, ReviewInterval] = {
    ReviewInterval.ONE_MONTH: ReviewInterval.TWO_WEEKS,
    ReviewInterval.TWO_WEEKS: ReviewInterval.ONE_WEEK,
    ReviewInterval.ONE_WEEK: ReviewInterval.THREE_DAYS,
    ReviewInterval.THREE_DAYS: ReviewInterval.TOMORROW,
    ReviewInterval.TOMORROW: ReviewInterval.TOMORROW,
}


def success_rate(review_history: Sequence[ReviewRecord]) -> float:
    """
    1 - mean difficulty over the most recent reviews.

    Returns 0.0 for an empty history.
    """
    if not review_history:
        return 0.0
    recent = review_history[-SUCCESS_WINDOW:]
    avg_difficulty = sum(r.difficulty for r in recent) / len(recent)
    # Rounded so three reviews at 0.1 still count as 0.9, not 0.8999999999999999.
    return round(1 - avg_difficulty, 9)


def recommend_interval(review_history: Sequence[ReviewRecord] | None) -> ReviewInterval:
    """
    Recommend the next interval from a phrase's review history.

    Returns `tomorrow` for an empty history or when the last recorded
    interval is not one we know.
    """
    if not review_history:
        return ReviewInterval.TOMORROW

    last = parse_interval(review_history[-1].interval)
    if last is None:
        logger.debug(f"Unrecognized interval {review_history[-1].interval!r}, falling back")
        return ReviewInterval.TOMORROW

    rate = success_rate(review_history)
    if rate >= PROMOTE_THRESHOLD:
        return PROMOTIONS[last]
    if rate >= HOLD_THRESHOLD:
        return last
    return DEMOTIONS[last]
