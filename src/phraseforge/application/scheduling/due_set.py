"""
Due-set selection.

A phrase is due when its next review date falls on or before the end of the
reference day, so anything scheduled "today" shows up regardless of the hour.
"""

from collections.abc import Iterable
from datetime import datetime

from phraseforge.application.utils.dates import end_of_day
from phraseforge.domain.models import Phrase


def is_due(phrase: Phrase, as_of: datetime | None = None) -> bool:
    cutoff = end_of_day(as_of or datetime.now())
    return phrase.next_review_date <= cutoff


def get_due_set(all_phrases: Iterable[Phrase], as_of: datetime | None = None) -> list[Phrase]:
    """
    Select every phrase due on or before the `as_of` day.

    Args:
        all_phrases: The phrase collection, in storage order.
        as_of: Reference moment; defaults to now.

    Returns:
        Due phrases in input order. Empty input gives an empty list.
    """
    cutoff = end_of_day(as_of or datetime.now())
    return [phrase for phrase in all_phrases if phrase.next_review_date <= cutoff]
