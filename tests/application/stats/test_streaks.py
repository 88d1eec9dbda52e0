from datetime import date, datetime

from phraseforge.application.stats.streaks import (
    advance_streak,
    current_run,
    derive_streaks,
    is_live,
    longest_run,
)
from phraseforge.domain.models import UserStats


def _days(*days: int) -> set[date]:
    return {date(2024, 1, d) for d in days}


def test_longest_run():
    assert longest_run(set()) == 0
    assert longest_run(_days(1, 2, 3, 5, 6, 10)) == 3


def test_current_run_including_today():
    assert current_run(_days(8, 9, 10), date(2024, 1, 10)) == 3


def test_current_run_survives_until_end_of_next_day():
    assert current_run(_days(8, 9), date(2024, 1, 10)) == 2


def test_current_run_broken_by_gap():
    assert current_run(_days(7, 8), date(2024, 1, 10)) == 0


def test_derive_streaks_from_review_dates():
    dates = [
        datetime(2024, 1, 1, 9),
        datetime(2024, 1, 1, 21),  # same day counts once
        datetime(2024, 1, 2, 7),
        datetime(2024, 1, 5, 7),
    ]
    assert derive_streaks(dates, datetime(2024, 1, 5, 12)) == (1, 2)


def test_is_live():
    now = datetime(2024, 1, 10, 8)
    assert is_live(datetime(2024, 1, 10, 1), now)
    assert is_live(datetime(2024, 1, 9, 23), now)
    assert not is_live(datetime(2024, 1, 8, 23), now)
    assert not is_live(None, now)


def test_advance_streak_first_review():
    assert advance_streak(UserStats(), datetime(2024, 1, 1)) == (1, 1)


def test_advance_streak_same_day_unchanged():
    counters = UserStats(current_streak=3, longest_streak=5, last_review_date=datetime(2024, 1, 4, 8))
    assert advance_streak(counters, datetime(2024, 1, 4, 20)) == (3, 5)


def test_advance_streak_next_day_extends():
    counters = UserStats(current_streak=5, longest_streak=5, last_review_date=datetime(2024, 1, 4))
    assert advance_streak(counters, datetime(2024, 1, 5)) == (6, 6)


def test_advance_streak_gap_restarts():
    counters = UserStats(current_streak=5, longest_streak=7, last_review_date=datetime(2024, 1, 1))
    assert advance_streak(counters, datetime(2024, 1, 5)) == (1, 7)
