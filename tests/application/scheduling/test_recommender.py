from datetime import datetime

import pytest

from phraseforge.application.scheduling.recommender import recommend_interval, success_rate
from phraseforge.domain.intervals import ReviewInterval
from phraseforge.domain.models import ReviewRecord


def test_empty_history_recommends_tomorrow():
    assert recommend_interval([]) is ReviewInterval.TOMORROW
    assert recommend_interval(None) is ReviewInterval.TOMORROW


def test_easy_review_promotes(make_history):
    history = make_history(0.1, interval=ReviewInterval.TOMORROW)
    assert recommend_interval(history) is ReviewInterval.THREE_DAYS


def test_hard_review_demotes(make_history):
    history = make_history(0.9, interval=ReviewInterval.ONE_MONTH)
    assert recommend_interval(history) is ReviewInterval.TWO_WEEKS


def test_adequate_review_holds(make_history):
    history = make_history(0.2, interval=ReviewInterval.ONE_WEEK)
    assert recommend_interval(history) is ReviewInterval.ONE_WEEK


@pytest.mark.parametrize(
    "last, promoted, demoted",
    [
        (ReviewInterval.TOMORROW, ReviewInterval.THREE_DAYS, ReviewInterval.TOMORROW),
        (ReviewInterval.THREE_DAYS, ReviewInterval.ONE_WEEK, ReviewInterval.TOMORROW),
        (ReviewInterval.ONE_WEEK, ReviewInterval.TWO_WEEKS, ReviewInterval.THREE_DAYS),
        (ReviewInterval.TWO_WEEKS, ReviewInterval.ONE_MONTH, ReviewInterval.ONE_WEEK),
        (ReviewInterval.ONE_MONTH, ReviewInterval.ONE_MONTH, ReviewInterval.TWO_WEEKS),
    ],
)
def test_ladder_is_bounded(make_history, last, promoted, demoted):
    assert recommend_interval(make_history(0.0, interval=last)) is promoted
    assert recommend_interval(make_history(1.0, interval=last)) is demoted


def test_unrecognized_last_interval_falls_back_to_tomorrow():
    for difficulty in (0.0, 0.2, 1.0):
        history = [
            ReviewRecord(date=datetime(2024, 1, 1), interval="fortnight", difficulty=difficulty)
        ]
        assert recommend_interval(history) is ReviewInterval.TOMORROW


def test_success_rate_uses_last_five_reviews(make_history):
    # Two very hard old reviews fall outside the window
    history = make_history(1.0, 1.0, 0.1, 0.1, 0.1, 0.1, 0.1)
    assert success_rate(history) == pytest.approx(0.9)
    assert recommend_interval(history) is ReviewInterval.THREE_DAYS


def test_success_rate_empty_is_zero():
    assert success_rate([]) == 0.0


def test_decision_uses_last_records_interval(make_history):
    history = make_history(0.0, interval=ReviewInterval.ONE_MONTH) + make_history(
        0.0, interval=ReviewInterval.THREE_DAYS
    )
    assert recommend_interval(history) is ReviewInterval.ONE_WEEK


def test_never_leaves_interval_table(make_history):
    difficulties = [0.0, 0.15, 0.3, 0.5, 0.75, 1.0]
    for interval in ReviewInterval:
        for d in difficulties:
            assert recommend_interval(make_history(d, d, interval=interval)) in ReviewInterval
