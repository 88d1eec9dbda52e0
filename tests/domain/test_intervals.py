import pytest

from phraseforge.domain.intervals import (
    REVIEW_INTERVALS,
    ReviewInterval,
    interval_days,
    interval_label,
    ordered_intervals,
    parse_interval,
)


def test_interval_table_day_counts():
    assert {i.value: spec.days for i, spec in REVIEW_INTERVALS.items()} == {
        "tomorrow": 1,
        "three_days": 3,
        "one_week": 7,
        "two_weeks": 14,
        "one_month": 30,
    }


def test_every_interval_has_label():
    for interval in ReviewInterval:
        assert interval_label(interval)


def test_ordered_intervals_shortest_first():
    assert ordered_intervals() == [
        ReviewInterval.TOMORROW,
        ReviewInterval.THREE_DAYS,
        ReviewInterval.ONE_WEEK,
        ReviewInterval.TWO_WEEKS,
        ReviewInterval.ONE_MONTH,
    ]


def test_parse_interval():
    assert parse_interval("one_week") is ReviewInterval.ONE_WEEK
    assert parse_interval(ReviewInterval.TOMORROW) is ReviewInterval.TOMORROW
    assert parse_interval("fortnight") is None
    assert parse_interval(None) is None
    assert parse_interval(7) is None


def test_interval_days_accepts_plain_strings():
    assert interval_days("two_weeks") == 14
    with pytest.raises(KeyError):
        interval_days("someday")


def test_str_is_value():
    assert str(ReviewInterval.ONE_MONTH) == "one_month"
