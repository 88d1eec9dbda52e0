"""Calendar-day helpers. All of them keep the tzinfo of their input."""

from datetime import datetime, timedelta


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """Last representable instant of the moment's calendar day."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def start_of_next_month(moment: datetime) -> datetime:
    first = start_of_month(moment)
    if first.month == 12:
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


def trailing_days(moment: datetime, count: int) -> list[datetime]:
    """Start-of-day datetimes for the `count` days ending with `moment`'s day, oldest first."""
    today = start_of_day(moment)
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
