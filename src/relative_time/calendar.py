from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta
from dateutil.tz import tzlocal

from .types import RelativeTimeUnit, WeekStart

_STEP_MAP = {
    RelativeTimeUnit.MIN: "minutes",
    RelativeTimeUnit.HOUR: "hours",
    RelativeTimeUnit.DAY: "days",
    RelativeTimeUnit.WEEK: "weeks",
    RelativeTimeUnit.MONTH: "months",
    RelativeTimeUnit.YEAR: "years",
}

# minutes and hours are elapsed time; the other units move the wall clock
_ELAPSED_UNITS = {RelativeTimeUnit.MIN, RelativeTimeUnit.HOUR}

MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)
MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def system_now() -> datetime:
    # tzlocal() follows DST transitions; astimezone() would pin today's offset
    return datetime.now(tz=tzlocal())


def to_epoch_ms(instant: datetime) -> int:
    if instant.tzinfo is None:
        return int(instant.timestamp() * 1000)
    return (instant - EPOCH) // timedelta(milliseconds=1)


def subtract(instant: datetime, count: int, unit: RelativeTimeUnit) -> datetime:
    """
    Calendar-aware subtraction: Mar 31 minus 1 month is Feb 28/29, and one day
    before noon is noon on the previous day even across a DST change.

    Raises ValueError or OverflowError when the result leaves datetime's range.
    """
    step = relativedelta(**{_STEP_MAP[unit]: count})
    if unit in _ELAPSED_UNITS and instant.tzinfo is not None:
        return (instant.astimezone(timezone.utc) - step).astimezone(instant.tzinfo)
    return instant - step


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(instant: datetime, week_start: WeekStart = WeekStart.SUNDAY) -> datetime:
    # weekday(): Monday == 0 ... Sunday == 6
    if week_start == WeekStart.MONDAY:
        days_back = instant.weekday()
    else:
        days_back = (instant.weekday() + 1) % 7
    return start_of_day(instant) - timedelta(days=days_back)


def start_of_month(instant: datetime) -> datetime:
    return start_of_day(instant).replace(day=1)


def start_of_year(instant: datetime) -> datetime:
    return start_of_day(instant).replace(month=1, day=1)
