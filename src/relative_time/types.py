from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict


class RelativeTimeUnit(str, Enum):
    MIN = "Min"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"


class ReferenceTime(str, Enum):
    NOW = "now"
    TODAY = "today"
    THIS_WEEK = "thisWeek"
    THIS_MONTH = "thisMonth"
    THIS_YEAR = "thisYear"


class WeekStart(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"


@dataclass(frozen=True, eq=False)
class RelativeTimeDescriptor:
    """
    A relative time window such as "last 7 days" or "this month".

    Build one with `relative_time_factory` (key derived from the fields) or get
    one from `RelativeTimeResolver.parse` (key kept exactly as the caller sent it).
    Two descriptors are equal when their keys are equal.
    """

    unit: RelativeTimeUnit
    count: int
    reference_time: ReferenceTime
    key: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelativeTimeDescriptor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_dict(self) -> Dict[str, object]:
        return {
            "unit": self.unit.value,
            "count": self.count,
            "referenceTime": self.reference_time.value,
            "key": self.key,
        }


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _ms_to_datetime(ms: int, tz) -> datetime:
    instant = _EPOCH + timedelta(milliseconds=ms)
    return instant.astimezone(tz) if tz is not None else instant


@dataclass(frozen=True)
class TimeRange:
    """Absolute range in epoch milliseconds."""

    start_time: int
    end_time: int

    def start_datetime(self, tz=None) -> datetime:
        return _ms_to_datetime(self.start_time, tz)

    def end_datetime(self, tz=None) -> datetime:
        return _ms_to_datetime(self.end_time, tz)

    def to_dict(self) -> Dict[str, object]:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "start_datetime": self.start_datetime().isoformat(),
            "end_datetime": self.end_datetime().isoformat(),
        }
