from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .resolver import RelativeTimeResolver
from .types import TimeRange


class TimeValueError(ValueError):
    pass


class TimeType(str, Enum):
    ABS = "abs"
    REL = "rel"


# payloads written before the "rel" tag was settled
_LEGACY_TYPE_TAGS = {"res": TimeType.REL}


@dataclass(frozen=True)
class AbsoluteTime:
    start: int
    end: int
    type: TimeType = TimeType.ABS

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.type.value, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class RelativeTime:
    relative_time_key: str
    type: TimeType = TimeType.REL

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.type.value, "relativeTimeKey": self.relative_time_key}


TimeValue = Union[AbsoluteTime, RelativeTime]


def _as_int(payload: Mapping[str, object], name: str) -> int:
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TimeValueError(f"{name} must be an integer epoch milliseconds value")
    return value


def time_value_from_dict(payload: Mapping[str, object]) -> TimeValue:
    if not isinstance(payload, Mapping):
        raise TimeValueError("time value must be an object")

    raw_type = str(payload.get("type", ""))
    try:
        kind = _LEGACY_TYPE_TAGS.get(raw_type) or TimeType(raw_type)
    except ValueError:
        raise TimeValueError(f"unknown time type {raw_type!r}") from None

    if kind == TimeType.ABS:
        return AbsoluteTime(start=_as_int(payload, "start"), end=_as_int(payload, "end"))

    key = payload.get("relativeTimeKey")
    if not isinstance(key, str):
        raise TimeValueError("relativeTimeKey must be a string")
    return RelativeTime(relative_time_key=key)


def get_time_range(value: TimeValue, resolver: Optional[RelativeTimeResolver] = None) -> TimeRange:
    """
    Absolute values are returned as an ordered range; relative ones are resolved
    against the current instant (undecodable keys use the resolver's fallback).
    """
    if isinstance(value, AbsoluteTime):
        return TimeRange(start_time=min(value.start, value.end), end_time=max(value.start, value.end))
    resolver = resolver or RelativeTimeResolver()
    return resolver.resolve(value.relative_time_key)
