from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from .diagnostics import DiagnosticSink, emit
from .types import ReferenceTime, RelativeTimeDescriptor, RelativeTimeUnit


@dataclass(frozen=True)
class DecodedKey:
    unit: RelativeTimeUnit
    count: int
    reference_time: ReferenceTime


def _alternation(enum_cls) -> str:
    return "|".join(re.escape(member.value) for member in enum_cls)


KEY_PATTERN = re.compile(
    r"unit=\((" + _alternation(RelativeTimeUnit) + r")\)"
    r"&count=\((-?\d+)\)"
    r"&referenceTime=\((" + _alternation(ReferenceTime) + r")\)",
    re.ASCII,
)


def _value(member: Union[str, RelativeTimeUnit, ReferenceTime]) -> str:
    return member.value if isinstance(member, (RelativeTimeUnit, ReferenceTime)) else str(member)


def encode(
    unit: Union[str, RelativeTimeUnit],
    count: int,
    reference_time: Union[str, ReferenceTime],
) -> str:
    return f"unit=({_value(unit)})&count=({int(count)})&referenceTime=({_value(reference_time)})"


def decode(key: str, sink: Optional[DiagnosticSink] = None) -> Optional[DecodedKey]:
    match = KEY_PATTERN.fullmatch(key) if isinstance(key, str) else None
    if match is None:
        emit(sink, "relative_time.decode_failed", f"fail to parse key {key!r}", key=key)
        return None

    unit, count, reference_time = match.groups()
    try:
        count = int(count, 10)
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        emit(sink, "relative_time.decode_failed", f"count out of range in key {key[:80]!r}", key=key)
        return None

    return DecodedKey(
        unit=RelativeTimeUnit(unit),
        count=count,
        reference_time=ReferenceTime(reference_time),
    )


def relative_time_factory(
    unit: Union[str, RelativeTimeUnit],
    count: int,
    reference_time: Union[str, ReferenceTime],
) -> RelativeTimeDescriptor:
    unit = RelativeTimeUnit(unit)
    reference_time = ReferenceTime(reference_time)
    return RelativeTimeDescriptor(
        unit=unit,
        count=int(count),
        reference_time=reference_time,
        key=encode(unit, count, reference_time),
    )


TODAY_RELATIVE_TIME = relative_time_factory(RelativeTimeUnit.DAY, 1, ReferenceTime.TODAY)
THIS_WEEK_RELATIVE_TIME = relative_time_factory(RelativeTimeUnit.WEEK, 1, ReferenceTime.THIS_WEEK)
THIS_MONTH_RELATIVE_TIME = relative_time_factory(RelativeTimeUnit.MONTH, 1, ReferenceTime.THIS_MONTH)

PRESETS = {
    "today": TODAY_RELATIVE_TIME,
    "this_week": THIS_WEEK_RELATIVE_TIME,
    "this_month": THIS_MONTH_RELATIVE_TIME,
}
