from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from . import calendar
from .codec import (
    THIS_MONTH_RELATIVE_TIME,
    THIS_WEEK_RELATIVE_TIME,
    TODAY_RELATIVE_TIME,
    decode,
)
from .diagnostics import DiagnosticSink, emit
from .types import (
    ReferenceTime,
    RelativeTimeDescriptor,
    RelativeTimeUnit,
    TimeRange,
    WeekStart,
)

Clock = Callable[[], datetime]
KeyOrDescriptor = Union[str, RelativeTimeDescriptor]

UNKNOWN_LABEL = "Unknown time"

_UNIT_LABELS = {
    RelativeTimeUnit.MIN: "Min",
    RelativeTimeUnit.HOUR: "Hour",
    RelativeTimeUnit.DAY: "Day",
    RelativeTimeUnit.WEEK: "Week",
    RelativeTimeUnit.MONTH: "Month",
    RelativeTimeUnit.YEAR: "Year",
}

_PRESET_LABELS = {
    TODAY_RELATIVE_TIME.key: "Today",
    THIS_WEEK_RELATIVE_TIME.key: "This Week",
    THIS_MONTH_RELATIVE_TIME.key: "This Month",
}


@dataclass(frozen=True)
class RelativeTimeOptions:
    # truncate end_time to the current instant when it would land in the future
    force_until_now: bool = True
    # returned by parse() whenever a key fails to decode
    fallback_relative_time: RelativeTimeDescriptor = TODAY_RELATIVE_TIME
    week_start: WeekStart = WeekStart.SUNDAY


class RelativeTimeResolver:
    """
    Turns relative time keys into absolute ranges and display labels.

    The resolver never raises on bad keys: undecodable input resolves through
    `options.fallback_relative_time` and a diagnostic goes to `diagnostic_sink`
    (a `logging` warning by default).
    """

    def __init__(
        self,
        options: Optional[RelativeTimeOptions] = None,
        *,
        clock: Optional[Clock] = None,
        diagnostic_sink: Optional[DiagnosticSink] = None,
    ):
        self._options = options or RelativeTimeOptions()
        self._clock: Clock = clock or calendar.system_now
        self._sink = diagnostic_sink

    @property
    def options(self) -> RelativeTimeOptions:
        return self._options

    def parse(self, key: str) -> RelativeTimeDescriptor:
        decoded = decode(key, sink=self._sink)
        if decoded is None:
            fallback = self._options.fallback_relative_time
            emit(
                self._sink,
                "relative_time.fallback_used",
                f"fail to parse key {key!r}, use fallback time {fallback.key}",
                key=key,
                fallback_key=fallback.key,
            )
            return fallback

        # keep the caller's string as the key instead of re-encoding it
        return RelativeTimeDescriptor(
            unit=decoded.unit,
            count=decoded.count,
            reference_time=decoded.reference_time,
            key=key,
        )

    def _descriptor(self, key_or_descriptor: KeyOrDescriptor) -> RelativeTimeDescriptor:
        if isinstance(key_or_descriptor, RelativeTimeDescriptor):
            return key_or_descriptor
        return self.parse(key_or_descriptor)

    def reference_time_to_instant(
        self,
        reference_time: Union[str, ReferenceTime],
        now: Optional[datetime] = None,
    ) -> datetime:
        now = now if now is not None else self._clock()
        try:
            reference_time = ReferenceTime(reference_time)
        except ValueError:
            emit(
                self._sink,
                "relative_time.unknown_reference_time",
                f"undefined reference time {reference_time!r}, use {ReferenceTime.NOW.value}",
                reference_time=str(reference_time),
            )
            return now

        if reference_time == ReferenceTime.TODAY:
            return calendar.start_of_day(now)
        if reference_time == ReferenceTime.THIS_WEEK:
            return calendar.start_of_week(now, self._options.week_start)
        if reference_time == ReferenceTime.THIS_MONTH:
            return calendar.start_of_month(now)
        if reference_time == ReferenceTime.THIS_YEAR:
            return calendar.start_of_year(now)
        return now

    def resolve(self, key_or_descriptor: KeyOrDescriptor) -> TimeRange:
        descriptor = self._descriptor(key_or_descriptor)
        now = self._clock()

        reference = calendar.to_epoch_ms(self.reference_time_to_instant(descriptor.reference_time, now))
        # the offset is measured from now, not from the reference instant
        try:
            offset_instant = calendar.subtract(now, descriptor.count, descriptor.unit)
        except (ValueError, OverflowError):
            offset_instant = calendar.MIN_INSTANT if descriptor.count > 0 else calendar.MAX_INSTANT
            emit(
                self._sink,
                "relative_time.offset_out_of_range",
                f"offset for key {descriptor.key[:80]!r} leaves the calendar range, "
                f"clamped to {offset_instant.isoformat()}",
                key=descriptor.key,
            )
        offset = calendar.to_epoch_ms(offset_instant)

        start_time = min(offset, reference)
        end_time = max(offset, reference)

        now_ms = calendar.to_epoch_ms(now)
        if self._options.force_until_now and end_time > now_ms:
            end_time = now_ms

        return TimeRange(start_time=start_time, end_time=end_time)

    def label(self, key_or_descriptor: KeyOrDescriptor) -> str:
        descriptor = self._descriptor(key_or_descriptor)

        if descriptor.reference_time == ReferenceTime.NOW:
            # "ago" windows carry a negative count; a positive count still shows its magnitude
            amount = abs(descriptor.count)
            word = _UNIT_LABELS[descriptor.unit]
            if amount != 1:
                word += "s"
            return f"Last {amount} {word}"

        return _PRESET_LABELS.get(descriptor.key, UNKNOWN_LABEL)
