from datetime import datetime, timezone

import pytest

from src.relative_time import (
    AbsoluteTime,
    RelativeTime,
    RelativeTimeResolver,
    TimeRange,
    TimeType,
    TimeValueError,
    get_time_range,
    time_value_from_dict,
)

NOW = datetime(2026, 3, 18, 15, 30, tzinfo=timezone.utc)


def test_absolute_value_is_ordered():
    assert get_time_range(AbsoluteTime(start=2000, end=1000)) == TimeRange(start_time=1000, end_time=2000)


def test_relative_value_goes_through_resolver():
    resolver = RelativeTimeResolver(clock=lambda: NOW)
    value = RelativeTime(relative_time_key="unit=(Hour)&count=(1)&referenceTime=(now)")

    time_range = get_time_range(value, resolver)

    assert time_range.end_time == int(NOW.timestamp() * 1000)
    assert time_range.end_time - time_range.start_time == 3600 * 1000


def test_from_dict():
    assert time_value_from_dict({"type": "abs", "start": 1, "end": 2}) == AbsoluteTime(start=1, end=2)
    relative = time_value_from_dict({"type": "rel", "relativeTimeKey": "k"})
    assert relative == RelativeTime(relative_time_key="k")
    assert relative.to_dict() == {"type": "rel", "relativeTimeKey": "k"}


def test_from_dict_accepts_legacy_relative_tag():
    assert time_value_from_dict({"type": "res", "relativeTimeKey": "k"}).type is TimeType.REL


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "span", "start": 1, "end": 2},
        {"type": "abs", "start": "1", "end": 2},
        {"type": "abs", "start": True, "end": 2},
        {"type": "rel"},
        [],
    ],
)
def test_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(TimeValueError):
        time_value_from_dict(payload)
