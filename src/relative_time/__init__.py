from .codec import (
    KEY_PATTERN,
    PRESETS,
    THIS_MONTH_RELATIVE_TIME,
    THIS_WEEK_RELATIVE_TIME,
    TODAY_RELATIVE_TIME,
    DecodedKey,
    decode,
    encode,
    relative_time_factory,
)
from .diagnostics import Diagnostic, DiagnosticSink, log_diagnostic
from .normalizer import PhraseNormalizationError, normalize_phrase
from .resolver import UNKNOWN_LABEL, RelativeTimeOptions, RelativeTimeResolver
from .time_value import (
    AbsoluteTime,
    RelativeTime,
    TimeType,
    TimeValueError,
    get_time_range,
    time_value_from_dict,
)
from .types import (
    ReferenceTime,
    RelativeTimeDescriptor,
    RelativeTimeUnit,
    TimeRange,
    WeekStart,
)

__all__ = [
    "KEY_PATTERN",
    "PRESETS",
    "THIS_MONTH_RELATIVE_TIME",
    "THIS_WEEK_RELATIVE_TIME",
    "TODAY_RELATIVE_TIME",
    "UNKNOWN_LABEL",
    "AbsoluteTime",
    "DecodedKey",
    "Diagnostic",
    "DiagnosticSink",
    "PhraseNormalizationError",
    "ReferenceTime",
    "RelativeTime",
    "RelativeTimeDescriptor",
    "RelativeTimeOptions",
    "RelativeTimeResolver",
    "RelativeTimeUnit",
    "TimeRange",
    "TimeType",
    "TimeValueError",
    "WeekStart",
    "decode",
    "encode",
    "get_time_range",
    "log_diagnostic",
    "normalize_phrase",
    "relative_time_factory",
    "time_value_from_dict",
]
