from __future__ import annotations

import os
from typing import Callable, TypeVar

from .codec import TODAY_RELATIVE_TIME, decode, relative_time_factory
from .resolver import RelativeTimeOptions
from .types import RelativeTimeDescriptor, WeekStart

FORCE_UNTIL_NOW = True
WEEK_START = WeekStart.SUNDAY
FALLBACK_KEY = TODAY_RELATIVE_TIME.key

ENABLE_LLM_COMPLETION = False
LLM_COMPLETION_TIMEOUT_SECONDS = 5
LLM_COMPLETION_MAX_ATTEMPTS = 1

T = TypeVar("T")


def _env(name: str, default: T, convert: Callable[[str], T]) -> T:
    """Environment override for a setting; unset, blank or unconvertible values keep the default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return convert(raw)
    except ValueError:
        return default


def _flag(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes", "on"}


def _fallback_from_key(raw: str) -> RelativeTimeDescriptor:
    if raw == FALLBACK_KEY:
        return TODAY_RELATIVE_TIME
    decoded = decode(raw)
    if decoded is None:
        raise ValueError(raw)
    return relative_time_factory(decoded.unit, decoded.count, decoded.reference_time)


def force_until_now() -> bool:
    return _env("RELATIVE_TIME_FORCE_UNTIL_NOW", FORCE_UNTIL_NOW, _flag)


def week_start() -> WeekStart:
    return _env("RELATIVE_TIME_WEEK_START", WEEK_START, lambda raw: WeekStart(raw.lower()))


def fallback_relative_time() -> RelativeTimeDescriptor:
    return _env("RELATIVE_TIME_FALLBACK_KEY", TODAY_RELATIVE_TIME, _fallback_from_key)


def completion_enabled() -> bool:
    return _env("ENABLE_LLM_COMPLETION", ENABLE_LLM_COMPLETION, _flag)


def completion_timeout_seconds() -> int:
    return _env("LLM_COMPLETION_TIMEOUT_SECONDS", LLM_COMPLETION_TIMEOUT_SECONDS, int)


def completion_max_attempts() -> int:
    return max(1, min(_env("LLM_COMPLETION_MAX_ATTEMPTS", LLM_COMPLETION_MAX_ATTEMPTS, int), 2))


def default_options() -> RelativeTimeOptions:
    return RelativeTimeOptions(
        force_until_now=force_until_now(),
        fallback_relative_time=fallback_relative_time(),
        week_start=week_start(),
    )
