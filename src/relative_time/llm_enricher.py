from __future__ import annotations

import json
import logging
from typing import Any, Optional

from . import config
from .codec import decode, encode, relative_time_factory
from .llm_prompt import build_completion_prompt
from .types import ReferenceTime, RelativeTimeDescriptor, RelativeTimeUnit

logger = logging.getLogger(__name__)


def _record_completion_failure(reason: str) -> None:
    logger.debug("relative time completion failed: %s", reason)


def _ask(llm_client: Any, prompt: str, timeout_seconds: int) -> str:
    # LangChain runnables (chat models, prompt | llm chains) answer with a message
    if hasattr(llm_client, "invoke"):
        message = llm_client.invoke(prompt)
        return getattr(message, "content", message)
    return llm_client(prompt, timeout=timeout_seconds)


def _descriptor_from_completed(completed: dict) -> Optional[RelativeTimeDescriptor]:
    count = completed.get("count")
    if isinstance(count, bool) or not isinstance(count, int):
        return None

    # round-trip through the key grammar so only encodable vocabularies get through
    decoded = decode(encode(str(completed.get("unit")), count, str(completed.get("referenceTime"))))
    if decoded is None:
        return None
    return relative_time_factory(decoded.unit, decoded.count, decoded.reference_time)


def complete_relative_time(text: str, llm_client: Any = None) -> Optional[RelativeTimeDescriptor]:
    if not config.completion_enabled() or llm_client is None:
        return None

    prompt = build_completion_prompt(
        text=text,
        allowed_units=[unit.value for unit in RelativeTimeUnit],
        allowed_reference_times=[reference.value for reference in ReferenceTime],
    )

    for _ in range(config.completion_max_attempts()):
        try:
            raw_response = _ask(llm_client, prompt, config.completion_timeout_seconds())
            response_json = json.loads(raw_response)
        except Exception:
            _record_completion_failure("llm_or_parse_failure")
            continue

        completed = response_json.get("completed") if isinstance(response_json, dict) else None
        if not isinstance(completed, dict):
            _record_completion_failure("missing_completed")
            continue

        descriptor = _descriptor_from_completed(completed)
        if descriptor is not None:
            return descriptor

        _record_completion_failure("invalid_descriptor")

    return None
