from __future__ import annotations

import json
from typing import Dict, List, Mapping, Optional

from .llm_enricher import complete_relative_time
from .phrase_parser import parse_time_phrase
from .resolver import RelativeTimeResolver


class PhraseNormalizationError(Exception):
    pass


def _changed_fields(before: Mapping[str, object], after: Mapping[str, object]) -> List[str]:
    return [name for name in sorted(set(before) | set(after)) if before.get(name) != after.get(name)]


def _debug(stage: str, payload: Mapping[str, object], previous: Optional[Mapping[str, object]] = None) -> None:
    print(f"[normalize_phrase] {stage}:")
    print(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
    if previous is not None:
        print(f"[normalize_phrase] {stage} changed: {_changed_fields(previous, payload) or ['<none>']}")


def normalize_phrase(
    text: str,
    *,
    resolver: Optional[RelativeTimeResolver] = None,
    llm_client=None,
    debug: bool = False,
) -> Dict[str, object]:
    """
    Turn a free-text window ("last 7 days", "this month") into its key, label
    and resolved range. Rules run first; the LLM is only asked when they miss.

    `empty_range` is set when start and end coincide, which is what a
    look-back phrase like "last 7 days" (a negative count from now) resolves
    to while the resolver truncates end times at now.
    """
    resolver = resolver or RelativeTimeResolver()

    rule_result = parse_time_phrase(text)
    stage: Dict[str, object] = {
        "raw_text": text,
        "original_phrase": rule_result.original_phrase,
        "descriptor": rule_result.descriptor.to_dict() if rule_result.descriptor else None,
        "source": "rule" if rule_result.descriptor else None,
    }
    if debug:
        _debug("parse_time_phrase", stage)

    descriptor = rule_result.descriptor
    if descriptor is None:
        descriptor = complete_relative_time(text, llm_client=llm_client)
        previous, stage = stage, {
            **stage,
            "descriptor": descriptor.to_dict() if descriptor else None,
            "source": "llm" if descriptor else None,
        }
        if debug:
            _debug("complete_relative_time", stage, previous)

    if descriptor is None:
        raise PhraseNormalizationError(f"no relative time window found in {text!r}")

    time_range = resolver.resolve(descriptor)
    result = {
        "raw_text": text,
        "original_phrase": stage["original_phrase"],
        "source": stage["source"],
        "key": descriptor.key,
        "label": resolver.label(descriptor),
        "range": time_range.to_dict(),
        "empty_range": time_range.start_time == time_range.end_time,
    }
    if debug:
        _debug("resolve", result)

    return result
