import json
from datetime import datetime, timezone

import pytest

from src.relative_time import PhraseNormalizationError, RelativeTimeResolver, llm_enricher, normalizer

NOW = datetime(2026, 3, 18, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def resolver():
    return RelativeTimeResolver(clock=lambda: NOW)


def test_rule_phrase_is_normalized(resolver):
    out = normalizer.normalize_phrase("signups over the last 7 days", resolver=resolver)

    assert out["source"] == "rule"
    assert out["original_phrase"] == "last 7 days"
    assert out["key"] == "unit=(Day)&count=(-7)&referenceTime=(now)"
    assert out["label"] == "Last 7 Days"
    assert out["range"]["startTime"] <= out["range"]["endTime"]
    # a negative count from now points past now and is truncated there
    assert out["empty_range"] is True


def test_calendar_phrase_has_non_empty_range(resolver):
    out = normalizer.normalize_phrase("this month", resolver=resolver)

    assert out["label"] == "This Month"
    assert out["empty_range"] is False


def test_llm_completes_when_rules_miss(monkeypatch, resolver):
    monkeypatch.setattr(llm_enricher.config, "ENABLE_LLM_COMPLETION", True)

    def stub_client(_prompt, timeout):
        return json.dumps({"completed": {"unit": "Week", "count": 1, "referenceTime": "thisWeek"}})

    out = normalizer.normalize_phrase("since sunday", resolver=resolver, llm_client=stub_client)

    assert out["source"] == "llm"
    assert out["original_phrase"] is None
    assert out["label"] == "This Week"


def test_unrecognized_phrase_raises(monkeypatch, resolver):
    monkeypatch.setattr(normalizer, "complete_relative_time", lambda text, llm_client=None: None)

    with pytest.raises(PhraseNormalizationError):
        normalizer.normalize_phrase("deposit balance", resolver=resolver)


def test_debug_prints_stage_json_and_diff(monkeypatch, capsys, resolver):
    monkeypatch.setattr(
        normalizer,
        "complete_relative_time",
        lambda text, llm_client=None: resolver.parse("unit=(Month)&count=(1)&referenceTime=(thisMonth)"),
    )

    result = normalizer.normalize_phrase("month to date", resolver=resolver, debug=True)

    out = capsys.readouterr().out
    assert "[normalize_phrase] parse_time_phrase:" in out
    assert "[normalize_phrase] complete_relative_time:" in out
    assert "[normalize_phrase] complete_relative_time changed: ['descriptor', 'source']" in out
    assert "[normalize_phrase] resolve:" in out
    assert result["label"] == "This Month"
