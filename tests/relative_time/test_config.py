from src.relative_time import TODAY_RELATIVE_TIME, WeekStart, config


def test_defaults(monkeypatch):
    for name in ("RELATIVE_TIME_FORCE_UNTIL_NOW", "RELATIVE_TIME_WEEK_START", "RELATIVE_TIME_FALLBACK_KEY"):
        monkeypatch.delenv(name, raising=False)

    options = config.default_options()

    assert options.force_until_now is True
    assert options.week_start is WeekStart.SUNDAY
    assert options.fallback_relative_time is TODAY_RELATIVE_TIME


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RELATIVE_TIME_FORCE_UNTIL_NOW", "false")
    monkeypatch.setenv("RELATIVE_TIME_WEEK_START", "Monday")
    monkeypatch.setenv("RELATIVE_TIME_FALLBACK_KEY", "unit=(Day)&count=(-30)&referenceTime=(now)")

    options = config.default_options()

    assert options.force_until_now is False
    assert options.week_start is WeekStart.MONDAY
    assert options.fallback_relative_time.count == -30


def test_invalid_env_values_use_defaults(monkeypatch):
    monkeypatch.setenv("RELATIVE_TIME_WEEK_START", "friday")
    monkeypatch.setenv("RELATIVE_TIME_FALLBACK_KEY", "garbage")
    monkeypatch.setenv("LLM_COMPLETION_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("LLM_COMPLETION_MAX_ATTEMPTS", "9")

    assert config.week_start() is WeekStart.SUNDAY
    assert config.fallback_relative_time() is TODAY_RELATIVE_TIME
    assert config.completion_timeout_seconds() == 5
    assert config.completion_max_attempts() == 2


def test_blank_env_values_use_defaults(monkeypatch):
    monkeypatch.setenv("RELATIVE_TIME_WEEK_START", "  ")
    monkeypatch.setenv("RELATIVE_TIME_FORCE_UNTIL_NOW", "")

    assert config.week_start() is WeekStart.SUNDAY
    assert config.force_until_now() is True
