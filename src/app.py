from __future__ import annotations

import json
import logging
from typing import Optional

from dotenv import load_dotenv

from src.relative_time import (
    PRESETS,
    PhraseNormalizationError,
    RelativeTimeResolver,
    config,
    encode,
    normalize_phrase,
)

HELP_TEXT = "指令：/exit  /presets  /encode <Unit> <count> <referenceTime>  /resolve <key>  /label <key>  <phrase>"
EMPTY_RANGE_NOTE = (
    "[note] empty range: a negative count with referenceTime=(now) points past now and the end is "
    "truncated to now; use a positive count (e.g. count=(7)) to look back"
)


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _make_llm_completion_client():
    if not config.completion_enabled():
        return None
    from src.llm_client import build_completion_client

    return build_completion_client(load_env=False, timeout_seconds=config.completion_timeout_seconds())


def _handle_command(user_text: str, resolver: RelativeTimeResolver, llm_client) -> None:
    if user_text == "/presets":
        for name, descriptor in PRESETS.items():
            print(f"{name:<10} {descriptor.key}  ({resolver.label(descriptor)})")
        return

    if user_text.startswith("/encode "):
        parts = user_text[len("/encode ") :].split()
        if len(parts) != 3:
            print("[usage] /encode <Unit> <count> <referenceTime>")
            return
        unit, count, reference_time = parts
        try:
            print(encode(unit, int(count), reference_time))
        except ValueError:
            print("[usage] count must be an integer")
        return

    if user_text.startswith("/resolve "):
        key = user_text[len("/resolve ") :].strip()
        descriptor = resolver.parse(key)
        time_range = resolver.resolve(descriptor)
        _print_json({"key": descriptor.key, "range": time_range.to_dict()})
        if time_range.start_time == time_range.end_time:
            print(EMPTY_RANGE_NOTE)
        return

    if user_text.startswith("/label "):
        print(resolver.label(user_text[len("/label ") :].strip()))
        return

    try:
        normalized = normalize_phrase(user_text, resolver=resolver, llm_client=llm_client)
        print("Normalized>")
        _print_json(normalized)
        if normalized.get("empty_range"):
            print(EMPTY_RANGE_NOTE)
    except PhraseNormalizationError as e:
        print("[normalize error]", str(e))


def run_cli(resolver: Optional[RelativeTimeResolver] = None) -> None:
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    resolver = resolver or RelativeTimeResolver(config.default_options())
    llm_client = _make_llm_completion_client()

    print("=== Relative Time CLI ===")
    print(HELP_TEXT)
    print("-------------------------------------------")

    while True:
        try:
            user_text = input("You> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye.")
            break

        if not user_text:
            continue

        if user_text == "/exit":
            print("Bye.")
            break

        _handle_command(user_text, resolver, llm_client)
