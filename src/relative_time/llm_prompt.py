from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable


PROMPT_FILE = Path(__file__).resolve().parent / "prompts" / "relative_time_completion_prompt.md"


def load_completion_prompt() -> str:
    return PROMPT_FILE.read_text(encoding="utf-8")


def build_completion_prompt(
    text: str,
    allowed_units: Iterable[str],
    allowed_reference_times: Iterable[str],
) -> str:
    template = load_completion_prompt()
    payload = {
        "text": text,
        "allowed_units": list(allowed_units),
        "allowed_reference_times": list(allowed_reference_times),
    }
    return f"{template}\n\nInput JSON:\n{json.dumps(payload, ensure_ascii=False)}"
