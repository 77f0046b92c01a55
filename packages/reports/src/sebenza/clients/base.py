"""Shared response type and JSON helpers for LLM clients."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass
class LLMResponse:
    """Normalized response from any provider."""

    content: str
    structured: dict[str, Any] | None
    stop_reason: str
    usage: dict[str, int] = field(
        default_factory=lambda: {"input_tokens": 0, "output_tokens": 0}
    )


def extract_json(text: str) -> dict[str, Any] | None:
    """Decode a JSON object from model text, tolerating markdown code fences.

    Returns None when the text is not a JSON object.
    """
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        stripped = match.group(1)
    if not stripped:
        return None

    try:
        decoded = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    return decoded if isinstance(decoded, dict) else None
