"""Strict decoding of model output.

Anything that is not exactly the expected object shape raises
LLMResponseError; callers decide whether that degrades to an empty result.
"""

import json
from collections.abc import Iterable

from onboarding.llm.exceptions import LLMResponseError


def parse_json_object(raw: str) -> dict[str, object]:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LLMResponseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise LLMResponseError("JSON response must be an object")
    return parsed


def decode_string_fields(
    parsed: dict[str, object],
    allowed_keys: Iterable[str],
) -> dict[str, str]:
    """Keep non-empty string values of a flat ``{key: string | null}`` object.

    Raises:
        LLMResponseError: on an unexpected key or a non-string, non-null value.
    """
    allowed = set(allowed_keys)
    unexpected = sorted(set(parsed) - allowed)
    if unexpected:
        raise LLMResponseError(f"Unexpected keys in response: {unexpected}")

    decoded: dict[str, str] = {}
    for key, value in parsed.items():
        if value is None:
            continue
        if not isinstance(value, str):
            raise LLMResponseError(
                f"Field '{key}' must be a string or null, got {type(value).__name__}"
            )
        if value.strip():
            decoded[key] = value.strip()
    return decoded


def nullable_string_schema(keys: Iterable[str]) -> dict[str, object]:
    """JSON schema for a flat object whose every key is a string or null."""
    names = list(keys)
    return {
        "type": "object",
        "properties": {name: {"type": ["string", "null"]} for name in names},
        "required": names,
        "additionalProperties": False,
    }
