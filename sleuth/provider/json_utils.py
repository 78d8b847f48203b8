from __future__ import annotations

import json
import re
from typing import Any, List, Tuple, Type

from pydantic import BaseModel, ValidationError

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.IGNORECASE | re.DOTALL)
_REASONING_TAG_RE = re.compile(
    r"<(?P<tag>think|thinking|thought|reasoning|reflection|scratchpad)>(.*?)</\s*(?P=tag)\s*>",
    re.IGNORECASE | re.DOTALL,
)
_WRAPPER_KEYS = ("response", "result", "output", "data", "payload", "content")


def strip_markdown_json(text: str) -> str:
    """Remove Markdown fences and discard text outside the first JSON object."""

    if text is None:
        raise ValueError("Input text must not be None")
    trimmed = text.strip()
    if not trimmed:
        raise ValueError("Input text must not be empty")

    trimmed = _strip_reasoning_sections(trimmed)

    match = _FENCE_RE.search(trimmed)
    if match:
        trimmed = match.group(1).strip()

    start_idx = trimmed.find("{")
    end_idx = trimmed.rfind("}")
    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        raise ValueError("No JSON object found in text")
    return trimmed[start_idx : end_idx + 1]


def _strip_reasoning_sections(text: str) -> str:
    """Drop model reasoning wrappers before attempting JSON parsing."""

    cleaned = text
    while True:
        updated = _REASONING_TAG_RE.sub("", cleaned)
        if updated == cleaned:
            return cleaned
        cleaned = updated


def _unwrap_payload(data: Any, schema_model: Type[BaseModel]) -> Any:
    """Peel ``{"result": {...}}``-style envelopes that hide the schema object."""

    expected = {field.alias or name for name, field in schema_model.model_fields.items()}
    current = data
    for _ in range(4):
        if not isinstance(current, dict) or expected & set(current.keys()):
            break
        next_data = None
        for key in _WRAPPER_KEYS:
            if isinstance(current.get(key), dict):
                next_data = current[key]
                break
        if next_data is None:
            break
        current = next_data
    return current


def extract_and_validate(
    raw_text: str,
    schema_model: Type[BaseModel],
) -> Tuple[BaseModel, List[str]]:
    """Parse raw generator output, returning the schema object and warnings."""

    if not raw_text:
        raise ValueError("raw_text must be non-empty")
    warnings: List[str] = []

    sanitized = _strip_reasoning_sections(raw_text)
    try:
        data = json.loads(sanitized)
    except json.JSONDecodeError:
        data = json.loads(strip_markdown_json(sanitized))
        warnings.append("json_repaired_simple")

    unwrapped = _unwrap_payload(data, schema_model)
    if unwrapped is not data:
        warnings.append("json_unwrapped")

    try:
        obj = schema_model.model_validate(unwrapped, strict=True)
        return obj, warnings
    except ValidationError as strict_exc:
        try:
            obj = schema_model.model_validate(unwrapped, strict=False)
        except ValidationError as exc:
            raise exc from strict_exc
        warnings.append("validation_coerced")
        return obj, warnings


__all__ = ["strip_markdown_json", "extract_and_validate"]
