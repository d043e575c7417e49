"""
Parsing helpers for raw model completions.

Accepted transformations, applied until the text stops changing:
- surrounding whitespace is trimmed;
- a leading ``` fence (optionally followed by a language tag and newline) is removed;
- a trailing ``` fence is removed;
- a fenced block embedded mid-text is replaced by its inner content.

Iterating to a fixed point keeps clean() idempotent. Everything here is pure (no I/O).
"""
from __future__ import annotations

import json
import re
from typing import Any

from .errors import ParseError

LEADING_FENCE_RE = re.compile(r"\A```[A-Za-z]*\n?")
TRAILING_FENCE_RE = re.compile(r"```\Z")
EMBEDDED_FENCE_RE = re.compile(r"```[A-Za-z]*\n([\s\S]*?)\n```")

_DECODER = json.JSONDecoder()


def _clean_once(text: str) -> str:
    text = text.strip()
    text = LEADING_FENCE_RE.sub("", text, count=1)
    text = TRAILING_FENCE_RE.sub("", text, count=1)
    text = EMBEDDED_FENCE_RE.sub(lambda m: m.group(1), text, count=1)
    return text.strip()


def clean(raw: str | None) -> str:
    """Strip markdown fences and whitespace from a completion."""
    text = raw or ""
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def extract_embedded_json(text: str) -> Any:
    """Return the first JSON object or array embedded in text.

    Tolerates leading prose and trailing garbage ("Sure! {...} Good luck").
    """
    for idx, ch in enumerate(text):
        if ch not in "{[":
            continue
        try:
            value, _end = _DECODER.raw_decode(text, idx)
        except ValueError:
            continue
        return value
    raise ParseError("no JSON value found in completion")


def parse_json(raw: str | None) -> Any:
    """Clean a completion and decode it as JSON, falling back to an embedded object/array."""
    cleaned = clean(raw)
    if not cleaned:
        raise ParseError("empty completion")
    try:
        return json.loads(cleaned)
    except ValueError:
        pass
    return extract_embedded_json(cleaned)


def unquote(text: str) -> str:
    """Turn a JSON string literal ('"e4"') into its value; other text is returned unchanged."""
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            value = json.loads(text)
        except ValueError:
            return text
        if isinstance(value, str):
            return value
    return text


__all__ = ["clean", "parse_json", "extract_embedded_json", "unquote"]
