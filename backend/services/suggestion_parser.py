"""
Suggestion Parser - Turn completion replies into Suggestion records

The backend is asked for a JSON array, but models don't always comply. A reply
that doesn't decode as JSON falls back to a line-based heuristic; a reply that
decodes to something other than an array yields no suggestions.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from models.completion import Suggestion

logger = logging.getLogger(__name__)

FALLBACK_LINE_LIMIT = 10
FALLBACK_DETAIL = "AI suggestion"
COMMENT_PREFIXES = ("#", "//")

_JSON_FENCE_OPEN = re.compile(r"^```json\s*")
_FENCE_OPEN = re.compile(r"^```\w*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")
_CALL = re.compile(r"(\w+)\s*\(")
_DECLARATION = re.compile(r"(?:const|let|var)\s+(\w+)")


def strip_fences(text: str) -> str:
    """Remove a ```json (or bare ```) wrapper around a reply"""
    if text.startswith("```json"):
        return _FENCE_CLOSE.sub("", _JSON_FENCE_OPEN.sub("", text, count=1))
    if text.startswith("```"):
        return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text, count=1))
    return text


def _first(item: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = item.get(key)
        if value:
            return value if isinstance(value, str) else str(value)
    return ""


def suggestion_from_item(item: dict[str, Any]) -> Suggestion:
    """Map one decoded object to a Suggestion, accepting common field aliases"""
    return Suggestion(
        text=_first(item, "text", "completion", "label"),
        kind=_first(item, "kind") or "text",
        detail=_first(item, "detail", "description"),
        documentation=_first(item, "documentation", "docs"),
        insert_text=_first(item, "insertText", "text", "completion"),
    )


def classify_line(line: str) -> str:
    """Best-effort kind for a plain-text suggestion line"""
    if _CALL.search(line):
        return "function"
    if _DECLARATION.search(line):
        return "variable"
    if "class " in line:
        return "class"
    if "=>" in line or "function" in line:
        return "function"
    return "text"


def parse_lines(response: str) -> list[Suggestion]:
    """Heuristic fallback: one suggestion per meaningful line"""
    lines = [line.strip() for line in response.split("\n")]
    lines = [line for line in lines if line and not line.startswith(COMMENT_PREFIXES)]

    return [
        Suggestion(
            text=line,
            kind=classify_line(line),
            detail=FALLBACK_DETAIL,
            documentation="",
            insert_text=line,
        )
        for line in lines[:FALLBACK_LINE_LIMIT]
    ]


def parse_suggestions(response: str) -> list[Suggestion]:
    """Parse a completion reply into an ordered list of suggestions"""
    cleaned = strip_fences(response.strip())

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug("[SuggestionParser] Reply is not JSON (%s), using line fallback", e)
        return parse_lines(response)

    if not isinstance(parsed, list):
        return []

    return [suggestion_from_item(item) for item in parsed if isinstance(item, dict)]
