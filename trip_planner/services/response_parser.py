"""
Response cleaning for model output.

Models are told to answer with bare JSON but often wrap it in a markdown
fence. ``strip_code_fences`` removes one leading ```` ```json ```` or
```` ``` ```` fence and its closing ```` ``` ````; anything else passes
through trimmed but otherwise unchanged.
"""
import json
import logging
import re
from enum import Enum
from typing import Any

from ..errors import ResponseParseError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200

_JSON_FENCE = re.compile(r"^```json\s*")
_BARE_FENCE = re.compile(r"^```\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


class ParsePolicy(str, Enum):
    """What a call site does when model output is not the JSON it expects."""
    FALLBACK = "fallback"  # substitute mock data and log a warning
    RAISE = "raise"  # surface the failure to the caller with a preview


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = _CLOSING_FENCE.sub("", _JSON_FENCE.sub("", cleaned))
    elif cleaned.startswith("```"):
        cleaned = _CLOSING_FENCE.sub("", _BARE_FENCE.sub("", cleaned))
    return cleaned


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    return (text or "")[:length]


def parse_json_response(text: str, label: str = "response") -> dict[str, Any]:
    """
    Strip fences and parse model output as a JSON object.

    Raises:
        ResponseParseError: the text is not valid JSON or is not an object.
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(
            f"JSON parsing failed for {label}: {e} "
            f"(length={len(cleaned)}, preview={preview(cleaned)!r})"
        )
        raise ResponseParseError(f"Invalid JSON in {label}: {e}", preview=preview(cleaned)) from e

    if not isinstance(parsed, dict):
        raise ResponseParseError(
            f"Invalid JSON in {label}: expected an object, got {type(parsed).__name__}",
            preview=preview(cleaned),
        )
    return parsed
