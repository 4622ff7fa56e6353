"""Extract a JSON object from free-form model output.

Models do not reliably return bare JSON: the object may be wrapped in a
```json fence or surrounded by prose. ``extract_json`` never raises; callers
treat ``None`` as "no usable result".
"""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

JSON_FENCE_RE = re.compile(r"```json\s*", re.IGNORECASE)
FENCE_RE = re.compile(r"```\s*")
OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _loads_object(text: str) -> dict | None:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def strip_fences(text: str) -> str:
    return FENCE_RE.sub("", JSON_FENCE_RE.sub("", text)).strip()


def extract_json(text: str | None) -> dict | None:
    if not text:
        return None

    # 1. Bare JSON
    parsed = _loads_object(text.strip())
    if parsed is not None:
        return parsed

    # 2. Fenced or prose-wrapped: greedy first "{" to last "}"
    cleaned = strip_fences(text)
    match = OBJECT_RE.search(cleaned)
    if match:
        cleaned = match.group(0)

    parsed = _loads_object(cleaned)
    if parsed is None:
        logger.error("JSON extraction failed. Raw text: %s", text[:500])
    return parsed
