"""Pull a JSON object out of free-form model output.

Models often wrap their JSON in prose or markdown fences, so the raw text is
scanned for the first position where a complete object decodes.
"""

import json
import logging
from typing import Any

from wanderword.errors import MalformedResponseError

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


def extract_json(text: Any, source: str = "backend") -> dict[str, Any]:
    """Return the first well-formed JSON object found in ``text``.

    Args:
        text: Raw backend output
        source: Backend name used in the error message

    Raises:
        MalformedResponseError: If no object decodes
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError(f"Empty response from {source}")

    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if start > 0:
            logger.debug(f"Skipped {start} chars of leading text from {source}")
        return obj

    raise MalformedResponseError(f"No valid JSON in {source} response")
