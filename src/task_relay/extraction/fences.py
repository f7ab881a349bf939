"""Fenced code block extraction for LLM-produced text."""

from __future__ import annotations

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

FENCE_DELIMITER = "```"

# Group 1: optional language tag, group 2: block body.
_CODE_FENCE_RE = re.compile(r"```([\w+#.-]*)[ \t]*[\r\n]+(.*?)```", re.DOTALL)


def has_code_fence(text: str) -> bool:
    return FENCE_DELIMITER in text


def extract_code_fence(text: Any, preferred_language: str | None = None) -> str:
    """Return the trimmed body of the best fenced block in ``text``.

    A block tagged with ``preferred_language`` (case-insensitive) wins over
    document order; otherwise the first block is used. Text without any
    complete block is returned unchanged.
    """
    if not isinstance(text, str):
        return str(text)
    if not text:
        return text

    matches = list(_CODE_FENCE_RE.finditer(text))
    if not matches:
        return text

    if preferred_language:
        wanted = preferred_language.lower()
        for match in matches:
            if match.group(1).lower() == wanted:
                logger.debug("fence event=preferred_match language=%s", preferred_language)
                return match.group(2).strip()

    languages = ", ".join(match.group(1) or "unspecified" for match in matches)
    logger.debug("fence event=scan count=%d languages=%s", len(matches), languages)
    return matches[0].group(2).strip()
