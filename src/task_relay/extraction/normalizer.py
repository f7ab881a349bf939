"""Reduce schema-less task output to a single displayable string."""

from __future__ import annotations

import json
import logging
from typing import Any

from task_relay.extraction.content import (
    MappingContent,
    RawContent,
    SequenceContent,
    TextContent,
    TextObjectArrayContent,
    TextObjectContent,
    loads_strict,
    resolve_content,
    to_text,
)
from task_relay.extraction.fences import extract_code_fence, has_code_fence
from task_relay.extraction.raw_html import extract_raw_html

logger = logging.getLogger(__name__)

PREFERRED_FENCE_LANGUAGE = "html"


def normalize_text(text: str) -> str:
    if has_code_fence(text):
        return extract_code_fence(text, PREFERRED_FENCE_LANGUAGE)
    html = extract_raw_html(text)
    if html is not None:
        return html
    return text


def normalize_content(value: Any) -> str:
    """Produce the text payload carried by ``value``.

    Never raises; shapes that cannot be interpreted degrade to their string
    conversion.
    """
    try:
        return _normalize(value)
    except Exception as exc:  # noqa: BLE001
        logger.warning("normalizer event=degraded reason=%s", exc)
        return to_text(value)


def _normalize(value: Any) -> str:
    content = resolve_content(value)
    if isinstance(content, TextContent):
        return normalize_text(content.text)
    if isinstance(content, TextObjectArrayContent):
        logger.debug("normalizer event=text_object_array items=%d", len(content.items))
        return normalize_text(to_text(content.text))
    if isinstance(content, SequenceContent):
        return "\n".join(to_text(item) for item in content.items)
    if isinstance(content, TextObjectContent):
        return normalize_text(to_text(content.text))
    if isinstance(content, MappingContent):
        return json.dumps(dict(content.mapping), ensure_ascii=False, separators=(",", ":"))
    if isinstance(content, RawContent):
        return to_text(content.value)
    raise TypeError(f"Unhandled content shape: {type(content).__name__}")


def looks_double_encoded(text: str) -> bool:
    """Text that is itself a serialized text-object payload."""
    return text.startswith("[{") or '"text"' in text


def renormalize(text: str) -> str:
    """Second extraction pass for payloads that were JSON-encoded twice.

    Parse failures keep ``text`` as is.
    """
    if not looks_double_encoded(text):
        return text
    try:
        parsed = loads_strict(text)
    except ValueError as exc:
        logger.debug("normalizer event=renormalize_skipped reason=%s", exc)
        return text
    logger.info("normalizer event=renormalized")
    return normalize_content(parsed)
