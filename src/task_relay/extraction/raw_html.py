"""Detection of untagged HTML documents embedded in free text."""

from __future__ import annotations

import logging
import re
from typing import Any

from task_relay.extraction.fences import has_code_fence

logger = logging.getLogger(__name__)

_DOCTYPE_RE = re.compile(r"<!DOCTYPE\s+html[^>]*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html[^>]*>", re.IGNORECASE)
_HTML_CLOSE_RE = re.compile(r"</html>", re.IGNORECASE)


def extract_raw_html(text: Any) -> str | None:
    """Return the HTML document found in ``text`` or ``None``.

    Text containing a code fence is left to the fence extractor.
    """
    if not isinstance(text, str) or not text:
        return None
    if has_code_fence(text):
        return None

    start_match = _DOCTYPE_RE.search(text)
    marker = "doctype"
    if start_match is None:
        start_match = _HTML_OPEN_RE.search(text)
        marker = "html"
    if start_match is None:
        return None

    start = start_match.start()
    end_match = _HTML_CLOSE_RE.search(text, start)
    end = end_match.end() if end_match else len(text)
    logger.debug("raw_html event=found marker=%s closed=%s", marker, end_match is not None)
    return text[start:end]
