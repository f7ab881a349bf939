"""Heuristic media-type classification of extracted text."""

from __future__ import annotations

from task_relay.extraction.content import loads_strict

JSON_MEDIA_TYPE = "application/json"
HTML_MEDIA_TYPE = "text/html"
PLAIN_MEDIA_TYPE = "text/plain"


def classify_content_type(text: str) -> str:
    stripped = text.strip()
    if _looks_like_json(stripped):
        try:
            loads_strict(stripped)
        except ValueError:
            pass
        else:
            return JSON_MEDIA_TYPE

    lowered = stripped.lower()
    if lowered.startswith("<!doctype") or lowered.startswith("<html"):
        return HTML_MEDIA_TYPE
    if "<body" in lowered and "</body>" in lowered:
        return HTML_MEDIA_TYPE
    return PLAIN_MEDIA_TYPE


def _looks_like_json(stripped: str) -> bool:
    return (stripped.startswith("{") and stripped.endswith("}")) or (
        stripped.startswith("[") and stripped.endswith("]")
    )
