"""Content extraction and media-type classification for task results."""

from task_relay.extraction.classifier import (
    HTML_MEDIA_TYPE,
    JSON_MEDIA_TYPE,
    PLAIN_MEDIA_TYPE,
    classify_content_type,
)
from task_relay.extraction.content import resolve_content, to_text
from task_relay.extraction.fences import extract_code_fence
from task_relay.extraction.normalizer import normalize_content, renormalize
from task_relay.extraction.raw_html import extract_raw_html
from task_relay.extraction.selector import SelectedContent, select_content

__all__ = [
    "HTML_MEDIA_TYPE",
    "JSON_MEDIA_TYPE",
    "PLAIN_MEDIA_TYPE",
    "SelectedContent",
    "classify_content_type",
    "extract_code_fence",
    "extract_raw_html",
    "normalize_content",
    "renormalize",
    "resolve_content",
    "select_content",
    "to_text",
]
