"""Classify node: assign the outbound media type."""

from __future__ import annotations

import logging

from task_relay.extraction.classifier import PLAIN_MEDIA_TYPE, classify_content_type
from task_relay.graph.state import RelayState

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "Task completed, but no text content was found in the response."


def run(state: RelayState) -> RelayState:
    content = state.get("content", "")
    if not content:
        logger.warning("classify event=fallback run_id=%s", state.get("run_id"))
        return {"content": NO_CONTENT_MESSAGE, "media_type": PLAIN_MEDIA_TYPE}

    media_type = classify_content_type(content)
    logger.info("classify event=classified run_id=%s media_type=%s", state.get("run_id"), media_type)
    return {"media_type": media_type}
