"""Pick the result entry field whose content should be surfaced."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from task_relay.runs.models import ResultEntry, TaskRun

logger = logging.getLogger(__name__)

ContentSource = Literal["lastMessage", "exchange", "msg", "none"]


@dataclass(frozen=True)
class SelectedContent:
    source: ContentSource
    value: Any

    @property
    def found(self) -> bool:
        return self.source != "none"


NO_CONTENT = SelectedContent(source="none", value="")


def select_content(task_run: TaskRun | Mapping[str, Any] | Any) -> SelectedContent:
    """Select content by fixed priority: lastMessage, exchange, final msg.

    The first entry in arrival order wins within each category. Anything
    that cannot be read yields the empty selection.
    """
    try:
        entries = _entries(task_run)
    except Exception as exc:  # noqa: BLE001
        logger.warning("selector event=degraded reason=%s", exc)
        return NO_CONTENT

    if not entries:
        logger.warning("selector event=no_results")
        return NO_CONTENT

    for field, source in (("last_message", "lastMessage"), ("exchange", "exchange")):
        for entry in entries:
            if entry.has_content(field):
                content = getattr(entry, field).content
                logger.info(
                    "selector event=selected source=%s content_type=%s",
                    source,
                    type(content).__name__,
                )
                return SelectedContent(source=source, value=content)

    final_entry = entries[-1]
    if "msg" in final_entry.model_fields_set:
        logger.info("selector event=selected source=msg")
        return SelectedContent(source="msg", value=final_entry.msg)

    logger.warning("selector event=no_content entries=%d", len(entries))
    return NO_CONTENT


def _entries(task_run: Any) -> list[ResultEntry]:
    if isinstance(task_run, TaskRun):
        return list(task_run.results)
    if not isinstance(task_run, Mapping):
        return []
    raw_results = task_run.get("results")
    if not isinstance(raw_results, list):
        return []
    return [
        ResultEntry.model_validate(entry if isinstance(entry, Mapping) else {})
        for entry in raw_results
    ]
