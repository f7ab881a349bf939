"""Typed state contract for the relay workflow."""

import asyncio
from typing import Any, TypedDict

from task_relay.extraction.selector import SelectedContent
from task_relay.runs.models import TaskParameters, TaskRun


class RelayState(TypedDict, total=False):
    run_id: str
    parameters: TaskParameters
    cancel: asyncio.Event | None
    ack: dict[str, Any]
    task_run: TaskRun
    selection: SelectedContent
    content: str
    media_type: str
    telemetry: dict[str, Any]


def initial_state(
    run_id: str,
    parameters: TaskParameters,
    cancel: asyncio.Event | None = None,
) -> RelayState:
    return {
        "run_id": run_id,
        "parameters": parameters,
        "cancel": cancel,
        "ack": {},
        "content": "",
        "media_type": "",
        "telemetry": {},
    }
