"""End-to-end relay of one inbound request through the remote task runner.

Terms used in this file:
- Run id: correlation token shared by the trigger call and every poll call.
- Terminal run: a task run whose status is ``ready`` or ``error``.
- Relay response: extracted text plus the media type it should be served as.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from task_relay.config.relay import RelayConfig
from task_relay.graph.nodes.poll import poll_until_terminal
from task_relay.graph.state import initial_state
from task_relay.graph.workflow import build_graph
from task_relay.runs.models import TaskParameters, TaskRun, new_run_id
from task_relay.runs.poller import Sleep, TaskPoller
from task_relay.runs.trigger import TaskTrigger

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


@dataclass(frozen=True)
class RelayResponse:
    body: str
    media_type: str
    run_id: str
    source: str


class Orchestrator:
    """Trigger, poll, select, normalize and classify for one request at a time.

    Instances hold no per-request state, so concurrent requests can share one.
    """

    def __init__(self, *, config: RelayConfig, trigger: TaskTrigger, poller: TaskPoller) -> None:
        self.config = config
        self.trigger = trigger
        self.poller = poller
        self.workflow = build_graph(config=config, trigger=trigger, poller=poller)

    @classmethod
    def from_client(
        cls,
        client: httpx.AsyncClient,
        *,
        config: RelayConfig,
        sleep: Sleep = asyncio.sleep,
    ) -> Orchestrator:
        return cls(
            config=config,
            trigger=TaskTrigger(client),
            poller=TaskPoller(client, sleep=sleep),
        )

    async def handle(
        self,
        parameters: TaskParameters,
        *,
        cancel: asyncio.Event | None = None,
    ) -> RelayResponse:
        run_id = new_run_id()
        logger.info(
            "relay event=start run_id=%s method=%s route=%s",
            run_id,
            parameters.method,
            parameters.route,
        )
        result = await self.workflow.ainvoke(initial_state(run_id, parameters, cancel))

        body = result["content"]
        selection = result.get("selection")
        response = RelayResponse(
            body=body,
            media_type=result["media_type"],
            run_id=run_id,
            source=selection.source if selection is not None else "none",
        )
        logger.info(
            "relay event=completed run_id=%s source=%s media_type=%s telemetry=%s preview=%r",
            run_id,
            response.source,
            response.media_type,
            result.get("telemetry", {}),
            _preview(body),
        )
        return response

    async def run_task(
        self,
        parameters: TaskParameters,
        *,
        cancel: asyncio.Event | None = None,
    ) -> TaskRun:
        """Trigger a run and return its terminal snapshot without extraction."""
        run_id = new_run_id()
        await self.trigger.trigger(self.config.signed_url, parameters, run_id)
        return await poll_until_terminal(self.poller, self.config, run_id, cancel=cancel)


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_CHARS:
        return text
    return text[:PREVIEW_CHARS] + "..."
