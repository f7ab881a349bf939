"""Poll the task runner until a run reaches a terminal state.

The loop is a two-state machine: POLLING issues one status request per
iteration and sleeps between non-terminal answers; TERMINAL returns the run.
There is no iteration or elapsed-time bound. Callers that need a deadline
pass ``cancel`` or wrap the call in ``asyncio.wait_for``.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError

from task_relay.runs.errors import PollCancelled, PollFailure
from task_relay.runs.models import TaskRun

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
SESSION_COOKIE = "sessionId"
PREVIEW_CHARS = 100


class PollState(enum.Enum):
    POLLING = "polling"
    TERMINAL = "terminal"


def build_poll_url(base_url: str, profile: str, task_name: str, run_id: str) -> str:
    return f"{base_url.rstrip('/')}/api/runs/~/{profile}/{task_name}/{run_id}"


class TaskPoller:
    def __init__(self, client: httpx.AsyncClient, *, sleep: Sleep = asyncio.sleep) -> None:
        self.client = client
        self.sleep = sleep

    async def poll(
        self,
        base_url: str,
        profile: str,
        task_name: str,
        run_id: str,
        interval_ms: int,
        session_token: str | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> TaskRun:
        url = build_poll_url(base_url, profile, task_name, run_id)
        headers = {"Cookie": f"{SESSION_COOKIE}={session_token}"} if session_token else {}
        logger.info(
            "poll event=start task=%s run_id=%s authenticated=%s",
            task_name,
            run_id,
            bool(session_token),
        )

        state = PollState.POLLING
        task_run: TaskRun | None = None
        attempts = 0
        while state is PollState.POLLING:
            if cancel is not None and cancel.is_set():
                raise PollCancelled(None, f"run_id={run_id} after {attempts} polls")
            attempts += 1
            task_run = await self._fetch(url, headers)
            logger.info(
                "poll event=status run_id=%s attempt=%d status=%s",
                run_id,
                attempts,
                task_run.status,
            )
            if task_run.is_terminal:
                state = PollState.TERMINAL
            else:
                await self.sleep(interval_ms / 1000.0)

        _log_results(task_run)
        return task_run

    async def _fetch(self, url: str, headers: dict[str, str]) -> TaskRun:
        try:
            response = await self.client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise PollFailure(None, str(exc)) from exc

        if not response.is_success:
            raise PollFailure(response.status_code, response.text)

        try:
            return TaskRun.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise PollFailure(response.status_code, f"malformed task run: {exc}") from exc


def _log_results(task_run: TaskRun) -> None:
    for entry in task_run.results:
        logger.info("poll event=result level=%s msg=%s", entry.level or "INFO", entry.msg)
        for label, message in (("exchange", entry.exchange), ("last_message", entry.last_message)):
            if message is None:
                continue
            logger.debug(
                "poll event=%s role=%s content=%s",
                label,
                message.role,
                _preview(message.content),
            )


def _preview(content: object) -> str:
    if not isinstance(content, str):
        return "[complex object]"
    if len(content) <= PREVIEW_CHARS:
        return content
    return content[:PREVIEW_CHARS] + "..."
