"""Poll node: wait for the triggered run to reach a terminal state."""

from __future__ import annotations

import asyncio
import time

from task_relay.config.relay import RelayConfig
from task_relay.graph.state import RelayState
from task_relay.runs.errors import PollTimeout
from task_relay.runs.models import TaskRun
from task_relay.runs.poller import TaskPoller


async def poll_until_terminal(
    poller: TaskPoller,
    config: RelayConfig,
    run_id: str,
    *,
    cancel: asyncio.Event | None = None,
) -> TaskRun:
    """Run the poll loop, bounded only when ``config.poll_timeout_s`` is set."""
    poll = poller.poll(
        config.api_base_url,
        config.profile,
        config.task_name,
        run_id,
        config.poll_interval_ms,
        config.session_id or None,
        cancel=cancel,
    )
    if config.poll_timeout_s is None:
        return await poll
    try:
        return await asyncio.wait_for(poll, timeout=config.poll_timeout_s)
    except TimeoutError as exc:
        raise PollTimeout(None, f"run_id={run_id} after {config.poll_timeout_s:.1f}s") from exc


def build(*, poller: TaskPoller, config: RelayConfig):
    async def run(state: RelayState) -> RelayState:
        started_at = time.perf_counter()
        task_run = await poll_until_terminal(
            poller,
            config,
            state["run_id"],
            cancel=state.get("cancel"),
        )
        telemetry = dict(state.get("telemetry", {}))
        telemetry["poll"] = {
            "status": task_run.status,
            "results": len(task_run.results),
            "duration_ms": round((time.perf_counter() - started_at) * 1000.0, 2),
        }
        return {"task_run": task_run, "telemetry": telemetry}

    return run
