"""Dispatch node: trigger the remote task run."""

from __future__ import annotations

from task_relay.graph.state import RelayState
from task_relay.runs.trigger import TaskTrigger


def build(*, trigger: TaskTrigger, endpoint: str):
    async def run(state: RelayState) -> RelayState:
        ack = await trigger.trigger(endpoint, state["parameters"], state["run_id"])
        return {"ack": ack}

    return run
