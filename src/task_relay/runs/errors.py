"""Failures raised while talking to the task runner."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for fatal task runner failures."""

    prefix = "Task runner request failed"

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        status = status_code if status_code is not None else "transport-error"
        super().__init__(f"{self.prefix}: {status} {body}")


class TriggerFailure(RelayError):
    prefix = "Failed to trigger task"


class PollFailure(RelayError):
    prefix = "Failed to get task status"


class PollTimeout(PollFailure):
    prefix = "Task did not reach a terminal state in time"


class PollCancelled(PollFailure):
    prefix = "Task polling was cancelled"
