"""Task runner client: trigger, poll and wire models."""

from task_relay.runs.errors import (
    PollCancelled,
    PollFailure,
    PollTimeout,
    RelayError,
    TriggerFailure,
)
from task_relay.runs.models import (
    TERMINAL_STATUSES,
    Exchange,
    ResultEntry,
    TaskParameters,
    TaskRun,
    new_run_id,
)
from task_relay.runs.poller import PollState, TaskPoller, build_poll_url
from task_relay.runs.trigger import TaskTrigger

__all__ = [
    "Exchange",
    "PollCancelled",
    "PollFailure",
    "PollState",
    "PollTimeout",
    "RelayError",
    "ResultEntry",
    "TERMINAL_STATUSES",
    "TaskParameters",
    "TaskPoller",
    "TaskRun",
    "TaskTrigger",
    "TriggerFailure",
    "build_poll_url",
    "new_run_id",
]
