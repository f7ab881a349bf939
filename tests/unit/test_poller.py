import asyncio

import httpx
import pytest

from task_relay.runs.errors import PollCancelled, PollFailure
from task_relay.runs.poller import TaskPoller, build_poll_url

from .fakes import API_BASE_URL, PROFILE, TASK_NAME, FakeTaskRunner, RecordingSleep


def _poll(poller: TaskPoller, session_token: str | None = None, **kwargs):
    return asyncio.run(
        poller.poll(API_BASE_URL, PROFILE, TASK_NAME, "run-1-abc", 250, session_token, **kwargs)
    )


def test_build_poll_url() -> None:
    assert (
        build_poll_url("https://runner.test/", "default", "website", "run-1-abc")
        == "https://runner.test/api/runs/~/default/website/run-1-abc"
    )


def test_poller_stops_at_first_terminal_status(recording_sleep: RecordingSleep) -> None:
    runner = FakeTaskRunner(
        statuses=("pending", "running", "running", "ready", "ready"),
        results=[{"msg": "done"}],
    )
    poller = TaskPoller(runner.client(), sleep=recording_sleep)

    task_run = _poll(poller)

    assert task_run.status == "ready"
    assert task_run.results[0].msg == "done"
    assert len(runner.poll_requests) == 4
    assert recording_sleep.calls == [0.25, 0.25, 0.25]
    assert all(
        request.url.path == "/api/runs/~/default/website/run-1-abc"
        for request in runner.poll_requests
    )


def test_error_status_is_terminal(recording_sleep: RecordingSleep) -> None:
    runner = FakeTaskRunner(statuses=("running", "error"), results=[{"msg": "boom", "level": 50}])
    poller = TaskPoller(runner.client(), sleep=recording_sleep)

    task_run = _poll(poller)

    assert task_run.status == "error"
    assert len(runner.poll_requests) == 2
    assert recording_sleep.calls == [0.25]


def test_session_cookie_attached_only_when_present(recording_sleep: RecordingSleep) -> None:
    runner = FakeTaskRunner()
    _poll(TaskPoller(runner.client(), sleep=recording_sleep), "secret-session")
    assert runner.poll_requests[0].headers["cookie"] == "sessionId=secret-session"

    anonymous = FakeTaskRunner()
    _poll(TaskPoller(anonymous.client(), sleep=recording_sleep), None)
    assert "cookie" not in anonymous.poll_requests[0].headers


def test_non_success_status_fails_immediately(recording_sleep: RecordingSleep) -> None:
    runner = FakeTaskRunner(poll_status=404, poll_body="run not found")

    with pytest.raises(PollFailure) as exc_info:
        _poll(TaskPoller(runner.client(), sleep=recording_sleep))

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Failed to get task status: 404 run not found"
    assert len(runner.poll_requests) == 1
    assert recording_sleep.calls == []


def test_transport_error_fails_without_retry(recording_sleep: RecordingSleep) -> None:
    calls: list[httpx.Request] = []

    def refuse(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    poller = TaskPoller(httpx.AsyncClient(transport=httpx.MockTransport(refuse)), sleep=recording_sleep)

    with pytest.raises(PollFailure) as exc_info:
        _poll(poller)

    assert exc_info.value.status_code is None
    assert len(calls) == 1


def test_malformed_status_body_is_a_poll_failure(recording_sleep: RecordingSleep) -> None:
    runner = FakeTaskRunner(poll_body="<html>maintenance</html>")

    with pytest.raises(PollFailure):
        _poll(TaskPoller(runner.client(), sleep=recording_sleep))


def test_cancel_event_stops_polling_before_next_request() -> None:
    runner = FakeTaskRunner(statuses=("running",))
    cancel = asyncio.Event()

    async def cancel_after_first_wait(_seconds: float) -> None:
        cancel.set()

    poller = TaskPoller(runner.client(), sleep=cancel_after_first_wait)

    with pytest.raises(PollCancelled):
        _poll(poller, cancel=cancel)

    assert len(runner.poll_requests) == 1
