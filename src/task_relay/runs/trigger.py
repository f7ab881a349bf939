"""Start a task run through the signed work-intake endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from task_relay.runs.errors import TriggerFailure
from task_relay.runs.models import TaskParameters

logger = logging.getLogger(__name__)

RUN_ID_HEADER = "run-id"


class TaskTrigger:
    """Single-shot POST of task parameters; failures are not retried."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def trigger(
        self,
        endpoint: str,
        parameters: TaskParameters,
        run_id: str,
    ) -> dict[str, Any]:
        logger.info("trigger event=start run_id=%s route=%s", run_id, parameters.route)
        try:
            response = await self.client.post(
                endpoint,
                json=parameters.model_dump(mode="json"),
                headers={"Content-Type": "application/json", RUN_ID_HEADER: run_id},
            )
        except httpx.HTTPError as exc:
            raise TriggerFailure(None, str(exc)) from exc

        if not response.is_success:
            logger.error(
                "trigger event=rejected run_id=%s status=%s", run_id, response.status_code
            )
            raise TriggerFailure(response.status_code, response.text)

        try:
            ack = response.json()
        except ValueError:
            logger.warning("trigger event=non_json_ack run_id=%s", run_id)
            return {}
        logger.info("trigger event=accepted run_id=%s status=%s", run_id, response.status_code)
        return ack if isinstance(ack, dict) else {"ack": ack}
