"""Pydantic models for the task runner wire format.

Terms used in this file:
- Task run: one execution of the remote task, identified by a run id.
- Result entry: one log line emitted by the run, optionally carrying a message.
- Exchange: a role/content pair; ``content`` has no fixed schema.
"""

from __future__ import annotations

import json
import secrets
import time
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskStatus = Literal["pending", "running", "ready", "error"]
TERMINAL_STATUSES: frozenset[str] = frozenset({"ready", "error"})

_RUN_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RUN_ID_SUFFIX_LENGTH = 8


def new_run_id() -> str:
    """Correlation token: epoch milliseconds plus a random base-36 suffix."""
    suffix = "".join(secrets.choice(_RUN_ID_ALPHABET) for _ in range(_RUN_ID_SUFFIX_LENGTH))
    return f"run-{time.time_ns() // 1_000_000}-{suffix}"


class TaskParameters(BaseModel):
    """Parameters sent to the task runner for one inbound request."""

    model_config = ConfigDict(frozen=True)

    route: str
    method: str
    geo: str
    # Raw request body, never parsed.
    body: str = ""
    # JSON-serialized query mapping.
    query: str = "{}"

    @classmethod
    def from_parts(
        cls,
        *,
        route: str,
        method: str,
        geo: str,
        body: str = "",
        query: Mapping[str, str] | None = None,
    ) -> TaskParameters:
        return cls(
            route=route,
            method=method.upper(),
            geo=geo,
            body=body,
            query=json.dumps(dict(query or {}), ensure_ascii=False, separators=(",", ":")),
        )


class Exchange(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Any = None
    # Untyped at the source: string, list of text objects, text object, or any JSON value.
    content: Any = None


class ResultEntry(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    msg: Any = None
    time: Any = None
    level: Any = None
    exchange: Exchange | None = None
    last_message: Exchange | None = Field(default=None, alias="lastMessage")

    @field_validator("exchange", "last_message", mode="before")
    @classmethod
    def _drop_non_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None

    def has_content(self, field: str) -> bool:
        """True when the message carries a ``content`` key, even if it is null."""
        message = getattr(self, field)
        return message is not None and "content" in message.model_fields_set


class TaskRun(BaseModel):
    """Snapshot of a task run returned by the status endpoint."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    status: str
    results: list[ResultEntry] = Field(default_factory=list)
    created_at: Any = None
    modified_at: Any = None

    @field_validator("results", mode="before")
    @classmethod
    def _keep_entry_positions(cls, value: Any) -> Any:
        if value is None or not isinstance(value, list):
            return []
        return [entry if isinstance(entry, Mapping) else {} for entry in value]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
