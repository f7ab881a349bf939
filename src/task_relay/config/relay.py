"""Per-orchestrator configuration derived from settings."""

from __future__ import annotations

from dataclasses import dataclass

from task_relay.config.settings import Settings


@dataclass(frozen=True)
class RelayConfig:
    signed_url: str
    api_base_url: str
    profile: str
    task_name: str
    poll_interval_ms: int = 5000
    session_id: str = ""
    poll_timeout_s: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> RelayConfig:
        return cls(
            signed_url=settings.signed_url,
            api_base_url=settings.api_base_url,
            profile=settings.profile,
            task_name=settings.task_name,
            poll_interval_ms=settings.poll_interval_ms,
            session_id=settings.session_id,
            poll_timeout_s=settings.poll_timeout_s,
        )
