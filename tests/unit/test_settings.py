from task_relay.config.relay import RelayConfig
from task_relay.config.settings import Settings


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("TASK_RELAY_SIGNED_URL", "https://runner.test/trigger")
    monkeypatch.setenv("TASK_RELAY_API_BASE_URL", "https://runner.test")
    monkeypatch.setenv("TASK_RELAY_POLL_INTERVAL_MS", "250")
    monkeypatch.setenv("TASK_RELAY_SESSION_ID", "abc")

    settings = Settings()
    config = RelayConfig.from_settings(settings)

    assert settings.missing_required() == []
    assert config.poll_interval_ms == 250
    assert config.session_id == "abc"
    assert config.poll_timeout_s is None


def test_defaults_and_missing_required(monkeypatch) -> None:
    for name in ("TASK_RELAY_SIGNED_URL", "TASK_RELAY_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.poll_interval_ms == 5000
    assert settings.default_geo == "SFO"
    assert settings.cache_ttl_s == 3600
    assert settings.missing_required() == ["TASK_RELAY_SIGNED_URL", "TASK_RELAY_API_BASE_URL"]
