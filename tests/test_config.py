"""Environment-driven console settings."""

from pathlib import Path

import pytest

from phoenix_console import config
from phoenix_console.config import ConsoleSettings


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    for name in (
        "PHOENIX_ROOT_AGENT_URL",
        "PHOENIX_JD_GENERATOR_URL",
        "PHOENIX_HTTP_TIMEOUT_SECONDS",
        "PHOENIX_REFRESH_INTERVAL_SECONDS",
        "PHOENIX_AUTH_TOKEN",
        "PHOENIX_AUTH_TOKEN_FILE",
        "PHOENIX_MEMORY_USER_ID",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_local_agents() -> None:
    settings = ConsoleSettings.from_env()

    assert settings.root_agent_url == "http://localhost:8000"
    assert settings.interview_scheduler_url == "http://localhost:8003"
    assert settings.memory_search_url == "http://localhost:8006"
    assert settings.timeout_seconds == 30
    assert settings.auth_token is None
    assert settings.memory_user_id == "web_user"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PHOENIX_ROOT_AGENT_URL", "https://agents.example.com/root/")
    monkeypatch.setenv("PHOENIX_HTTP_TIMEOUT_SECONDS", "12")
    monkeypatch.setenv("PHOENIX_REFRESH_INTERVAL_SECONDS", "not-a-number")
    monkeypatch.setenv("PHOENIX_AUTH_TOKEN_FILE", str(tmp_path / "token"))

    settings = ConsoleSettings.from_env()

    assert settings.root_agent_url == "https://agents.example.com/root"
    assert settings.timeout_seconds == 12
    assert settings.refresh_interval_seconds == 30
    assert settings.auth_token_file == tmp_path / "token"


def test_service_url_rejects_unknown_keys() -> None:
    settings = ConsoleSettings()

    assert settings.service_url("jd_generator") == "http://localhost:8001"
    with pytest.raises(ValueError):
        settings.service_url("payroll")


def test_agent_endpoints_cover_all_four_agents() -> None:
    keys = [key for key, *_ in ConsoleSettings().agent_endpoints()]

    assert keys == list(config.SERVICE_KEYS)
