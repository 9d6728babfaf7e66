"""Environment-driven settings for the agent endpoints the console talks to."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_REFRESH_INTERVAL_SECONDS = 30
DEFAULT_TOKEN_FILE = Path.home() / ".phoenix_console" / "auth_token"

ROOT_AGENT = "root_agent"
JD_GENERATOR = "jd_generator"
RESUME_ANALYZER = "resume_analyzer"
INTERVIEW_SCHEDULER = "interview_scheduler"
SERVICE_KEYS: Tuple[str, ...] = (ROOT_AGENT, JD_GENERATOR, RESUME_ANALYZER, INTERVIEW_SCHEDULER)


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def _url(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return (value or default).rstrip("/")


@dataclass(frozen=True)
class ConsoleSettings:
    root_agent_url: str = "http://localhost:8000"
    jd_generator_url: str = "http://localhost:8001"
    resume_analyzer_url: str = "http://localhost:8002"
    interview_scheduler_url: str = "http://localhost:8003"
    memory_search_url: str = "http://localhost:8006"
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    refresh_interval_seconds: int = DEFAULT_REFRESH_INTERVAL_SECONDS
    auth_token: Optional[str] = None
    auth_token_file: Path = DEFAULT_TOKEN_FILE
    memory_user_id: str = "web_user"

    @classmethod
    def from_env(cls) -> "ConsoleSettings":
        load_dotenv()
        token = os.environ.get("PHOENIX_AUTH_TOKEN", "").strip() or None
        token_file = os.environ.get("PHOENIX_AUTH_TOKEN_FILE", "").strip()
        return cls(
            root_agent_url=_url("PHOENIX_ROOT_AGENT_URL", "http://localhost:8000"),
            jd_generator_url=_url("PHOENIX_JD_GENERATOR_URL", "http://localhost:8001"),
            resume_analyzer_url=_url("PHOENIX_RESUME_ANALYZER_URL", "http://localhost:8002"),
            interview_scheduler_url=_url("PHOENIX_INTERVIEW_SCHEDULER_URL", "http://localhost:8003"),
            memory_search_url=_url("PHOENIX_MEMORY_SEARCH_URL", "http://localhost:8006"),
            timeout_seconds=_positive_int(
                os.environ.get("PHOENIX_HTTP_TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS
            ),
            refresh_interval_seconds=_positive_int(
                os.environ.get("PHOENIX_REFRESH_INTERVAL_SECONDS"), DEFAULT_REFRESH_INTERVAL_SECONDS
            ),
            auth_token=token,
            auth_token_file=Path(token_file).expanduser() if token_file else DEFAULT_TOKEN_FILE,
            memory_user_id=os.environ.get("PHOENIX_MEMORY_USER_ID", "").strip() or "web_user",
        )

    def service_url(self, key: str) -> str:
        urls = {
            ROOT_AGENT: self.root_agent_url,
            JD_GENERATOR: self.jd_generator_url,
            RESUME_ANALYZER: self.resume_analyzer_url,
            INTERVIEW_SCHEDULER: self.interview_scheduler_url,
        }
        try:
            return urls[key]
        except KeyError as exc:
            raise ValueError(f"Unknown service: {key}") from exc

    def agent_endpoints(self) -> List[Tuple[str, str, str, str]]:
        """Return (key, display name, base URL, description) for each agent."""
        return [
            (ROOT_AGENT, "Root Agent", self.root_agent_url, "Central orchestrator"),
            (JD_GENERATOR, "JD Generator", self.jd_generator_url, "Job description creation"),
            (RESUME_ANALYZER, "Resume Analyzer", self.resume_analyzer_url, "Resume analysis and scoring"),
            (INTERVIEW_SCHEDULER, "Interview Scheduler", self.interview_scheduler_url, "Interview scheduling"),
        ]
