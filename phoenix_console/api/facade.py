"""Aggregate access to every agent: one object, fan-out reads, degraded health."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

import requests
import structlog

from phoenix_console.api.concurrency import settle_all
from phoenix_console.api.errors import ApiError
from phoenix_console.api.http import (
    EnvTokenProvider,
    FileTokenProvider,
    HttpClient,
    StaticTokenProvider,
    TokenProvider,
    chain_providers,
)
from phoenix_console.api.models import (
    AgentState,
    AgentStatus,
    HealthStatus,
    ServiceHealthReport,
    parse_analysis_history,
    parse_job_descriptions,
)
from phoenix_console.api.services import (
    InterviewSchedulerApi,
    JDGeneratorApi,
    MemorySearchApi,
    ResumeAnalyzerApi,
    RootAgentApi,
)
from phoenix_console.config import (
    INTERVIEW_SCHEDULER,
    JD_GENERATOR,
    RESUME_ANALYZER,
    ROOT_AGENT,
    SERVICE_KEYS,
    ConsoleSettings,
)

logger = structlog.get_logger(__name__)


def default_token_provider(settings: ConsoleSettings) -> TokenProvider:
    """Explicit token first, then the environment, then the persisted token file."""
    return chain_providers(
        StaticTokenProvider(settings.auth_token),
        EnvTokenProvider(),
        FileTokenProvider(settings.auth_token_file),
    )


class HRPhoenixApi:
    """Compose the four agent clients plus memory search."""

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or ConsoleSettings.from_env()
        provider = token_provider or default_token_provider(self.settings)
        session = session or requests.Session()

        def http(service: str, base_url: str) -> HttpClient:
            return HttpClient(
                base_url,
                timeout=self.settings.timeout_seconds,
                token_provider=provider,
                session=session,
                service=service,
            )

        self.root_agent = RootAgentApi(http(ROOT_AGENT, self.settings.root_agent_url))
        self.jd_generator = JDGeneratorApi(http(JD_GENERATOR, self.settings.jd_generator_url))
        self.resume_analyzer = ResumeAnalyzerApi(
            http(RESUME_ANALYZER, self.settings.resume_analyzer_url)
        )
        self.interview_scheduler = InterviewSchedulerApi(
            http(INTERVIEW_SCHEDULER, self.settings.interview_scheduler_url)
        )
        self.memory_search = MemorySearchApi(
            http("memory_search", self.settings.memory_search_url),
            user_id=self.settings.memory_user_id,
        )

    @classmethod
    def from_clients(
        cls,
        root_agent: Any,
        jd_generator: Any,
        resume_analyzer: Any,
        interview_scheduler: Any,
        memory_search: Any = None,
        settings: Optional[ConsoleSettings] = None,
    ) -> "HRPhoenixApi":
        api = cls.__new__(cls)
        api.settings = settings or ConsoleSettings()
        api.root_agent = root_agent
        api.jd_generator = jd_generator
        api.resume_analyzer = resume_analyzer
        api.interview_scheduler = interview_scheduler
        api.memory_search = memory_search
        return api

    @property
    def services(self) -> Dict[str, Any]:
        return {
            ROOT_AGENT: self.root_agent,
            JD_GENERATOR: self.jd_generator,
            RESUME_ANALYZER: self.resume_analyzer,
            INTERVIEW_SCHEDULER: self.interview_scheduler,
        }

    def _fan_out(self, method: str) -> Dict[str, Any]:
        clients = self.services
        calls: List[Callable[[], Any]] = [getattr(clients[key], method) for key in SERVICE_KEYS]
        outcomes = settle_all(calls)
        return dict(zip(SERVICE_KEYS, outcomes))

    def check_all_services_health(self) -> ServiceHealthReport:
        """Probe every agent; a down agent degrades the report instead of failing it."""
        try:
            outcomes = self._fan_out("get_health")
        except Exception as exc:
            logger.exception("fan-out-failed", operation="health", error=str(exc))
            return ServiceHealthReport.unknown()

        statuses = {
            key: HealthStatus.HEALTHY if outcome.ok else HealthStatus.UNHEALTHY
            for key, outcome in outcomes.items()
        }
        overall = (
            HealthStatus.HEALTHY
            if all(outcome.ok for outcome in outcomes.values())
            else HealthStatus.DEGRADED
        )
        for key, outcome in outcomes.items():
            if not outcome.ok:
                logger.warning("service-unhealthy", service=key, error=str(outcome.error))
        return ServiceHealthReport(**statuses, overall=overall)

    def get_all_configs(self) -> Dict[str, Any]:
        """Fetch each agent's config; unreachable agents map to ``None``."""
        try:
            outcomes = self._fan_out("get_config")
        except Exception as exc:
            logger.exception("fan-out-failed", operation="config", error=str(exc))
            return {}
        return {key: outcome.value if outcome.ok else None for key, outcome in outcomes.items()}

    def check_agents(self) -> List[AgentStatus]:
        """Per-agent reachability with response times for the overview page."""
        endpoints = self.settings.agent_endpoints()
        clients = self.services
        calls = [lambda key=key: clients[key].http.probe("/health") for key, *_ in endpoints]
        checked_at = datetime.now(timezone.utc).isoformat()
        try:
            outcomes = settle_all(calls)
        except Exception as exc:
            logger.exception("fan-out-failed", operation="agents", error=str(exc))
            return [
                AgentStatus(key=key, name=name, url=url, description=description, detail=str(exc))
                for key, name, url, description in endpoints
            ]

        statuses: List[AgentStatus] = []
        for (key, name, url, description), outcome in zip(endpoints, outcomes):
            if outcome.ok:
                statuses.append(
                    AgentStatus(
                        key=key,
                        name=name,
                        url=url,
                        description=description,
                        status=AgentState.ONLINE,
                        response_time_ms=float(outcome.value or 0.0),
                        last_seen=checked_at,
                    )
                )
                continue
            error = outcome.error
            answered = isinstance(error, ApiError) and not error.unreachable
            statuses.append(
                AgentStatus(
                    key=key,
                    name=name,
                    url=url,
                    description=description,
                    status=AgentState.ERROR if answered else AgentState.OFFLINE,
                    last_seen=checked_at,
                    detail=str(error),
                )
            )
        return statuses

    def people_stats(self) -> Mapping[str, int]:
        """Count saved job descriptions and analysed candidates."""
        outcomes = settle_all(
            [
                lambda: parse_job_descriptions(self.jd_generator.get_job_descriptions()),
                lambda: parse_analysis_history(self.resume_analyzer.get_analysis_history()),
            ]
        )
        jobs, history = outcomes
        for label, outcome in (("job_descriptions", jobs), ("analysis_history", history)):
            if not outcome.ok:
                logger.warning("people-stats-partial", source=label, error=str(outcome.error))
        return {
            "active_jobs": len(jobs.value) if jobs.ok and jobs.value is not None else 0,
            "total_candidates": len(history.value) if history.ok and history.value is not None else 0,
        }
