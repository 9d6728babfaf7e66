"""Fan-out behaviour of the HRPhoenixApi facade."""

from itertools import product
from typing import Any, Dict, Iterable, Optional

import pytest

from phoenix_console.api import facade
from phoenix_console.api.errors import ApiError
from phoenix_console.api.facade import HRPhoenixApi
from phoenix_console.api.models import AgentState, HealthStatus
from phoenix_console.config import SERVICE_KEYS


class FakeProbe:
    def __init__(self, error: Optional[Exception] = None, elapsed: float = 12.5) -> None:
        self.error = error
        self.elapsed = elapsed

    def probe(self, path: str = "/health") -> float:
        if self.error:
            raise self.error
        return self.elapsed


class FakeAgent:
    def __init__(self, name: str, fail: bool = False, probe_error: Optional[Exception] = None) -> None:
        self.name = name
        self.fail = fail
        self.http = FakeProbe(probe_error)

    def get_health(self) -> Dict[str, str]:
        if self.fail:
            raise ApiError(f"{self.name} down", service=self.name, kind="network")
        return {"status": "healthy"}

    def get_config(self) -> Dict[str, str]:
        if self.fail:
            raise ApiError(f"{self.name} down", service=self.name, kind="network")
        return {"name": self.name}


def build_api(failing: Iterable[str] = (), **probe_errors: Exception) -> HRPhoenixApi:
    failing = set(failing)
    agents = {
        key: FakeAgent(key, fail=key in failing, probe_error=probe_errors.get(key))
        for key in SERVICE_KEYS
    }
    return HRPhoenixApi.from_clients(**agents)


@pytest.mark.parametrize("failures", list(product([False, True], repeat=4)))
def test_health_aggregation_for_every_failure_subset(failures: tuple) -> None:
    failing = [key for key, failed in zip(SERVICE_KEYS, failures) if failed]
    report = build_api(failing).check_all_services_health()

    for key in SERVICE_KEYS:
        expected = HealthStatus.UNHEALTHY if key in failing else HealthStatus.HEALTHY
        assert getattr(report, key) is expected
    assert report.overall is (HealthStatus.DEGRADED if failing else HealthStatus.HEALTHY)


@pytest.mark.parametrize("key", SERVICE_KEYS)
def test_single_rejection_never_raises(key: str) -> None:
    report = build_api([key]).check_all_services_health()

    assert getattr(report, key) is HealthStatus.UNHEALTHY
    assert report.overall is HealthStatus.DEGRADED


def test_root_agent_down_report_is_exact() -> None:
    report = build_api(["root_agent"]).check_all_services_health()

    assert report.as_dict() == {
        "root_agent": "unhealthy",
        "jd_generator": "healthy",
        "resume_analyzer": "healthy",
        "interview_scheduler": "healthy",
        "overall": "degraded",
    }


def test_unexpected_fan_out_failure_returns_unknown_report(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(calls: Any) -> None:
        raise RuntimeError("event loop unavailable")

    monkeypatch.setattr(facade, "settle_all", boom)

    report = build_api().check_all_services_health()

    assert report.as_dict() == {
        "root_agent": "unknown",
        "jd_generator": "unknown",
        "resume_analyzer": "unknown",
        "interview_scheduler": "unknown",
        "overall": "unhealthy",
    }


def test_get_all_configs_maps_failures_to_none() -> None:
    configs = build_api(["resume_analyzer"]).get_all_configs()

    assert configs == {
        "root_agent": {"name": "root_agent"},
        "jd_generator": {"name": "jd_generator"},
        "resume_analyzer": None,
        "interview_scheduler": {"name": "interview_scheduler"},
    }


def test_get_all_configs_returns_empty_on_unexpected_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(facade, "settle_all", lambda calls: 1 / 0)

    assert build_api().get_all_configs() == {}


def test_check_agents_distinguishes_offline_from_error() -> None:
    api = build_api(
        jd_generator=ApiError("HTTP 500: boom", status_code=500, kind="http"),
        interview_scheduler=ApiError("Unable to reach", kind="network"),
    )

    statuses = {status.key: status for status in api.check_agents()}

    assert statuses["root_agent"].status is AgentState.ONLINE
    assert statuses["root_agent"].response_time_ms == 12.5
    assert statuses["jd_generator"].status is AgentState.ERROR
    assert statuses["jd_generator"].detail == "HTTP 500: boom"
    assert statuses["interview_scheduler"].status is AgentState.OFFLINE
    assert statuses["resume_analyzer"].name == "Resume Analyzer"
    assert all(status.last_seen for status in statuses.values())


def test_people_stats_counts_what_loaded() -> None:
    class Jobs:
        def get_job_descriptions(self) -> Dict[str, Any]:
            return {"job_descriptions": [{"filename": "a.txt", "metadata": {}}, {"filename": "b.txt"}]}

    class Analyzer:
        def get_analysis_history(self) -> Dict[str, Any]:
            raise ApiError("down", kind="network")

    api = HRPhoenixApi.from_clients(None, Jobs(), Analyzer(), None)

    assert api.people_stats() == {"active_jobs": 2, "total_candidates": 0}
