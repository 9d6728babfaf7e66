"""Endpoint mapping of the per-agent clients."""

import json
from typing import Any, Dict, List, Mapping, Optional

from phoenix_console.api.services import (
    InterviewSchedulerApi,
    JDGeneratorApi,
    MemorySearchApi,
    ResumeAnalyzerApi,
    RootAgentApi,
)


class RecordingHttp:
    """Stands in for HttpClient and remembers every call."""

    def __init__(self, reply: Any = None) -> None:
        self.reply = reply if reply is not None else {"success": True}
        self.calls: List[tuple] = []

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append(("GET", path, params))
        return self.reply

    def post(self, path: str, payload: Optional[Any] = None) -> Any:
        self.calls.append(("POST", path, payload))
        return self.reply

    def put(self, path: str, payload: Optional[Any] = None) -> Any:
        self.calls.append(("PUT", path, payload))
        return self.reply

    def delete(self, path: str) -> Any:
        self.calls.append(("DELETE", path, None))
        return self.reply

    def upload(self, path: str, files: Dict[str, Any], data: Optional[Dict[str, str]] = None) -> Any:
        self.calls.append(("UPLOAD", path, {"files": files, "data": data}))
        return self.reply


def test_every_agent_exposes_health_status_and_config() -> None:
    for client_cls in (RootAgentApi, JDGeneratorApi, ResumeAnalyzerApi, InterviewSchedulerApi):
        http = RecordingHttp()
        client = client_cls(http)  # type: ignore[arg-type]
        client.get_health()
        client.get_status()
        client.get_config()
        assert [call[1] for call in http.calls] == ["/health", "/status", "/config"]


def test_process_query_omits_missing_context() -> None:
    http = RecordingHttp()
    root = RootAgentApi(http)  # type: ignore[arg-type]

    root.process_query("find python devs")
    root.process_query("find python devs", {"team": "platform"})

    assert http.calls[0] == ("POST", "/process-query", {"query_text": "find python devs"})
    assert http.calls[1][2] == {"query_text": "find python devs", "context": {"team": "platform"}}


def test_workflow_history_passes_limit() -> None:
    http = RecordingHttp()
    RootAgentApi(http).get_workflow_history(25)  # type: ignore[arg-type]

    assert http.calls == [("GET", "/workflows/history", {"limit": 25})]


def test_path_segments_are_quoted() -> None:
    http = RecordingHttp()
    RootAgentApi(http).get_workflow_details("wf/1 2")  # type: ignore[arg-type]

    assert http.calls[0][1] == "/workflows/wf%2F1%202"


def test_upload_job_description_serialises_metadata() -> None:
    http = RecordingHttp()
    jd = JDGeneratorApi(http)  # type: ignore[arg-type]

    jd.upload_job_description(("role.txt", b"content"), {"job_title": "Engineer"})

    method, path, body = http.calls[0]
    assert (method, path) == ("UPLOAD", "/upload")
    assert body["files"] == {"file": ("role.txt", b"content")}
    assert json.loads(body["data"]["metadata"]) == {"job_title": "Engineer"}


def test_analyze_resume_wraps_both_documents() -> None:
    http = RecordingHttp()
    ResumeAnalyzerApi(http).analyze_resume({"content": "cv"}, {"content": "jd"})  # type: ignore[arg-type]

    assert http.calls[0] == (
        "POST",
        "/analyze",
        {"resume_data": {"content": "cv"}, "job_description_data": {"content": "jd"}},
    )


def test_analyze_upload_sends_two_files() -> None:
    http = RecordingHttp()
    ResumeAnalyzerApi(http).analyze_resume_upload(  # type: ignore[arg-type]
        ("cv.txt", b"cv"), ("jd.txt", b"jd"), {"candidate_email": "a@b.c"}
    )

    body = http.calls[0][2]
    assert set(body["files"]) == {"resume_file", "job_description_file"}
    assert body["data"] == {"candidate_email": "a@b.c"}


def test_worker_agents_share_operations_endpoints() -> None:
    http = RecordingHttp()
    scheduler = InterviewSchedulerApi(http)  # type: ignore[arg-type]

    scheduler.get_database_status()
    scheduler.get_recent_events()
    scheduler.publish_event({"type": "ping"})

    assert http.calls == [
        ("GET", "/databases/status", None),
        ("GET", "/events/recent", {"limit": 20}),
        ("POST", "/events/publish", {"type": "ping"}),
    ]


def test_reschedule_and_optimize_drop_empty_optionals() -> None:
    http = RecordingHttp()
    scheduler = InterviewSchedulerApi(http)  # type: ignore[arg-type]

    scheduler.reschedule_interview("7", "2024-02-01", "09:30")
    scheduler.optimize_schedule(["c1"], ["i1"], {"from": "2024-02-01", "to": "2024-02-07"})

    assert http.calls[0] == (
        "POST",
        "/interviews/7/reschedule",
        {"new_date": "2024-02-01", "new_time": "09:30"},
    )
    assert "preferences" not in http.calls[1][2]


def test_cancel_interview_uses_delete() -> None:
    http = RecordingHttp()
    InterviewSchedulerApi(http).cancel_interview("42")  # type: ignore[arg-type]

    assert http.calls == [("DELETE", "/interviews/42", None)]


def test_memory_search_sends_configured_user() -> None:
    http = RecordingHttp({"answer": "hi"})
    search = MemorySearchApi(http, user_id="recruiter-1")  # type: ignore[arg-type]

    search.search("What is Imercfy?")

    assert http.calls == [("POST", "/search", {"query": "What is Imercfy?", "user_id": "recruiter-1"})]
