"""One client per agent service; each method maps to a single REST endpoint."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from phoenix_console.api.http import HttpClient

# (filename, content) or (filename, content, content_type)
UploadFile = Union[Tuple[str, Union[bytes, BinaryIO]], Tuple[str, Union[bytes, BinaryIO], str]]


def _segment(value: str) -> str:
    return quote(str(value).strip(), safe="")


class BaseServiceApi:
    """Shared health, status and config endpoints."""

    def __init__(self, http: HttpClient) -> None:
        self.http = http

    def get_health(self) -> Any:
        return self.http.get("/health")

    def get_status(self) -> Any:
        return self.http.get("/status")

    def get_config(self) -> Any:
        return self.http.get("/config")


class OperationsMixin:
    """Database, memory and event endpoints exposed by the worker agents."""

    http: HttpClient

    def get_database_status(self) -> Any:
        return self.http.get("/databases/status")

    def refresh_database_connections(self) -> Any:
        return self.http.post("/databases/refresh")

    def get_memory_stats(self) -> Any:
        return self.http.get("/memory/stats")

    def clear_memory(self) -> Any:
        return self.http.post("/memory/clear")

    def get_recent_events(self, limit: int = 20) -> Any:
        return self.http.get("/events/recent", params={"limit": limit})

    def publish_event(self, event: Mapping[str, Any]) -> Any:
        return self.http.post("/events/publish", dict(event))


class RootAgentApi(BaseServiceApi):
    """Central orchestrator: query routing and workflow bookkeeping."""

    def get_deployment_status(self) -> Any:
        return self.http.get("/deployment-status")

    def process_query(self, query: str, context: Optional[Mapping[str, Any]] = None) -> Any:
        payload: Dict[str, Any] = {"query_text": query}
        if context is not None:
            payload["context"] = dict(context)
        return self.http.post("/process-query", payload)

    def get_active_workflows(self) -> Any:
        return self.http.get("/workflows/active")

    def get_workflow_history(self, limit: int = 10) -> Any:
        return self.http.get("/workflows/history", params={"limit": limit})

    def get_workflow_details(self, workflow_id: str) -> Any:
        return self.http.get(f"/workflows/{_segment(workflow_id)}")

    def get_agents_status(self) -> Any:
        return self.http.get("/agents/status")

    def test_agent_connection(self, agent_name: str) -> Any:
        return self.http.post(f"/agents/{_segment(agent_name)}/test")

    def get_memory_stats(self) -> Any:
        return self.http.get("/memory/stats")

    def clear_memory(self) -> Any:
        return self.http.post("/memory/clear")


class JDGeneratorApi(BaseServiceApi):
    """Job description generation, storage, templates and knowledge base."""

    def generate_job_description(self, request: Mapping[str, Any]) -> Any:
        return self.http.post("/generate", dict(request))

    def generate_job_description_advanced(self, request: Mapping[str, Any]) -> Any:
        return self.http.post("/generate/advanced", dict(request))

    def generate_job_description_rag(self, request: Mapping[str, Any]) -> Any:
        return self.http.post("/generate/rag", dict(request))

    def get_job_descriptions(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get("/job-descriptions", params=params)

    def get_job_description(self, jd_id: str) -> Any:
        return self.http.get(f"/job-descriptions/{_segment(jd_id)}")

    def update_job_description(self, jd_id: str, updates: Mapping[str, Any]) -> Any:
        return self.http.put(f"/job-descriptions/{_segment(jd_id)}", dict(updates))

    def delete_job_description(self, jd_id: str) -> Any:
        return self.http.delete(f"/job-descriptions/{_segment(jd_id)}")

    def get_templates(self) -> Any:
        return self.http.get("/templates")

    def get_template(self, template_id: str) -> Any:
        return self.http.get(f"/templates/{_segment(template_id)}")

    def create_template(self, template: Mapping[str, Any]) -> Any:
        return self.http.post("/templates", dict(template))

    def update_template(self, template_id: str, template: Mapping[str, Any]) -> Any:
        return self.http.put(f"/templates/{_segment(template_id)}", dict(template))

    def delete_template(self, template_id: str) -> Any:
        return self.http.delete(f"/templates/{_segment(template_id)}")

    def get_knowledge_base(self) -> Any:
        return self.http.get("/knowledge-base")

    def add_knowledge_item(self, item: Mapping[str, Any]) -> Any:
        return self.http.post("/knowledge-base", dict(item))

    def update_knowledge_item(self, item_id: str, item: Mapping[str, Any]) -> Any:
        return self.http.put(f"/knowledge-base/{_segment(item_id)}", dict(item))

    def delete_knowledge_item(self, item_id: str) -> Any:
        return self.http.delete(f"/knowledge-base/{_segment(item_id)}")

    def validate_job_description(self, content: str) -> Any:
        return self.http.post("/validate", {"content": content})

    def analyze_job_description(self, jd_id: str) -> Any:
        return self.http.post(f"/job-descriptions/{_segment(jd_id)}/analyze")

    def upload_job_description(
        self, file: UploadFile, metadata: Optional[Mapping[str, Any]] = None
    ) -> Any:
        data = {"metadata": json.dumps(dict(metadata))} if metadata else None
        return self.http.upload("/upload", files={"file": file}, data=data)

    def export_job_description(self, jd_id: str, export_format: str) -> Any:
        return self.http.get(
            f"/job-descriptions/{_segment(jd_id)}/export", params={"format": export_format}
        )


class ResumeAnalyzerApi(OperationsMixin, BaseServiceApi):
    """Resume scoring, vector search and candidate records."""

    def analyze_resume(
        self, resume_data: Mapping[str, Any], job_description_data: Mapping[str, Any]
    ) -> Any:
        return self.http.post(
            "/analyze",
            {
                "resume_data": dict(resume_data),
                "job_description_data": dict(job_description_data),
            },
        )

    def analyze_resume_batch(self, batch_request: Mapping[str, Any]) -> Any:
        return self.http.post("/analyze/batch", dict(batch_request))

    def analyze_resume_upload(
        self,
        resume_file: UploadFile,
        job_description_file: UploadFile,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        data = {str(key): str(value) for key, value in (metadata or {}).items()}
        return self.http.upload(
            "/analyze/upload",
            files={"resume_file": resume_file, "job_description_file": job_description_file},
            data=data or None,
        )

    def get_resumes(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get("/resumes", params=params)

    def get_resume(self, resume_id: str) -> Any:
        return self.http.get(f"/resumes/{_segment(resume_id)}")

    def get_resume_analysis(self, resume_id: str) -> Any:
        return self.http.get(f"/resumes/{_segment(resume_id)}/analysis")

    def search_similar_resumes(self, query: str, limit: int = 10, threshold: float = 0.7) -> Any:
        return self.http.post(
            "/search/similar", {"query": query, "limit": limit, "threshold": threshold}
        )

    def search_by_skills(self, skills: List[str], limit: int = 20, min_score: float = 0.6) -> Any:
        return self.http.post(
            "/search/skills", {"skills": list(skills), "limit": limit, "min_score": min_score}
        )

    def get_analysis_history(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get("/analysis/history", params=params)

    def delete_analysis(self, analysis_id: str) -> Any:
        return self.http.delete(f"/analysis/{_segment(analysis_id)}")

    def get_candidates(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get("/candidates", params=params)

    def get_candidate(self, candidate_id: str) -> Any:
        return self.http.get(f"/candidates/{_segment(candidate_id)}")


class InterviewSchedulerApi(OperationsMixin, BaseServiceApi):
    """Interview scheduling, availability, notifications and calendar sync."""

    def schedule_interview(self, request: Mapping[str, Any]) -> Any:
        return self.http.post("/schedule", dict(request))

    def schedule_interviews_batch(self, batch_request: Mapping[str, Any]) -> Any:
        return self.http.post("/schedule/batch", dict(batch_request))

    def optimize_schedule(
        self,
        candidate_ids: List[str],
        interviewer_ids: List[str],
        date_range: Mapping[str, Any],
        preferences: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        payload: Dict[str, Any] = {
            "candidate_ids": list(candidate_ids),
            "interviewer_ids": list(interviewer_ids),
            "date_range": dict(date_range),
        }
        if preferences is not None:
            payload["preferences"] = dict(preferences)
        return self.http.post("/schedule/optimize", payload)

    def get_interviews(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.http.get("/interviews", params=params)

    def get_interview(self, interview_id: str) -> Any:
        return self.http.get(f"/interviews/{_segment(interview_id)}")

    def update_interview(self, interview_id: str, updates: Mapping[str, Any]) -> Any:
        return self.http.put(f"/interviews/{_segment(interview_id)}", dict(updates))

    def cancel_interview(self, interview_id: str) -> Any:
        return self.http.delete(f"/interviews/{_segment(interview_id)}")

    def reschedule_interview(
        self, interview_id: str, new_date: str, new_time: str, reason: Optional[str] = None
    ) -> Any:
        payload: Dict[str, Any] = {"new_date": new_date, "new_time": new_time}
        if reason:
            payload["reason"] = reason
        return self.http.post(f"/interviews/{_segment(interview_id)}/reschedule", payload)

    def get_candidate_availability(
        self, candidate_id: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return self.http.get(f"/availability/candidates/{_segment(candidate_id)}", params=params)

    def set_candidate_availability(self, candidate_id: str, availability: Mapping[str, Any]) -> Any:
        return self.http.post(f"/availability/candidates/{_segment(candidate_id)}", dict(availability))

    def get_interviewer_availability(
        self, interviewer_id: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return self.http.get(f"/availability/interviewers/{_segment(interviewer_id)}", params=params)

    def set_interviewer_availability(
        self, interviewer_id: str, availability: Mapping[str, Any]
    ) -> Any:
        return self.http.post(
            f"/availability/interviewers/{_segment(interviewer_id)}", dict(availability)
        )

    def get_email_templates(self) -> Any:
        return self.http.get("/templates/email")

    def create_email_template(self, template: Mapping[str, Any]) -> Any:
        return self.http.post("/templates/email", dict(template))

    def send_notification(
        self, interview_id: str, notification_type: str, recipients: List[str]
    ) -> Any:
        return self.http.post(
            "/notifications/send",
            {
                "interview_id": interview_id,
                "notification_type": notification_type,
                "recipients": list(recipients),
            },
        )

    def sync_calendar(self, calendar_type: str, credentials: Mapping[str, Any]) -> Any:
        return self.http.post(
            "/calendar/sync", {"calendar_type": calendar_type, "credentials": dict(credentials)}
        )

    def get_calendar_events(self, calendar_type: str, date_from: str, date_to: str) -> Any:
        return self.http.get(
            "/calendar/events",
            params={"calendar_type": calendar_type, "date_from": date_from, "date_to": date_to},
        )

    def get_scheduling_report(
        self, date_from: str, date_to: str, report_type: str = "summary"
    ) -> Any:
        return self.http.get(
            "/reports/scheduling",
            params={"date_from": date_from, "date_to": date_to, "report_type": report_type},
        )

    def get_scheduling_conflicts(self, date_from: str, date_to: str) -> Any:
        return self.http.get(
            "/reports/conflicts", params={"date_from": date_from, "date_to": date_to}
        )


class MemorySearchApi:
    """Free-text question answering over the knowledge base."""

    def __init__(self, http: HttpClient, user_id: str = "web_user") -> None:
        self.http = http
        self.user_id = user_id

    def search(self, query: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        return self.http.post("/search", {"query": query, "user_id": user_id or self.user_id})
