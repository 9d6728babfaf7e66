"""Loading/error/data containers wrapping the agent clients for the UI."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, List, Mapping, Optional, TypeVar

import structlog

from phoenix_console.api.facade import HRPhoenixApi
from phoenix_console.api.models import (
    SearchResult,
    parse_analysis_history,
    parse_analysis_result,
    parse_candidates,
    parse_email_templates,
    parse_generated_job_description,
    parse_interviews,
    parse_job_descriptions,
    parse_search_result,
    parse_templates,
    parse_workflows,
)
from phoenix_console.api.services import UploadFile
from phoenix_console.state.polling import PollingHandle

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ApiState:
    is_loading: bool = False
    error: Optional[str] = None
    data: Any = None


class StateController:
    """Run client calls while tracking ``is_loading``, ``error`` and ``data``.

    Subclasses name a ``default_action`` that ``mount`` fetches when
    ``auto_fetch`` is set and that polling re-runs every ``refresh_interval``
    seconds.
    """

    default_action: str = ""

    def __init__(
        self,
        api: HRPhoenixApi,
        auto_fetch: bool = False,
        refresh_interval: Optional[float] = None,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        initial_data: Any = None,
    ) -> None:
        self.api = api
        self.auto_fetch = auto_fetch
        self.refresh_interval = refresh_interval
        self.on_success = on_success
        self.on_error = on_error
        self._initial = ApiState(data=initial_data)
        self._state = self._initial
        self._lock = Lock()
        self._pollers: List[PollingHandle] = []

    @property
    def state(self) -> ApiState:
        with self._lock:
            return self._state

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @property
    def data(self) -> Any:
        return self.state.data

    def _update(self, **changes: Any) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)

    def _run(self, call: Callable[[], T], failure_message: str) -> T:
        self._update(is_loading=True)
        try:
            result = call()
        except Exception as exc:
            message = str(exc).strip() or failure_message
            self._update(is_loading=False, error=message)
            logger.warning(
                "action-failed",
                controller=type(self).__name__,
                error=message,
                error_type=type(exc).__name__,
            )
            if self.on_error:
                self.on_error(message)
            raise
        self._update(is_loading=False, error=None, data=result)
        if self.on_success:
            self.on_success(result)
        return result

    def refresh(self) -> Any:
        """Re-run the default action."""
        return getattr(self, self.default_action)()

    def mount(self) -> Optional[PollingHandle]:
        """Auto-fetch once and start polling as configured."""
        if self.auto_fetch:
            try:
                self.refresh()
            except Exception:
                # already stored in ``error``; the page renders it
                pass
        if self.refresh_interval:
            return self.start_polling(self.refresh_interval)
        return None

    def start_polling(self, interval: Optional[float] = None) -> PollingHandle:
        seconds = interval or self.refresh_interval
        if not seconds:
            raise ValueError("No refresh interval configured")
        handle = PollingHandle(self.refresh, seconds, name=f"{type(self).__name__}-poller")
        self._pollers.append(handle)
        return handle.start()

    def unmount(self) -> None:
        """Cancel every poller this controller started."""
        pollers, self._pollers = self._pollers, []
        for handle in pollers:
            handle.cancel()

    def reset(self) -> None:
        with self._lock:
            self._state = self._initial


class RootAgentState(StateController):
    default_action = "check_health"

    def check_health(self) -> Any:
        return self._run(self.api.root_agent.get_health, "Health check failed")

    def process_query(self, query: str, context: Optional[Mapping[str, Any]] = None) -> Any:
        return self._run(
            lambda: self.api.root_agent.process_query(query, context), "Query processing failed"
        )

    def get_deployment_status(self) -> Any:
        return self._run(
            self.api.root_agent.get_deployment_status, "Failed to get deployment status"
        )

    def get_workflow_history(self, limit: int = 10) -> Any:
        return self._run(
            lambda: parse_workflows(self.api.root_agent.get_workflow_history(limit)),
            "Failed to get workflow history",
        )


class WorkflowHistoryState(RootAgentState):
    default_action = "get_workflow_history"


class JDGeneratorState(StateController):
    default_action = "get_job_descriptions"

    def get_job_descriptions(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._run(
            lambda: parse_job_descriptions(self.api.jd_generator.get_job_descriptions(params)),
            "Failed to get job descriptions",
        )

    def generate_job_description(self, request: Mapping[str, Any]) -> Any:
        return self._run(
            lambda: parse_generated_job_description(
                self.api.jd_generator.generate_job_description(request)
            ),
            "Job description generation failed",
        )

    def upload_job_description(
        self, file: UploadFile, metadata: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return self._run(
            lambda: self.api.jd_generator.upload_job_description(file, metadata),
            "File upload failed",
        )

    def get_templates(self) -> Any:
        return self._run(
            lambda: parse_templates(self.api.jd_generator.get_templates()),
            "Failed to load templates",
        )


class JDTemplatesState(JDGeneratorState):
    """Template list kept apart from the saved job descriptions."""

    default_action = "get_templates"


class ResumeAnalyzerState(StateController):
    default_action = "get_candidates"

    def get_candidates(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._run(
            lambda: parse_candidates(self.api.resume_analyzer.get_candidates(params)),
            "Failed to get candidates",
        )

    def analyze_resume(
        self, resume_data: Mapping[str, Any], job_description_data: Mapping[str, Any]
    ) -> Any:
        return self._run(
            lambda: parse_analysis_result(
                self.api.resume_analyzer.analyze_resume(resume_data, job_description_data)
            ),
            "Resume analysis failed",
        )

    def analyze_resumes_batch(self, batch_request: Mapping[str, Any]) -> Any:
        return self._run(
            lambda: self.api.resume_analyzer.analyze_resume_batch(batch_request),
            "Batch analysis failed",
        )

    def analyze_resume_upload(
        self,
        resume_file: UploadFile,
        job_description_file: UploadFile,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return self._run(
            lambda: parse_analysis_result(
                self.api.resume_analyzer.analyze_resume_upload(
                    resume_file, job_description_file, metadata
                )
            ),
            "Upload analysis failed",
        )

    def search_similar_resumes(self, query: str, limit: int = 10, threshold: float = 0.7) -> Any:
        return self._run(
            lambda: self.api.resume_analyzer.search_similar_resumes(query, limit, threshold),
            "Search failed",
        )

    def get_analysis_history(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._run(
            lambda: parse_analysis_history(self.api.resume_analyzer.get_analysis_history(params)),
            "Failed to load analysis history",
        )


class AnalysisHistoryState(ResumeAnalyzerState):
    default_action = "get_analysis_history"


class InterviewSchedulerState(StateController):
    default_action = "get_interviews"

    def get_interviews(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._run(
            lambda: parse_interviews(self.api.interview_scheduler.get_interviews(params)),
            "Failed to get interviews",
        )

    def schedule_interview(self, request: Mapping[str, Any]) -> Any:
        return self._run(
            lambda: self.api.interview_scheduler.schedule_interview(request),
            "Interview scheduling failed",
        )

    def schedule_interviews_batch(self, batch_request: Mapping[str, Any]) -> Any:
        return self._run(
            lambda: self.api.interview_scheduler.schedule_interviews_batch(batch_request),
            "Batch scheduling failed",
        )

    def get_candidate_availability(
        self, candidate_id: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return self._run(
            lambda: self.api.interview_scheduler.get_candidate_availability(candidate_id, params),
            "Failed to get candidate availability",
        )

    def get_email_templates(self) -> Any:
        return self._run(
            lambda: parse_email_templates(self.api.interview_scheduler.get_email_templates()),
            "Failed to load email templates",
        )


class EmailTemplatesState(InterviewSchedulerState):
    default_action = "get_email_templates"


class SystemState(StateController):
    default_action = "check_all_services_health"

    def check_all_services_health(self) -> Any:
        return self._run(self.api.check_all_services_health, "Health check failed")

    def get_all_configs(self) -> Any:
        return self._run(self.api.get_all_configs, "Failed to get configurations")

    def check_agents(self) -> Any:
        return self._run(self.api.check_agents, "Failed to check agents")


class MemorySearchState(StateController):
    """Memory search keeping the five most recent answers, newest first."""

    history_size = 5

    def __init__(self, api: HRPhoenixApi, **kwargs: Any) -> None:
        super().__init__(api, **kwargs)
        self.history: List[SearchResult] = []
        self.failure: Optional[SearchResult] = None

    @property
    def visible_result(self) -> Optional[SearchResult]:
        """The answer to show: the apology card after a failure, else the last hit."""
        return self.failure or self.data

    def search(self, query: str) -> Optional[SearchResult]:
        if not query.strip():
            return None
        try:
            result = self._run(
                lambda: parse_search_result(self.api.memory_search.search(query.strip())),
                "Search failed",
            )
        except Exception:
            self.failure = SearchResult(
                answer="Sorry, I encountered an error while searching. Please try again.",
                source="error",
                category="error",
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
            raise
        self.failure = None
        self.history = [result, *self.history][: self.history_size]
        return result
