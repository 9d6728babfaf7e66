"""View-models mirrored from agent JSON, plus the parse step that builds them."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from phoenix_console.api.errors import ApiError, SchemaMismatch

ModelT = TypeVar("ModelT", bound=BaseModel)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"
    DEGRADED = "degraded"


class AgentState(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    ERROR = "error"


class ViewModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null and absent fields both fall back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ApiResponse(ViewModel):
    """The ``{success, data, message, error}`` envelope most agents reply with."""

    success: bool = False
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiResponse":
        if not isinstance(payload, dict):
            raise SchemaMismatch(f"Expected a response envelope, got {type(payload).__name__}")
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise SchemaMismatch(f"Malformed response envelope: {exc.error_count()} invalid field(s)") from exc


def require_success(payload: Any, failure_message: str = "Request failed") -> Dict[str, Any]:
    """Return ``payload`` only when its envelope reports success."""
    envelope = ApiResponse.from_payload(payload)
    if not envelope.success:
        raise ApiError(envelope.message or envelope.error or failure_message, kind="http")
    return payload


class ServiceHealthReport(ViewModel):
    root_agent: HealthStatus = HealthStatus.UNKNOWN
    jd_generator: HealthStatus = HealthStatus.UNKNOWN
    resume_analyzer: HealthStatus = HealthStatus.UNKNOWN
    interview_scheduler: HealthStatus = HealthStatus.UNKNOWN
    overall: HealthStatus = HealthStatus.UNKNOWN

    @classmethod
    def unknown(cls) -> "ServiceHealthReport":
        return cls(overall=HealthStatus.UNHEALTHY)

    def as_dict(self) -> Dict[str, str]:
        return {key: value.value for key, value in self.model_dump().items()}


class AgentStatus(ViewModel):
    key: str
    name: str
    url: str
    description: str = ""
    status: AgentState = AgentState.OFFLINE
    response_time_ms: float = 0.0
    last_seen: str = ""
    detail: str = ""


class SavedJobDescription(ViewModel):
    id: str = ""
    title: str = ""
    company: str = ""
    created_at: str = ""
    filename: str = ""
    job_title: str = ""
    company_name: str = ""
    content: str = ""


class JobTemplate(ViewModel):
    id: str = ""
    title: str = ""
    department: str = ""
    level: str = ""
    experience_required: str = ""
    education: str = ""
    description: str = ""
    responsibilities: List[str] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    salary_range: str = ""
    benefits: List[str] = Field(default_factory=list)
    growth_opportunities: List[str] = Field(default_factory=list)
    category: str = ""


class GeneratedJobDescription(ViewModel):
    success: bool = False
    job_description: str = ""
    job_id: str = ""
    message: str = ""
    error: Optional[str] = None
    generated_at: str = ""


class SkillMatch(ViewModel):
    skill: str
    match: bool = False


class AnalysisResult(ViewModel):
    score: float = 0.0
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    skills_match: List[SkillMatch] = Field(default_factory=list)
    job_skills: List[str] = Field(default_factory=list)


class AnalysisHistoryEntry(ViewModel):
    id: str = ""
    candidate_name: str = ""
    job_title: str = ""
    score: float = 0.0
    date: str = ""
    status: str = ""


class Candidate(ViewModel):
    id: str = ""
    name: str = ""
    email: str = ""
    job_title: str = ""
    score: float = 0.0
    status: str = ""
    years_experience: float = 0.0


class Interview(ViewModel):
    id: str = ""
    candidate_name: str = ""
    job_title: str = ""
    date: str = ""
    time: str = ""
    type: str = ""
    status: str = ""


class EmailTemplate(ViewModel):
    template_id: str = ""
    name: str = ""
    subject: str = ""
    template_type: str = ""


class WorkflowSummary(ViewModel):
    id: str = ""
    # older orchestrator builds echoed the request field name
    query: str = Field("", validation_alias=AliasChoices("query", "query_text"))
    status: str = ""
    created_at: str = ""


class SearchResult(ViewModel):
    answer: str = ""
    source: str = ""
    confidence: float = 0.0
    category: str = ""
    memory_type: Optional[str] = None
    sources_count: int = 0
    related_topics: List[str] = Field(default_factory=list)
    timestamp: str = ""

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


def _coerce_ids(item: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    # Agents hand out numeric and string identifiers interchangeably.
    coerced = dict(item)
    for name in fields:
        if isinstance(coerced.get(name), (int, float)) and not isinstance(coerced.get(name), bool):
            coerced[name] = str(coerced[name])
    return coerced


def _validate(model: Type[ModelT], item: Any, what: str) -> ModelT:
    if not isinstance(item, dict):
        raise SchemaMismatch(f"Expected {what} object, got {type(item).__name__}")
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        raise SchemaMismatch(f"Malformed {what}: {exc.errors()[0]['loc']} {exc.errors()[0]['msg']}") from exc


def _unwrap_list(payload: Any, keys: Sequence[str], what: str) -> List[Any]:
    """Accept a bare list or a dict wrapping the list under one of ``keys``."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            if key in payload:
                value = payload[key]
                if value is None:
                    return []
                if isinstance(value, list):
                    return value
                raise SchemaMismatch(f"Expected '{key}' to be a list of {what}")
    raise SchemaMismatch(f"Unexpected {what} payload: {type(payload).__name__}")


def _parse_list(
    payload: Any, model: Type[ModelT], keys: Sequence[str], what: str, id_fields: Sequence[str] = ("id",)
) -> List[ModelT]:
    items = _unwrap_list(payload, keys, what)
    return [
        _validate(model, _coerce_ids(item, id_fields) if isinstance(item, dict) else item, what)
        for item in items
    ]


def parse_job_descriptions(payload: Any) -> List[SavedJobDescription]:
    """Flatten stored JD records (``filename`` + ``metadata``) into rows."""
    records = _unwrap_list(payload, ("job_descriptions", "data"), "job description")
    parsed: List[SavedJobDescription] = []
    for record in records:
        if not isinstance(record, dict):
            raise SchemaMismatch("Expected job description object")
        metadata = record.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise SchemaMismatch("Expected job description metadata object")
        filename = str(record.get("filename") or "")
        job_title = metadata.get("job_title") or ""
        company_name = metadata.get("company_name") or ""
        parsed.append(
            _validate(
                SavedJobDescription,
                {
                    "id": str(record.get("id") or filename),
                    "title": job_title or filename,
                    "company": company_name or "Unknown Company",
                    "created_at": metadata.get("created_at") or metadata.get("generated_at") or "",
                    "filename": filename,
                    "job_title": job_title,
                    "company_name": company_name,
                    "content": record.get("content") or "",
                },
                "job description",
            )
        )
    return parsed


def parse_templates(payload: Any) -> List[JobTemplate]:
    return _parse_list(payload, JobTemplate, ("templates",), "job template")


def parse_generated_job_description(payload: Any) -> GeneratedJobDescription:
    require_success(payload, "Failed to generate job description")
    result = _validate(GeneratedJobDescription, _coerce_ids(payload, ("job_id",)), "generated job description")
    if not result.message:
        result.message = "Job description generated successfully"
    return result


def parse_analysis_result(payload: Any) -> AnalysisResult:
    """Read the score card, nested under ``analysis_result`` on newer analyzers."""
    require_success(payload, "Analysis failed")
    body = payload.get("analysis_result") or payload
    if not isinstance(body, dict):
        raise SchemaMismatch("Expected analysis_result object")
    skills = body.get("skills_analysis") or {}
    if not isinstance(skills, dict):
        raise SchemaMismatch("Expected skills_analysis object")
    job_skills = skills.get("job_skills") or []
    resume_skills = skills.get("resume_skills") or []
    if not isinstance(job_skills, list) or not isinstance(resume_skills, list):
        raise SchemaMismatch("Expected skill lists in skills_analysis")
    return _validate(
        AnalysisResult,
        {
            "score": body.get("overall_score") or 0,
            "strengths": body.get("strengths") or [],
            "weaknesses": body.get("weaknesses") or [],
            "recommendations": body.get("recommendations") or [],
            "skills_match": [{"skill": skill, "match": skill in job_skills} for skill in resume_skills],
            "job_skills": job_skills,
        },
        "analysis result",
    )


def parse_analysis_history(payload: Any) -> List[AnalysisHistoryEntry]:
    return _parse_list(payload, AnalysisHistoryEntry, ("history",), "analysis history entry")


def parse_candidates(payload: Any) -> List[Candidate]:
    return _parse_list(payload, Candidate, ("candidates", "data"), "candidate")


def parse_interviews(payload: Any) -> List[Interview]:
    return _parse_list(payload, Interview, ("interviews", "data"), "interview")


def parse_email_templates(payload: Any) -> List[EmailTemplate]:
    return _parse_list(payload, EmailTemplate, ("templates",), "email template", ("template_id",))


def parse_workflows(payload: Any) -> List[WorkflowSummary]:
    return _parse_list(payload, WorkflowSummary, ("data", "workflows", "history"), "workflow")


def parse_search_result(payload: Any) -> SearchResult:
    return _validate(SearchResult, payload, "search result")
