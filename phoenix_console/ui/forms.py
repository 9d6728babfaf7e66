"""Form checks and request builders used by the Streamlit pages."""

import json
import re
from typing import Any, Dict, List, Mapping, Optional

from phoenix_console.api.errors import ValidationFailure
from phoenix_console.api.models import Candidate, SavedJobDescription


def require_fields(values: Mapping[str, Any]) -> None:
    """Raise :class:`ValidationFailure` naming every blank entry of ``values``."""
    missing = [name for name, value in values.items() if not str(value or "").strip()]
    if missing:
        raise ValidationFailure(missing)


def _experience_band(years: int) -> str:
    if years <= 1:
        return "0-1 years"
    if years <= 3:
        return "2-3 years"
    if years <= 5:
        return "4-5 years"
    return "5+ years"


def _labelled(text: str, label: str) -> Optional[str]:
    match = re.search(rf"{label}:\s*([^,]+)", text, flags=re.IGNORECASE)
    return match.group(1).strip() if match else None


def parse_job_request_text(text: str) -> Dict[str, Any]:
    """Pull job details out of a quick free-text brief.

    ``"Backend Engineer, company: Acme, 4 years, 120000 salary, skills: Python; SQL"``
    yields the title, company, an experience band, a salary range and skills;
    anything unmentioned keeps its default.
    """
    details: Dict[str, Any] = {
        "job_title": "",
        "experience_required": "",
        "salary_range": "",
        "company_name": "Your Company",
        "employment_type": "Full-time",
        "industry": "Technology",
        "location": "Remote",
        "department": "General",
        "skills_required": [],
        "work_location_type": "Remote",
        "education_required": "Bachelor's degree",
        "benefits": [],
        "growth_opportunities": [],
    }
    details["job_title"] = text.split(",")[0].strip()

    company = _labelled(text, "company")
    if company:
        details["company_name"] = company

    salary = re.search(r"(\d+)\s*salary", text, flags=re.IGNORECASE)
    if salary:
        details["salary_range"] = f"${int(salary.group(1)):,}"

    experience = re.search(r"(\d+)\s*year", text, flags=re.IGNORECASE)
    if experience:
        details["experience_required"] = _experience_band(int(experience.group(1)))

    skills = _labelled(text, r"skills?")
    if skills:
        details["skills_required"] = [skill.strip() for skill in skills.split(";") if skill.strip()]

    for field, label in (("department", "department"), ("industry", "industry"), ("location", "location")):
        value = _labelled(text, label)
        if value:
            details[field] = value
    return details


def build_generate_request(details: Mapping[str, Any]) -> Dict[str, Any]:
    """Wrap parsed job details the way ``POST /generate`` expects them."""
    job_details = dict(details)
    job_details["job_title"] = job_details.get("job_title") or "Custom Position"
    job_details["experience_required"] = job_details.get("experience_required") or "To be determined"
    job_details["salary_range"] = job_details.get("salary_range") or "Competitive"
    job_details["education_required"] = job_details.get("education_required") or "Bachelor's degree"
    job_details["department"] = job_details.get("department") or "General"
    job_details["industry"] = job_details.get("industry") or "Technology"
    for key in ("skills_required", "benefits", "growth_opportunities"):
        job_details[key] = list(job_details.get(key) or [])
    return {
        "job_details": job_details,
        "use_knowledge_base": True,
        "include_ai_enhancement": True,
    }


def build_analysis_request(
    resume_text: str, file_name: str, job: SavedJobDescription, candidate_email: str = ""
) -> Dict[str, Dict[str, Any]]:
    """Return ``resume_data`` and ``job_description_data`` for ``POST /analyze``."""
    require_fields({"resume": resume_text, "job description": job.filename or job.id})
    candidate_name = file_name.rsplit(".", 1)[0] if file_name else "Candidate"
    return {
        "resume_data": {
            "content": resume_text,
            "candidate_name": candidate_name,
            "candidate_email": candidate_email,
            "file_name": file_name or f"{candidate_name}_resume.txt",
        },
        "job_description_data": {
            "content": job.content,
            "job_title": job.job_title or job.title,
            "company_name": job.company_name or job.company,
        },
    }


def build_schedule_request(candidate: Candidate, form: Mapping[str, Any]) -> Dict[str, Any]:
    """Combine a shortlisted candidate with the interview form for ``POST /schedule``."""
    require_fields(
        {
            "interview date": form.get("interview_date"),
            "interview time": form.get("interview_time"),
            "interview type": form.get("interview_type"),
            "interviewer": form.get("interviewer_name"),
        }
    )
    try:
        duration = int(form.get("duration") or 60)
    except (TypeError, ValueError):
        duration = 60
    return {
        "candidate": {
            "name": candidate.name,
            "email": candidate.email,
            "phone": "",
            "position": candidate.job_title,
            "experience": 0,
            "resume_score": candidate.score,
        },
        "interview": {
            "date": str(form.get("interview_date")),
            "time": str(form.get("interview_time")),
            "duration": duration,
            "type": form.get("interview_type"),
            "interviewer": form.get("interviewer_name"),
            "location": form.get("location") or "Virtual",
        },
    }


def parse_context(raw: str) -> Optional[Dict[str, Any]]:
    """Decode the optional JSON context typed next to an orchestrator query."""
    if not raw.strip():
        return None
    try:
        context = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Context must be valid JSON: {exc.msg}") from exc
    if not isinstance(context, dict):
        raise ValueError("Context must be a JSON object")
    return context


def status_color(status: str) -> str:
    return {
        "healthy": "green",
        "online": "green",
        "shortlisted": "green",
        "scheduled": "green",
        "completed": "green",
        "degraded": "orange",
        "pending": "orange",
        "unhealthy": "red",
        "error": "red",
        "offline": "red",
    }.get(str(getattr(status, "value", status)).lower(), "gray")


def score_color(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "orange"
    return "red"


def summarize(rows: List[Any], limit: int = 150) -> List[str]:
    """Shorten long answers for history lists."""
    return [text if len(text) <= limit else f"{text[:limit]}..." for text in map(str, rows)]
