"""Form validation and request builders."""

from datetime import date

import pytest

from phoenix_console.api.errors import ValidationFailure
from phoenix_console.api.models import AgentState, Candidate, HealthStatus, SavedJobDescription
from phoenix_console.ui.forms import (
    build_analysis_request,
    build_generate_request,
    build_schedule_request,
    parse_context,
    parse_job_request_text,
    require_fields,
    score_color,
    status_color,
    summarize,
)


def test_require_fields_names_every_blank_entry() -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        require_fields({"title": "Engineer", "company": " ", "salary": None})

    assert excinfo.value.missing == ("company", "salary")
    assert str(excinfo.value) == "Please fill in all required fields: company, salary"


def test_parse_job_request_text_extracts_details() -> None:
    details = parse_job_request_text(
        "Backend Engineer, company: Acme, 4 years, 120000 salary, skills: Python; SQL, location: Berlin"
    )

    assert details["job_title"] == "Backend Engineer"
    assert details["company_name"] == "Acme"
    assert details["experience_required"] == "4-5 years"
    assert details["salary_range"] == "$120,000"
    assert details["skills_required"] == ["Python", "SQL"]
    assert details["location"] == "Berlin"
    assert details["industry"] == "Technology"


def test_generate_request_fills_defaults() -> None:
    request = build_generate_request({"job_title": "", "skills_required": None})

    assert request["use_knowledge_base"] is True
    assert request["include_ai_enhancement"] is True
    job = request["job_details"]
    assert job["job_title"] == "Custom Position"
    assert job["salary_range"] == "Competitive"
    assert job["skills_required"] == []


def test_analysis_request_combines_resume_and_job() -> None:
    job = SavedJobDescription(
        id="1", title="Engineer", company="Acme", filename="eng.txt", job_title="Engineer",
        company_name="Acme", content="Build things",
    )

    request = build_analysis_request("Ten years of Python", "ada_lovelace.txt", job, "ada@example.com")

    assert request["resume_data"]["candidate_name"] == "ada_lovelace"
    assert request["resume_data"]["candidate_email"] == "ada@example.com"
    assert request["job_description_data"] == {
        "content": "Build things",
        "job_title": "Engineer",
        "company_name": "Acme",
    }


def test_analysis_request_requires_resume_text() -> None:
    with pytest.raises(ValidationFailure):
        build_analysis_request("  ", "", SavedJobDescription(id="1", filename="eng.txt"))


def test_schedule_request_requires_interview_fields() -> None:
    candidate = Candidate(id="1", name="John Doe", email="john@example.com", job_title="Developer", score=85)

    with pytest.raises(ValidationFailure) as excinfo:
        build_schedule_request(candidate, {"interview_date": date(2024, 1, 15), "interview_type": "Technical"})
    assert excinfo.value.missing == ("interview time", "interviewer")

    request = build_schedule_request(
        candidate,
        {
            "interview_date": date(2024, 1, 15),
            "interview_time": "10:00",
            "interview_type": "Technical",
            "interviewer_name": "Grace",
            "duration": "45",
        },
    )
    assert request["candidate"]["resume_score"] == 85
    assert request["interview"]["date"] == "2024-01-15"
    assert request["interview"]["duration"] == 45
    assert request["interview"]["location"] == "Virtual"


def test_parse_context() -> None:
    assert parse_context("") is None
    assert parse_context('{"team": "platform"}') == {"team": "platform"}
    with pytest.raises(ValueError):
        parse_context("[1, 2]")
    with pytest.raises(ValueError):
        parse_context("{not json")


def test_status_and_score_colours() -> None:
    assert status_color(HealthStatus.HEALTHY) == "green"
    assert status_color(AgentState.OFFLINE) == "red"
    assert status_color("degraded") == "orange"
    assert status_color("unknown") == "gray"
    assert score_color(80) == "green"
    assert score_color(60) == "orange"
    assert score_color(59.9) == "red"


def test_summarize_truncates_long_answers() -> None:
    short, long = summarize(["ok", "x" * 200])

    assert short == "ok"
    assert long == "x" * 150 + "..."
