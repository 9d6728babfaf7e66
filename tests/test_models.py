"""Parsing agent payloads into view models."""

import pytest

from phoenix_console.api.errors import ApiError, SchemaMismatch
from phoenix_console.api.models import (
    ApiResponse,
    HealthStatus,
    ServiceHealthReport,
    parse_analysis_history,
    parse_analysis_result,
    parse_email_templates,
    parse_generated_job_description,
    parse_job_descriptions,
    parse_search_result,
    parse_templates,
    parse_workflows,
    require_success,
)


def test_empty_templates_payload_is_empty_list() -> None:
    assert parse_templates({"templates": []}) == []


def test_templates_accept_null_list() -> None:
    assert parse_templates({"templates": None}) == []


def test_templates_reject_non_list() -> None:
    with pytest.raises(SchemaMismatch):
        parse_templates({"templates": "none"})


def test_job_descriptions_are_flattened() -> None:
    payload = {
        "job_descriptions": [
            {
                "filename": "backend_engineer.txt",
                "content": "We are hiring",
                "metadata": {"job_title": "Backend Engineer", "company_name": "Acme", "generated_at": "2024-01-01"},
            },
            {"filename": "untitled.txt", "metadata": None},
        ]
    }

    first, second = parse_job_descriptions(payload)

    assert first.title == "Backend Engineer"
    assert first.company == "Acme"
    assert first.created_at == "2024-01-01"
    assert first.id == "backend_engineer.txt"
    assert first.content == "We are hiring"
    assert second.title == "untitled.txt"
    assert second.company == "Unknown Company"


def test_job_descriptions_reject_unexpected_shape() -> None:
    with pytest.raises(SchemaMismatch):
        parse_job_descriptions({"unexpected": True})


def test_generated_job_description_requires_success() -> None:
    with pytest.raises(ApiError) as excinfo:
        parse_generated_job_description({"success": False, "error": "LLM quota exceeded"})
    assert str(excinfo.value) == "LLM quota exceeded"

    result = parse_generated_job_description({"success": True, "job_description": "text", "job_id": 9})
    assert result.job_id == "9"
    assert result.message == "Job description generated successfully"


def test_analysis_result_reads_nested_score_card() -> None:
    payload = {
        "success": True,
        "analysis_result": {
            "overall_score": 82.5,
            "strengths": ["Python"],
            "weaknesses": None,
            "skills_analysis": {"job_skills": ["Python", "SQL"], "resume_skills": ["Python", "Go"]},
        },
    }

    result = parse_analysis_result(payload)

    assert result.score == 82.5
    assert result.strengths == ["Python"]
    assert result.weaknesses == []
    assert [(s.skill, s.match) for s in result.skills_match] == [("Python", True), ("Go", False)]
    assert result.job_skills == ["Python", "SQL"]


def test_analysis_result_failure_uses_fallback_message() -> None:
    with pytest.raises(ApiError) as excinfo:
        parse_analysis_result({"success": False})
    assert str(excinfo.value) == "Analysis failed"


def test_envelope_must_be_an_object() -> None:
    with pytest.raises(SchemaMismatch):
        ApiResponse.from_payload(["not", "an", "envelope"])
    with pytest.raises(SchemaMismatch):
        require_success("ok")


def test_history_and_workflows_accept_wrapped_or_bare_lists() -> None:
    history = parse_analysis_history({"history": [{"id": 1, "candidate_name": "Ada", "score": 91}]})
    workflows = parse_workflows([{"id": "wf-1", "query_text": "find devs", "status": "completed"}])

    assert history[0].id == "1"
    assert history[0].score == 91
    assert workflows[0].status == "completed"


def test_email_templates_coerce_template_id() -> None:
    templates = parse_email_templates({"templates": [{"template_id": 4, "name": "Invite"}]})

    assert templates[0].template_id == "4"


def test_search_result_clamps_confidence() -> None:
    result = parse_search_result({"answer": "Imercfy builds software", "confidence": 1.7, "related_topics": None})

    assert result.confidence == 1.0
    assert result.related_topics == []


def test_search_result_rejects_non_object() -> None:
    with pytest.raises(SchemaMismatch):
        parse_search_result("plain text")


def test_unknown_health_report() -> None:
    report = ServiceHealthReport.unknown()

    assert report.overall is HealthStatus.UNHEALTHY
    assert report.root_agent is HealthStatus.UNKNOWN


def test_workflows_read_the_query_field() -> None:
    workflows = parse_workflows({"data": [{"id": "w1", "query": "find engineers", "status": "completed"}]})
    legacy = parse_workflows([{"id": "w2", "query_text": "find designers"}])

    assert workflows[0].query == "find engineers"
    assert legacy[0].query == "find designers"
