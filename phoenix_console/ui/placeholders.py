"""Stand-in data for panels whose backend endpoints are not wired up yet.

Every collection here is rendered with a "sample data" notice; none of it is
sent to an agent.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from phoenix_console.api.models import Candidate, Interview


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


SHORTLISTED_CANDIDATES: List[Candidate] = [
    Candidate(id="1", name="John Doe", email="john.doe@email.com", job_title="Senior Software Developer", score=85, status="shortlisted"),
    Candidate(id="2", name="Jane Smith", email="jane.smith@email.com", job_title="Product Manager", score=92, status="shortlisted"),
    Candidate(id="3", name="Mike Johnson", email="mike.johnson@email.com", job_title="Data Analyst", score=78, status="pending"),
]

UPCOMING_INTERVIEWS: List[Interview] = [
    Interview(id="1", candidate_name="John Doe", job_title="Senior Software Developer", date="2024-01-15", time="10:00", type="Technical", status="scheduled"),
    Interview(id="2", candidate_name="Jane Smith", job_title="Product Manager", date="2024-01-16", time="14:00", type="Behavioral", status="completed"),
]

INTERVIEW_TYPES: List[str] = ["Technical", "Behavioral", "HR", "Final"]


def database_records() -> List[Dict[str, Any]]:
    return [
        {"id": "1", "type": "job", "data": {"title": "Senior Developer", "company": "TechCorp"}, "timestamp": _now()},
        {"id": "2", "type": "candidate", "data": {"name": "John Doe", "skills": ["Python", "React"]}, "timestamp": _now()},
        {"id": "3", "type": "resume", "data": {"score": 85, "analysis": "Strong match"}, "timestamp": _now()},
    ]


def graph_snapshot() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "nodes": [
            {"id": "1", "labels": ["Company"], "properties": {"name": "TechCorp Solutions"}},
            {"id": "2", "labels": ["Skill"], "properties": {"name": "Python"}},
            {"id": "3", "labels": ["Candidate"], "properties": {"name": "Sarah Johnson"}},
        ],
        "relationships": [
            {"id": "1", "type": "REQUIRES", "start_node": "1", "end_node": "2", "properties": {}},
            {"id": "2", "type": "HAS_SKILL", "start_node": "3", "end_node": "2", "properties": {}},
        ],
    }


def vector_collections() -> List[Dict[str, Any]]:
    return [
        {"name": "resumes", "vector_size": 768, "points_count": 150},
        {"name": "job_descriptions", "vector_size": 768, "points_count": 75},
        {"name": "candidates", "vector_size": 768, "points_count": 200},
    ]


def memory_snapshots() -> List[Dict[str, Any]]:
    return [
        {"type": "short_term", "data": {"recent_searches": ["python developer", "ml engineer"]}, "timestamp": _now()},
        {"type": "long_term", "data": {"total_candidates": 150, "successful_hires": 23}, "timestamp": _now()},
        {"type": "episodic", "data": {"recent_interviews": ["Sarah Johnson - Hired", "Mike Chen - Pending"]}, "timestamp": _now()},
    ]


MEMORY_SEARCH_SUGGESTIONS: List[str] = [
    "What is Imercfy?",
    "What products does Imercfy offer?",
    "What technologies does Imercfy use?",
    "Tell me about Imercfy's case studies",
]
