"""Streamlit UI components for the HR Phoenix console."""

import pandas as pd
import streamlit as st
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from phoenix_console.api.errors import ValidationFailure
from phoenix_console.api.facade import HRPhoenixApi
from phoenix_console.api.models import (
    AgentStatus,
    AnalysisHistoryEntry,
    AnalysisResult,
    EmailTemplate,
    Interview,
    JobTemplate,
    SavedJobDescription,
    SearchResult,
    ServiceHealthReport,
    parse_interviews,
)
from phoenix_console.logging_config import get_app_logger
from phoenix_console.state.controllers import (
    AnalysisHistoryState,
    EmailTemplatesState,
    InterviewSchedulerState,
    JDGeneratorState,
    JDTemplatesState,
    MemorySearchState,
    ResumeAnalyzerState,
    RootAgentState,
    StateController,
    SystemState,
    WorkflowHistoryState,
)
from phoenix_console.ui import placeholders
from phoenix_console.ui.forms import (
    build_analysis_request,
    build_generate_request,
    build_schedule_request,
    parse_context,
    parse_job_request_text,
    score_color,
    status_color,
    summarize,
)
from phoenix_console.ui.report_utils import generate_analysis_report

app_logger = get_app_logger()

C = TypeVar("C", bound=StateController)

SAMPLE_NOTICE = "Sample data: this panel is not connected to a live agent yet."


def get_controller(
    api: HRPhoenixApi, controller_cls: Type[C], name: Optional[str] = None, **kwargs: Any
) -> C:
    """Return the session's controller of ``controller_cls``, creating it once.

    ``name`` separates two controllers of the same class so each keeps its own ``data``.
    """
    key = f"controller_{name or controller_cls.__name__}"
    if key not in st.session_state:
        controller = controller_cls(api, **kwargs)
        controller.mount()
        st.session_state[key] = controller
    return st.session_state[key]


def release_controllers() -> None:
    """Stop polling and forget fetched state when the user leaves a page."""
    for key in [key for key in st.session_state.keys() if str(key).startswith("controller_")]:
        st.session_state[key].unmount()
        del st.session_state[key]
    st.session_state.pop("last_analysis", None)


def _attempt(controller: StateController, action: Callable[[], Any]) -> Optional[Any]:
    """Run ``action`` and surface the controller's error instead of raising."""
    try:
        return action()
    except ValidationFailure as exc:
        st.error(str(exc))
    except Exception:
        st.error(controller.error or "Request failed")
    return None


def _badge(label: str, status: Any) -> str:
    value = getattr(status, "value", status)
    return f"**{label}**: :{status_color(value)}[{str(value).capitalize()}]"


def render_sidebar(settings: Any) -> str:
    """Render navigation and return the selected page."""
    with st.sidebar:
        st.title("HR Phoenix")
        st.markdown("---")
        page = st.radio(
            "Navigate",
            [
                "Overview",
                "People",
                "Job Descriptions",
                "Resume Analyzer",
                "Interview Scheduler",
                "Memory Search",
                "Agent Console",
            ],
            key="nav_page",
        )
        st.markdown("---")
        st.caption(f"Orchestrator: `{settings.root_agent_url}`")
        st.caption(f"Auto refresh: every {settings.refresh_interval_seconds}s")
    return page


def render_agent_statuses(agents: List[AgentStatus]) -> None:
    """Show one row per agent with reachability and latency."""
    if not agents:
        st.info("No agent status available yet.")
        return
    columns = st.columns(len(agents))
    for column, agent in zip(columns, agents):
        column.markdown(_badge(agent.name, agent.status))
        column.write(agent.description)
        if agent.response_time_ms:
            column.write(f"Response: `{agent.response_time_ms:.0f} ms`")
        elif agent.detail:
            column.write(f"`{agent.detail}`")


def render_health_report(report: ServiceHealthReport) -> None:
    st.markdown(_badge("Overall", report.overall))
    for key, value in report.as_dict().items():
        if key != "overall":
            st.markdown(_badge(key.replace("_", " ").title(), value))


def render_placeholder_tabs() -> None:
    st.caption(SAMPLE_NOTICE)
    database_tab, graph_tab, vector_tab, memory_tab = st.tabs(
        ["Database", "Knowledge Graph", "Vector Store", "Memory"]
    )
    with database_tab:
        st.dataframe(pd.DataFrame(placeholders.database_records()), use_container_width=True)
    with graph_tab:
        graph = placeholders.graph_snapshot()
        st.dataframe(pd.DataFrame(graph["nodes"]), use_container_width=True)
        st.dataframe(pd.DataFrame(graph["relationships"]), use_container_width=True)
    with vector_tab:
        st.dataframe(pd.DataFrame(placeholders.vector_collections()), use_container_width=True)
    with memory_tab:
        st.dataframe(pd.DataFrame(placeholders.memory_snapshots()), use_container_width=True)


def render_overview(api: HRPhoenixApi) -> None:
    """Agent status, aggregated health and the storage panels."""
    st.header("🧭 System Overview")
    system = get_controller(api, SystemState)

    @st.fragment(run_every=api.settings.refresh_interval_seconds)
    def _live_status() -> None:
        st.subheader("Agents")
        agents = _attempt(system, system.check_agents)
        render_agent_statuses(agents or [])
        st.subheader("Service Health")
        report = _attempt(system, system.check_all_services_health)
        render_health_report(report or ServiceHealthReport.unknown())

    _live_status()
    if st.button("Refresh now", key="overview_refresh"):
        st.rerun()

    with st.expander("Agent configuration"):
        configs = _attempt(system, system.get_all_configs)
        st.json(configs or {})

    render_placeholder_tabs()


def render_people(api: HRPhoenixApi) -> None:
    st.header("👥 People")
    stats = api.people_stats()
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Active Jobs", stats.get("active_jobs", 0))
    col2.metric("Candidates Analyzed", stats.get("total_candidates", 0))
    col3.metric(
        "Scheduled Interviews",
        sum(1 for interview in placeholders.UPCOMING_INTERVIEWS if interview.status == "scheduled"),
    )
    col4.metric(
        "Pending Reviews",
        sum(1 for candidate in placeholders.SHORTLISTED_CANDIDATES if candidate.status == "pending"),
    )
    st.caption("Interview and review counts use sample data.")


def render_templates(templates: Optional[List[JobTemplate]]) -> None:
    if not templates:
        st.info("No templates available yet.")
        return
    for template in templates:
        with st.expander(f"{template.title} ({template.level or 'any level'})"):
            st.write(template.description or "No description.")
            if template.required_skills:
                st.markdown(f"**Skills**: {' '.join(f'`{s}`' for s in template.required_skills)}")


def render_saved_job_descriptions(jobs: Optional[List[SavedJobDescription]]) -> None:
    if not jobs:
        st.info("No saved job descriptions. Generate one above.")
        return
    frame = pd.DataFrame(
        [
            {"Title": job.title, "Company": job.company, "Created": job.created_at, "File": job.filename}
            for job in jobs
        ]
    )
    st.dataframe(frame, use_container_width=True, hide_index=True)


def render_job_descriptions(api: HRPhoenixApi) -> None:
    """Quick create, structured generation, saved list and templates."""
    st.header("📝 Job Descriptions")
    jobs_state = get_controller(api, JDGeneratorState, auto_fetch=True)
    generator = get_controller(api, JDGeneratorState, name="jd_generation")
    templates_state = get_controller(api, JDTemplatesState, auto_fetch=True)

    with st.expander("⚡ Quick create", expanded=True):
        brief = st.text_input(
            "Describe the role",
            placeholder="Backend Engineer, company: Acme, 4 years, 120000 salary, skills: Python; SQL",
        )
        if st.button("Generate from brief", key="jd_quick"):
            details = parse_job_request_text(brief)
            generated = _attempt(
                generator, lambda: generator.generate_job_description(build_generate_request(details))
            )
            if generated is not None:
                st.success(generated.message or "Job description generated")
                st.markdown(generated.job_description)
                _attempt(jobs_state, jobs_state.get_job_descriptions)

    with st.expander("🛠️ Detailed form"):
        with st.form("jd_form"):
            title = st.text_input("Job Title")
            company = st.text_input("Company", value="Your Company")
            experience = st.selectbox("Experience", ["0-1 years", "2-3 years", "4-5 years", "5+ years"])
            salary = st.text_input("Salary Range")
            skills = st.text_input("Skills (separated by ;)")
            location = st.text_input("Location", value="Remote")
            submitted = st.form_submit_button("Generate")
        if submitted:
            details = {
                "job_title": title,
                "company_name": company,
                "experience_required": experience,
                "salary_range": salary,
                "location": location,
                "skills_required": [s.strip() for s in skills.split(";") if s.strip()],
            }
            generated = _attempt(
                generator, lambda: generator.generate_job_description(build_generate_request(details))
            )
            if generated is not None:
                st.success(generated.message or "Job description generated")
                st.markdown(generated.job_description)
                _attempt(jobs_state, jobs_state.get_job_descriptions)

    st.subheader("Saved job descriptions")
    if jobs_state.error:
        st.error(jobs_state.error)
    render_saved_job_descriptions(jobs_state.data)

    st.subheader("Templates")
    if templates_state.error:
        st.error(templates_state.error)
    render_templates(templates_state.data)


def render_analysis_result(result: AnalysisResult, candidate_name: str, job_title: str) -> None:
    """Show score, strengths, gaps and skills plus the PDF download."""
    st.markdown(f"### Match score: :{score_color(result.score)}[{result.score:.0f}%]")
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### Strengths")
        for item in result.strengths or ["None reported"]:
            st.write(f"- {item}")
    with col2:
        st.markdown("#### Areas for improvement")
        for item in result.weaknesses or ["None reported"]:
            st.write(f"- {item}")
    if result.recommendations:
        st.markdown("#### Recommendations")
        for item in result.recommendations:
            st.write(f"- {item}")
    if result.skills_match:
        st.dataframe(
            pd.DataFrame([{"Skill": s.skill, "Matched": s.match} for s in result.skills_match]),
            use_container_width=True,
            hide_index=True,
        )

    pdf_bytes = generate_analysis_report(result, candidate_name, job_title)
    if not pdf_bytes:
        st.warning("Couldn't generate the PDF report right now; please try again shortly.")
    else:
        st.download_button(
            label="📄 Download Analysis Report (PDF)",
            data=pdf_bytes,
            file_name=f"analysis_{candidate_name.replace(' ', '_')}.pdf",
            mime="application/pdf",
        )


def render_analysis_history(history: Optional[List[AnalysisHistoryEntry]]) -> None:
    if not history:
        st.info("No analyses yet.")
        return
    st.dataframe(
        pd.DataFrame([entry.model_dump() for entry in history]),
        use_container_width=True,
        hide_index=True,
    )


def render_resume_analyzer(api: HRPhoenixApi) -> None:
    st.header("📄 Resume Analyzer")
    jd_state = get_controller(api, JDGeneratorState, auto_fetch=True)
    analyzer = get_controller(api, ResumeAnalyzerState)
    history_state = get_controller(api, AnalysisHistoryState, auto_fetch=True)

    jobs: List[SavedJobDescription] = jd_state.data or []
    uploaded = st.file_uploader("Upload resume (TXT)", type=["txt"])
    pasted = st.text_area("Or paste resume text", height=200)
    choice: Optional[int] = None
    if jobs:
        choice = st.selectbox(
            "Job description",
            options=list(range(len(jobs))),
            format_func=lambda i: f"{jobs[i].title} · {jobs[i].company}",
        )
    else:
        st.info("No saved job descriptions yet. Create one on the Job Descriptions page.")
    email = st.text_input("Candidate email (optional)")

    if st.button("Analyze", type="primary"):
        if choice is None:
            st.error("Please fill in all required fields: job description")
        else:
            resume_text = uploaded.getvalue().decode("utf-8", errors="replace") if uploaded else pasted
            file_name = uploaded.name if uploaded else ""
            job = jobs[choice]
            result = _attempt(
                analyzer,
                lambda: analyzer.analyze_resume(
                    **build_analysis_request(resume_text, file_name, job, email)
                ),
            )
            if result is not None:
                st.session_state.last_analysis = (
                    result,
                    file_name.rsplit(".", 1)[0] if file_name else "Candidate",
                    job.job_title or job.title,
                )
                _attempt(history_state, history_state.get_analysis_history)

    if "last_analysis" in st.session_state:
        render_analysis_result(*st.session_state.last_analysis)

    st.subheader("Analysis history")
    if history_state.error:
        st.error(history_state.error)
    render_analysis_history(history_state.data)


def render_email_templates(templates: Optional[List[EmailTemplate]]) -> None:
    if not templates:
        st.info("No email templates configured.")
        return
    for template in templates:
        st.markdown(f"**{template.name}** ({template.template_type}): {template.subject}")


def render_interviews(interviews: List[Interview]) -> None:
    if not interviews:
        st.info("No interviews scheduled.")
        return
    st.dataframe(
        pd.DataFrame([interview.model_dump() for interview in interviews]),
        use_container_width=True,
        hide_index=True,
    )


def load_live_interviews(api: HRPhoenixApi) -> List[Interview]:
    """Fetch scheduled interviews; an unwired endpoint returns an empty list, logged at debug."""
    try:
        return parse_interviews(api.interview_scheduler.get_interviews())
    except Exception as exc:
        app_logger.debug("live_interviews_unavailable", error=str(exc))
        return []


def render_interview_scheduler(api: HRPhoenixApi) -> None:
    st.header("📅 Interview Scheduler")
    scheduler = get_controller(api, InterviewSchedulerState)
    candidates = placeholders.SHORTLISTED_CANDIDATES

    st.subheader("Shortlisted candidates")
    st.caption(SAMPLE_NOTICE)
    st.dataframe(
        pd.DataFrame([c.model_dump(include={"name", "email", "job_title", "score", "status"}) for c in candidates]),
        use_container_width=True,
        hide_index=True,
    )

    with st.form("schedule_form"):
        index = st.selectbox(
            "Candidate", options=list(range(len(candidates))), format_func=lambda i: candidates[i].name
        )
        interview_date = st.date_input("Date")
        interview_time = st.time_input("Time")
        interview_type = st.selectbox("Type", placeholders.INTERVIEW_TYPES)
        interviewer = st.text_input("Interviewer")
        duration = st.number_input("Duration (minutes)", min_value=15, max_value=240, value=60, step=15)
        location = st.text_input("Location", value="Virtual")
        submitted = st.form_submit_button("Schedule")
    if submitted:
        form = {
            "interview_date": interview_date,
            "interview_time": interview_time.strftime("%H:%M") if interview_time else "",
            "interview_type": interview_type,
            "interviewer_name": interviewer,
            "duration": duration,
            "location": location,
        }
        scheduled = _attempt(
            scheduler,
            lambda: scheduler.schedule_interview(build_schedule_request(candidates[index], form)),
        )
        if scheduled is not None:
            st.success(f"Interview scheduled for {candidates[index].name}")
            app_logger.info("interview_scheduled", candidate=candidates[index].email)

    st.subheader("Upcoming interviews")
    live = load_live_interviews(api)
    if live:
        render_interviews(live)
    else:
        st.caption(SAMPLE_NOTICE)
        render_interviews(placeholders.UPCOMING_INTERVIEWS)

    st.subheader("Email templates")
    email_templates = get_controller(api, EmailTemplatesState, auto_fetch=True)
    if email_templates.error:
        st.error(email_templates.error)
    render_email_templates(email_templates.data)


def render_search_result(result: Optional[SearchResult]) -> None:
    if result is None:
        return
    if result.source == "error":
        st.error(result.answer)
        return
    with st.container():
        st.markdown(result.answer)
        st.caption(
            f"Source: {result.source or 'memory'} | Confidence: {result.confidence:.0%}"
            f" | Category: {result.category or 'general'}"
        )
        if result.related_topics:
            st.markdown(" ".join(f"`{topic}`" for topic in result.related_topics))


def render_memory_search(api: HRPhoenixApi) -> None:
    st.header("🧠 Memory Search")
    memory = get_controller(api, MemorySearchState)

    st.write("Try one of these:")
    columns = st.columns(len(placeholders.MEMORY_SEARCH_SUGGESTIONS))
    for column, suggestion in zip(columns, placeholders.MEMORY_SEARCH_SUGGESTIONS):
        if column.button(suggestion, key=f"suggest_{suggestion}"):
            st.session_state.memory_query = suggestion

    query = st.text_input("Ask the memory", key="memory_query")
    if st.button("Search", type="primary"):
        try:
            memory.search(query)
        except Exception:
            # the apology card is rendered from ``visible_result``
            app_logger.warning("memory_search_failed", error=memory.error)

    render_search_result(memory.visible_result)

    if memory.history:
        st.subheader("Recent answers")
        for line in summarize([entry.answer for entry in memory.history]):
            st.write(f"- {line}")


def render_agent_console(api: HRPhoenixApi) -> None:
    st.header("🤖 Agent Console")
    root = get_controller(api, RootAgentState)

    query = st.text_area("Query for the orchestrator", height=120)
    raw_context = st.text_area("Context (JSON, optional)", height=100, value="")
    if st.button("Send", type="primary"):
        try:
            context = parse_context(raw_context)
        except ValueError as exc:
            st.error(str(exc))
        else:
            if not query.strip():
                st.error("Please fill in all required fields: query")
            else:
                answer = _attempt(root, lambda: root.process_query(query, context))
                if answer is not None:
                    st.json(answer)

    with st.expander("Deployment status"):
        deployment = get_controller(api, RootAgentState, name="deployment")
        status = _attempt(deployment, deployment.get_deployment_status)
        if status is not None:
            st.json(status)

    st.subheader("Workflow history")
    history = get_controller(api, WorkflowHistoryState, auto_fetch=True)
    if history.error:
        st.error(history.error)
    workflows = history.data
    if workflows:
        st.dataframe(
            pd.DataFrame([workflow.model_dump() for workflow in workflows]),
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.info("No workflows recorded yet.")


PAGES: Dict[str, Callable[[HRPhoenixApi], None]] = {
    "Overview": render_overview,
    "People": render_people,
    "Job Descriptions": render_job_descriptions,
    "Resume Analyzer": render_resume_analyzer,
    "Interview Scheduler": render_interview_scheduler,
    "Memory Search": render_memory_search,
    "Agent Console": render_agent_console,
}
