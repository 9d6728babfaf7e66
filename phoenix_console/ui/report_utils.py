"""PDF export of a resume analysis, offered as a download in the UI."""

from datetime import datetime
from typing import List

import structlog
from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from phoenix_console.api.models import AnalysisResult

logger = structlog.get_logger(__name__)


def _section(pdf: FPDF, title: str) -> None:
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(w=0, h=10, text=title, border=0, align="L", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.line(10, pdf.get_y(), 60, pdf.get_y())
    pdf.ln(2)


def _bullets(pdf: FPDF, items: List[str], empty: str) -> None:
    pdf.set_font("Helvetica", "", 11)
    for item in items or [empty]:
        pdf.multi_cell(0, 7, f"- {item}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)


def generate_analysis_report(
    analysis: AnalysisResult, candidate_name: str, job_title: str
) -> bytes:
    """Build a one-page analysis summary.

    Args:
        analysis: Parsed analyzer response.
        candidate_name: Shown in the header.
        job_title: Role the resume was scored against.

    Returns:
        The PDF as bytes, or an empty bytestring when rendering failed.
    """
    try:
        pdf = FPDF()
        pdf.add_page()

        # HEADER
        pdf.set_fill_color(30, 41, 59)
        pdf.rect(0, 0, 210, 40, "F")
        pdf.set_text_color(255, 255, 255)
        pdf.set_font("Helvetica", "B", 20)
        pdf.cell(w=0, h=18, text="Resume Analysis Report", border=0, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(w=0, h=10, text=f"{candidate_name} | {job_title}", border=0, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(12)

        pdf.set_text_color(0, 0, 0)
        pdf.set_draw_color(30, 41, 59)
        _section(pdf, f"1. Overall Score: {analysis.score:.0f}%")
        matched = sum(1 for skill in analysis.skills_match if skill.match)
        pdf.set_font("Helvetica", "", 11)
        pdf.cell(
            w=0,
            h=8,
            text=f"Skills matched: {matched} of {len(analysis.skills_match)} | Job skills listed: {len(analysis.job_skills)}",
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        pdf.ln(6)

        _section(pdf, "2. Strengths")
        _bullets(pdf, analysis.strengths, "None reported")
        _section(pdf, "3. Areas for Improvement")
        _bullets(pdf, analysis.weaknesses, "None reported")
        _section(pdf, "4. Recommendations")
        _bullets(pdf, analysis.recommendations, "No recommendation available.")

        if analysis.skills_match:
            _section(pdf, "5. Skills Match")
            pdf.set_fill_color(241, 245, 249)
            pdf.set_font("Helvetica", "B", 10)
            pdf.cell(w=120, h=9, text="Skill", border=1, fill=True)
            pdf.cell(w=40, h=9, text="Required", border=1, align="C", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font("Helvetica", "", 10)
            for skill in analysis.skills_match:
                if skill.match:
                    pdf.set_fill_color(200, 255, 200)
                else:
                    pdf.set_fill_color(255, 255, 255)
                pdf.cell(w=120, h=8, text=skill.skill, border=1, fill=True)
                pdf.cell(w=40, h=8, text="yes" if skill.match else "-", border=1, align="C", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_y(-25)
        pdf.set_font("Helvetica", "I", 8)
        pdf.set_text_color(100, 100, 100)
        report_date = datetime.now().strftime("%B %d, %Y")
        pdf.cell(0, 10, f"Analysis Date: {report_date} | Generated by Phoenix Console", align="C")

        output_data = pdf.output()
    except (FPDFException, UnicodeEncodeError) as exc:
        logger.error("analysis-report-failed", candidate=candidate_name, error=str(exc))
        return b""
    if output_data is None:
        return b""
    return bytes(output_data)
