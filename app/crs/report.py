"""
Comparison report for up to three CRS profiles.

Builds the score comparison table, the interpretation guide and per-profile
detail rows, and lays them out as a PDF with reportlab.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from xml.sax.saxutils import escape
from datetime import date

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.crs.engine import LanguageAbility
from app.crs.profiles import Profile

logger = logging.getLogger(__name__)

REPORT_TITLE = "Canada CRS Calculator Results"
EXPORT_FILENAME = "CRS_Calculator_Results.pdf"

COMPONENT_LABELS = (
    ("age", "Age"),
    ("education", "Education"),
    ("first_language", "First Language"),
    ("second_language", "Second Language"),
    ("canadian_work_experience", "Canadian Work Experience"),
    ("spouse_factors", "Spouse Factors"),
    ("skill_transferability", "Skill Transferability"),
    ("additional_points", "Additional Points"),
)


@dataclass(frozen=True)
class ScoreBand:
    minimum: int
    label: str
    description: str


# Highest band first; a total falls in the first band whose minimum it reaches
INTERPRETATION_GUIDE = (
    ScoreBand(600, "600+ points", "Very high chance of invitation in most draws (typically PNP candidates)"),
    ScoreBand(520, "520-599 points", "Good chance in general draws"),
    ScoreBand(470, "470-519 points", "Moderate chance in CEC-specific draws"),
    ScoreBand(410, "410-469 points", "Possible in category-based or program-specific draws"),
    ScoreBand(0, "Below 410 points", "Consider Provincial Nominee Program (PNP) or alternative pathways"),
)

GUIDE_NOTE = (
    "Note: With the removal of arranged employment points in March 2025, "
    "CRS scores have generally decreased across the Express Entry pool."
)

_HEADER_BLUE = colors.Color(66 / 255, 139 / 255, 202 / 255)


def score_band(total: int) -> ScoreBand:
    for band in INTERPRETATION_GUIDE:
        if total >= band.minimum:
            return band
    return INTERPRETATION_GUIDE[-1]


def comparison_table(profiles: list[Profile]) -> list[list]:
    """Header row plus one row per component and a final ``Total Score`` row."""
    rows: list[list] = [["Category", *(p.name for p in profiles)]]
    for attr, label in COMPONENT_LABELS:
        rows.append([label, *(getattr(p.scores, attr) for p in profiles)])
    rows.append(["Total Score", *(p.total for p in profiles)])
    return rows


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _skills(ability: LanguageAbility) -> str:
    return f"S:{ability.speaking}, L:{ability.listening}, R:{ability.reading}, W:{ability.writing}"


def profile_details(profile: Profile) -> list[list[str]]:
    inp = profile.inputs
    return [
        ["Age", str(inp.age)],
        ["Has Spouse", _yes_no(inp.has_spouse)],
        ["Education Level", inp.education.value],
        ["First Language (CLB)", _skills(inp.first_language)],
        ["Second Language (CLB)", _skills(inp.second_language)],
        ["Canadian Work Experience", f"{inp.canadian_work_years} years"],
        ["Foreign Work Experience", f"{inp.foreign_work_years} years"],
        ["Certificate of Qualification", _yes_no(inp.certificate_of_qualification)],
        ["Spouse Education Level", inp.spouse_education.value],
        ["Spouse Language (CLB)", _skills(inp.spouse_language)],
        ["Spouse Canadian Work Experience", f"{inp.spouse_canadian_work_years} years"],
        ["Has Sibling in Canada", _yes_no(inp.sibling_in_canada)],
        ["French Language Proficiency", inp.french_tier.value],
        ["Canadian Education", inp.canadian_education.value],
        ["Provincial Nomination", _yes_no(inp.provincial_nomination)],
    ]


def export_pdf(profiles: list[Profile], generated_on: date | None = None) -> bytes:
    """
    Render the comparison report.

    Page 1 carries the score table and the interpretation guide; each profile
    then gets its own page listing every input field.
    """
    generated_on = generated_on or date.today()
    styles = getSampleStyleSheet()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        title=REPORT_TITLE,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=16 * mm,
        bottomMargin=16 * mm,
    )

    scores = Table(comparison_table(profiles), hAlign="LEFT")
    scores.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ALIGN", (1, 1), (-1, -1), "CENTER"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))

    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(f"Generated on: {generated_on.isoformat()}", styles["Normal"]),
        Spacer(1, 6 * mm),
        scores,
        Spacer(1, 8 * mm),
        Paragraph(f"Interpretation Guide for {generated_on.year}:", styles["Heading2"]),
    ]
    for band in INTERPRETATION_GUIDE:
        story.append(Paragraph(f"\u2022 <b>{band.label}</b>: {band.description}", styles["Normal"]))
    story += [Spacer(1, 4 * mm), Paragraph(GUIDE_NOTE, styles["Italic"])]

    for profile in profiles:
        details = Table(profile_details(profile), colWidths=[80 * mm, None], hAlign="LEFT")
        details.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]))
        story += [
            PageBreak(),
            Paragraph(f"{escape(profile.name)} Details:", styles["Heading2"]),
            Paragraph(f"Total CRS score: {profile.total} ({score_band(profile.total).label})", styles["Normal"]),
            Spacer(1, 4 * mm),
            details,
        ]

    doc.build(story)
    logger.info(f"Exported CRS report for {len(profiles)} profile(s)")
    return buffer.getvalue()
