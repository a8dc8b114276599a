"""
Canonical text layout (syllabus -> plain text).

Every export path derives from this text: stdout / clipboard copy, the .txt
export and the Word document (which re-reads the lines and turns the
tab-separated week rows into table cells).

Important rules (DO NOT CHANGE):
- the output is compared byte-for-byte by consumers
- one separator line after EACH term table, not only after the last one
- the line after the references is a single space, not an empty string
- "Noted by" uses literal spaces, "Approved by" keeps a trailing space
- no trailing newline
"""

from __future__ import annotations

from typing import List

from syllabusgen.model import Syllabus
from syllabusgen.validation import filter_references_by_year

SEPARATOR = "_" * 40
WEEK_HEADER = "Week\tTopics\tIntended Learning Outcomes\tActivities / Assessment"

MISSION_CAPTION = "To provide academic and operational excellence vis-a-vis:"
OBJECTIVES_CAPTION = "BGFC shall:"
OUTCOMES_CAPTION = "By the end of the semester, students will be able to:"

# Section titles, used by the document export to pick heading styles
SECTION_TITLES = (
    "VISION",
    "MISSION",
    "OBJECTIVES",
    "Course Description",
    "Course Learning Outcomes",
    "Week-by-Week Outline",
    "Teaching & Learning Activities",
    "Assessment Breakdown",
    "References",
)


def build_lines(record: Syllabus) -> List[str]:
    """
    Build the canonical text as a list of lines (without newline characters).
    """
    lines: List[str] = []

    # Header
    lines.append(record.institution_name)
    lines.append(record.institution_address)
    lines.append("")

    # Course info
    lines.append(f"Course Code: {record.course_code}")
    lines.append(f"Course Credit: {record.course_credit}")
    lines.append(f"Contact Hours: {record.contact_hours}")
    lines.append(f"Prerequisite: {record.prerequisite}")
    lines.append("")

    lines.append("VISION")
    lines.append(record.vision_text)
    lines.append("")

    lines.append("MISSION")
    lines.append(MISSION_CAPTION)
    lines.extend(f"- {bullet}" for bullet in record.mission_bullets)
    lines.append("")

    lines.append("OBJECTIVES")
    lines.append(OBJECTIVES_CAPTION)
    lines.extend(f"- {objective}" for objective in record.institution_objectives)
    lines.append(SEPARATOR)

    lines.append("Course Description")
    lines.append(record.course_description)
    lines.append(SEPARATOR)

    lines.append("Course Learning Outcomes")
    lines.append(OUTCOMES_CAPTION)
    lines.extend(f"{i}. {outcome}" for i, outcome in enumerate(record.learning_outcomes, start=1))
    lines.append(SEPARATOR)

    # Terms keep the record's own order
    lines.append("Week-by-Week Outline")
    for term in record.terms:
        lines.append(term.name)
        lines.append(WEEK_HEADER)
        for row in term.rows:
            lines.append(f"{row.week}\t{row.topics}\t{row.outcomes}\t{row.activities}")
        lines.append(SEPARATOR)

    lines.append("Teaching & Learning Activities")
    lines.extend(f"- {activity}" for activity in record.teaching_activities)
    lines.append(SEPARATOR)

    # Assessment items are printed as typed (the total check is advisory)
    lines.append("Assessment Breakdown")
    lines.extend(f"- {item}" for item in record.assessment_breakdown)

    lines.append("References")
    references = filter_references_by_year(record.references_list, record.references_year_filter)
    lines.extend(f"- {reference}" for reference in references)

    lines.append(" ")

    # Footer
    lines.append(f"Date Revised: {record.date_revised}")
    lines.append("")
    lines.append(f"Effectivity: {record.effectivity}")
    lines.append("")

    # Signatures
    lines.append(f"Prepared by: {record.prepared_by_name}")
    lines.append(f"\t\t{record.prepared_by_title}")
    lines.append("")
    lines.append(f"Reviewed by: {record.reviewed_by_name}")
    lines.append(f"\t\t{record.reviewed_by_title}")
    lines.append("")
    lines.append(f"Noted by:      {record.noted_by_name}")
    lines.append(f"\t            {record.noted_by_title}")
    lines.append("")
    lines.append(f"Approved by: {record.approved_by_name} ")
    lines.append(f"\t\t{record.approved_by_title}")

    return lines


def build_final_text(record: Syllabus) -> str:
    """
    Render a syllabus record into the canonical plain-text layout.
    """
    return "\n".join(build_lines(record))
