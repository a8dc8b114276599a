"""
Tests for the canonical text layout.

The text is consumed byte-for-byte, so these tests compare against a
golden string instead of checking pieces semantically.
"""

import unittest
from dataclasses import replace

from syllabusgen.defaults import default_syllabus
from syllabusgen.format import SEPARATOR, WEEK_HEADER, build_final_text
from syllabusgen.model import Syllabus, TermBlock, WeekRow


def _small_record() -> Syllabus:
    return Syllabus(
        institution_name="BUCAS GRANDE FOUNDATION COLLEGE",
        institution_address="SOCORRO, SURIGAO DEL NORTE",
        course_code="ICT 101",
        course_title="Introduction to Computer Technology",
        course_credit="3 Units",
        contact_hours="3 hours/week",
        prerequisite="None",
        vision_text="A premier academic institution.",
        mission_bullets=("Holistic Education;",),
        institution_objectives=("Increase enrollment by 50%;",),
        course_description="Fundamentals of computer technology.",
        learning_outcomes=("Explain hardware.", "Use productivity tools."),
        terms=(TermBlock(name="Prelim", rows=(WeekRow(week="Week 1", topics="X", outcomes="Y", activities="Z"),)),),
        teaching_activities=("Lectures & Discussions",),
        assessment_breakdown=("Major Exams – 60%", "Project – 40%"),
        references_year_filter="2021+",
        references_list=("Old (2019)", "New (2022)", "Canva Design School"),
        date_revised="Aug. 14, 2025",
        effectivity="A.Y: 2025-2026 1st Semester",
        prepared_by_name="JOHN",
        prepared_by_title="FACULTY",
        reviewed_by_name="RHEA",
        reviewed_by_title="DEAN",
        noted_by_name="MAYLONA",
        noted_by_title="VP FOR ACADEMICS",
        approved_by_name="RALNA",
        approved_by_title="PRESIDENT",
    )


GOLDEN = (
    "BUCAS GRANDE FOUNDATION COLLEGE\n"
    "SOCORRO, SURIGAO DEL NORTE\n"
    "\n"
    "Course Code: ICT 101\n"
    "Course Credit: 3 Units\n"
    "Contact Hours: 3 hours/week\n"
    "Prerequisite: None\n"
    "\n"
    "VISION\n"
    "A premier academic institution.\n"
    "\n"
    "MISSION\n"
    "To provide academic and operational excellence vis-a-vis:\n"
    "- Holistic Education;\n"
    "\n"
    "OBJECTIVES\n"
    "BGFC shall:\n"
    "- Increase enrollment by 50%;\n"
    "________________________________________\n"
    "Course Description\n"
    "Fundamentals of computer technology.\n"
    "________________________________________\n"
    "Course Learning Outcomes\n"
    "By the end of the semester, students will be able to:\n"
    "1. Explain hardware.\n"
    "2. Use productivity tools.\n"
    "________________________________________\n"
    "Week-by-Week Outline\n"
    "Prelim\n"
    "Week\tTopics\tIntended Learning Outcomes\tActivities / Assessment\n"
    "Week 1\tX\tY\tZ\n"
    "________________________________________\n"
    "Teaching & Learning Activities\n"
    "- Lectures & Discussions\n"
    "________________________________________\n"
    "Assessment Breakdown\n"
    "- Major Exams – 60%\n"
    "- Project – 40%\n"
    "References\n"
    "- New (2022)\n"
    "- Canva Design School\n"
    " \n"
    "Date Revised: Aug. 14, 2025\n"
    "\n"
    "Effectivity: A.Y: 2025-2026 1st Semester\n"
    "\n"
    "Prepared by: JOHN\n"
    "\t\tFACULTY\n"
    "\n"
    "Reviewed by: RHEA\n"
    "\t\tDEAN\n"
    "\n"
    "Noted by:      MAYLONA\n"
    "\t            VP FOR ACADEMICS\n"
    "\n"
    "Approved by: RALNA \n"
    "\t\tPRESIDENT"
)


class TestBuildFinalText(unittest.TestCase):
    def test_matches_golden_text(self) -> None:
        self.assertEqual(build_final_text(_small_record()), GOLDEN)

    def test_is_deterministic(self) -> None:
        record = default_syllabus()
        self.assertEqual(build_final_text(record), build_final_text(record))

    def test_week_table_structure(self) -> None:
        lines = build_final_text(_small_record()).split("\n")
        i = lines.index(WEEK_HEADER)
        self.assertEqual(lines[i - 1], "Prelim")
        self.assertEqual(lines[i + 1], "Week 1\tX\tY\tZ")
        self.assertEqual(lines[i + 2], "_" * 40)

    def test_one_separator_per_term(self) -> None:
        text = build_final_text(default_syllabus())
        lines = text.split("\n")
        start = lines.index("Week-by-Week Outline")
        end = lines.index("Teaching & Learning Activities")
        self.assertEqual(lines[start:end].count(SEPARATOR), 4)
        term_lines = [lines[i - 1] for i, line in enumerate(lines) if line == WEEK_HEADER]
        self.assertEqual(term_lines, ["Prelim", "Midterm", "Pre-Final", "Final"])

    def test_terms_keep_record_order(self) -> None:
        terms = (TermBlock(name="Final"), TermBlock(name="Prelim"))
        text = build_final_text(replace(_small_record(), terms=terms))
        self.assertLess(text.index("\nFinal\n"), text.index("\nPrelim\n"))

    def test_learning_outcomes_are_numbered_in_order(self) -> None:
        outcomes = ("Zeta", "Alpha", "Mu")
        lines = build_final_text(replace(_small_record(), learning_outcomes=outcomes)).split("\n")
        self.assertIn("1. Zeta", lines)
        self.assertLess(lines.index("1. Zeta"), lines.index("2. Alpha"))
        self.assertLess(lines.index("2. Alpha"), lines.index("3. Mu"))

    def test_numeric_week_label_rendered_as_given(self) -> None:
        term = TermBlock(name="Prelim", rows=(WeekRow(week=3, topics="A", outcomes="B", activities="C"),))
        text = build_final_text(replace(_small_record(), terms=(term,)))
        self.assertIn("\n3\tA\tB\tC\n", text)

    def test_empty_lists_render_without_items(self) -> None:
        record = replace(
            _small_record(),
            mission_bullets=(),
            teaching_activities=(),
            assessment_breakdown=(),
            references_list=(),
            terms=(TermBlock(name="Prelim"),),
        )
        text = build_final_text(record)
        self.assertIn("vis-a-vis:\n\nOBJECTIVES", text)
        self.assertIn("Prelim\n" + WEEK_HEADER + "\n" + SEPARATOR, text)
        self.assertIn("Assessment Breakdown\nReferences\n \nDate Revised", text)

    def test_signature_lines_are_exact(self) -> None:
        lines = build_final_text(_small_record()).split("\n")
        self.assertIn("Noted by:      MAYLONA", lines)
        self.assertIn("\t            VP FOR ACADEMICS", lines)
        self.assertIn("Approved by: RALNA ", lines)
        self.assertEqual(lines[-1], "\t\tPRESIDENT")
        self.assertFalse(build_final_text(_small_record()).endswith("\n"))

    def test_assessment_items_are_not_checked(self) -> None:
        record = replace(_small_record(), assessment_breakdown=("Only – 10%",))
        self.assertIn("- Only – 10%", build_final_text(record))

    def test_default_record_header(self) -> None:
        text = build_final_text(default_syllabus())
        self.assertTrue(text.startswith("BUCAS GRANDE FOUNDATION COLLEGE\n"))
        # 2021+ drops nothing here: only the Shelly reference has a year (2021)
        self.assertIn("- Shelly, G., & Vermaat, M. (2021). Discovering Computers. Cengage.", text)
        self.assertIn("- Canva Design School", text)


if __name__ == "__main__":
    unittest.main()
