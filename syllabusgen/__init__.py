"""
syllabusgen - syllabus editor and canonical text / document generator.
"""

from syllabusgen.format import build_final_text
from syllabusgen.log import setup_logging
from syllabusgen.validation import filter_references_by_year, validate_assessment_total

__all__ = [
    "build_final_text",
    "filter_references_by_year",
    "setup_logging",
    "validate_assessment_total",
]
