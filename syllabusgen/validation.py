"""
Validation helpers (advisory only).

- validate_assessment_total(): sums the trailing "NN%" of assessment items
- filter_references_by_year(): keeps references whose year matches a filter
  expression such as "2021+", "2020-2023", ">=2022", "<=2023" or "2024"
- validate_syllabus(): required-field rules of the edit form

None of these ever blocks formatting. Malformed percentages count as 0,
references without a year are always kept, and an unparseable year filter
keeps every reference.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Annotated, Iterable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from syllabusgen.errors import InvalidYearFilter
from syllabusgen.model import JSON_KEYS, Syllabus

logger = logging.getLogger(__name__)


_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)%", re.ASCII)
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b", re.ASCII)
_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def _round2(value: float) -> float:
    # half-up rounding to 2 decimals
    return math.floor(value * 100 + 0.5) / 100


def _fmt_number(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Assessment total
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssessmentTotal:
    total: float
    is_valid: bool
    remaining: float

    def message(self) -> str:
        """
        Human readable status, e.g. "Total: 70% (Need +30%)".
        """
        text = f"Total: {_fmt_number(self.total)}%"
        if self.is_valid:
            return text
        if self.remaining > 0:
            text += f" (Need +{_fmt_number(self.remaining)}%)"
        elif self.remaining < 0:
            text += f" (Over by {_fmt_number(abs(self.remaining))}%)"
        return text


def extract_percentage(item: str) -> Optional[float]:
    """
    Return the first "<digits>[.<digits>]%" value of an item, or None if there is none.
    """
    match = _PERCENT_RE.search(item)
    if not match:
        return None
    return float(match.group(1))


def validate_assessment_total(items: Iterable[str]) -> AssessmentTotal:
    """
    Sum the percentages of the assessment items.

    Items without a percentage contribute 0. `is_valid` allows for floating
    point drift (|total - 100| < 0.01). `remaining` is negative when the
    items add up to more than 100%.
    """
    total = 0.0
    for item in items:
        value = extract_percentage(item)
        if value is not None:
            total += value

    return AssessmentTotal(
        total=_round2(total),
        is_valid=abs(total - 100) < 0.01,
        remaining=_round2(100 - total),
    )


# ---------------------------------------------------------------------------
# Reference year filter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class YearFilter:
    """
    Parsed year filter. `low` / `high` are inclusive; None means unbounded.
    """

    expression: str
    low: Optional[int]
    high: Optional[int]

    def matches(self, year: int) -> bool:
        if self.low is not None and year < self.low:
            return False
        if self.high is not None and year > self.high:
            return False
        return True


def _parse_bound(text: str, expression: str) -> int:
    # Leading integer prefix, like "2021" in "2021 onwards"
    match = _INT_PREFIX_RE.match(text)
    if not match:
        raise InvalidYearFilter(expression, f"{text.strip() or 'empty bound'!r} is not a number")
    return int(match.group(1))


def parse_year_filter(expression: str) -> Optional[YearFilter]:
    """
    Parse a year filter expression.

    Shapes are tried in this order, first match wins:
      1. contains "+"        -> "2021+"      year >= 2021
      2. contains "-"        -> "2020-2023"  2020 <= year <= 2023
      3. starts with ">="    -> ">=2022"     year >= 2022
      4. starts with "<="    -> "<=2023"     year <= 2023
      5. anything else       -> "2024"       year == 2024

    Returns None for a blank expression (no filtering).
    Raises InvalidYearFilter if a bound is not a number.
    """
    expr = expression.strip()
    if not expr:
        return None

    if "+" in expr:
        low = _parse_bound(expr.replace("+", "", 1), expression)
        return YearFilter(expression, low, None)

    if "-" in expr:
        min_str, max_str = expr.split("-", 1)
        low = _parse_bound(min_str, expression)
        high = _parse_bound(max_str, expression)
        return YearFilter(expression, low, high)

    if expr.startswith(">="):
        return YearFilter(expression, _parse_bound(expr[2:], expression), None)

    if expr.startswith("<="):
        return YearFilter(expression, None, _parse_bound(expr[2:], expression))

    target = _parse_bound(expr, expression)
    return YearFilter(expression, target, target)


def extract_year(reference: str) -> Optional[int]:
    """
    Return the first 19xx/20xx year token of a reference, or None.
    """
    match = _YEAR_RE.search(reference)
    if not match:
        return None
    return int(match.group(0))


def filter_references_by_year(references: Sequence[str], filter_expr: str) -> List[str]:
    """
    Keep the references whose year satisfies `filter_expr` (order preserved).

    References without a year are always kept. A blank filter keeps everything.
    An invalid filter also keeps everything; use parse_year_filter() to report it.
    """
    if not filter_expr.strip():
        return list(references)

    try:
        year_filter = parse_year_filter(filter_expr)
    except InvalidYearFilter as exc:
        logger.warning("%s; keeping all references", exc)
        return list(references)

    if year_filter is None:
        return list(references)

    kept: List[str] = []
    for ref in references:
        year = extract_year(ref)
        if year is None or year_filter.matches(year):
            kept.append(ref)
    return kept


# ---------------------------------------------------------------------------
# Form validation (required fields)
# ---------------------------------------------------------------------------

NonEmpty = Annotated[str, Field(min_length=1)]
NonEmptyList = Annotated[List[NonEmpty], Field(min_length=1)]


class WeekRowForm(BaseModel):
    week: Union[int, str]
    topics: NonEmpty
    outcomes: NonEmpty
    activities: NonEmpty


class TermForm(BaseModel):
    name: Literal["Prelim", "Midterm", "Pre-Final", "Final"]
    rows: List[WeekRowForm]


class SyllabusForm(BaseModel):
    institution_name: NonEmpty
    institution_address: NonEmpty

    course_code: NonEmpty
    course_title: NonEmpty
    course_credit: NonEmpty
    contact_hours: NonEmpty
    prerequisite: str

    vision_text: NonEmpty
    mission_bullets: NonEmptyList
    institution_objectives: NonEmptyList

    course_description: NonEmpty
    learning_outcomes: NonEmptyList

    terms: List[TermForm]

    teaching_activities: NonEmptyList
    assessment_breakdown: NonEmptyList

    references_year_filter: str
    references_list: NonEmptyList

    date_revised: NonEmpty
    effectivity: NonEmpty

    prepared_by_name: NonEmpty
    prepared_by_title: NonEmpty
    reviewed_by_name: NonEmpty
    reviewed_by_title: NonEmpty
    noted_by_name: NonEmpty
    noted_by_title: NonEmpty
    approved_by_name: NonEmpty
    approved_by_title: NonEmpty


_LIST_MESSAGES = {
    "mission_bullets": "At least one mission bullet is required",
    "institution_objectives": "At least one institution objective is required",
    "learning_outcomes": "At least one learning outcome is required",
    "teaching_activities": "At least one teaching activity is required",
    "assessment_breakdown": "At least one assessment item is required",
    "references_list": "At least one reference is required",
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def _field_label(attr: str) -> str:
    return attr.replace("_", " ").capitalize()


def _error_path(loc: Sequence[Union[str, int]]) -> str:
    parts: List[str] = []
    for i, part in enumerate(loc):
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif i == 0:
            parts.append(JSON_KEYS.get(part, part))
        else:
            parts.append(f".{part}")
    return "".join(parts)


def _error_message(loc: Sequence[Union[str, int]], error_type: str, default: str) -> str:
    attr = str(loc[0]) if loc else ""
    if len(loc) == 1 and attr in _LIST_MESSAGES and error_type == "too_short":
        return _LIST_MESSAGES[attr]
    if len(loc) == 1 and error_type == "string_too_short":
        return f"{_field_label(attr)} is required"
    if loc and loc[-1] in ("topics", "outcomes", "activities") and error_type == "string_too_short":
        return f"{str(loc[-1]).capitalize()} is required"
    return default


def validate_syllabus(record: Syllabus) -> List[FieldError]:
    """
    Check the required-field rules of the edit form.

    Returns an empty list when the record is complete. Field names in the
    result use the JSON snapshot keys, e.g. "terms[0].rows[2].topics".
    """
    data = {
        attr: getattr(record, attr)
        for attr in SyllabusForm.model_fields
    }
    data["terms"] = [
        {
            "name": term.name,
            "rows": [
                {"week": r.week, "topics": r.topics, "outcomes": r.outcomes, "activities": r.activities}
                for r in term.rows
            ],
        }
        for term in record.terms
    ]

    try:
        SyllabusForm.model_validate(data)
    except ValidationError as exc:
        return [
            FieldError(
                field=_error_path(err["loc"]),
                message=_error_message(err["loc"], err["type"], err["msg"]),
            )
            for err in exc.errors()
        ]
    return []
