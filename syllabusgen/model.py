"""
Central data model definitions used across the project.

This module defines the canonical structure of a syllabus record so that:
- the formatter, the validators and the exporters share the same field names
- a record is an immutable snapshot (edits always build a new record)
- the JSON snapshot uses camelCase keys (institutionName, missionBullets, ...)
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union


TERM_NAMES: Tuple[str, ...] = ("Prelim", "Midterm", "Pre-Final", "Final")

WeekLabel = Union[str, int]


@dataclass(frozen=True)
class WeekRow:
    """
    One week's entry inside a term table.

    `week` may be text ("Week 1") or a number; it is rendered as given.
    """

    week: WeekLabel
    topics: str = ""
    outcomes: str = ""
    activities: str = ""


@dataclass(frozen=True)
class TermBlock:
    """
    One academic period (Prelim, Midterm, Pre-Final or Final) and its week rows.
    """

    name: str
    rows: Tuple[WeekRow, ...] = ()


@dataclass(frozen=True)
class Syllabus:
    """
    The full curriculum record consumed by the formatter and the exporters.
    """

    institution_name: str = ""
    institution_address: str = ""

    course_code: str = ""
    course_title: str = ""
    course_credit: str = ""
    contact_hours: str = ""
    prerequisite: str = ""

    vision_text: str = ""
    mission_bullets: Tuple[str, ...] = ()
    institution_objectives: Tuple[str, ...] = ()

    course_description: str = ""
    learning_outcomes: Tuple[str, ...] = ()

    terms: Tuple[TermBlock, ...] = ()

    teaching_activities: Tuple[str, ...] = ()
    assessment_breakdown: Tuple[str, ...] = ()

    references_year_filter: str = ""
    references_list: Tuple[str, ...] = ()

    date_revised: str = ""
    effectivity: str = ""

    prepared_by_name: str = ""
    prepared_by_title: str = ""
    reviewed_by_name: str = ""
    reviewed_by_title: str = ""
    noted_by_name: str = ""
    noted_by_title: str = ""
    approved_by_name: str = ""
    approved_by_title: str = ""


# ---------------------------------------------------------------------------
# Field catalogue
# ---------------------------------------------------------------------------

# Ordered text lists (order is reproduced verbatim in the output)
LIST_FIELDS: Tuple[str, ...] = (
    "mission_bullets",
    "institution_objectives",
    "learning_outcomes",
    "teaching_activities",
    "assessment_breakdown",
    "references_list",
)

# Plain string fields (everything except the lists and the term tables)
SCALAR_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(Syllabus) if f.name not in LIST_FIELDS and f.name != "terms"
)

ROW_FIELDS: Tuple[str, ...] = ("week", "topics", "outcomes", "activities")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# snake_case attribute -> camelCase JSON key
JSON_KEYS: Dict[str, str] = {f.name: _camel(f.name) for f in fields(Syllabus)}


def resolve_field(name: str) -> Optional[str]:
    """
    Map a user-supplied field name (snake_case or camelCase) to the attribute name.

    Returns None for unknown names.
    """
    key = name.strip()
    if key in JSON_KEYS:
        return key
    for attr, camel in JSON_KEYS.items():
        if camel == key:
            return attr
    return None


# ---------------------------------------------------------------------------
# JSON mapping
# ---------------------------------------------------------------------------


def _week_to_json(week: WeekLabel) -> WeekLabel:
    return week if isinstance(week, int) else str(week)


def _week_from_json(value: Any) -> WeekLabel:
    # bool is an int subclass but never a meaningful week label
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return "" if value is None else str(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def week_row_to_dict(row: WeekRow) -> Dict[str, Any]:
    return {
        "week": _week_to_json(row.week),
        "topics": row.topics,
        "outcomes": row.outcomes,
        "activities": row.activities,
    }


def week_row_from_dict(data: Mapping[str, Any]) -> WeekRow:
    return WeekRow(
        week=_week_from_json(data.get("week", "")),
        topics=_text(data.get("topics")),
        outcomes=_text(data.get("outcomes")),
        activities=_text(data.get("activities")),
    )


def term_to_dict(term: TermBlock) -> Dict[str, Any]:
    return {"name": term.name, "rows": [week_row_to_dict(r) for r in term.rows]}


def term_from_dict(data: Mapping[str, Any]) -> TermBlock:
    rows = data.get("rows", [])
    if not isinstance(rows, list):
        rows = []
    return TermBlock(
        name=_text(data.get("name")),
        rows=tuple(week_row_from_dict(r) for r in rows if isinstance(r, Mapping)),
    )


def syllabus_to_dict(record: Syllabus) -> Dict[str, Any]:
    """
    Convert a record into the JSON snapshot structure (camelCase keys).
    """
    out: Dict[str, Any] = {}
    for f in fields(Syllabus):
        value = getattr(record, f.name)
        if f.name == "terms":
            out[JSON_KEYS[f.name]] = [term_to_dict(t) for t in value]
        elif f.name in LIST_FIELDS:
            out[JSON_KEYS[f.name]] = list(value)
        else:
            out[JSON_KEYS[f.name]] = value
    return out


def syllabus_from_dict(data: Mapping[str, Any], base: Optional[Syllabus] = None) -> Syllabus:
    """
    Build a record from a (possibly partial) JSON mapping.

    Keys present in `data` replace the values of `base`; missing keys keep them.
    When `base` is None, the built-in defaults are used as the starting point.

    Values of the wrong shape are ignored rather than rejected, so that an
    imported file from an older form version still loads.
    """
    if base is None:
        from syllabusgen.defaults import default_syllabus

        base = default_syllabus()

    changes: Dict[str, Any] = {}
    for attr, key in JSON_KEYS.items():
        if key not in data:
            continue
        value = data[key]

        if attr == "terms":
            if isinstance(value, list):
                changes[attr] = tuple(term_from_dict(t) for t in value if isinstance(t, Mapping))
        elif attr in LIST_FIELDS:
            if isinstance(value, list):
                changes[attr] = tuple(_text(x) for x in value)
        elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
            changes[attr] = str(value)

    return replace(base, **changes)
