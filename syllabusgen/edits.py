"""
Edit reducer.

The working copy is never mutated. Every change is described by a small edit
object and applied with:

    new_record = apply_edit(record, edit)

The host layer (CLI / interactive menu) decides when to persist the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Tuple, Union

from syllabusgen.defaults import default_syllabus
from syllabusgen.errors import EditError
from syllabusgen.model import (
    LIST_FIELDS,
    ROW_FIELDS,
    SCALAR_FIELDS,
    Syllabus,
    TermBlock,
    WeekRow,
    resolve_field,
    syllabus_from_dict,
)


@dataclass(frozen=True)
class SetField:
    field: str
    value: str


@dataclass(frozen=True)
class SetListItem:
    field: str
    index: int
    value: str


@dataclass(frozen=True)
class AddListItem:
    field: str
    value: str = ""


@dataclass(frozen=True)
class RemoveListItem:
    field: str
    index: int


@dataclass(frozen=True)
class UpdateTermRow:
    term_index: int
    row_index: int
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AddTermRow:
    term_index: int


@dataclass(frozen=True)
class RemoveTermRow:
    term_index: int
    row_index: int


@dataclass(frozen=True)
class MergeData:
    """Merge a (partial) JSON snapshot over the current record."""

    data: Mapping[str, Any]


@dataclass(frozen=True)
class ResetToDefaults:
    pass


Edit = Union[
    SetField,
    SetListItem,
    AddListItem,
    RemoveListItem,
    UpdateTermRow,
    AddTermRow,
    RemoveTermRow,
    MergeData,
    ResetToDefaults,
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _scalar_field(name: str) -> str:
    attr = resolve_field(name)
    if attr is None:
        raise EditError(f"Unknown field: {name!r}")
    if attr not in SCALAR_FIELDS:
        raise EditError(f"Field {name!r} is not a text field")
    return attr


def _list_field(name: str) -> str:
    attr = resolve_field(name)
    if attr is None:
        raise EditError(f"Unknown field: {name!r}")
    if attr not in LIST_FIELDS:
        raise EditError(f"Field {name!r} is not a list field")
    return attr


def _check_index(index: int, size: int, what: str) -> None:
    if not (0 <= index < size):
        raise EditError(f"{what} index {index} out of range (0..{size - 1})" if size else f"{what} is empty")


def _replace_term(record: Syllabus, term_index: int, rows: Tuple[WeekRow, ...]) -> Syllabus:
    terms = list(record.terms)
    terms[term_index] = replace(terms[term_index], rows=rows)
    return replace(record, terms=tuple(terms))


def _term(record: Syllabus, term_index: int) -> TermBlock:
    _check_index(term_index, len(record.terms), "Term")
    return record.terms[term_index]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_edit(record: Syllabus, edit: Edit) -> Syllabus:
    """
    Return a new record with `edit` applied. Raises EditError for invalid edits.
    """
    if isinstance(edit, SetField):
        attr = _scalar_field(edit.field)
        return replace(record, **{attr: edit.value})

    if isinstance(edit, SetListItem):
        attr = _list_field(edit.field)
        items = list(getattr(record, attr))
        _check_index(edit.index, len(items), attr)
        items[edit.index] = edit.value
        return replace(record, **{attr: tuple(items)})

    if isinstance(edit, AddListItem):
        attr = _list_field(edit.field)
        return replace(record, **{attr: getattr(record, attr) + (edit.value,)})

    if isinstance(edit, RemoveListItem):
        attr = _list_field(edit.field)
        items = list(getattr(record, attr))
        _check_index(edit.index, len(items), attr)
        del items[edit.index]
        return replace(record, **{attr: tuple(items)})

    if isinstance(edit, UpdateTermRow):
        term = _term(record, edit.term_index)
        _check_index(edit.row_index, len(term.rows), "Row")
        unknown = sorted(set(edit.changes) - set(ROW_FIELDS))
        if unknown:
            raise EditError(f"Unknown week row field(s): {', '.join(unknown)}")
        rows = list(term.rows)
        rows[edit.row_index] = replace(rows[edit.row_index], **dict(edit.changes))
        return _replace_term(record, edit.term_index, tuple(rows))

    if isinstance(edit, AddTermRow):
        term = _term(record, edit.term_index)
        new_row = WeekRow(week=f"Week {len(term.rows) + 1}")
        return _replace_term(record, edit.term_index, term.rows + (new_row,))

    if isinstance(edit, RemoveTermRow):
        term = _term(record, edit.term_index)
        _check_index(edit.row_index, len(term.rows), "Row")
        rows = term.rows[: edit.row_index] + term.rows[edit.row_index + 1 :]
        return _replace_term(record, edit.term_index, rows)

    if isinstance(edit, MergeData):
        return syllabus_from_dict(edit.data, base=record)

    if isinstance(edit, ResetToDefaults):
        return default_syllabus()

    raise EditError(f"Unsupported edit: {edit!r}")


def row_changes(**values: Any) -> Dict[str, Any]:
    """
    Keep only the row fields that were actually given (None = unchanged).
    """
    return {k: v for k, v in values.items() if v is not None and k in ROW_FIELDS}
