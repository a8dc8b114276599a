"""
CLI (Command Line Interface).

This module provides quick terminal commands for scripting and for testing, e.g.:

    syllabusgen render [--out file.txt]
    syllabusgen check
    syllabusgen export docx out.docx
    syllabusgen import other.json
    syllabusgen set courseCode "ICT 102"
    syllabusgen add references_list "Author (2023). Title."
    syllabusgen week-add Midterm
    syllabusgen interactive

Note:
- The interactive menu lives in syllabusgen/interactive.py
- Every editing command loads the working copy, applies one edit and saves it
- List positions and week rows are 1-based on the command line
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from syllabusgen.edits import (
    AddListItem,
    AddTermRow,
    MergeData,
    RemoveListItem,
    RemoveTermRow,
    ResetToDefaults,
    SetField,
    SetListItem,
    UpdateTermRow,
    apply_edit,
    row_changes,
)
from syllabusgen.errors import EditError, InvalidYearFilter, SyllabusError
from syllabusgen.export import default_export_name, export_json, export_text, import_json
from syllabusgen.export_docx import export_docx
from syllabusgen.format import build_final_text
from syllabusgen.log import setup_logging
from syllabusgen.model import JSON_KEYS, LIST_FIELDS, SCALAR_FIELDS, Syllabus
from syllabusgen.storage import load_syllabus, save_syllabus
from syllabusgen.validation import (
    filter_references_by_year,
    parse_year_filter,
    validate_assessment_total,
    validate_syllabus,
)

EXPORTERS = {
    "text": (export_text, ".txt"),
    "json": (export_json, ".json"),
    "docx": (export_docx, ".docx"),
}


def term_index(record: Syllabus, term: str) -> int:
    """
    Resolve a term given by name (case-insensitive) or 1-based position.
    """
    key = term.strip()
    if key.isdecimal():
        idx = int(key) - 1
        if 0 <= idx < len(record.terms):
            return idx
        raise EditError(f"Term number {key} out of range (1..{len(record.terms)})")

    for i, t in enumerate(record.terms):
        if t.name.lower() == key.lower():
            return i
    names = ", ".join(t.name for t in record.terms)
    raise EditError(f"Unknown term {term!r} (available: {names})")


def _position(text: str) -> int:
    """
    Convert a 1-based position from the command line to a list index.
    """
    if not text.strip().isdecimal() or int(text) < 1:
        raise EditError(f"Position must be a number >= 1, got {text!r}")
    return int(text) - 1


def _save(args: argparse.Namespace, record: Syllabus) -> None:
    save_syllabus(record, args.state)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_render(args: argparse.Namespace, record: Syllabus) -> int:
    """
    Print the canonical text (pipe it into a clipboard tool) or write it to --out.
    """
    if args.out:
        out = export_text(record, args.out)
        print(f"Written: {out}")
        return 0

    print(build_final_text(record))
    return 0


def _cmd_check(args: argparse.Namespace, record: Syllabus) -> int:
    """
    Report assessment total, year filter status and missing required fields.
    """
    problems = 0

    assessment = validate_assessment_total(record.assessment_breakdown)
    status = "OK" if assessment.is_valid else "WARNING"
    print(f"Assessment: {assessment.message()} [{status}]")
    if not assessment.is_valid:
        problems += 1

    try:
        parse_year_filter(record.references_year_filter)
    except InvalidYearFilter as exc:
        print(f"References: {exc} (all references are kept)")
        problems += 1
    else:
        kept = filter_references_by_year(record.references_list, record.references_year_filter)
        expr = record.references_year_filter.strip() or "(none)"
        print(f"References: {len(kept)} of {len(record.references_list)} kept by filter {expr}")

    errors = validate_syllabus(record)
    if errors:
        print(f"Missing or invalid fields: {len(errors)}")
        for err in errors:
            print(f"- {err.field}: {err.message}")
        problems += len(errors)
    else:
        print("Required fields: OK")

    return 0 if problems == 0 else 1


def _cmd_export(args: argparse.Namespace, record: Syllabus) -> int:
    """
    Export the working copy as text, JSON or Word document.
    """
    exporter, suffix = EXPORTERS[args.format]
    out_path = (args.out or "").strip() or default_export_name(record, suffix)

    if args.format == "docx":
        out = export_docx(record, out_path, logo_path=args.logo)
    else:
        out = exporter(record, out_path)
    print(f"Exported {args.format} to: {Path(out).resolve()}")
    return 0


def _cmd_import(args: argparse.Namespace, record: Syllabus) -> int:
    """
    Merge a JSON snapshot into the working copy.
    """
    data = import_json(args.file)
    updated = apply_edit(record, MergeData(data))
    _save(args, updated)
    print(f"Imported {len(data)} field(s) from: {args.file}")
    return 0


def _cmd_reset(args: argparse.Namespace, record: Syllabus) -> int:
    _save(args, apply_edit(record, ResetToDefaults()))
    print("Reset to default values.")
    return 0


def _cmd_fields(args: argparse.Namespace, record: Syllabus) -> int:
    """
    List editable field names (JSON key and attribute name).
    """
    print("Text fields:")
    for attr in SCALAR_FIELDS:
        print(f"  {JSON_KEYS[attr]:<22} {attr}")
    print("List fields:")
    for attr in LIST_FIELDS:
        print(f"  {JSON_KEYS[attr]:<22} {attr} ({len(getattr(record, attr))} items)")
    print("Terms:")
    for i, term in enumerate(record.terms, start=1):
        print(f"  {i}) {term.name} ({len(term.rows)} weeks)")
    return 0


def _cmd_set(args: argparse.Namespace, record: Syllabus) -> int:
    updated = apply_edit(record, SetField(args.field, args.value))
    _save(args, updated)
    print(f"Updated: {args.field}")
    return 0


def _cmd_add(args: argparse.Namespace, record: Syllabus) -> int:
    updated = apply_edit(record, AddListItem(args.field, args.value))
    _save(args, updated)
    print(f"Added to {args.field}")
    return 0


def _cmd_set_item(args: argparse.Namespace, record: Syllabus) -> int:
    updated = apply_edit(record, SetListItem(args.field, _position(args.position), args.value))
    _save(args, updated)
    print(f"Updated {args.field} #{args.position}")
    return 0


def _cmd_remove(args: argparse.Namespace, record: Syllabus) -> int:
    updated = apply_edit(record, RemoveListItem(args.field, _position(args.position)))
    _save(args, updated)
    print(f"Removed {args.field} #{args.position}")
    return 0


def _cmd_week_add(args: argparse.Namespace, record: Syllabus) -> int:
    t = term_index(record, args.term)
    updated = apply_edit(record, AddTermRow(t))
    _save(args, updated)
    print(f"Added {updated.terms[t].rows[-1].week} to {updated.terms[t].name}")
    return 0


def _cmd_week_set(args: argparse.Namespace, record: Syllabus) -> int:
    t = term_index(record, args.term)
    changes = row_changes(week=args.week, topics=args.topics, outcomes=args.outcomes, activities=args.activities)
    if not changes:
        print("Nothing to change (use --week, --topics, --outcomes or --activities).")
        return 1

    updated = apply_edit(record, UpdateTermRow(t, _position(args.row), changes))
    _save(args, updated)
    print(f"Updated {updated.terms[t].name} row {args.row}")
    return 0


def _cmd_week_remove(args: argparse.Namespace, record: Syllabus) -> int:
    t = term_index(record, args.term)
    updated = apply_edit(record, RemoveTermRow(t, _position(args.row)))
    _save(args, updated)
    print(f"Removed {record.terms[t].name} row {args.row}")
    return 0


HANDLERS = {
    "render": _cmd_render,
    "check": _cmd_check,
    "export": _cmd_export,
    "import": _cmd_import,
    "reset": _cmd_reset,
    "fields": _cmd_fields,
    "set": _cmd_set,
    "add": _cmd_add,
    "set-item": _cmd_set_item,
    "remove": _cmd_remove,
    "week-add": _cmd_week_add,
    "week-set": _cmd_week_set,
    "week-remove": _cmd_week_remove,
}


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="syllabusgen", description="Syllabus generator CLI")
    parser.add_argument("--state", type=Path, default=None, help="Working copy file (default: package data)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug log output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Print the canonical syllabus text")
    p_render.add_argument("--out", type=str, default=None, help="Write to a .txt file instead")

    sub.add_parser("check", help="Check assessment total, year filter and required fields")

    p_export = sub.add_parser("export", help="Export as text, JSON or DOCX")
    p_export.add_argument("format", choices=sorted(EXPORTERS), help="Export format")
    p_export.add_argument("out", nargs="?", default=None, help="Output file (default: <courseCode>_syllabus.<ext>)")
    p_export.add_argument("--logo", type=str, default=None, help="Logo image placed below the address (docx only)")

    p_import = sub.add_parser("import", help="Merge a JSON snapshot into the working copy")
    p_import.add_argument("file", type=str, help="JSON file")

    sub.add_parser("reset", help="Reset the working copy to the default values")
    sub.add_parser("fields", help="List editable fields")

    p_set = sub.add_parser("set", help="Set a text field")
    p_set.add_argument("field", type=str, help="Field name (e.g. courseCode or course_code)")
    p_set.add_argument("value", type=str, help="New value")

    p_add = sub.add_parser("add", help="Append an item to a list field")
    p_add.add_argument("field", type=str, help="List field (e.g. referencesList)")
    p_add.add_argument("value", type=str, help="Item text")

    p_set_item = sub.add_parser("set-item", help="Replace an item of a list field")
    p_set_item.add_argument("field", type=str, help="List field")
    p_set_item.add_argument("position", type=str, help="Item number (1-based)")
    p_set_item.add_argument("value", type=str, help="Item text")

    p_remove = sub.add_parser("remove", help="Remove an item from a list field")
    p_remove.add_argument("field", type=str, help="List field")
    p_remove.add_argument("position", type=str, help="Item number (1-based)")

    p_week_add = sub.add_parser("week-add", help="Append an empty week row to a term")
    p_week_add.add_argument("term", type=str, help="Term name or number (e.g. Prelim or 1)")

    p_week_set = sub.add_parser("week-set", help="Change a week row")
    p_week_set.add_argument("term", type=str, help="Term name or number")
    p_week_set.add_argument("row", type=str, help="Row number (1-based)")
    p_week_set.add_argument("--week", type=str, default=None)
    p_week_set.add_argument("--topics", type=str, default=None)
    p_week_set.add_argument("--outcomes", type=str, default=None)
    p_week_set.add_argument("--activities", type=str, default=None)

    p_week_remove = sub.add_parser("week-remove", help="Remove a week row")
    p_week_remove.add_argument("term", type=str, help="Term name or number")
    p_week_remove.add_argument("row", type=str, help="Row number (1-based)")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG)

    if args.command == "interactive":
        from syllabusgen.interactive import run_interactive

        run_interactive(state_path=args.state)
        raise SystemExit(0)

    handler = HANDLERS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    record = load_syllabus(args.state)
    try:
        code = handler(args, record)
    except SyllabusError as exc:
        print(f"Error: {exc}")
        code = 1

    raise SystemExit(code)
