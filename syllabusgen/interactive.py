from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

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
)
from syllabusgen.errors import InvalidYearFilter, SyllabusError
from syllabusgen.export import default_export_name, export_json, export_text, import_json
from syllabusgen.export_docx import export_docx
from syllabusgen.format import build_final_text
from syllabusgen.model import JSON_KEYS, LIST_FIELDS, ROW_FIELDS, SCALAR_FIELDS, Syllabus
from syllabusgen.storage import load_syllabus, save_syllabus
from syllabusgen.validation import parse_year_filter, validate_assessment_total, validate_syllabus

console = Console()

ROW_LABELS = {
    "week": "Week",
    "topics": "Topics",
    "outcomes": "Intended Learning Outcomes",
    "activities": "Activities / Assessment",
}


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(escape(msg))


def _short(text: Any, max_len: int = 60) -> str:
    s = "" if text is None else str(text).replace("\n", " ")
    if len(s) > max_len:
        s = s[: max_len - 1].rstrip() + "…"
    return s


def _pick_number(msg: str, size: int) -> Optional[int]:
    """
    Ask for a 1-based number. Returns the 0-based index or None (blank / invalid).
    """
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdecimal():
        _println("Not a number.")
        return None
    i = int(pick)
    if not (1 <= i <= size):
        _println("Out of range.")
        return None
    return i - 1


def run_interactive(state_path: Optional[Path] = None) -> None:
    """
    Interactive menu loop. Every change is applied through apply_edit()
    and saved immediately.
    """
    record = load_syllabus(state_path)

    flows: dict[str, Callable[[Syllabus], Syllabus]] = {
        "1": _flow_preview,
        "2": _flow_edit_field,
        "3": _flow_edit_list,
        "4": _flow_weeks,
        "5": _flow_check,
        "6": _flow_export,
        "7": _flow_import,
        "8": _flow_reset,
    }

    while True:
        _print_header(record)

        choice = _prompt(
            "\n[1] Preview text\n"
            "[2] Edit a text field\n"
            "[3] Edit a list (mission, outcomes, references, ...)\n"
            "[4] Week-by-week tables\n"
            "[5] Check assessment total & required fields\n"
            "[6] Export (text / JSON / DOCX)\n"
            "[7] Import JSON\n"
            "[8] Reset to defaults\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        flow = flows.get(choice)
        if flow is None:
            _println("Invalid choice.")
            continue

        try:
            updated = flow(record)
            if updated is not record:
                save_syllabus(updated, state_path)
                record = updated
                _println("[green]Saved.[/]")
        except SyllabusError as exc:
            _println(f"[red]Error:[/] {escape(str(exc))}")


def _print_header(record: Syllabus) -> None:
    assessment = validate_assessment_total(record.assessment_breakdown)
    color = "green" if assessment.is_valid else "yellow"
    weeks = sum(len(t.rows) for t in record.terms)

    _println("\n=== Syllabus generator (interactive) ===")
    title = " | ".join(escape(x) for x in (record.course_title, record.institution_name))
    _println(f"[bold cyan]{escape(record.course_code)}[/] | {title}")
    _println(f"Terms: {len(record.terms)} | Weeks: {weeks} | Assessment: [{color}]{assessment.message()}[/]")


def _flow_preview(record: Syllabus) -> Syllabus:
    console.print(build_final_text(record), markup=False, highlight=False)
    _prompt("\nPress Enter to go back...")
    return record


def _flow_edit_field(record: Syllabus) -> Syllabus:
    table = Table(title="Text fields", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Field")
    table.add_column("Value")
    for i, attr in enumerate(SCALAR_FIELDS, start=1):
        table.add_row(str(i), JSON_KEYS[attr], escape(_short(getattr(record, attr))))
    console.print(table)

    idx = _pick_number("Field number [blank = back]: ", len(SCALAR_FIELDS))
    if idx is None:
        return record

    attr = SCALAR_FIELDS[idx]
    _println(f"Current: {escape(getattr(record, attr))}")
    value = _prompt("New value [blank = keep]: ")
    if not value.strip():
        return record

    return apply_edit(record, SetField(attr, value.strip()))


def _show_list(attr: str, items: tuple) -> None:
    table = Table(title=JSON_KEYS[attr], box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Item")
    for i, item in enumerate(items, start=1):
        table.add_row(str(i), escape(_short(item, 100)))
    console.print(table)


def _flow_edit_list(record: Syllabus) -> Syllabus:
    for i, attr in enumerate(LIST_FIELDS, start=1):
        _println(f"{i}) {JSON_KEYS[attr]} ({len(getattr(record, attr))} items)")

    idx = _pick_number("List number [blank = back]: ", len(LIST_FIELDS))
    if idx is None:
        return record
    attr = LIST_FIELDS[idx]

    # Loop so the user can make several changes without re-entering the menu
    while True:
        items = getattr(record, attr)
        _show_list(attr, items)
        if attr == "assessment_breakdown":
            _println(validate_assessment_total(items).message())

        action = _prompt("[a]dd, [e]dit, [r]emove, blank = back: ").strip().lower()
        if not action:
            return record

        if action == "a":
            value = _prompt("New item: ").strip()
            if value:
                record = apply_edit(record, AddListItem(attr, value))
        elif action == "e":
            i = _pick_number("Item number: ", len(items))
            if i is not None:
                _println(f"Current: {escape(items[i])}")
                value = _prompt("New text [blank = keep]: ").strip()
                if value:
                    record = apply_edit(record, SetListItem(attr, i, value))
        elif action == "r":
            i = _pick_number("Item number to remove: ", len(items))
            if i is not None:
                record = apply_edit(record, RemoveListItem(attr, i))
        else:
            _println("Invalid choice.")


def _flow_weeks(record: Syllabus) -> Syllabus:
    for i, term in enumerate(record.terms, start=1):
        _println(f"{i}) {escape(term.name)} ({len(term.rows)} weeks)")

    t = _pick_number("Term number [blank = back]: ", len(record.terms))
    if t is None:
        return record

    while True:
        term = record.terms[t]
        table = Table(title=escape(term.name), box=box.SIMPLE)
        table.add_column("#", justify="right")
        for name in ROW_FIELDS:
            table.add_column(ROW_LABELS[name])
        for i, row in enumerate(term.rows, start=1):
            table.add_row(str(i), *(escape(_short(getattr(row, name), 40)) for name in ROW_FIELDS))
        console.print(table)

        action = _prompt("[a]dd week, [e]dit week, [r]emove week, blank = back: ").strip().lower()
        if not action:
            return record

        if action == "a":
            record = apply_edit(record, AddTermRow(t))
        elif action == "e":
            r = _pick_number("Row number: ", len(term.rows))
            if r is None:
                continue
            changes = {}
            for name in ROW_FIELDS:
                value = _prompt(f"{ROW_LABELS[name]} [{_short(getattr(term.rows[r], name), 40)}]: ").strip()
                if value:
                    changes[name] = value
            if changes:
                record = apply_edit(record, UpdateTermRow(t, r, changes))
        elif action == "r":
            r = _pick_number("Row number to remove: ", len(term.rows))
            if r is not None:
                record = apply_edit(record, RemoveTermRow(t, r))
        else:
            _println("Invalid choice.")


def _flow_check(record: Syllabus) -> Syllabus:
    assessment = validate_assessment_total(record.assessment_breakdown)
    if assessment.is_valid:
        _println(f"[green]Assessment {assessment.message()}[/]")
    else:
        _println(f"[yellow]Assessment {assessment.message()}[/]")
        _println("Note: Assessment items should total exactly 100%.")

    try:
        parse_year_filter(record.references_year_filter)
    except InvalidYearFilter as exc:
        _println(f"[yellow]{escape(str(exc))}[/] (all references are kept)")

    errors = validate_syllabus(record)
    if not errors:
        _println("[green]All required fields are filled in.[/]")
    for err in errors:
        _println(f"- {escape(err.field)}: {escape(err.message)}")

    return record


def _flow_export(record: Syllabus) -> Syllabus:
    formats = {
        "1": ("text", export_text, ".txt"),
        "2": ("json", export_json, ".json"),
        "3": ("docx", export_docx, ".docx"),
    }
    pick = _prompt("[1] Text  [2] JSON  [3] DOCX  [blank = back]: ").strip()
    if pick not in formats:
        return record
    label, exporter, suffix = formats[pick]

    # Default to user's Downloads folder (works on Windows/macOS/Linux)
    downloads = Path.home() / "Downloads"
    default_name = default_export_name(record, suffix)

    out_in = _prompt(f"Please enter desired file name, default is [{default_name}]: ").strip()
    out_path = downloads / (out_in or default_name)
    if out_path.suffix.lower() != suffix:
        out_path = out_path.with_suffix(suffix)

    out = exporter(record, out_path)
    _println(f"\nExported {label}.")
    _println(f"Saved to: {escape(str(Path(out).resolve()))}")
    return record


def _flow_import(record: Syllabus) -> Syllabus:
    path = _prompt("JSON file to import [blank = back]: ").strip()
    if not path:
        return record
    data = import_json(path)
    _println(f"Imported {len(data)} field(s).")
    return apply_edit(record, MergeData(data))


def _flow_reset(record: Syllabus) -> Syllabus:
    confirm = _prompt("Reset to default values? This clears all your changes. [y/N]: ").strip().lower()
    if confirm != "y":
        return record
    return apply_edit(record, ResetToDefaults())
