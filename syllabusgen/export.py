"""
Plain-text and JSON export / import.

- export_text(): the canonical text exactly as build_final_text() returns it
- export_json(): the structured record (camelCase snapshot), not the text
- import_json(): reads a snapshot back as a plain dict (merged by the caller)

The Word document export lives in export_docx.py.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from syllabusgen.errors import ExportError, SyllabusImportError
from syllabusgen.format import build_final_text
from syllabusgen.model import Syllabus, syllabus_to_dict

logger = logging.getLogger(__name__)


def default_export_name(record: Syllabus, suffix: str) -> str:
    """
    Default file name, e.g. "ICT 101_syllabus.json".
    """
    code = record.course_code.strip() or "syllabus"
    return f"{code}_syllabus{suffix}"


def _write(out_path: str | Path, content: str) -> Path:
    out = Path(out_path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" as-is on every platform
        with out.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise ExportError(str(out), str(exc)) from exc
    return out


def export_text(record: Syllabus, out_path: str | Path) -> Path:
    """
    Write the canonical text to a file. Returns the written path.
    """
    out = _write(out_path, build_final_text(record))
    logger.info("Exported text to %s", out)
    return out


def export_json(record: Syllabus, out_path: str | Path) -> Path:
    """
    Write the JSON snapshot of the record. Returns the written path.
    """
    out = _write(out_path, json.dumps(syllabus_to_dict(record), indent=2, ensure_ascii=False))
    logger.info("Exported JSON to %s", out)
    return out


def import_json(path: str | Path) -> Dict[str, Any]:
    """
    Read a JSON snapshot. The result may be partial; merge it with MergeData.

    Raises SyllabusImportError if the file is missing, unreadable, not JSON,
    or does not contain a JSON object.
    """
    src = Path(path)
    try:
        text = src.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SyllabusImportError(str(src), "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SyllabusImportError(str(src), str(exc)) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SyllabusImportError(str(src), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    # Files saved by the storage layer wrap the snapshot
    if isinstance(data, dict) and isinstance(data.get("syllabus"), dict):
        data = data["syllabus"]

    if not isinstance(data, dict):
        raise SyllabusImportError(str(src), "expected a JSON object")

    logger.info("Imported %d field(s) from %s", len(data), src)
    return data
