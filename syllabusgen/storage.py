"""
Persistent storage for the working copy of the syllabus.

This module manages the file:

    data/syllabus.json

Design rationale:
- the formatter and the validators only ever see a finished snapshot
- the CLI and the interactive menu load the working copy, apply one edit
  and save the whole record again (replace-on-edit)

File format:

    {"version": 1, "syllabus": {<camelCase JSON snapshot>}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from syllabusgen.defaults import default_syllabus
from syllabusgen.errors import StorageError
from syllabusgen.model import Syllabus, syllabus_from_dict, syllabus_to_dict

logger = logging.getLogger(__name__)

STORAGE_VERSION = 1


def _default_state_path() -> Path:
    """
    Return the default path of syllabus.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "syllabus.json"


def _unwrap(data: Any) -> Any:
    # Accept both the wrapped storage format and a bare JSON snapshot
    if isinstance(data, dict) and isinstance(data.get("syllabus"), dict):
        return data["syllabus"]
    return data


def load_syllabus(path: str | Path | None = None) -> Syllabus:
    """
    Load the working copy.

    Returns the built-in defaults if the file does not exist or is invalid.
    This function never crashes the application because of a broken file.
    """
    state_path = Path(path) if path is not None else _default_state_path()

    # First run: nothing saved yet -> defaults
    if not state_path.exists():
        return default_syllabus()

    try:
        data = _unwrap(json.loads(state_path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s (%s); using defaults", state_path, exc)
        return default_syllabus()

    if not isinstance(data, dict):
        logger.warning("Unexpected content in %s; using defaults", state_path)
        return default_syllabus()

    return syllabus_from_dict(data)


def save_syllabus(record: Syllabus, path: str | Path | None = None) -> Path:
    """
    Save the working copy. Creates parent directories if needed.
    """
    state_path = Path(path) if path is not None else _default_state_path()
    payload = {"version": STORAGE_VERSION, "syllabus": syllabus_to_dict(record)}
    try:
        state_path.parent.mkdir(parents=True, exist_ok=True)
        state_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise StorageError(str(state_path), str(exc)) from exc
    logger.debug("Saved working copy to %s", state_path)
    return state_path
