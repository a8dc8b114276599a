"""
Word (.docx) export.

The document is built from the canonical text lines, so it always shows
the same content as the plain-text export:
- line 1 / line 2: institution name and address, centered
- section titles and term names: bold headings
- each term's week rows: one 4-column table (split on tabs)
- everything else: one Arial 11pt paragraph per line

Page setup: landscape letter (11in x 8.5in), 0.5in margins.
An optional logo image is centered below the address.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.shared import Inches, Pt

from syllabusgen.errors import ExportError
from syllabusgen.format import SECTION_TITLES, SEPARATOR, WEEK_HEADER, build_lines
from syllabusgen.model import Syllabus

logger = logging.getLogger(__name__)

FONT_NAME = "Arial"
COLUMNS = 4
LOGO_SIZE = Inches(0.73)


def _add_line(doc, text: str, size: int = 11, bold: bool = False, center: bool = False, after: int = 3):
    paragraph = doc.add_paragraph()
    run = paragraph.add_run(text)
    run.bold = bold
    run.font.name = FONT_NAME
    run.font.size = Pt(size)
    if center:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_after = Pt(after)
    return paragraph


def _split_row(line: str) -> List[str]:
    cells = line.split("\t", COLUMNS - 1)
    return cells + [""] * (COLUMNS - len(cells))


def _add_table(doc, header: str):
    table = doc.add_table(rows=1, cols=COLUMNS)
    table.style = "Table Grid"
    for cell, text in zip(table.rows[0].cells, _split_row(header)):
        cell.text = text
        for run in cell.paragraphs[0].runs:
            run.bold = True
    return table


def _add_table_row(table, line: str) -> None:
    cells = table.add_row().cells
    for cell, text in zip(cells, _split_row(line)):
        cell.text = text


def _add_logo(doc, logo_path: str | Path) -> None:
    # A missing or unreadable logo is skipped, the rest of the document still exports
    paragraph = doc.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_after = Pt(18)
    try:
        paragraph.add_run().add_picture(str(logo_path), width=LOGO_SIZE, height=LOGO_SIZE)
    except (OSError, UnrecognizedImageError) as exc:
        logger.warning("Could not load logo %s (%s); exporting without it", logo_path, exc)
        paragraph._element.getparent().remove(paragraph._element)


def build_document(record: Syllabus, logo_path: str | Path | None = None):
    """
    Build the python-docx Document for a record (not saved).

    If `logo_path` is given, the image is placed centered below the address.
    """
    doc = Document()

    section = doc.sections[0]
    section.orientation = WD_ORIENT.LANDSCAPE
    section.page_width = Inches(11)
    section.page_height = Inches(8.5)
    for side in ("top_margin", "right_margin", "bottom_margin", "left_margin"):
        setattr(section, side, Inches(0.5))

    normal = doc.styles["Normal"]
    normal.font.name = FONT_NAME
    normal.font.size = Pt(11)

    lines = build_lines(record)
    table = None

    for i, line in enumerate(lines):
        next_line: Optional[str] = lines[i + 1] if i + 1 < len(lines) else None

        if i == 0:
            _add_line(doc, line, size=16, bold=True, center=True, after=12)
        elif i == 1:
            _add_line(doc, line, size=12, center=True, after=12)
            if logo_path is not None:
                _add_logo(doc, logo_path)
        elif line == WEEK_HEADER:
            table = _add_table(doc, line)
        elif table is not None and line != SEPARATOR:
            _add_table_row(table, line)
        elif line == SEPARATOR:
            table = None
            _add_line(doc, line, center=True, after=12)
        elif line in SECTION_TITLES or next_line == WEEK_HEADER:
            _add_line(doc, line, size=12, bold=True, after=6)
        else:
            _add_line(doc, line)

    return doc


def export_docx(record: Syllabus, out_path: str | Path, logo_path: str | Path | None = None) -> Path:
    """
    Write the record as a .docx file. Returns the written path.

    Raises ExportError if the file cannot be written or a field holds
    text Word cannot store (control characters such as "\\x0b").
    """
    out = Path(out_path)
    try:
        doc = build_document(record, logo_path=logo_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(out))
    except (OSError, ValueError) as exc:
        raise ExportError(str(out), str(exc)) from exc

    logger.info("Exported DOCX to %s", out)
    return out
