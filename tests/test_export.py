"""
Unit tests for text / JSON / DOCX export and JSON import.
"""

import base64
import json
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

from docx import Document

from syllabusgen.defaults import default_syllabus
from syllabusgen.edits import MergeData, apply_edit
from syllabusgen.errors import ExportError, SyllabusImportError
from syllabusgen.export import default_export_name, export_json, export_text, import_json
from syllabusgen.export_docx import build_document, export_docx
from syllabusgen.format import WEEK_HEADER, build_final_text


# 1x1 transparent PNG
LOGO_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class TestTextAndJsonExport(unittest.TestCase):
    def test_text_export_is_byte_exact(self) -> None:
        record = default_syllabus()
        with tempfile.TemporaryDirectory() as d:
            out = export_text(record, Path(d) / "out.txt")
            with out.open("r", encoding="utf-8", newline="") as fh:
                self.assertEqual(fh.read(), build_final_text(record))

    def test_json_export_is_structured_record(self) -> None:
        record = default_syllabus()
        with tempfile.TemporaryDirectory() as d:
            out = export_json(record, Path(d) / "out.json")
            data = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(data["courseCode"], "ICT 101")
        self.assertEqual(len(data["terms"]), 4)
        self.assertNotIn("version", data)

    def test_json_roundtrip_through_import(self) -> None:
        record = replace(default_syllabus(), course_code="ICT 205", references_list=("Only (2024)",))
        with tempfile.TemporaryDirectory() as d:
            out = export_json(record, Path(d) / "snapshot.json")
            data = import_json(out)
        self.assertEqual(apply_edit(default_syllabus(), MergeData(data)), record)

    def test_export_creates_parent_directories(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = export_text(default_syllabus(), Path(d) / "a" / "b" / "out.txt")
            self.assertTrue(out.exists())

    def test_write_failure_raises_export_error(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            # the target is an existing directory
            with self.assertRaises(ExportError):
                export_text(default_syllabus(), d)
            with self.assertRaises(ExportError) as ctx:
                export_json(default_syllabus(), d)
        self.assertEqual(ctx.exception.path, d)

    def test_default_export_name(self) -> None:
        record = default_syllabus()
        self.assertEqual(default_export_name(record, ".docx"), "ICT 101_syllabus.docx")
        self.assertEqual(default_export_name(replace(record, course_code="  "), ".txt"), "syllabus_syllabus.txt")


class TestImportJson(unittest.TestCase):
    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(SyllabusImportError) as ctx:
                import_json(Path(d) / "nope.json")
        self.assertIn("file not found", str(ctx.exception))

    def test_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bad.json"
            p.write_text("{oops", encoding="utf-8")
            with self.assertRaises(SyllabusImportError):
                import_json(p)

    def test_non_object_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "list.json"
            p.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(SyllabusImportError) as ctx:
                import_json(p)
        self.assertIn("expected a JSON object", str(ctx.exception))

    def test_storage_wrapper_is_unwrapped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "state.json"
            p.write_text(json.dumps({"version": 1, "syllabus": {"courseCode": "X"}}), encoding="utf-8")
            self.assertEqual(import_json(p), {"courseCode": "X"})


class TestDocxExport(unittest.TestCase):
    def test_one_table_per_term(self) -> None:
        record = default_syllabus()
        doc = build_document(record)
        self.assertEqual(len(doc.tables), len(record.terms))

        header = [c.text for c in doc.tables[0].rows[0].cells]
        self.assertEqual(header, WEEK_HEADER.split("\t"))

        for table, term in zip(doc.tables, record.terms):
            self.assertEqual(len(table.rows), len(term.rows) + 1)

        first_row = [c.text for c in doc.tables[0].rows[1].cells]
        self.assertEqual(first_row[0], "Week 1")
        self.assertEqual(first_row[1], "Introduction to Computers & Technology")

    def test_header_and_landscape_page(self) -> None:
        doc = build_document(default_syllabus())
        self.assertEqual(doc.paragraphs[0].text, "BUCAS GRANDE FOUNDATION COLLEGE")
        self.assertTrue(doc.paragraphs[0].runs[0].bold)
        section = doc.sections[0]
        self.assertGreater(section.page_width, section.page_height)

    def test_export_docx_writes_readable_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = export_docx(default_syllabus(), Path(d) / "out.docx")
            doc = Document(str(out))
        self.assertEqual(len(doc.tables), 4)
        texts = [p.text for p in doc.paragraphs]
        self.assertIn("Course Code: ICT 101", texts)
        self.assertIn("Approved by: Atty. Ralna Dela Peña ", texts)

    def test_control_characters_raise_export_error(self) -> None:
        record = replace(default_syllabus(), course_description="Intro\x01text")
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.docx"
            with self.assertRaises(ExportError):
                export_docx(record, out)
            self.assertFalse(out.exists())

    def test_docx_write_failure_raises_export_error(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(ExportError):
                export_docx(default_syllabus(), d)

    def test_logo_below_address(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            logo = Path(d) / "logo.png"
            logo.write_bytes(LOGO_PNG)
            doc = build_document(default_syllabus(), logo_path=logo)
        self.assertEqual(len(doc.inline_shapes), 1)
        self.assertEqual(doc.paragraphs[2].text, "")
        self.assertEqual(doc.paragraphs[3].text, "")
        self.assertEqual(doc.paragraphs[4].text, "Course Code: ICT 101")

    def test_missing_logo_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertLogs("syllabusgen.export_docx", level="WARNING"):
                doc = build_document(default_syllabus(), logo_path=Path(d) / "missing.png")
        self.assertEqual(len(doc.inline_shapes), 0)
        self.assertEqual(doc.paragraphs[3].text, "Course Code: ICT 101")


if __name__ == "__main__":
    unittest.main()
