"""
Unit tests for loader.py

Tests reading documents from disk and mapping failures to document errors.
"""

import io
import json
import os
import tempfile
import unittest
from pathlib import Path

from documents.errors import (
    DocumentError,
    DocumentNotFoundError,
    DocumentParseError,
    DocumentReadError,
    MalformedDocumentError,
)
from documents.loader import (
    dump_document,
    load_document,
    load_documents,
    load_named_documents,
    resource_path,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadDocument(unittest.TestCase):
    """Test loading a single document."""

    def test_load_fixture(self):
        """Test loading a well-formed extraction document."""
        payload = load_document(str(FIXTURES / "unit_a.json"))
        self.assertEqual([m["name"] for m in payload["macros"]], ["BUFFER_SIZE", "MAX"])
        self.assertIn("structs", payload)

    def test_missing_file(self):
        """Test that a missing path raises DocumentNotFoundError."""
        with self.assertRaises(DocumentNotFoundError) as ctx:
            load_document(str(FIXTURES / "does_not_exist.json"))
        self.assertIsInstance(ctx.exception, FileNotFoundError)
        self.assertIsInstance(ctx.exception, DocumentError)
        self.assertIn("does_not_exist.json", str(ctx.exception))

    def test_directory_is_read_error(self):
        """Test that a directory path raises DocumentReadError."""
        with self.assertRaises(DocumentReadError):
            load_document(str(FIXTURES))

    def test_invalid_utf8_is_read_error(self):
        """Test that undecodable bytes raise DocumentReadError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "latin1.json"
            path.write_bytes(b'{"macros": ["\xff"]}')
            with self.assertRaises(DocumentReadError):
                load_document(str(path))

    def test_bad_syntax(self):
        """Test that malformed JSON raises DocumentParseError with a position."""
        with self.assertRaises(DocumentParseError) as ctx:
            load_document(str(FIXTURES / "bad_syntax.json"))
        self.assertGreater(ctx.exception.line, 0)
        self.assertIn("bad_syntax.json", str(ctx.exception))

    def test_top_level_must_be_object(self):
        """Test that a top-level array is malformed."""
        with self.assertRaises(MalformedDocumentError) as ctx:
            load_document(str(FIXTURES / "not_object.json"))
        self.assertIsNone(ctx.exception.field)
        self.assertEqual(ctx.exception.actual_type, "list")


class TestLoadDocuments(unittest.TestCase):
    """Test loading several documents in order."""

    def test_order_preserved(self):
        """Test that documents come back in argument order."""
        paths = [str(FIXTURES / "unit_b.json"), str(FIXTURES / "unit_a.json")]
        loaded = load_documents(paths)
        self.assertEqual([doc.path for doc in loaded], paths)
        self.assertIn("enums", loaded[0].payload)

    def test_first_failure_aborts(self):
        """Test that one bad file fails the whole load."""
        paths = [str(FIXTURES / "unit_a.json"), str(FIXTURES / "bad_syntax.json")]
        with self.assertRaises(DocumentParseError):
            load_documents(paths)


class TestLoadNamedDocuments(unittest.TestCase):
    """Test loading fixed-name resources from a directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name
        with open(os.path.join(self.tmpdir, "macros.json"), "w", encoding="utf-8") as f:
            json.dump({"BUFFER_SIZE": [{"numeric_constant": "4096"}]}, f)

    def tearDown(self):
        self._tmp.cleanup()

    def test_resource_path(self):
        """Test the fixed-name path convention."""
        self.assertEqual(resource_path("out", "macros"), os.path.join("out", "macros.json"))

    def test_missing_resource_skipped(self):
        """Test that missing resources are skipped in non-strict mode."""
        with self.assertLogs("documents.loader", level="WARNING"):
            loaded = load_named_documents(self.tmpdir, ["macros", "functions"])
        self.assertEqual([doc.name for doc in loaded], ["macros"])
        self.assertIn("BUFFER_SIZE", loaded[0].payload)

    def test_missing_resource_strict(self):
        """Test that missing resources raise in strict mode."""
        with self.assertRaises(DocumentNotFoundError):
            load_named_documents(self.tmpdir, ["macros", "functions"], strict=True)

    def test_bad_resource_raises(self):
        """Test that a malformed resource is always an error."""
        with open(os.path.join(self.tmpdir, "structs.json"), "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(DocumentParseError):
            load_named_documents(self.tmpdir, ["structs"])


class TestDumpDocument(unittest.TestCase):
    """Test writing documents."""

    def test_two_space_indent(self):
        """Test that output is indented with two spaces and newline-terminated."""
        buffer = io.StringIO()
        dump_document({"macros": ["A"]}, buffer)
        self.assertEqual(buffer.getvalue(), '{\n  "macros": [\n    "A"\n  ]\n}\n')

    def test_non_ascii_preserved(self):
        """Test that non-ASCII text is written as-is."""
        buffer = io.StringIO()
        dump_document({"macros": ["größe"]}, buffer)
        self.assertIn("größe", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
