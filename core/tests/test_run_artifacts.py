"""Tests for run report writer."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.run_artifacts import write_run_report, write_text_atomic


class TestRunArtifacts(unittest.TestCase):
    def test_write_run_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"status": "success", "inputs": ["a.json", "b.json"]},
                run_id="run-123",
                output_dir=tmpdir,
            )
            self.assertEqual(Path(path).name, "run-123.json")
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["inputs"], ["a.json", "b.json"])
            self.assertIn("timestamp_utc", payload)
            self.assertEqual(os.listdir(tmpdir), ["run-123.json"])

    def test_creates_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = os.path.join(tmpdir, "nested", "reports")
            path = write_run_report({"status": "failed"}, "run-x", output_dir=target)
            self.assertTrue(Path(path).is_file())

    def test_report_values_not_overridden(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                {"run_id": "explicit", "timestamp_utc": "then"}, "run-y", output_dir=tmpdir
            )
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "explicit")
            self.assertEqual(payload["timestamp_utc"], "then")

    def test_write_text_atomic_replaces_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = os.path.join(tmpdir, "merged.json")
            Path(target).write_text("old", encoding="utf-8")
            write_text_atomic(target, "new")
            self.assertEqual(Path(target).read_text(encoding="utf-8"), "new")
            self.assertEqual(os.listdir(tmpdir), ["merged.json"])

    def test_write_text_atomic_failure_leaves_no_partial_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = os.path.join(tmpdir, "merged.json")
            with patch("core.run_artifacts.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    write_text_atomic(target, "{}")
            self.assertEqual(os.listdir(tmpdir), [])


if __name__ == "__main__":
    unittest.main()
