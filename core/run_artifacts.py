"""Run report and output file writers for merge invocations."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from typing import Any

DEFAULT_REPORT_DIR = "output/merge_reports"


def write_text_atomic(path: str, text: str) -> str:
    """Write ``text`` to ``path`` through a temporary sibling and a rename.

    Readers never see a half-written file; on failure the previous content
    (if any) is left in place and the temporary file is removed.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return path


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = DEFAULT_REPORT_DIR,
) -> str:
    """Write ``<run_id>.json`` into ``output_dir`` and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    return write_text_atomic(path, json.dumps(payload, indent=2, sort_keys=True))
