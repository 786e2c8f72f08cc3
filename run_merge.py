#!/usr/bin/env python3
"""
Merge per-translation-unit extraction documents into one aggregate document.

Each input file is one JSON object written by the front-end plugin. The
configured fields (macros, functions, enums by default) are concatenated
in input order; every other field is dropped. Any read, parse or shape
failure aborts the whole merge and nothing is written to stdout.

Usage:
    python run_merge.py a.json b.json c.json > merged.json
    python run_merge.py --field macros --field structs a.json b.json
    python run_merge.py --config cleng.yml --report-dir output/merge_reports *.json
"""

import argparse
import io
import logging
import sys
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from core.run_artifacts import DEFAULT_REPORT_DIR, write_run_report, write_text_atomic
from core.startup_config import (
    ConfigValidationError,
    load_tool_config,
    resolve_config_path,
    resolve_log_level,
    resolve_merge_fields,
    resolve_strict_config_validation,
    resolve_strict_fields,
)
from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    phase_scope,
    set_run_id,
)
from documents.errors import DocumentError
from documents.loader import dump_document, load_documents
from documents.merger import merge_documents_with_stats

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Merge extraction documents field by field",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_merge.py unit1.json unit2.json > merged.json\n"
            "  python run_merge.py --field macros --field enums unit*.json\n"
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Extraction documents to merge, in output order.",
    )
    parser.add_argument(
        "--field",
        dest="fields",
        action="append",
        default=None,
        help="Field to aggregate (repeatable). Default: merge.fields from config, "
        "else macros, functions, enums.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the merged document to this file instead of stdout.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML tool config. Default: $CLENG_CONFIG if set.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=resolve_strict_config_validation(default=False),
        help="Fail on config read/parse/validation errors instead of using defaults.",
    )
    parser.add_argument(
        "--strict-fields",
        action="store_true",
        default=None,
        help="Treat a configured field missing from a document as an error.",
    )
    parser.add_argument(
        "--report-dir",
        nargs="?",
        const=DEFAULT_REPORT_DIR,
        default=None,
        help=f"Write a JSON run report here. Default when given bare: {DEFAULT_REPORT_DIR}",
    )
    return parser.parse_args(argv)


@contextmanager
def _tracked_phase(run_report: Dict[str, Any], phase: str) -> Iterator[None]:
    """Enter ``phase`` and record it as the run's last phase."""
    with phase_scope(phase):
        run_report["phase"] = get_phase()
        yield


def _write_output(aggregate: Dict[str, List[Any]], output_path: Optional[str]) -> None:
    buffer = io.StringIO()
    dump_document(aggregate, buffer)
    text = buffer.getvalue()
    if output_path is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    write_text_atomic(output_path, text)
    logger.info("Merged document written to %s", output_path)


def execute_merge(
    paths: Sequence[str],
    fields: Sequence[str],
    strict_fields: bool,
    output_path: Optional[str],
    run_report: Dict[str, Any],
) -> Dict[str, Any]:
    """Load, merge and write; return the report fragment for this run."""
    with _tracked_phase(run_report, "load"):
        loaded = load_documents(paths)

    with _tracked_phase(run_report, "merge"):
        aggregate, stats = merge_documents_with_stats(
            [doc.payload for doc in loaded],
            fields,
            sources=[doc.path for doc in loaded],
            strict_fields=strict_fields,
        )

    with _tracked_phase(run_report, "write"):
        _write_output(aggregate, output_path)

    return {"stats": stats.to_dict(), "status": "success"}


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_structured_logging(level=logging.INFO)
    args = parse_args(argv)
    run_id = set_run_id()

    run_report: Dict[str, Any] = {
        "run_id": run_id,
        "pipeline": "merge",
        "inputs": list(args.paths),
        "status": "failed",
    }
    exit_code = 1
    try:
        with _tracked_phase(run_report, "config"):
            config = load_tool_config(
                resolve_config_path(args.config), strict=args.strict_config
            )
            logging.getLogger().setLevel(
                resolve_log_level(config, strict=args.strict_config)
            )
            fields = args.fields or resolve_merge_fields(config, strict=args.strict_config)
            strict_fields = (
                args.strict_fields
                if args.strict_fields is not None
                else resolve_strict_fields(config, strict=args.strict_config)
            )
        run_report["fields"] = list(fields)

        result = execute_merge(
            paths=args.paths,
            fields=fields,
            strict_fields=strict_fields,
            output_path=args.output,
            run_report=run_report,
        )
        run_report.update(result)
        exit_code = 0
    except (DocumentError, ConfigValidationError) as exc:
        run_report["error"] = str(exc)
        logger.error("Merge failed in phase %s: %s", run_report.get("phase"), exc)
    except OSError as exc:
        run_report["error"] = str(exc)
        logger.error("Merge failed writing output: %s", exc)

    if args.report_dir is not None:
        report_path = write_run_report(run_report, run_id, output_dir=args.report_dir)
        logger.info("Run report written: %s", report_path)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
