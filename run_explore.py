#!/usr/bin/env python3
"""
Interactive exploration of extraction documents.

Loads fixed-name documents (``macros.json``, ``functions.json``,
``structs.json``, ``typedefs.json`` by default) from a directory and opens
a Python console where each one is bound to its name, next to the
``types`` / ``print_field`` / ``project_field`` helpers.

Usage:
    python run_explore.py
    python run_explore.py --directory out/ --resource output
    >>> idx = types("output")
    >>> print_field(idx, "function", "name")
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from core.startup_config import (
    ConfigValidationError,
    load_tool_config,
    resolve_config_path,
    resolve_explore_directory,
    resolve_explore_resources,
    resolve_log_level,
    resolve_strict_config_validation,
)
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from documents.errors import DocumentError
from exploration.context import load_exploration_context
from exploration.shell import start_shell

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Interactive console over loaded extraction documents",
    )
    parser.add_argument(
        "--directory",
        default=None,
        help="Directory holding <resource>.json files. Default: explore.directory or '.'",
    )
    parser.add_argument(
        "--resource",
        dest="resources",
        action="append",
        default=None,
        help="Resource name to preload (repeatable). "
        "Default: macros, functions, structs, typedefs.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail when a resource file is missing instead of skipping it.",
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
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_structured_logging(level=logging.INFO)
    args = parse_args(argv)
    set_run_id()

    try:
        with phase_scope("config"):
            config = load_tool_config(
                resolve_config_path(args.config), strict=args.strict_config
            )
            logging.getLogger().setLevel(
                resolve_log_level(config, strict=args.strict_config)
            )
            directory = args.directory or resolve_explore_directory(
                config, strict=args.strict_config
            )
            resources = args.resources or resolve_explore_resources(
                config, strict=args.strict_config
            )
        with phase_scope("load"):
            ctx = load_exploration_context(directory, resources, strict=args.strict)
    except (DocumentError, ConfigValidationError) as exc:
        logger.error("Exploration setup failed: %s", exc)
        return 1

    with phase_scope("shell"):
        start_shell(ctx)
    return 0


if __name__ == "__main__":
    sys.exit(main())
