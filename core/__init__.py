"""Core shared configuration, logging and reporting utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.startup_config import (
    ConfigValidationError,
    load_tool_config,
    resolve_config_path,
    resolve_explore_directory,
    resolve_explore_resources,
    resolve_log_level,
    resolve_merge_fields,
    resolve_strict_config_validation,
    resolve_strict_fields,
)
from core.run_artifacts import write_run_report

__all__ = [
    "configure_structured_logging",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "load_tool_config",
    "resolve_config_path",
    "resolve_explore_directory",
    "resolve_explore_resources",
    "resolve_log_level",
    "resolve_merge_fields",
    "resolve_strict_config_validation",
    "resolve_strict_fields",
    "write_run_report",
]
