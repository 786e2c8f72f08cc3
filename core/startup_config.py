"""Tool configuration loading and validation helpers.

Provides strict/non-strict parsing of the optional YAML config shared by
the merge and exploration entry points. Non-strict mode falls back to
built-in defaults with a warning; strict mode raises.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import yaml

from documents.config import (
    DEFAULT_EXPLORE_RESOURCES,
    DEFAULT_MERGE_FIELDS,
    DEFAULT_STRICT_FIELDS,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CLENG_CONFIG"
LOG_LEVEL_ENV = "CLENG_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(RuntimeError):
    """Raised when strict config validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def resolve_config_path(cli_path: Optional[str] = None) -> Optional[str]:
    """CLI path if given, else ``CLENG_CONFIG``, else None."""
    if cli_path:
        return cli_path
    return os.getenv(CONFIG_PATH_ENV) or None


def _fail(msg: str, strict: bool, fallback: str) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; %s", msg, fallback)


def load_tool_config(
    config_path: Optional[str],
    strict: bool = False,
) -> dict[str, Any]:
    """Load and parse the YAML tool config.

    A None path means no config and yields an empty dict. In non-strict
    mode read/parse failures also yield an empty dict. In strict mode they
    raise ``ConfigValidationError``.
    """
    if config_path is None:
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse config YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        _fail(f"Config file is empty: {config_path}", strict, "continuing with defaults")
        return {}

    if not isinstance(payload, dict):
        _fail(
            f"Unexpected config payload type: {type(payload).__name__}",
            strict,
            "continuing with defaults",
        )
        return {}

    return payload


def get_section(
    config: dict[str, Any],
    section_name: str,
    strict: bool = False,
) -> dict[str, Any]:
    """Fetch one top-level section; absent sections are empty."""
    section = config.get(section_name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        _fail(f"Config section '{section_name}' must be a mapping", strict, "using defaults")
        return {}
    return section


def _string_list(
    raw: Any,
    ctx: str,
    default: tuple[str, ...],
    strict: bool,
) -> list[str]:
    if raw is None:
        return list(default)
    if not isinstance(raw, list) or not raw:
        _fail(f"{ctx} must be a non-empty list", strict, f"using default {list(default)}")
        return list(default)

    values: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            _fail(f"{ctx} contains invalid entry {item!r}", strict, f"using default {list(default)}")
            return list(default)
        if item.strip() not in values:
            values.append(item.strip())
    return values


def resolve_merge_fields(config: dict[str, Any], strict: bool = False) -> list[str]:
    """Field set for the merge tool from ``merge.fields``."""
    section = get_section(config, "merge", strict=strict)
    return _string_list(section.get("fields"), "merge.fields", DEFAULT_MERGE_FIELDS, strict)


def resolve_strict_fields(config: dict[str, Any], strict: bool = False) -> bool:
    """Whether a configured field missing from a document is an error."""
    section = get_section(config, "merge", strict=strict)
    raw = section.get("strict_fields", DEFAULT_STRICT_FIELDS)
    if not isinstance(raw, bool):
        _fail("merge.strict_fields must be a boolean", strict, "using default")
        return DEFAULT_STRICT_FIELDS
    return raw


def resolve_explore_resources(config: dict[str, Any], strict: bool = False) -> list[str]:
    """Fixed-name documents preloaded by the exploration shell."""
    section = get_section(config, "explore", strict=strict)
    return _string_list(
        section.get("resources"), "explore.resources", DEFAULT_EXPLORE_RESOURCES, strict
    )


def resolve_explore_directory(config: dict[str, Any], strict: bool = False) -> str:
    section = get_section(config, "explore", strict=strict)
    raw = section.get("directory", ".")
    if not isinstance(raw, str) or not raw.strip():
        _fail("explore.directory must be a non-empty string", strict, "using '.'")
        return "."
    return raw


def resolve_log_level(config: dict[str, Any], strict: bool = False) -> int:
    """Log level from ``CLENG_LOG_LEVEL``, then ``logging.level``, then INFO."""
    raw = os.getenv(LOG_LEVEL_ENV)
    if raw is None:
        raw = get_section(config, "logging", strict=strict).get("level", DEFAULT_LOG_LEVEL)
    name = str(raw).strip().upper()
    if name not in _LOG_LEVELS:
        _fail(f"Unknown log level {raw!r}", strict, f"using {DEFAULT_LOG_LEVEL}")
        name = DEFAULT_LOG_LEVEL
    return getattr(logging, name)
