"""Tests for tool config loading and validation helpers."""

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

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


class TestStartupConfig(unittest.TestCase):
    def _write_config(self, content: str) -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        self.addCleanup(Path(handle.name).unlink, missing_ok=True)
        return handle.name

    def test_no_path_is_empty(self) -> None:
        self.assertEqual(load_tool_config(None, strict=True), {})

    def test_load_non_strict_missing_returns_empty(self) -> None:
        payload = load_tool_config("/definitely/missing.yml", strict=False)
        self.assertEqual(payload, {})

    def test_load_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_tool_config("/definitely/missing.yml", strict=True)

    def test_load_strict_bad_yaml_raises(self) -> None:
        path = self._write_config("merge: [unclosed\n")
        with self.assertRaises(ConfigValidationError):
            load_tool_config(path, strict=True)

    def test_load_non_strict_non_mapping_returns_empty(self) -> None:
        path = self._write_config("- just\n- a list\n")
        self.assertEqual(load_tool_config(path, strict=False), {})

    def test_load_valid_config(self) -> None:
        path = self._write_config(
            """
merge:
  fields: [macros, structs]
  strict_fields: true
explore:
  directory: out
  resources: [output]
logging:
  level: debug
"""
        )
        config = load_tool_config(path, strict=True)
        self.assertEqual(resolve_merge_fields(config, strict=True), ["macros", "structs"])
        self.assertTrue(resolve_strict_fields(config, strict=True))
        self.assertEqual(resolve_explore_resources(config, strict=True), ["output"])
        self.assertEqual(resolve_explore_directory(config, strict=True), "out")
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(resolve_log_level(config, strict=True), logging.DEBUG)

    def test_defaults_when_sections_absent(self) -> None:
        self.assertEqual(resolve_merge_fields({}), ["macros", "functions", "enums"])
        self.assertFalse(resolve_strict_fields({}))
        self.assertEqual(
            resolve_explore_resources({}), ["macros", "functions", "structs", "typedefs"]
        )
        self.assertEqual(resolve_explore_directory({}), ".")

    def test_invalid_fields_strict_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            resolve_merge_fields({"merge": {"fields": "macros"}}, strict=True)

    def test_invalid_fields_non_strict_defaults(self) -> None:
        fields = resolve_merge_fields({"merge": {"fields": [1, 2]}}, strict=False)
        self.assertEqual(fields, ["macros", "functions", "enums"])

    def test_fields_deduplicated(self) -> None:
        fields = resolve_merge_fields({"merge": {"fields": ["enums", "enums", "macros"]}})
        self.assertEqual(fields, ["enums", "macros"])

    def test_section_must_be_mapping(self) -> None:
        with self.assertRaises(ConfigValidationError):
            resolve_explore_resources({"explore": ["output"]}, strict=True)

    def test_strict_fields_must_be_bool(self) -> None:
        with self.assertRaises(ConfigValidationError):
            resolve_strict_fields({"merge": {"strict_fields": "yes"}}, strict=True)

    def test_log_level_env_overrides(self) -> None:
        with patch.dict(os.environ, {"CLENG_LOG_LEVEL": "warning"}):
            level = resolve_log_level({"logging": {"level": "DEBUG"}})
        self.assertEqual(level, logging.WARNING)

    def test_unknown_log_level_strict_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigValidationError):
                resolve_log_level({"logging": {"level": "LOUD"}}, strict=True)

    def test_config_path_resolution(self) -> None:
        with patch.dict(os.environ, {"CLENG_CONFIG": "/etc/cleng.yml"}):
            self.assertEqual(resolve_config_path(None), "/etc/cleng.yml")
            self.assertEqual(resolve_config_path("local.yml"), "local.yml")
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(resolve_config_path(None))

    def test_strict_env_flag(self) -> None:
        with patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "on"}):
            self.assertTrue(resolve_strict_config_validation())
        with patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "0"}):
            self.assertFalse(resolve_strict_config_validation(default=True))


if __name__ == "__main__":
    unittest.main()
