"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() function and source precedence
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from apidiff.config.loader import (
    GLOBAL_CONFIG_PATH,
    _deep_merge,
    _load_yaml,
    load_config,
)
from apidiff.config.models import DiffConfig, LoggingConfig
from apidiff.core.errors import ConfigError, ErrorCode


def _write_project_config(root: Path, content: str) -> Path:
    config_dir = root / ".apidiff"
    config_dir.mkdir()
    path = config_dir / "config.yaml"
    path.write_text(content)
    return path


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        result = _load_yaml(tmp_path / "nonexistent.yaml")
        assert result == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("diff:\n  suppress_new_deprecated: false\n")

        result = _load_yaml(yaml_file)
        assert result == {"diff": {"suppress_new_deprecated": False}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        result = _load_yaml(yaml_file)
        assert result == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """Top level must be a mapping."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_empty_dicts(self) -> None:
        """Merging empty dicts returns empty dict."""
        assert _deep_merge({}, {}) == {}

    def test_override_wins(self) -> None:
        """Override values replace base values."""
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"diff": {"suppress_new_deprecated": False, "breaking_summary_max_names": 3}}
        override = {"diff": {"breaking_summary_max_names": 10}}
        result = _deep_merge(base, override)
        assert result == {"diff": {"suppress_new_deprecated": False, "breaking_summary_max_names": 10}}

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict override replaces dict base."""
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        """Base dict is not mutated."""
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"c": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        """Returns default config when no config files exist."""
        with patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.logging.level == "INFO"
        assert config.diff.suppress_new_deprecated is True
        assert config.diff.breaking_summary_max_names == 5

    def test_loads_project_config(self, tmp_path: Path) -> None:
        """Loads config from project .apidiff directory."""
        _write_project_config(tmp_path, "diff:\n  suppress_new_deprecated: false\n")

        with patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.diff.suppress_new_deprecated is False

    def test_project_config_overrides_global(self, tmp_path: Path) -> None:
        """Project YAML wins over global YAML, key by key."""
        global_file = tmp_path / "global.yaml"
        global_file.write_text(
            "logging:\n  level: DEBUG\ndiff:\n  breaking_summary_max_names: 2\n"
        )
        _write_project_config(tmp_path, "diff:\n  breaking_summary_max_names: 8\n")

        with patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)

        assert config.logging.level == "DEBUG"
        assert config.diff.breaking_summary_max_names == 8

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        """An explicit config file replaces the project lookup."""
        path = tmp_path / "custom.yaml"
        path.write_text("logging:\n  level: ERROR\n")

        with patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(config_path=path)

        assert config.logging.level == "ERROR"

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        """An explicit config file must exist."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(config_path=tmp_path / "missing.yaml")

        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML config."""
        _write_project_config(
            tmp_path, "logging:\n  level: INFO\ndiff:\n  breaking_summary_max_names: 3\n"
        )

        with (
            patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(
                os.environ,
                {
                    "APIDIFF__LOGGING__LEVEL": "WARNING",
                    "APIDIFF__DIFF__SUPPRESS_NEW_DEPRECATED": "false",
                },
            ),
        ):
            config = load_config(tmp_path)

        assert config.logging.level == "WARNING"
        assert config.diff.suppress_new_deprecated is False
        assert config.diff.breaking_summary_max_names == 3

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        _write_project_config(tmp_path, "diff:\n  suppress_new_deprecated: true\n")

        with (
            patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"APIDIFF__LOGGING__LEVEL": "WARNING"}),
        ):
            config = load_config(
                tmp_path,
                logging=LoggingConfig(level="ERROR"),
                diff=DiffConfig(suppress_new_deprecated=False),
            )

        assert config.logging.level == "ERROR"
        assert config.diff.suppress_new_deprecated is False

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid config values."""
        _write_project_config(tmp_path, "diff:\n  breaking_summary_max_names: 0\n")

        with (
            patch("apidiff.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "diff.breaking_summary_max_names"


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_path_object(self) -> None:
        """GLOBAL_CONFIG_PATH is a Path."""
        assert isinstance(GLOBAL_CONFIG_PATH, Path)

    def test_is_in_user_config(self) -> None:
        """Path is in user config directory."""
        assert "apidiff" in str(GLOBAL_CONFIG_PATH)
