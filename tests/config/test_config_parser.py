"""
Unit tests for configuration parsing.
"""

from pathlib import Path

import pytest

from phpparsekit.binary.base import DEFAULT_TIMEOUT
from phpparsekit.config.parser import (
    ConfigError,
    ParserKitConfig,
    load_config,
    parse_config,
)
from phpparsekit.parser.php_parser import DEFAULT_MIN_PHP_VERSION


def write_config(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestParseConfig:
    """Test parse_config function."""

    def test_minimal(self, tmp_path):
        config = parse_config(write_config(tmp_path / "phpparsekit.yaml", "version: 1\n"))
        assert config == ParserKitConfig()
        assert config.php.min_version == "7.1"
        assert config.execution.timeout == 60.0
        assert config.execution.cache_output is False

    def test_full(self, tmp_path):
        config_file = write_config(
            tmp_path / "phpparsekit.yaml",
            """
version: 1
php:
  binary: /usr/bin/php
  min_version: "8.1"
parser:
  binary: tools/php-parse.phar
execution:
  timeout: 5
  cache_output: true
  work_dir: .work
resources:
  dirs: [bundles, /opt/bundles]
""",
        )
        config = parse_config(config_file)
        base = tmp_path.resolve()

        assert config.php.binary == Path("/usr/bin/php")
        assert config.php.min_version == "8.1"
        assert config.parser.binary == base / "tools" / "php-parse.phar"
        assert config.execution.timeout == 5.0
        assert config.execution.cache_output is True
        assert config.execution.work_dir == base / ".work"
        assert config.resource_dirs == [base / "bundles", Path("/opt/bundles")]

    def test_defaults_match_parser_defaults(self):
        """Test configuration defaults are the wrapper's own defaults."""
        config = ParserKitConfig()
        assert config.php.min_version == DEFAULT_MIN_PHP_VERSION
        assert config.execution.timeout == DEFAULT_TIMEOUT

    def test_numeric_min_version(self, tmp_path):
        config = parse_config(
            write_config(tmp_path / "c.yaml", "version: 1\nphp:\n  min_version: 8\n")
        )
        assert config.php.min_version == "8"

    def test_empty_sections(self, tmp_path):
        config = parse_config(
            write_config(tmp_path / "c.yaml", "version: 1\nphp:\nexecution:\n")
        )
        assert config == ParserKitConfig()

    @pytest.mark.parametrize(
        "content,message",
        [
            ("", "empty"),
            ("- a\n- b\n", "mapping"),
            ("php: {}\n", "Missing required field: version"),
            ("version: 2\n", "Unsupported version"),
            ("version: 1\nphp: [a]\n", "Section 'php' must be a mapping"),
            ("version: 1\nphp:\n  min_version: '7.x'\n", "Invalid php.min_version"),
            ("version: 1\nexecution:\n  timeout: fast\n", "must be a number"),
            ("version: 1\nexecution:\n  timeout: true\n", "must be a number"),
            ("version: 1\nexecution:\n  timeout: 0\n", "must be positive"),
            ("version: 1\nexecution:\n  cache_output: yes please\n", "true or false"),
            ("version: 1\nresources:\n  dirs: bundles\n", "must be a list"),
            ("version: 1\nresources:\n  dirs: [~]\n", "non-empty path"),
            ("version: 1\nparser:\n  binary: ''\n", "non-empty path"),
            ("version: 1\nphp:\n  binary: 42\n", "non-empty path"),
        ],
    )
    def test_invalid(self, tmp_path, content, message):
        with pytest.raises(ConfigError, match=message):
            parse_config(write_config(tmp_path / "c.yaml", content))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            parse_config(write_config(tmp_path / "c.yaml", "version: [1\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            parse_config(tmp_path / "missing.yaml")


class TestLoadConfig:
    """Test load_config function."""

    def test_defaults_without_file(self, tmp_path):
        assert load_config(tmp_path) == ParserKitConfig()

    def test_project_file(self, tmp_path):
        write_config(
            tmp_path / "phpparsekit.yaml", "version: 1\nexecution:\n  timeout: 9\n"
        )
        assert load_config(tmp_path).execution.timeout == 9.0

    def test_explicit_path(self, tmp_path):
        custom = write_config(
            tmp_path / "custom.yaml", "version: 1\nphp:\n  min_version: '7.4'\n"
        )
        assert load_config(tmp_path, custom).php.min_version == "7.4"

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, tmp_path / "missing.yaml")
