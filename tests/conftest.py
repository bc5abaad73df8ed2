"""
Pytest configuration and shared fixtures for phpparsekit tests.
"""

import io
import stat
import zipfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from phpparsekit.core.platform import PlatformInfo


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require a real php on PATH",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


FAKE_PHP_TEMPLATE = """#!/bin/sh
if [ "$1" = "-v" ]; then
    echo "PHP {version} (cli) (built: Jan  1 2024 00:00:00) (NTS)"
    echo "Copyright (c) The PHP Group"
    exit 0
fi
echo "ARGS: $@"
exit {exit_code}
"""


def write_script(path: Path, content: str) -> Path:
    """Write an executable shell script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_php(tmp_path) -> Callable[..., Path]:
    """
    Factory for fake PHP interpreters.

    The script reports the given version for ``-v`` and otherwise echoes its
    arguments prefixed with ``ARGS:`` and exits with exit_code.
    """

    def _create(
        version: str = "7.4.10",
        exit_code: int = 0,
        directory: Path = None,
        name: str = "php",
    ) -> Path:
        directory = directory or tmp_path / f"php-{version}"
        return write_script(
            directory / name,
            FAKE_PHP_TEMPLATE.format(version=version, exit_code=exit_code),
        )

    return _create


@pytest.fixture
def parser_phar(tmp_path) -> Path:
    """Placeholder php-parse .phar file."""
    phar = tmp_path / "tools" / "php-parser.phar"
    phar.parent.mkdir(parents=True, exist_ok=True)
    phar.write_text("<?php // php-parse stand-in\n", encoding="utf-8")
    return phar


@pytest.fixture
def php_source(tmp_path) -> Path:
    """Small PHP file to parse."""
    source = tmp_path / "src" / "index.php"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text("<?php echo 'hello';\n", encoding="utf-8")
    return source


@pytest.fixture
def make_zip() -> Callable[[Dict[str, bytes]], bytes]:
    """Build an in-memory ZIP archive from a name -> content mapping."""

    def _create(entries: Dict[str, bytes]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            for name, content in entries.items():
                zf.writestr(name, content)
        return buffer.getvalue()

    return _create


@pytest.fixture
def linux_x64() -> PlatformInfo:
    return PlatformInfo("linux", "x86_64")


@pytest.fixture
def empty_path(tmp_path, monkeypatch) -> Path:
    """Point PATH at an empty directory so no system php is found."""
    empty = tmp_path / "empty-path"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


@pytest.fixture
def php_on_path(tmp_path, monkeypatch, fake_php) -> Callable[..., Path]:
    """Make a fake php of the given version the only php on PATH."""

    def _install(version: str = "7.4.10") -> Path:
        php = fake_php(version, directory=tmp_path / f"path-{version}")
        monkeypatch.setenv("PATH", str(php.parent))
        return php

    return _install


@pytest.fixture
def shell_script() -> Callable[[Path, str], Path]:
    """Factory for executable /bin/sh scripts with the given body."""

    def _create(path: Path, body: str) -> Path:
        return write_script(path, f"#!/bin/sh\n{body}\n")

    return _create
