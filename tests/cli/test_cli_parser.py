"""
Tests for CLI argument parser.
"""

import importlib
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from phpparsekit.cli.parser import CLI, COMMAND_MODULES
from phpparsekit.core.exceptions import ExternalBinaryNotFoundError


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "phpparsekit" in capsys.readouterr().out

    def test_global_options(self, tmp_path):
        args = CLI().parse_args(
            ["-v", "--config", str(tmp_path / "c.yaml"), "--project-root", str(tmp_path), "locate"]
        )
        assert args.verbose is True
        assert args.config == tmp_path / "c.yaml"
        assert args.project_root == tmp_path

    def test_unknown_command_rejected(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["compile"])


class TestParseCommandArgs:
    """Test parse command parsing."""

    def test_defaults(self):
        args = CLI().parse_args(["parse", "index.php"])

        assert args.command == "parse"
        assert args.file == Path("index.php")
        assert args.dump == "sexpr"
        assert args.pretty_print is False
        assert args.resolve_names is False
        assert args.with_column_info is False
        assert args.with_positions is False
        assert args.with_recovery is False
        assert args.timeout is None
        assert args.cache is False
        assert args.php is None
        assert args.parser is None
        assert args.output is None

    def test_all_options(self):
        args = CLI().parse_args(
            [
                "parse",
                "index.php",
                "--dump",
                "json",
                "--pretty-print",
                "--resolve-names",
                "--with-column-info",
                "--with-positions",
                "--with-recovery",
                "--timeout",
                "2.5",
                "--cache",
                "--php",
                "/usr/bin/php",
                "--parser",
                "php-parse.phar",
                "-o",
                "out.txt",
            ]
        )

        assert args.dump == "json"
        assert args.pretty_print and args.resolve_names and args.with_recovery
        assert args.with_column_info and args.with_positions
        assert args.timeout == 2.5
        assert args.cache is True
        assert args.php == Path("/usr/bin/php")
        assert args.parser == Path("php-parse.phar")
        assert args.output == Path("out.txt")

    def test_invalid_dump(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["parse", "index.php", "--dump", "xml"])


class TestChecksumCommandArgs:
    def test_requires_files(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["checksum"])

    def test_multiple_files(self):
        args = CLI().parse_args(["checksum", "a", "b"])
        assert args.files == [Path("a"), Path("b")]


class TestLoggingConfiguration:
    """Test --verbose/--quiet handling."""

    @pytest.mark.parametrize(
        "flags,level",
        [(["-v"], logging.DEBUG), (["-q"], logging.ERROR), ([], logging.INFO)],
    )
    def test_levels(self, flags, level):
        cli = CLI()
        with patch("logging.basicConfig") as basic_config:
            cli._configure_logging(cli.parse_args(flags + ["locate"]))
        assert basic_config.call_args.kwargs["level"] == level
        assert basic_config.call_args.kwargs["force"] is True


class TestDispatch:
    """Test command dispatch and error handling."""

    def test_dispatches_to_command_module(self):
        with patch("phpparsekit.cli.commands.checksum.run", return_value=7) as run:
            assert CLI().run(["checksum", "a"]) == 7
        run.assert_called_once()

    def test_exception_returns_1(self):
        with patch(
            "phpparsekit.cli.commands.checksum.run", side_effect=RuntimeError("boom")
        ):
            assert CLI().run(["checksum", "a"]) == 1

    def test_keyboard_interrupt_returns_130(self):
        with patch(
            "phpparsekit.cli.commands.checksum.run", side_effect=KeyboardInterrupt
        ):
            assert CLI().run(["checksum", "a"]) == 130

    def test_every_subcommand_has_a_module(self):
        """Test each subcommand maps to an importable module with run()."""
        assert set(COMMAND_MODULES) == {"parse", "locate", "checksum"}
        for module_name in COMMAND_MODULES.values():
            assert callable(importlib.import_module(module_name).run)

    def test_package_error_returns_1(self):
        with patch(
            "phpparsekit.cli.commands.checksum.run",
            side_effect=ExternalBinaryNotFoundError("php"),
        ):
            assert CLI().run(["checksum", "a"]) == 1
