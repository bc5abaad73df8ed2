"""
Unit tests for executable lookup.
"""

import os

from phpparsekit.binary.locator import (
    executable_names,
    search_bin_in,
    search_bin_on_path,
)
from phpparsekit.core.platform import PlatformInfo


class TestSearchBinIn:
    """Test recursive search in one directory tree."""

    def test_finds_nested_file(self, tmp_path):
        target = tmp_path / "php-8.4" / "bin" / "php"
        target.parent.mkdir(parents=True)
        target.write_text("")

        assert search_bin_in(tmp_path, "php") == target

    def test_accepts_any_name(self, tmp_path):
        target = tmp_path / "php.exe"
        target.write_text("")

        assert search_bin_in(tmp_path, "php", "php.exe") == target

    def test_exact_name_only(self, tmp_path):
        (tmp_path / "php-config").write_text("")
        (tmp_path / "php8").write_text("")

        assert search_bin_in(tmp_path, "php") is None

    def test_shallow_match_before_deeper(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "php").write_text("")
        (tmp_path / "php").write_text("")

        assert search_bin_in(tmp_path, "php") == tmp_path / "php"

    def test_directory_with_matching_name_ignored(self, tmp_path):
        (tmp_path / "php").mkdir()
        assert search_bin_in(tmp_path, "php") is None

    def test_missing_directory(self, tmp_path):
        assert search_bin_in(tmp_path / "missing", "php") is None

    def test_no_names(self, tmp_path):
        (tmp_path / "php").write_text("")
        assert search_bin_in(tmp_path) is None


class TestExecutableNames:
    """Test platform-specific executable names."""

    def test_unix(self):
        assert executable_names("php", PlatformInfo("linux", "x86_64")) == ["php"]

    def test_windows_adds_suffixes(self):
        names = executable_names("php", PlatformInfo("windows", "x86_64"))
        assert names == ["php.exe", "php.bat"]

    def test_windows_keeps_existing_suffix(self):
        names = executable_names("php.exe", PlatformInfo("windows", "x86_64"))
        assert names == ["php.exe"]


class TestSearchBinOnPath:
    """Test PATH lookup."""

    def test_first_path_entry_wins(self, tmp_path, monkeypatch, linux_x64):
        first = tmp_path / "first"
        second = tmp_path / "second"
        for directory in (first, second):
            directory.mkdir()
            (directory / "php").write_text("")
        monkeypatch.setenv("PATH", os.pathsep.join([str(first), str(second)]))

        assert search_bin_on_path("php", linux_x64) == first / "php"

    def test_skips_empty_and_missing_entries(self, tmp_path, monkeypatch, linux_x64):
        (tmp_path / "php").write_text("")
        monkeypatch.setenv(
            "PATH", os.pathsep.join(["", str(tmp_path / "missing"), str(tmp_path)])
        )

        assert search_bin_on_path("php", linux_x64) == tmp_path / "php"

    def test_not_found(self, empty_path, linux_x64):
        assert search_bin_on_path("php", linux_x64) is None

    def test_path_unset(self, monkeypatch, linux_x64):
        monkeypatch.delenv("PATH", raising=False)
        assert search_bin_on_path("php", linux_x64) is None

    def test_windows_suffix(self, tmp_path, monkeypatch):
        (tmp_path / "php.exe").write_text("")
        monkeypatch.setenv("PATH", str(tmp_path))

        found = search_bin_on_path("php", PlatformInfo("windows", "x86_64"))
        assert found == tmp_path / "php.exe"
