"""
Unit tests for directory layout module.
"""

import pytest

from phpparsekit.core.directory import (
    DirectoryError,
    ensure_directory,
    get_binaries_dir,
    get_cache_root,
)


class TestCacheLayout:
    """Test cache directory paths."""

    def test_cache_root_under_base(self, tmp_path):
        assert get_cache_root(tmp_path) == tmp_path / "phpparsekit"

    def test_cache_root_defaults_to_tempdir(self, tmp_path, monkeypatch):
        monkeypatch.setattr("tempfile.gettempdir", lambda: str(tmp_path))
        assert get_cache_root() == tmp_path / "phpparsekit"

    def test_binaries_dir_per_owner(self, tmp_path):
        path = get_binaries_dir("BinPhpParser", tmp_path)
        assert path == tmp_path / "phpparsekit" / "binaries" / "BinPhpParser"

    @pytest.mark.parametrize("owner", ["", "a/b", "a\\b"])
    def test_invalid_owner(self, owner, tmp_path):
        with pytest.raises(DirectoryError):
            get_binaries_dir(owner, tmp_path)


class TestEnsureDirectory:
    """Test ensure_directory function."""

    def test_creates_nested(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_idempotent(self, tmp_path):
        ensure_directory(tmp_path / "x")
        ensure_directory(tmp_path / "x")
        assert (tmp_path / "x").is_dir()

    def test_file_in_the_way(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(DirectoryError, match="not a directory"):
            ensure_directory(blocker)
