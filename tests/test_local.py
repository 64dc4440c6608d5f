"""Tests for LocalFS, the read-only real filesystem reader."""

import os
import stat

import pytest

from zipvfs import LocalFS, MalformedPatternError, NotFoundError, Reader


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"alpha")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_bytes(b"bravo")
    (tmp_path / "sub" / "c.md").write_bytes(b"charlie")
    (tmp_path / "sub" / "deep").mkdir()
    (tmp_path / "sub" / "deep" / "d.txt").write_bytes(b"delta")
    return tmp_path


class TestLocalInit:
    def test_root_must_exist(self, tmp_path):
        with pytest.raises(ValueError):
            LocalFS(str(tmp_path / "missing"))

    def test_root_must_be_directory(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_bytes(b"x")
        with pytest.raises(ValueError):
            LocalFS(str(f))

    def test_satisfies_reader_protocol(self, tree):
        assert isinstance(LocalFS(str(tree)), Reader)


class TestLocalStatOpen:
    """Test metadata and reading."""

    def test_stat_file(self, tree):
        fs = LocalFS(str(tree))
        meta = fs.stat("a.txt")
        assert meta.name == "a.txt"
        assert meta.size == 5
        assert meta.is_dir is False
        assert stat.S_ISREG(meta.st_mode)
        assert meta.modified_at

    def test_stat_directory(self, tree):
        fs = LocalFS(str(tree))
        meta = fs.stat("sub")
        assert meta.is_dir is True
        assert meta.size == 0
        assert stat.S_ISDIR(meta.st_mode)

    def test_stat_missing_raises(self, tree):
        fs = LocalFS(str(tree))
        with pytest.raises(NotFoundError) as exc_info:
            fs.stat("nope.txt")
        assert exc_info.value.path == "nope.txt"

    def test_open_reads_content(self, tree):
        fs = LocalFS(str(tree))
        with fs.open("sub/b.txt") as f:
            assert f.read() == b"bravo"

    def test_open_missing_raises(self, tree):
        fs = LocalFS(str(tree))
        with pytest.raises(FileNotFoundError):
            fs.open("sub/nope.txt")

    def test_path_through_file_raises_not_found(self, tree):
        """Test that a path treating a file as a directory is just missing."""
        fs = LocalFS(str(tree))
        with pytest.raises(NotFoundError):
            fs.stat("a.txt/x")
        with pytest.raises(NotFoundError):
            fs.open("a.txt/x")

    def test_absolute_path_is_relative_to_root(self, tree):
        """Test that /a.txt means root/a.txt."""
        fs = LocalFS(str(tree))
        assert fs.read("/a.txt") == b"alpha"

    def test_escape_rejected(self, tree):
        """Test that paths leaving the root are rejected."""
        fs = LocalFS(str(tree / "sub"))
        with pytest.raises(PermissionError):
            fs.read("../a.txt")

    def test_helpers(self, tree):
        fs = LocalFS(str(tree))
        assert fs.exists("a.txt") is True
        assert fs.exists("nope") is False
        assert fs.isdir("sub") is True
        assert fs.isfile("sub") is False
        assert fs.isfile("sub/b.txt") is True


class TestLocalGlob:
    """Test segment-by-segment pattern expansion."""

    def test_star_top_level(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("*") == ["a.txt", "sub"]

    def test_star_in_directory(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("sub/*") == ["sub/b.txt", "sub/c.md", "sub/deep"]

    def test_suffix_pattern(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("sub/*.txt") == ["sub/b.txt"]

    def test_wildcard_directory_segment(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("*/*/*.txt") == ["sub/deep/d.txt"]

    def test_literal_pattern(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("sub/b.txt") == ["sub/b.txt"]
        assert fs.glob("sub/zzz.txt") == []

    def test_no_match_returns_empty(self, tree):
        fs = LocalFS(str(tree))
        assert fs.glob("*.csv") == []

    def test_malformed_pattern_raises(self, tree):
        fs = LocalFS(str(tree))
        with pytest.raises(MalformedPatternError):
            fs.glob("sub/[")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_outside_root_excluded(self, tree, tmp_path_factory):
        """Test that glob doesn't report links leading out of the root."""
        outside = tmp_path_factory.mktemp("outside")
        (outside / "secret.txt").write_bytes(b"secret")
        try:
            os.symlink(outside / "secret.txt", tree / "link.txt")
        except OSError:
            pytest.skip("cannot create symlinks")
        fs = LocalFS(str(tree))
        assert fs.glob("*.txt") == ["a.txt"]
