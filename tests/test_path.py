"""Tests for values/path.py."""

from pathlib import Path as FsPath

import pytest

from gitconf import Owned, Path, PathInterpolationError


def path(raw: bytes) -> Path:
    return Path.decode(Owned(raw))


class TestPathDecode:
    """Tests for Path.decode."""

    def test_verbatim(self) -> None:
        """Decoding never expands anything."""
        assert str(path(b"~/hooks")) == "~/hooks"
        assert str(path(b"%(prefix)/share")) == "%(prefix)/share"

    def test_unquoted(self) -> None:
        assert str(path(b'"/tmp/with space"')) == "/tmp/with space"

    def test_implicit_is_empty(self) -> None:
        assert str(Path.decode(None)) == ""


class TestInterpolate:
    """Tests for Path.interpolate."""

    def test_plain_path(self) -> None:
        assert path(b"/etc/gitconfig").interpolate() == FsPath("/etc/gitconfig")
        assert path(b"relative/dir").interpolate() == FsPath("relative/dir")

    def test_home(self) -> None:
        home = FsPath("/home/user")
        assert path(b"~/.hooks").interpolate(home) == home / ".hooks"
        assert path(b"~").interpolate(home) == home

    def test_home_missing(self) -> None:
        with pytest.raises(PathInterpolationError, match="no home directory"):
            path(b"~/x").interpolate()

    def test_prefix(self) -> None:
        result = path(b"%(prefix)/share/git").interpolate(install_dir=FsPath("/usr"))
        assert result == FsPath("/usr/share/git")

    def test_prefix_missing(self) -> None:
        with pytest.raises(PathInterpolationError, match="no install directory"):
            path(b"%(prefix)/share").interpolate(FsPath("/home/user"))

    def test_other_user(self) -> None:
        """``~name`` goes through the callback."""
        homes = {"alice": FsPath("/home/alice")}
        result = path(b"~alice/repos").interpolate(user_home=homes.get)
        assert result == FsPath("/home/alice/repos")

    def test_other_user_unknown(self) -> None:
        with pytest.raises(PathInterpolationError, match="unknown user"):
            path(b"~bob/x").interpolate(user_home=lambda name: None)

    def test_other_user_without_callback(self) -> None:
        with pytest.raises(PathInterpolationError, match="cannot resolve home"):
            path(b"~bob/x").interpolate(FsPath("/home/user"))

    def test_empty(self) -> None:
        with pytest.raises(PathInterpolationError, match="empty path"):
            Path.decode(None).interpolate(FsPath("/home/user"))
