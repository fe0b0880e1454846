"""Path values.

A path is the unquoted string, verbatim. Home directory and install prefix
expansion only happens through ``Path.interpolate`` with caller supplied
directories; nothing here reads the environment or the filesystem.
"""

import os
import pathlib
from collections.abc import Callable
from dataclasses import dataclass

from gitconf.cow import Cow, Owned
from gitconf.exceptions import PathInterpolationError
from gitconf.values.string import normalize

PREFIX = "%(prefix)/"


@dataclass(frozen=True)
class Path:
    """A decoded, uninterpolated path."""

    value: Cow

    @classmethod
    def decode(cls, raw: Cow | None) -> "Path":
        """Unquote a raw value; an implicit value is the empty path."""
        if raw is None:
            return cls(Owned(b""))
        return cls(normalize(raw))

    def __str__(self) -> str:
        return os.fsdecode(self.value.tobytes())

    def interpolate(
        self,
        home_dir: pathlib.Path | None = None,
        *,
        install_dir: pathlib.Path | None = None,
        user_home: Callable[[str], pathlib.Path | None] | None = None,
    ) -> pathlib.Path:
        """Resolve ``~``, ``~user`` and ``%(prefix)/`` prefixes.

        Args:
            home_dir: Base directory substituted for a leading ``~``.
            install_dir: Directory substituted for ``%(prefix)/``.
            user_home: Callback returning the home directory of a named user,
                or None if the user is unknown.

        Returns:
            The interpolated path, or the value unchanged when it has none of
            the prefixes.

        Raises:
            PathInterpolationError: If the value is empty or the input a
                prefix needs was not supplied.
        """
        raw = self.value.tobytes()
        text = os.fsdecode(raw)
        if not text:
            raise PathInterpolationError(raw, "empty path")

        if text.startswith(PREFIX):
            if install_dir is None:
                raise PathInterpolationError(raw, "no install directory given")
            return pathlib.Path(install_dir) / text[len(PREFIX) :]

        if text == "~" or text.startswith("~/"):
            if home_dir is None:
                raise PathInterpolationError(raw, "no home directory given")
            return pathlib.Path(home_dir) / text[2:]

        if text.startswith("~"):
            user, _, rest = text[1:].partition("/")
            if user_home is None:
                raise PathInterpolationError(raw, f"cannot resolve home of {user!r}")
            home = user_home(user)
            if home is None:
                raise PathInterpolationError(raw, f"unknown user {user!r}")
            return pathlib.Path(home) / rest

        return pathlib.Path(text)
