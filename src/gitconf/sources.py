"""Custom pydantic-settings source for gitconf's TOML settings file.

This module provides a settings source that integrates with pydantic-settings'
`settings_customise_sources()` to read gitconf's own settings (not git config
files) from a TOML file.
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings
from pydantic_settings.sources import InitSettingsSource

from .exceptions import ConfigFileNotFoundError
from .loader import get_settings_home

SETTINGS_FILE_NAME = "settings.toml"


class GitconfTomlSettingsSource(InitSettingsSource):
    """Settings source that loads gitconf's TOML settings file.

    When explicit_settings is provided, ONLY that file is used. Otherwise
    settings.toml in the settings home is read if it exists.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        explicit_settings: Path | None = None,
    ) -> None:
        """Initialize the TOML settings source.

        Args:
            settings_cls: The pydantic-settings class.
            explicit_settings: Explicit settings file path (--settings option).
        """
        self.explicit_settings = explicit_settings
        super().__init__(settings_cls, self._load_settings())

    def _load_settings(self) -> dict[str, Any]:
        """Find and load the settings file.

        Raises:
            ConfigFileNotFoundError: If explicit_settings doesn't exist.
        """
        if self.explicit_settings:
            return self._load_toml(self.explicit_settings, required=True)
        return self._load_toml(get_settings_home() / SETTINGS_FILE_NAME)

    def _load_toml(self, path: Path, required: bool = False) -> dict[str, Any]:
        """Load a TOML file.

        Args:
            path: Path to the TOML file.
            required: If True, raise error when file doesn't exist.

        Returns:
            Dictionary of settings values.

        Raises:
            ConfigFileNotFoundError: If required is True and file doesn't exist.
        """
        if not path.is_file():
            if required:
                raise ConfigFileNotFoundError(str(path))
            return {}

        with open(path, "rb") as f:
            return tomllib.load(f)
