"""Settings for the gitconf command line tool.

Uses Pydantic v2 BaseSettings with custom source ordering for TOML settings
support. The core document and value layers never read settings; the CLI
passes what they need explicitly.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .sources import GitconfTomlSettingsSource
from .values import DEFAULT_FALSE_TOKENS, DEFAULT_TRUE_TOKENS, BooleanTable

if TYPE_CHECKING:
    from pydantic_settings.sources import PydanticBaseSettingsSource

# Module-level state for passing context to settings_customise_sources
_explicit_settings: Path | None = None


def set_settings_context(explicit_settings: Path | None = None) -> None:
    """Set context for GitconfSettings instantiation.

    Args:
        explicit_settings: Explicit settings file path (--settings option).
    """
    global _explicit_settings
    _explicit_settings = explicit_settings


def clear_settings_context() -> None:
    """Clear the settings context.

    This is primarily useful for testing to ensure a clean state.
    """
    global _explicit_settings
    _explicit_settings = None


class GitconfSettings(BaseSettings):
    """Settings for the gitconf tool.

    Settings are loaded from multiple sources with the following priority
    (highest to lowest):
    1. Constructor kwargs (init_settings)
    2. Environment variables with GITCONF_ prefix (env_settings)
    3. The TOML settings file
    4. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="GITCONF_",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown keys in the TOML file
    )

    # Boolean vocabulary
    true_tokens: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRUE_TOKENS),
        description="Tokens decoded as true, compared case-insensitively",
    )

    false_tokens: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FALSE_TOKENS),
        description="Tokens decoded as false, compared case-insensitively",
    )

    # Path interpolation
    home_dir: Path | None = Field(
        default=None,
        description="Directory substituted for '~' in paths (default: $HOME)",
    )

    # Discovery
    include_global: bool = Field(
        default=True,
        description="Read ~/.gitconfig and $XDG_CONFIG_HOME/git/config",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the command line tool",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def _check_tokens(self) -> "GitconfSettings":
        self.boolean_table()
        return self

    def boolean_table(self) -> BooleanTable:
        """Build the boolean table from the configured tokens.

        Raises:
            ValueError: If a token is configured as both true and false.
        """
        return BooleanTable.from_tokens(self.true_tokens, self.false_tokens)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: "PydanticBaseSettingsSource",
        env_settings: "PydanticBaseSettingsSource",
        dotenv_settings: "PydanticBaseSettingsSource",
        file_secret_settings: "PydanticBaseSettingsSource",
    ) -> tuple["PydanticBaseSettingsSource", ...]:
        """Customize settings sources and their priority.

        Priority order (first = highest):
        1. init_settings - Constructor kwargs
        2. env_settings - GITCONF_* environment variables
        3. toml_source - The TOML settings file
        """
        toml_source = GitconfTomlSettingsSource(
            settings_cls,
            explicit_settings=_explicit_settings,
        )

        return (init_settings, env_settings, toml_source)


def get_home_dir(settings: GitconfSettings) -> Path:
    """Get the directory used to interpolate '~' in paths.

    Args:
        settings: gitconf settings.

    Returns:
        settings.home_dir if set, the current user's home otherwise.
    """
    return settings.home_dir if settings.home_dir is not None else Path.home()
