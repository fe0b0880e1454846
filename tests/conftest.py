"""Pytest fixtures for gitconf tests."""

from pathlib import Path

import pytest

from gitconf.settings import clear_settings_context


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def repo_dir(project_dir: Path) -> Path:
    """Provide a project directory containing an empty .git directory."""
    (project_dir / ".git").mkdir()
    return project_dir


@pytest.fixture
def mock_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a mock home directory and set HOME env var."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove gitconf-related environment variables."""
    env_vars = [
        "GITCONF_CONFIG_HOME",
        "XDG_CONFIG_HOME",
        "GITCONF_TRUE_TOKENS",
        "GITCONF_FALSE_TOKENS",
        "GITCONF_HOME_DIR",
        "GITCONF_INCLUDE_GLOBAL",
        "GITCONF_LOG_LEVEL",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
    clear_settings_context()


@pytest.fixture
def settings_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None
) -> Path:
    """Provide a mock GITCONF_CONFIG_HOME directory.

    Depends on clean_env to ensure env is clean before setting GITCONF_CONFIG_HOME.
    """
    settings = tmp_path / "gitconf-config"
    settings.mkdir()
    monkeypatch.setenv("GITCONF_CONFIG_HOME", str(settings))
    return settings


@pytest.fixture
def xdg_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a mock XDG_CONFIG_HOME directory."""
    xdg = tmp_path / "xdg-config"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg
