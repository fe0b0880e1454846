"""Tests for loader.py file discovery and loading."""

from pathlib import Path

import pytest

from gitconf import ConfigFileNotFoundError, Document, ParseError
from gitconf.loader import (
    discover_global_configs,
    discover_repo_config,
    get_config_home,
    get_settings_home,
    load_all_configs,
    load_config_file,
)
from gitconf.values import BooleanTable


class TestGetConfigHome:
    """Tests for get_config_home function."""

    def test_xdg_config_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_CONFIG_HOME is used when set."""
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
        assert get_config_home() == Path("/xdg/config")

    def test_default_fallback(
        self, clean_env: None, mock_home: Path
    ) -> None:
        """Falls back to ~/.config when XDG_CONFIG_HOME is not set."""
        assert get_config_home() == mock_home / ".config"


class TestGetSettingsHome:
    """Tests for get_settings_home function."""

    def test_gitconf_config_home_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """GITCONF_CONFIG_HOME takes precedence."""
        monkeypatch.setenv("GITCONF_CONFIG_HOME", "/custom/gitconf")
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
        assert get_settings_home() == Path("/custom/gitconf")

    def test_xdg_config_home_fallback(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """XDG_CONFIG_HOME/gitconf is used when GITCONF_CONFIG_HOME is not set."""
        monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
        assert get_settings_home() == Path("/xdg/config/gitconf")

    def test_default_fallback(self, clean_env: None, mock_home: Path) -> None:
        """Falls back to ~/.config/gitconf when no env vars set."""
        assert get_settings_home() == mock_home / ".config" / "gitconf"


class TestDiscoverGlobalConfigs:
    """Tests for discover_global_configs function."""

    def test_none_exist(self, mock_home: Path, xdg_config_home: Path) -> None:
        """Returns an empty list when no user config exists."""
        assert discover_global_configs() == []

    def test_both_in_priority_order(
        self, mock_home: Path, xdg_config_home: Path
    ) -> None:
        """The XDG file comes first so ~/.gitconfig wins."""
        xdg_file = xdg_config_home / "git" / "config"
        xdg_file.parent.mkdir()
        xdg_file.write_text("[user]\n\tname = xdg\n")
        home_file = mock_home / ".gitconfig"
        home_file.write_text("[user]\n\tname = home\n")
        assert discover_global_configs() == [xdg_file, home_file]

    def test_ignores_directories(self, mock_home: Path, xdg_config_home: Path) -> None:
        """A directory named like a config file is skipped."""
        (mock_home / ".gitconfig").mkdir()
        assert discover_global_configs() == []


class TestDiscoverRepoConfig:
    """Tests for discover_repo_config function."""

    def test_no_repository(self, project_dir: Path) -> None:
        """Returns None outside a repository."""
        assert discover_repo_config(project_dir) is None

    def test_git_dir_without_config(self, repo_dir: Path) -> None:
        """Returns None when .git has no config file."""
        assert discover_repo_config(repo_dir) is None

    def test_git_dir(self, repo_dir: Path) -> None:
        """Finds .git/config in the start directory."""
        config = repo_dir / ".git" / "config"
        config.write_text("[core]\n\tbare = false\n")
        assert discover_repo_config(repo_dir) == config

    def test_walks_up(self, repo_dir: Path) -> None:
        """Finds the repository of a parent directory."""
        config = repo_dir / ".git" / "config"
        config.write_text("")
        nested = repo_dir / "src" / "pkg"
        nested.mkdir(parents=True)
        assert discover_repo_config(nested) == config

    def test_gitdir_file(self, tmp_path: Path, project_dir: Path) -> None:
        """A .git file redirects to the real git directory."""
        git_dir = tmp_path / "modules" / "sub"
        git_dir.mkdir(parents=True)
        (git_dir / "config").write_text("")
        (project_dir / ".git").write_text(f"gitdir: {git_dir}\n")
        assert discover_repo_config(project_dir) == git_dir / "config"

    def test_relative_gitdir_file(self, project_dir: Path) -> None:
        """A relative gitdir is resolved against the .git file's directory."""
        git_dir = project_dir / "real-git"
        git_dir.mkdir()
        (git_dir / "config").write_text("")
        (project_dir / ".git").write_text("gitdir: real-git\n")
        assert discover_repo_config(project_dir) == project_dir / "real-git" / "config"

    def test_invalid_git_file(self, project_dir: Path) -> None:
        """A .git file without a gitdir line is not a repository."""
        (project_dir / ".git").write_text("something else\n")
        assert discover_repo_config(project_dir) is None


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_loads_document(self, tmp_path: Path) -> None:
        """Reads the file into a document."""
        config = tmp_path / "config"
        config.write_text('[remote "origin"]\n\turl = https://example.com/r.git\n')
        document = load_config_file(config)
        assert isinstance(document, Document)
        url = document.string("remote", "origin", "url")
        assert url == b"https://example.com/r.git"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Raises ConfigFileNotFoundError for a missing file."""
        with pytest.raises(ConfigFileNotFoundError):
            load_config_file(tmp_path / "missing")

    def test_invalid_file(self, tmp_path: Path) -> None:
        """Raises ParseError for a malformed file."""
        config = tmp_path / "config"
        config.write_text("key = value\n")
        with pytest.raises(ParseError, match="line 1"):
            load_config_file(config)

    def test_boolean_table(self, tmp_path: Path) -> None:
        """The boolean table is carried into the document."""
        config = tmp_path / "config"
        config.write_text("[a]\n\tb = y\n")
        table = BooleanTable.from_tokens(["y"], ["n"])
        assert load_config_file(config, table).boolean("a", None, "b")


class TestLoadAllConfigs:
    """Tests for load_all_configs function."""

    @pytest.fixture(autouse=True)
    def isolate(self, mock_home: Path, xdg_config_home: Path) -> None:
        """Point the user-level config locations at empty directories."""

    def test_nothing_found(self, project_dir: Path) -> None:
        """Returns an empty document when no files exist."""
        document, loaded = load_all_configs(project_dir)
        assert loaded == []
        assert len(document) == 0

    def test_repo_overrides_global(self, repo_dir: Path, mock_home: Path) -> None:
        """The repository config is read last and wins."""
        global_file = mock_home / ".gitconfig"
        global_file.write_text("[user]\n\tname = Global\n\temail = g@example.com\n")
        repo_file = repo_dir / ".git" / "config"
        repo_file.write_text("[user]\n\tname = Repo\n")

        document, loaded = load_all_configs(repo_dir)

        assert loaded == [global_file, repo_file]
        assert document.string("user", None, "name") == b"Repo"
        assert document.string("user", None, "email") == b"g@example.com"

    def test_exclude_global(self, repo_dir: Path, mock_home: Path) -> None:
        """include_global=False reads only the repository config."""
        (mock_home / ".gitconfig").write_text("[user]\n\tname = Global\n")
        repo_file = repo_dir / ".git" / "config"
        repo_file.write_text("[core]\n\tbare = false\n")

        document, loaded = load_all_configs(repo_dir, include_global=False)

        assert loaded == [repo_file]
        assert document.string("user", None, "name") is None

    def test_explicit_config_only(
        self, tmp_path: Path, repo_dir: Path, mock_home: Path
    ) -> None:
        """An explicit file replaces discovery."""
        (mock_home / ".gitconfig").write_text("[user]\n\tname = Global\n")
        (repo_dir / ".git" / "config").write_text("[user]\n\tname = Repo\n")
        explicit = tmp_path / "explicit"
        explicit.write_text("[user]\n\tname = Explicit\n")

        document, loaded = load_all_configs(repo_dir, explicit)

        assert loaded == [explicit]
        assert document.string("user", None, "name") == b"Explicit"

    def test_explicit_config_missing(self, tmp_path: Path, project_dir: Path) -> None:
        """A missing explicit file is an error."""
        with pytest.raises(ConfigFileNotFoundError):
            load_all_configs(project_dir, tmp_path / "missing")
