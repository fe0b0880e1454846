"""Config file discovery and loading.

Discovers git config files at the global and repository level and reads
them into documents, stacked with proper priority. This is the only module
that touches the filesystem; the document and value layers never do.
"""

import logging
import os
from pathlib import Path

from gitconf.document import Document
from gitconf.exceptions import ConfigFileNotFoundError
from gitconf.values import DEFAULT_TABLE, BooleanTable

logger = logging.getLogger(__name__)


def get_config_home() -> Path:
    """Get the XDG config home directory.

    Priority:
    1. $XDG_CONFIG_HOME if set
    2. ~/.config (default)

    Returns:
        Path to the config home directory.
    """
    if xdg_config_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config_home)
    return Path.home() / ".config"


def get_settings_home() -> Path:
    """Get the directory holding gitconf's own settings file.

    Priority:
    1. $GITCONF_CONFIG_HOME if set
    2. $XDG_CONFIG_HOME/gitconf if XDG_CONFIG_HOME is set
    3. ~/.config/gitconf (default)

    Returns:
        Path to the gitconf settings directory.
    """
    if gitconf_config_home := os.environ.get("GITCONF_CONFIG_HOME"):
        return Path(gitconf_config_home)
    return get_config_home() / "gitconf"


def discover_global_configs() -> list[Path]:
    """Discover user-level git config files.

    Looks for $XDG_CONFIG_HOME/git/config and ~/.gitconfig. Git reads both,
    in that order, so values in ~/.gitconfig win.

    Returns:
        The existing files, lowest priority first.
    """
    candidates = [get_config_home() / "git" / "config", Path.home() / ".gitconfig"]
    return [path for path in candidates if path.is_file()]


def _resolve_git_dir(dot_git: Path) -> Path | None:
    """Follow a ``.git`` entry to the git directory.

    Worktrees and submodules use a ``.git`` file containing ``gitdir: <path>``.
    """
    if dot_git.is_dir():
        return dot_git
    if not dot_git.is_file():
        return None
    first_line = dot_git.read_text(encoding="utf-8").splitlines()[:1]
    if not first_line or not first_line[0].startswith("gitdir:"):
        return None
    git_dir = Path(first_line[0][len("gitdir:") :].strip())
    if not git_dir.is_absolute():
        git_dir = dot_git.parent / git_dir
    return git_dir


def discover_repo_config(project_dir: Path) -> Path | None:
    """Discover the repository config file.

    Walks up from ``project_dir`` to the first directory with a ``.git``
    entry and returns its ``config`` file.

    Args:
        project_dir: The directory to start searching from.

    Returns:
        Path to the repository config if it exists, None otherwise.
    """
    for directory in (project_dir, *project_dir.parents):
        git_dir = _resolve_git_dir(directory / ".git")
        if git_dir is None:
            continue
        config_file = git_dir / "config"
        return config_file if config_file.is_file() else None
    return None


def load_config_file(
    path: Path, boolean_table: BooleanTable = DEFAULT_TABLE
) -> Document:
    """Read a git config file into a document.

    Args:
        path: Path to the config file.
        boolean_table: Tokens accepted when decoding booleans.

    Returns:
        The parsed document.

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist.
        ParseError: If the file is not a valid config file.
    """
    if not path.is_file():
        raise ConfigFileNotFoundError(str(path))
    logger.debug("Loading config file %s", path)
    return Document.from_bytes(path.read_bytes(), boolean_table=boolean_table)


def load_all_configs(
    project_dir: Path,
    explicit_config: Path | None = None,
    *,
    include_global: bool = True,
    boolean_table: BooleanTable = DEFAULT_TABLE,
) -> tuple[Document, list[Path]]:
    """Load and stack all configuration files.

    When explicit_config is provided, ONLY that file is loaded. Otherwise
    files are discovered and stacked in priority order:
    1. $XDG_CONFIG_HOME/git/config (lowest)
    2. ~/.gitconfig
    3. The repository's .git/config (highest)

    Args:
        project_dir: The directory to search for a repository from.
        explicit_config: Explicit config file path (--file option).
        include_global: Whether to read the user-level files.
        boolean_table: Tokens accepted when decoding booleans.

    Returns:
        Tuple of (stacked_document, list_of_loaded_files).

    Raises:
        ConfigFileNotFoundError: If explicit_config is provided but doesn't exist.
        ParseError: If any file is not a valid config file.
    """
    if explicit_config is not None:
        document = load_config_file(explicit_config, boolean_table)
        return document, [explicit_config]

    loaded_files: list[Path] = []
    if include_global:
        loaded_files.extend(discover_global_configs())
    repo_config = discover_repo_config(project_dir)
    if repo_config is not None:
        loaded_files.append(repo_config)

    documents = [load_config_file(path, boolean_table) for path in loaded_files]
    document = Document.concat(*documents) if documents else Document(
        boolean_table=boolean_table
    )
    return document, loaded_files
