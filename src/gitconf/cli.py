"""CLI for gitconf using Click.

Provides 'gitconf get' and 'gitconf list' to query git config files.
"""

import logging
import os
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from gitconf.cow import Cow, Owned
from gitconf.document import Document
from gitconf.exceptions import (
    ConfigError,
    DecodeError,
    LookupNotFound,
    ParseError,
)
from gitconf.loader import load_all_configs
from gitconf.names import ascii_fold
from gitconf.settings import GitconfSettings, get_home_dir, set_settings_context
from gitconf.values import Ansi, Boolean, Color, Integer, Name, String
from gitconf.values import Path as PathValue

logger = logging.getLogger(__name__)

# Exit codes follow `git config`.
EXIT_NOT_FOUND = 1
EXIT_BAD_NAME = 2
EXIT_INVALID_FILE = 3
EXIT_BAD_VALUE = 128

VALUE_TYPES = ("string", "bool", "int", "color", "path", "raw")


def split_name(name: str) -> tuple[str, str | None, str]:
    """Split ``section[.subsection].key``.

    The subsection is everything between the first and the last dot, so it
    may contain dots itself.

    Raises:
        click.UsageError: If the name has no section part.
    """
    section, dot, rest = name.partition(".")
    if not dot or not section or not rest:
        raise click.UsageError(f"key does not contain a section: {name}")
    subsection, dot, key = rest.rpartition(".")
    if not key:
        raise click.UsageError(f"key does not contain variable name: {name}")
    return section, (subsection if dot else None), key


def _user_home(user: str) -> Path | None:
    expanded = os.path.expanduser(f"~{user}")
    return None if expanded.startswith("~") else Path(expanded)


def format_color(color: Color) -> str:
    """Render a color back into canonical config tokens."""
    tokens = []
    for name in (color.foreground, color.background):
        if name is None:
            continue
        if isinstance(name, Name):
            tokens.append(name.value)
        elif isinstance(name, Ansi):
            tokens.append(str(name.index))
        else:
            tokens.append(f"#{name.red:02x}{name.green:02x}{name.blue:02x}")
    tokens.extend(attribute.value for attribute in color.attributes)
    return " ".join(tokens)


def format_value(
    raw: Cow | None,
    value_type: str,
    settings: GitconfSettings,
    document: Document,
) -> str:
    """Decode ``raw`` as ``value_type`` and format it for output.

    Raises:
        DecodeError: If the value does not fit the type.
    """
    if value_type == "raw":
        return "" if raw is None else raw.decode(errors="replace")
    if value_type == "bool":
        return "true" if Boolean.decode(raw, document.boolean_table) else "false"
    if value_type == "int":
        return str(Integer.decode(raw).to_decimal())
    if value_type == "color":
        return format_color(Color.decode(raw))
    if value_type == "path":
        path = PathValue.decode(raw)
        return str(path.interpolate(get_home_dir(settings), user_home=_user_home))
    return str(String.decode(raw))


@click.group()
@click.option(
    "-f",
    "--file",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use only this config file (skips discovery)",
)
@click.option(
    "-d",
    "--dir",
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to search for a repository from (default: current directory)",
)
@click.option(
    "-s",
    "--settings",
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use this gitconf settings file",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug output to stderr",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Path | None,
    project_dir: Path | None,
    settings_file: Path | None,
    verbose: bool,
) -> None:
    """gitconf - Query git configuration files."""
    # Ensure ctx.obj exists
    ctx.ensure_object(dict)

    # Resolve project directory
    if project_dir is None:
        project_dir = Path.cwd()
    project_dir = project_dir.resolve()

    # Set context for pydantic-settings source discovery
    set_settings_context(settings_file)

    try:
        settings = GitconfSettings()
    except (ConfigError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s %(message)s",
    )

    try:
        document, loaded_files = load_all_configs(
            project_dir,
            config_file,
            include_global=settings.include_global,
            boolean_table=settings.boolean_table(),
        )
    except ParseError as e:
        click.echo(f"Error: bad config file: {e}", err=True)
        sys.exit(EXIT_INVALID_FILE)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logger.debug("Loaded %s", ", ".join(map(str, loaded_files)) or "no files")

    # Store in context for subcommands
    ctx.obj["settings"] = settings
    ctx.obj["document"] = document
    ctx.obj["project_dir"] = project_dir
    ctx.obj["loaded_files"] = loaded_files


@cli.command()
@click.argument("name")
@click.option(
    "-t",
    "--type",
    "value_type",
    type=click.Choice(VALUE_TYPES),
    default="string",
    help="Decode the value as this type",
)
@click.option(
    "--all",
    "all_values",
    is_flag=True,
    help="Print every value of a multi-valued key",
)
@click.option(
    "--default",
    "default",
    default=None,
    help="Value to use when the key is missing",
)
@click.pass_context
def get(
    ctx: click.Context,
    name: str,
    value_type: str,
    all_values: bool,
    default: str | None,
) -> None:
    """Print the value of NAME (section[.subsection].key).

    Examples:

        \b
        # Remote URL
        gitconf get remote.origin.url

        \b
        # Decode as a boolean
        gitconf get --type bool core.bare

        \b
        # All fetch refspecs
        gitconf get --all remote.origin.fetch
    """
    settings: GitconfSettings = ctx.obj["settings"]
    document: Document = ctx.obj["document"]

    try:
        section, subsection, key = split_name(name)
    except click.UsageError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_BAD_NAME)

    try:
        if all_values:
            raws = document.raw_values(section, subsection, key)
        else:
            raws = [document.raw_value(section, subsection, key)]
    except LookupNotFound:
        if default is None:
            sys.exit(EXIT_NOT_FOUND)
        raws = [Owned(default.encode("utf-8"))]

    try:
        for raw in raws:
            click.echo(format_value(raw, value_type, settings, document))
    except DecodeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_BAD_VALUE)


@cli.command(name="list")
@click.pass_context
def list_entries(ctx: click.Context) -> None:
    """List every entry as section[.subsection].key=value, in file order."""
    document: Document = ctx.obj["document"]

    try:
        for section in document:
            prefix = ascii_fold(section.name.tobytes()).decode(errors="replace")
            if section.subsection is not None:
                prefix += "." + section.subsection.decode(errors="replace")
            for entry in section.entries:
                key = ascii_fold(entry.key.tobytes()).decode(errors="replace")
                name = f"{prefix}.{key}"
                if entry.implicit:
                    click.echo(name)
                else:
                    click.echo(f"{name}={String.decode(entry.value)}")
    except DecodeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_BAD_VALUE)


if __name__ == "__main__":
    cli()
