"""
flatcompat translate - Translate a legacy config file.

Prints the flat config list equivalent to an eslintrc-style config file.
"""

import json
from pathlib import Path

import typer
import yaml
from rich.console import Console

from flatcompat.config.loader import find_config_file
from flatcompat.config.settings import load_settings
from flatcompat.core.compat import FlatCompat
from flatcompat.exceptions import FlatCompatError
from flatcompat.utils.logging import get_logger, setup_logging, setup_logging_from_config
from flatcompat.utils.serialize import serialize_flat_config

logger = get_logger("flatcompat.cli.translate")

app = typer.Typer(name="translate", help="Translate a legacy config file into a flat config", invoke_without_command=True)

# Diagnostics go to stderr so stdout stays parseable
console = Console(stderr=True)


@app.callback()
def translate(
    ctx: typer.Context,
    config_file: Path | None = typer.Argument(None, help="Legacy config file (default: discover in project dir)"),
    project_dir: Path | None = typer.Option(None, "--project-dir", "-d", help="Project directory"),
    base_dir: Path | None = typer.Option(None, "--base-dir", help="Directory shareable configs and parsers resolve from"),
    plugins_dir: Path | None = typer.Option(None, "--plugins-dir", help="Directory plugins resolve from"),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format: json or yaml"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)"),
) -> None:
    """
    Translate a legacy config file and print the flat config.
    """
    if ctx.invoked_subcommand is not None:
        return

    project_dir = project_dir or Path.cwd()

    try:
        settings = load_settings(project_dir)
    except FlatCompatError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if log_level:
        setup_logging(level=log_level, use_rich=True)
    elif "logging" in settings:
        setup_logging_from_config(settings.data, project_dir=project_dir)

    output_format = output_format or settings.format or "json"
    if output_format not in ("json", "yaml"):
        console.print(f"[red]Error:[/red] Unknown format '{output_format}' (expected json or yaml)")
        raise typer.Exit(1)

    if config_file is None:
        config_file = find_config_file(project_dir)
        if config_file is None:
            console.print(f"[red]Error:[/red] No legacy config file found in {project_dir}")
            raise typer.Exit(1)

    base_directory = base_dir or _setting_path(settings.base_directory, project_dir) or project_dir
    plugins_directory = plugins_dir or _setting_path(settings.resolve_plugins_relative_to, project_dir)

    compat = FlatCompat(base_directory=base_directory, resolve_plugins_relative_to=plugins_directory)

    try:
        flat_config = compat.config_file(config_file if config_file.is_absolute() else Path.cwd() / config_file)
    except FlatCompatError as e:
        logger.debug("Translation failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    data = serialize_flat_config(flat_config)
    if output_format == "yaml":
        typer.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
    else:
        typer.echo(json.dumps(data, indent=2))


def _setting_path(value: str | None, project_dir: Path) -> Path | None:
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else project_dir / path
