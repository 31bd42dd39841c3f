"""
Command line interface for the gamescaffold project generator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codegen import available_code_templates, get_code_template
from .config import ScaffolderSettings, get_settings
from .errors import ScaffoldError, SettingsError
from .scaffold import SEED_CLASS_NAME, ScaffoldReport, create_project, validate_identifier
from .templates import DirectoryTemplateSource

console = Console()
app = typer.Typer(help="Create game projects from template archives.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _load_settings_or_exit() -> ScaffolderSettings:
    try:
        return get_settings()
    except SettingsError as exc:
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _configure_logging(level_name: str) -> None:
    env_override = _load_settings_or_exit().log_level
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_template_dir(value: Optional[Path]) -> Path:
    """Fall back to the configured template directory and check it exists."""
    resolved = (value or _load_settings_or_exit().template_dir).expanduser().resolve()
    if not resolved.is_dir():
        raise typer.BadParameter(f"No template directory found at {resolved}")
    return resolved


def _print_scaffold_report(report: ScaffoldReport) -> None:
    table = Table(title="Scaffold Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show gamescaffold version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]gamescaffold[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]gamescaffold[/] is ready. Run "
            "[cyan]gamescaffold create DEST --name MyGame --package com.example.game --template ID[/].",
        )


@app.command()
def create(
    destination: Path = typer.Argument(
        ...,
        help="Directory the project is created in (created if missing).",
    ),
    name: str = typer.Option(
        ...,
        "--name",
        "-n",
        help="Project name; replaces the template's internal name.",
    ),
    package: str = typer.Option(
        ...,
        "--package",
        "-p",
        help="Dot-separated package identifier, e.g. com.example.game.",
    ),
    template: str = typer.Option(
        ...,
        "--template",
        "-t",
        help="Template id from the catalog in the template directory.",
    ),
    template_dir: Optional[Path] = typer.Option(
        None,
        "--template-dir",
        help="Directory holding template archives and templates.toml (defaults to GAMESCAFFOLD_TEMPLATE_DIR).",
    ),
    lock: bool = typer.Option(
        True,
        "--lock/--no-lock",
        help="Serialize concurrent scaffolds into the same destination with a lock file.",
    ),
) -> None:
    """
    Expand a template archive into DESTINATION and seed the main screen class.
    """
    source = DirectoryTemplateSource(_resolve_template_dir(template_dir))
    try:
        validate_identifier(name, "Project name")
        validate_identifier(package, "Package id")
        descriptor = source.describe(template)
        report = create_project(
            destination,
            name,
            package,
            descriptor,
            source=source,
            lock=lock,
        )
    except ScaffoldError as exc:
        logger.debug("Scaffold failed", exc_info=True)
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _print_scaffold_report(report)
    console.print(f"[bold green]Project {name} created.[/]")


@app.command()
def seed(
    package: str = typer.Option(
        ...,
        "--package",
        "-p",
        help="Package identifier bound into the generated class.",
    ),
    code_template: str = typer.Option(
        "game-screen-logic",
        "--code-template",
        help=f"Code template to render ({', '.join(available_code_templates())}).",
    ),
) -> None:
    """
    Print the seed class a new project would receive, without writing files.
    """
    try:
        rendered = get_code_template(code_template).render(SEED_CLASS_NAME, package)
    except ScaffoldError as exc:
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    typer.echo(rendered.decode("utf-8"), nl=False)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
