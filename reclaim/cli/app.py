from __future__ import annotations

import logging
import sys
from typing import Annotated

import typer
from result import Err
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from reclaim.config.defaults import default_config, default_locations, system_drive
from reclaim.config.loader import load_config, sample_config_json
from reclaim.models.enums import Operation
from reclaim.services.cleanup import Cleaner
from reclaim.services.dispatch import execute, render_outcomes
from reclaim.services.fs import DEFAULT_FS
from reclaim.services.gate import check_elevation, check_platform, validate_drive
from reclaim.services.space import report_space
from reclaim.services.system import DEFAULT_SYSTEM

console = Console()
app = typer.Typer(add_completion=False, help="Report and reclaim disk space on a Windows volume.")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


@app.command()
def run(
    operation: Annotated[
        Operation,
        typer.Option("--operation", "-o", case_sensitive=False, help="Cleanup to perform."),
    ] = Operation.ALL,
    drive: Annotated[
        str | None,
        typer.Option("--drive", "-d", help="Drive letter to report on and clean. Defaults to the system drive."),
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", "-n", help="Measure only; delete nothing.")] = False,
    config_path: Annotated[str | None, typer.Option("--config", help="Path to a config JSON file.")] = None,
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details.")] = False,
) -> None:
    if sample_config:
        console.print(sample_config_json())
        raise typer.Exit(0)

    letter_result = validate_drive(drive if drive is not None else system_drive())
    if isinstance(letter_result, Err):
        raise typer.BadParameter(letter_result.unwrap_err(), param_hint="'--drive'")
    letter = letter_result.unwrap()

    platform_result = check_platform(sys.platform)
    if isinstance(platform_result, Err):
        console.print(f"[red]{escape(platform_result.unwrap_err())}[/]")
        raise typer.Exit(1)

    elevation_result = check_elevation(DEFAULT_SYSTEM)
    if isinstance(elevation_result, Err):
        console.print(f"[red]{escape(elevation_result.unwrap_err())}[/]")
        raise typer.Exit(1)

    config_result = load_config(config_path, fs=DEFAULT_FS)
    if isinstance(config_result, Err):
        console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        config = default_config()
    else:
        loaded = config_result.unwrap()
        config = loaded.config
        if loaded.ignored_keys:
            console.print(
                f"[yellow]Ignoring unknown config keys in {escape(loaded.path or '')}: "
                f"{escape(', '.join(loaded.ignored_keys))}[/]"
            )
    _configure_logging("DEBUG" if verbose else config.log_level)

    cleaner = Cleaner(
        drive=letter,
        locations=default_locations(letter, config),
        console=console,
        config=config,
        fs=DEFAULT_FS,
        system=DEFAULT_SYSTEM,
        dry_run=dry_run,
    )

    report_space(console, letter, "Disk Space (before)", fs=DEFAULT_FS)
    outcomes = execute(operation, cleaner)
    render_outcomes(console, outcomes, dry_run=dry_run)
    if operation is Operation.ALL:
        console.print(
            "[dim]For a deeper clean, run with --operation SystemCleanup to open Disk Cleanup.[/dim]"
        )
    report_space(console, letter, "Disk Space (after)", fs=DEFAULT_FS)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
