"""Typer application: `microsite-factory run|validate|doctor`."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from microsite_factory.adapters.brief_loader import load_brief
from microsite_factory.adapters.json_exporter import export_result_json
from microsite_factory.cli import doctor
from microsite_factory.cli.ui_components import (
    build_deployment_panel,
    build_validation_panel,
    build_variants_table,
    print_banner,
)
from microsite_factory.core.config import AppSettings
from microsite_factory.core.domain.models import Brief
from microsite_factory.core.errors import MicrositeFactoryError, PipelineHaltedError
from microsite_factory.core.services.pipeline import PipelineHooks, PipelineStage, build_pipeline
from microsite_factory.core.services.validator import validate

app = typer.Typer(no_args_is_help=True, help="Turn a campaign brief into localized microsite deployments.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(verbose: bool) -> None:
    """Configure the root logger once, rendering through Rich."""

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )


def _load_or_exit(path: Path) -> Brief:
    try:
        return load_brief(path)
    except FileNotFoundError:
        raise typer.BadParameter(f"Brief file not found: {path}")
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Brief is not valid JSON: {exc}")
    except ValidationError as exc:
        raise typer.BadParameter(f"Brief has wrongly typed fields: {exc.error_count()} error(s)")


def _print_stage(stage: PipelineStage) -> None:
    _console.print(f"[dim]» {stage.value}[/dim]")


@app.command(name="run")
def run_command(
    brief_path: Path = typer.Argument(..., help="Path to the campaign brief (JSON)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the run result as JSON."),
    fail_locale: list[str] = typer.Option(
        [],
        "--fail-locale",
        help="Force the simulated generator to fail this locale (repeatable).",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log stage progress."),
) -> None:
    """Run the full pipeline: validate, generate, optimize, deploy."""

    configure_logging(verbose)
    if not no_banner:
        print_banner(_console)

    brief = _load_or_exit(brief_path)
    pipeline = build_pipeline(AppSettings(), failing_locales=fail_locale)
    hooks = PipelineHooks(
        warning=lambda msg: _console.print(f"[yellow]warning:[/yellow] {msg}"),
        stage_started=_print_stage,
    )

    try:
        result = asyncio.run(pipeline.run(brief, hooks=hooks))
    except PipelineHaltedError as exc:
        if exc.project is not None:
            _console.print(build_validation_panel(exc.project))
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    except MicrositeFactoryError as exc:
        _console.print(f"[red]Pipeline failed:[/red] {exc}")
        raise typer.Exit(code=1)

    _console.print(build_validation_panel(result.project))
    _console.print(build_variants_table(result.optimized_variants))
    if result.generation.failures:
        _console.print(
            f"[yellow]{len(result.generation.failures)} of {result.generation.attempted} locale(s) failed generation.[/yellow]"
        )
    _console.print(build_deployment_panel(result.deployment))

    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _console.print(f"[green]Saved run result to:[/green] {path}")


@app.command(name="validate")
def validate_command(
    brief_path: Path = typer.Argument(..., help="Path to the campaign brief (JSON)."),
) -> None:
    """Validate a brief and show its compliance policy without generating anything."""

    project = validate(_load_or_exit(brief_path))
    _console.print(build_validation_panel(project))
    if not project.is_validated:
        raise typer.Exit(code=1)


def run() -> None:
    app()
