"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from microsite_factory.core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Configuration checks and adapter selection.")

_console = Console()


def describe_adapters(settings: AppSettings) -> list[tuple[str, str, str]]:
    """(collaborator, implementation, detail) rows for the effective settings."""

    rows: list[tuple[str, str, str]] = []

    if settings.ai_api_key:
        rows.append(("Generation", "openai", f"{settings.ai_model} @ {settings.ai_base_url}"))
    else:
        rows.append(
            (
                "Generation",
                "simulated",
                f"{settings.generation_latency_min_ms}-{settings.generation_latency_max_ms} ms latency",
            )
        )

    if settings.persistence_dir is not None:
        rows.append(("Persistence", "json", str(settings.persistence_dir)))
    else:
        rows.append(("Persistence", "in-memory", "outcomes are not written to disk"))

    if settings.deploy_api_url:
        rows.append(("Deployment", "http", settings.deploy_api_url))
    else:
        rows.append(("Deployment", "simulated", "dpl_<region>_<token> ids"))

    if settings.telemetry_api_url:
        rows.append(("Telemetry", "http", settings.telemetry_api_url))
    else:
        rows.append(("Telemetry", "simulated", settings.analytics_base_url))

    return rows


@app.command()
def run() -> None:
    """Show the effective configuration and which adapters a run would use."""

    settings = AppSettings()

    table = Table(title="Microsite Factory Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Site base URL", "OK", f"{settings.site_base_url}/<locale>/{settings.campaign_path}")
    env_file = get_user_env_file()
    table.add_row("User .env", "FOUND" if env_file.exists() else "OPTIONAL", str(env_file))
    if settings.deploy_api_url and not settings.deploy_api_token:
        table.add_row("Deploy token", "WARN", "Deployment API configured without a bearer token")
    if settings.telemetry_api_url and not settings.telemetry_api_token:
        table.add_row("Telemetry token", "WARN", "Telemetry API configured without a bearer token")

    for collaborator, impl, detail in describe_adapters(settings):
        table.add_row(collaborator, impl.upper(), detail)

    _console.print(table)
