"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels are reused by `run` and `validate`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from microsite_factory.core.domain.models import (
    DeploymentDescriptor,
    OptimizedVariant,
    ValidatedProject,
)


def print_banner(console: Console) -> None:
    title = Text("MICROSITE FACTORY", style="bold cyan")
    subtitle = Text("Brief • Localization • SEO • Geo deployment", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_validation_panel(project: ValidatedProject) -> Panel:
    ok = project.is_validated
    body = Text()
    body.append(f"Campaign: {project.project_id or '-'}\n")
    body.append(f"Status: {project.status.value}\n", style="green" if ok else "red")
    body.append(f"Locales: {', '.join(project.brief.target_locales) or '-'}\n")

    policy = project.compliance
    body.append("\nCompliance policy:\n", style="bold")
    body.append(f"- consent required: {policy.requires_consent}\n")
    body.append(f"- consent active: {policy.consent_active}\n")
    body.append(f"- data residency: {policy.data_residency.value}")

    if project.errors:
        body.append("\n\nErrors:\n", style="bold red")
        for err in project.errors:
            body.append(f"- {err}\n", style="red")

    return Panel(body, title=Text("Validation", style="bold"), border_style="green" if ok else "red")


def build_variants_table(variants: list[OptimizedVariant]) -> Table:
    table = Table(title="Optimized Variants")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("Layout", style="white")
    table.add_column("Title", style="white")
    table.add_column("Keywords", style="magenta")
    table.add_column("Canonical URL", style="dim")
    for v in variants:
        table.add_row(
            v.locale,
            v.layout_id,
            v.seo.title,
            ", ".join(v.keywords_applied),
            v.seo.canonical_url,
        )
    return table


def build_deployment_panel(descriptor: DeploymentDescriptor) -> Panel:
    rules = descriptor.middleware_rules
    body = Text()
    body.append(f"Deployment: {descriptor.deployment_id}\n", style="bold")
    body.append(
        f"Edge region: {descriptor.edge_region.value} ({descriptor.edge_region.label()})\n"
    )
    body.append(f"Live: {descriptor.is_live}\n")
    body.append(f"Telemetry: {descriptor.telemetry_endpoint}\n")
    body.append(f"Middleware: geo_blocking={rules.geo_blocking}, consent_required={rules.consent_required}")
    return Panel(body, title=Text("Deployment", style="bold yellow"), border_style="yellow")
