"""Rich UI components for the CLI.

Kept apart from the commands so the same panels/tables serve `provision`
and `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ProvisionResult, ProvisionStatus

_STATUS_STYLES = {
    ProvisionStatus.COMPLETED: "green",
    ProvisionStatus.PARTIAL: "yellow",
    ProvisionStatus.FAILED: "red",
}


def print_banner(console: Console) -> None:
    title = Text("vercel-repo-push", style="bold cyan")
    subtitle = Text("GitHub repository • Vercel template", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_panel(result: ProvisionResult) -> Panel:
    """Panel summarizing a `ProvisionResult`."""

    style = _STATUS_STYLES[result.status]
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    table.add_row("Status", Text(result.status.value, style=style))
    table.add_row("Repository", result.repo_name)
    table.add_row("Namespace", result.github_namespace or "-")
    table.add_row("Private", str(result.is_private).lower())
    table.add_row("Template", result.template_source)
    if result.team_id:
        table.add_row("Vercel team", result.team_id)
    if result.repo_url:
        table.add_row("Repository URL", result.repo_url)
    if result.vercel_project_id:
        table.add_row("Vercel project", result.vercel_project_id)
    if result.error:
        table.add_row("Failed step", result.failed_step.value if result.failed_step else "-")
        table.add_row("Error", Text(result.error, style="red"))
    for warning in result.warnings:
        table.add_row("Warning", Text(warning, style="yellow"))

    return Panel(table, title=Text("Provisioning", style=f"bold {style}"), border_style=style)


def build_doctor_table() -> Table:
    table = Table(title="vercel-repo-push doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
