"""Doctor command for credential and connectivity diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.github import GitHubClient
from adapters.vercel import VercelClient
from cli.ui_components import build_doctor_table
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ProviderError

app = typer.Typer(no_args_is_help=True, help="Credential and connectivity checks.")

_console = Console()


async def _check_github(settings: AppSettings) -> tuple[bool, str]:
    try:
        login = await GitHubClient(settings.github_token or "", settings).resolve_namespace()
    except ProviderError as exc:
        return False, str(exc)
    return True, f"namespace: {login}"


async def _check_vercel(settings: AppSettings) -> tuple[bool, str]:
    try:
        team_id = await VercelClient(settings.vercel_api_key or "", settings).resolve_team_id()
    except ProviderError as exc:
        return False, str(exc)
    return True, f"team: {team_id}" if team_id else "personal account scope"


@app.command()
def run() -> None:
    """Check credentials and reach both providers (read-only calls)."""

    settings = AppSettings()
    missing = settings.missing_credentials()

    table = build_doctor_table()
    table.add_row(
        "Vercel API key",
        "MISSING" if "VERCEL_API_KEY" in missing else "OK",
        "VERCEL_API_KEY / --vercel-key",
    )
    table.add_row(
        "GitHub token",
        "MISSING" if "GITHUB_TOKEN" in missing else "OK",
        "GITHUB_TOKEN / --github-token",
    )

    ok = not missing
    if "GITHUB_TOKEN" not in missing:
        ok_github, detail = asyncio.run(_check_github(settings))
        table.add_row("GitHub identity", "OK" if ok_github else "FAIL", detail)
        ok = ok and ok_github
    if "VERCEL_API_KEY" not in missing:
        # Team lookup failures are not fatal when provisioning.
        ok_team, detail = asyncio.run(_check_vercel(settings))
        table.add_row("Vercel team scope", "OK" if ok_team else "WARN", detail)

    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive credential setup (stored in the user config .env)."""

    vercel_api_key = typer.prompt("Vercel API key", hide_input=True).strip()
    github_token = typer.prompt("GitHub token", hide_input=True).strip()

    if not vercel_api_key or not github_token:
        raise typer.BadParameter("both credentials are required")

    env_path = write_user_env_vars(
        {
            "VERCEL_API_KEY": vercel_api_key,
            "GITHUB_TOKEN": github_token,
        }
    )
    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
