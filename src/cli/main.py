"""vercel-repo-push CLI (Typer).

Commands:
- `serve`      MCP server on stdio exposing `createAndPushRepo`
- `provision`  one-off provisioning from the terminal
- `doctor`     diagnostics and credential setup
"""

from __future__ import annotations

import asyncio
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.result_renderer import result_json
from cli import doctor
from cli.logging_config import setup_logging
from cli.mcp_server import build_server, serve_stdio
from cli.ui_components import build_result_panel, print_banner
from core.config import AppSettings
from core.domain.errors import MissingCredentialsError, validation_summary
from core.domain.models import ProvisionRequest, ProvisionStep
from core.services.provisioning import ProvisionHooks, provision

app = typer.Typer(
    no_args_is_help=True,
    help="Create a GitHub repository and push a template via the Vercel integration.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

_USAGE = "Usage: vercel-repo-push serve --vercel-key <key> --github-token <token>"

VercelKeyOption = typer.Option(
    None,
    "--vercel-key",
    "-v",
    "--VERCELL_API_KEY",
    help="Vercel API key (env: VERCEL_API_KEY).",
    show_default=False,
)
GitHubTokenOption = typer.Option(
    None,
    "--github-token",
    "-g",
    "--GITHUB_TOKEN",
    help="GitHub token (env: GITHUB_TOKEN).",
    show_default=False,
)


def _load_settings(vercel_key: str | None, github_token: str | None) -> AppSettings:
    """Settings from env/.env, with command-line credentials taking precedence."""

    settings = AppSettings()
    updates: dict[str, str] = {}
    if vercel_key:
        updates["vercel_api_key"] = vercel_key
    if github_token:
        updates["github_token"] = github_token
    return settings.model_copy(update=updates) if updates else settings


def _exit_missing_credentials(exc: MissingCredentialsError) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {exc}")
    _err_console.print(_USAGE)
    raise typer.Exit(code=1)


@app.command()
def serve(
    vercel_key: Optional[str] = VercelKeyOption,
    github_token: Optional[str] = GitHubTokenOption,
) -> None:
    """Start the MCP server on stdio."""

    settings = _load_settings(vercel_key, github_token)
    setup_logging(settings.log_level)
    try:
        server = build_server(settings)
    except MissingCredentialsError as exc:
        _exit_missing_credentials(exc)

    asyncio.run(serve_stdio(server))


@app.command(name="provision")
def provision_command(
    repo_name: str = typer.Argument(..., help="Name of the repository to create."),
    template_source: Optional[str] = typer.Option(
        None, "--template-source", "-t", help="Template URL to push.", show_default=False
    ),
    private: bool = typer.Option(True, "--private/--public", help="Repository visibility."),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="GitHub namespace; resolved from the token when omitted."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print result metadata as JSON."),
    vercel_key: Optional[str] = VercelKeyOption,
    github_token: Optional[str] = GitHubTokenOption,
) -> None:
    """Create REPO_NAME and push the template into it."""

    settings = _load_settings(vercel_key, github_token)
    setup_logging(settings.log_level, console=_err_console)
    try:
        vercel_api_key, token = settings.require_credentials()
    except MissingCredentialsError as exc:
        _exit_missing_credentials(exc)

    try:
        request = ProvisionRequest(
            repo_name=repo_name,
            template_source=template_source or settings.default_template_source,
            is_private=private,
            namespace=namespace,
            vercel_api_key=vercel_api_key,
            github_token=token,
        )
    except ValidationError as exc:
        raise typer.BadParameter(validation_summary(exc)) from exc

    if not as_json:
        print_banner(_console)

    with _err_console.status("Provisioning...") as status:

        def on_step(step: ProvisionStep) -> None:
            status.update(f"Provisioning: {step.value.replace('_', ' ')}")

        result = asyncio.run(
            provision(request, settings=settings, hooks=ProvisionHooks(step_started=on_step))
        )

    if as_json:
        typer.echo(result_json(result))
    else:
        _console.print(build_result_panel(result))

    if not result.success:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
