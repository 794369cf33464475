"""Repository provisioning orchestration.

One sequential chain per request:

    namespace (optional) -> team scope (degradable) -> create repo -> push template

Entry points (MCP tool, CLI) delegate here and only deal with presentation.
The run is stateless: nothing is cached between calls and concurrent calls
share no mutable state. There is no rollback: when the push fails after the
repository was created, the result is `partial` and the repository stays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from adapters.github import GitHubClient
from adapters.vercel import VercelClient
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import (
    ProvisionRequest,
    ProvisionResult,
    ProvisionStatus,
    ProvisionStep,
)
from core.interfaces.providers import HostingProvider, SourceControlProvider

logger = logging.getLogger(__name__)

GITHUB_WEB_URL = "https://github.com"


@dataclass
class ProvisionHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    step_started: Callable[[ProvisionStep], None] | None = None


def synthesize_repo_url(namespace: str, repo_name: str) -> str:
    return f"{GITHUB_WEB_URL}/{namespace}/{repo_name}"


async def resolve_team_scope(
    hosting: HostingProvider,
    *,
    warnings: list[str] | None = None,
    hooks: ProvisionHooks | None = None,
) -> str | None:
    """Fallible lookup of the default team; any failure yields `None`."""

    try:
        return await hosting.resolve_team_id()
    except Exception as exc:
        message = f"Could not fetch Vercel teams, proceeding without team ID: {exc}"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        if hooks and hooks.warning:
            hooks.warning(message)
        return None


async def provision(
    request: ProvisionRequest,
    *,
    settings: AppSettings | None = None,
    source_control: SourceControlProvider | None = None,
    hosting: HostingProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    hooks: ProvisionHooks | None = None,
) -> ProvisionResult:
    """Create the repository and push the template.

    Always returns a `ProvisionResult`; remote failures are reported in it
    instead of being raised.
    """

    settings = settings or AppSettings()
    hooks = hooks or ProvisionHooks()
    github = source_control or GitHubClient(
        request.github_token.get_secret_value(), settings, transport=transport
    )
    vercel = hosting or VercelClient(
        request.vercel_api_key.get_secret_value(), settings, transport=transport
    )

    result = ProvisionResult(
        repo_name=request.repo_name,
        is_private=request.is_private,
        template_source=request.template_source,
    )
    step = ProvisionStep.NAMESPACE

    def start(current: ProvisionStep) -> ProvisionStep:
        logger.info("Provisioning %s: %s", request.repo_name, current.value)
        if hooks.step_started:
            hooks.step_started(current)
        return current

    try:
        if request.namespace:
            namespace = request.namespace
        else:
            step = start(ProvisionStep.NAMESPACE)
            namespace = await github.resolve_namespace()
        result.github_namespace = namespace

        step = start(ProvisionStep.TEAM_SCOPE)
        result.team_id = await resolve_team_scope(
            vercel, warnings=result.warnings, hooks=hooks
        )

        step = start(ProvisionStep.CREATE_REPOSITORY)
        created = await vercel.create_repository(
            namespace=namespace, name=request.repo_name, private=request.is_private
        )
        result.repo_id = created.id
        result.repo_url = created.url or synthesize_repo_url(namespace, request.repo_name)

        step = start(ProvisionStep.PUSH_TEMPLATE)
        pushed = await vercel.push_template(
            namespace=namespace,
            name=request.repo_name,
            source=request.template_source,
            team_id=result.team_id,
        )
        result.vercel_project_id = pushed.project_id
    except ProviderError as exc:
        return _fail(result, step=exc.step, message=exc.message)
    except Exception as exc:
        logger.exception("Unexpected error during %s", step.value)
        return _fail(result, step=step, message=str(exc) or exc.__class__.__name__)

    result.success = True
    result.status = ProvisionStatus.COMPLETED
    logger.info("Provisioned %s (project %s)", result.repo_full_name, result.vercel_project_id)
    return result


def _fail(result: ProvisionResult, *, step: ProvisionStep, message: str) -> ProvisionResult:
    result.success = False
    result.failed_step = step
    result.error = message
    result.status = (
        ProvisionStatus.PARTIAL
        if step is ProvisionStep.PUSH_TEMPLATE and result.repo_url
        else ProvisionStatus.FAILED
    )
    if result.status is ProvisionStatus.PARTIAL:
        logger.error(
            "Template push failed; repository %s was left created: %s",
            result.repo_full_name,
            message,
        )
    else:
        logger.error("Provisioning failed at %s: %s", step.value, message)
    return result
