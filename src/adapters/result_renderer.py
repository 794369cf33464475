"""Rendering of `ProvisionResult` for callers.

- Markdown text for humans (MCP clients, terminals).
- JSON-safe camelCase metadata for machines.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.models import ProvisionResult, ProvisionStatus


def result_metadata(result: ProvisionResult) -> dict[str, Any]:
    """camelCase, JSON-safe dict mirroring `ProvisionResult`."""

    return result.model_dump(mode="json", by_alias=True)


def result_json(result: ProvisionResult) -> str:
    return json.dumps(result_metadata(result), ensure_ascii=False, indent=2, sort_keys=True)


def _visibility(result: ProvisionResult) -> str:
    return "private" if result.is_private else "public"


def render_result_markdown(result: ProvisionResult) -> str:
    if result.status is ProvisionStatus.COMPLETED:
        lines = [
            "## Repository created and configured",
            "",
            f"- **GitHub Namespace:** {result.github_namespace}",
            f"- **Repository:** {result.repo_name}",
            f"- **Private:** {str(result.is_private).lower()} ({_visibility(result)})",
            f"- **Template Source:** {result.template_source}",
            f"- **Vercel Project ID:** {result.vercel_project_id or 'n/a'}",
            f"- **Repository URL:** {result.repo_url}",
        ]
        if result.team_id:
            lines.append(f"- **Vercel Team:** {result.team_id}")
    else:
        lines = [f"Error: {result.error or 'unknown error'}"]
        if result.failed_step:
            lines.append("")
            lines.append(f"- **Failed step:** {result.failed_step.value}")
        if result.status is ProvisionStatus.PARTIAL:
            lines.append(
                f"- **Repository left created:** {result.repo_url} "
                "(template push failed; remove it manually if unwanted)"
            )

    if result.warnings:
        lines.append("")
        lines.append("**Warnings:**")
        lines.extend(f"- {w}" for w in result.warnings)
    return "\n".join(lines)
