"""MCP server exposing the `createAndPushRepo` tool over stdio.

Credentials are bound once at startup; each tool call only carries the
repository name, template source and visibility.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from adapters.result_renderer import render_result_markdown, result_metadata
from core.config import AppSettings
from core.domain.errors import validation_summary
from core.domain.models import ProvisionRequest
from core.services.provisioning import provision

logger = logging.getLogger(__name__)

SERVER_NAME = "Vercel-GitHub Integration Service"
SERVER_VERSION = "1.0.0"
TOOL_NAME = "createAndPushRepo"

ToolOutput = tuple[list[types.TextContent], dict[str, Any]]


def build_tool(settings: AppSettings) -> types.Tool:
    return types.Tool(
        name=TOOL_NAME,
        description=(
            "Create a GitHub repository through the Vercel integration and push "
            "a project template into it."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "repoName": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Name of the repository to create",
                },
                "templateSource": {
                    "type": "string",
                    "default": settings.default_template_source,
                    "description": "URL of the template source to push",
                },
                "isPrivate": {
                    "type": "boolean",
                    "default": settings.default_private,
                    "description": "Whether the repository should be private",
                },
            },
            "required": ["repoName"],
        },
    )


def _error_output(message: str) -> ToolOutput:
    text = types.TextContent(type="text", text=f"Error: {message}")
    return [text], {"success": False, "error": message}


async def handle_create_and_push_repo(
    arguments: dict[str, Any],
    *,
    settings: AppSettings,
    vercel_api_key: str,
    github_token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolOutput:
    """Run one provisioning and return `(text blocks, metadata)`."""

    try:
        request = ProvisionRequest(
            repo_name=arguments.get("repoName") or "",
            template_source=arguments.get("templateSource") or settings.default_template_source,
            is_private=arguments.get("isPrivate", settings.default_private),
            vercel_api_key=vercel_api_key,
            github_token=github_token,
        )
    except ValidationError as exc:
        summary = validation_summary(exc)
        logger.warning("Rejected %s call: %s", TOOL_NAME, summary)
        return _error_output(f"Invalid arguments: {summary}")

    result = await provision(request, settings=settings, transport=transport)
    text = types.TextContent(type="text", text=render_result_markdown(result))
    return [text], result_metadata(result)


async def dispatch_tool_call(
    name: str,
    arguments: dict[str, Any] | None,
    *,
    settings: AppSettings,
    vercel_api_key: str,
    github_token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolOutput:
    if name != TOOL_NAME:
        raise ValueError(f"Unknown tool: {name}")
    return await handle_create_and_push_repo(
        arguments or {},
        settings=settings,
        vercel_api_key=vercel_api_key,
        github_token=github_token,
        transport=transport,
    )


def build_server(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Server:
    """Create the MCP server. Raises `MissingCredentialsError` without credentials."""

    vercel_api_key, github_token = settings.require_credentials()
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tool = build_tool(settings)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [tool]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> ToolOutput:
        return await dispatch_tool_call(
            name,
            arguments,
            settings=settings,
            vercel_api_key=vercel_api_key,
            github_token=github_token,
            transport=transport,
        )

    logger.info("%s %s initialized", SERVER_NAME, SERVER_VERSION)
    return server


async def serve_stdio(server: Server) -> None:
    """Run the server on stdin/stdout until the client disconnects."""

    logger.info("Starting MCP server (stdio transport)")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
