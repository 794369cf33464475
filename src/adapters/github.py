"""GitHub adapter.

Uses the REST API identity endpoint (`GET /user`) to find the login that
owns the token; that login is the namespace the repository is created in.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_async_client, request_json
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import ProvisionStep
from core.interfaces.providers import SourceControlProvider

logger = logging.getLogger(__name__)


class GitHubClient(SourceControlProvider):
    """Token-scoped GitHub REST client."""

    def __init__(
        self,
        token: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def _base_url(self) -> str:
        return self._settings.github_api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def resolve_namespace(self) -> str:
        async with build_async_client(
            self._settings, extra_headers=self._headers(), transport=self._transport
        ) as client:
            data = await request_json(
                client, "GET", f"{self._base_url}/user", step=ProvisionStep.NAMESPACE
            )

        login = data.get("login") if isinstance(data, dict) else None
        if not isinstance(login, str) or not login.strip():
            raise ProviderError(
                "GitHub identity response did not include a login",
                step=ProvisionStep.NAMESPACE,
                payload=data,
            )
        logger.debug("Resolved GitHub namespace %s", login)
        return login.strip()
