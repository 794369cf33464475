"""Vercel adapter.

Endpoints:
- `GET  {api}/v2/teams`                                  team scope lookup
- `POST {integrations}/v1/integrations/git-repo`         create the GitHub repo
- `POST {integrations}/v2/integrations/push-to-repo`     push the template

Every call authenticates with `Authorization: Bearer <api key>`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client, request_json
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import (
    DEFAULT_BRANCH,
    CreatedRepository,
    ProvisionStep,
    PushedTemplate,
)
from core.interfaces.providers import HostingProvider

logger = logging.getLogger(__name__)


class VercelClient(HostingProvider):
    """API-key-scoped Vercel client."""

    def __init__(
        self,
        api_key: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._settings = settings or AppSettings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return build_async_client(
            self._settings,
            extra_headers={"Authorization": f"Bearer {self._api_key}"},
            transport=self._transport,
        )

    @property
    def _api_url(self) -> str:
        return self._settings.vercel_api_url.rstrip("/")

    @property
    def _integrations_url(self) -> str:
        return self._settings.vercel_integrations_url.rstrip("/")

    async def list_teams(self) -> list[dict[str, Any]]:
        async with self._client() as client:
            data = await request_json(
                client, "GET", f"{self._api_url}/v2/teams", step=ProvisionStep.TEAM_SCOPE
            )
        teams = data.get("teams") if isinstance(data, dict) else None
        if not isinstance(teams, list):
            return []
        return [t for t in teams if isinstance(t, dict)]

    async def resolve_team_id(self) -> str | None:
        """First team's id, or `None` for personal-account scope."""

        teams = await self.list_teams()
        if not teams:
            return None
        team_id = teams[0].get("id")
        return str(team_id) if team_id else None

    async def create_repository(
        self, *, namespace: str, name: str, private: bool
    ) -> CreatedRepository:
        payload = {
            "provider": "github",
            "namespace": namespace,
            "name": name,
            "private": private,
        }
        async with self._client() as client:
            data = await request_json(
                client,
                "POST",
                f"{self._integrations_url}/v1/integrations/git-repo",
                step=ProvisionStep.CREATE_REPOSITORY,
                strict_body=False,
                json=payload,
            )
        # Any 2xx means the repository exists; the body only adds details.
        if not isinstance(data, dict):
            return CreatedRepository()
        try:
            return CreatedRepository.model_validate(data)
        except ValidationError:
            logger.warning("Unexpected git-repo response fields, using defaults: %s", data)
            return CreatedRepository()

    async def push_template(
        self,
        *,
        namespace: str,
        name: str,
        source: str,
        team_id: str | None = None,
    ) -> PushedTemplate:
        payload = {
            "type": "github",
            "source": source,
            "repo": f"{namespace}/{name}",
            "branch": DEFAULT_BRANCH,
        }
        # No teamId means personal scope; the parameter is omitted entirely.
        params = {"teamId": team_id} if team_id else None
        async with self._client() as client:
            data = await request_json(
                client,
                "POST",
                f"{self._integrations_url}/v2/integrations/push-to-repo",
                step=ProvisionStep.PUSH_TEMPLATE,
                json=payload,
                params=params,
            )
        try:
            return PushedTemplate.model_validate(data or {})
        except ValidationError as exc:
            raise ProviderError(
                "Unexpected push-to-repo response",
                step=ProvisionStep.PUSH_TEMPLATE,
                payload=data,
            ) from exc
