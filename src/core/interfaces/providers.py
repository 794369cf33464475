"""Remote provider contracts.

Structural contracts (Protocol) implemented by the GitHub and Vercel
adapters. The orchestrator depends on these, so tests can drive it with
fakes instead of HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import CreatedRepository, PushedTemplate


@runtime_checkable
class SourceControlProvider(Protocol):
    """Identity lookup on the source-control side (GitHub)."""

    async def resolve_namespace(self) -> str:
        """Return the account login owning the token. Raises `ProviderError`."""

        ...


@runtime_checkable
class HostingProvider(Protocol):
    """Team, repository and template operations on the hosting side (Vercel)."""

    async def resolve_team_id(self) -> str | None:
        ...

    async def create_repository(
        self, *, namespace: str, name: str, private: bool
    ) -> CreatedRepository:
        ...

    async def push_template(
        self,
        *,
        namespace: str,
        name: str,
        source: str,
        team_id: str | None = None,
    ) -> PushedTemplate:
        ...
