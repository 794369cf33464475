"""Shared fixtures: isolated settings and a recording httpx mock transport."""

from __future__ import annotations

from typing import Callable, Union

import httpx
import pytest

from core.config import AppSettings

GITHUB_USER = "api.github.com/user"
VERCEL_TEAMS = "api.vercel.com/v2/teams"
VERCEL_GIT_REPO = "vercel.com/api/v1/integrations/git-repo"
VERCEL_PUSH = "vercel.com/api/v2/integrations/push-to-repo"

Outcome = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]

_CREDENTIAL_VARS = ("VERCEL_API_KEY", "VERCELL_API_KEY", "GITHUB_TOKEN")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No credentials, project .env or per-user .env leak in from the host."""

    for name in _CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None).model_copy(
        update={"vercel_api_key": "vk_test", "github_token": "gh_test"}
    )


class RecordingRouter:
    """Routes requests by `host + path` and records every request seen."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Outcome] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, route: str, outcome: Outcome) -> "RecordingRouter":
        self.routes[(method, route)] = outcome
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, f"{request.url.host}{request.url.path}")
        outcome = self.routes.get(key)
        if outcome is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            # Fresh copy per call; a response body is consumed once.
            return httpx.Response(
                outcome.status_code, headers=outcome.headers, content=outcome.content
            )
        return outcome(request)

    def calls_to(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if f"{r.url.host}{r.url.path}" == route]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def router() -> RecordingRouter:
    return RecordingRouter()


@pytest.fixture
def happy_router(router: RecordingRouter) -> RecordingRouter:
    """Every provider call succeeds; no teams, no repo url."""

    router.add("GET", GITHUB_USER, httpx.Response(200, json={"login": "alice"}))
    router.add("GET", VERCEL_TEAMS, httpx.Response(200, json={"teams": []}))
    router.add("POST", VERCEL_GIT_REPO, httpx.Response(200, json={"id": "repo_1"}))
    router.add("POST", VERCEL_PUSH, httpx.Response(200, json={"projectId": "prj_123"}))
    return router
