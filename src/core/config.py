"""Core configuration.

- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (GitHub/Vercel) and entry points (CLI/MCP) read one contract.

Credentials keep the historical variable names (`VERCEL_API_KEY`,
`VERCELL_API_KEY`, `GITHUB_TOKEN`); everything else uses the
`VERCEL_REPO_PUSH_` prefix.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import set_key
from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.domain.errors import MissingCredentialsError
from core.domain.models import DEFAULT_TEMPLATE_SOURCE

APP_DIR_NAME = "vercel-repo-push"


def get_user_env_file() -> Path:
    """Per-user `.env`: `$XDG_CONFIG_HOME/vercel-repo-push/.env` (default `~/.config`).

    Resolved on every call so a changed environment is picked up.
    """

    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME / ".env"


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Set keys in the per-user `.env`, keeping its other lines and comments."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text(f"# {APP_DIR_NAME} user config (.env)\n", encoding="utf-8")
        env_path.chmod(0o600)

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Resolution order: init values, environment, project `.env`, user `.env`.
    Passing `_env_file=None` disables both `.env` files.
    """

    model_config = SettingsConfigDict(
        env_prefix="VERCEL_REPO_PUSH_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings, dotenv_settings]
        if getattr(dotenv_settings, "env_file", None) is not None:
            sources.append(DotEnvSettingsSource(settings_cls, env_file=get_user_env_file()))
        sources.append(file_secret_settings)
        return tuple(sources)

    vercel_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VERCEL_API_KEY", "VERCELL_API_KEY"),
        description="Vercel API token used for teams, git-repo and push-to-repo calls.",
    )
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN"),
        description="GitHub token used to resolve the account namespace.",
    )

    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds. Unset keeps the httpx default.",
    )
    user_agent: str = Field(
        default="MCP-Server-GitHub",
        min_length=1,
        description="User-Agent sent to both providers (GitHub requires one).",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for CLI and MCP server.",
    )

    default_template_source: str = Field(
        default=DEFAULT_TEMPLATE_SOURCE,
        min_length=1,
        description="Template pushed when the caller does not pick one.",
    )
    default_private: bool = Field(
        default=True,
        description="Visibility used when the caller does not pick one.",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="GitHub REST API base URL.",
    )
    vercel_api_url: str = Field(
        default="https://api.vercel.com",
        min_length=8,
        description="Vercel REST API base URL (teams).",
    )
    vercel_integrations_url: str = Field(
        default="https://vercel.com/api",
        min_length=8,
        description="Vercel integrations base URL (git-repo, push-to-repo).",
    )

    def missing_credentials(self) -> list[str]:
        """Names of the credentials that are unset or blank."""

        missing: list[str] = []
        if not (self.vercel_api_key or "").strip():
            missing.append("VERCEL_API_KEY")
        if not (self.github_token or "").strip():
            missing.append("GITHUB_TOKEN")
        return missing

    def require_credentials(self) -> tuple[str, str]:
        """Return `(vercel_api_key, github_token)` or raise `MissingCredentialsError`."""

        missing = self.missing_credentials()
        if missing:
            raise MissingCredentialsError(missing)
        assert self.vercel_api_key is not None and self.github_token is not None
        return self.vercel_api_key.strip(), self.github_token.strip()
