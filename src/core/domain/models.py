"""Domain models (Pydantic v2).

These models describe *what* a provisioning run is, not *how* the remote
calls are made. Nothing here is persisted: a request lives for one call.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

DEFAULT_TEMPLATE_SOURCE = "https://github.com/vercel/vercel/tree/main/examples/nextjs"
DEFAULT_BRANCH = "main"


class ProvisionStep(str, Enum):
    """Remote steps of a provisioning run, in execution order."""

    NAMESPACE = "namespace"
    TEAM_SCOPE = "team_scope"
    CREATE_REPOSITORY = "create_repository"
    PUSH_TEMPLATE = "push_template"


class ProvisionStatus(str, Enum):
    """Outcome of a run.

    `partial` means the repository exists but the template push failed; it is
    left in place and the caller decides whether to clean it up.
    """

    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


class ProvisionRequest(BaseModel):
    """Input of one provisioning run."""

    model_config = ConfigDict(str_strip_whitespace=True)

    repo_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name of the repository to create.",
    )
    template_source: str = Field(
        default=DEFAULT_TEMPLATE_SOURCE,
        min_length=1,
        description="URL of the template pushed into the new repository.",
    )
    is_private: bool = Field(
        default=True,
        description="Whether the repository should be private.",
    )
    namespace: str | None = Field(
        default=None,
        description="GitHub account/organization. Resolved from the token when omitted.",
    )
    vercel_api_key: SecretStr = Field(..., description="Vercel API token.")
    github_token: SecretStr = Field(..., description="GitHub token.")

    @field_validator("vercel_api_key", "github_token")
    @classmethod
    def _credential_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("credential must not be empty")
        return value

    @field_validator("namespace")
    @classmethod
    def _blank_namespace_is_none(cls, value: str | None) -> str | None:
        return value or None


class CreatedRepository(BaseModel):
    """Relevant fields of the git-repo integration response."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None


class PushedTemplate(BaseModel):
    """Relevant fields of the push-to-repo integration response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    project_id: str | None = Field(default=None, alias="projectId")

    @field_validator("project_id", mode="before")
    @classmethod
    def _project_id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None


class ProvisionResult(BaseModel):
    """Outcome of one provisioning run, produced exactly once per request.

    Fields are filled only for the steps that actually completed. Serialize
    with `model_dump(by_alias=True)` to get the camelCase metadata shape
    (`repoUrl`, `githubNamespace`, `vercelProjectId`...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    repo_name: str
    is_private: bool
    template_source: str
    github_namespace: str | None = None
    team_id: str | None = None
    repo_url: str | None = None
    repo_id: str | None = None
    vercel_project_id: str | None = None
    success: bool = False
    status: ProvisionStatus = ProvisionStatus.FAILED
    failed_step: ProvisionStep | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def repo_full_name(self) -> str | None:
        if not self.github_namespace:
            return None
        return f"{self.github_namespace}/{self.repo_name}"
