"""Domain errors.

- `MissingCredentialsError`: raised at startup, before any remote call.
- `ProviderError`: one failed remote step. The orchestrator decides whether
  it is fatal (namespace, repository, push) or degraded (team scope).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from core.domain.models import ProvisionStep


def validation_summary(exc: ValidationError) -> str:
    """`field: message` pairs without echoing input values (may be secrets)."""

    parts = []
    for error in exc.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in error["loc"]) or "request"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class MissingCredentialsError(RuntimeError):
    """Raised when the Vercel API key or the GitHub token is absent."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required credentials: {', '.join(self.missing)}")


class ProviderError(RuntimeError):
    """A remote call to GitHub or Vercel failed.

    `message` already follows the precedence rule: structured
    `error.message` from the body, then `message`, then the transport error.
    """

    def __init__(
        self,
        message: str,
        *,
        step: ProvisionStep,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        self.message = message
        self.step = step
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.step.value}: {self.message} (HTTP {self.status_code})"
        return f"{self.step.value}: {self.message}"
