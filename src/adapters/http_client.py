"""httpx wrapper.

- Standardizes headers and timeouts for both providers.
- Turns every transport/status/decoding failure into `ProviderError`, with
  the message chosen by one precedence rule.
- `transport` can be injected (e.g. `httpx.MockTransport`) for tests.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import ProvisionStep

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the application defaults.

    No timeout is forced: unless `http_timeout_seconds` is configured the
    httpx default applies.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)

    kwargs: dict[str, Any] = {"headers": headers, "follow_redirects": True}
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout_seconds)
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def message_from_payload(payload: Any) -> str | None:
    """Pick `error.message`, then `message`, from a provider JSON body."""

    if not isinstance(payload, dict):
        return None

    error = payload.get("error")
    if isinstance(error, dict):
        nested = error.get("message")
        if isinstance(nested, str) and nested.strip():
            return nested.strip()

    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def extract_error_message(exc: BaseException) -> str:
    """Human-readable message for a failed request.

    Precedence:
    1) structured `error.message` in the response body
    2) generic `message` field in the response body
    3) transport-level message
    """

    if isinstance(exc, ProviderError):
        return exc.message

    if isinstance(exc, httpx.HTTPStatusError):
        message = message_from_payload(_decode_body(exc.response))
        if message:
            return message
        return f"Request failed with status code {exc.response.status_code}"

    text = str(exc).strip()
    return text or exc.__class__.__name__


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    step: ProvisionStep,
    strict_body: bool = True,
    **kwargs: Any,
) -> Any:
    """Send one request and return the decoded JSON body (or `None` if empty).

    Raises `ProviderError` for transport errors, non-2xx statuses and, when
    `strict_body` is set, undecodable bodies. With `strict_body=False` a 2xx
    response whose body is not JSON yields `None`.
    """

    try:
        response = await client.request(method, url, **kwargs)
        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ProviderError(
            extract_error_message(exc),
            step=step,
            status_code=exc.response.status_code,
            payload=_decode_body(exc.response),
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderError(extract_error_message(exc), step=step) from exc

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        if not strict_body:
            logger.warning("Ignoring non-JSON body from %s (HTTP %s)", url, response.status_code)
            return None
        raise ProviderError(
            f"Invalid JSON response from {url}",
            step=step,
            status_code=response.status_code,
        ) from exc
