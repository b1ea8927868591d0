"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and auth for every provisioning adapter.
- Eases testing: a `transport` (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

from typing import Any

import httpx

from microsite_factory.core.config import AppSettings
from microsite_factory.core.errors import ProvisioningError


def build_async_client(
    settings: AppSettings | None = None,
    *,
    bearer_token: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project's defaults.

    `bearer_token` is per call site: each API gets only its own credential.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if bearer_token:
        headers["Authorization"] = f"Bearer {bearer_token}"
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
) -> dict[str, Any]:
    """POST `payload` and return the decoded JSON object.

    Transport errors, non-2xx statuses and non-object bodies all become
    `ProvisioningError`.
    """

    try:
        response = await client.post(url, json=payload)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as exc:
        raise ProvisioningError(f"POST {url} failed: {exc}") from exc
    except ValueError as exc:
        raise ProvisioningError(f"POST {url} returned invalid JSON") from exc

    if not isinstance(data, dict):
        raise ProvisioningError(f"POST {url} returned {type(data).__name__}, expected an object")
    return data
