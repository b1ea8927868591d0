"""HTTP-backed deployment and telemetry provisioning.

Selected by `build_pipeline` when `deploy_api_url` / `telemetry_api_url` are
configured. Wire format (JSON):

- `POST {deploy_api_url}/deployments`
  `{"region": "fra1", "middleware": {"geoBlocking": false, "consentRequired": true}}`
  -> `{"id": "<deployment id>"}`
- `POST {telemetry_api_url}/endpoints`
  `{"deploymentId": "<deployment id>"}` -> `{"url": "<endpoint url>"}`

Each API gets its own bearer token (`deploy_api_token`, `telemetry_api_token`).

No retries: a failed call raises `ProvisioningError` and ends the run.
"""

from __future__ import annotations

import httpx

from microsite_factory.adapters.http_client import build_async_client, post_json
from microsite_factory.core.config import AppSettings
from microsite_factory.core.domain.locales import EdgeRegion
from microsite_factory.core.domain.models import MiddlewareRules
from microsite_factory.core.errors import ProvisioningError


def _require_str(data: dict[str, object], key: str, url: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ProvisioningError(f"{url} response is missing a '{key}' string")
    return value.strip()


class HttpDeploymentProvider:
    def __init__(
        self,
        settings: AppSettings,
        *,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        url = base_url or settings.deploy_api_url
        if not url:
            raise ValueError("HttpDeploymentProvider needs deploy_api_url")
        self._settings = settings
        self._url = f"{url.rstrip('/')}/deployments"
        self._transport = transport

    async def provision(self, middleware_rules: MiddlewareRules, region: EdgeRegion) -> str:
        payload = {
            "region": region.value,
            "middleware": middleware_rules.model_dump(mode="json", by_alias=True),
        }
        async with build_async_client(
            self._settings,
            bearer_token=self._settings.deploy_api_token,
            transport=self._transport,
        ) as client:
            data = await post_json(client, self._url, payload)
        return _require_str(data, "id", self._url)


class HttpTelemetryProvisioner:
    def __init__(
        self,
        settings: AppSettings,
        *,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        url = base_url or settings.telemetry_api_url
        if not url:
            raise ValueError("HttpTelemetryProvisioner needs telemetry_api_url")
        self._settings = settings
        self._url = f"{url.rstrip('/')}/endpoints"
        self._transport = transport

    async def provision(self, deployment_id: str) -> str:
        async with build_async_client(
            self._settings,
            bearer_token=self._settings.telemetry_api_token,
            transport=self._transport,
        ) as client:
            data = await post_json(client, self._url, {"deploymentId": deployment_id})
        return _require_str(data, "url", self._url)
