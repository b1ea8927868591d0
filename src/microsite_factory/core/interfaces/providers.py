"""Contracts for the pipeline's external collaborators.

Why Protocol:
- Structural contracts (duck typing) without rigid inheritance.
- Simulated, HTTP and AI implementations stay interchangeable and testable
  without coupling the core to any of them.

All methods are asynchronous because real implementations do I/O.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from microsite_factory.core.domain.locales import EdgeRegion
from microsite_factory.core.domain.models import (
    ContentVariant,
    GenerationOutcome,
    MiddlewareRules,
)


@runtime_checkable
class GenerationProvider(Protocol):
    """Writes the localized copy for one locale.

    May raise (timeouts, provider errors); the generator records that as a
    failure for the locale instead of failing the run.
    """

    async def generate(self, core_message: str, locale: str) -> ContentVariant:
        ...


@runtime_checkable
class PersistenceSink(Protocol):
    """Receives every generation outcome. Fire-and-forget for the core."""

    async def persist(self, outcome: GenerationOutcome) -> None:
        ...


@runtime_checkable
class DeploymentProvider(Protocol):
    async def provision(self, middleware_rules: MiddlewareRules, region: EdgeRegion) -> str:
        """Push the middleware rules to `region` and return the deployment id."""

        ...


@runtime_checkable
class TelemetryProvisioner(Protocol):
    async def provision(self, deployment_id: str) -> str:
        """Create an analytics endpoint for `deployment_id` and return its URL."""

        ...


@runtime_checkable
class KeywordSource(Protocol):
    """Locale-keyed keyword lookup used by the metadata optimizer."""

    async def keywords_for(self, locale: str) -> list[str]:
        ...
