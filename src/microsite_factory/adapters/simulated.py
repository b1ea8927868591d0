"""Simulated collaborators.

Used when no real backend is configured (and in tests). They keep the
contracts of `core.interfaces.providers`: non-deterministic latency,
deterministic output, and the ability to force a locale to fail.
"""

from __future__ import annotations

import asyncio
import itertools
import random
import time
from typing import Iterable

from microsite_factory.core.domain.locales import EdgeRegion, layout_for_locale
from microsite_factory.core.domain.models import ContentVariant, MiddlewareRules
from microsite_factory.core.errors import GenerationProviderError

HEADLINE_MESSAGE_CHARS = 20

DEFAULT_KEYWORDS: dict[str, list[str]] = {
    "en-US": ["Best Villas", "Luxury Living", "Investment"],
    "it-IT": ["Migliori Ville", "Vita di Lusso", "Investimenti"],
    "fr-FR": ["Meilleures Villas", "Vie de Luxe", "Investissement"],
    "es-ES": ["Mejores Villas", "Vida de Lujo", "Inversión"],
    "de-DE": ["Besten Villen", "Luxusleben", "Investition"],
}
FALLBACK_KEYWORDS: list[str] = ["Luxury Real Estate"]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_deployment_counter = itertools.count()


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


async def _sleep_ms(ms: float) -> None:
    if ms > 0:
        await asyncio.sleep(ms / 1000.0)


def build_localized_copy(core_message: str, locale: str) -> ContentVariant:
    """Derive headline/body/CTA from the core message without calling a model."""

    tag = f"[{locale.upper()}]"
    return ContentVariant(
        locale=locale,
        headline=f"{tag} Future of Living: {core_message[:HEADLINE_MESSAGE_CHARS]}...",
        body=(
            f"{tag} Experience the {core_message} in a way that respects your local culture. "
            "This is a generated description ensuring semantic consistency."
        ),
        call_to_action=f"{tag} Discover More",
        layout_id=layout_for_locale(locale),
    )


class SimulatedGenerationProvider:
    """Stands in for the AI backend.

    `failing_locales` lets callers model API timeouts for specific locales.
    """

    def __init__(
        self,
        *,
        latency_ms: tuple[int, int] = (50, 200),
        failing_locales: Iterable[str] = (),
        rng: random.Random | None = None,
    ) -> None:
        low, high = latency_ms
        self._latency_ms = (min(low, high), max(low, high))
        self._failing = frozenset(failing_locales)
        self._rng = rng or random.Random()

    async def generate(self, core_message: str, locale: str) -> ContentVariant:
        await _sleep_ms(self._rng.uniform(*self._latency_ms))
        if locale in self._failing:
            raise GenerationProviderError(f"Simulated API timeout for {locale}")
        return build_localized_copy(core_message, locale)


class StaticKeywordSource:
    """Locale-keyed keyword table with a default for unknown locales."""

    def __init__(
        self,
        table: dict[str, list[str]] | None = None,
        fallback: list[str] | None = None,
    ) -> None:
        self._table = DEFAULT_KEYWORDS if table is None else table
        self._fallback = FALLBACK_KEYWORDS if fallback is None else fallback

    async def keywords_for(self, locale: str) -> list[str]:
        return list(self._table.get(locale, self._fallback))


class SimulatedDeploymentProvider:
    def __init__(self, *, latency_ms: int = 0) -> None:
        self._latency_ms = latency_ms
        self.calls: list[tuple[MiddlewareRules, EdgeRegion]] = []

    async def provision(self, middleware_rules: MiddlewareRules, region: EdgeRegion) -> str:
        await _sleep_ms(self._latency_ms)
        self.calls.append((middleware_rules, region))
        # Timestamp plus a process-wide counter: two calls never share an id.
        token = _to_base36(time.time_ns() * 1000 + next(_deployment_counter) % 1000)
        return f"dpl_{region.value}_{token}"


class SimulatedTelemetryProvisioner:
    def __init__(self, *, analytics_base_url: str, latency_ms: int = 0) -> None:
        self._analytics_base_url = analytics_base_url.rstrip("/")
        self._latency_ms = latency_ms

    async def provision(self, deployment_id: str) -> str:
        await _sleep_ms(self._latency_ms)
        return f"{self._analytics_base_url}/v1/events/{deployment_id}"
