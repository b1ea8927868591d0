"""Shared fixtures: zero-latency settings, brief and variant factories."""

from __future__ import annotations

from typing import Callable

import pytest

from microsite_factory.core.config import AppSettings
from microsite_factory.core.domain.models import (
    Brief,
    BriefAssets,
    OptimizedVariant,
    SEOMetadata,
)

TEN_LOCALES = (
    "en-US",
    "it-IT",
    "fr-FR",
    "es-ES",
    "pt-PT",
    "nl-NL",
    "pl-PL",
    "se-SE",
    "de-DE",
    "ja-JP",
)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        generation_latency_min_ms=0,
        generation_latency_max_ms=0,
        provisioning_latency_ms=0,
    )


@pytest.fixture
def make_brief() -> Callable[..., Brief]:
    def _make(
        locales: tuple[str, ...] = ("en-US", "it-IT", "de-DE"),
        **overrides: object,
    ) -> Brief:
        data: dict[str, object] = {
            "campaign_id": "integration-test-2026",
            "brand_name": "Lusitano Luxury",
            "core_message": "Exclusive villas in Comporta with sustainable design.",
            "target_locales": locales,
            "assets": BriefAssets(
                logo_url="https://ok.com/logo.png",
                keywords_csv_url="https://ok.com/kw.csv",
            ),
        }
        data.update(overrides)
        return Brief(**data)

    return _make


@pytest.fixture
def make_optimized() -> Callable[[str], OptimizedVariant]:
    def _make(locale: str) -> OptimizedVariant:
        return OptimizedVariant(
            locale=locale,
            headline=f"[{locale}] Headline",
            body="Body copy",
            call_to_action="Go",
            layout_id="layout-minimal-v1",
            seo=SEOMetadata(
                title="Title",
                description="Description",
                canonical_url=f"https://microsite-factory.com/{locale}/campaign-mvc",
            ),
        )

    return _make


@pytest.fixture
def ten_locales() -> tuple[str, ...]:
    return TEN_LOCALES
