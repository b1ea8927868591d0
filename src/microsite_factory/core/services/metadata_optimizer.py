"""Per-variant search metadata synthesis.

Responsibility:
- Build title/description under hard SERP limits (60/160 chars).
- Derive canonical and hreflang URLs from a deterministic locale pattern, so
  every page can declare its siblings without a cross-page lookup.
- Attach Open Graph tags, JSON-LD structured data and the locale keywords.

`optimize_all` has no partial-failure tolerance: one bad variant aborts the
stage. A malformed variant at this point means an upstream contract breach.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from microsite_factory.core.domain.locales import REFERENCE_LOCALES
from microsite_factory.core.domain.models import (
    ContentVariant,
    OptimizedVariant,
    SEOMetadata,
)
from microsite_factory.core.errors import InvariantViolation, OptimizationFailure
from microsite_factory.core.interfaces.providers import KeywordSource

MAX_TITLE_LENGTH = 60
MAX_DESCRIPTION_LENGTH = 160
DESCRIPTION_BODY_CHARS = 100
ELLIPSIS = "..."
FALLBACK_PRIMARY_KEYWORD = "Brand"


def truncate(text: str, max_length: int) -> str:
    """Hard truncation: over-long text is cut to exactly `max_length` chars,
    the last three being the ellipsis marker."""

    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def build_page_url(site_base_url: str, campaign_path: str, locale: str) -> str:
    return f"{site_base_url.rstrip('/')}/{locale}/{campaign_path.strip('/')}"


class MetadataOptimizer:
    def __init__(
        self,
        keywords: KeywordSource,
        *,
        site_base_url: str,
        campaign_path: str,
        reference_locales: Sequence[str] = REFERENCE_LOCALES,
    ) -> None:
        self._keywords = keywords
        self._site_base_url = site_base_url
        self._campaign_path = campaign_path
        self._reference_locales = tuple(reference_locales)

    def page_url(self, locale: str) -> str:
        return build_page_url(self._site_base_url, self._campaign_path, locale)

    def hreflang_map(self) -> dict[str, str]:
        return {locale: self.page_url(locale) for locale in self._reference_locales}

    def build_metadata(self, variant: ContentVariant, primary_keyword: str) -> SEOMetadata:
        title = truncate(f"{variant.headline} | {primary_keyword}", MAX_TITLE_LENGTH)
        description = truncate(
            f"{variant.body[:DESCRIPTION_BODY_CHARS]}{ELLIPSIS} {variant.call_to_action}",
            MAX_DESCRIPTION_LENGTH,
        )
        canonical_url = self.page_url(variant.locale)

        structured_data: dict[str, Any] = {
            "@context": "https://schema.org",
            "@type": "WebPage",
            "name": title,
            "description": description,
            "inLanguage": variant.locale,
        }

        return SEOMetadata(
            title=title,
            description=description,
            canonical_url=canonical_url,
            og_tags={
                "og:title": title,
                "og:description": description,
                "og:locale": variant.locale,
                "og:url": canonical_url,
            },
            hreflang=self.hreflang_map(),
            structured_data=structured_data,
        )

    async def optimize(self, variant: ContentVariant) -> OptimizedVariant:
        if not variant.locale.strip() or not variant.headline.strip():
            raise InvariantViolation(
                f"Cannot optimize variant with missing locale/headline (locale={variant.locale!r})"
            )

        keywords = await self._keywords.keywords_for(variant.locale)
        primary_keyword = keywords[0] if keywords else FALLBACK_PRIMARY_KEYWORD

        return OptimizedVariant(
            **variant.model_dump(include=set(ContentVariant.model_fields)),
            seo=self.build_metadata(variant, primary_keyword),
            keywords_applied=tuple(keywords),
        )

    async def _optimize_or_abort(self, variant: ContentVariant) -> OptimizedVariant:
        try:
            return await self.optimize(variant)
        except Exception as exc:
            raise OptimizationFailure(
                f"Metadata optimization aborted at locale {variant.locale!r}: {exc}",
                locale=variant.locale,
            ) from exc

    async def optimize_all(self, variants: Sequence[ContentVariant]) -> list[OptimizedVariant]:
        """Optimize every variant concurrently; the first failure fails the stage.

        On failure the remaining tasks are cancelled and drained before the
        error propagates, so nothing from an aborted stage keeps running.
        """

        tasks = [asyncio.ensure_future(self._optimize_or_abort(v)) for v in variants]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
