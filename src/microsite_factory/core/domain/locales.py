"""Locale tables and enums shared across the pipeline.

This module keeps the fixed language sets in the domain layer so services
and adapters share one definition without importing each other.

Two sets exist on purpose: `CONSENT_LANGUAGES` drives the compliance policy
(validator only) and `EU_TRAFFIC_LANGUAGES` drives edge region selection
(deployment only). They are not interchangeable.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class DataResidency(str, Enum):
    """Where campaign data must live."""

    EU = "EU"
    US = "US"
    GLOBAL = "GLOBAL"


class EdgeRegion(str, Enum):
    """Edge regions a deployment can target."""

    EUROPE = "fra1"
    NORTH_AMERICA = "iad1"
    GLOBAL = "global"

    def label(self) -> str:
        """Human readable label for CLI output and logging."""

        return {
            EdgeRegion.EUROPE: "Frankfurt",
            EdgeRegion.NORTH_AMERICA: "Washington DC",
            EdgeRegion.GLOBAL: "Global",
        }[self]


# Language prefixes whose markets require consent management.
CONSENT_LANGUAGES: frozenset[str] = frozenset(
    {"it", "fr", "de", "es", "pt", "nl", "be", "at", "ie", "pl", "se", "fi", "dk"}
)

# Language prefixes counted as European traffic for region selection.
EU_TRAFFIC_LANGUAGES: frozenset[str] = frozenset(
    {"it", "fr", "de", "es", "pt", "nl", "be", "at", "ie"}
)

# Every localized page declares these siblings in its hreflang map.
REFERENCE_LOCALES: tuple[str, ...] = ("en-US", "it-IT", "fr-FR", "es-ES", "de-DE")

# Languages that run long and need the wide layout.
WIDE_LAYOUT_LOCALES: frozenset[str] = frozenset({"de-DE", "ru-RU", "fi-FI"})

LAYOUT_WIDE = "layout-wide-v2"
LAYOUT_MINIMAL = "layout-minimal-v1"


def language_prefix(locale: str) -> str:
    """Return the lower-cased language part of `locale` (`it-IT` -> `it`)."""

    return locale.strip().replace("_", "-").split("-", 1)[0].lower()


def any_in_language_set(locales: Iterable[str], languages: frozenset[str]) -> bool:
    return any(language_prefix(locale) in languages for locale in locales)


def layout_for_locale(locale: str) -> str:
    """Pick the layout template for a locale."""

    return LAYOUT_WIDE if locale in WIDE_LAYOUT_LOCALES else LAYOUT_MINIMAL
