"""Fault-tolerant per-locale content generation.

One task per target locale, all launched together, joined by a "wait for
all, collect each outcome" barrier. A failing locale becomes a locale-tagged
failure message; it never cancels the other tasks and never fails the stage.
Results are merged only after the join, in locale submission order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from microsite_factory.core.domain.models import (
    ContentVariant,
    GenerationOutcome,
    ValidatedProject,
)
from microsite_factory.core.errors import InvariantViolation
from microsite_factory.core.interfaces.providers import GenerationProvider, PersistenceSink

logger = logging.getLogger(__name__)

# (variant, None) on success, (None, "<locale>: <reason>") on failure.
_Attempt = tuple[ContentVariant | None, str | None]


class ContentGenerator:
    """Fans a validated project out into one content variant per locale."""

    def __init__(
        self,
        provider: GenerationProvider,
        persistence: PersistenceSink,
        *,
        generation_model: str,
    ) -> None:
        self._provider = provider
        self._persistence = persistence
        self._generation_model = generation_model

    async def _attempt(self, core_message: str, locale: str) -> _Attempt:
        try:
            variant = await self._provider.generate(core_message, locale)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Generation failed for locale=%s: %s", locale, reason)
            return None, f"{locale}: {reason}"
        return variant, None

    async def generate(
        self,
        project: ValidatedProject,
        *,
        warning: Callable[[str], None] | None = None,
    ) -> GenerationOutcome:
        if not project.is_validated:
            raise InvariantViolation(
                f"Cannot generate content for project {project.project_id!r} "
                f"with status {project.status.value}"
            )

        brief = project.brief
        attempts = await asyncio.gather(
            *(self._attempt(brief.core_message, locale) for locale in brief.target_locales)
        )

        variants: list[ContentVariant] = []
        failures: list[str] = []
        for variant, failure in attempts:
            if variant is not None:
                variants.append(variant)
            elif failure is not None:
                failures.append(failure)

        outcome = GenerationOutcome(
            project_id=project.project_id,
            generation_model=self._generation_model,
            variants=tuple(variants),
            failures=tuple(failures),
        )
        logger.info(
            "Generated %d/%d variants for project=%s (%d failed)",
            len(outcome.variants),
            len(brief.target_locales),
            project.project_id,
            len(outcome.failures),
        )

        # The sink must never change what this stage returns.
        try:
            await self._persistence.persist(outcome)
        except Exception as exc:
            message = f"Persisting generation outcome failed: {exc}"
            logger.warning(message)
            if warning:
                warning(message)

        return outcome
