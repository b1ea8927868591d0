"""Persistence sinks for generation outcomes.

The core treats persistence as fire-and-forget: whatever happens here, the
generation stage returns its outcome.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from microsite_factory.core.domain.models import GenerationOutcome


class InMemoryPersistenceSink:
    """Keeps outcomes in a list (default sink, handy for tests)."""

    def __init__(self) -> None:
        self.outcomes: list[GenerationOutcome] = []

    async def persist(self, outcome: GenerationOutcome) -> None:
        self.outcomes.append(outcome)


class JsonPersistenceSink:
    """Writes each outcome to `<directory>/<project_id>.generation.json`."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def path_for(self, project_id: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in ("-", "_", ".") else "-" for ch in project_id)
        return self._directory / f"{safe.strip('-.') or 'project'}.generation.json"

    def _write(self, outcome: GenerationOutcome) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        payload = outcome.model_dump(mode="json", by_alias=True)
        self.path_for(outcome.project_id).write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )

    async def persist(self, outcome: GenerationOutcome) -> None:
        # Blocking file I/O stays off the event loop.
        await asyncio.to_thread(self._write, outcome)
