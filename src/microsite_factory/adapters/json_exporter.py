"""JSON export of a pipeline run.

Why JSON:
- Hand-off to hosting/CI tooling that consumes deployment descriptors.
- Keeps an auditable record of what was generated and deployed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from microsite_factory.core.services.pipeline import PipelineResult


def result_payload(result: PipelineResult) -> dict[str, Any]:
    """camelCase, JSON-ready view of a `PipelineResult`."""

    return {
        "project": result.project.model_dump(mode="json", by_alias=True),
        "generation": result.generation.model_dump(mode="json", by_alias=True),
        "optimizedVariants": [
            v.model_dump(mode="json", by_alias=True) for v in result.optimized_variants
        ],
        "deployment": result.deployment.model_dump(mode="json", by_alias=True),
        "warnings": list(result.warnings),
    }


def export_result_json(*, result: PipelineResult, output_path: Path) -> Path:
    """Export a `PipelineResult` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result_payload(result), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
