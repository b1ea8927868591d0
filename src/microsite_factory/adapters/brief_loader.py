"""Brief loading from JSON.

Accepts the camelCase keys of the brief contract (`campaignId`,
`targetLocales`, `assets.logoUrl`, ...) as well as snake_case.

Only malformed JSON or wrongly typed values fail here; missing or short
fields are left for the validator to report.
"""

from __future__ import annotations

import json
from pathlib import Path

from microsite_factory.core.domain.models import Brief


def load_brief(path: Path) -> Brief:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return Brief.model_validate(data)
