"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict, self-documenting structures (Field) without coupling the core to I/O.
- Stable JSON serialization: snake_case in Python, camelCase on the wire.

Every model is frozen and stores sequences as tuples: once a stage hands a
value to the next one, nobody can mutate it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from microsite_factory.core.domain.locales import DataResidency, EdgeRegion


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProjectStatus(str, Enum):
    VALIDATED = "VALIDATED"
    FAILED = "FAILED"


class BriefAssets(_FrozenModel):
    """Asset references attached to a brief (checked by format only)."""

    logo_url: str = Field(default="", description="URL of the brand logo.")
    keywords_csv_url: str = Field(default="", description="URL of the keyword research CSV.")


class Brief(_FrozenModel):
    """A campaign brief as submitted by the operator.

    Fields default to empty values: a structurally incomplete brief is still a
    `Brief`, and the validator reports what is missing.
    """

    campaign_id: str = Field(default="", description="Campaign identifier.")
    brand_name: str = Field(default="", description="Brand the microsites belong to.")
    core_message: str = Field(default="", description="Message every locale is derived from.")
    target_locales: tuple[str, ...] = Field(
        default=(),
        description="Ordered set of locale identifiers (e.g. 'it-IT').",
    )
    assets: BriefAssets = Field(default_factory=BriefAssets)

    @field_validator("target_locales", mode="after")
    @classmethod
    def _ordered_unique_locales(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # First occurrence wins; blanks are dropped.
        return tuple(dict.fromkeys(loc.strip() for loc in value if loc and loc.strip()))


class CompliancePolicy(_FrozenModel):
    """Consent and data-residency flags derived once from the locale set."""

    requires_consent: bool = Field(..., description="A consent gate must be enforced.")
    consent_active: bool = Field(..., description="The consent banner is on by default.")
    data_residency: DataResidency = Field(..., description="Where campaign data must live.")


class ValidatedProject(_FrozenModel):
    """Outcome of validating a brief; read-only for every later stage."""

    project_id: str
    status: ProjectStatus
    brief: Brief
    compliance: CompliancePolicy
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    errors: tuple[str, ...] = Field(
        default=(),
        description="Every violated check, in evaluation order (empty when validated).",
    )

    @property
    def is_validated(self) -> bool:
        return self.status is ProjectStatus.VALIDATED


class ContentVariant(_FrozenModel):
    """Generated content for one locale."""

    locale: str
    headline: str
    body: str
    call_to_action: str
    layout_id: str


class GenerationOutcome(_FrozenModel):
    """Aggregate of every per-locale generation attempt.

    `len(variants) + len(failures)` always equals the number of target locales.
    """

    project_id: str
    generation_model: str
    variants: tuple[ContentVariant, ...] = ()
    failures: tuple[str, ...] = ()

    @property
    def attempted(self) -> int:
        return len(self.variants) + len(self.failures)


class SEOMetadata(_FrozenModel):
    title: str = Field(..., max_length=60)
    description: str = Field(..., max_length=160)
    canonical_url: str
    og_tags: dict[str, str] = Field(default_factory=dict)
    hreflang: dict[str, str] = Field(default_factory=dict)
    structured_data: dict[str, Any] = Field(default_factory=dict)


class OptimizedVariant(ContentVariant):
    """A content variant annotated with search metadata."""

    seo: SEOMetadata
    keywords_applied: tuple[str, ...] = ()


class MiddlewareRules(_FrozenModel):
    geo_blocking: bool = False
    consent_required: bool


class DeploymentDescriptor(_FrozenModel):
    """What was deployed, where, and with which middleware rules."""

    deployment_id: str
    edge_region: EdgeRegion
    is_live: bool
    telemetry_endpoint: str
    middleware_rules: MiddlewareRules
