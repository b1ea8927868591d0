"""Brief validation and compliance-policy derivation.

Responsibility:
- Evaluate every structural and quality check on a `Brief` and collect all
  violations before deciding the status.
- Derive the `CompliancePolicy` from the locale set. This is the only place
  in the pipeline where compliance is computed.

`validate` never raises: problems are encoded in `ValidatedProject.status`
and `ValidatedProject.errors`.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import AnyUrl, TypeAdapter, ValidationError

from microsite_factory.core.domain.locales import (
    CONSENT_LANGUAGES,
    DataResidency,
    any_in_language_set,
)
from microsite_factory.core.domain.models import (
    Brief,
    CompliancePolicy,
    ProjectStatus,
    ValidatedProject,
)

logger = logging.getLogger(__name__)

MIN_CAMPAIGN_ID_LENGTH = 3
MIN_CORE_MESSAGE_LENGTH = 10

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def is_absolute_url(value: str) -> bool:
    """Format-only URL check; never touches the network."""

    if not value or not value.strip():
        return False
    try:
        _URL_ADAPTER.validate_python(value.strip())
    except ValidationError:
        return False
    return True


def derive_compliance_policy(locales: Iterable[str]) -> CompliancePolicy:
    """Consent is required (and residency pinned to the EU) iff any locale's
    language prefix belongs to `CONSENT_LANGUAGES`."""

    eu_targeted = any_in_language_set(locales, CONSENT_LANGUAGES)
    return CompliancePolicy(
        requires_consent=eu_targeted,
        consent_active=eu_targeted,
        data_residency=DataResidency.EU if eu_targeted else DataResidency.GLOBAL,
    )


def collect_brief_errors(brief: Brief) -> list[str]:
    errors: list[str] = []

    if len(brief.campaign_id.strip()) < MIN_CAMPAIGN_ID_LENGTH:
        errors.append(
            f"campaign_id must be at least {MIN_CAMPAIGN_ID_LENGTH} characters."
        )
    if not brief.brand_name.strip():
        errors.append("brand_name is required.")
    if len(brief.core_message.strip()) < MIN_CORE_MESSAGE_LENGTH:
        errors.append(
            "core_message is too short for content generation "
            f"(<{MIN_CORE_MESSAGE_LENGTH} chars)."
        )
    if not brief.target_locales:
        errors.append("At least one target locale is required.")

    if not is_absolute_url(brief.assets.logo_url):
        errors.append(f"Invalid logo_url format: {brief.assets.logo_url!r}")
    if not is_absolute_url(brief.assets.keywords_csv_url):
        errors.append(f"Invalid keywords_csv_url format: {brief.assets.keywords_csv_url!r}")

    return errors


def validate(brief: Brief) -> ValidatedProject:
    """Validate `brief` and attach the compliance policy for its locales."""

    errors = collect_brief_errors(brief)
    status = ProjectStatus.FAILED if errors else ProjectStatus.VALIDATED
    compliance = derive_compliance_policy(brief.target_locales)

    if errors:
        logger.info(
            "Brief %r failed validation with %d error(s): %s",
            brief.campaign_id,
            len(errors),
            "; ".join(errors),
        )
    else:
        logger.info(
            "Brief %r validated (locales=%d, consent_required=%s, residency=%s)",
            brief.campaign_id,
            len(brief.target_locales),
            compliance.requires_consent,
            compliance.data_residency.value,
        )

    # The brief is returned even when FAILED, for diagnostics; callers must halt.
    return ValidatedProject(
        project_id=brief.campaign_id,
        status=status,
        brief=brief,
        compliance=compliance,
        errors=tuple(errors),
    )
