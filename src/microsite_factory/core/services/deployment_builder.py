"""Deployment descriptor construction.

Policy-blind: consent behavior is copied from the `CompliancePolicy` handed
in by the orchestrator. `middleware_rules_for` only receives the policy, so
it has no locale data to re-derive compliance from.

Region selection is the one derivation done here, and it is about traffic
topology: EU vs non-EU locales vote, a strict majority wins, a tie means no
region preference.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from microsite_factory.core.domain.locales import (
    EU_TRAFFIC_LANGUAGES,
    EdgeRegion,
    language_prefix,
)
from microsite_factory.core.domain.models import (
    CompliancePolicy,
    DeploymentDescriptor,
    MiddlewareRules,
    OptimizedVariant,
)
from microsite_factory.core.errors import InvariantViolation
from microsite_factory.core.interfaces.providers import (
    DeploymentProvider,
    TelemetryProvisioner,
)

logger = logging.getLogger(__name__)


def middleware_rules_for(policy: CompliancePolicy) -> MiddlewareRules:
    return MiddlewareRules(
        geo_blocking=False,
        consent_required=policy.requires_consent,
    )


def select_edge_region(locales: Iterable[str]) -> EdgeRegion:
    eu_count = 0
    other_count = 0
    for locale in locales:
        if language_prefix(locale) in EU_TRAFFIC_LANGUAGES:
            eu_count += 1
        else:
            other_count += 1

    if eu_count > other_count:
        return EdgeRegion.EUROPE
    if other_count > eu_count:
        return EdgeRegion.NORTH_AMERICA
    return EdgeRegion.GLOBAL


class DeploymentDescriptorBuilder:
    def __init__(
        self,
        deployment: DeploymentProvider,
        telemetry: TelemetryProvisioner,
    ) -> None:
        self._deployment = deployment
        self._telemetry = telemetry

    async def deploy(
        self,
        variants: Sequence[OptimizedVariant],
        policy: CompliancePolicy,
    ) -> DeploymentDescriptor:
        if not variants:
            raise InvariantViolation("No variants provided for deployment.")

        rules = middleware_rules_for(policy)
        region = select_edge_region(v.locale for v in variants)

        # Sequential: telemetry is keyed by the deployment id.
        deployment_id = await self._deployment.provision(rules, region)
        telemetry_endpoint = await self._telemetry.provision(deployment_id)

        logger.info(
            "Deployed %d variant(s) as %s to %s (consent_required=%s)",
            len(variants),
            deployment_id,
            region.value,
            rules.consent_required,
        )

        return DeploymentDescriptor(
            deployment_id=deployment_id,
            edge_region=region,
            is_live=True,
            telemetry_endpoint=telemetry_endpoint,
            middleware_rules=rules,
        )
