"""Microsite pipeline orchestration.

Sequences validation -> generation -> optimization -> deployment and keeps
side effects (printing, progress) out of the core through `PipelineHooks`.

The compliance policy goes from the validated project straight into the
deployment stage; generation and optimization never receive it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from microsite_factory.adapters.ai_copywriter import OpenAIGenerationProvider
from microsite_factory.adapters.http_provisioning import (
    HttpDeploymentProvider,
    HttpTelemetryProvisioner,
)
from microsite_factory.adapters.persistence import InMemoryPersistenceSink, JsonPersistenceSink
from microsite_factory.adapters.simulated import (
    SimulatedDeploymentProvider,
    SimulatedGenerationProvider,
    SimulatedTelemetryProvisioner,
    StaticKeywordSource,
)
from microsite_factory.core.config import AppSettings
from microsite_factory.core.domain.models import (
    Brief,
    DeploymentDescriptor,
    GenerationOutcome,
    OptimizedVariant,
    ValidatedProject,
)
from microsite_factory.core.errors import PipelineHaltedError
from microsite_factory.core.interfaces.providers import (
    DeploymentProvider,
    GenerationProvider,
    KeywordSource,
    PersistenceSink,
    TelemetryProvisioner,
)
from microsite_factory.core.services.content_generator import ContentGenerator
from microsite_factory.core.services.deployment_builder import DeploymentDescriptorBuilder
from microsite_factory.core.services.metadata_optimizer import MetadataOptimizer
from microsite_factory.core.services.validator import validate

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    VALIDATION = "validation"
    GENERATION = "generation"
    OPTIMIZATION = "optimization"
    DEPLOYMENT = "deployment"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    stage_started: Callable[[PipelineStage], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    project: ValidatedProject
    generation: GenerationOutcome
    optimized_variants: list[OptimizedVariant]
    deployment: DeploymentDescriptor
    warnings: list[str] = field(default_factory=list)


class MicrositePipeline:
    def __init__(
        self,
        *,
        generator: ContentGenerator,
        optimizer: MetadataOptimizer,
        deployer: DeploymentDescriptorBuilder,
    ) -> None:
        self.generator = generator
        self.optimizer = optimizer
        self.deployer = deployer

    async def run(self, brief: Brief, *, hooks: PipelineHooks | None = None) -> PipelineResult:
        hooks = hooks or PipelineHooks()
        warnings: list[str] = []

        def warn(message: str) -> None:
            warnings.append(message)
            if hooks.warning:
                hooks.warning(message)

        def enter(stage: PipelineStage) -> None:
            logger.info("Pipeline stage: %s", stage.value)
            if hooks.stage_started:
                hooks.stage_started(stage)

        enter(PipelineStage.VALIDATION)
        project = validate(brief)
        if not project.is_validated:
            raise PipelineHaltedError(
                f"Pipeline halted: validation failed for campaign {brief.campaign_id!r} "
                f"({len(project.errors)} error(s))",
                errors=list(project.errors),
                project=project,
            )
        compliance = project.compliance

        enter(PipelineStage.GENERATION)
        generation = await self.generator.generate(project, warning=warn)
        for failure in generation.failures:
            warn(f"Generation failed for {failure}")

        # Zero successes is not special-cased: the deployment stage rejects it.
        enter(PipelineStage.OPTIMIZATION)
        optimized = await self.optimizer.optimize_all(generation.variants)

        enter(PipelineStage.DEPLOYMENT)
        deployment = await self.deployer.deploy(optimized, compliance)

        return PipelineResult(
            project=project,
            generation=generation,
            optimized_variants=optimized,
            deployment=deployment,
            warnings=warnings,
        )


def build_pipeline(
    settings: AppSettings | None = None,
    *,
    generation: GenerationProvider | None = None,
    persistence: PersistenceSink | None = None,
    deployment: DeploymentProvider | None = None,
    telemetry: TelemetryProvisioner | None = None,
    keywords: KeywordSource | None = None,
    failing_locales: Iterable[str] = (),
) -> MicrositePipeline:
    """Wire a pipeline from settings; any collaborator can be overridden.

    `failing_locales` only applies to the simulated generation provider.
    """

    settings = settings or AppSettings()

    if generation is None:
        if settings.ai_api_key:
            generation = OpenAIGenerationProvider(settings)
        else:
            generation = SimulatedGenerationProvider(
                latency_ms=(settings.generation_latency_min_ms, settings.generation_latency_max_ms),
                failing_locales=failing_locales,
            )

    if persistence is None:
        if settings.persistence_dir is not None:
            persistence = JsonPersistenceSink(settings.persistence_dir)
        else:
            persistence = InMemoryPersistenceSink()

    if deployment is None:
        if settings.deploy_api_url:
            deployment = HttpDeploymentProvider(settings)
        else:
            deployment = SimulatedDeploymentProvider(latency_ms=settings.provisioning_latency_ms)

    if telemetry is None:
        if settings.telemetry_api_url:
            telemetry = HttpTelemetryProvisioner(settings)
        else:
            telemetry = SimulatedTelemetryProvisioner(
                analytics_base_url=settings.analytics_base_url,
                latency_ms=settings.provisioning_latency_ms,
            )

    return MicrositePipeline(
        generator=ContentGenerator(
            generation,
            persistence,
            generation_model=settings.ai_model if settings.ai_api_key else settings.generation_model,
        ),
        optimizer=MetadataOptimizer(
            keywords or StaticKeywordSource(),
            site_base_url=settings.site_base_url,
            campaign_path=settings.campaign_path,
        ),
        deployer=DeploymentDescriptorBuilder(deployment, telemetry),
    )


async def run_pipeline(
    brief: Brief,
    *,
    settings: AppSettings | None = None,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    return await build_pipeline(settings).run(brief, hooks=hooks)
