"""Tests for simulated collaborators, persistence sinks and JSON I/O."""

import asyncio
import json
import random

import pytest
from pydantic import ValidationError

from microsite_factory.adapters.brief_loader import load_brief
from microsite_factory.adapters.json_exporter import export_result_json, result_payload
from microsite_factory.adapters.persistence import JsonPersistenceSink
from microsite_factory.adapters.simulated import (
    SimulatedDeploymentProvider,
    SimulatedGenerationProvider,
    SimulatedTelemetryProvisioner,
    StaticKeywordSource,
    _to_base36,
    build_localized_copy,
)
from microsite_factory.core.domain.locales import EdgeRegion
from microsite_factory.core.domain.models import ContentVariant, GenerationOutcome, MiddlewareRules
from microsite_factory.core.errors import GenerationProviderError
from microsite_factory.core.interfaces import (
    DeploymentProvider,
    GenerationProvider,
    KeywordSource,
    PersistenceSink,
    TelemetryProvisioner,
)
from microsite_factory.core.services.pipeline import build_pipeline


# ============================================================================
# Simulated collaborators
# ============================================================================

class TestSimulated:
    def test_satisfy_protocols(self, tmp_path):
        assert isinstance(SimulatedGenerationProvider(), GenerationProvider)
        assert isinstance(StaticKeywordSource(), KeywordSource)
        assert isinstance(SimulatedDeploymentProvider(), DeploymentProvider)
        assert isinstance(
            SimulatedTelemetryProvisioner(analytics_base_url="https://a.example"),
            TelemetryProvisioner,
        )
        assert isinstance(JsonPersistenceSink(tmp_path), PersistenceSink)

    def test_localized_copy(self):
        variant = build_localized_copy("Exclusive villas in Comporta.", "it-IT")

        assert variant.headline == "[IT-IT] Future of Living: Exclusive villas in ..."
        assert variant.call_to_action == "[IT-IT] Discover More"
        assert "Exclusive villas in Comporta." in variant.body

    @pytest.mark.asyncio
    async def test_generation_is_deterministic_apart_from_latency(self):
        provider = SimulatedGenerationProvider(latency_ms=(0, 1), rng=random.Random(7))

        first = await provider.generate("Same message here", "fr-FR")
        second = await provider.generate("Same message here", "fr-FR")

        assert first == second

    @pytest.mark.asyncio
    async def test_forced_failure(self):
        provider = SimulatedGenerationProvider(latency_ms=(0, 0), failing_locales=["es-ES"])

        with pytest.raises(GenerationProviderError, match="Simulated API timeout for es-ES"):
            await provider.generate("msg", "es-ES")

    @pytest.mark.asyncio
    async def test_deployment_records_calls(self):
        provider = SimulatedDeploymentProvider()
        rules = MiddlewareRules(consent_required=False)

        deployment_id = await provider.provision(rules, EdgeRegion.NORTH_AMERICA)

        assert deployment_id.startswith("dpl_iad1_")
        assert provider.calls == [(rules, EdgeRegion.NORTH_AMERICA)]

    @pytest.mark.asyncio
    async def test_telemetry_url(self):
        provisioner = SimulatedTelemetryProvisioner(analytics_base_url="https://a.example/")

        assert await provisioner.provision("dpl_x") == "https://a.example/v1/events/dpl_x"

    def test_base36(self):
        assert _to_base36(0) == "0"
        assert _to_base36(35) == "z"
        assert _to_base36(36) == "10"


# ============================================================================
# Persistence
# ============================================================================

class TestJsonPersistenceSink:
    @pytest.mark.asyncio
    async def test_writes_camel_case_outcome(self, tmp_path):
        sink = JsonPersistenceSink(tmp_path / "outcomes")
        outcome = GenerationOutcome(
            project_id="camp/2026",
            generation_model="gpt-4o-stub-v1",
            variants=(build_localized_copy("msg", "en-US"),),
            failures=("it-IT: timeout",),
        )

        await sink.persist(outcome)

        path = sink.path_for("camp/2026")
        assert path.name == "camp-2026.generation.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["projectId"] == "camp/2026"
        assert data["generationModel"] == "gpt-4o-stub-v1"
        assert data["variants"][0]["callToAction"] == "[EN-US] Discover More"
        assert data["failures"] == ["it-IT: timeout"]

    @pytest.mark.asyncio
    async def test_write_runs_in_a_worker_thread(self, tmp_path, monkeypatch):
        sink = JsonPersistenceSink(tmp_path)
        offloaded = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args):
            offloaded.append(func)
            return await real_to_thread(func, *args)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)

        await sink.persist(GenerationOutcome(project_id="p-1", generation_model="m"))

        assert offloaded == [sink._write]
        assert sink.path_for("p-1").exists()


# ============================================================================
# Brief loading and result export
# ============================================================================

class TestBriefLoader:
    def test_loads_camel_case_file(self, tmp_path):
        path = tmp_path / "brief.json"
        path.write_text(
            json.dumps(
                {
                    "campaignId": "file-brief",
                    "brandName": "Brand",
                    "coreMessage": "Long enough core message.",
                    "targetLocales": ["en-US", "en-US", "it-IT"],
                    "assets": {"logoUrl": "https://a.com/l.png", "keywordsCsvUrl": "https://a.com/k.csv"},
                }
            ),
            encoding="utf-8",
        )

        brief = load_brief(path)

        assert brief.campaign_id == "file-brief"
        assert brief.target_locales == ("en-US", "it-IT")

    def test_missing_fields_are_left_to_the_validator(self, tmp_path):
        path = tmp_path / "brief.json"
        path.write_text("{}", encoding="utf-8")

        assert load_brief(path).campaign_id == ""

    def test_wrong_types_raise(self, tmp_path):
        path = tmp_path / "brief.json"
        path.write_text(json.dumps({"targetLocales": 5}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_brief(path)

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "brief.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            load_brief(path)


class TestResultExport:
    @pytest.mark.asyncio
    async def test_exports_full_run(self, settings, make_brief, tmp_path):
        result = await build_pipeline(settings).run(make_brief())

        path = export_result_json(result=result, output_path=tmp_path / "out" / "run.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == json.loads(json.dumps(result_payload(result)))
        assert data["project"]["status"] == "VALIDATED"
        assert data["project"]["compliance"]["requiresConsent"] is True
        assert data["deployment"]["edgeRegion"] == "fra1"
        assert data["deployment"]["middlewareRules"]["consentRequired"] is True
        assert len(data["optimizedVariants"]) == 3
        assert "canonicalUrl" in data["optimizedVariants"][0]["seo"]
        assert ContentVariant.model_validate(data["optimizedVariants"][0]).locale == "en-US"
