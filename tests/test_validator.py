"""Tests for brief validation and compliance-policy derivation."""

import pytest
from pydantic import ValidationError

from microsite_factory.core.domain.locales import DataResidency
from microsite_factory.core.domain.models import Brief, BriefAssets, ProjectStatus
from microsite_factory.core.services.validator import (
    derive_compliance_policy,
    is_absolute_url,
    validate,
)


# ============================================================================
# Structural and quality checks
# ============================================================================

class TestValidate:
    def test_valid_brief_is_validated(self, make_brief):
        project = validate(make_brief())

        assert project.status is ProjectStatus.VALIDATED
        assert project.is_validated
        assert project.errors == ()
        assert project.project_id == "integration-test-2026"
        assert project.timestamp.tzinfo is not None

    def test_collects_every_violation(self):
        brief = Brief(
            campaign_id="ab",
            brand_name="  ",
            core_message="too short",
            target_locales=(),
            assets=BriefAssets(logo_url="not-a-url", keywords_csv_url=""),
        )

        project = validate(brief)

        assert project.status is ProjectStatus.FAILED
        assert len(project.errors) == 6
        joined = " ".join(project.errors)
        assert "campaign_id" in joined
        assert "brand_name" in joined
        assert "core_message" in joined
        assert "target locale" in joined
        assert "logo_url" in joined
        assert "keywords_csv_url" in joined

    def test_single_violation_fails(self, make_brief):
        project = validate(make_brief(core_message="Hi there"))

        assert project.status is ProjectStatus.FAILED
        assert len(project.errors) == 1

    def test_empty_brief_does_not_raise(self):
        project = validate(Brief())

        assert project.status is ProjectStatus.FAILED
        assert project.compliance.data_residency is DataResidency.GLOBAL

    def test_failed_project_still_carries_policy(self, make_brief):
        project = validate(make_brief(locales=("fr-FR",), brand_name=""))

        assert project.status is ProjectStatus.FAILED
        assert project.compliance.requires_consent is True


class TestUrlCheck:
    @pytest.mark.parametrize(
        "value",
        ["https://ok.com/logo.png", "http://example.com", "https://via.placeholder.com/150"],
    )
    def test_accepts_absolute_urls(self, value):
        assert is_absolute_url(value)

    @pytest.mark.parametrize("value", ["", "   ", "not-a-url", "/relative/path"])
    def test_rejects_non_urls(self, value):
        assert not is_absolute_url(value)


# ============================================================================
# Compliance policy
# ============================================================================

class TestCompliancePolicy:
    def test_non_eu_locales_need_no_consent(self):
        policy = derive_compliance_policy(["en-US"])

        assert policy.requires_consent is False
        assert policy.consent_active is False
        assert policy.data_residency is DataResidency.GLOBAL

    def test_one_eu_locale_requires_consent(self):
        policy = derive_compliance_policy(["en-US", "it-IT"])

        assert policy.requires_consent is True
        assert policy.consent_active is True
        assert policy.data_residency is DataResidency.EU

    @pytest.mark.parametrize("locale", ["fr", "DE-de", "pl_PL", " dk-DK "])
    def test_prefix_is_case_and_separator_insensitive(self, locale):
        assert derive_compliance_policy([locale]).requires_consent is True

    def test_empty_locale_set(self):
        assert derive_compliance_policy([]).requires_consent is False

    def test_consent_set_is_wider_than_traffic_set(self):
        # Polish counts for consent even though it is not EU traffic for region selection.
        assert derive_compliance_policy(["pl-PL"]).requires_consent is True


# ============================================================================
# Brief model
# ============================================================================

class TestBriefModel:
    def test_locales_are_an_ordered_set(self):
        brief = Brief(target_locales=("it-IT", "en-US", "it-IT", " ", "de-DE"))

        assert brief.target_locales == ("it-IT", "en-US", "de-DE")

    def test_accepts_camel_case_keys(self):
        brief = Brief.model_validate(
            {
                "campaignId": "camel-1",
                "brandName": "Camel",
                "coreMessage": "A message long enough.",
                "targetLocales": ["en-US"],
                "assets": {"logoUrl": "https://a.com/l.png", "keywordsCsvUrl": "https://a.com/k.csv"},
            }
        )

        assert brief.campaign_id == "camel-1"
        assert brief.assets.keywords_csv_url == "https://a.com/k.csv"
        assert validate(brief).is_validated

    def test_brief_is_immutable(self, make_brief):
        brief = make_brief()

        with pytest.raises(ValidationError):
            brief.campaign_id = "changed"
