"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (simulated, HTTP, AI) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "microsite-factory"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "microsite-factory"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "microsite-factory"
    return Path.home() / ".config" / "microsite-factory"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Every value can be overridden with a `MICROSITE_FACTORY_*` environment
    variable, a project `.env` file or the per-user `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MICROSITE_FACTORY_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # URL patterns used by the metadata optimizer and telemetry simulation.
    site_base_url: str = Field(
        default="https://microsite-factory.com",
        min_length=8,
        description="Base URL every localized microsite page lives under.",
    )
    campaign_path: str = Field(
        default="campaign-mvc",
        min_length=1,
        description="Path segment appended after the locale in canonical URLs.",
    )
    analytics_base_url: str = Field(
        default="https://analytics.microsite-factory.com",
        min_length=8,
        description="Base URL for simulated telemetry endpoints.",
    )

    # Simulated collaborators
    generation_model: str = Field(
        default="gpt-4o-stub-v1",
        min_length=1,
        description="Model label recorded on every generation outcome.",
    )
    generation_latency_min_ms: int = Field(
        default=50,
        ge=0,
        description="Lower bound of the simulated per-locale generation latency.",
    )
    generation_latency_max_ms: int = Field(
        default=200,
        ge=0,
        description="Upper bound of the simulated per-locale generation latency.",
    )
    provisioning_latency_ms: int = Field(
        default=0,
        ge=0,
        le=60_000,
        description="Simulated latency for deployment/telemetry provisioning.",
    )

    # AI provider (OpenAI compatible)
    ai_api_key: str | None = Field(
        default=None,
        description="API key for the OpenAI compatible copy generator. Unset -> simulated copy.",
    )
    ai_base_url: str = Field(
        default="https://api.openai.com/v1",
        min_length=8,
        description="OpenAI compatible base URL.",
    )
    ai_model: str = Field(
        default="gpt-4o-mini",
        min_length=1,
        description="Model used to write localized copy.",
    )
    ai_timeout_seconds: float = Field(
        default=45.0,
        gt=0,
        description="Timeout for AI provider calls (seconds).",
    )

    # HTTP provisioning
    deploy_api_url: str | None = Field(
        default=None,
        description="Deployment API base URL. Unset -> simulated deployment.",
    )
    telemetry_api_url: str | None = Field(
        default=None,
        description="Telemetry provisioning API base URL. Unset -> simulated telemetry.",
    )
    deploy_api_token: str | None = Field(
        default=None,
        description="Bearer token sent to the deployment API only.",
    )
    telemetry_api_token: str | None = Field(
        default=None,
        description="Bearer token sent to the telemetry API only.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    user_agent: str = Field(
        default="microsite-factory/0.1 (+https://microsite-factory.com)",
        min_length=1,
        description="User-Agent for provisioning requests.",
    )

    persistence_dir: Path | None = Field(
        default=None,
        description="Directory where generation outcomes are written as JSON. Unset -> in memory.",
    )
