"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions only.
"""

from microsite_factory.core.interfaces.providers import (
    DeploymentProvider,
    GenerationProvider,
    KeywordSource,
    PersistenceSink,
    TelemetryProvisioner,
)

__all__ = [
    "DeploymentProvider",
    "GenerationProvider",
    "KeywordSource",
    "PersistenceSink",
    "TelemetryProvisioner",
]
