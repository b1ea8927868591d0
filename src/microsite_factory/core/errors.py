"""Domain exceptions for the microsite pipeline.

Every error raised on purpose by the core or its adapters inherits from
`MicrositeFactoryError`, so the CLI (or any other caller) can catch one base
class at the boundary and map it to an exit code.

Note: a per-locale generation failure is *not* raised to the caller; it is
recorded in `GenerationOutcome.failures`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from microsite_factory.core.domain.models import ValidatedProject


class MicrositeFactoryError(Exception):
    """Base exception for all pipeline errors."""


class InvariantViolation(MicrositeFactoryError):
    """A stage was invoked with input that breaks its precondition."""


class PipelineHaltedError(MicrositeFactoryError):
    """Validation failed; the run stopped before generation.

    Attributes
    ----------
    errors:
        Every check the brief violated, in evaluation order.
    project:
        The FAILED project, policy included, so callers can report it
        without validating again.
    """

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        project: ValidatedProject | None = None,
    ) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []
        self.project = project


class GenerationProviderError(MicrositeFactoryError):
    """Raised by a generation provider when a single locale cannot be produced."""


class OptimizationFailure(MicrositeFactoryError):
    """A variant failed metadata optimization, which aborts the whole stage."""

    def __init__(self, message: str, locale: str | None = None) -> None:
        super().__init__(message)
        self.locale = locale


class ProvisioningError(MicrositeFactoryError):
    """A deployment or telemetry provider call failed."""
