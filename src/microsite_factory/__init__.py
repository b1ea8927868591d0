"""Microsite Factory: campaign brief -> localized, SEO-annotated, compliant deployments."""

__version__ = "0.1.0"
