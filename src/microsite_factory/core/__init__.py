"""Pipeline core: domain, interfaces, configuration and services.

The core depends on `core.interfaces` abstractions; concrete collaborators
live in `microsite_factory.adapters`.
"""
