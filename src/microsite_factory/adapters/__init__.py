"""Concrete collaborators (simulated, HTTP, AI) and file I/O helpers.

Each adapter implements one of the `core.interfaces.providers` Protocols.
"""
