"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) and locale tables live here.
- The domain knows nothing about HTTP, CLI or SDKs: only pipeline concepts.
"""
