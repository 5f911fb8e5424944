"""Domain layer — image payloads, geometry, errors, and lifecycle states.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
