"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers.

Subpackages are imported explicitly (``corral_di.infrastructure.testing``,
``corral_di.infrastructure.fastapi_integration``); the FastAPI one needs the
``fastapi`` extra.
"""

__all__ = [
    "fastapi_integration",
    "testing",
]
