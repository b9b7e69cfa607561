"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .builder import ContainerBuilder
from .circular_detector import CircularDependencyDetector
from .container import Container
from .instance_cache import InstanceCache
from .introspection import inspect_callable
from .resolver import ParameterResolver

__all__ = [
    "Container",
    "ContainerBuilder",
    "InstanceCache",
    "ParameterResolver",
    "CircularDependencyDetector",
    "inspect_callable",
]
