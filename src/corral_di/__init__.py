"""
corral-di: Identifier-keyed Dependency Injection container with constructor auto-wiring.

Public API exports for the corral-di package.
"""

# Application exports
from corral_di.application.builder import ContainerBuilder
from corral_di.application.container import Container

# Domain exports
from corral_di.domain.enums import ConstructionStrategy
from corral_di.domain.exceptions import (
    AlreadyBoundError,
    CircularDependencyError,
    ConstructionError,
    DefinitionError,
    DIException,
    NotFoundError,
    TargetNotFoundError,
    TypeMismatchError,
    UnresolvableParameterError,
)
from corral_di.domain.interfaces import IContainer
from corral_di.domain.models import ContainerSettings, Definition

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerBuilder",
    "IContainer",
    # Models
    "Definition",
    "ContainerSettings",
    # Enums
    "ConstructionStrategy",
    # Exceptions
    "DIException",
    "NotFoundError",
    "TargetNotFoundError",
    "AlreadyBoundError",
    "UnresolvableParameterError",
    "ConstructionError",
    "TypeMismatchError",
    "CircularDependencyError",
    "DefinitionError",
]
