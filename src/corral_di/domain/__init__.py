"""
Domain layer - Core business logic and models.

This layer contains the fundamental business rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import ConstructionStrategy
from .exceptions import (
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
from .interfaces import IContainer, IContainerBuilder, IInstanceCache, IResolver
from .models import CallableSignature, ContainerSettings, Definition, ParameterInfo
from .references import Identifier, describe, identifier_key, locate_class

__all__ = [
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
    # Interfaces
    "IContainer",
    "IContainerBuilder",
    "IInstanceCache",
    "IResolver",
    # Models
    "Definition",
    "ParameterInfo",
    "ContainerSettings",
    "CallableSignature",
    # References
    "Identifier",
    "identifier_key",
    "locate_class",
    "describe",
]
