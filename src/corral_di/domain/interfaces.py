from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from corral_di.domain.models import CallableSignature, Definition
from corral_di.domain.references import Identifier


class IContainer(ABC):
    """Abstract interface for resolving objects by identifier.

    A constructor parameter typed with this interface receives the resolving
    container itself.
    """

    @abstractmethod
    def make(self, id_or_class: Identifier, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Build (or return the cached) object for an identifier or class.

        Args:
            id_or_class: A bound identifier or a concrete class reference.
            arguments: Caller arguments overriding everything else by parameter name.
        """

    @abstractmethod
    def get(self, identifier: Identifier) -> Any:
        """Resolve a bound identifier.

        Args:
            identifier: The identifier to resolve.
        """

    @abstractmethod
    def has(self, identifier: Identifier) -> bool:
        """Check whether an identifier is bound.

        Args:
            identifier: The identifier to check.
        """


class IContainerBuilder(ABC):
    """Abstract interface for the definition registry."""

    @abstractmethod
    def bind(self, identifier: Identifier, cls: Any = None) -> Definition:
        """Register a class under an identifier and return its definition.

        Args:
            identifier: The key to bind.
            cls: The concrete class or a dotted path to it. Defaults to the identifier.
        """

    @abstractmethod
    def has(self, identifier: Identifier) -> bool:
        """Check whether an identifier is bound."""

    @abstractmethod
    def get_definition(self, identifier: Identifier) -> Definition:
        """Return the definition bound to an identifier."""

    @abstractmethod
    def get_ids(self) -> List[str]:
        """Return all identifiers in binding order."""

    @abstractmethod
    def get_tagged_ids(self, tag: str) -> List[str]:
        """Return the identifiers carrying a tag, in binding order."""

    @abstractmethod
    def set(self, identifier: Identifier, instance: Any) -> None:
        """Use a prebuilt object as the shared instance of a bound identifier."""


class IInstanceCache(ABC):
    """Abstract interface for the shared instance cache."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the cached instance for a key."""

    @abstractmethod
    def put(self, key: str, instance: Any) -> None:
        """Store an instance under a key."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Check whether a key has a cached instance."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Forget the cached instance for a key."""

    @abstractmethod
    def clear(self) -> None:
        """Forget every cached instance."""


class IResolver(ABC):
    """Abstract interface for parameter resolution."""

    @abstractmethod
    def resolve_arguments(
        self,
        signature: CallableSignature,
        container: IContainer,
        target: str,
        definition_arguments: Optional[Dict[str, Any]] = None,
        caller_arguments: Optional[Dict[str, Any]] = None,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve every parameter of a signature.

        Args:
            signature: The introspected constructor or factory.
            container: The container used for self-injection and autowiring.
            target: Name of what is being built, for error messages.
            definition_arguments: Explicit arguments stored on the definition.
            caller_arguments: Arguments passed to ``make``; they always win.

        Returns:
            Positional arguments and keyword arguments for the call.

        Raises:
            UnresolvableParameterError: If a parameter cannot be supplied.
        """
