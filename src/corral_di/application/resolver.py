import enum
import inspect
from typing import Any, Dict, List, Optional, Tuple

from corral_di.domain import (
    CallableSignature,
    IContainer,
    IResolver,
    ParameterInfo,
    UnresolvableParameterError,
)

# Classes from these modules are values, not services, and are never autowired.
_VALUE_TYPE_MODULES = frozenset({"builtins", "typing", "types", "collections.abc"})


class ParameterResolver(IResolver):
    """Resolves constructor parameters using type hints, explicit arguments and defaults.

    Each parameter is resolved in this order:

    1. A caller argument with the same name (always wins).
    2. A parameter typed with the container interface receives the container.
    3. A parameter typed with a service class is autowired through ``container.make``.
    4. An explicit argument from the definition.
    5. The declared default value.

    Anything else raises ``UnresolvableParameterError``.
    """

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

        Example:
            >>> class Mailer:
            ...     def __init__(self, transport: Transport, sender: str, retries: int = 3):
            ...         ...
            >>> resolver = ParameterResolver()
            >>> args, kwargs = resolver.resolve_arguments(
            ...     inspect_callable(Mailer), container, "Mailer", {"sender": "noreply@example.com"}
            ... )
            >>> sorted(kwargs)
            ['retries', 'sender', 'transport']
        """
        caller_arguments = caller_arguments or {}
        merged_arguments = {**(definition_arguments or {}), **caller_arguments}

        positional: List[Any] = []
        keywords: Dict[str, Any] = {}
        for param in signature.parameters:
            value = self._resolve_parameter(param, container, target, merged_arguments, caller_arguments)
            if param.positional_only:
                positional.append(value)
            else:
                keywords[param.name] = value

        if signature.accepts_var_keyword:
            declared = {param.name for param in signature.parameters}
            for name, value in merged_arguments.items():
                if name not in declared:
                    keywords[name] = value

        return positional, keywords

    def _resolve_parameter(
        self,
        param: ParameterInfo,
        container: IContainer,
        target: str,
        merged_arguments: Dict[str, Any],
        caller_arguments: Dict[str, Any],
    ) -> Any:
        # Caller arguments override the outcome of every other source, so the
        # dependency is not built at all when one is given.
        if param.name in caller_arguments:
            return caller_arguments[param.name]

        annotation = param.annotation
        if self.is_container_type(annotation, container):
            return container

        if self.is_autowirable(annotation, container):
            return container.make(annotation)

        if param.name in merged_arguments:
            return merged_arguments[param.name]

        if param.has_default:
            return param.default

        raise UnresolvableParameterError(param.name, target)

    @staticmethod
    def is_container_type(annotation: Any, container: IContainer) -> bool:
        """Check whether a parameter asks for the resolving container itself."""
        return (
            inspect.isclass(annotation)
            and issubclass(annotation, IContainer)
            and isinstance(container, annotation)
        )

    @staticmethod
    def is_autowirable(annotation: Any, container: IContainer) -> bool:
        """Check whether a type hint names a service the container should build.

        Bound classes are always autowirable. Unbound classes are autowirable
        unless they are builtin value types (``int``, ``str``, ``dict``, ...) or enums.
        Generics, unions and string annotations never are.
        """
        if not inspect.isclass(annotation):
            return False
        if container.has(annotation):
            return True
        if annotation.__module__ in _VALUE_TYPE_MODULES:
            return False
        return not issubclass(annotation, enum.Enum)
