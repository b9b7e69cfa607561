from typing import Any, List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotFoundError(DIException):
    """Raised when an identifier has no binding and is not a usable class reference.

    Attributes:
        identifier: The identifier that could not be found.
        reason: Optional reason for the failure.
    """

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"No entry was found for identifier: {identifier}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class TargetNotFoundError(NotFoundError):
    """Raised when a bound class reference cannot be located.

    Attributes:
        target: The class reference (usually a dotted path) that failed to load.
    """

    def __init__(self, identifier: str, target: Any, reason: Optional[str] = None) -> None:
        self.target = target
        detail = f"class {target!r} cannot be located"
        if reason:
            detail += f" ({reason})"
        super().__init__(identifier, detail)


class AlreadyBoundError(DIException):
    """Raised when binding an identifier that is already registered.

    Attributes:
        identifier: The identifier that is already bound.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Identifier {identifier} is already bound")


class UnresolvableParameterError(DIException):
    """Raised when a constructor parameter cannot be supplied.

    This occurs when the parameter has no autowirable type hint,
    no explicit argument and no default value.

    Attributes:
        parameter: Name of the parameter.
        target: The identifier or class being constructed.
    """

    def __init__(self, parameter: str, target: str) -> None:
        self.parameter = parameter
        self.target = target
        super().__init__(
            f"Cannot resolve parameter '{parameter}' of {target}: "
            "no type hint, no argument supplied and no default value"
        )


class ConstructionError(DIException):
    """Raised when instantiating a class or calling a factory fails.

    Attributes:
        target: The identifier or class being constructed.
        original: The underlying exception.
    """

    def __init__(self, target: str, original: BaseException) -> None:
        self.target = target
        self.original = original
        super().__init__(f"Failed to construct {target}: {original}")


class TypeMismatchError(DIException):
    """Raised when a prebuilt object is not compatible with the bound class.

    Attributes:
        identifier: The identifier the object was set for.
        expected: The bound class.
        actual: The class of the rejected object.
    """

    def __init__(self, identifier: str, expected: type, actual: type) -> None:
        self.identifier = identifier
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Object of type {actual.__qualname__} set for {identifier} "
            f"is not the same as or a subclass of {expected.__qualname__}"
        )


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: Identifiers involved in the cycle, first one repeated last.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)


class DefinitionError(DIException):
    """Raised for invalid definition configurations.

    This occurs when:
    - Adding a tag that the definition already carries.
    - Setting an argument that is already set.
    - Reading an argument that was never set.
    - Binding a class by interface when it has no single interface.
    """
