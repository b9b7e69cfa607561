import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, get_type_hints

from corral_di.domain import (
    AlreadyBoundError,
    ConstructionStrategy,
    ContainerSettings,
    Definition,
    DefinitionError,
    IContainerBuilder,
    Identifier,
    NotFoundError,
    TargetNotFoundError,
    TypeMismatchError,
    identifier_key,
    locate_class,
)

logger = logging.getLogger(__name__)


class ContainerBuilder(IContainerBuilder):
    """Registry of definitions keyed by identifier.

    Bindings are write-once: binding an identifier twice raises
    ``AlreadyBoundError`` and leaves the first binding active. Identifiers are
    kept in binding order, which is the order of ``get_ids`` and
    ``get_tagged_ids``.

    Attributes:
        _definitions: Insertion-ordered mapping of identifier key to definition.
        _settings: Behaviour switches (eager or lazy class validation).
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize an empty registry.

        Args:
            settings: Optional settings; defaults validate classes at bind time.
        """
        self._definitions: Dict[str, Definition] = {}
        self._settings = settings or ContainerSettings()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def _register(self, definition: Definition) -> Definition:
        if definition.id in self._definitions:
            raise AlreadyBoundError(definition.id)
        self._definitions[definition.id] = definition
        logger.debug("Bound %s using %s", definition.id, definition.strategy)
        return definition

    def _validate_target(self, key: str, cls: Any) -> None:
        if not self._settings.validate_targets_on_bind:
            if not isinstance(cls, str) and not inspect.isclass(cls):
                raise TargetNotFoundError(key, cls, "not a class or a dotted path")
            return
        try:
            locate_class(cls)
        except Exception as e:
            raise TargetNotFoundError(key, cls, str(e)) from e

    def bind(self, identifier: Identifier, cls: Any = None) -> Definition:
        """Bind a class to an identifier.

        Args:
            identifier: A string key or a class.
            cls: The concrete class or a dotted path to it. Defaults to the identifier.

        Returns:
            The new definition, for fluent configuration.

        Raises:
            AlreadyBoundError: If the identifier is already bound.
            TargetNotFoundError: If the class cannot be located.

        Example:
            >>> builder.bind(Mailer, SmtpMailer).set_shared().set_argument("host", "localhost")
            >>> builder.bind("reports.exporter", "reports.exporters.CsvExporter").add_tag("exporter")
        """
        key = identifier_key(identifier)
        if cls is None:
            cls = identifier
        if key in self._definitions:
            raise AlreadyBoundError(key)
        self._validate_target(key, cls)
        return self._register(Definition(id=key, target=cls))

    def bind_if(self, identifier: Identifier, cls: Any = None) -> Definition:
        """Bind a class unless the identifier is bound already, then return its definition."""
        if self.has(identifier):
            return self.get_definition(identifier)
        return self.bind(identifier, cls)

    def bind_class(self, cls: Any) -> Definition:
        """Bind a class under its own identifier."""
        return self.bind(cls, cls)

    def bind_class_by_interface(self, cls: type) -> Definition:
        """Bind a class under the single interface it directly derives from.

        Raises:
            DefinitionError: If ``cls`` is abstract itself or does not derive from exactly one interface.
        """
        if not inspect.isclass(cls):
            raise TargetNotFoundError(identifier_key(type(cls)), cls, "not a class")
        if inspect.isabstract(cls):
            raise DefinitionError(f"Must specify a concrete class, {cls.__qualname__} is abstract")

        interfaces = [base for base in cls.__bases__ if _is_interface(base)]
        if not interfaces:
            raise DefinitionError(f"Class {cls.__qualname__} does not implement an interface")
        if len(interfaces) > 1:
            names = ", ".join(base.__qualname__ for base in interfaces)
            raise DefinitionError(f"Class {cls.__qualname__} must implement only one interface, found: {names}")

        return self.bind(interfaces[0], cls)

    def bind_factory(self, identifier: Identifier, factory: Callable[..., Any]) -> Definition:
        """Bind a factory whose parameters are resolved like constructor parameters.

        When the factory's return annotation is a class, it becomes the bound
        class used by ``set`` for type checks.

        Raises:
            AlreadyBoundError: If the identifier is already bound.
            TypeError: If ``factory`` is not callable.
        """
        key = identifier_key(identifier)
        if not callable(factory):
            raise TypeError(f"Factory for {key} must be callable, got {factory!r}")
        return self._register(
            Definition(
                id=key,
                target=_factory_return_class(factory),
                strategy=ConstructionStrategy.FACTORY_FUNCTION,
                factory=factory,
            )
        )

    def bind_instance(self, identifier: Identifier, instance: Any) -> Definition:
        """Bind an object built outside the container as a shared instance."""
        key = identifier_key(identifier)
        definition = Definition(id=key, target=type(instance))
        return self._register(definition.use_instance(instance))

    def has(self, identifier: Identifier) -> bool:
        return identifier_key(identifier) in self._definitions

    def get_definition(self, identifier: Identifier) -> Definition:
        """Return the definition for an identifier.

        Raises:
            NotFoundError: If the identifier is not bound.
        """
        key = identifier_key(identifier)
        if key not in self._definitions:
            raise NotFoundError(key)
        return self._definitions[key]

    def get_definitions(self) -> Dict[str, Definition]:
        """Return a shallow copy of the registry in binding order."""
        return dict(self._definitions)

    def get_ids(self) -> List[str]:
        return list(self._definitions)

    def get_tagged_ids(self, tag: str) -> List[str]:
        """Return identifiers whose definition carries ``tag``, in binding order."""
        return [key for key, definition in self._definitions.items() if definition.has_tag(tag)]

    def is_shared(self, identifier: Identifier) -> bool:
        """Whether the identifier is bound as shared. Unbound identifiers are not shared."""
        key = identifier_key(identifier)
        return key in self._definitions and self._definitions[key].is_shared

    def set(self, identifier: Identifier, instance: Any) -> None:
        """Use a prebuilt object as the shared instance of a bound identifier.

        The definition keeps its strategy and target, so a container that
        forgets the object builds a new one on the next ``make``.

        Args:
            identifier: A bound identifier.
            instance: The object to hand out for the identifier.

        Raises:
            NotFoundError: If the identifier is not bound.
            TypeMismatchError: If the object is not an instance of the bound class.
        """
        definition = self.get_definition(identifier)
        bound_class = definition.get_class()
        if bound_class is not None and not isinstance(instance, bound_class):
            raise TypeMismatchError(definition.id, bound_class, type(instance))
        definition.set_resolved(instance)
        logger.debug("Set resolved instance for %s", definition.id)

    def replace(self, definition: Definition) -> Definition:
        """Register a definition, replacing any binding under the same identifier.

        Unlike the bind methods this ignores the write-once rule; it is meant for
        test overrides.
        """
        self._definitions[definition.id] = definition
        logger.debug("Replaced %s using %s", definition.id, definition.strategy)
        return definition

    def copy(self) -> "ContainerBuilder":
        """Return a builder with copies of every definition and the same settings."""
        builder = ContainerBuilder(self._settings)
        builder._definitions = {key: definition.clone() for key, definition in self._definitions.items()}
        return builder

    def clear(self) -> None:
        """Remove every definition."""
        self._definitions.clear()


def _is_interface(cls: type) -> bool:
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def _factory_return_class(factory: Callable[..., Any]) -> Optional[type]:
    try:
        hints = get_type_hints(factory)
    except (NameError, TypeError, AttributeError):
        return None
    returned = hints.get("return")
    return returned if inspect.isclass(returned) else None
