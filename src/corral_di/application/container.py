import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from corral_di.application.builder import ContainerBuilder
from corral_di.application.circular_detector import CircularDependencyDetector
from corral_di.application.instance_cache import InstanceCache
from corral_di.application.introspection import inspect_callable
from corral_di.application.resolver import ParameterResolver
from corral_di.domain import (
    ConstructionError,
    ConstructionStrategy,
    ContainerSettings,
    Definition,
    DIException,
    IContainer,
    IInstanceCache,
    Identifier,
    IResolver,
    NotFoundError,
    describe,
    identifier_key,
    locate_class,
)

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Main dependency injection container.

    Resolves identifiers against a ``ContainerBuilder`` and builds objects by
    introspecting their constructors, autowiring class-typed parameters
    recursively. Shared definitions are cached per lookup key.

    The builder is referenced, not owned: it can outlive the container or be
    swapped through the ``builder`` property. The instance cache belongs to
    the container.

    Attributes:
        _builder: The definition registry.
        _instances: Cache of shared instances keyed by identifier.
        _resolver: Component resolving constructor parameters.
        _circular_detector: Component detecting circular dependencies.
    """

    def __init__(
        self,
        builder: Optional[ContainerBuilder] = None,
        settings: Optional[ContainerSettings] = None,
    ) -> None:
        """Initialize the container.

        Args:
            builder: The registry to resolve from. A new, empty one is created when omitted.
            settings: Behaviour switches for a new builder. The container always follows
                its builder's settings, so passing settings that differ from those of
                ``builder`` is rejected.

        Raises:
            ValueError: If both are given and the settings differ from the builder's.
        """
        if builder is not None and settings is not None and settings != builder.settings:
            raise ValueError("Container settings must match the settings of its builder")
        self._builder = builder if builder is not None else ContainerBuilder(settings)
        self._instances: IInstanceCache = InstanceCache()
        self._resolver: IResolver = ParameterResolver()
        self._circular_detector = CircularDependencyDetector()

    @property
    def builder(self) -> ContainerBuilder:
        return self._builder

    @builder.setter
    def builder(self, builder: ContainerBuilder) -> None:
        """Swap the registry and drop every cached instance."""
        self._builder = builder
        self._instances.clear()

    @property
    def settings(self) -> ContainerSettings:
        return self._builder.settings

    def make(self, id_or_class: Identifier, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Build the object for an identifier or class, or return its shared instance.

        Args:
            id_or_class: A bound identifier, an unbound concrete class, or a dotted path to one.
            arguments: Caller arguments, by parameter name. They override definition
                arguments and autowiring. Ignored when a shared instance is already cached.

        Returns:
            The instance.

        Raises:
            NotFoundError: If the identifier is unbound and is not a locatable class.
            UnresolvableParameterError: If a constructor parameter cannot be supplied.
            CircularDependencyError: If the dependency graph loops back on itself.
            ConstructionError: If introspection or instantiation fails.

        Example:
            >>> container.bind(Mailer, SmtpMailer).set_argument("host", "localhost")
            >>> mailer = container.make(Mailer, {"host": "mail.example.com"})
        """
        key = identifier_key(id_or_class)
        definition = self._builder.get_definition(key) if self._builder.has(key) else None

        if definition is not None and definition.is_shared and self._instances.contains(key):
            logger.debug("Returning shared instance for %s", key)
            return self._instances.get(key)

        if definition is not None and definition.is_shared and definition.is_resolved:
            self._instances.put(key, definition.resolved_instance)
            return definition.resolved_instance

        detect = self.settings.detect_circular_dependencies
        if detect:
            self._circular_detector.push(key)
        try:
            instance = self._build(key, id_or_class, definition, arguments or {})
        finally:
            if detect:
                self._circular_detector.pop()

        if definition is not None and definition.is_shared:
            self._instances.put(key, instance)
        return instance

    def _build(
        self,
        key: str,
        id_or_class: Identifier,
        definition: Optional[Definition],
        arguments: Dict[str, Any],
    ) -> Any:
        if definition is not None and definition.strategy == ConstructionStrategy.PREBUILT_INSTANCE:
            return definition.instance

        if definition is not None and definition.strategy == ConstructionStrategy.FACTORY_FUNCTION:
            return self._invoke(key, definition.factory, definition.get_arguments(), arguments)

        if definition is not None:
            cls = definition.get_class()
        else:
            try:
                cls = locate_class(id_or_class)
            except Exception as e:
                raise NotFoundError(key, str(e)) from e

        logger.debug("Constructing %s for %s", describe(cls), key)
        definition_arguments = definition.get_arguments() if definition is not None else {}
        return self._invoke(key, cls, definition_arguments, arguments)

    def _invoke(
        self,
        target: str,
        function: Callable[..., Any],
        definition_arguments: Dict[str, Any],
        arguments: Dict[str, Any],
    ) -> Any:
        positional, keywords = self._resolve_call(target, function, definition_arguments, arguments)
        try:
            return function(*positional, **keywords)
        except DIException:
            raise
        except Exception as e:
            raise ConstructionError(target, e) from e

    def _resolve_call(
        self,
        target: str,
        function: Callable[..., Any],
        definition_arguments: Dict[str, Any],
        arguments: Dict[str, Any],
    ) -> Tuple[List[Any], Dict[str, Any]]:
        try:
            signature = inspect_callable(function)
            return self._resolver.resolve_arguments(signature, self, target, definition_arguments, arguments)
        except DIException:
            raise
        except Exception as e:
            raise ConstructionError(target, e) from e

    def get(self, identifier: Identifier) -> Any:
        """Resolve a bound identifier.

        Raises:
            NotFoundError: If the identifier is not bound.
        """
        if not self.has(identifier):
            raise NotFoundError(identifier_key(identifier))
        return self.make(identifier)

    def has(self, identifier: Identifier) -> bool:
        return self._builder.has(identifier)

    def set(self, identifier: Identifier, instance: Any) -> None:
        """Use a prebuilt object as the shared instance of a bound identifier.

        Raises:
            NotFoundError: If the identifier is not bound.
            TypeMismatchError: If the object is not an instance of the bound class.
        """
        self._builder.set(identifier, instance)
        self._instances.put(identifier_key(identifier), instance)

    def forget(self, identifier: Identifier) -> None:
        """Drop the cached shared instance so the next ``make`` builds a new one.

        The binding itself stays registered.
        """
        key = identifier_key(identifier)
        self._instances.remove(key)
        if self._builder.has(key):
            self._builder.get_definition(key).clear_resolved()

    def resolved(self, identifier: Identifier) -> bool:
        """Whether a shared instance is cached for the identifier."""
        return self._instances.contains(identifier_key(identifier))

    def call(self, id_or_object: Any, method: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Call a method with its parameters resolved like constructor parameters.

        Args:
            id_or_object: An object, or an identifier/class that is made first.
            method: Name of the method to call.
            arguments: Caller arguments by parameter name.

        Returns:
            Whatever the method returns.

        Raises:
            NotFoundError: If the object has no such method.
        """
        if isinstance(id_or_object, str) or inspect.isclass(id_or_object):
            instance = self.make(id_or_object)
        else:
            instance = id_or_object

        bound_method = getattr(instance, method, None)
        if bound_method is None or not callable(bound_method):
            raise NotFoundError(f"{describe(type(instance))}.{method}", "method does not exist")

        # Errors raised by the method itself propagate unwrapped.
        positional, keywords = self._resolve_call(
            f"{describe(type(instance))}.{method}", bound_method, {}, arguments or {}
        )
        return bound_method(*positional, **keywords)

    def run_on_tag(
        self,
        tag: str,
        method: str,
        arguments: Optional[Dict[str, Any]] = None,
        make: bool = False,
    ) -> List[Tuple[str, Any]]:
        """Call ``method`` on the instance of every identifier tagged ``tag``.

        Only already resolved shared instances are used unless ``make`` is set,
        in which case missing instances are made. Instances without the method
        are skipped. Identifiers are visited in binding order.

        Returns:
            ``(identifier, result)`` pairs for every call made.
        """
        results: List[Tuple[str, Any]] = []
        for key in self._builder.get_tagged_ids(tag):
            if self._instances.contains(key):
                instance = self._instances.get(key)
            elif make:
                instance = self.make(key)
            else:
                continue

            if not callable(getattr(instance, method, None)):
                continue
            results.append((key, self.call(instance, method, arguments)))
        return results

    def bind(self, identifier: Identifier, cls: Any = None) -> Definition:
        """Bind a class to an identifier. See ``ContainerBuilder.bind``."""
        return self._builder.bind(identifier, cls)

    def bind_factory(self, identifier: Identifier, factory: Callable[..., Any]) -> Definition:
        """Bind a factory to an identifier. See ``ContainerBuilder.bind_factory``."""
        return self._builder.bind_factory(identifier, factory)

    def bind_instance(self, identifier: Identifier, instance: Any) -> Definition:
        """Bind a prebuilt instance. See ``ContainerBuilder.bind_instance``."""
        return self._builder.bind_instance(identifier, instance)

    def get_definition(self, identifier: Identifier) -> Definition:
        return self._builder.get_definition(identifier)

    def get_ids(self) -> List[str]:
        return self._builder.get_ids()

    def get_tagged_ids(self, tag: str) -> List[str]:
        return self._builder.get_tagged_ids(tag)

    def clear(self) -> None:
        """Drop every cached instance and reset the resolution path.

        Bindings are kept. Useful for testing or resetting the container state.
        """
        self._instances.clear()
        self._circular_detector.clear()
