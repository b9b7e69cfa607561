from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from corral_di.domain.enums import ConstructionStrategy
from corral_di.domain.exceptions import DefinitionError, TargetNotFoundError
from corral_di.domain.references import locate_class


class Definition(BaseModel):
    """Describes how the container builds the object bound to one identifier.

    The identifier is fixed at creation; everything else is configured through
    the fluent setters, before or after registration.

    Attributes:
        id: The registry key.
        target: The concrete class or a dotted path to it. None for factories without a class.
        strategy: How the instance is produced.
        is_shared: Whether the resolved instance is cached and reused.
        tags: Tags in the order they were added, without duplicates.
        arguments: Explicit constructor arguments keyed by parameter name.
        factory: Callable used by the FACTORY_FUNCTION strategy.
        instance: Object returned by the PREBUILT_INSTANCE strategy.
        resolved_instance: Object handed to ``set``, used as the shared instance until forgotten.
        is_resolved: Whether ``resolved_instance`` holds an object.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(..., frozen=True, description="The identifier this definition is bound to.")
    target: Optional[Any] = Field(default=None, description="The class (or dotted path) to instantiate.")
    strategy: ConstructionStrategy = Field(
        default=ConstructionStrategy.DEFAULT_CONSTRUCTOR,
        description="How the instance is produced.",
    )
    is_shared: bool = Field(default=False, description="Whether the instance is a singleton.")
    tags: List[str] = Field(default_factory=list, description="Tags attached to the definition.")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Explicit constructor arguments.")
    factory: Optional[Callable[..., Any]] = Field(default=None, description="Factory for FACTORY_FUNCTION.")
    instance: Optional[Any] = Field(default=None, description="Object for PREBUILT_INSTANCE.")
    resolved_instance: Optional[Any] = Field(default=None, description="Object handed to set().")
    is_resolved: bool = Field(default=False, description="Whether resolved_instance is populated.")

    def set_shared(self, is_shared: bool = True) -> "Definition":
        """Mark the definition as shared (singleton) or not."""
        self.is_shared = is_shared
        return self

    def get_class(self) -> Optional[type]:
        """Locate the target class.

        Returns:
            The class, or None when the definition has no class (plain factories).

        Raises:
            TargetNotFoundError: If the target cannot be located.
        """
        if self.target is None:
            return None
        try:
            return locate_class(self.target)
        except Exception as e:
            raise TargetNotFoundError(self.id, self.target, str(e)) from e

    def use_instance(self, instance: Any) -> "Definition":
        """Switch the definition to return a prebuilt, shared instance."""
        self.strategy = ConstructionStrategy.PREBUILT_INSTANCE
        self.instance = instance
        self.is_shared = True
        return self

    def set_resolved(self, instance: Any) -> "Definition":
        """Record an object as the shared instance, keeping strategy and target."""
        self.resolved_instance = instance
        self.is_resolved = True
        self.is_shared = True
        return self

    def clear_resolved(self) -> "Definition":
        """Drop the object recorded by ``set_resolved``."""
        self.resolved_instance = None
        self.is_resolved = False
        return self

    def add_tag(self, tag: str) -> "Definition":
        """Attach a tag.

        Raises:
            DefinitionError: If the tag is already attached.
        """
        if self.has_tag(tag):
            raise DefinitionError(f'Tag "{tag}" already added to {self.id}')
        self.tags.append(tag)
        return self

    def add_tags(self, tags: List[str]) -> "Definition":
        for tag in tags:
            self.add_tag(tag)
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def get_tags(self) -> List[str]:
        return list(self.tags)

    def set_argument(self, name: str, value: Any) -> "Definition":
        """Set an explicit constructor argument.

        Raises:
            DefinitionError: If the argument is already set.
        """
        if self.has_argument(name):
            raise DefinitionError(f"Argument {name} already set for {self.id}")
        self.arguments[name] = value
        return self

    def set_arguments(self, arguments: Dict[str, Any]) -> "Definition":
        for name, value in arguments.items():
            self.set_argument(str(name), value)
        return self

    def has_argument(self, name: str) -> bool:
        return name in self.arguments

    def get_argument(self, name: str) -> Any:
        """Return an explicit argument.

        Raises:
            DefinitionError: If the argument was never set.
        """
        if not self.has_argument(name):
            raise DefinitionError(f"Argument {name} not set for {self.id}")
        return self.arguments[name]

    def get_arguments(self) -> Dict[str, Any]:
        return dict(self.arguments)

    def clone(self) -> "Definition":
        """Copy the definition with its own tag list and argument map."""
        return self.model_copy(update={"tags": list(self.tags), "arguments": dict(self.arguments)})


class ParameterInfo(BaseModel):
    """One parameter of an introspected constructor or callable.

    Attributes:
        name: Parameter name.
        annotation: Evaluated type hint, or None when the parameter is untyped.
        has_default: Whether the parameter declares a default value.
        default: The default value, when there is one.
        positional_only: Whether the value must be passed positionally.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    annotation: Optional[Any] = Field(default=None, description="The declared type, if any.")
    has_default: bool = Field(default=False, description="Whether a default value exists.")
    default: Optional[Any] = Field(default=None, description="The default value.")
    positional_only: bool = Field(default=False, description="Whether the parameter is positional-only.")


class ContainerSettings(BaseModel):
    """Behaviour switches for the builder and the container.

    Attributes:
        validate_targets_on_bind: Locate bound classes at bind time instead of at resolution time.
        detect_circular_dependencies: Fail fast on dependency cycles instead of recursing.
    """

    model_config = ConfigDict(frozen=True)

    validate_targets_on_bind: bool = Field(
        default=True,
        description="Check that bound classes exist when binding.",
    )
    detect_circular_dependencies: bool = Field(
        default=True,
        description="Track the resolution path and raise on cycles.",
    )


class CallableSignature(BaseModel):
    """Introspected parameter list of a constructor or factory.

    Attributes:
        parameters: Injectable parameters in declaration order.
        accepts_var_keyword: Whether the callable takes ``**kwargs``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    parameters: List[ParameterInfo] = Field(default_factory=list, description="Injectable parameters.")
    accepts_var_keyword: bool = Field(default=False, description="Whether **kwargs is accepted.")
