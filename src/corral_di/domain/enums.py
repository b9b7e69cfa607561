from enum import Enum


class ConstructionStrategy(str, Enum):
    """Defines how the instance of a binding is produced.

    Attributes:
        DEFAULT_CONSTRUCTOR: Instantiate the bound class through its constructor.
        FACTORY_FUNCTION: Call a factory whose parameters are resolved like a constructor.
        PREBUILT_INSTANCE: Return an object that was built outside the container.
    """

    DEFAULT_CONSTRUCTOR = "default_constructor"
    FACTORY_FUNCTION = "factory_function"
    PREBUILT_INSTANCE = "prebuilt_instance"

    def __str__(self) -> str:
        return self.value
