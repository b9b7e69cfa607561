import logging
from typing import Any, Dict, List

from corral_di.domain import IInstanceCache, NotFoundError

logger = logging.getLogger(__name__)


class InstanceCache(IInstanceCache):
    """Holds the shared instances built by a container.

    Keys are normalised identifiers. There is no eviction: entries live until
    they are removed explicitly or the cache is cleared.

    Attributes:
        _instances: Mapping of identifier key to constructed instance.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._instances: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        """Return the cached instance for a key.

        Args:
            key: The normalised identifier.

        Returns:
            The cached instance.

        Raises:
            NotFoundError: If nothing is cached under the key.
        """
        if key not in self._instances:
            raise NotFoundError(key, "no shared instance has been resolved")
        return self._instances[key]

    def put(self, key: str, instance: Any) -> None:
        """Store an instance, replacing any previous one for the key."""
        self._instances[key] = instance

    def contains(self, key: str) -> bool:
        return key in self._instances

    def remove(self, key: str) -> None:
        """Forget the instance for a key so the next resolution builds a new one.

        Removing a key that is not cached is a no-op.
        """
        if key in self._instances:
            del self._instances[key]
            logger.debug("Forgot shared instance for %s", key)

    def clear(self) -> None:
        """Forget every cached instance.

        Useful for testing or resetting container state.
        """
        self._instances.clear()

    def keys(self) -> List[str]:
        """Return the cached keys in the order they were first cached."""
        return list(self._instances)

    def __contains__(self, key: object) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)
