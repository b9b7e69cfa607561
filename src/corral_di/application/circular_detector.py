"""Application layer - Circular dependency detection."""

import threading
from typing import List

from corral_di.domain import CircularDependencyError


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Uses thread-local storage to track the identifiers currently being resolved.
    When a key appears twice on the path, the cycle is reported.

    Attributes:
        _local: Thread-local storage for resolution stacks.
    """

    def __init__(self) -> None:
        """Initialize the circular dependency detector with thread-local storage."""
        self._local = threading.local()

    def _get_stack(self) -> List[str]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, key: str) -> None:
        """Add an identifier key to the resolution path.

        Args:
            key: The normalised identifier being resolved.

        Raises:
            CircularDependencyError: If the key is already on the path.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push("app.ServiceA")
            >>> detector.push("app.ServiceB")
            >>> detector.push("app.ServiceA")  # Raises CircularDependencyError
        """
        stack = self._get_stack()

        if key in stack:
            cycle = stack[stack.index(key) :] + [key]
            raise CircularDependencyError(cycle)

        stack.append(key)

    def pop(self) -> None:
        """Remove the most recent key once its resolution finished."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    def path(self) -> List[str]:
        """Return a copy of the current thread's resolution path."""
        return list(self._get_stack())

    def clear(self) -> None:
        """Clear the current thread's resolution path."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
