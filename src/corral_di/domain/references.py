"""Identifier normalisation and class lookup helpers."""

import importlib
import inspect
from typing import Any, Type, Union

Identifier = Union[str, Type[Any]]


def identifier_key(identifier: Identifier) -> str:
    """Normalise an identifier to the string key used by the registry and the cache.

    Classes map to ``"<module>.<qualname>"``; strings are used verbatim.

    Args:
        identifier: A string key or a class.

    Returns:
        The registry key.

    Raises:
        TypeError: If the identifier is neither a string nor a class.
    """
    if isinstance(identifier, str):
        return identifier
    if inspect.isclass(identifier):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    raise TypeError(f"Identifier must be a string or a class, got {identifier!r}")


def locate_class(reference: Any) -> type:
    """Turn a class reference into a class object.

    Accepts a class, ``"package.module.ClassName"`` or ``"package.module:Outer.Inner"``.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute path does not exist in the module.
        TypeError: If the reference is malformed or does not name a class.
    """
    if inspect.isclass(reference):
        return reference
    if not isinstance(reference, str) or not reference:
        raise TypeError(f"{reference!r} is not a class or a dotted path")

    if ":" in reference:
        module_name, _, attribute_path = reference.partition(":")
    else:
        module_name, _, attribute_path = reference.rpartition(".")
    if not module_name or not attribute_path:
        raise TypeError(f"{reference!r} is not a dotted path")

    located: Any = importlib.import_module(module_name)
    for attribute in attribute_path.split("."):
        located = getattr(located, attribute)

    if not inspect.isclass(located):
        raise TypeError(f"{reference!r} does not name a class")
    return located


def describe(reference: Any) -> str:
    """Human readable name of an identifier or class reference, for messages."""
    if inspect.isclass(reference):
        return identifier_key(reference)
    return str(reference)
