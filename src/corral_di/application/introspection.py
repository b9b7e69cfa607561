"""Constructor and factory introspection."""

import inspect
import types
import typing
from typing import Any, Callable, Dict, List, Union, get_type_hints

from corral_di.domain import CallableSignature, ConstructionError, ParameterInfo, describe

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _evaluate_type_hints(function: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return get_type_hints(function)
    except (NameError, TypeError, AttributeError):
        # Forward references that cannot be evaluated are treated as untyped.
        annotations = getattr(function, "__annotations__", {}) or {}
        return {name: value for name, value in annotations.items() if not isinstance(value, str)}


def unwrap_optional(annotation: Any) -> Any:
    """Reduce ``Optional[X]`` (or ``X | None``) to ``X``; leave anything else untouched."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [member for member in typing.get_args(annotation) if member is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def inspect_callable(target: Callable[..., Any]) -> CallableSignature:
    """Introspect the injectable parameters of a class constructor or a callable.

    For classes, ``__init__`` is inspected and its first parameter (the instance)
    is skipped. ``*args`` and ``**kwargs`` are never injected.

    Args:
        target: A class, function or bound method.

    Returns:
        The ordered parameters and whether ``**kwargs`` is accepted.

    Raises:
        ConstructionError: If the signature cannot be read.

    Example:
        >>> class UserService:
        ...     def __init__(self, repo: UserRepository, page_size: int = 20):
        ...         ...
        >>> [p.name for p in inspect_callable(UserService).parameters]
        ['repo', 'page_size']
    """
    is_class = inspect.isclass(target)
    function = target.__init__ if is_class else target
    if function is object.__init__:
        return CallableSignature()

    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError) as e:
        raise ConstructionError(describe(target), e) from e

    type_hints = _evaluate_type_hints(function)

    declared = list(signature.parameters.values())
    if is_class and declared:
        declared = declared[1:]

    parameters: List[ParameterInfo] = []
    accepts_var_keyword = False
    for param in declared:
        if param.kind in _VARIADIC:
            if param.kind == inspect.Parameter.VAR_KEYWORD:
                accepts_var_keyword = True
            continue

        annotation = type_hints.get(param.name)
        has_default = param.default is not inspect.Parameter.empty
        parameters.append(
            ParameterInfo(
                name=param.name,
                annotation=unwrap_optional(annotation) if annotation is not None else None,
                has_default=has_default,
                default=param.default if has_default else None,
                positional_only=param.kind == inspect.Parameter.POSITIONAL_ONLY,
            )
        )

    return CallableSignature(parameters=parameters, accepts_var_keyword=accepts_var_keyword)
