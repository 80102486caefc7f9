"""Resolve the type arguments an endpoint subclass passed to its generic base."""

from typing import Any, Dict, Tuple, TypeVar, get_args, get_origin


def resolve_type_arguments(cls: type, generic_base: type) -> Tuple[Any, ...]:
    """Return the arguments ``cls`` ultimately supplies to ``generic_base``.

    Follows intermediate generic subclasses, substituting their type variables,
    so ``class Get(Base[User])`` with ``class Base(ReprRequestEndpoint[T])``
    resolves to ``(User,)``. Unresolved positions stay TypeVars.
    """
    for base in cls.__dict__.get("__orig_bases__", ()):
        origin = get_origin(base) or base
        if origin is generic_base:
            return get_args(base)
        if isinstance(origin, type) and issubclass(origin, generic_base):
            inherited = resolve_type_arguments(origin, generic_base)
            substitutions = dict(zip(getattr(origin, "__parameters__", ()), get_args(base)))
            return tuple(_substitute(arg, substitutions) for arg in inherited)

    for base in cls.__bases__:
        if base is not generic_base and isinstance(base, type) and issubclass(base, generic_base):
            return resolve_type_arguments(base, generic_base)
    return ()


def resolved_argument(cls: type, generic_base: type, index: int) -> Any:
    """Return one resolved type argument, or None if it is missing or a TypeVar."""
    arguments = resolve_type_arguments(cls, generic_base)
    if index >= len(arguments) or isinstance(arguments[index], TypeVar):
        return None
    return arguments[index]


def _substitute(argument: Any, substitutions: Dict[Any, Any]) -> Any:
    if isinstance(argument, TypeVar):
        return substitutions.get(argument, argument)
    parameters = getattr(argument, "__parameters__", ())
    if parameters:
        return argument[tuple(substitutions.get(p, p) for p in parameters)]
    return argument
