# src/targeter/utils/utils_types.py


from types import UnionType
from typing import (
    Any,
    Literal,
    TypeVar,
    Union,
    cast,
    get_args,
    get_origin,
    get_type_hints,
)

from typing_extensions import NotRequired


T = TypeVar("T")


def cast_hint(typ: type[T], value: Any) -> T:  # noqa: ARG001
    """Explicit cast that documents intent but is purely for type hinting.

    A drop-in replacement for `typing.cast`, meant for places where the
    narrowing is intentional. Performs *no runtime checks*.
    """
    return cast("T", value)


def schema_from_typeddict(td: type[Any]) -> dict[str, Any]:
    """Extract field names and their annotated types from a TypedDict."""
    return get_type_hints(td, include_extras=True)


def literal_to_set(literal_type: Any) -> set[Any]:
    """Extract values from a Literal type as a set.

    Example:
        TargetType = Literal["node", "browser"]
        literal_to_set(TargetType)  # {"node", "browser"}

    Raises:
        TypeError: If the input is not a Literal type
    """
    origin = get_origin(literal_type)
    if origin is not Literal:
        msg = f"Expected Literal type, got {literal_type}"
        raise TypeError(msg)
    return set(get_args(literal_type))


def is_typeddict(expected_type: Any) -> bool:
    return (
        isinstance(expected_type, type)
        and hasattr(expected_type, "__annotations__")
        and hasattr(expected_type, "__total__")
    )


def _isinstance_generics(  # noqa: PLR0911
    value: Any,
    origin: Any,
    args: tuple[Any, ...],
) -> bool:
    if not isinstance(value, origin):
        return False

    if not args:
        return True

    # list[str]
    if origin is list and isinstance(value, list):
        subtype = args[0]
        items = cast_hint(list[Any], value)
        return all(safe_isinstance(v, subtype) for v in items)

    # dict[str, int]
    if origin is dict and isinstance(value, dict):
        key_t, val_t = args if len(args) == 2 else (Any, Any)  # noqa: PLR2004
        dct = cast_hint(dict[Any, Any], value)
        return all(
            safe_isinstance(k, key_t) and safe_isinstance(v, val_t)
            for k, v in dct.items()
        )

    # tuple[str, int] / tuple[str, ...]
    if origin is tuple and isinstance(value, tuple):
        tup = cast_hint(tuple[Any, ...], value)
        if len(args) == 2 and args[1] is Ellipsis:  # noqa: PLR2004
            return all(safe_isinstance(v, args[0]) for v in tup)
        if len(args) == len(tup):
            return all(safe_isinstance(v, t) for v, t in zip(tup, args, strict=True))
        return False

    return True


def safe_isinstance(value: Any, expected_type: Any) -> bool:  # noqa: PLR0911
    """Like isinstance(), but safe for TypedDicts and typing generics.

    Handles:
      - typing.Union, Optional, Any
      - typing.NotRequired
      - Literal values
      - TypedDict subclasses (treated as dicts)
      - list[...] / dict[...] / tuple[...] with inner types
    """
    if expected_type is Any:
        return True

    origin = get_origin(expected_type)
    args = get_args(expected_type)

    if origin is NotRequired:
        if args:
            return safe_isinstance(value, args[0])
        return True

    if origin is Literal:
        return value in args

    if origin in {Union, UnionType}:
        return any(safe_isinstance(value, t) for t in args)

    if is_typeddict(expected_type):
        return isinstance(value, dict)

    if origin:
        return _isinstance_generics(value, origin, args)

    try:
        return isinstance(value, expected_type)
    except TypeError:
        # Non-type or strange typing construct
        return False
