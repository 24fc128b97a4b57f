"""Type inspection utilities.

Runtime type hints are sorted into the handful of kinds the schema engine
cares about: indirections it looks through (``Optional``, mappings, iterators,
callables), collections it turns into arrays, structs it turns into objects,
and everything else (primitives).

Examples
--------
>>> type_kind(list[int])
<TypeKind.ARRAY: 'array'>
>>> element_type(dict[str, float])
<class 'float'>
"""

import asyncio
import collections
import collections.abc
import dataclasses
import queue
import typing
from enum import Enum
from types import UnionType
from typing import Annotated, Any, ForwardRef, Literal, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel


class TypeKind(Enum):
    """Coarse classification of a runtime type hint."""

    POINTER = "pointer"
    MAP = "map"
    CHANNEL = "channel"
    FUNCTION = "function"
    ARRAY = "array"
    STRUCT = "struct"
    INTERFACE = "interface"
    PRIMITIVE = "primitive"


# Kinds the walker follows to an element type without producing a schema of their own.
INDIRECT_KINDS = frozenset({TypeKind.POINTER, TypeKind.MAP, TypeKind.CHANNEL, TypeKind.FUNCTION})

_MAP_ORIGINS = frozenset({
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
})

_ARRAY_ORIGINS = frozenset({
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
})

_CHANNEL_ORIGINS = frozenset({
    collections.abc.Iterator,
    collections.abc.AsyncIterator,
    collections.abc.AsyncIterable,
    collections.abc.Generator,
    collections.abc.AsyncGenerator,
    queue.Queue,
    asyncio.Queue,
})

_FUNCTION_ORIGINS = frozenset({
    collections.abc.Callable,
    collections.abc.Awaitable,
    collections.abc.Coroutine,
})

_INTERFACE_TYPES = (Any, object, type(None))


def strip_annotated(type_hint: Any) -> Any:
    """Return the base type of ``Annotated[T, ...]`` (or ``type_hint`` itself)."""
    while get_origin(type_hint) is Annotated:
        type_hint = get_args(type_hint)[0]
    return type_hint


def get_annotated_metadata(type_hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Extract base type and metadata from an Annotated type.

    Examples
    --------
    >>> base, metadata = get_annotated_metadata(Annotated[int, "meta"])
    >>> base, metadata
    (<class 'int'>, ('meta',))
    """
    if get_origin(type_hint) is not Annotated:
        return type_hint, ()
    args = get_args(type_hint)
    return args[0], tuple(args[1:])


def is_literal_type(type_hint: Any) -> bool:
    """Check if type hint is a Literal type."""
    return get_origin(type_hint) is Literal


def is_union_type(type_hint: Any) -> bool:
    """Check if type hint is a Union type (including ``X | Y`` syntax).

    Examples
    --------
    >>> is_union_type(str | None)
    True
    >>> is_union_type(str)
    False
    """
    return get_origin(type_hint) is Union or isinstance(type_hint, UnionType)


def non_none_args(type_hint: Any) -> list[Any]:
    """Members of a union other than ``None``."""
    return [arg for arg in get_args(type_hint) if arg is not type(None)]


def is_type_alias(type_hint: Any) -> bool:
    """Check for a PEP 695 ``type X = ...`` alias."""
    return isinstance(type_hint, typing.TypeAliasType)


def is_struct(type_hint: Any) -> bool:
    """Check whether ``type_hint`` is a dataclass or pydantic model (or a generic alias of one).

    Examples
    --------
    >>> @dataclasses.dataclass
    ... class Point:
    ...     x: int
    >>> is_struct(Point), is_struct(int)
    (True, False)
    """
    cls = get_origin(type_hint) or type_hint
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def type_kind(type_hint: Any) -> TypeKind:
    """Classify a type hint into a TypeKind."""
    type_hint = strip_annotated(type_hint)

    if type_hint is None or any(type_hint is t for t in _INTERFACE_TYPES):
        return TypeKind.INTERFACE
    if isinstance(type_hint, (str, ForwardRef, TypeVar)):
        return TypeKind.INTERFACE

    if is_union_type(type_hint):
        return TypeKind.POINTER if len(non_none_args(type_hint)) == 1 else TypeKind.INTERFACE
    if is_type_alias(type_hint):
        return TypeKind.POINTER

    origin = get_origin(type_hint) or type_hint
    if origin is type and type_hint is not type:
        return TypeKind.POINTER
    if origin in _MAP_ORIGINS:
        return TypeKind.MAP
    if origin in _CHANNEL_ORIGINS:
        return TypeKind.CHANNEL
    if origin in _FUNCTION_ORIGINS:
        return TypeKind.FUNCTION
    if origin in _ARRAY_ORIGINS:
        return TypeKind.ARRAY
    if is_struct(type_hint):
        return TypeKind.STRUCT
    return TypeKind.PRIMITIVE


def element_type(type_hint: Any) -> Any:
    """Return the type an indirection or collection refers to.

    Mappings yield their value type (the key type is dropped), callables their
    return type, iterators and queues their item type. Unparametrised
    containers yield ``Any``.

    Examples
    --------
    >>> element_type(list[str])
    <class 'str'>
    >>> element_type(int | None)
    <class 'int'>
    """
    type_hint = strip_annotated(type_hint)

    if is_union_type(type_hint):
        members = non_none_args(type_hint)
        return members[0] if len(members) == 1 else Any
    if is_type_alias(type_hint):
        return type_hint.__value__

    origin = get_origin(type_hint)
    args = get_args(type_hint)
    if not args:
        return Any

    if origin in _MAP_ORIGINS:
        return args[1] if len(args) >= 2 else Any
    if origin is collections.abc.Callable:
        return args[-1]
    if origin is collections.abc.Coroutine:
        return args[2] if len(args) >= 3 else Any
    if origin is tuple:
        return args[0] if args[0] is not Ellipsis else Any
    return args[0]


def typevar_map(type_hint: Any) -> dict[Any, Any]:
    """Map the TypeVars of a parametrised generic alias to its arguments.

    Examples
    --------
    >>> T = TypeVar("T")
    >>> class Box(typing.Generic[T]):
    ...     pass
    >>> typevar_map(Box[int])
    {~T: <class 'int'>}
    """
    origin = get_origin(type_hint)
    if origin is None:
        return {}
    params = getattr(origin, "__parameters__", ())
    return dict(zip(params, get_args(type_hint), strict=False))


def substitute_typevars(type_hint: Any, mapping: dict[Any, Any]) -> Any:
    """Replace TypeVars in ``type_hint`` using ``mapping``."""
    if not mapping:
        return type_hint
    if isinstance(type_hint, TypeVar):
        return mapping.get(type_hint, type_hint)
    params = getattr(type_hint, "__parameters__", ())
    if params and get_origin(type_hint) is not None:
        return type_hint[tuple(mapping.get(p, p) for p in params)]
    return type_hint


def _origin_name(origin: Any) -> str:
    if origin is UnionType:
        return "Union"
    name = getattr(origin, "__name__", None) or getattr(origin, "_name", None)
    return name if isinstance(name, str) else str(origin).replace("typing.", "")


def _arg_name(arg: Any) -> str:
    if isinstance(arg, Enum):
        return f"{type(arg).__name__}.{arg.name}"
    if arg is None or isinstance(arg, (str, bytes, int, float)):
        return repr(arg)
    if isinstance(arg, (list, tuple)):
        return "[" + ",".join(_arg_name(item) for item in arg) + "]"
    return type_name(arg)


def type_name(type_hint: Any) -> str:
    """Short, human-readable name used as the schema key.

    Every parametrised alias keeps its arguments, recursively, so distinct
    instantiations never share a name.

    Examples
    --------
    >>> type_name(int)
    'int'
    >>> T = TypeVar("T")
    >>> @dataclasses.dataclass
    ... class Page(typing.Generic[T]):
    ...     items: list[T]
    >>> type_name(Page[int])
    'Page[int]'
    >>> type_name(Page[list[int]])
    'Page[list[int]]'
    >>> type_name(Literal["a", "b"])
    "Literal['a','b']"
    """
    type_hint = strip_annotated(type_hint)
    origin = get_origin(type_hint)
    args = get_args(type_hint)
    if origin is not None and args:
        return f"{_origin_name(origin)}[{','.join(_arg_name(arg) for arg in args)}]"
    name = getattr(type_hint, "__name__", None)
    if isinstance(name, str):
        return name
    return str(type_hint).replace("typing.", "")


def qualified_name(type_hint: Any) -> str:
    """Module-qualified name, used in collision diagnostics."""
    type_hint = strip_annotated(type_hint)
    cls = get_origin(type_hint) or type_hint
    module = getattr(cls, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{type_name(type_hint)}"
    return type_name(type_hint)


__all__ = [
    "INDIRECT_KINDS",
    "TypeKind",
    "element_type",
    "get_annotated_metadata",
    "is_literal_type",
    "is_struct",
    "is_type_alias",
    "is_union_type",
    "non_none_args",
    "qualified_name",
    "strip_annotated",
    "substitute_typevars",
    "type_kind",
    "type_name",
    "typevar_map",
]
