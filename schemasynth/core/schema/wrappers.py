"""Transparent payload wrappers.

A transparent wrapper is a struct whose own identity never reaches the
documentation: resolving it resolves the type of its payload field instead.
Wrappers opt in explicitly, so the payload can sit anywhere in the class::

    @transparent_wrapper("data")
    @dataclass
    class DataOrTemplate(Generic[T]):
        template: str
        data: T

``DataOrTemplate[User]`` then documents exactly like ``User``.
"""

from collections.abc import Callable
from typing import Any, TypeVar, get_origin

from schemasynth.core.exceptions import ConfigurationError
from schemasynth.core.schema.tags import struct_fields
from schemasynth.core.types import is_struct, strip_annotated, type_name

PAYLOAD_ATTR = "__schema_payload__"

C = TypeVar("C", bound=type)


def transparent_wrapper(payload_field: str) -> Callable[[C], C]:
    """Mark a struct class as a transparent wrapper around ``payload_field``."""

    def decorator(cls: C) -> C:
        setattr(cls, PAYLOAD_ATTR, payload_field)
        return cls

    return decorator


def payload_field_name(type_hint: Any) -> str | None:
    """Name of the payload field if ``type_hint`` is a transparent wrapper."""
    type_hint = strip_annotated(type_hint)
    if not is_struct(type_hint):
        return None
    cls = get_origin(type_hint) or type_hint
    name = getattr(cls, PAYLOAD_ATTR, None)
    return name if isinstance(name, str) else None


def is_transparent_wrapper(type_hint: Any) -> bool:
    return payload_field_name(type_hint) is not None


def payload_type(type_hint: Any) -> Any:
    """Type of the wrapped payload, TypeVars substituted.

    Raises
    ------
    ConfigurationError
        If the marked payload field does not exist on the wrapper
    """
    name = payload_field_name(type_hint)
    for field in struct_fields(strip_annotated(type_hint)):
        if field.name == name:
            return field.annotation
    raise ConfigurationError(type_name(type_hint), f"payload field '{name}' is not declared")
