"""Name-keyed store of derived component schemas."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from threading import Lock
from typing import Any, get_origin

from schemasynth.core.exceptions import SchemaGenerationError, SchemaNameCollisionError
from schemasynth.core.logging import get_logger
from schemasynth.core.schema.annotator import annotate
from schemasynth.core.schema.generator import SchemaGenerator
from schemasynth.core.schema.models import DEFAULT_SCHEMA_NAME, UNKNOWN_INTERFACE, Schema
from schemasynth.core.types import qualified_name, strip_annotated

logger = get_logger(__name__)

DESCRIPTION_HOOK = "openapi_description"


@dataclass
class _UnknownInterface:
    """Stand-in type behind the ``unknown-interface`` placeholder schema."""


class SchemaRegistry:
    """Get-or-create store of component schemas.

    Lifecycle:
    1. Empty at creation, one registry per API description build
    2. Populated lazily, the first time each type name is resolved
    3. Never evicted; later lookups return the stored schema unchanged

    Every name is bound to the type it was first created from. Asking for the
    same name with a different type raises SchemaNameCollisionError instead
    of silently aliasing two types.
    """

    RESERVED_NAMES = frozenset({DEFAULT_SCHEMA_NAME, UNKNOWN_INTERFACE})

    def __init__(self, generator: type[SchemaGenerator] = SchemaGenerator) -> None:
        self._generator = generator
        self._schemas: dict[str, Schema] = {}
        self._sources: dict[str, Any] = {}
        self._lock = Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def get(self, name: str) -> Schema | None:
        return self._schemas.get(name)

    def names(self) -> list[str]:
        return list(self._schemas)

    def components(self) -> dict[str, Schema]:
        """Snapshot of the ``name -> schema`` mapping."""
        return dict(self._schemas)

    def to_dict(self) -> dict[str, Any]:
        """``components.schemas`` as OpenAPI JSON."""
        return {name: schema.to_dict() for name, schema in self._schemas.items()}

    def get_or_create(self, name: str, type_hint: Any) -> Schema:
        """Return the schema stored under ``name``, deriving it from ``type_hint`` on a miss.

        Args
        ----
            name: Schema name (registry key)
            type_hint: Type the schema describes

        Returns
        -------
            Schema: The stored schema; the same object on every call for ``name``

        Raises
        ------
        SchemaNameCollisionError
            If ``name`` is reserved or already bound to a different type
        SchemaGenerationError
            If the baseline schema cannot be generated
        """
        with self._lock:
            schema = self._schemas.get(name)
            if schema is not None:
                self._check_source(name, type_hint)
                return schema
            if name in self.RESERVED_NAMES:
                raise SchemaNameCollisionError(
                    name, "a reserved placeholder", qualified_name(type_hint)
                )
            return self._create(name, type_hint)

    def unknown_interface(self) -> Schema:
        """The empty-object placeholder used when no concrete type is available."""
        with self._lock:
            schema = self._schemas.get(UNKNOWN_INTERFACE)
            if schema is None:
                schema = self._create(UNKNOWN_INTERFACE, _UnknownInterface)
            return schema

    def _check_source(self, name: str, type_hint: Any) -> None:
        existing = self._sources[name]
        if strip_annotated(existing) != strip_annotated(type_hint):
            raise SchemaNameCollisionError(
                name, qualified_name(existing), qualified_name(type_hint)
            )

    def _create(self, name: str, type_hint: Any) -> Schema:
        try:
            schema = self._generator.from_type(type_hint)
        except (NameError, TypeError) as e:
            logger.error("Error generating schema {name}: {error}", name=name, error=e)
            raise SchemaGenerationError(name, str(e)) from e

        schema.description = f"{name} schema"
        description = _custom_description(type_hint)
        if description is not None:
            schema.description = description

        annotate(type_hint, schema)

        self._schemas[name] = schema
        self._sources[name] = type_hint
        logger.debug("Registered schema {name}", name=name)
        return schema


def _custom_description(type_hint: Any) -> str | None:
    """Description returned by the type's ``openapi_description()`` hook, if it has one.

    The hook must be a classmethod or staticmethod: types are described
    without ever being instantiated.
    """
    type_hint = strip_annotated(type_hint)
    cls = get_origin(type_hint) or type_hint
    if not isinstance(cls, type):
        return None
    hook = inspect.getattr_static(cls, DESCRIPTION_HOOK, None)
    if not isinstance(hook, (classmethod, staticmethod)):
        return None
    description = getattr(cls, DESCRIPTION_HOOK)()
    return description if isinstance(description, str) else None
