"""Schema generator - converts Python types to baseline schemas."""

import datetime
import decimal
import uuid
from enum import Enum
from typing import Any, get_args

from schemasynth.core.logging import get_logger
from schemasynth.core.schema.models import Schema, SchemaRef
from schemasynth.core.schema.tags import SKIP, FieldTags, struct_fields
from schemasynth.core.types import (
    TypeKind,
    element_type,
    get_annotated_metadata,
    is_literal_type,
    is_struct,
    is_type_alias,
    is_union_type,
    non_none_args,
    strip_annotated,
    type_kind,
    type_name,
)

logger = get_logger(__name__)


class SchemaGenerator:
    """Generate structural schemas from Python types.

    This is the generic type-to-schema synthesizer: it knows nothing about
    registry names, depth budgets or transparent wrappers. Nested structs are
    inlined; a struct that (directly or indirectly) contains itself is cut to a
    bare ``object`` at the point of recursion.

    Supports:
    - Basic types (str, int, float, bool, bytes) and common formatted strings
    - Literal types and Enum subclasses → enum
    - Optional[T] → schema of T
    - Other unions → anyOf
    - Sequences → array, mappings → object with additionalProperties
    - Dataclasses and pydantic models → object with properties
    - Annotated types with pydantic Field / annotated-types constraints

    Examples
    --------
    >>> SchemaGenerator.from_type(list[int]).to_dict()
    {'type': 'array', 'items': {'type': 'integer'}}
    """

    # Basic type mapping from Python to schema (type, format)
    BASIC_TYPE_MAP: dict[Any, tuple[str, str | None]] = {
        str: ("string", None),
        int: ("integer", None),
        float: ("number", None),
        bool: ("boolean", None),
        bytes: ("string", "byte"),
        decimal.Decimal: ("number", None),
        datetime.datetime: ("string", "date-time"),
        datetime.date: ("string", "date"),
        datetime.time: ("string", "time"),
        uuid.UUID: ("string", "uuid"),
    }

    @staticmethod
    def from_type(type_hint: Any) -> Schema:
        """Generate a fresh schema for ``type_hint``.

        Args
        ----
            type_hint: Any runtime type hint

        Returns
        -------
            Schema: A new schema object (never shared with previous calls)

        Raises
        ------
        NameError
            If a struct's string annotations cannot be resolved
        """
        return SchemaGenerator._type_to_schema(type_hint, ())

    @staticmethod
    def _type_to_schema(type_hint: Any, stack: tuple[Any, ...]) -> Schema:
        base, metadata = get_annotated_metadata(type_hint)
        if metadata:
            schema = SchemaGenerator._type_to_schema(base, stack)
            SchemaGenerator._apply_constraints(schema, metadata)
            return schema

        if type_hint is Any or type_hint is object:
            return Schema()

        if type_hint is None or type_hint is type(None):
            return Schema()

        if is_literal_type(type_hint):
            values = list(get_args(type_hint))
            first = values[0] if values else ""
            json_type, _ = SchemaGenerator.BASIC_TYPE_MAP.get(type(first), ("string", None))
            return Schema(type=json_type, enum=values)

        if isinstance(type_hint, type) and issubclass(type_hint, Enum):
            values = [member.value for member in type_hint]
            first = values[0] if values else ""
            json_type, _ = SchemaGenerator.BASIC_TYPE_MAP.get(type(first), ("string", None))
            return Schema(type=json_type, enum=values)

        if is_union_type(type_hint):
            members = non_none_args(type_hint)
            if len(members) == 1:
                return SchemaGenerator._type_to_schema(members[0], stack)
            return Schema(
                any_of=[
                    SchemaRef.inline(SchemaGenerator._type_to_schema(member, stack))
                    for member in members
                ]
            )

        if is_type_alias(type_hint):
            return SchemaGenerator._type_to_schema(type_hint.__value__, stack)

        if is_struct(type_hint):
            return SchemaGenerator._struct_to_schema(type_hint, stack)

        kind = type_kind(type_hint)
        if kind is TypeKind.ARRAY:
            items = SchemaGenerator._type_to_schema(element_type(type_hint), stack)
            return Schema.array_of(SchemaRef.inline(items))

        if kind is TypeKind.MAP:
            value_type = element_type(type_hint)
            schema = Schema.empty_object()
            if value_type is not Any:
                schema.additional_properties = SchemaRef.inline(
                    SchemaGenerator._type_to_schema(value_type, stack)
                )
            return schema

        if kind in (TypeKind.CHANNEL, TypeKind.FUNCTION, TypeKind.POINTER):
            return SchemaGenerator._type_to_schema(element_type(type_hint), stack)

        if kind is TypeKind.INTERFACE:
            return Schema()

        if type_hint in SchemaGenerator.BASIC_TYPE_MAP:
            json_type, json_format = SchemaGenerator.BASIC_TYPE_MAP[type_hint]
            return Schema(type=json_type, format=json_format)

        for python_type, (json_type, json_format) in SchemaGenerator.BASIC_TYPE_MAP.items():
            if isinstance(type_hint, type) and issubclass(type_hint, python_type):
                return Schema(type=json_type, format=json_format)

        # Default to string for unknown types
        return Schema(type="string")

    @staticmethod
    def _struct_to_schema(type_hint: Any, stack: tuple[Any, ...]) -> Schema:
        schema = Schema.empty_object()
        if any(seen == type_hint for seen in stack):
            logger.debug("Cutting recursive reference to {name}", name=type_name(type_hint))
            return schema

        stack = (*stack, type_hint)
        for field in struct_fields(type_hint):
            if field.embedded:
                embedded = SchemaGenerator._type_to_schema(strip_annotated(field.annotation), stack)
                schema.properties.update(embedded.properties)
                continue

            name = field.serialized_name
            if name == SKIP:
                continue
            prop = SchemaGenerator._type_to_schema(field.annotation, stack)
            SchemaGenerator._apply_constraints(prop, field.constraints)
            schema.properties[name] = SchemaRef.inline(prop)
        return schema

    @staticmethod
    def _apply_constraints(schema: Schema, metadata: tuple[Any, ...]) -> None:
        """Copy pydantic Field / annotated-types constraints onto ``schema``."""
        for constraint in metadata:
            if isinstance(constraint, FieldTags):
                continue
            items = getattr(constraint, "metadata", None) or [constraint]
            for meta_item in items:
                # Ge, Le, MinLen, MaxLen objects
                if getattr(meta_item, "ge", None) is not None:
                    schema.minimum = meta_item.ge
                if getattr(meta_item, "le", None) is not None:
                    schema.maximum = meta_item.le
                if getattr(meta_item, "min_length", None) is not None:
                    schema.min_length = meta_item.min_length
                if getattr(meta_item, "max_length", None) is not None:
                    schema.max_length = meta_item.max_length

            description = getattr(constraint, "description", None)
            if isinstance(description, str) and description:
                schema.description = description
