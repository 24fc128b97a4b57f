"""Schema synthesis from Python type hints.

The walker resolves a type to a SchemaTag, registering leaf types in a
SchemaRegistry; the registry generates a baseline schema for each new type
and the annotator enriches it from field tags.
"""

from schemasynth.core.schema.annotator import annotate
from schemasynth.core.schema.generator import SchemaGenerator
from schemasynth.core.schema.models import (
    COMPONENTS_PREFIX,
    DEFAULT_SCHEMA_NAME,
    UNKNOWN_INTERFACE,
    XML,
    PropertyKind,
    Schema,
    SchemaRef,
    SchemaTag,
    component_ref,
)
from schemasynth.core.schema.registry import SchemaRegistry
from schemasynth.core.schema.tags import FieldTags, StructField, struct_fields, tags
from schemasynth.core.schema.walker import DEFAULT_MAX_DEPTH, TypeWalker
from schemasynth.core.schema.wrappers import is_transparent_wrapper, transparent_wrapper

__all__ = [
    "COMPONENTS_PREFIX",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_SCHEMA_NAME",
    "UNKNOWN_INTERFACE",
    "XML",
    "FieldTags",
    "PropertyKind",
    "Schema",
    "SchemaGenerator",
    "SchemaRef",
    "SchemaRegistry",
    "SchemaTag",
    "StructField",
    "TypeWalker",
    "annotate",
    "component_ref",
    "is_transparent_wrapper",
    "struct_fields",
    "tags",
    "transparent_wrapper",
]
