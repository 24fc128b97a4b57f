"""schemasynth core: type inspection, schema engine, configuration and logging."""

from schemasynth.core.exceptions import (
    ConfigurationError,
    MissingTypeError,
    SchemaGenerationError,
    SchemaNameCollisionError,
    SchemaSynthError,
)
from schemasynth.core.logging import configure_logging, get_logger
from schemasynth.core.types import TypeKind, type_kind, type_name

__all__ = [
    "ConfigurationError",
    "MissingTypeError",
    "SchemaGenerationError",
    "SchemaNameCollisionError",
    "SchemaSynthError",
    "TypeKind",
    "configure_logging",
    "get_logger",
    "type_kind",
    "type_name",
]
