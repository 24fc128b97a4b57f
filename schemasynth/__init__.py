"""schemasynth - OpenAPI schema synthesis from Python type hints.

Resolve any runtime type to a reusable component schema, enrich it from field
tags and describe operation responses with it::

    from schemasynth import OpenAPIDocument, Response, option_add_response

    doc = OpenAPIDocument(title="Pets", version="1.0.0")
    doc.add_route("get", "/pets", option_add_response(200, "OK", Response(type=list[Pet])))
    print(doc.to_yaml())
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("schemasynth")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from schemasynth.core.config import SynthConfig, load_config
from schemasynth.core.exceptions import (
    ConfigurationError,
    MissingTypeError,
    SchemaGenerationError,
    SchemaNameCollisionError,
    SchemaSynthError,
)
from schemasynth.core.schema import (
    FieldTags,
    Schema,
    SchemaRef,
    SchemaRegistry,
    SchemaTag,
    TypeWalker,
    tags,
    transparent_wrapper,
)
from schemasynth.openapi import (
    HTTPError,
    OpenAPIDocument,
    Response,
    ResponseDescriptor,
    build_response,
    option_add_error,
    option_add_response,
)

__all__ = [
    "__version__",
    # Configuration
    "SynthConfig",
    "load_config",
    # Exceptions
    "ConfigurationError",
    "MissingTypeError",
    "SchemaGenerationError",
    "SchemaNameCollisionError",
    "SchemaSynthError",
    # Schema engine
    "FieldTags",
    "Schema",
    "SchemaRef",
    "SchemaRegistry",
    "SchemaTag",
    "TypeWalker",
    "tags",
    "transparent_wrapper",
    # OpenAPI
    "HTTPError",
    "OpenAPIDocument",
    "Response",
    "ResponseDescriptor",
    "build_response",
    "option_add_error",
    "option_add_response",
]
