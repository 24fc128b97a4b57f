"""OpenAPI document assembly: operations, response descriptors and route options."""

from schemasynth.openapi.document import (
    Info,
    MediaType,
    OpenAPIDocument,
    Operation,
    ResponseDescriptor,
    Route,
    RouteOption,
)
from schemasynth.openapi.responses import (
    ErrorItem,
    HTTPError,
    Response,
    build_response,
    option_add_error,
    option_add_response,
)

__all__ = [
    "ErrorItem",
    "HTTPError",
    "Info",
    "MediaType",
    "OpenAPIDocument",
    "Operation",
    "Response",
    "ResponseDescriptor",
    "Route",
    "RouteOption",
    "build_response",
    "option_add_error",
    "option_add_response",
]
