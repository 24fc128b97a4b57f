"""Response descriptors and the route options that attach them."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any

from schemasynth.core.exceptions import ConfigurationError, MissingTypeError
from schemasynth.core.logging import get_logger
from schemasynth.core.schema import tags
from schemasynth.openapi.document import OpenAPIDocument, ResponseDescriptor, Route, RouteOption

logger = get_logger(__name__)


@dataclass
class Response:
    """What an operation returns: a type and the content types it is served as."""

    type: Any
    content_types: list[str] = field(default_factory=list)


@dataclass
class ErrorItem:
    name: str = field(
        default="",
        metadata=tags(
            json="name",
            xml="name",
            description="For example, name of the parameter that caused the error",
        ),
    )
    reason: str = field(
        default="",
        metadata=tags(json="reason", xml="reason", description="Human readable error message"),
    )
    more: dict[str, Any] = field(
        default_factory=dict, metadata=tags(json="more,omitempty", xml="-")
    )


@dataclass
class HTTPError:
    """Problem details (RFC 9457) body documented for error responses by default."""

    err: Exception | None = field(default=None, metadata=tags(json="-"))
    type: str = field(
        default="",
        metadata=tags(
            json="type,omitempty",
            xml="type,omitempty",
            description="URL of the error type. Can be used to lookup the error in a documentation",
        ),
    )
    title: str = field(
        default="",
        metadata=tags(json="title,omitempty", description="Short title of the error"),
    )
    status: int = field(
        default=0,
        metadata=tags(json="status,omitempty", description="HTTP status code", example="403"),
    )
    detail: str = field(
        default="",
        metadata=tags(json="detail,omitempty", description="Human readable error message"),
    )
    instance: str = field(default="", metadata=tags(json="instance,omitempty"))
    errors: list[ErrorItem] = field(default_factory=list, metadata=tags(json="errors,omitempty"))

    @classmethod
    def openapi_description(cls) -> str:
        return "HTTP error response following RFC 9457 problem details"


def build_response(
    document: OpenAPIDocument, description: str, response: Response
) -> ResponseDescriptor:
    """Describe ``response`` for inclusion in an operation's response table.

    Content types default to the document's configured
    ``default_content_types`` when the response names none.

    Raises
    ------
    MissingTypeError
        If ``response.type`` is None
    """
    if response.type is None:
        raise MissingTypeError("Response")

    tag = document.schema_tag_from_type(response.type)
    content_types = response.content_types or list(document.config.default_content_types)
    return ResponseDescriptor.with_schema(description, tag.as_ref(), content_types)


def _set_response(route: Route, code: int, descriptor: ResponseDescriptor) -> None:
    if route.operation.responses is None:
        route.operation.responses = {}
    route.operation.responses[str(code)] = descriptor


def option_add_response(code: int, description: str, response: Response) -> RouteOption:
    """Route option documenting ``response`` under status ``code``.

    Replaces any response previously set for the same code.
    """

    def option(route: Route) -> None:
        _set_response(route, code, build_response(route.document, description, response))

    return option


def option_add_error(code: int, description: str, *error_types: Any) -> RouteOption:
    """Route option documenting an error response under status ``code``.

    .. deprecated::
        Use :func:`option_add_response` instead.

    At most one error type may be given; without one the built-in
    :class:`HTTPError` schema is used.

    Raises
    ------
    ConfigurationError
        If more than one error type is supplied
    """
    warnings.warn(
        "option_add_error is deprecated, use option_add_response instead",
        DeprecationWarning,
        stacklevel=2,
    )
    if len(error_types) > 1:
        raise ConfigurationError("option_add_error", "errorType should not be more than one")

    error_type = error_types[0] if error_types else HTTPError

    def option(route: Route) -> None:
        document = route.document
        tag = document.schema_tag_from_type(error_type)
        descriptor = ResponseDescriptor.with_schema(
            description, tag.as_ref(), document.config.default_content_types
        )
        _set_response(route, code, descriptor)

    return option
