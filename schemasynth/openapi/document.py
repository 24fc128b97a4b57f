"""OpenAPI description document.

An OpenAPIDocument is the build context for one API description: it owns the
schema registry every derivation writes to, the operations documented so
far, and the document metadata.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from schemasynth.core.config import SynthConfig
from schemasynth.core.logging import get_logger
from schemasynth.core.schema import SchemaRef, SchemaRegistry, SchemaTag, TypeWalker

logger = get_logger(__name__)

HTTP_METHODS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})


class Info(BaseModel):
    title: str = "API"
    version: str = "0.1.0"
    description: str = ""


class MediaType(BaseModel):
    schema_ref: SchemaRef = Field(alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class ResponseDescriptor(BaseModel):
    """A documented response: description plus content type → schema."""

    description: str
    content: dict[str, MediaType] = Field(default_factory=dict)

    @classmethod
    def with_schema(
        cls, description: str, schema_ref: SchemaRef, content_types: list[str] | tuple[str, ...]
    ) -> ResponseDescriptor:
        """Every content type shares the one ``schema_ref``."""
        return cls(
            description=description,
            content={ct: MediaType(schema_ref=schema_ref) for ct in content_types},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "content": {
                content_type: {"schema": media.schema_ref.to_dict()}
                for content_type, media in self.content.items()
            },
        }


class Operation(BaseModel):
    """One documented operation. ``responses`` stays None until a response is set."""

    operation_id: str | None = None
    summary: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    responses: dict[str, ResponseDescriptor] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.operation_id:
            data["operationId"] = self.operation_id
        if self.summary:
            data["summary"] = self.summary
        if self.description:
            data["description"] = self.description
        if self.tags:
            data["tags"] = list(self.tags)
        data["responses"] = {
            code: response.to_dict() for code, response in (self.responses or {}).items()
        }
        return data


@dataclass
class Route:
    """An operation together with the document it is being described in."""

    method: str
    path: str
    operation: Operation
    document: OpenAPIDocument


RouteOption = Callable[[Route], None]


class OpenAPIDocument:
    """Build context for one API description.

    Examples
    --------
    >>> doc = OpenAPIDocument(title="My API", version="1.0.0")
    >>> doc.schema_tag_from_type(int).ref
    '#/components/schemas/int'
    >>> list(doc.to_dict()["components"]["schemas"])
    ['int']
    """

    def __init__(
        self,
        config: SynthConfig | None = None,
        *,
        title: str = "API",
        version: str = "0.1.0",
        description: str = "",
    ) -> None:
        self.config = config or SynthConfig()
        self.info = Info(title=title, version=version, description=description)
        self.registry = SchemaRegistry()
        self.walker = TypeWalker(self.registry, max_depth=self.config.max_depth)
        self.paths: dict[str, dict[str, Operation]] = {}

    def schema_tag_from_type(self, type_hint: Any = None) -> SchemaTag:
        """Resolve ``type_hint``; ``None`` yields the ``unknown-interface`` placeholder."""
        return self.walker.schema_tag_from_type(type_hint)

    def add_route(
        self,
        method: str,
        path: str,
        *options: RouteOption,
        operation_id: str | None = None,
        summary: str = "",
        description: str = "",
        tags: list[str] | None = None,
    ) -> Route:
        """Document an operation and apply ``options`` to it.

        Raises
        ------
        ValueError
            If ``method`` is not an HTTP method
        """
        method = method.lower()
        if method not in HTTP_METHODS:
            raise ValueError(f"Invalid HTTP method: {method!r}")

        operation = Operation(
            operation_id=operation_id,
            summary=summary,
            description=description,
            tags=list(tags or []),
        )
        route = Route(method=method, path=path, operation=operation, document=self)
        for option in options:
            option(route)

        self.paths.setdefault(path, {})[method] = operation
        logger.debug("Documented {method} {path}", method=method.upper(), path=path)
        return route

    def to_dict(self) -> dict[str, Any]:
        return {
            "openapi": self.config.openapi_version,
            "info": self.info.model_dump(exclude_defaults=False),
            "paths": {
                path: {method: op.to_dict() for method, op in operations.items()}
                for path, operations in self.paths.items()
            },
            "components": {"schemas": self.registry.to_dict()},
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def to_yaml(self) -> str:
        yaml_str: str = yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)
        return yaml_str
