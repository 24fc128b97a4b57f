"""Schema data models.

These pydantic models mirror the OpenAPI 3 schema object closely enough to be
mutated in place by the annotator and dumped straight into ``components.schemas``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

COMPONENTS_PREFIX = "#/components/schemas/"

# Reserved schema names; no real type may be registered under them.
DEFAULT_SCHEMA_NAME = "default"
UNKNOWN_INTERFACE = "unknown-interface"


def component_ref(name: str) -> str:
    """Return the ``$ref`` pointing at ``name`` in ``components.schemas``."""
    return COMPONENTS_PREFIX + name


class PropertyKind(Enum):
    """Closed set of property kinds the bound directives dispatch on."""

    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, schema: Schema) -> PropertyKind:
        """Kind of ``schema`` derived from its ``type`` member."""
        try:
            return cls(schema.type)
        except ValueError:
            return cls.UNKNOWN


class XML(BaseModel):
    """XML serialization hints for a property."""

    name: str = ""
    attribute: bool = False


class Schema(BaseModel):
    """Structural description of a type.

    Attributes
    ----------
    type : str | None
        ``object``, ``array`` or a primitive kind; None for "any value"
    properties : dict[str, SchemaRef]
        Serialized field name to property schema
    required : list[str]
        Required property names; duplicates are kept as appended
    items : SchemaRef | None
        Element schema, only for ``array``
    nullable : bool
        Set from the ``omitempty`` JSON option
    minimum, maximum : float | None
        Numeric bounds (integer properties)
    min_length, max_length : int | None
        Length bounds (string properties)
    xml : XML | None
        Element name and attribute flag
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    format: str | None = None
    description: str = ""
    properties: dict[str, SchemaRef] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    items: SchemaRef | None = None
    additional_properties: SchemaRef | None = Field(default=None, alias="additionalProperties")
    any_of: list[SchemaRef] | None = Field(default=None, alias="anyOf")
    enum: list[Any] | None = None
    example: Any = None
    nullable: bool = False
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    xml: XML | None = None

    @property
    def kind(self) -> PropertyKind:
        return PropertyKind.of(self)

    @classmethod
    def empty_object(cls) -> Schema:
        return cls(type="object")

    @classmethod
    def array_of(cls, items: SchemaRef) -> Schema:
        return cls(type="array", items=items)

    def to_dict(self) -> dict[str, Any]:
        """Dump as an OpenAPI schema object, omitting unset members."""
        data = self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude_defaults=True,
            exclude={"properties", "items", "additional_properties", "any_of", "example"},
        )
        if self.example is not None:
            data["example"] = self.example
        if self.properties:
            data["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            data["additionalProperties"] = self.additional_properties.to_dict()
        if self.any_of is not None:
            data["anyOf"] = [member.to_dict() for member in self.any_of]
        return data


class SchemaRef(BaseModel):
    """A schema given either by reference into the registry or inline."""

    ref: str = ""
    value: Schema | None = None

    @classmethod
    def inline(cls, schema: Schema) -> SchemaRef:
        return cls(value=schema)

    def to_dict(self) -> dict[str, Any]:
        if self.ref:
            return {"$ref": self.ref}
        if self.value is None:
            return {}
        return self.value.to_dict()


class SchemaTag(BaseModel):
    """Handle to a derived schema.

    ``ref`` points into the registry for named types. Array tags carry the
    item's name, no ``ref`` and a freshly built array schema as ``value``.
    """

    name: str = ""
    ref: str = ""
    value: Schema | None = None

    def as_ref(self) -> SchemaRef:
        return SchemaRef(ref=self.ref, value=self.value)


Schema.model_rebuild()
SchemaRef.model_rebuild()
