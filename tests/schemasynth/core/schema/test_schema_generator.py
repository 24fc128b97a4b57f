"""Tests for SchemaGenerator."""

import datetime
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Generic, Literal, TypeVar

import pytest
from pydantic import BaseModel, Field

from schemasynth.core.schema import SchemaGenerator, tags

T = TypeVar("T")


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Opaque:
    pass


@dataclass
class Address:
    street: str
    city: str


@dataclass
class Person:
    name: str
    address: Address
    password: str = field(default="", metadata=tags(json="-"))
    email: str = field(default="", metadata=tags(json="email_address"))


@dataclass
class Category:
    name: str
    parent: "Category | None" = None


@dataclass
class Envelope(Generic[T]):
    items: list[T]


class Item(BaseModel):
    name: str = Field(description="Item name")
    count: int = Field(ge=0)
    sku: str = Field(alias="stockKeepingUnit", min_length=3)


class TestBasicTypes:
    """Test basic type conversion."""

    @pytest.mark.parametrize(
        ("type_hint", "expected"),
        [
            (str, {"type": "string"}),
            (int, {"type": "integer"}),
            (float, {"type": "number"}),
            (bool, {"type": "boolean"}),
            (bytes, {"type": "string", "format": "byte"}),
            (datetime.datetime, {"type": "string", "format": "date-time"}),
            (datetime.date, {"type": "string", "format": "date"}),
            (uuid.UUID, {"type": "string", "format": "uuid"}),
        ],
    )
    def test_basic(self, type_hint, expected):
        """Test primitive mapping."""
        assert SchemaGenerator.from_type(type_hint).to_dict() == expected

    def test_unknown_class_is_string(self):
        """Test an arbitrary class defaults to string."""
        assert SchemaGenerator.from_type(Opaque).to_dict() == {"type": "string"}

    @pytest.mark.parametrize("type_hint", [Any, object, None])
    def test_any_value(self, type_hint):
        """Test open types produce an unconstrained schema."""
        assert SchemaGenerator.from_type(type_hint).to_dict() == {}

    def test_fresh_schema_each_call(self):
        """Test generated schemas are never shared."""
        assert SchemaGenerator.from_type(Person) is not SchemaGenerator.from_type(Person)


class TestEnumTypes:
    """Test Literal and Enum conversion."""

    def test_literal_strings(self):
        """Test Literal strings become a string enum."""
        schema = SchemaGenerator.from_type(Literal["small", "large"])

        assert schema.to_dict() == {"type": "string", "enum": ["small", "large"]}

    def test_literal_integers(self):
        """Test Literal integers become an integer enum."""
        schema = SchemaGenerator.from_type(Literal[1, 2, 3])

        assert schema.type == "integer"
        assert schema.enum == [1, 2, 3]

    def test_enum_class(self):
        """Test Enum members contribute their values."""
        schema = SchemaGenerator.from_type(Color)

        assert schema.to_dict() == {"type": "string", "enum": ["red", "green"]}


class TestUnionTypes:
    """Test Union conversion."""

    def test_optional(self):
        """Test Optional[T] generates T."""
        assert SchemaGenerator.from_type(int | None).to_dict() == {"type": "integer"}

    def test_union_any_of(self):
        """Test a real union becomes anyOf."""
        schema = SchemaGenerator.from_type(str | int).to_dict()

        assert schema == {"anyOf": [{"type": "string"}, {"type": "integer"}]}


class TestContainers:
    """Test collections and mappings."""

    def test_list(self):
        """Test lists become arrays with inline items."""
        schema = SchemaGenerator.from_type(list[str]).to_dict()

        assert schema == {"type": "array", "items": {"type": "string"}}

    def test_dict_values(self):
        """Test typed dicts describe their values."""
        schema = SchemaGenerator.from_type(dict[str, int]).to_dict()

        assert schema == {"type": "object", "additionalProperties": {"type": "integer"}}

    def test_bare_dict(self):
        """Test an unparametrised dict is a plain object."""
        assert SchemaGenerator.from_type(dict).to_dict() == {"type": "object"}


class TestStructs:
    """Test dataclass and pydantic model conversion."""

    def test_dataclass_properties(self):
        """Test fields become properties and nested structs are inlined."""
        schema = SchemaGenerator.from_type(Person).to_dict()

        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["name", "address", "email_address"]
        assert schema["properties"]["address"] == {
            "type": "object",
            "properties": {"street": {"type": "string"}, "city": {"type": "string"}},
        }

    def test_recursion_cut(self):
        """Test a self-reference becomes a bare object."""
        schema = SchemaGenerator.from_type(Category).to_dict()

        assert schema["properties"]["parent"] == {"type": "object"}

    def test_generic_substitution(self):
        """Test TypeVars are replaced by the alias arguments."""
        schema = SchemaGenerator.from_type(Envelope[Address]).to_dict()

        items = schema["properties"]["items"]
        assert items["type"] == "array"
        assert set(items["items"]["properties"]) == {"street", "city"}

    def test_pydantic_model(self):
        """Test pydantic fields carry aliases and constraints."""
        schema = SchemaGenerator.from_type(Item).to_dict()

        assert schema["properties"]["name"] == {"type": "string", "description": "Item name"}
        assert schema["properties"]["count"] == {"type": "integer", "minimum": 0}
        assert schema["properties"]["stockKeepingUnit"] == {"type": "string", "minLength": 3}


class TestAnnotatedConstraints:
    """Test Annotated metadata."""

    def test_numeric_bounds(self):
        """Test Field(ge, le) become minimum and maximum."""
        schema = SchemaGenerator.from_type(Annotated[int, Field(ge=1, le=10)])

        assert schema.minimum == 1
        assert schema.maximum == 10

    def test_length_and_description(self):
        """Test length bounds and description."""
        schema = SchemaGenerator.from_type(
            Annotated[str, Field(min_length=2, max_length=8, description="Short code")]
        )

        assert schema.to_dict() == {
            "type": "string",
            "description": "Short code",
            "minLength": 2,
            "maxLength": 8,
        }

    def test_plain_metadata_ignored(self):
        """Test unrelated metadata leaves the schema alone."""
        assert SchemaGenerator.from_type(Annotated[int, "note"]).to_dict() == {"type": "integer"}
