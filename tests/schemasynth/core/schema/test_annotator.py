"""Tests for field-tag annotation."""

from dataclasses import dataclass, field
from typing import Annotated

import pytest
from pydantic import BaseModel

from schemasynth.core.schema import FieldTags, Schema, SchemaGenerator, TypeWalker, annotate, tags
from schemasynth.core.schema.annotator import parse_int


@dataclass
class MyInput:
    name: str = field(
        default="",
        metadata=tags(
            json="name",
            xml="name,attr",
            validate="required,min=1,max=10",
            example="Carmack",
        ),
    )


@dataclass
class Profile:
    age: int = field(default=0, metadata=tags(json="age", example="42", validate="min=18,max=99"))
    score: int = field(default=0, metadata=tags(example="forty"))
    level: int = field(default=0, metadata=tags(validate="min=abc,max=5"))
    active: bool = field(default=False, metadata=tags(validate="min=1"))
    nickname: str = field(
        default="",
        metadata=tags(json="nickname,omitempty", description="What friends call you"),
    )
    secret: str = field(default="", metadata=tags(xml="-", description="Never documented"))
    password: str = field(default="", metadata=tags(json="-", description="Hidden"))
    label: str = field(default="", metadata=tags(xml=",attr"))


@dataclass
class Base:
    id: int = field(default=0, metadata=tags(json="id", validate="required", example="7"))
    created: str = field(default="", metadata=tags(json="created,omitempty"))


@dataclass
class Article:
    base: Base = field(default_factory=Base, metadata=tags(embed=True))
    title: str = field(default="", metadata=tags(json="title", validate="required"))


@dataclass
class Revision:
    base: Base = field(default_factory=Base, metadata=tags(embed=True))
    id: int = field(default=0, metadata=tags(json="id", validate="required"))


class Pet(BaseModel):
    name: Annotated[str, FieldTags(validate="required,max=20", example="Rex")]
    age: Annotated[int, FieldTags(example="3")] = 0


def _schema_for(walker: TypeWalker, type_hint) -> Schema:
    return walker.schema_tag_from_type(type_hint).value


class TestTagMapping:
    """Tags land on the matching property."""

    def test_carmack(self, walker: TypeWalker):
        """Test the full tag set on a single string field."""
        schema = _schema_for(walker, MyInput)
        prop = schema.properties["name"].value

        assert "name" in schema.required
        assert prop.min_length == 1
        assert prop.max_length == 10
        assert prop.xml.attribute is True
        assert prop.xml.name == "name"
        assert prop.example == "Carmack"

    def test_carmack_serialized(self, walker: TypeWalker):
        """Test the annotated property in OpenAPI form."""
        schema = _schema_for(walker, MyInput)

        assert schema.to_dict()["properties"]["name"] == {
            "type": "string",
            "example": "Carmack",
            "minLength": 1,
            "maxLength": 10,
            "xml": {"name": "name", "attribute": True},
        }

    def test_pydantic_model_annotated_tags(self, walker: TypeWalker):
        """Test tags attached through Annotated on a pydantic model."""
        schema = _schema_for(walker, Pet)

        assert schema.required == ["name"]
        assert schema.properties["name"].value.max_length == 20
        assert schema.properties["name"].value.example == "Rex"
        assert schema.properties["age"].value.example == 3


class TestExamples:
    """Example values."""

    def test_integer_example_parsed(self, walker: TypeWalker):
        """Test an integer property gets an integer example."""
        prop = _schema_for(walker, Profile).properties["age"].value

        assert prop.example == 42

    def test_bad_integer_example_zeroed(self, walker: TypeWalker, log_capture: list[dict]):
        """Test an unparseable integer example becomes 0 and is logged."""
        prop = _schema_for(walker, Profile).properties["score"].value

        assert prop.example == 0
        assert any(
            log["level"] == "WARNING" and "should be integer" in log["message"]
            for log in log_capture
        )


class TestBounds:
    """min=/max= directives."""

    def test_integer_bounds(self, walker: TypeWalker):
        """Test integer properties get minimum/maximum."""
        prop = _schema_for(walker, Profile).properties["age"].value

        assert prop.minimum == 18
        assert prop.maximum == 99
        assert prop.min_length is None

    def test_malformed_bound_skipped(self, walker: TypeWalker, log_capture: list[dict]):
        """Test a malformed bound is logged and ignored; the other still applies."""
        prop = _schema_for(walker, Profile).properties["level"].value

        assert prop.minimum is None
        assert prop.maximum == 5
        assert any("Min might be incorrect" in log["message"] for log in log_capture)

    def test_bounds_ignored_for_other_kinds(self, walker: TypeWalker):
        """Test booleans carry no bounds."""
        prop = _schema_for(walker, Profile).properties["active"].value

        assert prop.minimum is None
        assert prop.min_length is None


class TestVisibility:
    """Descriptions, nullability and hidden fields."""

    def test_description_and_omitempty(self, walker: TypeWalker):
        """Test description tag and omitempty-driven nullable."""
        prop = _schema_for(walker, Profile).properties["nickname"].value

        assert prop.description == "What friends call you"
        assert prop.nullable is True

    def test_json_skip(self, walker: TypeWalker, log_capture: list[dict]):
        """Test a json '-' field is neither generated nor looked up."""
        schema = _schema_for(walker, Profile)

        assert "password" not in schema.properties
        assert "-" not in schema.properties
        assert not any("Property not found" in log["message"] for log in log_capture)

    def test_xml_skip_stops_annotation(self, walker: TypeWalker):
        """Test an xml '-' field keeps its property but gets no further tags."""
        prop = _schema_for(walker, Profile).properties["secret"].value

        assert prop.xml is None
        assert prop.description == ""

    def test_xml_name_defaults_to_field_name(self, walker: TypeWalker):
        """Test an xml tag without a name uses the field's name."""
        prop = _schema_for(walker, Profile).properties["label"].value

        assert prop.xml.name == "label"
        assert prop.xml.attribute is True


class TestEmbedding:
    """Embedded structs flatten into their owner."""

    def test_properties_flattened(self, walker: TypeWalker):
        """Test embedded properties sit beside the owner's own."""
        schema = _schema_for(walker, Article)

        assert set(schema.properties) == {"id", "created", "title"}
        assert schema.required == ["id", "title"]
        assert schema.properties["id"].value.example == 7
        assert schema.properties["created"].value.nullable is True

    def test_required_not_deduplicated(self, walker: TypeWalker):
        """Test a name required twice is listed twice."""
        schema = _schema_for(walker, Revision)

        assert schema.required == ["id", "id"]


class TestDirectAnnotation:
    """annotate() on hand-built schemas."""

    def test_missing_property_logged(self, log_capture: list[dict]):
        """Test a tagged field without a property is skipped with a warning."""
        schema = Schema.empty_object()

        result = annotate(MyInput, schema)

        assert result is schema
        assert schema.properties == {}
        assert schema.required == []
        assert any(
            "Property not found in schema: name" in log["message"] for log in log_capture
        )

    def test_pointer_dereferenced(self):
        """Test Optional[Struct] is annotated as the struct."""
        schema = SchemaGenerator.from_type(MyInput)

        annotate(MyInput | None, schema)

        assert schema.properties["name"].value.example == "Carmack"

    def test_non_struct_untouched(self):
        """Test annotating a primitive is a no-op."""
        schema = Schema(type="integer")

        annotate(int, schema)

        assert schema == Schema(type="integer")


class TestParseInt:
    """Integer literal parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("42", (42, True)), ("-7", (-7, True)), ("+3", (3, True)), ("0", (0, True))],
    )
    def test_valid(self, text: str, expected: tuple[int, bool]):
        """Test base-10 literals parse."""
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", "4.2", "abc", "1e3", " 5"])
    def test_invalid(self, text: str):
        """Test anything else is rejected."""
        assert parse_int(text) == (0, False)
