"""Tests for field tags and struct field discovery."""

from dataclasses import dataclass, field
from typing import Annotated, Generic, TypeVar

import pytest
from pydantic import BaseModel, Field

from schemasynth.core.schema import FieldTags, struct_fields, tags
from schemasynth.core.schema.tags import EMPTY_TAGS, TAGS_METADATA_KEY, tag_name, tag_options

T = TypeVar("T")


@dataclass
class Tagged:
    plain: int
    via_metadata: str = field(default="", metadata=tags(json="renamed,omitempty"))
    via_annotated: Annotated[str, FieldTags(xml="x")] = ""
    both: Annotated[str, FieldTags(json="annotated")] = field(
        default="", metadata=tags(json="metadata")
    )


@dataclass
class Box(Generic[T]):
    content: T
    label: str


class Account(BaseModel):
    user_name: str = Field(alias="userName")
    balance: Annotated[int, FieldTags(json="amount"), Field(ge=0)] = 0


class TestFieldTags:
    """Tag parsing helpers."""

    def test_json_name_and_options(self):
        """Test the name and options of a json tag."""
        field_tags = FieldTags(json="name,omitempty,string")

        assert field_tags.json_name == "name"
        assert field_tags.json_options == ["omitempty", "string"]
        assert field_tags.omitempty is True

    def test_absent_tags(self):
        """Test absent tags read as empty."""
        assert EMPTY_TAGS.json_name == ""
        assert EMPTY_TAGS.xml_options == []
        assert EMPTY_TAGS.omitempty is False

    def test_validate_directives(self):
        """Test directives split on commas."""
        assert FieldTags(validate="required,min=1").validate_directives == ["required", "min=1"]

    def test_tags_helper(self):
        """Test tags() builds field metadata."""
        meta = tags(json="id", embed=True)

        assert meta[TAGS_METADATA_KEY] == FieldTags(json="id", embed=True)

    @pytest.mark.parametrize(
        ("tag", "name", "options"),
        [
            ("name", "name", []),
            ("name,attr", "name", ["attr"]),
            (",omitempty", "", ["omitempty"]),
            ("-", "-", []),
            (None, "", []),
        ],
    )
    def test_tag_name_and_options(self, tag, name, options):
        """Test splitting tags into name and options."""
        assert tag_name(tag) == name
        assert tag_options(tag) == options


class TestStructFields:
    """Field discovery."""

    def test_dataclass_fields_in_order(self):
        """Test declaration order and tag sources."""
        fields = {f.name: f for f in struct_fields(Tagged)}

        assert list(fields) == ["plain", "via_metadata", "via_annotated", "both"]
        assert fields["plain"].tags is EMPTY_TAGS
        assert fields["plain"].serialized_name == "plain"
        assert fields["via_metadata"].serialized_name == "renamed"
        assert fields["via_annotated"].tags.xml == "x"
        assert fields["via_annotated"].annotation is str

    def test_field_metadata_wins(self):
        """Test field(metadata=...) takes precedence over Annotated tags."""
        both = struct_fields(Tagged)[3]

        assert both.serialized_name == "metadata"

    def test_generic_alias_substituted(self):
        """Test TypeVars are replaced by the alias arguments."""
        content, label = struct_fields(Box[int])

        assert content.annotation is int
        assert label.annotation is str

    def test_pydantic_model(self):
        """Test pydantic aliases and Annotated tags."""
        user_name, balance = struct_fields(Account)

        assert user_name.declared_name == "userName"
        assert user_name.serialized_name == "userName"
        assert balance.serialized_name == "amount"
        assert balance.annotation is int

    @pytest.mark.parametrize("type_hint", [int, list[int], dict[str, int]])
    def test_non_struct(self, type_hint):
        """Test non-structs have no fields."""
        assert struct_fields(type_hint) == []
