"""Declarative field metadata.

Fields carry serialization and documentation hints in five tag families,
written in the familiar comma-separated ``name,option`` syntax::

    @dataclass
    class MyInput:
        name: str = field(
            metadata=tags(
                json="name",
                xml="name,attr",
                validate="required,min=1,max=10",
                example="Carmack",
                description="Who to greet",
            )
        )

The same tags can be attached with ``Annotated[str, FieldTags(...)]``, which
is also how pydantic models carry them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, get_origin, get_type_hints

from pydantic import BaseModel

from schemasynth.core.types import (
    get_annotated_metadata,
    is_struct,
    substitute_typevars,
    typevar_map,
)

# Key under which FieldTags are stored in ``dataclasses.field(metadata=...)``.
TAGS_METADATA_KEY = "schemasynth"

OMITEMPTY = "omitempty"
XML_ATTRIBUTE = "attr"
SKIP = "-"


@dataclass(frozen=True, slots=True)
class FieldTags:
    """Per-field tags. ``None`` means the tag is absent.

    Attributes
    ----------
    json : str | None
        Serialized name plus options, e.g. ``"name,omitempty"``; ``"-"`` hides the field
    xml : str | None
        XML element name plus options, e.g. ``"name,attr"``
    example : str | None
        Literal example value
    validate : str | None
        Validation directives, e.g. ``"required,min=1,max=10"``
    description : str | None
        Free-text description
    embed : bool
        Flatten the field's struct properties into the owner
    """

    json: str | None = None
    xml: str | None = None
    example: str | None = None
    validate: str | None = None
    description: str | None = None
    embed: bool = False

    @property
    def json_name(self) -> str:
        return tag_name(self.json)

    @property
    def json_options(self) -> list[str]:
        return tag_options(self.json)

    @property
    def xml_name(self) -> str:
        return tag_name(self.xml)

    @property
    def xml_options(self) -> list[str]:
        return tag_options(self.xml)

    @property
    def validate_directives(self) -> list[str]:
        return (self.validate or "").split(",")

    @property
    def omitempty(self) -> bool:
        return OMITEMPTY in self.json_options


EMPTY_TAGS = FieldTags()


def tags(
    *,
    json: str | None = None,
    xml: str | None = None,
    example: str | None = None,
    validate: str | None = None,
    description: str | None = None,
    embed: bool = False,
) -> dict[str, FieldTags]:
    """Build ``dataclasses.field`` metadata holding FieldTags.

    Examples
    --------
    >>> meta = tags(json="name,omitempty")
    >>> meta[TAGS_METADATA_KEY].omitempty
    True
    """
    return {
        TAGS_METADATA_KEY: FieldTags(
            json=json,
            xml=xml,
            example=example,
            validate=validate,
            description=description,
            embed=embed,
        )
    }


def tag_name(tag: str | None) -> str:
    """Name portion of a tag, options stripped.

    Examples
    --------
    >>> tag_name("name,omitempty")
    'name'
    >>> tag_name(None)
    ''
    """
    if not tag:
        return ""
    return tag.split(",")[0]


def tag_options(tag: str | None) -> list[str]:
    """Options following the name portion of a tag."""
    if not tag:
        return []
    return tag.split(",")[1:]


@dataclass(frozen=True, slots=True)
class StructField:
    """One declared field of a struct, in declaration order.

    ``constraints`` holds the non-tag ``Annotated`` metadata (pydantic ``Field``,
    annotated-types bounds) for the generator to apply.
    """

    name: str
    annotation: Any
    tags: FieldTags = EMPTY_TAGS
    alias: str | None = None
    constraints: tuple[Any, ...] = ()

    @property
    def embedded(self) -> bool:
        return self.tags.embed

    @property
    def declared_name(self) -> str:
        """Name used when no JSON tag is present (pydantic alias wins over the attribute)."""
        return self.alias or self.name

    @property
    def serialized_name(self) -> str:
        """Property key: JSON tag name, else the declared name. ``"-"`` means hidden."""
        return self.tags.json_name or self.declared_name


def _split_tags(metadata: tuple[Any, ...]) -> tuple[FieldTags | None, tuple[Any, ...]]:
    found = None
    rest = []
    for item in metadata:
        if isinstance(item, FieldTags):
            found = found or item
        else:
            rest.append(item)
    return found, tuple(rest)


def _dataclass_fields(cls: type, mapping: dict[Any, Any]) -> list[StructField]:
    hints = get_type_hints(cls, include_extras=True)
    result = []
    for f in dataclasses.fields(cls):
        annotation, metadata = get_annotated_metadata(hints.get(f.name, Any))
        annotated_tags, constraints = _split_tags(metadata)
        result.append(
            StructField(
                name=f.name,
                annotation=substitute_typevars(annotation, mapping),
                tags=f.metadata.get(TAGS_METADATA_KEY) or annotated_tags or EMPTY_TAGS,
                constraints=constraints,
            )
        )
    return result


def _model_fields(cls: type[BaseModel], mapping: dict[Any, Any]) -> list[StructField]:
    result = []
    for name, info in cls.model_fields.items():
        field_tags, _ = _split_tags(tuple(info.metadata))
        result.append(
            StructField(
                name=name,
                annotation=substitute_typevars(info.annotation, mapping),
                tags=field_tags or EMPTY_TAGS,
                alias=info.alias,
                constraints=(info,),
            )
        )
    return result


def struct_fields(type_hint: Any) -> list[StructField]:
    """Declared fields of a dataclass or pydantic model, in declaration order.

    Parametrised generic aliases (``Page[Item]``) have their TypeVars replaced
    by the alias arguments. Non-struct types have no fields.

    Raises
    ------
    NameError
        If a string annotation cannot be resolved
    """
    if not is_struct(type_hint):
        return []
    cls = get_origin(type_hint) or type_hint
    mapping = typevar_map(type_hint)
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return _model_fields(cls, mapping)
    return _dataclass_fields(cls, mapping)


__all__ = [
    "EMPTY_TAGS",
    "OMITEMPTY",
    "SKIP",
    "TAGS_METADATA_KEY",
    "XML_ATTRIBUTE",
    "FieldTags",
    "StructField",
    "struct_fields",
    "tag_name",
    "tag_options",
    "tags",
]
