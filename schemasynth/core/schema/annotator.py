"""Field-tag annotation of generated schemas.

``annotate`` walks a struct's declared fields and copies their tags onto the
matching properties of an already generated schema (tag => schema member):

- json     => property key; ``-`` hides the field; ``omitempty`` => nullable
- xml      => xml.name; ``attr`` option => xml.attribute; ``-`` stops annotation
- example  => example (parsed to int for integer properties)
- validate => ``required`` appends to the schema's required list;
              ``min=N``/``max=N`` => minimum/maximum (integers) or
              minLength/maxLength (strings)
- description => description

Annotation never creates a property: a tagged field the generator did not
emit is logged and skipped.
"""

import re
from typing import Any

from schemasynth.core.logging import get_logger
from schemasynth.core.schema.models import XML, PropertyKind, Schema
from schemasynth.core.schema.tags import SKIP, XML_ATTRIBUTE, StructField, struct_fields
from schemasynth.core.types import TypeKind, element_type, is_struct, type_kind

logger = get_logger(__name__)

# Integer literal syntax accepted for examples and bounds
_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")


def parse_int(text: str) -> tuple[int, bool]:
    """Parse a base-10 integer literal; ``(0, False)`` when it is not one.

    Examples
    --------
    >>> parse_int("42")
    (42, True)
    >>> parse_int("4.2")
    (0, False)
    """
    if _INTEGER_LITERAL.match(text):
        return int(text), True
    return 0, False


def annotate(type_hint: Any, schema: Schema) -> Schema:
    """Enrich ``schema``'s properties from the field tags of ``type_hint``.

    ``type_hint`` is dereferenced one level (``Optional[T]`` → ``T``); nothing
    happens if the result is not a struct. Embedded fields are annotated
    against the same schema, so their properties land in the owner.

    Args
    ----
        type_hint: Struct type whose fields carry the tags
        schema: Schema generated for that type; mutated in place

    Returns
    -------
        Schema: The same ``schema`` object
    """
    if type_kind(type_hint) is TypeKind.POINTER:
        type_hint = element_type(type_hint)

    if not is_struct(type_hint):
        return schema

    for field in struct_fields(type_hint):
        if field.embedded:
            annotate(field.annotation, schema)
            continue

        name = field.serialized_name
        if name == SKIP:
            continue

        property_ref = schema.properties.get(name)
        if property_ref is None or property_ref.value is None:
            logger.warning("Property not found in schema: {property}", property=name)
            continue
        prop = property_ref.value

        if not _apply_xml(field, prop):
            continue
        _apply_example(field, prop)
        _apply_validation(field, name, prop, schema)

        if field.tags.description is not None:
            prop.description = field.tags.description
        if field.tags.omitempty:
            prop.nullable = True

    return schema


def _apply_xml(field: StructField, prop: Schema) -> bool:
    """Set XML hints; False when the xml tag hides the field."""
    xml_tag = field.tags.xml
    if xml_tag is None:
        return True

    xml_name = field.tags.xml_name
    if xml_name == SKIP:
        return False
    prop.xml = XML(
        name=xml_name or field.name,
        attribute=XML_ATTRIBUTE in xml_tag.split(","),
    )
    return True


def _apply_example(field: StructField, prop: Schema) -> None:
    example = field.tags.example
    if example is None:
        return

    prop.example = example
    if prop.kind is PropertyKind.INTEGER:
        value, ok = parse_int(example)
        if not ok:
            logger.warning(
                "Example might be incorrect (should be integer): {example!r} on {field}",
                example=example,
                field=field.name,
            )
        prop.example = value


def _apply_validation(field: StructField, name: str, prop: Schema, owner: Schema) -> None:
    if field.tags.validate is None:
        return

    directives = field.tags.validate_directives
    if "required" in directives:
        owner.required.append(name)

    for directive in directives:
        for bound_name in ("min", "max"):
            if not directive.startswith(f"{bound_name}="):
                continue
            raw = directive.split("=")[1]
            bound, ok = parse_int(raw)
            if not ok:
                logger.warning(
                    "{bound} might be incorrect (should be integer): {raw!r} on {field}",
                    bound=bound_name.capitalize(),
                    raw=raw,
                    field=field.name,
                )
                continue
            _apply_bound(prop, bound_name, bound)


def _apply_bound(prop: Schema, bound_name: str, bound: int) -> None:
    match (prop.kind, bound_name):
        case (PropertyKind.INTEGER, "min"):
            prop.minimum = float(bound)
        case (PropertyKind.INTEGER, "max"):
            prop.maximum = float(bound)
        case (PropertyKind.STRING, "min"):
            prop.min_length = bound
        case (PropertyKind.STRING, "max"):
            prop.max_length = bound
        case (
            PropertyKind.NUMBER
            | PropertyKind.BOOLEAN
            | PropertyKind.ARRAY
            | PropertyKind.OBJECT
            | PropertyKind.UNKNOWN,
            _,
        ):
            # other kinds carry no bounds
            pass
