"""Type walker - resolves runtime types to schema tags."""

from typing import Any, ForwardRef

from schemasynth.core.logging import get_logger
from schemasynth.core.schema.models import (
    DEFAULT_SCHEMA_NAME,
    UNKNOWN_INTERFACE,
    Schema,
    SchemaTag,
    component_ref,
)
from schemasynth.core.schema.registry import SchemaRegistry
from schemasynth.core.schema.wrappers import is_transparent_wrapper, payload_type
from schemasynth.core.types import (
    INDIRECT_KINDS,
    TypeKind,
    element_type,
    strip_annotated,
    type_kind,
    type_name,
)

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 5


class TypeWalker:
    """Resolve type hints to SchemaTags backed by a SchemaRegistry.

    Indirections (``Optional``, mappings, iterators, callables) are looked
    through, collections become inline array schemas whose items reference the
    registry, and leaf types are registered under their short name.

    Recursion is bounded rather than cycle-checked: every indirection,
    collection or wrapper level costs one unit of depth, and a branch that runs
    out resolves to the ``default`` sentinel reference. Self-referential types
    therefore terminate, and types nested deeper than the bound are truncated.

    Examples
    --------
    >>> walker = TypeWalker(SchemaRegistry())
    >>> tag = walker.schema_tag_from_type(list[int])
    >>> tag.name, tag.value.items.ref
    ('int', '#/components/schemas/int')
    """

    def __init__(self, registry: SchemaRegistry, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.registry = registry
        self.max_depth = max_depth

    def schema_tag_from_type(self, type_hint: Any = None) -> SchemaTag:
        """Resolve ``type_hint`` with the configured depth bound.

        ``None`` is not an error: it resolves to the ``unknown-interface``
        placeholder so callers always get a usable reference.
        """
        if type_hint is None:
            return self.unknown_interface_tag()
        return self.resolve(type_hint, self.max_depth)

    def resolve(self, type_hint: Any, max_depth: int) -> SchemaTag:
        """Resolve ``type_hint`` with ``max_depth`` levels of nesting left."""
        if max_depth <= 0:
            return SchemaTag(name=DEFAULT_SCHEMA_NAME, ref=component_ref(DEFAULT_SCHEMA_NAME))

        type_hint = strip_annotated(type_hint)
        kind = type_kind(type_hint)

        if kind in INDIRECT_KINDS:
            return self.resolve(element_type(type_hint), max_depth - 1)

        if kind is TypeKind.ARRAY:
            item = self.resolve(element_type(type_hint), max_depth - 1)
            return SchemaTag(name=item.name, value=Schema.array_of(item.as_ref()))

        if is_transparent_wrapper(type_hint):
            return self.resolve(payload_type(type_hint), max_depth - 1)

        if kind is TypeKind.INTERFACE:
            if isinstance(type_hint, (str, ForwardRef)):
                logger.warning("Unresolved forward reference {ref!r}", ref=type_hint)
            return self.unknown_interface_tag()

        name = type_name(type_hint)
        return SchemaTag(
            name=name,
            ref=component_ref(name),
            value=self.registry.get_or_create(name, type_hint),
        )

    def unknown_interface_tag(self) -> SchemaTag:
        return SchemaTag(
            name=UNKNOWN_INTERFACE,
            ref=component_ref(UNKNOWN_INTERFACE),
            value=self.registry.unknown_interface(),
        )
