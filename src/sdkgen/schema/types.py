"""Schema kind classification and the shared type-inference rule.

Every schema node falls into one of four :class:`SchemaKind` tags. The
normalizer dispatches on the tag instead of probing for keys ad hoc, and
:func:`infer_type` turns a node into the type string used by operation
descriptors and model properties.

Type strings use a small, language-neutral notation that the emitter maps
to Python annotations:

========================================  ==========================
Schema                                    Type string
========================================  ==========================
``{"$ref": "#/components/schemas/User"}``  ``User``
``{"type": "array", "items": {...}}``      ``<item type>[]``
``{"additionalProperties": {...}}``        ``Record<string, <value>>``
``{"type": "integer"}``                    ``integer``
``{}``                                     ``any``
========================================  ==========================
"""

from __future__ import annotations

import enum
from typing import Any, Optional

ANY_TYPE = "any"
VOID_TYPE = "void"
ARRAY_SUFFIX = "[]"


class SchemaKind(str, enum.Enum):
    """Tag for the four shapes a schema node can take."""

    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    REFERENCE = "reference"


def primary_type(schema: dict[str, Any]) -> Optional[str]:
    """Return the schema's ``type``, unwrapping OpenAPI 3.1 type lists.

    For ``["string", "null"]`` the first non-null entry is returned.
    """
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        return non_null[0] if non_null else None
    if isinstance(schema_type, str):
        return schema_type
    return None


def ref_name(ref: str) -> str:
    """Last segment of a JSON pointer (``#/components/schemas/User`` -> ``User``)."""
    return ref.rsplit("/", 1)[-1]


def classify_schema(schema: Any) -> SchemaKind:
    """Classify a schema node.

    ``$ref`` wins over everything else, so a node carrying both ``items``
    and ``$ref`` is a reference. Composition-only nodes (``oneOf`` and
    friends) and non-dict values are primitives.
    """
    if not isinstance(schema, dict):
        return SchemaKind.PRIMITIVE
    if "$ref" in schema:
        return SchemaKind.REFERENCE
    schema_type = primary_type(schema)
    if schema_type == "array" or (schema_type is None and "items" in schema):
        return SchemaKind.ARRAY
    if schema_type == "object" or (
        schema_type is None
        and ("properties" in schema or "additionalProperties" in schema)
    ):
        return SchemaKind.OBJECT
    return SchemaKind.PRIMITIVE


def has_property_map(schema: Any) -> bool:
    """True for an object schema carrying a ``properties`` map, even an empty one."""
    return (
        isinstance(schema, dict)
        and classify_schema(schema) is SchemaKind.OBJECT
        and isinstance(schema.get("properties"), dict)
    )


def infer_type(schema: Any) -> str:
    """Infer the type string for a schema node.

    Args:
        schema: Any schema node. Non-dict values infer as ``any``.

    Returns:
        The referenced name, ``<item>[]`` for arrays,
        ``Record<string, <value>>`` for maps, the primitive ``type``, or
        ``any`` when nothing better is known.
    """
    if not isinstance(schema, dict):
        return ANY_TYPE

    kind = classify_schema(schema)
    if kind is SchemaKind.REFERENCE:
        ref = schema["$ref"]
        return ref_name(ref) if isinstance(ref, str) else ANY_TYPE

    if kind is SchemaKind.ARRAY:
        items = schema.get("items")
        item_type = infer_type(items) if isinstance(items, dict) else ANY_TYPE
        return item_type + ARRAY_SUFFIX

    if kind is SchemaKind.OBJECT:
        additional = schema.get("additionalProperties")
        if additional is not None and additional is not False:
            value_type = infer_type(additional) if isinstance(additional, dict) else ANY_TYPE
            return f"Record<string, {value_type}>"

    return primary_type(schema) or ANY_TYPE
