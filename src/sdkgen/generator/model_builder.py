"""Flatten registry entries into :class:`~sdkgen.models.Model` records."""

from __future__ import annotations

from typing import Any

from sdkgen.models import Model, ModelProperty
from sdkgen.output import debug
from sdkgen.schema.registry import SchemaRegistry
from sdkgen.schema.types import has_property_map, infer_type


def build_model(name: str, schema: dict[str, Any]) -> Model:
    """Build the model for one schema that has a property map.

    Properties keep their declared order. ``required`` keeps the schema's
    order with duplicates and non-string entries removed.
    """
    declared = schema.get("required")
    required: list[str] = []
    if isinstance(declared, list):
        for entry in declared:
            if isinstance(entry, str) and entry not in required:
                required.append(entry)

    properties = [
        ModelProperty(
            name=str(prop_name),
            type=infer_type(prop_schema),
            required=prop_name in required,
            description=_description(prop_schema),
        )
        for prop_name, prop_schema in schema["properties"].items()
    ]
    return Model(
        name=name,
        description=_description(schema),
        properties=properties,
        required=required,
    )


def build_models(registry: SchemaRegistry) -> list[Model]:
    """One model per registry entry with a ``properties`` map, in registry order.

    Bare arrays, primitives and composition-only schemas are skipped.
    """
    models = [
        build_model(name, schema)
        for name, schema in ((n, registry[n]) for n in registry)
        if has_property_map(schema)
    ]
    debug(f"extracted {len(models)} model(s) from {len(registry)} schema(s)")
    return models


def _description(schema: Any) -> str:
    if isinstance(schema, dict) and isinstance(schema.get("description"), str):
        return schema["description"]
    return ""
