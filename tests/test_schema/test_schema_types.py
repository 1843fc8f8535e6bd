"""Tests for sdkgen.schema.types -- classification and type inference."""

from __future__ import annotations

from typing import Any

import pytest

from sdkgen.schema.types import SchemaKind, classify_schema, has_property_map, infer_type


class TestClassifySchema:
    @pytest.mark.parametrize(
        ("schema", "kind"),
        [
            ({"$ref": "#/components/schemas/User"}, SchemaKind.REFERENCE),
            ({"$ref": "#/components/schemas/User", "items": {}}, SchemaKind.REFERENCE),
            ({"type": "array", "items": {"type": "string"}}, SchemaKind.ARRAY),
            ({"items": {"type": "string"}}, SchemaKind.ARRAY),
            ({"type": "object"}, SchemaKind.OBJECT),
            ({"properties": {"a": {}}}, SchemaKind.OBJECT),
            ({"additionalProperties": True}, SchemaKind.OBJECT),
            ({"type": ["object", "null"]}, SchemaKind.OBJECT),
            ({"type": "string"}, SchemaKind.PRIMITIVE),
            ({"oneOf": [{"type": "string"}]}, SchemaKind.PRIMITIVE),
            ("not a schema", SchemaKind.PRIMITIVE),
        ],
    )
    def test_kinds(self, schema: Any, kind: SchemaKind) -> None:
        assert classify_schema(schema) is kind


class TestHasPropertyMap:
    def test_object_with_properties(self) -> None:
        assert has_property_map({"type": "object", "properties": {"a": {}}})

    def test_empty_property_map_counts(self) -> None:
        assert has_property_map({"type": "object", "properties": {}})

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object"},
            {"$ref": "#/components/schemas/User", "properties": {"a": {}}},
            {"type": "string"},
        ],
    )
    def test_everything_else(self, schema: dict) -> None:
        assert not has_property_map(schema)


class TestInferType:
    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            ({"$ref": "#/components/schemas/User"}, "User"),
            ({"type": "array", "items": {"$ref": "#/components/schemas/Order"}}, "Order[]"),
            ({"type": "array", "items": {"type": "array", "items": {"type": "integer"}}}, "integer[][]"),
            ({"type": "array"}, "any[]"),
            ({"type": "object", "additionalProperties": {"type": "integer"}}, "Record<string, integer>"),
            ({"additionalProperties": True}, "Record<string, any>"),
            ({"type": "object", "additionalProperties": {}}, "Record<string, any>"),
            ({"type": "object", "additionalProperties": False}, "object"),
            ({"type": "object", "properties": {"a": {}}}, "object"),
            ({"type": "string", "format": "date-time"}, "string"),
            ({"type": ["string", "null"]}, "string"),
            ({"type": ["null"]}, "any"),
            ({}, "any"),
            (None, "any"),
        ],
    )
    def test_inference(self, schema: Any, expected: str) -> None:
        assert infer_type(schema) == expected
