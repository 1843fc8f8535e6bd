"""Hoist inline object schemas into named, referenced registry entries.

Generated SDKs need one named model per object shape. OpenAPI documents
frequently inline those shapes instead (an ``address`` object inside
``User``, an array of anonymous line items inside ``Order``). The
:class:`SchemaNormalizer` rewrites the schema graph so that every such
inline object becomes a ``$ref`` to a registry entry named after the
property that held it:

* ``address: {type: object, properties: {...}}`` becomes
  ``address: {$ref: "#/components/schemas/address"}`` and the inline
  content is registered as ``address``.
* ``lines: {type: array, items: {type: object, properties: {...}}}`` keeps
  its array wrapper, its items become a reference to ``linesItem``.
* An array whose description mentions ``"Array of"`` and whose items are a
  ``oneOf`` union gets every inline union member replaced by a reference to
  ``<name>Item``. No registry entry is created for that case.

The first registration of a name wins. A later inline object with the
same property name reuses the existing entry; when the contents differ the
name is recorded in :attr:`SchemaNormalizer.collisions` and reported with a
debug diagnostic.

Normalization never validates and never fails on odd input: anything it
does not recognise is passed through unchanged. Running it over its own
output is a no-op.
"""

from __future__ import annotations

from typing import Any

from sdkgen.output import debug
from sdkgen.schema.registry import SchemaRegistry
from sdkgen.schema.types import SchemaKind, classify_schema, primary_type

SCHEMA_REF_PREFIX = "#/components/schemas/"
ITEM_SUFFIX = "Item"
_POLYMORPHIC_ARRAY_MARKER = "Array of"


def schema_ref(name: str) -> dict[str, str]:
    """Build a ``$ref`` node pointing at a component schema."""
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def _is_inline_object(node: Any) -> bool:
    return (
        isinstance(node, dict)
        and "$ref" not in node
        and primary_type(node) == "object"
        and isinstance(node.get("properties"), dict)
    )


def _is_array(node: Any) -> bool:
    return isinstance(node, dict) and primary_type(node) == "array"


class SchemaNormalizer:
    """Rewrites schema graphs against a :class:`SchemaRegistry`.

    The normalizer is the registry's only writer. Call :meth:`run` (or
    :meth:`normalize_registry` and :meth:`normalize_bodies`) once, then
    freeze the registry.

    Args:
        registry: The registry to read and extend.

    Attributes:
        collisions: Names whose existing registry entry was reused for an
            inline schema with different content, in discovery order.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self.registry = registry
        self.collisions: list[str] = []
        # name -> schema currently being normalized under that name
        self._in_progress: dict[str, Any] = {}

    # --- entry points ---

    def run(self, document: dict[str, Any]) -> SchemaRegistry:
        """Normalize every registry entry, then every body schema under ``paths``.

        Body schemas are rewritten in place inside *document*.
        """
        self.normalize_registry()
        paths = document.get("paths")
        if isinstance(paths, dict):
            self.normalize_bodies(paths)
        return self.registry

    def normalize_registry(self) -> None:
        """Replace each seeded registry entry with its normalized form.

        Iterates a snapshot of the names; entries hoisted during the pass
        are normalized when they are inserted.
        """
        for name in self.registry.names():
            self._in_progress[name] = self.registry[name]
            try:
                rewritten = self.normalize(self.registry[name])
            finally:
                del self._in_progress[name]
            self.registry.replace(name, rewritten)

    def normalize_bodies(self, paths: dict[str, Any]) -> None:
        """Rewrite request-body and response-body schemas of every operation."""
        for path_item in paths.values():
            if not isinstance(path_item, dict):
                continue
            for operation in path_item.values():
                if not isinstance(operation, dict):
                    continue
                request_body = operation.get("requestBody")
                if isinstance(request_body, dict):
                    self._normalize_content(request_body.get("content"))
                responses = operation.get("responses")
                if isinstance(responses, dict):
                    for response in responses.values():
                        if isinstance(response, dict):
                            self._normalize_content(response.get("content"))

    def normalize(self, schema: Any) -> Any:
        """Return the normalized form of a single schema node.

        The registry is extended as a side effect when inline objects are
        hoisted.
        """
        return self._rewrite(schema, register=True)

    # --- recursion ---

    def _normalize_content(self, content: Any) -> None:
        if not isinstance(content, dict):
            return
        for media in content.values():
            if isinstance(media, dict) and media.get("schema") is not None:
                media["schema"] = self.normalize(media["schema"])

    def _rewrite(self, node: Any, register: bool) -> Any:
        if isinstance(node, list):
            return [self._rewrite(item, register) for item in node]
        if not isinstance(node, dict):
            return node
        if classify_schema(node) is SchemaKind.REFERENCE:
            return node

        rebuilt: dict[str, Any] = {}
        for key, value in node.items():
            if key == "properties" and isinstance(value, dict):
                rebuilt[key] = {
                    name: self._rewrite_property(name, prop, register)
                    for name, prop in value.items()
                }
            else:
                rebuilt[key] = self._rewrite(value, register)
        return rebuilt

    def _rewrite_property(self, name: Any, prop: Any, register: bool) -> Any:
        if not isinstance(name, str) or not isinstance(prop, dict):
            return prop

        if _is_inline_object(prop):
            self._hoist(name, prop, register)
            return schema_ref(name)

        if _is_array(prop):
            items = prop.get("items")
            if _is_inline_object(items):
                item_name = f"{name}{ITEM_SUFFIX}"
                self._hoist(item_name, items, register)
                return self._with_items(prop, schema_ref(item_name), register)

            description = prop.get("description")
            if (
                isinstance(description, str)
                and _POLYMORPHIC_ARRAY_MARKER in description
                and isinstance(items, dict)
                and isinstance(items.get("oneOf"), list)
            ):
                item_ref = schema_ref(f"{name}{ITEM_SUFFIX}")
                members = [
                    member if isinstance(member, dict) and "$ref" in member else dict(item_ref)
                    for member in items["oneOf"]
                ]
                return self._with_items(prop, {**items, "oneOf": members}, register)

        return self._rewrite(prop, register)

    def _with_items(self, prop: dict[str, Any], items: Any, register: bool) -> dict[str, Any]:
        return {
            key: items if key == "items" else self._rewrite(value, register)
            for key, value in prop.items()
        }

    def _hoist(self, name: str, inline: dict[str, Any], register: bool) -> None:
        """Make sure *name* is registered for *inline*, honouring first-wins."""
        if not register:
            return

        if name in self._in_progress:
            # a self-named property: it becomes a reference to the enclosing schema
            if self._in_progress[name] != inline:
                self._record_collision(name)
            return

        if name in self.registry:
            existing = self.registry[name]
            if existing != inline and existing != self._rewrite(inline, register=False):
                self._record_collision(name)
            return

        self._in_progress[name] = inline
        try:
            normalized = self._rewrite(inline, register=True)
        finally:
            del self._in_progress[name]
        self.registry.insert(name, normalized)
        debug(f"hoisted inline schema '{name}'")

    def _record_collision(self, name: str) -> None:
        self.collisions.append(name)
        debug(
            f"schema name collision: inline schema for '{name}' differs "
            "from the registered one; reusing the existing entry"
        )
