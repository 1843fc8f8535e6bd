"""Named schema store shared by the normalizer and the model builder.

The registry has a two-phase lifecycle. It is seeded from
``components.schemas``, written by exactly one
:class:`~sdkgen.schema.normalizer.SchemaNormalizer` pass, and then
:meth:`SchemaRegistry.freeze` is called. From then on it is read-only and
every write raises :class:`~sdkgen.exceptions.SchemaRegistryError`.

Entries are only ever inserted or replaced by their normalized content,
never removed or renamed. Iteration follows insertion order, so seeded
schemas come first and hoisted schemas follow in the order they were
discovered.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional

from sdkgen.exceptions import SchemaRegistryError


class SchemaRegistry:
    """Insert-only mapping from schema name to schema node.

    Args:
        schemas: Initial entries, usually the document's
            ``components.schemas``. Non-mapping input seeds an empty registry.
    """

    def __init__(self, schemas: Optional[Mapping[str, Any]] = None) -> None:
        self._schemas: dict[str, Any] = {}
        self._frozen = False
        if isinstance(schemas, Mapping):
            for name, schema in schemas.items():
                self._schemas[str(name)] = schema

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> SchemaRegistry:
        """Seed a registry from ``document["components"]["schemas"]``."""
        components = document.get("components")
        if not isinstance(components, Mapping):
            return cls()
        return cls(components.get("schemas"))

    # --- read access ---

    def names(self) -> list[str]:
        """Snapshot of the registered names, in insertion order."""
        return list(self._schemas)

    def get(self, name: str, default: Any = None) -> Any:
        return self._schemas.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._schemas[name]

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the entries."""
        return dict(self._schemas)

    # --- write access (normalization phase only) ---

    @property
    def is_frozen(self) -> bool:
        """Whether the write phase has ended."""
        return self._frozen

    def insert(self, name: str, schema: Any) -> None:
        """Register a new schema under *name*.

        Raises:
            SchemaRegistryError: If the registry is frozen or *name* is
                already registered.
        """
        self._check_writable(name)
        if name in self._schemas:
            raise SchemaRegistryError(f"Schema '{name}' is already registered")
        self._schemas[name] = schema

    def replace(self, name: str, schema: Any) -> None:
        """Replace an existing entry with its rewritten form.

        Raises:
            SchemaRegistryError: If the registry is frozen or *name* is
                not registered.
        """
        self._check_writable(name)
        if name not in self._schemas:
            raise SchemaRegistryError(f"Schema '{name}' is not registered")
        self._schemas[name] = schema

    def freeze(self) -> None:
        """End the write phase. Idempotent."""
        self._frozen = True

    def _check_writable(self, name: str) -> None:
        if self._frozen:
            raise SchemaRegistryError(
                f"Cannot write schema '{name}': the registry is frozen"
            )

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"SchemaRegistry({len(self._schemas)} schemas, {state})"
