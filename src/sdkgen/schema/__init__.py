"""Schema graph handling -- the registry, kind tags, and the normalizer.

Typical usage::

    from sdkgen.schema import SchemaNormalizer, SchemaRegistry

    registry = SchemaRegistry.from_document(document)
    SchemaNormalizer(registry).run(document)
    registry.freeze()

Sub-modules:

* :mod:`~sdkgen.schema.registry` -- insert-only name -> schema store with a
  freeze step.
* :mod:`~sdkgen.schema.types` -- :class:`SchemaKind` classification and the
  shared :func:`infer_type` rule.
* :mod:`~sdkgen.schema.normalizer` -- hoists inline object schemas into
  named registry entries.
"""

from sdkgen.schema.normalizer import SchemaNormalizer
from sdkgen.schema.registry import SchemaRegistry
from sdkgen.schema.types import SchemaKind, classify_schema, infer_type

__all__ = [
    "SchemaKind",
    "SchemaNormalizer",
    "SchemaRegistry",
    "classify_schema",
    "infer_type",
]
