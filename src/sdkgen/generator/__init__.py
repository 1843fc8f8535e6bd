"""Resource and model extraction over a normalized OpenAPI document.

This sub-package turns the normalized document and the frozen schema
registry into the template-ready representation consumed by the emitter:

* :mod:`~sdkgen.generator.resource_tree` -- groups operations into root
  resources and parameter-scoped sub-resources.
* :mod:`~sdkgen.generator.operations` -- one descriptor per (path, method)
  pair, with parameters, body presence and the inferred response type.
* :mod:`~sdkgen.generator.model_builder` -- one flat model per object
  schema in the registry.
* :mod:`~sdkgen.generator.naming` -- casing helpers shared with the
  emitter.
"""

from sdkgen.generator.model_builder import build_models
from sdkgen.generator.operations import build_operation
from sdkgen.generator.resource_tree import build_resource_tree

__all__ = ["build_models", "build_operation", "build_resource_tree"]
