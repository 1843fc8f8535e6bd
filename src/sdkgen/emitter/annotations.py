"""Map extracted type strings onto Python annotations for generated code.

The extractor describes types with a small neutral notation (``User``,
``Order[]``, ``Record<string, integer>``, ``any``). :class:`TypeMapper`
turns those into annotation source text usable inside the generated
``models.py``:

=============================  ==========================
Type string                    Annotation
=============================  ==========================
``string``                     ``str``
``integer``                    ``int``
``number``                     ``float``
``boolean``                    ``bool``
``object``                     ``dict[str, Any]``
``any`` / unknown              ``Any``
``Order[]``                    ``list[Order]``
``Record<string, integer>``    ``dict[str, int]``
``User`` (a model)             ``User`` (its class name)
``Pets`` (array schema)        the annotation of its inferred type
=============================  ==========================
"""

from __future__ import annotations

import re
from typing import Any

from sdkgen.schema.types import ARRAY_SUFFIX, infer_type

_PRIMITIVES: dict[str, str] = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "object": "dict[str, Any]",
    "null": "None",
    "void": "None",
    "any": "Any",
}

_RECORD_RE = re.compile(r"^Record<string, (?P<value>.+)>$")


class TypeMapper:
    """Translate type strings using the emitted model classes.

    Args:
        model_classes: Registry name -> generated class name, for every
            schema that became a model.
        schemas: The frozen registry content, used to expand references to
            schemas that were not modeled (top-level arrays, primitives).
    """

    def __init__(self, model_classes: dict[str, str], schemas: dict[str, Any]) -> None:
        self._model_classes = model_classes
        self._schemas = schemas

    def annotation(self, type_str: str) -> str:
        return self._annotation(type_str, frozenset())

    def _annotation(self, type_str: str, seen: frozenset[str]) -> str:
        if type_str.endswith(ARRAY_SUFFIX):
            return f"list[{self._annotation(type_str[: -len(ARRAY_SUFFIX)], seen)}]"

        record = _RECORD_RE.match(type_str)
        if record:
            return f"dict[str, {self._annotation(record.group('value'), seen)}]"

        if type_str in _PRIMITIVES:
            return _PRIMITIVES[type_str]
        if type_str in self._model_classes:
            return self._model_classes[type_str]

        schema = self._schemas.get(type_str)
        if isinstance(schema, dict) and type_str not in seen:
            return self._annotation(infer_type(schema), seen | {type_str})
        return "Any"
