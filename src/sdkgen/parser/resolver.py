"""Internal ``$ref`` resolution for OpenAPI documents.

Two consumers need this:

* the operation descriptor builder, which follows ``$ref`` parameters one
  pointer at a time via :func:`resolve_pointer`;
* the emitter, which ships a ``$ref``-free copy of the document inside the
  generated SDK, produced by :func:`resolve_refs`.

Only same-document pointers (``#/...``) are supported. Self-referencing
schemas keep their ``$ref`` at the point where the cycle closes.
"""

from __future__ import annotations

import copy
from typing import Any

from sdkgen.exceptions import SpecParseError


def resolve_refs(spec: dict[str, Any]) -> dict[str, Any]:
    """Return a deep copy of *spec* with every internal ``$ref`` inlined.

    Args:
        spec: A loaded OpenAPI document. It is not modified.

    Returns:
        The dereferenced document.

    Raises:
        SpecParseError: If a pointer is external or does not resolve.
    """
    root = copy.deepcopy(spec)
    return _deep_resolve(root, root, frozenset())


def resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Follow one JSON pointer (``#/components/parameters/Limit``) in *root*.

    RFC 6901 escapes (``~1`` for ``/``, ``~0`` for ``~``) are honoured.

    Raises:
        SpecParseError: If *ref* is external or any segment is missing.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for raw_segment in ref[2:].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
            )
    return current


def _deep_resolve(obj: Any, root: dict[str, Any], seen: frozenset[str]) -> Any:
    # seen holds the refs on the current resolution stack only, so sibling
    # branches may inline the same target independently
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            if ref in seen:
                return obj
            return _deep_resolve(resolve_pointer(ref, root), root, seen | {ref})
        return {key: _deep_resolve(value, root, seen) for key, value in obj.items()}

    if isinstance(obj, list):
        return [_deep_resolve(item, root, seen) for item in obj]

    return obj
