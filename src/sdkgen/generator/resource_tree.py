"""Derive the resource hierarchy from the document's path templates.

Every segment that follows a parameter segment opens a sub-resource:

==========================  ==========================================
Path                        Operations attach to
==========================  ==========================================
``/users``                  ``users``
``/users/{id}``             ``users``
``/users/profile``          ``users`` (no parameter before ``profile``)
``/users/{id}/orders``      ``users`` > ``orders``
``/users/{id}/orders/{o}``  ``users`` > ``orders``
``/maps/{x}/{y}``           ``maps`` > ``{y}``
==========================  ==========================================

With :attr:`~sdkgen.models.NestingStrategy.FLAT` every operation attaches to
the root resource and no sub-resources are created.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional

from sdkgen.generator.operations import build_operation
from sdkgen.models import HTTPMethod, NestingStrategy, Resource
from sdkgen.output import debug

_METHODS = {m.value: m for m in HTTPMethod}


def is_path_parameter(segment: str) -> bool:
    return segment.startswith("{")


def path_segments(path: str) -> list[str]:
    """Split a path template into its non-empty segments."""
    return [s for s in path.split("/") if s]


def locate_resource(
    roots: dict[str, Resource],
    segments: list[str],
    nesting: NestingStrategy = NestingStrategy.NESTED,
) -> Resource:
    """Find or create the resource that owns *segments*.

    Creates the root resource and, for nested mode, every sub-resource on
    the way.
    """
    name = segments[0]
    current = roots.get(name)
    if current is None:
        current = roots[name] = Resource(name=name)

    if nesting is NestingStrategy.FLAT:
        return current

    for previous, segment in zip(segments, segments[1:]):
        if is_path_parameter(previous):
            child = current.sub_resources.get(segment)
            if child is None:
                child = current.sub_resources[segment] = Resource(name=segment)
            current = child
    return current


def build_resource_tree(
    paths: Any,
    nesting: NestingStrategy = NestingStrategy.NESTED,
    document: Optional[dict[str, Any]] = None,
) -> dict[str, Resource]:
    """Build the root resource map from a ``paths`` object.

    Args:
        paths: Path template -> path item mapping. Non-mapping input yields
            an empty tree.
        nesting: How resource boundaries are drawn.
        document: The whole document, passed through to
            :func:`~sdkgen.generator.operations.build_operation` for
            ``$ref`` lookups.

    Returns:
        Root resources keyed by first path segment, in first-seen order.
    """
    roots: dict[str, Resource] = {}
    if not isinstance(paths, dict):
        return roots

    for path, path_item in paths.items():
        if not isinstance(path, str) or not isinstance(path_item, dict):
            continue
        segments = path_segments(path)
        if not segments:
            debug(f"skipping path without segments: {path!r}")
            continue

        resource = locate_resource(roots, segments, nesting)
        for key, operation in path_item.items():
            method = _METHODS.get(key)
            if method is None or not isinstance(operation, dict):
                continue
            resource.operations.append(
                build_operation(path, method, operation, path_item, document)
            )

    debug(f"extracted {len(roots)} root resource(s)")
    return roots


def iter_resources(roots: dict[str, Resource]) -> Iterator[tuple[int, Resource]]:
    """Yield ``(depth, resource)`` pairs, parents before children."""
    stack = [(0, r) for r in reversed(list(roots.values()))]
    while stack:
        depth, resource = stack.pop()
        yield depth, resource
        stack.extend((depth + 1, c) for c in reversed(list(resource.sub_resources.values())))
