"""Run the extraction pipeline over a loaded OpenAPI document.

:func:`extract_sdk` is the single public entry point. It works on a deep
copy of the document so the caller's dict is never modified:

1. Seed a :class:`~sdkgen.schema.registry.SchemaRegistry` from
   ``components.schemas``.
2. Normalize every named schema and every request/response body schema
   with :class:`~sdkgen.schema.normalizer.SchemaNormalizer`.
3. Freeze the registry.
4. Extract the API info, the resource tree (over the copy's ``paths``) and
   the models (over the frozen registry).

The result is an :class:`~sdkgen.models.SdkDefinition`, which also carries
the ``$ref``-free variant of the input document for the emitter.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from sdkgen.generator.model_builder import build_models
from sdkgen.generator.resource_tree import build_resource_tree
from sdkgen.models import APIInfo, NestingStrategy, SdkDefinition
from sdkgen.output import debug
from sdkgen.parser.resolver import resolve_refs
from sdkgen.schema.normalizer import SchemaNormalizer
from sdkgen.schema.registry import SchemaRegistry

DEFAULT_BASE_URL = "http://localhost"


def extract_sdk(
    raw_spec: dict[str, Any],
    openapi_version: str,
    *,
    sdk_version: Optional[str] = None,
    base_url: Optional[str] = None,
    nesting: NestingStrategy = NestingStrategy.NESTED,
    dereferenced: Optional[dict[str, Any]] = None,
) -> SdkDefinition:
    """Build the :class:`~sdkgen.models.SdkDefinition` for a document.

    Args:
        raw_spec: The loaded document, as returned by
            :func:`~sdkgen.parser.loader.load_spec`. Not modified.
        openapi_version: The validated ``openapi`` version string.
        sdk_version: Overrides ``info.version`` as the SDK version.
        base_url: Overrides ``servers[0].url``.
        nesting: Resource nesting strategy.
        dereferenced: A ``$ref``-free variant of *raw_spec*. Produced with
            :func:`~sdkgen.parser.resolver.resolve_refs` when omitted.

    Returns:
        The complete extraction result.

    Raises:
        SpecParseError: If the dereferenced variant has to be produced and
            the document contains an external or dangling ``$ref``.
    """
    document = copy.deepcopy(raw_spec)

    registry = SchemaRegistry.from_document(document)
    normalizer = SchemaNormalizer(registry)
    normalizer.run(document)
    registry.freeze()
    if normalizer.collisions:
        debug(f"reused schema names: {', '.join(normalizer.collisions)}")
    _store_schemas(document, registry)

    if dereferenced is None:
        dereferenced = resolve_refs(raw_spec)

    return SdkDefinition(
        info=_extract_info(document, sdk_version, base_url),
        resources=build_resource_tree(document.get("paths"), nesting, document),
        models=build_models(registry),
        schemas=registry.as_dict(),
        openapi_version=openapi_version,
        dereferenced=dereferenced,
    )


def _store_schemas(document: dict[str, Any], registry: SchemaRegistry) -> None:
    """Write the normalized registry back so ``$ref`` lookups in *document* resolve."""
    if not len(registry):
        return
    components = document.get("components")
    if not isinstance(components, dict):
        components = document["components"] = {}
    components["schemas"] = registry.as_dict()


def _extract_info(
    spec: dict[str, Any],
    sdk_version: Optional[str],
    base_url: Optional[str],
) -> APIInfo:
    """Read ``info`` and ``servers``, falling back to defaults for missing fields."""
    info = spec.get("info")
    if not isinstance(info, dict):
        info = {}

    description = info.get("description")
    declared_version = info.get("version")
    return APIInfo(
        title=str(info.get("title") or "Untitled API"),
        description=description if isinstance(description, str) else "",
        version=sdk_version or (str(declared_version) if declared_version is not None else "0.0.0"),
        base_url=base_url or _first_server_url(spec) or DEFAULT_BASE_URL,
    )


def _first_server_url(spec: dict[str, Any]) -> Optional[str]:
    servers = spec.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        url = servers[0].get("url")
        if isinstance(url, str) and url:
            return url
    return None
