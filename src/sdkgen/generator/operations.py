"""Build one :class:`~sdkgen.models.OperationDescriptor` per (path, method) pair.

Rules applied by :func:`build_operation`:

* **Identifier** -- the declared ``operationId``, otherwise
  :func:`~sdkgen.generator.naming.operation_id` of the method and path.
* **Parameters** -- path-level parameters are merged with operation-level
  ones (operation-level wins for the same ``name`` + ``in``), ``$ref``
  parameters are followed, and the result is split into path and query
  name lists in declared order. Header and cookie parameters are dropped.
* **Request body** -- only the first declared content type is inspected.
* **Response** -- only the ``200`` response is inspected, again through its
  first declared content type; anything else yields
  ``has_response_body=False`` and ``return_type="void"``.
"""

from __future__ import annotations

from typing import Any, Optional

from sdkgen.exceptions import SpecParseError
from sdkgen.generator.naming import operation_id
from sdkgen.models import HTTPMethod, OperationDescriptor, ParameterLocation
from sdkgen.output import debug
from sdkgen.parser.resolver import resolve_pointer
from sdkgen.schema.types import VOID_TYPE, infer_type

SUCCESS_STATUS = "200"


def build_operation(
    path: str,
    method: HTTPMethod,
    operation: dict[str, Any],
    path_item: Optional[dict[str, Any]] = None,
    document: Optional[dict[str, Any]] = None,
) -> OperationDescriptor:
    """Describe a single operation.

    Args:
        path: The raw path template (``/users/{id}/orders``).
        method: The HTTP method the operation is declared under.
        operation: The operation object.
        path_item: The enclosing path item, for path-level parameters.
        document: The whole document, used to follow ``$ref`` parameters,
            request bodies and responses. Without it such references are
            skipped.

    Returns:
        The immutable descriptor.
    """
    declared_params = path_item.get("parameters") if path_item else None
    parameters = _merge_parameters(
        _resolve_list(declared_params, document),
        _resolve_list(operation.get("parameters"), document),
    )

    request_schema = _first_content_schema(_resolve(operation.get("requestBody"), document))
    response_schema = _first_content_schema(
        _resolve(_success_response(operation.get("responses")), document)
    )

    op_id = operation.get("operationId")
    if not isinstance(op_id, str) or not op_id:
        op_id = operation_id(method.value, path)

    tags = operation.get("tags")
    return OperationDescriptor(
        id=op_id,
        summary=_text(operation.get("summary")),
        description=_text(operation.get("description")),
        method=method,
        path=path,
        path_params=_names_in(parameters, ParameterLocation.PATH),
        query_params=_names_in(parameters, ParameterLocation.QUERY),
        has_request_body=request_schema is not None,
        request_type=infer_type(request_schema) if request_schema is not None else VOID_TYPE,
        has_response_body=response_schema is not None,
        return_type=infer_type(response_schema) if response_schema is not None else VOID_TYPE,
        deprecated=bool(operation.get("deprecated", False)),
        tags=[t for t in tags if isinstance(t, str)] if isinstance(tags, list) else [],
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _resolve(node: Any, document: Optional[dict[str, Any]]) -> Any:
    """Follow a ``$ref`` node one level; unresolvable references become ``None``."""
    if not isinstance(node, dict) or "$ref" not in node:
        return node
    ref = node["$ref"]
    if document is None or not isinstance(ref, str):
        return None
    try:
        return resolve_pointer(ref, document)
    except SpecParseError as exc:
        debug(f"skipping unresolvable reference: {exc}")
        return None


def _resolve_list(params: Any, document: Optional[dict[str, Any]]) -> list[dict[str, Any]]:
    if not isinstance(params, list):
        return []
    resolved = (_resolve(p, document) for p in params)
    return [p for p in resolved if isinstance(p, dict)]


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Operation-level parameters override path-level ones with the same name and location."""
    overridden = {(p.get("name"), p.get("in")) for p in op_params}
    merged = [p for p in path_params if (p.get("name"), p.get("in")) not in overridden]
    merged.extend(op_params)
    return merged


def _names_in(parameters: list[dict[str, Any]], location: ParameterLocation) -> list[str]:
    return [
        p["name"]
        for p in parameters
        if p.get("in") == location.value and isinstance(p.get("name"), str)
    ]


def _success_response(responses: Any) -> Any:
    if not isinstance(responses, dict):
        return None
    if SUCCESS_STATUS in responses:
        return responses[SUCCESS_STATUS]
    # YAML loads an unquoted 200 key as an int
    return responses.get(int(SUCCESS_STATUS))


def _first_content_schema(holder: Any) -> Any:
    """Return the schema of the first declared content type, or ``None``.

    Later content types are never consulted, even when the first one has
    no schema.
    """
    if not isinstance(holder, dict):
        return None
    content = holder.get("content")
    if not isinstance(content, dict):
        return None
    media = next(iter(content.values()), None)
    return media.get("schema") if isinstance(media, dict) else None
