"""Canonical Pydantic models shared across all sdkgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- read from JSON config files, environment
variables, and CLI flags:
    :class:`NestingStrategy` and :class:`GeneratorConfig`.

**Extraction output models** -- produced by the extraction pipeline and
consumed by the emitter:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`APIInfo`,
    :class:`OperationDescriptor`, :class:`Resource`, :class:`ModelProperty`,
    :class:`Model`, and :class:`SdkDefinition`.

All models use Pydantic v2. Operation descriptors are frozen once built;
resources stay mutable because the tree builder appends operations and
children while walking the paths.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class NestingStrategy(str, enum.Enum):
    """How resource boundaries are derived from URL path templates.

    ``NESTED`` creates a sub-resource for every literal segment that follows
    a path parameter (``/users/{id}/orders`` -> ``users`` > ``orders``).
    ``FLAT`` attaches every operation to the resource named by the first
    path segment and never creates sub-resources.
    """

    NESTED = "nested"
    FLAT = "flat"


class GeneratorConfig(BaseModel):
    """Effective generator settings after precedence resolution.

    Loaded and merged by :func:`~sdkgen.config.resolve_config`. Fields set
    to ``None`` fall back to values read from the spec itself (version, base
    URL) or derived from it (package name).
    """

    spec: Optional[str] = Field(
        default=None, description="URL or file path to the OpenAPI spec"
    )
    output_dir: str = Field(
        default="./sdk", description="Directory the SDK is written to"
    )
    sdk_version: Optional[str] = Field(
        default=None, description="Override the version from info.version"
    )
    package_name: Optional[str] = Field(
        default=None, description="Import name of the generated package"
    )
    base_url: Optional[str] = Field(
        default=None, description="Override the base URL from servers[0]"
    )
    nesting: NestingStrategy = Field(
        default=NestingStrategy.NESTED, description="Resource nesting strategy"
    )


# --- Extraction Output ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods that become SDK operations.

    Other path-item keys (``head``, ``options``, ``trace``, ``parameters``,
    ...) are ignored by the resource tree builder.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class APIInfo(BaseModel):
    """API metadata handed to the emitter.

    ``version`` is the SDK version: a configured override wins over the
    spec's ``info.version``. ``base_url`` falls back to the first server
    URL, then to ``http://localhost``.
    """

    title: str
    description: str = ""
    version: str
    base_url: str


class OperationDescriptor(BaseModel):
    """One REST operation, i.e. one (path, HTTP method) pair.

    ``path_params`` and ``query_params`` keep the order in which the
    parameters were declared. Type strings (``request_type``,
    ``return_type``) use the notation of
    :func:`~sdkgen.schema.types.infer_type`; ``"void"`` marks an absent body.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str = ""
    description: str = ""
    method: HTTPMethod
    path: str
    path_params: list[str] = Field(default_factory=list)
    query_params: list[str] = Field(default_factory=list)
    has_request_body: bool = False
    request_type: str = "void"
    has_response_body: bool = False
    return_type: str = "void"
    deprecated: bool = False
    tags: list[str] = Field(default_factory=list)


class Resource(BaseModel):
    """A path segment acting as a collection/entity grouping.

    ``sub_resources`` is only populated for segments that immediately follow
    a path parameter under this resource, so sub-resources always live inside
    a single-entity scope.
    """

    name: str
    operations: list[OperationDescriptor] = Field(default_factory=list)
    sub_resources: dict[str, Resource] = Field(default_factory=dict)


class ModelProperty(BaseModel):
    """A single property of a :class:`Model`."""

    name: str
    type: str
    required: bool = False
    description: str = ""


class Model(BaseModel):
    """Flattened view of one named object schema, ready for code generation."""

    name: str
    description: str = ""
    properties: list[ModelProperty] = Field(default_factory=list)
    required: list[str] = Field(default_factory=list)


class SdkDefinition(BaseModel):
    """Complete output of the extraction pipeline.

    Produced by :func:`~sdkgen.parser.extractor.extract_sdk` and consumed by
    :func:`~sdkgen.emitter.generate_sdk`. ``schemas`` is the content of the
    frozen schema registry; ``dereferenced`` is the ``$ref``-free variant of
    the source document.
    """

    info: APIInfo
    resources: dict[str, Resource] = Field(default_factory=dict)
    models: list[Model] = Field(default_factory=list)
    schemas: dict[str, Any] = Field(default_factory=dict)
    openapi_version: str = Field(
        description="Original OpenAPI version string (e.g., '3.0.3', '3.1.0')"
    )
    dereferenced: Optional[dict[str, Any]] = Field(
        default=None, description="Fully dereferenced spec, for the emitter"
    )
