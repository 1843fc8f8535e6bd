"""Render a Python SDK from an :class:`~sdkgen.models.SdkDefinition`.

Creates the following layout inside the output directory::

    pyproject.toml
    README.md
    <package>/__init__.py        SDK entry class, one attribute per root resource
    <package>/client.py          httpx client, ApiResponse, ApiError
    <package>/query.py           immutable fluent QueryBuilder
    <package>/models.py          Pydantic models
    <package>/resources/__init__.py
    <package>/resources/<name>.py
    <package>/openapi.json       dereferenced copy of the source document

The process:

1. A Jinja2 environment is configured with templates from
   ``emitter/templates/``.
2. The definition is turned into template views with collision-free Python
   identifiers (module, class, attribute, method, and argument names).
3. Each template is rendered and written to disk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from sdkgen import __version__
from sdkgen.emitter.annotations import TypeMapper
from sdkgen.exceptions import GenerationError, InvalidUsageError
from sdkgen.generator.naming import class_name, distribution_name, snake_case
from sdkgen.models import HTTPMethod, Model, OperationDescriptor, Resource, SdkDefinition
from sdkgen.output import debug

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``emitter/templates/``)."""

SDK_CLASS_NAME = "SDK"

# BaseModel attributes plus the builtins used in field annotations; a field
# with one of these names would shadow it inside the class body.
_RESERVED_FIELD_NAMES = frozenset(
    {"copy", "dict", "json", "schema", "schema_json", "construct", "validate",
     "fields", "parse_obj", "parse_raw", "parse_file", "from_orm", "update_forward_refs",
     "model_config", "model_fields", "model_computed_fields", "model_extra",
     "model_fields_set", "model_construct", "model_copy", "model_dump",
     "model_dump_json", "model_json_schema", "model_parametrized_name",
     "model_post_init", "model_rebuild", "model_validate", "model_validate_json",
     "model_validate_strings",
     "str", "int", "float", "bool", "list"}
)
_RESERVED_ARGUMENTS = frozenset({"self", "body"})
_RESERVED_SDK_ATTRIBUTES = frozenset({"client", "close"})


# --- template views ---


@dataclass
class ParamView:
    name: str
    py_name: str


@dataclass
class OperationView:
    method_name: str
    http_method: str
    path: str
    summary: str
    description: str
    deprecated: bool
    path_params: list[ParamView]
    query_params: list[ParamView]
    has_body: bool
    request_type: str
    return_type: str
    is_query: bool


@dataclass
class ResourceView:
    name: str
    class_name: str
    attr_name: str
    operations: list[OperationView] = field(default_factory=list)
    children: list[ResourceView] = field(default_factory=list)

    def walk(self) -> list[ResourceView]:
        """This view and every descendant, children before their parent."""
        ordered: list[ResourceView] = []
        for child in self.children:
            ordered.extend(child.walk())
        ordered.append(self)
        return ordered


@dataclass
class RootResourceView:
    resource: ResourceView
    module_name: str


@dataclass
class FieldView:
    name: str
    py_name: str
    annotation: str
    required: bool
    description: str


@dataclass
class ModelView:
    name: str
    class_name: str
    description: str
    fields: list[FieldView]


class _UniqueNames:
    """Hand out identifiers, suffixing ``_2``, ``_3``, ... on repeats."""

    def __init__(self, taken: frozenset[str] | set[str] = frozenset()) -> None:
        self._taken = set(taken)

    def claim(self, name: str) -> str:
        candidate, n = name, 2
        while candidate in self._taken:
            candidate, n = f"{name}_{n}", n + 1
        self._taken.add(candidate)
        return candidate


# --- public entry point ---


def generate_sdk(
    definition: SdkDefinition,
    output_dir: str | Path,
    package_name: Optional[str] = None,
) -> Path:
    """Write the SDK for *definition* into *output_dir*.

    Args:
        definition: The extraction result.
        output_dir: Target directory, created if missing. Existing files
            with the same names are overwritten.
        package_name: Import name of the generated package. Defaults to
            the snake_case API title.

    Returns:
        The resolved output directory.

    Raises:
        InvalidUsageError: If *package_name* is not a valid identifier.
        GenerationError: If a template fails to render or a file cannot be
            written.
    """
    if package_name is None:
        package_name = snake_case(definition.info.title)
    elif not package_name.isidentifier() or snake_case(package_name) != package_name:
        raise InvalidUsageError(
            f"Invalid package name '{package_name}': use a lower-case Python identifier"
        )

    output_path = Path(output_dir)
    package_path = output_path / package_name
    resources_path = package_path / "resources"
    try:
        resources_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GenerationError(f"Cannot create output directory {resources_path}: {exc}") from exc

    env = _create_jinja_env()
    context = build_context(definition, package_name)

    _render_template(env, "pyproject.toml.j2", output_path / "pyproject.toml", context)
    _render_template(env, "README.md.j2", output_path / "README.md", context)
    _render_template(env, "package_init.py.j2", package_path / "__init__.py", context)
    _render_template(env, "client.py.j2", package_path / "client.py", context)
    _render_template(env, "query.py.j2", package_path / "query.py", context)
    _render_template(env, "models.py.j2", package_path / "models.py", context)
    _render_template(env, "resources_init.py.j2", resources_path / "__init__.py", context)
    for root in context["roots"]:
        _render_template(
            env,
            "resource.py.j2",
            resources_path / f"{root.module_name}.py",
            {**context, "root": root},
        )

    if definition.dereferenced is not None:
        _write_file(
            package_path / "openapi.json",
            json.dumps(definition.dereferenced, indent=2, ensure_ascii=False, default=str) + "\n",
        )

    debug(f"wrote SDK package '{package_name}' to {output_path}")
    return output_path.resolve()


# --- context assembly ---


def build_context(definition: SdkDefinition, package_name: str) -> dict[str, Any]:
    """Assemble every template variable for *definition*."""
    model_views = _model_views(definition.models, definition.schemas)
    module_names = _UniqueNames({"__init__"})
    sdk_attrs = _UniqueNames(_RESERVED_SDK_ATTRIBUTES)
    class_names = _UniqueNames({SDK_CLASS_NAME, "ApiClient", "ApiError", "ApiResponse", "QueryBuilder"})

    roots = []
    for resource in definition.resources.values():
        view = _resource_view(resource, class_names, prefix="", attr_name=sdk_attrs.claim(snake_case(resource.name)))
        roots.append(RootResourceView(resource=view, module_name=module_names.claim(snake_case(resource.name))))

    return {
        "info": definition.info,
        "package_name": package_name,
        "distribution_name": distribution_name(definition.info.title),
        "sdk_class": SDK_CLASS_NAME,
        "roots": roots,
        "models": model_views,
        "generator_version": __version__,
        "openapi_version": definition.openapi_version,
        "has_openapi_json": definition.dereferenced is not None,
        "example": _example_operations(roots),
    }


def _resource_view(
    resource: Resource,
    class_names: _UniqueNames,
    prefix: str,
    attr_name: str,
) -> ResourceView:
    base = prefix + class_name(resource.name)
    view = ResourceView(
        name=resource.name,
        class_name=class_names.claim(f"{base}Resource"),
        attr_name=attr_name,
    )

    members = _UniqueNames({"_client"})
    for child in resource.sub_resources.values():
        view.children.append(
            _resource_view(child, class_names, prefix=base, attr_name=members.claim(snake_case(child.name)))
        )
    for operation in resource.operations:
        view.operations.append(_operation_view(operation, members.claim(snake_case(operation.id))))
    return view


def _operation_view(operation: OperationDescriptor, method_name: str) -> OperationView:
    arguments = _UniqueNames(_RESERVED_ARGUMENTS)
    return OperationView(
        method_name=method_name,
        http_method=operation.method.value.upper(),
        path=operation.path,
        summary=operation.summary,
        description=operation.description,
        deprecated=operation.deprecated,
        path_params=[ParamView(p, arguments.claim(snake_case(p))) for p in operation.path_params],
        query_params=[ParamView(q, arguments.claim(snake_case(q))) for q in operation.query_params],
        has_body=operation.has_request_body,
        request_type=operation.request_type,
        return_type=operation.return_type,
        is_query=operation.method is HTTPMethod.GET and not operation.has_request_body,
    )


def _model_views(models: list[Model], schemas: dict[str, Any]) -> list[ModelView]:
    taken = _UniqueNames({"BaseModel", "ConfigDict", "Field", "Any", "Optional"})
    model_classes = {m.name: taken.claim(class_name(m.name)) for m in models}
    mapper = TypeMapper(model_classes, schemas)

    views = []
    for model in models:
        field_names = _UniqueNames(_RESERVED_FIELD_NAMES)
        views.append(
            ModelView(
                name=model.name,
                class_name=model_classes[model.name],
                description=model.description,
                fields=[
                    FieldView(
                        name=prop.name,
                        py_name=field_names.claim(_field_name(prop.name)),
                        annotation=mapper.annotation(prop.type),
                        required=prop.required,
                        description=prop.description,
                    )
                    for prop in model.properties
                ],
            )
        )
    return views


def _field_name(name: str) -> str:
    # pydantic treats leading-underscore attributes as private, not fields
    py_name = snake_case(name)
    return f"field{py_name}" if py_name.startswith("_") else py_name


def _example_operations(roots: list[RootResourceView]) -> Optional[dict[str, Any]]:
    """Pick the resource the README demonstrates (``users`` / ``user`` preferred)."""
    if not roots:
        return None
    by_name = {r.resource.name: r for r in roots}
    chosen = by_name.get("users") or by_name.get("user") or roots[0]
    operations = chosen.resource.operations
    return {
        "attr": chosen.resource.attr_name,
        "query": next((o for o in operations if o.is_query), None),
        "command": next((o for o in operations if not o.is_query), None),
    }


# --- Jinja plumbing ---


def _docstring(text: str) -> str:
    """Make *text* safe to embed inside a triple-quoted docstring."""
    safe = text.strip().replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    # a trailing quote would merge with the closing delimiter
    return safe + " " if safe.endswith('"') else safe


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for SDK templates.

    Autoescape is disabled for every generated file type (Python, TOML,
    Markdown). ``pyrepr`` renders a Python literal, ``toml_str`` a TOML
    basic string, and ``docstring`` escapes text for triple-quoted strings.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("py.j2", "toml.j2", "md.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["pyrepr"] = repr
    env.filters["toml_str"] = lambda value: json.dumps(str(value), ensure_ascii=False)
    env.filters["docstring"] = _docstring
    return env


def _render_template(
    env: Environment,
    template_name: str,
    output_path: Path,
    context: dict[str, Any],
) -> None:
    try:
        rendered = env.get_template(template_name).render(**context)
    except TemplateError as exc:
        raise GenerationError(f"Failed to render {template_name}: {exc}") from exc
    _write_file(output_path, rendered)


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise GenerationError(f"Cannot write {path}: {exc}") from exc
    debug(f"wrote {path}")
