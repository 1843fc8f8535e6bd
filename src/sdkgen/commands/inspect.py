"""Inspect commands -- preview what ``generate`` would emit.

Provides the ``sdkgen inspect`` sub-command group. Each command runs the
full load/normalize/extract pipeline but writes nothing: ``resources``
shows the resource tree and its operations, ``models`` the model table,
and ``info`` the API metadata.
"""

from __future__ import annotations

from typing import Optional

import typer

from sdkgen.exceptions import SdkgenError
from sdkgen.models import NestingStrategy, OperationDescriptor, Resource, SdkDefinition
from sdkgen.output import OutputFormat, error, format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load(spec: Optional[str], nesting: Optional[NestingStrategy] = None) -> SdkDefinition:
    """Resolve config and extract the definition, exiting on failure."""
    from sdkgen.commands.generate import load_definition
    from sdkgen.config import resolve_config

    try:
        config = resolve_config(spec=spec, nesting=nesting)
        return load_definition(config)
    except SdkgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _operation_label(op: OperationDescriptor) -> str:
    label = f"{op.method.value.upper()} {op.path}  {op.id}"
    if op.return_type != "void":
        label += f" -> {op.return_type}"
    if op.deprecated:
        label += " (deprecated)"
    return label


def _resource_node(name: str, resource: Resource):  # noqa: ANN202
    children = [(_operation_label(op), []) for op in resource.operations]
    children.extend(_resource_node(k, v) for k, v in resource.sub_resources.items())
    return (name, children)


@inspect_app.command("resources")
def inspect_resources(
    spec: Optional[str] = typer.Argument(None, help="OpenAPI spec file or URL."),
    nesting: Optional[NestingStrategy] = typer.Option(
        None, "--nesting", help="Resource nesting strategy.", case_sensitive=False
    ),
) -> None:
    """Show the resource tree and the operations on each resource.

    Example::

        sdkgen inspect resources openapi.yaml
        sdkgen inspect resources openapi.yaml --nesting flat
    """
    definition = _load(spec, nesting)
    if not definition.resources:
        info("No resources found.")
        return

    if get_output().format == OutputFormat.JSON:
        format_response(
            {name: r.model_dump(mode="json") for name, r in definition.resources.items()}
        )
        return

    nodes = [_resource_node(name, r) for name, r in definition.resources.items()]
    get_output().print_tree(definition.info.title, nodes)


@inspect_app.command("operations")
def inspect_operations(
    spec: Optional[str] = typer.Argument(None, help="OpenAPI spec file or URL."),
    nesting: Optional[NestingStrategy] = typer.Option(
        None, "--nesting", help="Resource nesting strategy.", case_sensitive=False
    ),
) -> None:
    """List every operation with the resource it lands on.

    Example::

        sdkgen inspect operations openapi.yaml
        sdkgen --json inspect operations openapi.yaml
    """
    from sdkgen.generator.resource_tree import iter_resources

    definition = _load(spec, nesting)
    rows = [
        [
            "  " * depth + resource.name,
            op.method.value.upper(),
            op.path,
            op.id,
            op.request_type if op.has_request_body else "",
            op.return_type,
        ]
        for depth, resource in iter_resources(definition.resources)
        for op in resource.operations
    ]
    if not rows:
        info("No operations found.")
        return
    get_output().print_table(
        ["Resource", "Method", "Path", "Operation", "Body", "Returns"],
        rows,
        title=f"Operations ({len(rows)})",
    )


@inspect_app.command("models")
def inspect_models(
    spec: Optional[str] = typer.Argument(None, help="OpenAPI spec file or URL."),
) -> None:
    """List the models the SDK would define, inline hoists included.

    Example::

        sdkgen inspect models openapi.yaml
    """
    definition = _load(spec)
    if not definition.models:
        info("No models found.")
        return

    rows = [
        [
            model.name,
            ", ".join(f"{p.name}: {p.type}" for p in model.properties),
            ", ".join(model.required),
        ]
        for model in definition.models
    ]
    get_output().print_table(
        ["Model", "Properties", "Required"],
        rows,
        title=f"Models ({len(rows)})",
    )


@inspect_app.command("info")
def inspect_info(
    spec: Optional[str] = typer.Argument(None, help="OpenAPI spec file or URL."),
) -> None:
    """Show API metadata as the SDK would record it.

    Example::

        sdkgen inspect info openapi.yaml
    """
    from sdkgen.commands.generate import count_operations

    definition = _load(spec)
    format_response(
        {
            "title": definition.info.title,
            "version": definition.info.version,
            "base_url": definition.info.base_url,
            "description": definition.info.description,
            "openapi_version": definition.openapi_version,
            "resources": len(definition.resources),
            "operations": count_operations(definition),
            "models": len(definition.models),
        }
    )
