"""Generate command -- write an SDK for an OpenAPI document.

Implements ``sdkgen generate``. Positional arguments mirror the classic
``<spec> <output dir> <version>`` invocation; every value can also come
from ``SDKGEN_*`` environment variables or ``sdkgen.json`` (see
:func:`~sdkgen.config.resolve_config`).
"""

from __future__ import annotations

from typing import Iterable, Optional

import typer

from sdkgen.exceptions import InvalidUsageError, SdkgenError
from sdkgen.models import GeneratorConfig, NestingStrategy, Resource, SdkDefinition
from sdkgen.output import (
    OutputFormat,
    debug,
    error,
    format_response,
    get_output,
    info,
    progress,
    success,
    suggest,
    warning,
)


def load_definition(config: GeneratorConfig) -> SdkDefinition:
    """Load, validate and extract the document named by *config*.

    Raises:
        InvalidUsageError: If no spec is configured.
        SpecParseError: If the document cannot be loaded or resolved.
    """
    from sdkgen.parser import load_spec, validate_openapi_version
    from sdkgen.parser.extractor import extract_sdk

    if not config.spec:
        raise InvalidUsageError(
            "No OpenAPI spec given. Pass it as an argument, set SDKGEN_SPEC, "
            "or run: sdkgen init --spec <file>"
        )

    progress(f"Loading spec from {config.spec}")
    raw = load_spec(config.spec)
    version = validate_openapi_version(raw)
    debug(f"OpenAPI version {version}, nesting strategy '{config.nesting.value}'")
    return extract_sdk(
        raw,
        version,
        sdk_version=config.sdk_version,
        base_url=config.base_url,
        nesting=config.nesting,
    )


def count_operations(definition: SdkDefinition) -> int:
    """Total operations across every resource, nested ones included."""

    def _count(resources: Iterable[Resource]) -> int:
        return sum(len(r.operations) + _count(r.sub_resources.values()) for r in resources)

    return _count(definition.resources.values())


def generate_command(
    spec: Optional[str] = typer.Argument(
        None, help="OpenAPI spec file or URL ('-' for stdin)."
    ),
    output_dir: Optional[str] = typer.Argument(
        None, help="Directory to write the SDK to [default: ./sdk]."
    ),
    sdk_version: Optional[str] = typer.Argument(
        None, help="SDK version [default: info.version of the spec]."
    ),
    nesting: Optional[NestingStrategy] = typer.Option(
        None, "--nesting", help="Resource nesting strategy.", case_sensitive=False
    ),
    package_name: Optional[str] = typer.Option(
        None, "--package-name", help="Import name of the generated package."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the base URL from servers[0]."
    ),
) -> None:
    """Generate a Python SDK from an OpenAPI spec.

    Example::

        sdkgen generate openapi.yaml ./sdk 1.2.0
        sdkgen generate https://api.example.com/openapi.json --nesting flat
        sdkgen -v generate            # spec and output dir from sdkgen.json
    """
    from sdkgen.config import resolve_config
    from sdkgen.emitter import generate_sdk

    try:
        config = resolve_config(
            spec=spec,
            output_dir=output_dir,
            sdk_version=sdk_version,
            nesting=nesting,
            package_name=package_name,
            base_url=base_url,
        )
        debug(f"Output directory: {config.output_dir}")
        definition = load_definition(config)
        info(
            f"{definition.info.title} v{definition.info.version}: "
            f"{len(definition.resources)} resource(s), "
            f"{count_operations(definition)} operation(s), "
            f"{len(definition.models)} model(s)"
        )
        if not definition.resources:
            warning("The document defines no operations; the SDK only exposes its raw client.")
        written = generate_sdk(definition, config.output_dir, package_name=config.package_name)
    except SdkgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if get_output().format == OutputFormat.JSON:
        format_response(
            {
                "output_dir": str(written),
                "version": definition.info.version,
                "resources": sorted(definition.resources),
                "models": [m.name for m in definition.models],
            }
        )
    success(f"SDK successfully generated in {config.output_dir}")
    suggest(f"Install it: pip install {config.output_dir}")
