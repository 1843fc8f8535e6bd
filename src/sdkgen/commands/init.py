"""Init command -- record generator settings for a project.

Implements ``sdkgen init``. It loads and validates the spec once, so that
a broken document is reported at setup time rather than on the first
``generate``, and then writes a project-local ``sdkgen.json``. Later
``sdkgen generate`` runs in the same directory need no arguments.
"""

from __future__ import annotations

from typing import Optional

import typer

from sdkgen.exceptions import SdkgenError
from sdkgen.exit_codes import EXIT_GENERIC_FAILURE
from sdkgen.models import NestingStrategy
from sdkgen.output import debug, error, info, success, suggest


def init_command(
    spec: str = typer.Option(
        ...,
        "--spec",
        "-s",
        help="OpenAPI spec URL or file path.",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Directory the SDK is written to."
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
    """Validate a spec and save project settings to ``sdkgen.json``.

    Stdin (``-``) is refused because the saved settings must be
    replayable by a later ``generate``.

    Raises:
        typer.Exit: With the error's exit code when the spec cannot be
            loaded or validated, or the config cannot be written.

    Example::

        sdkgen init --spec ./openapi.yaml
        sdkgen init --spec https://api.example.com/openapi.json -o ./client --nesting flat
    """
    from sdkgen.config import project_config_path, resolve_config, save_project_config
    from sdkgen.exceptions import InvalidUsageError
    from sdkgen.parser import load_spec, validate_openapi_version

    try:
        if spec == "-":
            raise InvalidUsageError("Cannot record stdin as the spec source; pass a file or URL.")

        info(f"Fetching spec from: {spec}")
        raw = load_spec(spec)
        version = validate_openapi_version(raw)
        title = (raw.get("info") or {}).get("title") or "Untitled API"
        info(f"Validated: {title} (OpenAPI {version})")

        if project_config_path().exists():
            info(f"{project_config_path().name} already exists and will be overwritten.")

        config = resolve_config(
            spec=spec,
            output_dir=output_dir,
            nesting=nesting,
            package_name=package_name,
            base_url=base_url,
        )
        path = save_project_config(config)
    except SdkgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except OSError as exc:
        error(f"Could not write project config: {exc}")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None

    debug(f"Wrote {path}")
    success(f"Project config written to {path.name}.")
    suggest("Preview the SDK: sdkgen inspect resources")
    suggest("Generate it: sdkgen generate")
