"""sdkgen -- Generate Python client SDKs from OpenAPI 3.0/3.1 specs.

This package turns an OpenAPI document into a template-ready intermediate
representation of *resources* (endpoint groups derived from URL paths) and
*models* (data types derived from named schemas), then renders a Python SDK
from that representation.

Typical workflow::

    sdkgen generate openapi.yaml ./sdk 1.2.0   # write the SDK to ./sdk
    sdkgen inspect resources openapi.yaml      # preview the resource tree

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
