"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sdkgen.exceptions.SdkgenError` subclass.
Build scripts can inspect the exit code to tell a broken spec from a broken
output directory without parsing stderr.

Example::

    $ sdkgen generate missing.yaml ./sdk
    $ echo $?
    3   # EXIT_SPEC_PARSE_ERROR -- the spec could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 3
"""The OpenAPI specification could not be loaded, parsed, or validated."""

EXIT_GENERATION_ERROR = 4
"""Rendering templates or writing the generated SDK failed."""
