"""Exception hierarchy for sdkgen.

All exceptions inherit from :class:`SdkgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sdkgen.exit_codes`.
The top-level error handler in :func:`sdkgen.app.main` catches
``SdkgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SdkgenError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- SpecParseError       (exit 3)
    +-- GenerationError      (exit 4)
    +-- ConfigError          (exit 1)
    +-- SchemaRegistryError  (exit 1)
"""

from sdkgen.exit_codes import (
    EXIT_GENERATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SdkgenError(Exception):
    """Base exception for all sdkgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`sdkgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SdkgenError):
    """Raised for invalid CLI arguments or missing required inputs."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SdkgenError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or resolved."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class GenerationError(SdkgenError):
    """Raised when a template fails to render or an output file cannot be written."""

    exit_code = EXIT_GENERATION_ERROR


class ConfigError(SdkgenError):
    """Raised for configuration problems (invalid JSON, unknown nesting strategy, ...)."""

    exit_code = EXIT_GENERIC_FAILURE


class SchemaRegistryError(SdkgenError):
    """Raised when a frozen :class:`~sdkgen.schema.registry.SchemaRegistry` is written to."""

    exit_code = EXIT_GENERIC_FAILURE
