"""OpenAPI document input -- load, validate, resolve, and run the extraction pipeline.

Typical usage::

    from sdkgen.parser import load_spec, validate_openapi_version
    from sdkgen.parser.extractor import extract_sdk

    raw = load_spec("openapi.yaml")
    version = validate_openapi_version(raw)
    definition = extract_sdk(raw, version)

Sub-modules:

* :mod:`~sdkgen.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~sdkgen.parser.resolver` -- JSON pointer lookup and full ``$ref``
  dereferencing with cycle detection.
* :mod:`~sdkgen.parser.extractor` -- the normalize -> freeze -> extract
  pipeline producing a :class:`~sdkgen.models.SdkDefinition`. It is not
  re-exported here because it depends on :mod:`sdkgen.generator`, which in
  turn uses the resolver.
"""

from sdkgen.parser.loader import load_spec, validate_openapi_version
from sdkgen.parser.resolver import resolve_pointer, resolve_refs

__all__ = ["load_spec", "validate_openapi_version", "resolve_pointer", "resolve_refs"]
