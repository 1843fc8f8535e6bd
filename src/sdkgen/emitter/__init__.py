"""SDK emitter -- render a Python client package from an extraction result.

The emitter is the last stage of the pipeline. It consumes an
:class:`~sdkgen.models.SdkDefinition` and writes files; it never looks at
the raw document again (the dereferenced variant it ships as
``openapi.json`` travels inside the definition).

Sub-modules:

* :mod:`~sdkgen.emitter.renderer` -- Jinja2 environment, template views,
  and file writing.
* :mod:`~sdkgen.emitter.annotations` -- type string -> Python annotation
  mapping for the generated models.
"""

from sdkgen.emitter.renderer import generate_sdk

__all__ = ["generate_sdk"]
