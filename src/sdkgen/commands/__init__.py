"""Built-in CLI sub-commands for sdkgen.

* :mod:`~sdkgen.commands.generate` -- render an SDK from a spec.
* :mod:`~sdkgen.commands.inspect` -- preview resources, operations, models,
  and API info without writing anything.
* :mod:`~sdkgen.commands.init` -- validate a spec and save project
  settings to ``sdkgen.json``.

``generate`` and ``init`` are plain callbacks registered on the root app;
``inspect`` is a :class:`typer.Typer` sub-application.
"""
