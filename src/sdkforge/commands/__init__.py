"""Built-in CLI sub-commands for sdkforge.

* :mod:`~sdkforge.commands.generate` -- render client code for a spec.
* :mod:`~sdkforge.commands.inspect` -- show the names and client groups the
  generator would assign.
* :mod:`~sdkforge.commands.config` -- view and modify global settings.

``generate`` is a plain callback registered on the root app; ``inspect``
and ``config`` are :class:`typer.Typer` sub-applications.
"""
