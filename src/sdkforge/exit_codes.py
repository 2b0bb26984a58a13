"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sdkforge.exceptions.SdkforgeError` subclass.
Build scripts can inspect the exit code to tell a broken spec apart from a
broken template without parsing stderr.

Example::

    $ sdkforge generate broken.yaml
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The API description could not be parsed or validated."""

EXIT_EMITTER_ERROR = 8
"""An artifact template could not be found or failed to render."""
