"""Exception hierarchy for sdkforge.

All exceptions inherit from :class:`SdkforgeError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sdkforge.exit_codes`.
The top-level error handler in :func:`sdkforge.app.main` catches
``SdkforgeError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The naming and orchestration core never raises for naming edge cases;
unnamed paths, untagged operations and unmatched duplicate scans all have
built-in fallbacks. These errors belong to the surrounding layers.

Subclass hierarchy::

    SdkforgeError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- EmitterError        (exit 8)
    +-- ConfigError         (exit 1)
"""

from sdkforge.exit_codes import (
    EXIT_EMITTER_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SdkforgeError(Exception):
    """Base exception for all sdkforge errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`sdkforge.exit_codes`. The entry point catches
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


class InvalidUsageError(SdkforgeError):
    """Raised for invalid CLI arguments or unknown setting values."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SdkforgeError):
    """Raised when the API description cannot be loaded, parsed or validated."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class EmitterError(SdkforgeError):
    """Raised when an emitter template is missing or fails to render."""

    exit_code = EXIT_EMITTER_ERROR


class ConfigError(SdkforgeError):
    """Raised for configuration problems (invalid JSON/YAML, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
