"""Typer application and CLI entry point for sdkforge.

This module wires the top-level Typer application together: the root
callback that sets up output and logging, and the built-in sub-commands
(``generate``, ``inspect``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~sdkforge.exceptions.SdkforgeError` exits with the error's exit
code; any other exception is written to a crash log under the data
directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from sdkforge import __version__
from sdkforge.commands.config import config_app
from sdkforge.commands.generate import generate_command
from sdkforge.commands.inspect import inspect_app
from sdkforge.exit_codes import EXIT_GENERIC_FAILURE

EXIT_CANCELLED = 130

app = typer.Typer(
    name="sdkforge",
    help="Generate named, grouped client SDK code from OpenAPI and Swagger specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Preview operation names and client groups.")
app.add_typer(config_app, name="config", help="Manage global generator settings.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sdkforge {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send library log records to stderr through Rich when *verbose* is set."""
    root = logging.getLogger("sdkforge")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    if not verbose:
        root.setLevel(logging.NOTSET)
        return

    handler = RichHandler(
        console=Console(file=sys.stderr, stderr=True),
        show_path=False,
        show_time=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite files and skip confirmations."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~sdkforge.output.OutputManager`, configures
    logging and stores shared flags in ``ctx.obj``.
    """
    from sdkforge.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return its path."""
    from sdkforge.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``sdkforge`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from sdkforge.exceptions import SdkforgeError
        from sdkforge.output import error

        if isinstance(exc, SdkforgeError):
            error(str(exc))
            sys.exit(exc.exit_code)

        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
