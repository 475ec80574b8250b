"""The ``speccheck`` command line.

Command layout::

    speccheck schema NAME [PAYLOAD]
    speccheck operation PATH METHOD STATUS [-r REQUEST] [-R RESPONSE]
    speccheck inspect schemas|paths
    speccheck config show|set|reset

:func:`main` is the console-script entry point. A
:class:`~speccheck.exceptions.SpeccheckError` that escapes a command ends
the process with that error's exit code; any other exception leaves a
traceback in a crash log under :func:`~speccheck.config.get_data_dir`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from speccheck import __version__
from speccheck.commands.config import config_app
from speccheck.commands.inspect import inspect_app
from speccheck.commands.validate import operation_command, schema_command
from speccheck.exceptions import SpeccheckError
from speccheck.exit_codes import EXIT_GENERIC_FAILURE
from speccheck.output import OutputFormat, OutputManager, error, set_output

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="speccheck",
    help="Validate JSON payloads against OpenAPI 3.x schemas.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("schema")(schema_command)
app.command("operation")(operation_command)
app.add_typer(inspect_app, name="inspect", help="List the schemas and operations of a spec.")
app.add_typer(config_app, name="config", help="Show or change saved settings.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"speccheck {__version__}")
        raise typer.Exit()


def _pick_format(json_output: bool, plain_output: bool) -> OutputFormat:
    """Flags win over the ``output.format`` setting; unknown settings mean auto."""
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN

    from speccheck.config import load_global_config

    configured = load_global_config().output.format
    try:
        return OutputFormat(configured)
    except ValueError:
        return OutputFormat.AUTO


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print reports as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print tab-separated text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print failures and data."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug traces."),
) -> None:
    """Validate JSON payloads against OpenAPI 3.x schemas."""
    set_output(
        OutputManager(
            format=_pick_format(json_output, plain_output),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[debug] %(name)s: %(message)s",
        )


def _on_sigint(signum: int, frame: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log(exc: BaseException) -> Path:
    """Save the traceback of *exc* and return the log's path."""
    from speccheck.config import get_data_dir

    log_path = get_data_dir() / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return log_path


def main() -> None:
    """Console-script entry point."""
    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        _on_sigint(signal.SIGINT, None)
    except SpeccheckError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
