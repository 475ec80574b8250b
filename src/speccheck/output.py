"""Terminal output for the speccheck CLI.

Reports and tables are data and go to **stdout**; everything else
(pass/fail lines, warnings, errors, debug traces) is a diagnostic and goes
to **stderr**, so ``speccheck --json schema X payload.json | jq`` always
sees clean JSON.

The format is picked once per invocation:

* ``RICH`` -- styled tables and highlighted JSON, used for interactive
  terminals when colour is allowed.
* ``PLAIN`` -- tab-separated rows, used when stdout is piped or colour is
  off (``NO_COLOR``, ``TERM=dumb``, ``--no-color``).
* ``JSON`` -- machine-readable, selected with ``--json``.

:func:`~speccheck.app.main_callback` installs an :class:`OutputManager` with
:func:`set_output`; commands use the module-level helpers.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from speccheck.models import ValidationReport


class OutputFormat(str, Enum):
    """Output formats; ``AUTO`` picks ``RICH`` or ``PLAIN`` from the terminal."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def _to_json(data: Any, indent: Optional[int] = 2) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


class OutputManager:
    """Holds the output preferences of one CLI invocation.

    Args:
        format: Requested format. ``AUTO`` resolves to ``RICH`` on a colour
            TTY and ``PLAIN`` otherwise.
        no_color: Strip colour and markup from every message.
        quiet: Drop informational and success messages.
        verbose: Show :meth:`debug` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Write one line of raw text to stdout."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Write a structured value (a report, the config) to stdout."""
        if self._format == OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        elif isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, (dict, list)):
                    value = _to_json(value, indent=None)
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                self.print_data(_to_json(item, indent=None))
        else:
            self.print_data(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows to stdout.

        JSON mode emits a list of objects keyed by header, plain mode emits
        tab-separated lines with a header line, and rich mode draws a table.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    def print_report(self, label: str, report: ValidationReport) -> None:
        """Show one validation outcome as ``<label>: Passed!`` or ``<label>: Failed!``.

        A failed report is followed by its errors as a table on stdout.
        """
        if report.skipped:
            self.info(f"{label}: nothing to validate (no JSON schema declared)")
        elif report.valid:
            self.success(f"{label}: Passed!")
        else:
            self.error(f"{label}: Failed!")
            rows = [
                [detail.instance_path or "/", detail.keyword, detail.message]
                for detail in report.errors or []
            ]
            self.print_table(
                ["Instance path", "Keyword", "Message"], rows, title=f"{label} errors"
            )

    # --- stderr ---

    def _diagnostic(self, message: str, prefix: str = "", style: str = "") -> None:
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return
        head = f"[{style}]{escape(prefix)}[/{style}]" if prefix and style else escape(prefix)
        body = escape(message)
        if style and not prefix:
            body = f"[{style}]{body}[/{style}]"
        self._stderr.print(head + body)

    def info(self, message: str) -> None:
        """Informational message; hidden by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        """Green message; hidden by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message, style="green")

    def warning(self, message: str) -> None:
        self._diagnostic(message, prefix="Warning: ", style="yellow")

    def error(self, message: str) -> None:
        """Error message; always shown."""
        self._diagnostic(message, prefix="Error: ", style="bold red")

    def debug(self, message: str) -> None:
        """Trace message; shown only with ``--verbose``."""
        if self._verbose:
            self._diagnostic(message, prefix="[debug] ", style="dim")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb`` turns colour off."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one if needed."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def print_report(label: str, report: ValidationReport) -> None:
    get_output().print_report(label, report)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
