"""Validate commands -- check JSON payloads against the spec.

Provides the two top-level validation commands:

* ``speccheck schema NAME [PAYLOAD]`` -- validate against a component schema.
* ``speccheck operation PATH METHOD STATUS`` -- validate a request and/or
  response payload against an operation.

Payloads are read from JSON files, or from stdin when ``-`` is given. The
command exits with :data:`~speccheck.exit_codes.EXIT_VALIDATION_FAILED` when
any payload is invalid, and with the error's own exit code when the spec
cannot be loaded or the requested schema/operation is not declared.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from speccheck.exceptions import InvalidUsageError, SpeccheckError
from speccheck.exit_codes import EXIT_INVALID_USAGE, EXIT_VALIDATION_FAILED
from speccheck.output import (
    OutputFormat,
    debug,
    error,
    format_response,
    get_output,
    print_report,
)
from speccheck.store import SpecStore


def load_store(spec: Optional[str]) -> SpecStore:
    """Build a :class:`SpecStore` for the effective spec location and load it.

    The location comes from :func:`~speccheck.config.resolve_config`; format
    checking follows the global config.
    """
    from speccheck.config import resolve_config
    from speccheck.validation.session import ValidatorSession

    config, location = resolve_config(cli_spec=spec)
    debug(f"Using spec: {location}")
    store = SpecStore(
        location,
        session=ValidatorSession(format_checks=config.validation.format_checks),
    )
    store.load()
    return store


def read_payload(source: str) -> Any:
    """Read and decode a JSON payload from a file path or ``-`` (stdin).

    Raises:
        InvalidUsageError: If the file is missing, unreadable, or not valid JSON.
    """
    if source == "-":
        content = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            raise InvalidUsageError(f"Payload file not found: {source}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidUsageError(f"Failed to read payload {source}: {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"Payload {source} is not valid JSON: {exc}") from exc


def schema_command(
    name: str = typer.Argument(help="Schema name under components.schemas."),
    payload: str = typer.Argument("-", help="JSON payload file, or '-' for stdin."),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file (JSON or YAML)."
    ),
) -> None:
    """Validate a JSON payload against a named component schema.

    Example::

        speccheck schema CallToolResponse response.json
        cat tool.json | speccheck schema ToolDefinition --json
    """
    from speccheck.api import validate_schema_by_name

    try:
        store = load_store(spec)
        instance = read_payload(payload)
        report = validate_schema_by_name(store.source or "", name, instance, store=store)
    except SpeccheckError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if get_output().format == OutputFormat.JSON:
        format_response(report.model_dump(mode="json"))
    else:
        print_report("Validation", report)

    if not report.valid:
        raise typer.Exit(code=EXIT_VALIDATION_FAILED)


def operation_command(
    path: str = typer.Argument(help="Path template, e.g. /tools/call."),
    method: str = typer.Argument(help="HTTP method (any case)."),
    status: str = typer.Argument(help="Response status code, e.g. 200."),
    request: Optional[str] = typer.Option(
        None, "--request", "-r", help="JSON request payload file."
    ),
    response: Optional[str] = typer.Option(
        None, "--response", "-R", help="JSON response payload file."
    ),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file (JSON or YAML)."
    ),
) -> None:
    """Validate request and response payloads against an operation.

    The response payload is checked against the schema declared for STATUS;
    a status declared without a JSON schema is reported as "nothing to
    validate". An undeclared status is an error.

    Example::

        speccheck operation /tools/call POST 200 -r request.json -R response.json
    """
    from speccheck.api import NO_PAYLOAD, validate_operation

    if request is None and response is None:
        error("Give a --request and/or --response payload to validate.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    try:
        store = load_store(spec)
        request_instance = NO_PAYLOAD if request is None else read_payload(request)
        response_instance = None if response is None else read_payload(response)
        report = validate_operation(
            store.source or "",
            path,
            method,
            status,
            request_instance,
            response_instance,
            store=store,
        )
    except SpeccheckError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    # Without a response payload only the request report is meaningful.
    reports = {"request_report": report.request_report}
    if response is not None:
        reports["response_report"] = report.response_report

    if get_output().format == OutputFormat.JSON:
        format_response(
            {key: r.model_dump(mode="json") if r else None for key, r in reports.items()}
        )
    else:
        if report.request_report is not None:
            print_report("Request validation", report.request_report)
        if response is not None:
            print_report("Response validation", report.response_report)

    if any(r is not None and not r.valid for r in reports.values()):
        raise typer.Exit(code=EXIT_VALIDATION_FAILED)
