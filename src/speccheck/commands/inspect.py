"""Inspect commands -- list what a spec declares.

Provides the ``speccheck inspect`` sub-command group with read-only commands
for viewing the component schemas and operations available for validation.
Both commands load the effective spec (see
:func:`~speccheck.config.resolve_config`) and print a table.
"""

from __future__ import annotations

from typing import Optional

import typer

from speccheck.commands.validate import load_store
from speccheck.exceptions import SpeccheckError
from speccheck.models import SpecDocument
from speccheck.output import error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load_document(spec: Optional[str]) -> SpecDocument:
    try:
        return load_store(spec).document
    except SpeccheckError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("schemas")
def inspect_schemas(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file (JSON or YAML)."
    ),
) -> None:
    """List all schemas under ``components.schemas``.

    Shows each schema's type and up to five property names.

    Example::

        speccheck inspect schemas
    """
    doc = _load_document(spec)
    if not doc.components_schemas:
        info("No schemas defined in this spec.")
        return

    rows: list[list[str]] = []
    for name, schema in sorted(doc.components_schemas.items()):
        if isinstance(schema, dict):
            schema_type = str(schema.get("type", "object"))
            prop_names = list(schema.get("properties", {}))
        else:
            schema_type = "true" if schema else "false"
            prop_names = []
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([name, schema_type, props])

    get_output().print_table(
        ["Schema", "Type", "Properties"], rows, title=f"Schemas ({len(rows)})"
    )


@inspect_app.command("paths")
def inspect_paths(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file (JSON or YAML)."
    ),
) -> None:
    """List every operation with its request schema and declared statuses.

    Statuses without a JSON schema are marked with ``*``.

    Example::

        speccheck inspect paths --spec openapi.yaml
    """
    doc = _load_document(spec)

    rows: list[list[str]] = []
    for path in sorted(doc.paths):
        for method, op in sorted(doc.paths[path].items(), key=lambda kv: kv[0].value):
            statuses = ", ".join(
                status if schema is not None else f"{status}*"
                for status, schema in op.responses_by_status.items()
            )
            rows.append([
                method.value.upper(),
                path,
                "yes" if op.request_schema is not None else "-",
                statuses or "-",
            ])

    title = f"{doc.title} -- Paths ({len(rows)})" if doc.title else f"Paths ({len(rows)})"
    get_output().print_table(
        ["Method", "Path", "Request schema", "Statuses"], rows, title=title
    )
