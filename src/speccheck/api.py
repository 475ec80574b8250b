"""Caller-facing validation operations.

The two public functions cover the two ways the spec is used:

* :func:`validate_schema_by_name` -- check a payload against a named
  component schema.
* :func:`validate_operation` -- check a request and/or response payload
  against the schemas declared for a (path, method, status) triple.

Both take a spec location and obtain its :class:`~speccheck.store.SpecStore`
from a process-wide cache, so each file is parsed once no matter how many
payloads are checked against it. Pass ``store=`` to use a store you manage
yourself (for instance one with format checking disabled).
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Optional, Union

from speccheck.models import (
    HTTPMethod,
    OperationReport,
    SpecDocument,
    ValidationReport,
)
from speccheck.resolvers import (
    resolve_operation,
    resolve_request_schema,
    resolve_response_schema,
    resolve_schema,
)
from speccheck.store import SpecStore
from speccheck.validation.runner import validate

NO_PAYLOAD: Any = object()
"""Marks a payload that was not supplied, as opposed to a JSON ``null`` payload."""

_stores: dict[str, SpecStore] = {}
_stores_lock = threading.Lock()


def _store_key(spec_location: str) -> str:
    if spec_location == "-":
        return spec_location
    return str(Path(spec_location).resolve())


def get_store(spec_location: str) -> SpecStore:
    """Return the shared :class:`SpecStore` for *spec_location*, creating it on first use."""
    key = _store_key(spec_location)
    with _stores_lock:
        store = _stores.get(key)
        if store is None:
            store = SpecStore(spec_location)
            _stores[key] = store
        return store


def reset_stores() -> None:
    """Drop every cached store.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    with _stores_lock:
        _stores.clear()


def _load(
    spec_location: str, store: Optional[SpecStore]
) -> tuple[SpecStore, SpecDocument]:
    if store is None:
        store = get_store(spec_location)
        return store, store.load()
    return store, store.load(spec_location)


def validate_schema_by_name(
    spec_location: str,
    schema_name: str,
    instance: Any,
    *,
    store: Optional[SpecStore] = None,
) -> ValidationReport:
    """Validate *instance* against ``components.schemas[schema_name]``.

    Raises:
        SpecLoadError: If the spec cannot be read or parsed.
        SpecFormatError: If the spec does not have the expected shape.
        SchemaNotFoundError: If *schema_name* is not declared.

    Example::

        report = validate_schema_by_name(
            "specification/http/1.0/openapi.json",
            "CallToolResponse",
            {"call_id": "123e4567-e89b-12d3-a456-426614174000",
             "duration": 2, "success": True, "value": 3},
        )
        assert report.valid
    """
    store, doc = _load(spec_location, store)
    schema, all_schemas = resolve_schema(doc, schema_name)
    return validate(schema, all_schemas, instance, session=store.session)


def validate_operation(
    spec_location: str,
    path_url: str,
    method: Union[str, HTTPMethod],
    status_code: Union[str, int],
    request_instance: Any = NO_PAYLOAD,
    response_instance: Any = None,
    *,
    store: Optional[SpecStore] = None,
) -> OperationReport:
    """Validate request and response payloads against one operation.

    The operation and the response status are looked up before anything is
    validated, so a lookup failure aborts the whole call. The request and
    response are then validated independently; a failure in one never
    changes the other's report.

    Args:
        spec_location: Path to the spec file.
        path_url: Path template as written in the spec (``/tools/call``).
        method: HTTP method, any case.
        status_code: Response status to check against (``"200"`` or ``200``).
        request_instance: Request payload. When omitted (:data:`NO_PAYLOAD`)
            no request report is produced; ``None`` is validated as JSON
            ``null``.
        response_instance: Response payload. ``None`` is validated as JSON
            ``null``.

    Returns:
        An :class:`~speccheck.models.OperationReport`. A report is marked
        ``skipped`` when the spec declares no JSON schema to check against.

    Raises:
        PathNotFoundError: If *path_url* is not declared.
        MethodNotFoundError: If *method* is not declared on *path_url*.
        StatusNotFoundError: If *status_code* is not declared on the operation.
    """
    store, doc = _load(spec_location, store)
    op = resolve_operation(doc, path_url, method)
    response_schema = resolve_response_schema(op, status_code)

    request_report: Optional[ValidationReport] = None
    if request_instance is not NO_PAYLOAD:
        request_schema = resolve_request_schema(op)
        if request_schema is None:
            request_report = ValidationReport.nothing_to_validate()
        else:
            request_report = validate(
                request_schema,
                doc.components_schemas,
                request_instance,
                session=store.session,
            )

    if response_schema is None:
        response_report = ValidationReport.nothing_to_validate()
    else:
        response_report = validate(
            response_schema,
            doc.components_schemas,
            response_instance,
            session=store.session,
        )

    return OperationReport(
        request_report=request_report, response_report=response_report
    )
