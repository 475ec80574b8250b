"""speccheck -- Validate JSON payloads against the schemas of an OpenAPI document.

This package loads an OpenAPI 3.x specification once, looks up a named
component schema or the request/response schemas of a (path, method, status)
operation, and validates payloads against them with :mod:`jsonschema`
(draft 2020-12, format checking, all errors reported at once).

Typical usage::

    from speccheck.api import validate_schema_by_name, validate_operation

    report = validate_schema_by_name(
        "specification/http/1.0/openapi.json", "CallToolResponse", payload
    )
    result = validate_operation(
        "specification/http/1.0/openapi.json", "/tools/call", "POST", "200",
        request_payload, response_payload,
    )

Modules:
    api: The two caller-facing validation operations.
    store: :class:`~speccheck.store.SpecStore`, one loaded spec per session.
    resolvers: Schema and operation lookups over a loaded document.
    validation: Validator session and the validation runner.
    parser: Loading and indexing of OpenAPI documents.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"
