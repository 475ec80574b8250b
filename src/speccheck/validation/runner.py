"""Run one payload through the validator and shape the outcome into a report.

:func:`validate` is the single entry point. It registers the document's
component schemas with a :class:`~speccheck.validation.session.ValidatorSession`,
compiles the target schema, collects *every* violation (all-errors mode, not
fail-fast), and returns an immutable
:class:`~speccheck.models.ValidationReport`.

A non-conforming payload is a normal result (``valid=False``), never an
exception.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from jsonschema.exceptions import ValidationError
from referencing.exceptions import Unresolvable

from speccheck.exceptions import SpecFormatError
from speccheck.models import ErrorDetail, SchemaBody, ValidationReport
from speccheck.validation.session import ValidatorSession


def validate(
    schema: SchemaBody,
    all_schemas: Mapping[str, SchemaBody],
    instance: Any,
    session: Optional[ValidatorSession] = None,
) -> ValidationReport:
    """Validate *instance* against *schema*.

    Args:
        schema: The schema body to validate against.
        all_schemas: Every named schema of the document, registered under
            ``#/components/schemas/<name>`` so ``$ref`` pointers resolve.
        instance: The decoded JSON payload.
        session: The session to register and compile in. A throwaway
            session is used when omitted.

    Returns:
        A report with ``errors=None`` when valid, or the ordered list of
        violations otherwise. Errors are ordered by instance path, then by
        schema path, so repeated runs produce identical reports.

    Raises:
        SchemaConflictError: If *all_schemas* disagrees with a schema already
            registered in *session*.
        SpecFormatError: If *schema* is malformed or contains a ``$ref`` that
            cannot be resolved.
    """
    if session is None:
        session = ValidatorSession()

    session.register_all(all_schemas)
    validator = session.compile(schema)

    try:
        errors = sorted(validator.iter_errors(instance), key=_sort_key)
    except Unresolvable as exc:
        raise SpecFormatError(f"Unresolvable $ref in schema: {exc}") from exc

    if not errors:
        return ValidationReport(valid=True, errors=None)
    return ValidationReport(
        valid=False, errors=[to_error_detail(error) for error in errors]
    )


def to_error_detail(error: ValidationError) -> ErrorDetail:
    """Convert a ``jsonschema`` error into an :class:`ErrorDetail`.

    The message and failing keyword are taken as-is from the validator.
    """
    return ErrorDetail(
        instance_path=json_pointer(error.absolute_path),
        schema_path="#" + json_pointer(error.absolute_schema_path),
        keyword=str(error.validator),
        message=error.message,
    )


def json_pointer(parts: Iterable[Any]) -> str:
    """Render path segments as an RFC 6901 JSON pointer (``""`` for the root)."""
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1") for part in parts
    )


def _path_key(parts: Iterable[Any]) -> list[tuple[int, Any]]:
    # Array indices sort numerically and ahead of property names.
    return [(0, part) if isinstance(part, int) else (1, str(part)) for part in parts]


def _sort_key(error: ValidationError) -> tuple[list[tuple[int, Any]], ...]:
    return (_path_key(error.absolute_path), _path_key(error.absolute_schema_path))
