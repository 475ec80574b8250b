"""Look up schemas and operations in a loaded :class:`~speccheck.models.SpecDocument`.

These are pure functions over an immutable document. Every miss is an
exception from the :class:`~speccheck.exceptions.SpecLookupError` family;
nothing falls back to an empty or default schema.

The one exception to "a miss is an error" is a status code that *is* declared
but has no JSON schema: :func:`resolve_response_schema` returns ``None`` there,
meaning there is nothing to validate.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, Union

from speccheck.exceptions import (
    MethodNotFoundError,
    PathNotFoundError,
    SchemaNotFoundError,
    StatusNotFoundError,
)
from speccheck.models import (
    HTTPMethod,
    OperationDefinition,
    SchemaBody,
    SpecDocument,
)


def resolve_schema(
    doc: SpecDocument, name: str
) -> tuple[SchemaBody, Mapping[str, SchemaBody]]:
    """Return the named component schema and a read-only view of all schemas.

    The mapping is returned alongside so the caller can register every schema
    with the validator before compiling the target. It is a view of the
    document's own mapping and cannot be used to modify it.

    Raises:
        SchemaNotFoundError: If *name* is not in ``components.schemas``.
    """
    try:
        schema = doc.components_schemas[name]
    except KeyError:
        raise SchemaNotFoundError(name) from None
    return schema, MappingProxyType(doc.components_schemas)


def resolve_operation(
    doc: SpecDocument, path_url: str, method: Union[str, HTTPMethod]
) -> OperationDefinition:
    """Return the operation declared for *path_url* and *method*.

    *path_url* must match a path template exactly (``/pets/{id}``, not
    ``/pets/42``). *method* is matched case-insensitively.

    Raises:
        PathNotFoundError: If the path template is not declared.
        MethodNotFoundError: If the path is declared without that method.
    """
    methods = doc.paths.get(path_url)
    if methods is None:
        raise PathNotFoundError(path_url)

    method_str = method.value if isinstance(method, HTTPMethod) else str(method)
    try:
        http_method = HTTPMethod(method_str.lower())
    except ValueError:
        raise MethodNotFoundError(path_url, method_str) from None

    operation = methods.get(http_method)
    if operation is None:
        raise MethodNotFoundError(path_url, method_str)
    return operation


def resolve_request_schema(op: OperationDefinition) -> Optional[SchemaBody]:
    """Return the JSON request body schema, or ``None`` if none is declared."""
    return op.request_schema


def resolve_response_schema(
    op: OperationDefinition, status_code: Union[str, int]
) -> Optional[SchemaBody]:
    """Return the JSON response schema declared for *status_code*.

    Status codes are compared as strings, so ``200`` and ``"200"`` are the
    same. Wildcards such as ``default`` or ``2XX`` only match when requested
    literally.

    Returns:
        The schema, or ``None`` when the status is declared without a JSON
        schema.

    Raises:
        StatusNotFoundError: If the operation does not declare *status_code*.
    """
    status = str(status_code)
    if status not in op.responses_by_status:
        raise StatusNotFoundError(status, op.path, op.method.value)
    return op.responses_by_status[status]
