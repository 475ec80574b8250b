"""Index a raw OpenAPI document into a :class:`~speccheck.models.SpecDocument`.

This module walks the ``components.schemas`` and ``paths`` sections of a raw
OpenAPI dict and builds the lookup tables the resolvers need:

* ``components_schemas`` -- schema name to schema body, copied verbatim.
* ``paths`` -- path template to HTTP method to
  :class:`~speccheck.models.OperationDefinition`.

For each operation only ``application/json`` content is considered. The
request schema is taken from ``requestBody.content["application/json"].schema``
and each response schema from
``responses[status].content["application/json"].schema``. A declared status
without such a schema is still indexed, with ``None`` as its schema.

The document shape is checked here: a missing or malformed
``components.schemas`` or ``paths`` section raises
:class:`~speccheck.exceptions.SpecFormatError` instead of being treated as
empty.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from speccheck.exceptions import SpecFormatError
from speccheck.models import (
    HTTPMethod,
    OperationDefinition,
    SchemaBody,
    SpecDocument,
)
from speccheck.parser.loader import validate_openapi_version
from speccheck.parser.resolver import resolve_reference

JSON_MEDIA_TYPE = "application/json"

# HTTP methods recognized by OpenAPI
_HTTP_METHODS = tuple(m.value for m in HTTPMethod)


def extract_document(raw_spec: dict[str, Any], source: str) -> SpecDocument:
    """Build a :class:`~speccheck.models.SpecDocument` from a raw OpenAPI dict.

    Args:
        raw_spec: The raw OpenAPI spec dictionary as returned by
            :func:`~speccheck.parser.loader.load_spec`.
        source: Where the document came from; recorded on the result.

    Returns:
        The indexed document. Schema bodies are deep copies, so later
        changes to *raw_spec* do not leak into it.

    Raises:
        SpecFormatError: If the version is unsupported or either
            ``components.schemas`` or ``paths`` is missing or malformed.

    Example::

        raw = load_spec("specification/http/1.0/openapi.json")
        doc = extract_document(raw, "specification/http/1.0/openapi.json")
        doc.components_schemas["CallToolResponse"]
    """
    version = validate_openapi_version(raw_spec)
    info = raw_spec.get("info")
    title = info.get("title") if isinstance(info, dict) else None

    return SpecDocument(
        source=source,
        openapi_version=version,
        title=title,
        components_schemas=_extract_schemas(raw_spec),
        paths=_extract_paths(raw_spec),
    )


def _extract_schemas(spec: dict[str, Any]) -> dict[str, SchemaBody]:
    """Return a copy of ``components.schemas``, checking its shape."""
    components = spec.get("components")
    if not isinstance(components, dict):
        raise SpecFormatError("Spec has no 'components' section")

    schemas = components.get("schemas")
    if not isinstance(schemas, dict):
        raise SpecFormatError("Spec has no 'components.schemas' section")

    for name, schema in schemas.items():
        if not isinstance(schema, (dict, bool)):
            raise SpecFormatError(
                f"Schema '{name}' must be an object or boolean "
                f"(got {type(schema).__name__})"
            )

    return copy.deepcopy(schemas)


def _extract_paths(
    spec: dict[str, Any],
) -> dict[str, dict[HTTPMethod, OperationDefinition]]:
    """Index every path + HTTP method combination under ``paths``."""
    paths = spec.get("paths")
    if not isinstance(paths, dict):
        raise SpecFormatError("Spec has no 'paths' section")

    index: dict[str, dict[HTTPMethod, OperationDefinition]] = {}
    for path, path_item in paths.items():
        path_item = resolve_reference(path_item, spec)
        if not isinstance(path_item, dict):
            raise SpecFormatError(f"Path item for '{path}' must be an object")

        methods: dict[HTTPMethod, OperationDefinition] = {}
        for method_str in _HTTP_METHODS:
            operation = path_item.get(method_str)
            if operation is None:
                continue
            if not isinstance(operation, dict):
                raise SpecFormatError(
                    f"Operation {method_str.upper()} {path} must be an object"
                )
            methods[HTTPMethod(method_str)] = _extract_operation(
                spec, str(path), HTTPMethod(method_str), operation
            )
        index[str(path)] = methods

    return index


def _extract_operation(
    spec: dict[str, Any],
    path: str,
    method: HTTPMethod,
    operation: dict[str, Any],
) -> OperationDefinition:
    """Pull the JSON request and response schemas out of one operation."""
    request_body = operation.get("requestBody")
    request_schema = None
    if request_body is not None:
        request_schema = _json_schema_of(resolve_reference(request_body, spec))

    responses = operation.get("responses") or {}
    if not isinstance(responses, dict):
        raise SpecFormatError(
            f"Responses of {method.value.upper()} {path} must be an object"
        )

    responses_by_status: dict[str, Optional[SchemaBody]] = {}
    for status_code, response in responses.items():
        # YAML parses unquoted status codes as integers
        responses_by_status[str(status_code)] = _json_schema_of(
            resolve_reference(response, spec)
        )

    return OperationDefinition(
        path=path,
        method=method,
        operation_id=operation.get("operationId"),
        request_schema=request_schema,
        responses_by_status=responses_by_status,
    )


def _json_schema_of(obj: Any) -> Optional[SchemaBody]:
    """Return ``obj.content["application/json"].schema`` or ``None``."""
    if not isinstance(obj, dict):
        return None
    content = obj.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    if not isinstance(media, dict) or "schema" not in media:
        return None
    return copy.deepcopy(media["schema"])
