"""Follow ``$ref`` Reference Objects in the structural parts of an OpenAPI document.

OpenAPI lets path items, request bodies, and responses be written as
Reference Objects, e.g. ``{"$ref": "#/components/responses/NotFound"}``.
The extractor needs the referenced object to find the schema it declares, so
this module follows those pointers.

Schemas are deliberately *not* inlined: a ``$ref`` inside a schema body is left
untouched and resolved later by the validator against the registered
``#/components/schemas/<name>`` entries.

Only internal references (those starting with ``#/``) are supported.
External file or URL references raise :class:`~speccheck.exceptions.SpecFormatError`.
"""

from __future__ import annotations

from typing import Any

from speccheck.exceptions import SpecFormatError


def resolve_reference(obj: Any, root: dict[str, Any]) -> Any:
    """Return the object *obj* refers to, following chained references.

    Non-reference values are returned unchanged. A reference whose target is
    itself a reference is followed until a concrete object is reached.

    Args:
        obj: A value from the spec, possibly ``{"$ref": "#/..."}``.
        root: The root spec dictionary to resolve against.

    Returns:
        The referenced value (the original object, not a copy).

    Raises:
        SpecFormatError: If a reference is external, points nowhere, or the
            chain of references loops back on itself.

    Example::

        response = resolve_reference(
            {"$ref": "#/components/responses/NotFound"}, raw_spec
        )
        response["content"]["application/json"]["schema"]
    """
    seen: set[str] = set()
    while isinstance(obj, dict) and "$ref" in obj:
        ref = obj["$ref"]
        if not isinstance(ref, str):
            raise SpecFormatError(f"Invalid $ref value: {ref!r}")
        if ref in seen:
            raise SpecFormatError(f"Circular $ref chain at '{ref}'")
        seen.add(ref)
        obj = _resolve_ref(ref, root)
    return obj


def _resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single ``$ref`` string against the root spec.

    Parses JSON Pointer references like ``#/components/responses/NotFound``
    and navigates the root dict to locate the referenced value. Handles
    RFC 6901 escaping (``~0`` for ``~``, ``~1`` for ``/``).
    """
    if not ref.startswith("#/"):
        raise SpecFormatError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecFormatError(
                    f"Cannot resolve $ref '{ref}': "
                    f"key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecFormatError(
                    f"Cannot resolve $ref '{ref}': "
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecFormatError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current
