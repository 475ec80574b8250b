"""OpenAPI spec parser -- load, follow Reference Objects, and index a document.

This sub-package turns a raw OpenAPI 3.x document (JSON or YAML, local file or
stdin) into a :class:`~speccheck.models.SpecDocument` that the resolvers can
query.

Typical usage::

    from speccheck.parser import load_spec, extract_document

    raw = load_spec("specification/http/1.0/openapi.json")
    doc = extract_document(raw, "specification/http/1.0/openapi.json")

Sub-modules:

* :mod:`~speccheck.parser.loader` -- I/O layer (file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~speccheck.parser.resolver` -- Follows ``$ref`` Reference Objects in
  path items, request bodies, and responses.
* :mod:`~speccheck.parser.extractor` -- Indexes component schemas and
  operations into a :class:`~speccheck.models.SpecDocument`.
"""

from speccheck.parser.extractor import extract_document
from speccheck.parser.loader import load_spec, validate_openapi_version

__all__ = ["load_spec", "validate_openapi_version", "extract_document"]
