"""Session-scoped wrapper around the ``jsonschema`` validator.

A :class:`ValidatorSession` owns the only mutable state in speccheck: the set
of component schemas registered for ``$ref`` resolution and a cache of
compiled validators. One session belongs to one
:class:`~speccheck.store.SpecStore`; reloading the store clears it.

Registered schemas are published to the validator as a single
:mod:`referencing` resource at :data:`DOCUMENT_URI` shaped like an OpenAPI
document::

    {"components": {"schemas": {"<name>": <body>, ...}}}

so that every ``{"$ref": "#/components/schemas/<name>"}`` found in a schema
resolves against it. The schema being compiled is placed in the same resource
(under :data:`_TARGET_KEY`) and referenced from there, which keeps its own
fragment-only references pointing at that document.

Registration and compilation are serialised with a lock, so concurrent callers
cannot interleave conflicting registrations under the same reference path.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Mapping, Optional

from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.exceptions import SchemaError
from referencing import Registry
from referencing.jsonschema import DRAFT202012

from speccheck.exceptions import SchemaConflictError, SpecFormatError
from speccheck.models import SchemaBody

logger = logging.getLogger(__name__)

DOCUMENT_URI = "urn:speccheck:openapi"
"""Base URI of the registered document resource."""

_TARGET_KEY = "x-speccheck-target"


def schema_ref(name: str) -> str:
    """Return the canonical reference path for a component schema."""
    return f"#/components/schemas/{name}"


def _canonical(schema: Any) -> str:
    return json.dumps(schema, sort_keys=True, separators=(",", ":"), default=str)


class ValidatorSession:
    """Registered schemas plus a compiled-validator cache.

    Args:
        format_checks: Enforce ``format`` keywords (``uri``, ``email``,
            ``uuid``, ...). When ``False`` formats are annotations only.

    Example::

        session = ValidatorSession()
        session.register_all(doc.components_schemas)
        validator = session.compile(doc.components_schemas["CallToolResponse"])
        errors = list(validator.iter_errors(payload))
    """

    def __init__(self, format_checks: bool = True) -> None:
        self._format_checker: Optional[FormatChecker] = (
            FormatChecker() if format_checks else None
        )
        self._lock = threading.Lock()
        self._schemas: dict[str, SchemaBody] = {}
        self._compiled: dict[str, Draft202012Validator] = {}

    @property
    def format_checks(self) -> bool:
        """Whether ``format`` keywords are enforced."""
        return self._format_checker is not None

    @property
    def registered(self) -> list[str]:
        """Names of all registered schemas, in registration order."""
        with self._lock:
            return list(self._schemas)

    def register(self, name: str, schema: SchemaBody) -> None:
        """Register *schema* under ``#/components/schemas/<name>``.

        Re-registering an identical body is a no-op.

        Raises:
            SchemaConflictError: If *name* is already registered with a
                different body.
        """
        with self._lock:
            self._register_locked(name, schema)

    def register_all(self, schemas: Mapping[str, SchemaBody]) -> None:
        """Register every entry of *schemas*.

        All names are checked for conflicts before any is added, so a
        conflicting mapping leaves the session unchanged.
        """
        with self._lock:
            for name, schema in schemas.items():
                existing = self._schemas.get(name)
                if existing is not None and existing != schema:
                    raise SchemaConflictError(name)
            for name, schema in schemas.items():
                self._register_locked(name, schema)

    def _register_locked(self, name: str, schema: SchemaBody) -> None:
        if name in self._schemas:
            if self._schemas[name] != schema:
                raise SchemaConflictError(name)
            return
        self._schemas[name] = schema
        # Compiled validators hold the old registry.
        self._compiled.clear()
        logger.debug("Registered schema %s", schema_ref(name))

    def compile(self, schema: SchemaBody) -> Draft202012Validator:
        """Return a validator for *schema*, reusing a cached one when possible.

        Raises:
            SpecFormatError: If *schema* is not a valid draft 2020-12 schema.
        """
        key = _canonical(schema)
        with self._lock:
            validator = self._compiled.get(key)
            if validator is not None:
                return validator

            try:
                Draft202012Validator.check_schema(schema)
            except SchemaError as exc:
                raise SpecFormatError(f"Invalid schema: {exc.message}") from exc

            document = {
                "components": {"schemas": dict(self._schemas)},
                _TARGET_KEY: schema,
            }
            registry: Registry = Registry().with_resource(
                DOCUMENT_URI, DRAFT202012.create_resource(document)
            )
            validator = Draft202012Validator(
                {"$ref": f"{DOCUMENT_URI}#/{_TARGET_KEY}"},
                registry=registry,
                format_checker=self._format_checker,
            )
            self._compiled[key] = validator
            logger.debug(
                "Compiled validator against %d registered schemas",
                len(self._schemas),
            )
            return validator

    def clear(self) -> None:
        """Forget every registered schema and compiled validator."""
        with self._lock:
            self._schemas.clear()
            self._compiled.clear()
        logger.debug("Validator session cleared")
