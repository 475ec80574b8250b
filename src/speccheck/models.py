"""Canonical Pydantic models shared across all speccheck modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ValidationConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**Spec models** -- produced once by the parser and read by the resolvers:
    :class:`HTTPMethod`, :class:`OperationDefinition`, and :class:`SpecDocument`.

**Report models** -- produced by the validation runner:
    :class:`ErrorDetail`, :class:`ValidationReport`, and :class:`OperationReport`.

Spec and report models are frozen. Schema bodies are kept as plain dicts (or
booleans) and are never interpreted here; only the external validator reads
them.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SchemaBody = Union[dict[str, Any], bool]
"""A JSON Schema document: a mapping, or ``true``/``false``."""


# --- Config ---


class ValidationConfig(BaseModel):
    """Validator settings stored in :class:`GlobalConfig`."""

    format_checks: bool = Field(
        default=True,
        description="Enforce string formats such as uri, email, and uuid",
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/speccheck/config.json``.

    Loaded and saved by :func:`~speccheck.config.load_global_config` and
    :func:`~speccheck.config.save_global_config`. ``default_spec`` has the
    lowest precedence when resolving which spec file to load; see
    :func:`~speccheck.config.resolve_config`.
    """

    default_spec: Optional[str] = Field(
        default=None, description="Spec file used when --spec is not given"
    )
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Spec models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class OperationDefinition(BaseModel):
    """The request and response schemas of one (path, method) pair.

    ``request_schema`` is set only when the operation declares an
    ``application/json`` request body with a schema. ``responses_by_status``
    holds every declared status code; the value is ``None`` when that status
    has no JSON schema, which lets callers tell "nothing to validate" apart
    from "status not declared".
    """

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = None
    request_schema: Optional[SchemaBody] = None
    responses_by_status: dict[str, Optional[SchemaBody]] = Field(default_factory=dict)


class SpecDocument(BaseModel):
    """An indexed OpenAPI document.

    Built by :func:`~speccheck.parser.extractor.extract_document` and owned by
    a :class:`~speccheck.store.SpecStore`. Read-only for the lifetime of a
    validation session.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Where the document was loaded from")
    openapi_version: str
    title: Optional[str] = None
    components_schemas: dict[str, SchemaBody] = Field(default_factory=dict)
    paths: dict[str, dict[HTTPMethod, OperationDefinition]] = Field(
        default_factory=dict
    )


# --- Report models ---


class ErrorDetail(BaseModel):
    """One violation reported by the validator.

    ``instance_path`` and ``schema_path`` are JSON pointers; the root of the
    instance is ``""`` and schema paths are written as fragments
    (``#/properties/request/required``).
    """

    model_config = ConfigDict(frozen=True)

    instance_path: str
    schema_path: str
    keyword: str
    message: str


class ValidationReport(BaseModel):
    """Outcome of a single validation call.

    ``errors`` is ``None`` when the instance is valid and a non-empty list
    otherwise. ``skipped`` marks a report for which there was nothing to
    validate because the spec declares no JSON schema at that location.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: Optional[list[ErrorDetail]] = None
    skipped: bool = False

    @classmethod
    def nothing_to_validate(cls) -> ValidationReport:
        """Return the report used when no schema is declared."""
        return cls(valid=True, errors=None, skipped=True)


class OperationReport(BaseModel):
    """Request and response reports for one operation.

    ``request_report`` is ``None`` when no request payload was supplied.
    """

    model_config = ConfigDict(frozen=True)

    request_report: Optional[ValidationReport] = None
    response_report: ValidationReport

    @property
    def valid(self) -> bool:
        """``True`` when every produced report is valid."""
        if self.request_report is not None and not self.request_report.valid:
            return False
        return self.response_report.valid
