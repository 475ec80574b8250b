"""Exception hierarchy for speccheck.

All exceptions inherit from :class:`SpeccheckError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`speccheck.exit_codes`.
The CLI catches ``SpeccheckError`` and exits with the appropriate code, while
unexpected exceptions produce a crash log and exit with
:data:`EXIT_GENERIC_FAILURE`.

A payload that does not conform to its schema is *not* an exception: it is an
ordinary :class:`~speccheck.models.ValidationReport` with ``valid=False``.
The errors below cover load-time and lookup-time problems only.

Subclass hierarchy::

    SpeccheckError              (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- SpecLoadError           (exit 7)
    +-- SpecFormatError         (exit 8)
    +-- SpecLookupError         (exit 4)
    |   +-- SchemaNotFoundError
    |   +-- PathNotFoundError
    |   +-- MethodNotFoundError
    |   +-- StatusNotFoundError
    +-- SchemaConflictError     (exit 9)
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from typing import Optional

from speccheck.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOOKUP_FAILED,
    EXIT_SCHEMA_CONFLICT,
    EXIT_SPEC_FORMAT_ERROR,
    EXIT_SPEC_LOAD_ERROR,
)


class SpeccheckError(Exception):
    """Base exception for all speccheck errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`speccheck.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpeccheckError):
    """Raised for invalid CLI arguments or unreadable payload files."""

    exit_code = EXIT_INVALID_USAGE


class SpecLoadError(SpeccheckError):
    """Raised when the spec source is unreadable or not valid JSON/YAML."""

    exit_code = EXIT_SPEC_LOAD_ERROR


class SpecFormatError(SpeccheckError):
    """Raised when a parsed document lacks the expected OpenAPI structure.

    Covers a missing ``components.schemas`` or ``paths`` section, an
    unsupported ``openapi`` version, dangling structural ``$ref`` pointers,
    and schemas the validator rejects as malformed.
    """

    exit_code = EXIT_SPEC_FORMAT_ERROR


class SpecLookupError(SpeccheckError):
    """Base class for names that are not declared in a loaded spec."""

    exit_code = EXIT_LOOKUP_FAILED


class SchemaNotFoundError(SpecLookupError):
    """Raised when a schema name is absent from ``components.schemas``."""

    def __init__(self, name: str):
        super().__init__(f'Schema "{name}" not found in the OpenAPI spec')
        self.name = name


class PathNotFoundError(SpecLookupError):
    """Raised when a path template is absent from ``paths``."""

    def __init__(self, path_url: str):
        super().__init__(f'Path "{path_url}" not found in the OpenAPI spec')
        self.path_url = path_url


class MethodNotFoundError(SpecLookupError):
    """Raised when a path exists but does not declare the requested method."""

    def __init__(self, path_url: str, method: str):
        super().__init__(f'Method "{method}" not found for path "{path_url}"')
        self.path_url = path_url
        self.method = method


class StatusNotFoundError(SpecLookupError):
    """Raised when an operation does not declare the requested status code.

    A status that *is* declared but carries no JSON schema is not an error;
    see :func:`speccheck.resolvers.resolve_response_schema`.
    """

    def __init__(
        self,
        status_code: str,
        path_url: Optional[str] = None,
        method: Optional[str] = None,
    ):
        message = f'Response for status code "{status_code}" not found in the OpenAPI spec'
        if path_url is not None and method is not None:
            message += f' for path "{path_url}" and method "{method.upper()}"'
        super().__init__(message)
        self.status_code = status_code
        self.path_url = path_url
        self.method = method


class SchemaConflictError(SpeccheckError):
    """Raised when a different schema body is registered under a name already in use."""

    exit_code = EXIT_SCHEMA_CONFLICT

    def __init__(self, name: str):
        super().__init__(
            f'Schema "{name}" is already registered with a different body '
            f"under #/components/schemas/{name}"
        )
        self.name = name


class ConfigError(SpeccheckError):
    """Raised for configuration problems (invalid JSON, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE
