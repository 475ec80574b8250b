"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~speccheck.exceptions.SpeccheckError` subclass.
CI jobs can inspect the exit code to tell a non-conforming payload apart
from a broken or mismatched spec without parsing stderr.

Example::

    $ speccheck schema CallToolResponse response.json
    $ echo $?
    3   # EXIT_VALIDATION_FAILED -- the payload does not match the schema
"""

EXIT_SUCCESS = 0
"""The command completed successfully and every payload was valid."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or unreadable input payloads."""

EXIT_VALIDATION_FAILED = 3
"""At least one payload did not conform to its schema."""

EXIT_LOOKUP_FAILED = 4
"""The requested schema, path, method, or status code is not declared in the spec."""

EXIT_SPEC_LOAD_ERROR = 7
"""The spec document could not be read or parsed."""

EXIT_SPEC_FORMAT_ERROR = 8
"""The spec document was parsed but does not have the expected OpenAPI shape."""

EXIT_SCHEMA_CONFLICT = 9
"""Two different schema bodies were registered under the same reference path."""
