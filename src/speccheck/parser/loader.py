"""Read an OpenAPI document from disk or stdin into a plain dict.

JSON and YAML are both accepted. A ``.json`` file must be JSON and a
``.yaml``/``.yml`` file is read as YAML; anything else (including stdin) is
tried as JSON first and then as YAML, since every JSON document is also YAML
but the JSON parser gives sharper error messages.

:func:`validate_openapi_version` is the first structural check applied to the
result; the rest happens in :mod:`speccheck.parser.extractor`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from speccheck.exceptions import SpecFormatError, SpecLoadError

logger = logging.getLogger(__name__)

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load the spec at *source*, a file path or ``-`` for stdin.

    Raises:
        SpecLoadError: If the source cannot be read, is empty, or does not
            parse to a JSON/YAML object.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecLoadError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise SpecLoadError("No input received from stdin")
    return _parse_content(content)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecLoadError(f"Spec file not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecLoadError(f"Failed to read spec file {path}: {exc}") from exc
    if not content.strip():
        raise SpecLoadError(f"Spec file is empty: {path}")

    hint = _SUFFIX_HINTS.get(file_path.suffix.lower(), "")
    logger.debug("Parsing %s as %s", path, hint or "JSON or YAML")
    return _parse_content(content, hint=hint)


def _stringify_keys(value: Any) -> Any:
    """Return *value* with every mapping key converted to ``str``.

    YAML reads unquoted keys such as ``200:`` as integers; JSON object keys are
    always strings.
    """
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    return value


def _as_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        got = "empty document" if result is None else type(result).__name__
        raise SpecLoadError(f"Spec must be a JSON/YAML object (got {got})")
    return result


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    ``hint="json"`` disables the YAML fallback and ``hint="yaml"`` skips the
    JSON attempt.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _as_object(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecLoadError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _as_object(_stringify_keys(yaml.safe_load(content)))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecLoadError(
        "Failed to parse spec as JSON or YAML" + "".join(f"\n  {e}" for e in errors)
    )


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version if it is 3.x.

    Raises:
        SpecFormatError: For Swagger 2.x documents, a missing ``openapi``
            field, or any other major version.
    """
    if "swagger" in spec:
        raise SpecFormatError(
            f"Swagger {spec['swagger']} is not supported; "
            "convert the document to OpenAPI 3.x first."
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecFormatError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version = str(version)
    if not version.startswith("3."):
        raise SpecFormatError(f"Unsupported OpenAPI version: {version} (expected 3.x)")
    return version
