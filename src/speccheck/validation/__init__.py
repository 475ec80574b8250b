"""Validation layer -- the bridge to the external ``jsonschema`` validator.

* :mod:`~speccheck.validation.session` -- schema registration and the
  compiled-validator cache, scoped to one loaded spec.
* :mod:`~speccheck.validation.runner` -- runs one payload and shapes the
  result into a :class:`~speccheck.models.ValidationReport`.
"""

from speccheck.validation.runner import validate
from speccheck.validation.session import ValidatorSession, schema_ref

__all__ = ["validate", "ValidatorSession", "schema_ref"]
