"""Tests for speccheck.validation.session -- schema registration and compile cache."""

from __future__ import annotations

import threading

import pytest

from speccheck.exceptions import SchemaConflictError, SpecFormatError
from speccheck.validation.session import ValidatorSession, schema_ref

ADDRESS = {
    "type": "object",
    "required": ["city"],
    "properties": {"city": {"type": "string"}},
}
PERSON = {
    "type": "object",
    "properties": {"home": {"$ref": "#/components/schemas/Address"}},
}


class TestSchemaRef:
    def test_reference_path(self) -> None:
        assert schema_ref("Address") == "#/components/schemas/Address"


class TestRegister:
    def test_register_records_name(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        assert session.registered == ["Address"]

    def test_identical_reregistration_is_noop(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        session.register("Address", dict(ADDRESS))
        assert session.registered == ["Address"]

    def test_conflicting_body_raises(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        with pytest.raises(SchemaConflictError) as exc_info:
            session.register("Address", {"type": "string"})
        assert exc_info.value.name == "Address"
        assert exc_info.value.exit_code == 9
        assert "#/components/schemas/Address" in str(exc_info.value)

    def test_register_all_is_all_or_nothing(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        with pytest.raises(SchemaConflictError):
            session.register_all({"Person": PERSON, "Address": {"type": "string"}})
        assert session.registered == ["Address"]

    def test_register_all_accepts_boolean_schemas(self) -> None:
        session = ValidatorSession()
        session.register_all({"Anything": True, "Nothing": False})
        assert session.registered == ["Anything", "Nothing"]
        with pytest.raises(SchemaConflictError):
            session.register("Nothing", True)

    def test_clear_forgets_schemas(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        session.clear()
        assert session.registered == []
        # A different body is fine once the session is cleared.
        session.register("Address", {"type": "string"})

    def test_concurrent_registration(self) -> None:
        session = ValidatorSession()
        schemas = {f"S{i}": {"type": "integer", "minimum": i} for i in range(50)}
        threads = [
            threading.Thread(target=session.register_all, args=(schemas,))
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(session.registered) == sorted(schemas)


class TestCompile:
    def test_resolves_component_refs(self) -> None:
        session = ValidatorSession()
        session.register_all({"Address": ADDRESS, "Person": PERSON})
        validator = session.compile(PERSON)
        assert validator.is_valid({"home": {"city": "Paris"}})
        assert not validator.is_valid({"home": {}})

    def test_compiled_validator_is_cached(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        assert session.compile(ADDRESS) is session.compile(dict(ADDRESS))

    def test_new_registration_invalidates_cache(self) -> None:
        session = ValidatorSession()
        session.register("Address", ADDRESS)
        first = session.compile(ADDRESS)
        session.register("Person", PERSON)
        assert session.compile(ADDRESS) is not first

    def test_malformed_schema_raises_format_error(self) -> None:
        session = ValidatorSession()
        with pytest.raises(SpecFormatError, match="Invalid schema"):
            session.compile({"type": 12})

    def test_format_checks_enabled_by_default(self) -> None:
        session = ValidatorSession()
        assert session.format_checks
        validator = session.compile({"type": "string", "format": "uuid"})
        assert not validator.is_valid("not-a-uuid")

    def test_format_checks_disabled(self) -> None:
        session = ValidatorSession(format_checks=False)
        assert not session.format_checks
        validator = session.compile({"type": "string", "format": "uuid"})
        assert validator.is_valid("not-a-uuid")
