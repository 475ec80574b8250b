"""Shared test fixtures for speccheck.

Provides reusable fixtures for loading the spec fixture, creating isolated
config environments, resetting global state, and running CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from speccheck.api import reset_stores
from speccheck.models import SpecDocument
from speccheck.output import reset_output
from speccheck.store import SpecStore


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SPEC_PATH = FIXTURES_DIR / "openapi.json"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals_between_tests() -> None:
    """Reset the global OutputManager and the shared store cache after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at creation
    time, which go stale once CliRunner restores the real streams.
    """
    yield
    reset_output()
    reset_stores()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def spec_path() -> str:
    """Path to the tool-calling OpenAPI fixture."""
    return str(SPEC_PATH)


@pytest.fixture
def raw_spec() -> dict[str, Any]:
    """Raw tool-calling spec dict (a fresh copy per test)."""
    with open(SPEC_PATH) as f:
        return json.load(f)


@pytest.fixture
def store(spec_path: str) -> SpecStore:
    """A loaded store for the fixture spec."""
    s = SpecStore(spec_path)
    s.load()
    return s


@pytest.fixture
def document(store: SpecStore) -> SpecDocument:
    return store.document


# ---------------------------------------------------------------------------
# Example payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def call_request() -> dict[str, Any]:
    """A valid /tools/call request body."""
    return {
        "$schema": "https://github.com/ArcadeAI/OpenToolCalling/tree/main/specification/http/1.0/openapi.json",
        "request": {
            "call_id": "123e4567-e89b-12d3-a456-426614174000",
            "tool_id": "Calculator.Add@1.0.0",
            "input": {"a": 1, "b": 2},
        },
    }


@pytest.fixture
def call_error_response() -> dict[str, Any]:
    """A valid /tools/call 200 response describing a failed tool call."""
    return {
        "$schema": "https://github.com/ArcadeAI/OpenToolCalling/tree/main/specification/http/1.0/openapi.json",
        "result": {
            "call_id": "723e4567-e89b-12d3-a456-426614174006",
            "duration": 60,
            "success": False,
            "error": {
                "message": "Doorbell ID not found",
                "developer_message": "The doorbell with ID 'doorbell1' does not exist.",
                "can_retry": True,
                "additional_prompt_content": "available_ids: doorbell42,doorbell84",
                "retry_after_ms": 500,
            },
        },
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    clears SPECCHECK_* environment variables, and changes the working
    directory to tmp_path.
    """
    monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("SPECCHECK_SPEC", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
