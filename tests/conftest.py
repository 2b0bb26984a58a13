"""Shared test fixtures for sdkforge.

Provides reusable fixtures for loading spec fixtures, building small API
documents, isolating configuration, managing output state and running CLI
commands. These fixtures are discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

import pytest

from sdkforge.models import (
    ApiDocument,
    ApiOperation,
    DocumentSettings,
    HTTPMethod,
    OutputKind,
)
from sdkforge.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

DocumentFactory = Callable[..., ApiDocument]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


def _load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Raw OpenAPI 3.0 petstore dict."""
    return _load_fixture("petstore.json")


@pytest.fixture
def duplicates_raw() -> dict[str, Any]:
    """Raw OpenAPI document with structurally colliding ``/v2`` paths."""
    return _load_fixture("duplicates_v2.json")


@pytest.fixture
def swagger2_raw() -> dict[str, Any]:
    """Raw Swagger 2.0 document."""
    return _load_fixture("swagger2.json")


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def duplicates_path() -> Path:
    return FIXTURES_DIR / "duplicates_v2.json"


@pytest.fixture
def petstore_document(petstore_raw: dict[str, Any]) -> ApiDocument:
    """Extracted petstore document with default (class-style) settings."""
    from sdkforge.parser.extractor import extract_document

    return extract_document(petstore_raw)


# ---------------------------------------------------------------------------
# Hand-built documents
# ---------------------------------------------------------------------------


@pytest.fixture
def make_document() -> DocumentFactory:
    """Factory building an :class:`ApiDocument` from a compact description.

    ``routes`` maps each path to ``{method: tags}``::

        make_document(
            {"/pets/{id}": {"get": ["Pets"], "post": ["Pets"]}},
            output_kind=OutputKind.SCRIPT_CLIENT,
        )
    """

    def _make(
        routes: dict[str, dict[str, Iterable[str]]],
        client_suffix: str = "",
        output_kind: OutputKind = OutputKind.CLASS,
        tag_filter: Optional[str] = None,
        schemas: Optional[dict[str, Any]] = None,
    ) -> ApiDocument:
        paths = {
            path: {
                method: ApiOperation(method=HTTPMethod(method), tags=list(tags))
                for method, tags in methods.items()
            }
            for path, methods in routes.items()
        }
        return ApiDocument(
            paths=paths,
            schemas=schemas or {},
            settings=DocumentSettings(
                client_suffix=client_suffix,
                output_kind=output_kind,
                tag_filter=tag_filter,
            ),
        )

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces XDG path resolution, points XDG_CONFIG_HOME and XDG_DATA_HOME
    at subdirectories of tmp_path, clears all SDKFORGE_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "SDKFORGE_CLIENT_SUFFIX",
        "SDKFORGE_TAG_FILTER",
        "SDKFORGE_OUTPUT_KIND",
        "SDKFORGE_OUTPUT_MODE",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
