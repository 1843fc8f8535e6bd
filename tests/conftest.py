"""Shared test fixtures for sdkgen.

Provides reusable fixtures for loading fixture documents, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

from sdkgen.models import SdkDefinition
from sdkgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@pytest.fixture
def store_raw() -> dict[str, Any]:
    """The store API document as a plain dict."""
    with open(FIXTURES_DIR / "store_api.json") as f:
        return json.load(f)


@pytest.fixture
def store_spec_path(tmp_path: Path) -> Path:
    """A copy of the store API document inside tmp_path."""
    path = tmp_path / "store_api.json"
    path.write_text((FIXTURES_DIR / "store_api.json").read_text())
    return path


@pytest.fixture
def store_definition(store_raw: dict[str, Any]) -> SdkDefinition:
    """The extracted store API definition (nested resources)."""
    from sdkgen.parser.extractor import extract_sdk

    return extract_sdk(store_raw, "3.0.3")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, clears all SDKGEN_*
    environment variables, and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    from sdkgen.config import ENV_VARS

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain output manager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a verbose, colourless output manager so debug lines reach stderr."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Generated SDK import helper
# ---------------------------------------------------------------------------


@pytest.fixture
def import_generated(monkeypatch: pytest.MonkeyPatch):
    """Return a function importing a generated package from an output directory.

    The package and its sub-modules are evicted from ``sys.modules`` after
    the test so that each test imports its own freshly generated copy.
    """
    import importlib

    imported: list[str] = []

    def _import(output_dir: Path, package_name: str) -> Any:
        monkeypatch.syspath_prepend(str(output_dir))
        imported.append(package_name)
        return importlib.import_module(package_name)

    yield _import

    for name in list(sys.modules):
        if any(name == pkg or name.startswith(pkg + ".") for pkg in imported):
            del sys.modules[name]


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
