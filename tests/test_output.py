"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response, print_table and print_tree in each format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from sdkgen import output as output_module
from sdkgen.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("sdkgen.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("sdkgen.output._is_tty", lambda: True)


TREE = [
    ("users", [("GET /users  listUsers", []), ("orders", [("GET /users/{id}/orders  getOrders", [])])]),
    ("health", []),
]


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """AUTO picks a concrete format from the terminal."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty) -> None:
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Stream discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Data goes to stdout, diagnostics to stderr."""

    def test_print_data_goes_to_stdout(self, capfd, non_tty) -> None:
        OutputManager(no_color=True).print_data("payload")
        captured = capfd.readouterr()
        assert "payload" in captured.out
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error", "suggest"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method: str) -> None:
        getattr(OutputManager(no_color=True), method)("message text")
        captured = capfd.readouterr()
        assert "message text" in captured.err
        assert captured.out == ""

    def test_error_is_prefixed(self, capfd, non_tty) -> None:
        OutputManager(no_color=True).error("broken")
        assert "Error: broken" in capfd.readouterr().err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty) -> None:
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hello")
        mgr.success("done")
        mgr.suggest("next")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_and_warnings(self, capfd, non_tty) -> None:
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capfd.readouterr().err
        assert "careful" in err
        assert "broken" in err

    def test_debug_hidden_by_default(self, capfd, non_tty) -> None:
        OutputManager(no_color=True).debug("hoisted inline schema 'address'")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty) -> None:
        OutputManager(no_color=True, verbose=True).debug("hoisted inline schema 'address'")
        assert "[debug] hoisted inline schema 'address'" in capfd.readouterr().err

    def test_debug_with_color_does_not_parse_markup(self, capfd, non_tty, monkeypatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager(format=OutputFormat.PLAIN, verbose=True).debug("type User[] inferred")
        assert "User[]" in capfd.readouterr().err

    def test_progress_hidden_when_not_tty(self, capfd, non_tty) -> None:
        OutputManager(no_color=True).progress("Loading spec")
        assert capfd.readouterr().err == ""

    def test_progress_shown_in_tty(self, capfd, tty) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).progress("Loading spec")
        assert "Loading spec" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Structured data
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_mode_emits_valid_json(self, capfd, non_tty) -> None:
        data = {"title": "Store API", "resources": 2}
        OutputManager(format=OutputFormat.JSON).format_response(data)
        assert json.loads(capfd.readouterr().out) == data

    def test_plain_mode_emits_key_value_lines(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.PLAIN).format_response(
            {"title": "Store API", "tags": ["a", "b"]}
        )
        lines = capfd.readouterr().out.strip().split("\n")
        assert lines == ["title\tStore API", 'tags\t["a", "b"]']

    def test_rich_mode_contains_content(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).format_response({"key": "value"})
        out = capfd.readouterr().out
        assert "key" in out
        assert "value" in out


class TestPrintTable:
    def test_json_mode(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(
            ["Model", "Required"], [["User", "id, email"], ["Card", ""]]
        )
        assert json.loads(capfd.readouterr().out) == [
            {"Model": "User", "Required": "id, email"},
            {"Model": "Card", "Required": ""},
        ]

    def test_plain_mode(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_table(["a", "b"], [["1", "2"]], title="T")
        assert capfd.readouterr().out.strip().split("\n") == ["a\tb", "1\t2"]

    def test_rich_mode(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            ["Model", "Properties"], [["User", "id: integer, email: string"]], title="Models (1)"
        )
        out = capfd.readouterr().out
        assert "Models (1)" in out
        assert "id: integer, email: string" in out


class TestPrintTree:
    def test_plain_mode_indents_two_spaces_per_level(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_tree("Store API", TREE)
        assert capfd.readouterr().out.split("\n")[:6] == [
            "Store API",
            "  users",
            "    GET /users  listUsers",
            "    orders",
            "      GET /users/{id}/orders  getOrders",
            "  health",
        ]

    def test_json_mode_nests_children(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.JSON).print_tree("Store API", TREE)
        data = json.loads(capfd.readouterr().out)
        assert data["label"] == "Store API"
        users = data["children"][0]
        assert users["label"] == "users"
        assert users["children"][1] == {
            "label": "orders",
            "children": [{"label": "GET /users/{id}/orders  getOrders", "children": []}],
        }

    def test_rich_mode_shows_labels(self, capfd, non_tty) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).print_tree("Store API", TREE)
        out = capfd.readouterr().out
        assert "Store API" in out
        assert "orders" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output_installs_instance(self) -> None:
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_module_helpers_use_global(self, capfd, non_tty) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("via helper")
        output_module.print_tree("root", [])
        captured = capfd.readouterr()
        assert "via helper" in captured.err
        assert "root" in captured.out
