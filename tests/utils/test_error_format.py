"""Tests for safe error message formatting."""

from io import StringIO

from rich.console import Console

from libpack.discovery import PackageDiscoveryError
from libpack.utils.error_format import escape_markup
from libpack.utils.error_format import format_error_message


def test_message_with_type():
    assert format_error_message(ValueError("invalid input")) == "ValueError: invalid input"


def test_message_without_type():
    assert format_error_message(ValueError("invalid input"), include_type=False) == "invalid input"


def test_empty_message_uses_friendly_fallback():
    assert format_error_message(FileNotFoundError()) == "FileNotFoundError: File or directory not found."


def test_empty_message_without_fallback():
    assert format_error_message(KeyError()) == "KeyError: (no additional details)"


def test_discovery_error_includes_path(tmp_path):
    error = PackageDiscoveryError(tmp_path / "package.json", "invalid JSON")
    assert format_error_message(error, include_type=False) == f"{tmp_path / 'package.json'}: invalid JSON"


def test_escape_markup_brackets():
    assert escape_markup("[red]dist[/red]") == "\\[red]dist\\[/red]"
    assert escape_markup(None) == "None"


def test_escaped_path_renders_literally():
    """A path like [/lib/dist] would otherwise be parsed as a closing tag."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, width=120)
    console.print(f"[bold]Output:[/bold] {escape_markup('[/lib/dist]')}")
    assert "[/lib/dist]" in buf.getvalue()
