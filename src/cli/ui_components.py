"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from how things look.
- stdout carries only the edit URL announcement; errors go to stderr.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from core.version import COMMIT, VERSION


def print_edit_url(console: Console, file_name: str, edit_url: str) -> None:
    """Announce the session's edit URL (printed once per run)."""

    console.print(Text(f"Edit URL for file {file_name}: {edit_url}"), soft_wrap=True)
    console.print(Text("DO NOT SHARE TO STRANGERS!", style="bold yellow"))


def print_version(console: Console) -> None:
    console.print(Text(f"Remdit Version: {VERSION}"))
    console.print(Text(f"Commit: {COMMIT}"))


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("Error: ", "bold red"), message), soft_wrap=True)
