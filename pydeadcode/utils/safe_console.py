"""Windows-safe Console wrapper for Rich library.

Wraps Rich's Console to automatically sanitize Unicode characters
on terminals that don't support UTF-8.
"""
from typing import Any, List

from rich.console import Console
from rich.markup import escape

from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console that swaps Unicode icons for ASCII on non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """Initialize SafeConsole with UTF-8 capability detection.

        All arguments are passed through to Rich's Console.
        """
        self._needs_sanitization = not is_utf8_capable()

        if self._needs_sanitization:
            kwargs['legacy_windows'] = True

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic Unicode sanitization of string objects."""
        if self._needs_sanitization:
            objects = self._sanitize(objects)
        super().print(*objects, **kwargs)

    def _sanitize(self, objects) -> List[Any]:
        return [sanitize_for_terminal(o) if isinstance(o, str) else o for o in objects]

    def print_error(self, message: str) -> None:
        """Print a red 'Error:' line; the message is escaped, not parsed as markup."""
        self.print(f"[bold red]Error:[/bold red] {escape(message)}")
