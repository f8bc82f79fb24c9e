"""Windows-safe Console wrapper for Rich library.

Wraps Rich's Console so report glyphs degrade to ASCII on terminals
that don't support UTF-8.
"""
from typing import Any

from rich.console import Console

from .logger import is_utf8_capable, sanitize_for_terminal


class SafeConsole(Console):
    """Console that sanitizes string output on non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """Initialize SafeConsole; all arguments go to Rich's Console."""
        self._needs_sanitization = not is_utf8_capable()

        if self._needs_sanitization:
            kwargs.setdefault('legacy_windows', True)

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic glyph sanitization (same API as Console.print)."""
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)

    def print_plain(self, text: str) -> None:
        """Print text verbatim: no markup, highlighting, emoji codes or wrapping.

        Used for markdown and JSON output that other tools parse.
        """
        self.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
