"""Terminal output for the audit CLI.

Wraps Rich's Console so status icons degrade to ASCII on terminals that
cannot encode them (legacy Windows code pages, dumb CI logs).
"""
import locale
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape

# Icons used by the CLI and their ASCII fallbacks
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[FAIL]',
    '🔍': '[scan]',
}


def detect_terminal_encoding() -> str:
    """Return the lower-cased stdout encoding, falling back to the locale."""
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except Exception:
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str, utf8: bool = None) -> str:
    """Replace known icons with ASCII if the terminal is not UTF-8.

    Args:
        text: Text potentially containing icons
        utf8: Override encoding detection

    Returns:
        Text safe for the current terminal
    """
    if utf8 is None:
        utf8 = is_utf8_capable()
    if utf8:
        return text

    for icon, replacement in ICON_MAP.items():
        text = text.replace(icon, replacement)
    return text


class SafeConsole(Console):
    """Rich Console that sanitizes string output on non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        self._needs_sanitization = not is_utf8_capable()

        # Avoid Unicode spinners and box drawing on legacy consoles
        if self._needs_sanitization:
            kwargs['legacy_windows'] = True

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj, utf8=False) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)


def print_failure(console: Console, path: Any, error: BaseException) -> None:
    """Report a fatal scan error: offending path first, then the error."""
    console.print(f"[bold red]✗ {escape(str(path))}[/bold red]", soft_wrap=True)
    message = getattr(error, "message", str(error))
    console.print(f"[red]{type(error).__name__}: {escape(message)}[/red]", soft_wrap=True)
