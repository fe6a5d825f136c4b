"""Logging setup and terminal-safe text handling.

Detects terminal encoding and provides ASCII alternatives for the Unicode icons
pydeadcode prints, so non-UTF-8 terminals (legacy Windows consoles) don't crash.
"""
import locale
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


# Unicode to ASCII icon mapping for Windows compatibility
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[FAIL]',
    '⚠': '[WARN]',
    '→': '->',
    '…': '...',
    '•': '*',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except Exception:
        return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can handle UTF-8 Unicode characters."""
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace Unicode icons with ASCII equivalents if terminal doesn't support UTF-8.

    Args:
        text: Text potentially containing Unicode icons

    Returns:
        str: Sanitized text safe for current terminal
    """
    if is_utf8_capable():
        return text

    for unicode_char, ascii_replacement in ICON_MAP.items():
        text = text.replace(unicode_char, ascii_replacement)
    return text


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a stderr RichHandler to the package logger.

    Safe to call more than once; the handler is installed only the first time
    and later calls just adjust the level.

    Args:
        level: Logging level name or number

    Returns:
        The 'pydeadcode' logger
    """
    logger = logging.getLogger('pydeadcode')

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
