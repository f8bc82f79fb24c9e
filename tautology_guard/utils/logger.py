"""Terminal-safe text for report output.

The markdown report uses emoji status labels. Terminals that cannot
encode UTF-8 (legacy Windows code pages, ``LANG=C`` CI runners) get
ASCII stand-ins instead of a UnicodeEncodeError.
"""
import locale
import sys


# Report glyphs and their ASCII fallbacks. Longer sequences first so the
# variation selector of a two-codepoint emoji is consumed with it.
ICON_MAP = {
    '⚠️': '[WARN]',
    '⏭️': '[SKIP]',
    '⚠': '[WARN]',
    '⏭': '[SKIP]',
    '✅': '[OK]',
    '❌': '[FAIL]',
    '—': '-',
    '…': '...',
}


def detect_terminal_encoding() -> str:
    """Detect the encoding stdout will be written in.

    Returns:
        str: Lower-cased encoding name ('utf-8', 'cp1252', 'ascii', ...)
    """
    encoding = getattr(sys.stdout, 'encoding', None)
    if encoding:
        return encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except Exception:
        return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can print the report glyphs."""
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace report glyphs with ASCII if the terminal isn't UTF-8.

    Args:
        text: Text potentially containing report glyphs

    Returns:
        str: Text safe for the current terminal
    """
    if is_utf8_capable():
        return text

    for glyph, replacement in ICON_MAP.items():
        text = text.replace(glyph, replacement)
    return text
