"""Token-boundary search for production symbols inside a test body."""
import re
from typing import Sequence

from .models import ImportedSymbol


def _reference_pattern(name: str) -> re.Pattern:
    # Identifier characters are word characters plus '$'
    return re.compile(rf'(?<![\w$]){re.escape(name)}(?![\w$])')


def references_production(body: str, imports: Sequence[ImportedSymbol]) -> bool:
    """Return True if ``body`` mentions any imported name as a whole token.

    Catches direct calls (``fn()``), member access on namespaces
    (``ns.method()``), callbacks (``items.map(fn)``) and plain
    assignments (``const x = fn``), but not ``fn`` inside ``fnHandler``.
    """
    if not imports:
        return False

    return any(_reference_pattern(symbol.name).search(body) for symbol in imports)
