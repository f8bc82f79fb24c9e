"""Lexical position classifier for JavaScript/TypeScript test sources.

Answers one question: does a given offset sit inside a string literal,
a template literal or a comment, judging by everything before it?

The scan is a single forward pass over the text; PositionScanner keeps
its state so later offsets resume where earlier ones stopped.
Template substitutions (`${...}`) are tracked with an explicit stack of
brace depths, so templates nested inside substitutions inside templates
work at any depth:

    `outer ${`inner ${deeper}`} still outer`
"""
from enum import Enum
from typing import List, Optional


class LexState(Enum):
    CODE = "code"
    STRING = "string"
    TEMPLATE = "template"


QUOTE_CHARS = ("'", '"')


def comment_end(text: str, index: int) -> Optional[int]:
    """Return the last index covered by a comment opening at ``index``.

    Line comments end at their newline, block comments at the ``/`` of
    the closing ``*/``. Unterminated comments run to ``len(text)``.
    Returns None when no comment opens at ``index``.
    """
    if text[index] != '/' or index + 1 >= len(text):
        return None

    marker = text[index + 1]
    if marker == '/':
        eol = text.find('\n', index)
        return len(text) if eol == -1 else eol
    if marker == '*':
        close = text.find('*/', index + 2)
        return len(text) if close == -1 else close + 1
    return None


class PositionScanner:
    """Resumable form of :func:`is_non_code` for increasing offsets.

    Keeps the lexer state between queries, so classifying every match
    in a file costs one pass over the text instead of one per match.
    Offsets must not decrease between calls.
    """

    def __init__(self, text: str):
        self.text = text
        self.state = LexState.CODE
        self.quote = ''
        # One brace depth per open ${...}, innermost last
        self.substitutions: List[int] = []
        self.i = 0
        # Last index of a comment the previous query landed in
        self._comment_end = -1
        self._last_offset: Optional[int] = None

    def is_non_code(self, offset: int) -> bool:
        """Check whether ``offset`` falls inside a string, template or comment.

        Raises:
            ValueError: If ``offset`` is smaller than the previous query
        """
        if self._last_offset is not None and offset < self._last_offset:
            raise ValueError(
                f"Offsets must not decrease: {offset} after {self._last_offset}"
            )
        self._last_offset = offset

        if offset <= self._comment_end:
            return True

        text = self.text
        limit = min(offset, len(text))
        while self.i < limit:
            i = self.i
            char = text[i]

            # Backslash swallows the next character in every state
            if char == '\\':
                self.i = i + 2
                continue

            if self.state is LexState.TEMPLATE:
                if char == '$' and text.startswith('{', i + 1):
                    self.substitutions.append(0)
                    self.state = LexState.CODE
                    self.i = i + 2
                    continue
                if char == '`':
                    self.state = LexState.CODE

            elif self.state is LexState.STRING:
                if char == self.quote:
                    self.state = LexState.CODE

            else:
                end = comment_end(text, i)
                if end is not None:
                    self.i = end + 1
                    if offset <= end:
                        self._comment_end = end
                        return True
                    continue

                if char == '`':
                    self.state = LexState.TEMPLATE
                elif char in QUOTE_CHARS:
                    self.state = LexState.STRING
                    self.quote = char
                elif self.substitutions:
                    if char == '{':
                        self.substitutions[-1] += 1
                    elif char == '}':
                        if self.substitutions[-1] == 0:
                            self.substitutions.pop()
                            self.state = LexState.TEMPLATE
                        else:
                            self.substitutions[-1] -= 1

            self.i = i + 1

        return self.state is not LexState.CODE


def is_non_code(text: str, offset: int) -> bool:
    """Check whether ``offset`` falls inside a string, template or comment.

    Code inside a template substitution counts as code: only the literal
    segments of a template are non-code. Use :class:`PositionScanner`
    to classify many offsets of the same text.

    Args:
        text: Full file content
        offset: Character offset to classify

    Returns:
        bool: True if the offset is not part of real code
    """
    return PositionScanner(text).is_non_code(offset)
