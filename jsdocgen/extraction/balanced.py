"""Quote-aware matching of balanced delimiter regions.

Type annotations (``{...}``), optional parameter brackets (``[...]``) and
parameter lists (``(...)``) nest their own delimiters and may carry string
literals, so a regular expression cannot find their end. The scanner below
tracks the nesting depth of one delimiter pair and skips quoted runs.
"""

from __future__ import annotations

from typing import Optional

QUOTES = frozenset({'"', "'", "`"})


def find_closing_quote(text: str, start: int) -> int:
    """Return the index of the quote closing the one at ``start``, or -1.

    A backslash escapes the character that follows it.
    """
    quote = text[start]
    index = start + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index
        index += 1
    return -1


def find_balanced_end(text: str, start: int, opening: str, closing: str) -> int:
    """Return the index just past the region opened at ``start``, or -1.

    ``text[start]`` must be ``opening``. A quote without a closing partner
    counts as an ordinary character.
    """
    if start < 0 or start >= len(text) or text[start] != opening:
        return -1

    depth = 0
    index = start
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char in QUOTES:
            end = find_closing_quote(text, index)
            if end != -1:
                index = end + 1
                continue
        elif char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return -1


def match_balanced(text: str, start: int, opening: str, closing: str) -> Optional[str]:
    """Return the balanced region starting at ``start`` or ``None`` when unbalanced."""
    end = find_balanced_end(text, start, opening, closing)
    if end == -1:
        return None
    return text[start:end]


__all__ = ["QUOTES", "find_balanced_end", "find_closing_quote", "match_balanced"]
