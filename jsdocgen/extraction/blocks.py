"""Isolation of declaration bodies by brace counting."""

from __future__ import annotations

from ..logging import get_logger

logger = get_logger("extraction")


def match_block(text: str, index: int) -> str:
    """Return the brace-delimited block whose opening brace sits at ``index``.

    The scan counts every ``{`` and ``}`` it meets, including those inside
    string, template, regular-expression and comment literals, so such a
    literal brace shifts the end of the block. When the text runs out before
    the count balances, the consumed text is returned and a warning is logged.
    """
    depth = -1
    position = index
    length = len(text)
    while position < length:
        char = text[position]
        position += 1
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        if depth == -1:
            return text[index:position]

    if position > index:
        logger.warning(
            "Unbalanced block starting at offset %d: reached end of input at depth %d",
            index,
            depth,
        )
    return text[index:position]


def nesting_depths(text: str) -> list[int]:
    """Return the brace depth before each character of ``text``.

    Uses the same naive counting as :func:`match_block`.
    """
    depths: list[int] = []
    depth = 0
    for char in text:
        depths.append(depth)
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
    return depths


__all__ = ["match_block", "nesting_depths"]
