"""Extraction of ``@param`` declarations from a comment block."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..models import Parameter, Tag, TagSet
from .balanced import match_balanced
from .comments import normalize_text, normalize_type
from .patterns import PatternSet


def split_optional(region: str) -> Tuple[str, Optional[str]]:
    """Split ``[name]`` / ``[name=default]`` into name and default text.

    The default is everything after the first ``=``; it is ``None`` when the
    bracket holds no ``=`` or nothing follows it.
    """
    inner = region[1:-1]
    name, separator, default = inner.partition("=")
    if not separator:
        return inner.strip(), None
    return name.strip(), default.strip() or None


def parse_parameters(comment: Optional[str], patterns: PatternSet) -> Tuple[Parameter, ...]:
    """Return the parameters declared in ``comment`` in source order."""
    if not comment:
        return ()

    params: List[Parameter] = []
    consumed = 0
    for head in patterns.comment_param.finditer(comment):
        if head.start() < consumed:
            continue
        position = head.end()

        type_text = "any"
        if comment.startswith("{", position):
            region = match_balanced(comment, position, "{", "}")
            if region is None:
                continue
            type_text = normalize_type(region, patterns) or "any"
            spacing = patterns.whitespace.match(comment, position + len(region))
            if spacing is None:
                continue
            position = spacing.end()

        tags = TagSet()
        default: Optional[str] = None
        if comment.startswith("[", position):
            region = match_balanced(comment, position, "[", "]")
            if region is None:
                continue
            name, default = split_optional(region)
            tags = tags.add(Tag.OPTIONAL)
            position += len(region)
        else:
            identifier = patterns.name.match(comment, position)
            if identifier is None:
                continue
            name = identifier.group(0)
            position = identifier.end()

        text = patterns.tag_text.match(comment, position)
        description = None
        if text is not None:
            description = normalize_text(text.group("desc"), patterns)
            consumed = text.end()
        else:
            consumed = position

        params.append(
            Parameter(
                name=name,
                type=type_text,
                description=description,
                default=default,
                tags=tags,
            )
        )
    return tuple(params)


__all__ = ["parse_parameters", "split_optional"]
