"""Turn a raw ``/** ... */`` block into typed documentation fields."""

from __future__ import annotations

from re import Pattern
from typing import Optional

from ..models import DocComment, Tag, TagSet, TypedText
from .balanced import match_balanced
from .patterns import PatternSet

_BOOLEAN_TAGS = (
    (Tag.ABSTRACT, "tag_abstract"),
    (Tag.ASYNC, "tag_async"),
    (Tag.GENERATOR, "tag_generator"),
    (Tag.HIDECONSTRUCTOR, "tag_hideconstructor"),
    (Tag.IGNORE, "tag_ignore"),
    (Tag.STATIC, "tag_static"),
    (Tag.READONLY, "tag_readonly"),
    (Tag.CLASS, "tag_class"),
)


def normalize_text(text: Optional[str], patterns: PatternSet) -> Optional[str]:
    """Strip line padding, collapse whitespace runs and trim; empty becomes ``None``."""
    if text is None:
        return None
    cleaned = patterns.comment_padding.sub("", text)
    cleaned = patterns.collapse.sub(" ", cleaned).strip()
    return cleaned or None


def normalize_type(region: str, patterns: PatternSet) -> Optional[str]:
    """Drop the outer braces of a ``{...}`` annotation and tidy its whitespace."""
    inner = patterns.collapse.sub(" ", region[1:-1]).strip()
    return inner or None


def parse_description(comment: Optional[str], patterns: PatternSet) -> Optional[str]:
    """Return the free text that precedes the first block tag."""
    if not comment:
        return None
    match = patterns.comment_description.match(comment)
    if match is None:
        return None
    return normalize_text(match.group("desc"), patterns)


def parse_type(comment: Optional[str], patterns: PatternSet) -> str:
    """Return the ``@type`` annotation of a property comment, ``"any"`` if absent."""
    if not comment:
        return "any"
    for match in patterns.comment_type.finditer(comment):
        region = match_balanced(comment, match.end(), "{", "}")
        if region is not None:
            return normalize_type(region, patterns) or "any"
    return "any"


def parse_comment(comment: Optional[str], patterns: PatternSet) -> DocComment:
    """Collect tags and tag fields from ``comment``.

    A missing comment yields an empty :class:`DocComment`; a tag that is not
    present leaves its field ``None``.
    """
    if not comment:
        return DocComment()

    tags = TagSet()
    for tag, pattern_name in _BOOLEAN_TAGS:
        tags = tags.add(tag, getattr(patterns, pattern_name).search(comment))
    access = patterns.tag_access.search(comment)
    if access:
        tags = tags.add(access.group("access").strip())

    return DocComment(
        tags=tags,
        author=_tag_text(patterns.tag_author, comment, patterns),
        copyright=_tag_text(patterns.tag_copyright, comment, patterns),
        license=_license(comment, patterns),
        since=_tag_text(patterns.tag_since, comment, patterns),
        deprecated=_tag_text(patterns.tag_deprecated, comment, patterns),
        requires=_requires(comment, patterns),
        version=_tag_text(patterns.tag_version, comment, patterns),
        returns=_typed_text(patterns.tag_return, comment, patterns),
        yields=_typed_text(patterns.tag_yields, comment, patterns),
        throws=_typed_text(patterns.tag_throws, comment, patterns),
        todo=tuple(
            text
            for text in (
                normalize_text(match.group("desc"), patterns)
                for match in patterns.tag_todo.finditer(comment)
            )
            if text
        ),
    )


def _tag_text(pattern: Pattern[str], comment: str, patterns: PatternSet) -> Optional[str]:
    match = pattern.search(comment)
    if match is None:
        return None
    return normalize_text(match.group("desc"), patterns)


def _license(comment: str, patterns: PatternSet) -> Optional[str]:
    # Only the padding in front of @license is stripped from later lines; a line
    # indented differently keeps its padding.
    match = patterns.tag_license.search(comment)
    if match is None:
        return None
    padding = match.group("padding")
    text = match.group("desc")
    if padding:
        text = text.replace(padding, "\n")
    return text.strip() or None


def _requires(comment: str, patterns: PatternSet) -> Optional[str]:
    match = patterns.tag_requires.search(comment)
    if match is None:
        return None
    module = match.group("module")
    if module.endswith("*/"):
        module = module[:-2]
    return module.strip() or None


def _typed_text(head: Pattern[str], comment: str, patterns: PatternSet) -> Optional[TypedText]:
    for match in head.finditer(comment):
        position = match.end()
        type_text: Optional[str] = None
        if comment.startswith("{", position):
            region = match_balanced(comment, position, "{", "}")
            if region is None:
                continue
            type_text = normalize_type(region, patterns)
            position += len(region)
        text = patterns.tag_text.match(comment, position)
        description = normalize_text(text.group("desc"), patterns) if text else None
        return TypedText(type=type_text, description=description)
    return None


__all__ = [
    "normalize_text",
    "normalize_type",
    "parse_comment",
    "parse_description",
    "parse_type",
]
