"""Compiled regular expressions used by the extraction engine.

Patterns stop at the first delimiter of a nested region (``{``, ``[``, ``(``);
the region itself is matched by :mod:`jsdocgen.extraction.balanced`.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Dict, Mapping

COMMENT = r"/\*\*(?:(?!\*/)[\s\S])+?\*/"
NAME = r"[a-zA-Z_$][\w$]*"
# Free text after a tag: runs up to the next block tag (an ``@word`` preceded by
# whitespace or comment padding) or the end of the comment.
TAG_TEXT = r"(?P<desc>[\s\S]*?)(?=(?<![^\s*])@\w|\*/|\Z)"

_JSDOC = rf"(?:(?P<jsdoc>{COMMENT})\s*)?"
_WORD_START = r"(?<![\w$.])"

PATTERN_SOURCES: Dict[str, str] = {
    # source declarations
    "comment": COMMENT,
    "line_comment": r"//[^\n]*",
    "name": NAME,
    "whitespace": r"\s+",
    "block_open": r"\s*\{",
    "class_declaration": (
        rf"{_JSDOC}(?:export\s+(?:default\s+)?)?{_WORD_START}class"
        rf"(?:\s+(?P<name>{NAME}))?"
        rf"(?:\s+extends\s+(?P<extends>{NAME}(?:\.{NAME})*))?\s*\{{"
    ),
    "class_constructor": rf"{_JSDOC}{_WORD_START}constructor\s*(?=\()",
    "class_property": (
        rf"{_JSDOC}(?:{_WORD_START}(?P<static>static)\s+|{_WORD_START}this\.)"
        rf"(?!(?:(?:async|get|set)\s+)?\*?\s*{NAME}\s*\()(?P<name>{NAME})"
    ),
    "class_method": (
        rf"{_JSDOC}{_WORD_START}(?:(?P<static>static)\s+)?(?:(?:get|set)\s+(?={NAME}))?"
        rf"(?:(?P<async>async)\s+)?(?:(?P<generator>\*)\s*)?(?P<name>{NAME})\s*(?=\()"
    ),
    # comment blocks
    "comment_description": rf"/\*\*{TAG_TEXT}",
    "comment_param": r"@param(?:eter)?\s+",
    "comment_type": r"@type\s+(?=\{)",
    "comment_padding": r"(?m)^[ \t]*\*+(?!/)",
    "tag_access": r"@(?:access\s+)?(?P<access>package|private|protected|public)",
    "tag_abstract": r"@(?:abstract|virtual)",
    "tag_async": r"@async",
    "tag_generator": r"@generator",
    "tag_hideconstructor": r"@hideconstructor",
    "tag_ignore": r"@ignore",
    "tag_static": r"@static",
    "tag_readonly": r"@readonly",
    "tag_class": r"@(?:class|constructor)",
    "tag_author": rf"@author\s+{TAG_TEXT}",
    "tag_copyright": rf"@copyright\s+{TAG_TEXT}",
    # padding is optional; without it the license text is taken as is
    "tag_license": (
        rf"(?:(?P<padding>[ \t]*\n?[ \t]*\*)\s*|(?<![^\s*]))@license\s+{TAG_TEXT}"
    ),
    "tag_since": rf"@since\s+{TAG_TEXT}",
    "tag_deprecated": rf"@deprecated\s+{TAG_TEXT}",
    "tag_requires": rf"@requires\s+(?P<module>\S+)",
    "tag_version": rf"@version\s+{TAG_TEXT}",
    "tag_return": r"@returns?\s+(?=\{)",
    "tag_yields": r"@yields?\s+(?=\{)",
    "tag_throws": r"@(?:throws|exception)\s+",
    "tag_todo": rf"@todo\s+{TAG_TEXT}",
    "tag_text": TAG_TEXT,
    "collapse": r"\s{2,}",
}


class PatternSet:
    """Compiled pattern table passed explicitly to every extraction call.

    Use it as a context manager; once the block exits the set is closed and
    any further lookup raises ``RuntimeError``::

        with PatternSet.compile() as patterns:
            assembler = DocumentAssembler(patterns)
    """

    def __init__(self, compiled: Mapping[str, Pattern[str]]) -> None:
        self._patterns: Dict[str, Pattern[str]] = dict(compiled)
        self._closed = False

    @classmethod
    def compile(cls, sources: Mapping[str, str] | None = None) -> "PatternSet":
        table = PATTERN_SOURCES if sources is None else sources
        return cls({name: re.compile(source) for name, source in table.items()})

    def __getattr__(self, name: str) -> Pattern[str]:
        patterns = self.__dict__.get("_patterns")
        if patterns is None or name not in patterns:
            raise AttributeError(name)
        self.ensure_open()
        return patterns[name]

    @property
    def closed(self) -> bool:
        return self._closed

    def ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("PatternSet used after it was closed")

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> "PatternSet":
        self.ensure_open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["COMMENT", "NAME", "PATTERN_SOURCES", "PatternSet", "TAG_TEXT"]
