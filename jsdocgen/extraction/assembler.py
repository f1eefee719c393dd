"""Builds the File -> Class -> Member tree for one source file."""

from __future__ import annotations

from dataclasses import dataclass
from re import Match, Pattern
from typing import AbstractSet, Dict, Iterator, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import ClassDoc, Method, Property, SourceFile, Tag, TagSet, TypedText
from .balanced import find_balanced_end
from .blocks import match_block, nesting_depths
from .comments import parse_comment, parse_description, parse_type
from .parameters import parse_parameters
from .patterns import PatternSet

logger = get_logger("extraction")

RESERVED_MEMBER_NAMES = frozenset({"constructor", "super"})
# Keywords that take a parenthesised clause and a block, and so look like methods.
_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "with", "function", "return"})


@dataclass(frozen=True)
class ClassHeader:
    """A class declaration located in the source text."""

    name: Optional[str]
    extends: Optional[str]
    jsdoc: Optional[str]
    start: int
    length: int

    @property
    def brace_index(self) -> int:
        return self.start + self.length - 1


@dataclass(frozen=True)
class _MemberMatch:
    name: str
    jsdoc: Optional[str]
    start: int
    is_static: bool = False
    is_async: bool = False
    is_generator: bool = False


class DocumentAssembler:
    """Runs the extractors over one file's text.

    The assembler holds no per-file state, so one instance can process any
    number of files with the same :class:`PatternSet`.
    """

    def __init__(self, patterns: PatternSet) -> None:
        self.patterns = patterns

    def assemble(self, path: str, text: str) -> SourceFile:
        self.patterns.ensure_open()
        classes = tuple(self.build_class(header, text) for header in self.find_classes(text))
        logger.debug("Extracted %d classes from %s", len(classes), path)
        return SourceFile(path=path, classes=classes)

    def find_classes(self, text: str) -> List[ClassHeader]:
        return [
            ClassHeader(
                name=match.group("name"),
                extends=match.group("extends"),
                jsdoc=match.group("jsdoc"),
                start=match.start(),
                length=len(match.group(0)),
            )
            for match in self.patterns.class_declaration.finditer(text)
        ]

    def build_class(self, header: ClassHeader, text: str) -> ClassDoc:
        patterns = self.patterns
        body = match_block(text, header.brace_index)
        doc = parse_comment(header.jsdoc, patterns)

        constructor = self.find_constructor(body, header.name)
        # static comes from the body alone: a class with a constructor is never static
        tags = (
            TagSet.of(Tag.CLASS)
            .add(Tag.STATIC, constructor is None)
            .merge(tag for tag in doc.tags if tag is not Tag.STATIC)
        )

        methods = self.find_methods(body, header.name)
        properties = self.find_properties(
            body, header.name, methods={method.name for method in methods}
        )

        return ClassDoc(
            name=header.name,
            extends=header.extends,
            description=parse_description(header.jsdoc, patterns),
            tags=tags,
            constructor=constructor,
            properties=properties,
            methods=methods,
            doc=doc,
        )

    def find_constructor(self, body: str, class_name: Optional[str]) -> Optional[Method]:
        """Return the constructor declared in ``body``, or ``None`` when there is none."""
        patterns = self.patterns
        for match, _ in _declarations(patterns.class_constructor, patterns, body):
            jsdoc = match.group("jsdoc")
            doc = parse_comment(jsdoc, patterns)
            return Method(
                name="constructor",
                description=parse_description(jsdoc, patterns),
                deprecated=doc.deprecated,
                params=parse_parameters(jsdoc, patterns),
                returns=TypedText(type=class_name, description=None),
                tags=doc.tags,
                owner=class_name,
                doc=doc,
            )
        return None

    def find_methods(self, body: str, owner: Optional[str]) -> Tuple[Method, ...]:
        patterns = self.patterns
        depths = nesting_depths(body)
        comments = _comment_spans(body, patterns)
        methods: List[Method] = []
        for match, _ in _declarations(patterns.class_method, patterns, body):
            member = _MemberMatch(
                name=match.group("name"),
                jsdoc=match.group("jsdoc"),
                start=match.start(),
                is_static=bool(match.group("static")),
                is_async=bool(match.group("async")),
                is_generator=bool(match.group("generator")),
            )
            if member.name in RESERVED_MEMBER_NAMES or member.name in _KEYWORDS:
                continue
            # Only declarations directly inside the class braces are members.
            if depths[member.start] != 1 or _inside(member, comments):
                continue
            methods.append(self._method(member, owner))
        return tuple(methods)

    def find_properties(
        self, body: str, owner: Optional[str], methods: AbstractSet[str] = frozenset()
    ) -> Tuple[Property, ...]:
        """Return ``static x`` / ``this.x`` declarations, one per name.

        An undocumented ``this.x`` whose name is also a method (for example
        ``this.render.bind(this)``) refers to that method and is skipped.
        """
        patterns = self.patterns
        comments = _comment_spans(body, patterns)
        found: Dict[str, _MemberMatch] = {}
        for match in patterns.class_property.finditer(body):
            member = _MemberMatch(
                name=match.group("name"),
                jsdoc=match.group("jsdoc"),
                start=match.start(),
                is_static=bool(match.group("static")),
            )
            if member.name in RESERVED_MEMBER_NAMES or _inside(member, comments):
                continue
            previous = found.get(member.name)
            if previous is None:
                found[member.name] = member
            elif previous.jsdoc is None and member.jsdoc is not None:
                # keep the first position, take the first documented occurrence
                found[member.name] = _MemberMatch(
                    name=member.name,
                    jsdoc=member.jsdoc,
                    start=previous.start,
                    is_static=previous.is_static or member.is_static,
                )
        return tuple(
            self._property(member, owner)
            for member in found.values()
            if member.jsdoc is not None or member.name not in methods
        )

    def _property(self, member: _MemberMatch, owner: Optional[str]) -> Property:
        patterns = self.patterns
        doc = parse_comment(member.jsdoc, patterns)
        return Property(
            name=member.name,
            type=parse_type(member.jsdoc, patterns),
            description=parse_description(member.jsdoc, patterns),
            deprecated=doc.deprecated,
            tags=TagSet().add(Tag.STATIC, member.is_static).merge(doc.tags),
            owner=owner,
            doc=doc,
        )

    def _method(self, member: _MemberMatch, owner: Optional[str]) -> Method:
        patterns = self.patterns
        doc = parse_comment(member.jsdoc, patterns)
        tags = (
            TagSet()
            .add(Tag.STATIC, member.is_static)
            .add(Tag.ASYNC, member.is_async)
            .add(Tag.GENERATOR, member.is_generator)
            .merge(doc.tags)
        )
        return Method(
            name=member.name,
            description=parse_description(member.jsdoc, patterns),
            deprecated=doc.deprecated,
            params=parse_parameters(member.jsdoc, patterns),
            returns=doc.returns or TypedText(type="void"),
            tags=tags,
            owner=owner,
            doc=doc,
        )


def _declarations(
    head: Pattern[str], patterns: PatternSet, text: str
) -> Iterator[Tuple[Match[str], int]]:
    """Yield ``(head_match, end)`` for ``head`` + ``(...)`` + ``{`` declarations.

    ``end`` is the index just past the opening brace.
    """
    position = 0
    while True:
        match = head.search(text, position)
        if match is None:
            return
        params_end = find_balanced_end(text, match.end(), "(", ")")
        brace = patterns.block_open.match(text, params_end) if params_end != -1 else None
        if brace is None:
            position = match.start() + 1
            continue
        yield match, brace.end()
        position = brace.end()


def _comment_spans(text: str, patterns: PatternSet) -> List[Tuple[int, int]]:
    spans = [match.span() for match in patterns.comment.finditer(text)]
    spans.extend(match.span() for match in patterns.line_comment.finditer(text))
    return spans


def _inside(member: _MemberMatch, spans: Sequence[Tuple[int, int]]) -> bool:
    return any(start < member.start < end for start, end in spans)


__all__ = ["ClassHeader", "DocumentAssembler", "RESERVED_MEMBER_NAMES"]
