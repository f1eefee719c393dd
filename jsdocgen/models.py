"""Document tree shared by the extraction engine and the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Tuple, Union


class Tag(str, Enum):
    """Closed vocabulary of labels a node may carry."""

    CLASS = "class"
    STATIC = "static"
    ABSTRACT = "abstract"
    ASYNC = "async"
    GENERATOR = "generator"
    HIDECONSTRUCTOR = "hideconstructor"
    IGNORE = "ignore"
    READONLY = "readonly"
    OPTIONAL = "optional"
    PACKAGE = "package"
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"


ACCESS_LEVELS: Tuple[Tag, ...] = (Tag.PACKAGE, Tag.PRIVATE, Tag.PROTECTED, Tag.PUBLIC)

TagLike = Union[Tag, str]


@dataclass(frozen=True)
class TagSet:
    """Ordered, duplicate-free set of tags.

    ``add`` never mutates; it returns a new set, or the same set when the tag
    is already present or ``present`` is false. Labels outside :class:`Tag`
    raise ``ValueError``.
    """

    labels: Tuple[Tag, ...] = ()

    @classmethod
    def of(cls, *labels: TagLike) -> "TagSet":
        tags = cls()
        for label in labels:
            tags = tags.add(label)
        return tags

    def add(self, label: TagLike, present: object = True) -> "TagSet":
        if not present:
            return self
        tag = Tag(label)
        if tag in self.labels:
            return self
        return TagSet(self.labels + (tag,))

    def merge(self, other: Iterable[TagLike]) -> "TagSet":
        tags = self
        for label in other:
            tags = tags.add(label)
        return tags

    def __contains__(self, label: object) -> bool:
        try:
            return Tag(label) in self.labels  # type: ignore[arg-type]
        except ValueError:
            return False

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def as_list(self) -> list[str]:
        return [tag.value for tag in self.labels]


@dataclass(frozen=True)
class TypedText:
    """A ``{type} description`` pair from @returns, @yields or @throws."""

    type: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class DocComment:
    """Fields recovered from one structured comment block."""

    tags: TagSet = field(default_factory=TagSet)
    author: Optional[str] = None
    copyright: Optional[str] = None
    license: Optional[str] = None
    since: Optional[str] = None
    deprecated: Optional[str] = None
    requires: Optional[str] = None
    version: Optional[str] = None
    returns: Optional[TypedText] = None
    yields: Optional[TypedText] = None
    throws: Optional[TypedText] = None
    todo: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str = "any"
    description: Optional[str] = None
    default: Optional[str] = None
    tags: TagSet = field(default_factory=TagSet)


@dataclass(frozen=True)
class Property:
    name: str
    type: str = "any"
    description: Optional[str] = None
    deprecated: Optional[str] = None
    tags: TagSet = field(default_factory=TagSet)
    owner: Optional[str] = None
    doc: DocComment = field(default_factory=DocComment)


@dataclass(frozen=True)
class Method:
    """A method, or the class constructor when ``name == "constructor"``."""

    name: str
    description: Optional[str] = None
    deprecated: Optional[str] = None
    params: Tuple[Parameter, ...] = ()
    returns: TypedText = field(default_factory=lambda: TypedText(type="void"))
    tags: TagSet = field(default_factory=TagSet)
    owner: Optional[str] = None
    doc: DocComment = field(default_factory=DocComment)


@dataclass(frozen=True)
class ClassDoc:
    name: Optional[str]
    extends: Optional[str] = None
    description: Optional[str] = None
    tags: TagSet = field(default_factory=TagSet)
    constructor: Optional[Method] = None
    properties: Tuple[Property, ...] = ()
    methods: Tuple[Method, ...] = ()
    doc: DocComment = field(default_factory=DocComment)


@dataclass(frozen=True)
class SourceFile:
    """Extraction result for one source file.

    ``types``, ``variables`` and ``functions`` are reserved and always empty.
    """

    path: str
    classes: Tuple[ClassDoc, ...] = ()
    types: Tuple[Any, ...] = ()
    variables: Tuple[Any, ...] = ()
    functions: Tuple[Any, ...] = ()


def to_dict(node: Any) -> Any:
    """Convert a document node (or a sequence of them) into JSON-ready data."""
    if isinstance(node, TagSet):
        return node.as_list()
    if isinstance(node, Enum):
        return node.value
    if is_dataclass(node) and not isinstance(node, type):
        return {item.name: to_dict(getattr(node, item.name)) for item in fields(node)}
    if isinstance(node, (list, tuple)):
        return [to_dict(item) for item in node]
    return node


__all__ = [
    "ACCESS_LEVELS",
    "ClassDoc",
    "DocComment",
    "Method",
    "Parameter",
    "Property",
    "SourceFile",
    "Tag",
    "TagSet",
    "TypedText",
    "to_dict",
]
