"""Extraction engine: from JavaScript source text to the document tree."""

from __future__ import annotations

from .assembler import ClassHeader, DocumentAssembler, RESERVED_MEMBER_NAMES
from .balanced import find_balanced_end, match_balanced
from .blocks import match_block
from .comments import parse_comment, parse_description, parse_type
from .parameters import parse_parameters, split_optional
from .patterns import PatternSet

__all__ = [
    "ClassHeader",
    "DocumentAssembler",
    "PatternSet",
    "RESERVED_MEMBER_NAMES",
    "find_balanced_end",
    "match_balanced",
    "match_block",
    "parse_comment",
    "parse_description",
    "parse_parameters",
    "parse_type",
    "split_optional",
]
