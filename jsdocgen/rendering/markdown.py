"""Renders extracted document trees as Markdown or JSON."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import ClassDoc, Method, Parameter, Property, SourceFile, Tag, to_dict

logger = get_logger("rendering")

TEMPLATE_NAME = "api.md.j2"


def format_signature(method: Method) -> str:
    """Return a TypeScript-style signature such as ``static build(a: number): void``."""
    prefix = ""
    if Tag.STATIC in method.tags:
        prefix += "static "
    if Tag.ASYNC in method.tags:
        prefix += "async "
    params = ", ".join(f"{param.name}: {param.type}" for param in method.params)
    return f"{prefix}{method.name}({params}): {method.returns.type or 'void'}"


def format_row(member: Parameter | Property) -> str:
    return f"`{member.name}: {member.type}` | {member.description or '_No description_'}"


def visible_classes(files: Iterable[SourceFile]) -> List[ClassDoc]:
    """Flatten ``files`` into the classes to print, with ignored members removed."""
    classes: List[ClassDoc] = []
    for source in files:
        for cls in source.classes:
            if Tag.IGNORE in cls.tags:
                continue
            constructor = cls.constructor
            if constructor is not None and (
                Tag.HIDECONSTRUCTOR in cls.tags or Tag.IGNORE in constructor.tags
            ):
                constructor = None
            classes.append(
                replace(
                    cls,
                    constructor=constructor,
                    properties=tuple(p for p in cls.properties if Tag.IGNORE not in p.tags),
                    methods=tuple(m for m in cls.methods if Tag.IGNORE not in m.tags),
                )
            )
    return classes


class MarkdownRenderer:
    """Produces the API reference page from the class trees of every file."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, files: Sequence[SourceFile]) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        classes = visible_classes(files)
        logger.debug("Rendering %d classes from %d files", len(classes), len(files))
        return template.render(classes=classes).rstrip() + "\n"

    def _create_env(self, templates_dir: Optional[Path]) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["signature"] = format_signature
        env.filters["row"] = format_row
        return env


def render_json(files: Sequence[SourceFile]) -> str:
    """Dump the full trees, tags and tag fields included."""
    return json.dumps(to_dict(list(files)), indent=2) + "\n"


__all__ = ["MarkdownRenderer", "format_row", "format_signature", "render_json", "visible_classes"]
