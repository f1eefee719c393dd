"""Pipeline orchestration: discover, extract, render and write."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from jinja2 import TemplateError

from .config import JsDocGenConfig, default_config
from .discovery import collect_source_files, normalize_inputs, read_source
from .extraction import DocumentAssembler, PatternSet
from .logging import capture_diagnostics, get_logger
from .models import SourceFile
from .rendering import MarkdownRenderer, render_json


@dataclass
class RunOutcome:
    """Result of a documentation run.

    ``files`` is filled even when rendering or writing failed; ``error`` then
    holds the failure message and ``output`` is ``None``.
    """

    files: List[SourceFile]
    output: Optional[Path] = None
    error: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class Orchestrator:
    """Coordinates one documentation run over a set of input paths."""

    def __init__(
        self,
        config: JsDocGenConfig | None = None,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        self.config = config or default_config()
        self.renderer = renderer or MarkdownRenderer(self.config.templates_dir)
        self.logger = get_logger("orchestrator")

    def collect(self, inputs: object) -> List[Path]:
        return collect_source_files(
            inputs,
            extensions=self.config.extensions,
            exclude_paths=self.config.exclude_paths,
        )

    def extract(self, paths: List[Path]) -> tuple[List[SourceFile], List[str]]:
        """Extract every path with one pattern set; returns trees and warnings."""
        files: List[SourceFile] = []
        with capture_diagnostics() as diagnostics, PatternSet.compile() as patterns:
            assembler = DocumentAssembler(patterns)
            for path in paths:
                text = read_source(path, self.config.max_file_bytes)
                files.append(assembler.assemble(path.as_posix(), text))
        return files, list(diagnostics.messages)

    def document(self, inputs: object) -> List[SourceFile]:
        normalize_inputs(inputs)
        files, _ = self.extract(self.collect(inputs))
        return files

    def render(self, files: List[SourceFile]) -> str:
        if self.config.format == "json":
            return render_json(files)
        return self.renderer.render(files)

    def run(self, inputs: object, output: Path | None = None) -> RunOutcome:
        """Extract ``inputs`` and write the rendered reference to ``output``."""
        normalize_inputs(inputs)
        target = output or self.config.output
        self.logger.info("Starting run for %s", inputs)

        paths = self.collect(inputs)
        self.logger.info("Discovered %d source files", len(paths))
        files, diagnostics = self.extract(paths)
        for message in diagnostics:
            self.logger.debug("Extraction diagnostic: %s", message)

        outcome = RunOutcome(files=files, diagnostics=diagnostics)
        try:
            content = self.render(files)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except (TemplateError, OSError) as exc:
            self.logger.error("Failed to write %s: %s", target, exc)
            outcome.error = str(exc)
            return outcome

        outcome.output = target
        self.logger.info(
            "Wrote %d classes to %s", sum(len(item.classes) for item in files), target
        )
        return outcome


def document(inputs: object, config: JsDocGenConfig | None = None) -> List[SourceFile]:
    """Return one document tree per source file found under ``inputs``."""
    return Orchestrator(config).document(inputs)


__all__ = ["Orchestrator", "RunOutcome", "document"]
