from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from jsdocgen.extraction import DocumentAssembler, PatternSet
from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


@pytest.fixture
def patterns() -> Iterator[PatternSet]:
    with PatternSet.compile() as compiled:
        yield compiled


@pytest.fixture
def assembler(patterns: PatternSet) -> DocumentAssembler:
    return DocumentAssembler(patterns)
