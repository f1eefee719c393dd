"""Tests for input discovery and source reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsdocgen.discovery import (
    InputValidationError,
    SourceTooLargeError,
    IgnoreRule,
    collect_source_files,
    load_ignore_rules,
    read_source,
)
from tests._fixtures.source_builder import SourceBuilder


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_directories_are_walked_in_sorted_order(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "b.js": "class B {}",
            "a.js": "class A {}",
            "lib/c.js": "class C {}",
            "lib/readme.md": "# notes",
            "node_modules/dep/index.js": "class Dep {}",
            ".git/hooks/x.js": "class Hook {}",
        }
    )

    found = collect_source_files(str(source_builder.path()))

    assert _relative(found, source_builder.path()) == ["a.js", "b.js", "lib/c.js"]


def test_gitignore_and_exclude_paths(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            ".gitignore": "dist/\n*.min.js\n!keep.min.js\n",
            "src/app.js": "class App {}",
            "src/app.min.js": "class App{}",
            "src/keep.min.js": "class Keep{}",
            "dist/bundle.js": "class Bundle {}",
            "vendor/lib.js": "class Vendor {}",
        }
    )

    found = collect_source_files(source_builder.path(), exclude_paths=["vendor/"])

    assert _relative(found, source_builder.path()) == ["src/app.js", "src/keep.min.js"]


def test_explicit_files_are_kept_as_given(source_builder: SourceBuilder) -> None:
    source_builder.write({"widget.mjs": "class W {}", "lib/a.js": "class A {}"})
    explicit = source_builder.path("widget.mjs")

    found = collect_source_files([explicit, source_builder.path("lib"), explicit])

    assert found == [explicit, source_builder.path("lib/a.js")]


def test_extensions_filter_directory_walks(source_builder: SourceBuilder) -> None:
    source_builder.write({"a.js": "", "b.mjs": "", "c.ts": ""})

    found = collect_source_files(source_builder.path(), extensions=[".js", ".mjs"])

    assert _relative(found, source_builder.path()) == ["a.js", "b.mjs"]


@pytest.mark.parametrize("inputs", [None, 42, [], [""], ["ok.js", 3], {"a.js"}])
def test_invalid_inputs_are_rejected(inputs: object) -> None:
    with pytest.raises(InputValidationError):
        collect_source_files(inputs)


def test_input_validation_error_is_a_type_error() -> None:
    assert issubclass(InputValidationError, TypeError)
    assert issubclass(SourceTooLargeError, ValueError)


def test_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        collect_source_files(str(tmp_path / "missing.js"))


def test_read_source_enforces_size_ceiling(tmp_path: Path) -> None:
    path = tmp_path / "big.js"
    path.write_text("x" * 32, encoding="utf-8")

    assert read_source(path) == "x" * 32
    assert read_source(path, max_bytes=32) == "x" * 32
    with pytest.raises(SourceTooLargeError):
        read_source(path, max_bytes=16)


def test_ignore_rule_variants() -> None:
    anchored = IgnoreRule.parse("/build")
    directory = IgnoreRule.parse("dist/")
    nested = IgnoreRule.parse("docs/*.js")

    assert anchored is not None and anchored.matches("build", True)
    assert not anchored.matches("src/build", True)
    assert directory is not None and directory.matches("pkg/dist", True)
    assert not directory.matches("dist", False)
    assert nested is not None and nested.matches("docs/a.js", False)
    assert IgnoreRule.parse("   ") is None
    assert IgnoreRule.parse("# comment") is None
    assert IgnoreRule.parse("!keep.js") == IgnoreRule("keep.js", negate=True)


def test_load_ignore_rules_appends_exclude_paths(source_builder: SourceBuilder) -> None:
    source_builder.write({".gitignore": "# build output\ndist/\n"})

    rules = load_ignore_rules(source_builder.path(), ["vendor/"])

    assert [rule.pattern for rule in rules] == ["dist", "vendor"]
    assert all(rule.directory_only for rule in rules)
