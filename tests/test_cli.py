"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsdocgen.cli import _build_parser, main
from tests._fixtures.source_builder import SourceBuilder


def test_cli_accepts_options_and_paths() -> None:
    parser = _build_parser()
    args = parser.parse_args(["-v", "--format", "json", "-o", "out.json", "src", "lib"])

    assert args.verbose is True
    assert args.format == "json"
    assert args.output == Path("out.json")
    assert args.paths == ["src", "lib"]


def test_cli_requires_a_path() -> None:
    parser = _build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_cli_rejects_unknown_format() -> None:
    parser = _build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["--format", "html", "src"])


def test_main_writes_reference(
    source_builder: SourceBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_builder.write({"widget.js": "class Widget { constructor() {} }"})
    output = tmp_path / "API.md"

    main(["--config", str(tmp_path / "none.yml"), "-o", str(output), str(source_builder.path())])

    assert "## Class `Widget`" in output.read_text(encoding="utf-8")
    assert "API reference written to" in capsys.readouterr().out


def test_main_exits_on_missing_input(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "none.yml"), str(tmp_path / "missing.js")])

    assert excinfo.value.code == 1


def test_main_exits_on_bad_config(tmp_path: Path) -> None:
    config = tmp_path / ".jsdocgen.yml"
    config.write_text("format: html\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config), str(tmp_path)])

    assert excinfo.value.code == 1


def test_main_exits_on_non_utf8_source(tmp_path: Path) -> None:
    source = tmp_path / "latin1.js"
    source.write_bytes(b"/** caf\xe9 */ class Cafe {}")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "none.yml"), "-o", str(tmp_path / "API.md"), str(source)])

    assert excinfo.value.code == 1


def test_main_exits_on_unreadable_config(tmp_path: Path) -> None:
    (tmp_path / ".jsdocgen.yml").mkdir()

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), str(tmp_path)])

    assert excinfo.value.code == 1
