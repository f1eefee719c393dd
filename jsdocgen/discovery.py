"""Input discovery: turn user-supplied paths into the ordered list of sources."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .logging import get_logger

logger = get_logger("discovery")

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "bower_components",
    "__pycache__",
    ".idea",
}


class InputValidationError(TypeError):
    """Raised when the input is empty or not a path / list of paths."""


class SourceTooLargeError(ValueError):
    """Raised when a source file exceeds the configured size ceiling."""


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style line from .gitignore or ``exclude_paths``.

    A pattern containing ``/`` is matched against the path from the walk
    root; any other pattern against the entry name only. Ignored directories
    are pruned during the walk, so their contents never reach the rules.
    """

    pattern: str
    negate: bool = False
    directory_only: bool = False
    rooted: bool = False

    @classmethod
    def parse(cls, line: str) -> "IgnoreRule | None":
        line = line.strip()
        if not line or line.startswith("#"):
            return None
        negate = line.startswith("!")
        pattern = line[1:] if negate else line
        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        rooted = "/" in pattern
        pattern = pattern.lstrip("/")
        if not pattern:
            return None
        return cls(pattern, negate=negate, directory_only=directory_only, rooted=rooted)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        target = rel_path if self.rooted else rel_path.rsplit("/", 1)[-1]
        return fnmatchcase(target, self.pattern)


def load_ignore_rules(root: Path, exclude_paths: Sequence[str] = ()) -> List[IgnoreRule]:
    """Return the rules of ``root/.gitignore`` followed by ``exclude_paths``."""
    gitignore = root / ".gitignore"
    lines = gitignore.read_text(encoding="utf-8").splitlines() if gitignore.is_file() else []
    lines.extend(exclude_paths)
    return [rule for rule in map(IgnoreRule.parse, lines) if rule is not None]


def _is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    # the last matching rule decides, so "!name" can re-include a file
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def normalize_inputs(inputs: object) -> List[Path]:
    """Validate ``inputs`` and return them as a list of paths.

    Accepts one path (``str`` or ``os.PathLike``) or a list/tuple of them.
    """
    if isinstance(inputs, (str, os.PathLike)):
        items: Sequence[object] = [inputs]
    elif isinstance(inputs, (list, tuple)):
        items = inputs
    else:
        raise InputValidationError(
            f"Invalid file path {inputs!r}, expected a path or a list of paths"
        )

    if not items:
        raise InputValidationError("No input paths given")

    paths: List[Path] = []
    for item in items:
        if not isinstance(item, (str, os.PathLike)) or not str(item):
            raise InputValidationError(f"Invalid file path {item!r}")
        paths.append(Path(item))
    return paths


def _iter_directory(root: Path, extensions: Sequence[str], rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_ignored(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            if not filename.endswith(tuple(extensions)):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_ignored(rel_path, False, rules):
                logger.debug("Skipping ignored file %s", rel_path)
                continue
            yield current_dir / filename


def collect_source_files(
    inputs: object,
    *,
    extensions: Sequence[str] = (".js",),
    exclude_paths: Sequence[str] = (),
) -> List[Path]:
    """Expand ``inputs`` into source files, in input order then sorted walk order.

    Directories are walked recursively; files named explicitly are kept even
    when their suffix is not in ``extensions``. A path that does not exist
    raises ``FileNotFoundError``.
    """
    paths = normalize_inputs(inputs)
    found: List[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_dir():
            rules = load_ignore_rules(path, exclude_paths)
            candidates = list(_iter_directory(path, extensions, rules))
            logger.debug("Found %d source files under %s", len(candidates), path)
        elif path.exists():
            candidates = [path]
        else:
            raise FileNotFoundError(f"Input path not found: {path}")

        for candidate in candidates:
            key = candidate.resolve()
            if key in seen:
                continue
            seen.add(key)
            found.append(candidate)
    return found


def read_source(path: Path, max_bytes: int | None = None) -> str:
    """Read one source file as UTF-8, enforcing ``max_bytes`` when given."""
    if max_bytes is not None:
        size = path.stat().st_size
        if size > max_bytes:
            raise SourceTooLargeError(
                f"{path} is {size} bytes, larger than the {max_bytes} byte limit"
            )
    return path.read_text(encoding="utf-8")


__all__ = [
    "IgnoreRule",
    "InputValidationError",
    "SourceTooLargeError",
    "collect_source_files",
    "normalize_inputs",
    "load_ignore_rules",
    "read_source",
]
