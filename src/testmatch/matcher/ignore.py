"""Gitignore-syntax ignore files, compiled with pathspec."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path

import pathspec

from testmatch.matcher.paths import is_absolute, normalize

IGNORE_FILENAME = ".testmatchignore"


def _read_ignore_file(path: Path) -> list[str]:
    """Read pattern lines from an ignore file, dropping blanks and `#` comments."""
    lines = path.read_text().splitlines()
    return [line for line in lines if line.strip() and not line.strip().startswith("#")]


@dataclass(frozen=True)
class IgnoreFile:
    """
    A compiled ignore file. Patterns apply to paths relative to `root`, the
    directory holding the file.
    """

    root: str
    spec: pathspec.PathSpec

    def matches(self, file_path: str) -> bool:
        """
        Whether the ignore file excludes `file_path`. Relative paths are taken
        as relative to `root`; absolute paths outside `root` are never ignored.
        """
        path = normalize(file_path)
        if is_absolute(path):
            root = self.root.rstrip("/") + "/"
            if not path.startswith(root):
                return False
            path = path[len(root) :]
        path = posixpath.normpath(path) if path else path
        if not path or path == "." or path.startswith("../"):
            return False
        return self.spec.match_file(path)


def load_ignore_file(path: Path) -> IgnoreFile | None:
    """
    Compile the ignore file at `path`. Returns `None` if it holds no patterns.
    Raises `FileNotFoundError` if it does not exist.
    """
    lines = _read_ignore_file(path)
    if not lines:
        return None
    root = normalize(os.path.abspath(path.parent))
    return IgnoreFile(root=root, spec=pathspec.PathSpec.from_lines("gitignore", lines))


def find_tool_ignore(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for `.testmatchignore`. Returns the first
    one found, or `None`.
    """
    current = start_dir.absolute()
    while True:
        candidate = current / IGNORE_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
