"""Parsing of ``.gustignore`` and matching paths against it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import UserError
from .paths import RootPath


@dataclass(frozen=True)
class IgnoredFile:
    """An ignore rule.

    A fixed rule names one absolute path under the root; any other rule
    matches every path that ends with its components.
    """

    path: Path
    fixed: bool = False


def _ends_with(path: Path, suffix: Path) -> bool:
    count = len(suffix.parts)
    return count == 0 or path.parts[-count:] == suffix.parts


def read_ignored(root: RootPath) -> list[IgnoredFile]:
    """Read the rules from the root's ``.gustignore``, if there is one."""
    ignore_path = root.join(".gustignore")
    if not ignore_path.exists():
        return []
    text = ignore_path.read_text(encoding="utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    rules: list[IgnoredFile] = []
    for line in (raw.removesuffix("\r") for raw in lines):
        if line.startswith("#"):
            continue
        if line.startswith("/"):
            try:
                rules.append(IgnoredFile(root.unsafe_join(line[1:]), fixed=True))
            except UserError:
                continue
        else:
            rules.append(IgnoredFile(Path(line)))
    return rules


def is_path_ignored(path: Path, ignored: Iterable[IgnoredFile]) -> bool:
    """Tell whether ``path`` matches a rule.

    Raises :class:`UserError` for a path inside an ignored fixed directory.
    """
    path = Path(path)
    for rule in ignored:
        if rule.fixed:
            if path == rule.path:
                return True
            if path.is_relative_to(rule.path):
                raise UserError(f"Path {path} is inside a directory that is ignored")
        elif _ends_with(path, rule.path):
            return True
    return False