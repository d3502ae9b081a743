"""Project root discovery and path helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import UserError

GUST_DIR = ".gust"


@dataclass(frozen=True)
class RootPath:
    """The absolute directory that holds a project's ``.gust`` folder."""

    path: Path

    def __post_init__(self) -> None:
        path = Path(self.path)
        if not path.is_absolute():
            raise ValueError("project root must be an absolute path")
        object.__setattr__(self, "path", path)

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __str__(self) -> str:
        return str(self.path)

    def join(self, path: str | os.PathLike[str]) -> Path:
        """Return ``path`` resolved against the root."""
        return self.path / path

    def unsafe_join(self, path: str | os.PathLike[str]) -> Path:
        """Like :meth:`join`, but the result must exist."""
        result = self.join(path)
        if not result.exists():
            raise UserError(f"Path {result} does not exist")
        return result

    def is_inside_root(self, path: str | os.PathLike[str]) -> bool:
        return Path(path).is_relative_to(self.path)

    def relative(self, path: str | os.PathLike[str]) -> Path:
        """Return ``path`` relative to the root; it must lie inside it."""
        path = Path(path)
        if not self.is_inside_root(path):
            raise UserError(f"{path} isn't inside the project")
        return path.relative_to(self.path)


def resolve_cli_path(
    path: str | os.PathLike[str], cwd: str | os.PathLike[str] | None = None
) -> Path:
    """Turn a path given on the command line into an existing absolute path."""
    path = Path(path)
    if path.is_absolute():
        joined = path
    else:
        base = Path(cwd) if cwd is not None else Path.cwd()
        joined = base / path
    if not joined.exists():
        raise UserError(f"Path is not inside root: {joined}")
    return joined


def find_project_root(start: str | os.PathLike[str] | None = None) -> RootPath:
    """Walk up from ``start`` (default: the working directory) to find a project."""
    current = Path(start).absolute() if start is not None else Path.cwd()
    for candidate in (current, *current.parents):
        if (candidate / GUST_DIR).exists():
            return RootPath(candidate)
    raise UserError("No project found")