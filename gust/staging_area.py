"""The set of changes staged for the next commit."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import ItemsView, Iterator

from .paths import RootPath
from .storage import load_json, save_json


class ChangeType(Enum):
    ADDED = "Added"
    MODIFIED = "Modified"
    REMOVED = "Removed"

    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    ChangeType.ADDED: "+",
    ChangeType.MODIFIED: "~",
    ChangeType.REMOVED: "-",
}


class StagingArea:
    """Root-relative paths mapped to the kind of change staged for them."""

    def __init__(self, root: RootPath, files: dict[Path, ChangeType] | None = None) -> None:
        self.root = root
        self.store_path = root.join(".gust/staging_area.json")
        self.files: dict[Path, ChangeType] = dict(files or {})

    @classmethod
    def load(cls, root: RootPath) -> StagingArea:
        """Load the staging area, dropping entries whose files have vanished."""
        stored = load_json(root.join(".gust/staging_area.json"), {})
        files = {}
        for key, value in stored.items():
            path = Path(key)
            change = ChangeType(value)
            # A staged removal naturally has no file left on disk.
            if change is ChangeType.REMOVED or root.join(path).exists():
                files[path] = change
        area = cls(root, files)
        area.save()
        return area

    def insert(self, path: str | os.PathLike[str], change: ChangeType) -> None:
        self.files[Path(path)] = change
        self.save()

    def remove(self, path: str | os.PathLike[str]) -> None:
        self.files.pop(Path(path), None)
        self.save()

    def clear(self) -> None:
        self.files.clear()
        self.save()

    def save(self) -> None:
        save_json(
            self.store_path,
            {str(path): change.value for path, change in self.files.items()},
        )

    def items(self) -> ItemsView[Path, ChangeType]:
        return self.files.items()

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, os.PathLike)):
            return Path(path) in self.files
        return False

    def __iter__(self) -> Iterator[Path]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)