"""Commits: snapshots of the project tree and references to them."""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Mapping, Protocol

from .errors import ProjectParsingError
from .paths import RootPath
from .staging_area import ChangeType
from .storage import load_json, save_json
from .tracked_file import FileMetadata, TrackedFile, hash_file


class FileStatus(Enum):
    """How a file in the working tree compares with a commit."""

    ADDED = "Added"
    MODIFIED = "Modified"
    UNCHANGED = "Unchanged"


@dataclass(frozen=True)
class CommitMetadata:
    """Descriptive data attached to a commit."""

    name: str = ""

    def to_json(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> CommitMetadata:
        return cls(data["name"])


@dataclass(frozen=True)
class CommitRef:
    """A commit id together with the commit's metadata, as kept by branches."""

    commit_id: str
    metadata: CommitMetadata

    def display(self) -> str:
        return f"{self.metadata.name}: {self.commit_id}"

    def to_json(self) -> dict[str, Any]:
        return {"commit_id": self.commit_id, "metadata": self.metadata.to_json()}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> CommitRef:
        try:
            return cls(data["commit_id"], CommitMetadata.from_json(data["metadata"]))
        except (KeyError, TypeError) as exc:
            raise ProjectParsingError(f"malformed commit reference: {data!r}") from exc


def _commit_path(root: RootPath, commit_id: str) -> Path:
    return root.join(f".gust/commits/{commit_id}.json")


def _storable(tree: Mapping[Path, TrackedFile], metadata: CommitMetadata) -> dict[str, Any]:
    ordered = sorted(tree.items(), key=lambda item: str(item[0]))
    return {
        "tree": {str(path): tracked.to_json() for path, tracked in ordered},
        "metadata": metadata.to_json(),
    }


@dataclass
class Commit:
    """A stored snapshot: root-relative paths mapped to tracked files."""

    root: RootPath
    commit_id: str
    tree: dict[Path, TrackedFile] = field(default_factory=dict)
    metadata: CommitMetadata = field(default_factory=CommitMetadata)

    @property
    def store_path(self) -> Path:
        return _commit_path(self.root, self.commit_id)

    @classmethod
    def load(cls, root: RootPath, commit_id: str) -> Commit:
        """Load a commit by its full id; a missing commit raises FileNotFoundError."""
        data = load_json(_commit_path(root, commit_id))
        try:
            tree = {
                Path(key): TrackedFile.from_json(value)
                for key, value in data["tree"].items()
            }
            metadata = CommitMetadata.from_json(data["metadata"])
        except (KeyError, TypeError, AttributeError) as exc:
            raise ProjectParsingError(f"malformed commit {commit_id}") from exc
        return cls(root, commit_id, tree, metadata)

    @classmethod
    def from_ref(cls, ref: CommitRef, root: RootPath) -> Commit:
        """Load the commit a reference points to; it must exist."""
        try:
            return cls.load(root, ref.commit_id)
        except FileNotFoundError as exc:
            path = _commit_path(root, ref.commit_id)
            raise ProjectParsingError(
                f'Tried to load nonexistent commit at "{path}"'
            ) from exc

    def save(self) -> None:
        save_json(self.store_path, _storable(self.tree, self.metadata))

    def __iter__(self) -> Iterator[tuple[Path, TrackedFile]]:
        return iter(self.tree.items())

    def file_status(
        self, relative_path: str | os.PathLike[str], absolute_path: str | os.PathLike[str]
    ) -> FileStatus:
        """Compare a working-tree file with its recorded version."""
        tracked = self.tree.get(Path(relative_path))
        if tracked is None:
            return FileStatus.ADDED
        if tracked.metadata == FileMetadata.from_file(absolute_path):
            return FileStatus.UNCHANGED
        if hash_file(absolute_path) != tracked.blob_id:
            return FileStatus.MODIFIED
        return FileStatus.UNCHANGED


class _HasItems(Protocol):
    def items(self) -> Any: ...


def create_commit(
    root: RootPath,
    base_tree: Mapping[Path, TrackedFile] | None,
    staged: _HasItems,
    message: str,
) -> CommitRef:
    """Apply staged changes to ``base_tree``, store the new commit and return its reference."""
    tree: dict[Path, TrackedFile] = dict(base_tree or {})
    for file, change in staged.items():
        path = Path(file)
        if change is ChangeType.REMOVED:
            tree.pop(path, None)
        else:
            tree[path] = TrackedFile.create(root.join(path), root)

    metadata = CommitMetadata(message)
    serialized = json.dumps(
        _storable(tree, metadata), separators=(",", ":"), ensure_ascii=False
    )
    commit_id = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    Commit(root, commit_id, tree, metadata).save()
    return CommitRef(commit_id, metadata)