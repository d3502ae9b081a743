"""Files recorded in a commit tree and the blobs that back them."""

from __future__ import annotations

import hashlib
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .paths import RootPath

_NANOS = 1_000_000_000


def hash_file(path: str | os.PathLike[str]) -> str:
    """Return the hex SHA-256 digest of a file's contents."""
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def _time_to_json(nanoseconds: int) -> dict[str, int]:
    secs, nanos = divmod(nanoseconds, _NANOS)
    return {"secs_since_epoch": secs, "nanos_since_epoch": nanos}


def _time_from_json(data: dict[str, int]) -> int:
    return data["secs_since_epoch"] * _NANOS + data["nanos_since_epoch"]


@dataclass(frozen=True)
class FileMetadata:
    """Size and timestamps (in nanoseconds) used to spot unchanged files cheaply."""

    len: int
    modify_time: int
    access_time: int

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> FileMetadata:
        stat = os.stat(path)
        return cls(stat.st_size, stat.st_mtime_ns, stat.st_atime_ns)

    def to_json(self) -> dict[str, Any]:
        return {
            "len": self.len,
            "modify_time": _time_to_json(self.modify_time),
            "access_time": _time_to_json(self.access_time),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> FileMetadata:
        return cls(
            data["len"],
            _time_from_json(data["modify_time"]),
            _time_from_json(data["access_time"]),
        )


@dataclass(frozen=True)
class TrackedFile:
    """A file's blob id together with the metadata it had when recorded."""

    blob_id: str
    metadata: FileMetadata

    @classmethod
    def create(cls, path: str | os.PathLike[str], root: RootPath) -> TrackedFile:
        """Store the file's contents as a blob and record it."""
        blob_id = hash_file(path)
        blob_path = root.join(f".gust/blobs/{blob_id}")
        if not blob_path.exists():
            shutil.copy(path, blob_path)
        try:
            metadata = FileMetadata.from_file(path)
        except OSError:
            blob_path.unlink()
            raise
        return cls(blob_id, metadata)

    def to_json(self) -> dict[str, Any]:
        return {"blob_id": self.blob_id, "metadata": self.metadata.to_json()}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TrackedFile:
        return cls(data["blob_id"], FileMetadata.from_json(data["metadata"]))