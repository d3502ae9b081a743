"""Branches: ordered lists of commit references stored on disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .commit import CommitRef
from .errors import ProjectParsingError
from .paths import RootPath
from .storage import load_json, save_json

DETACHED_HEAD = "DETACHED_HEAD"


def _refs_from_json(data: Any) -> list[CommitRef]:
    if not isinstance(data, list):
        raise ProjectParsingError(f"malformed commit list: {data!r}")
    return [CommitRef.from_json(item) for item in data]


def _newest(commits: list[CommitRef]) -> CommitRef | None:
    return commits[-1] if commits else None


def _history(commits: list[CommitRef]) -> str:
    return "".join(f"{ref.display()}\n" for ref in reversed(commits))


@dataclass
class Branch:
    """A named branch stored in ``.gust/branches/<name>.json``."""

    root: RootPath
    commits: list[CommitRef] = field(default_factory=list)
    name: str = "main"

    @property
    def store_path(self) -> Path:
        return self.root.join(f".gust/branches/{self.name}.json")

    @classmethod
    def load(cls, root: RootPath, name: str) -> Branch:
        """Load an existing branch; a missing one raises FileNotFoundError."""
        data = load_json(root.join(f".gust/branches/{name}.json"))
        return cls(root, _refs_from_json(data), name)

    @classmethod
    def create(cls, root: RootPath, name: str) -> Branch:
        """Load a branch, starting it empty if it does not exist, and store it."""
        data = load_json(root.join(f".gust/branches/{name}.json"), [])
        branch = cls(root, _refs_from_json(data), name)
        branch.save()
        return branch

    def last_commit(self) -> CommitRef | None:
        """The newest commit on the branch, if any."""
        return _newest(self.commits)

    def insert(self, ref: CommitRef) -> None:
        """Append a commit and store the branch."""
        self.commits.append(ref)
        self.save()

    def save(self) -> None:
        save_json(self.store_path, [ref.to_json() for ref in self.commits])

    def display(self) -> str:
        """One line per commit, newest first."""
        return _history(self.commits)

    def handle_checkout(self) -> None:
        """Leaving a named branch needs no clean-up."""


@dataclass
class DetachedBranch:
    """The commit history followed while HEAD is detached."""

    root: RootPath
    commits: list[CommitRef] = field(default_factory=list)
    passed_hash: str = ""

    @property
    def store_path(self) -> Path:
        return self.root.join(f".gust/branches/{DETACHED_HEAD}.json")

    @classmethod
    def load(cls, root: RootPath) -> DetachedBranch:
        """Load the detached history; a missing one raises FileNotFoundError."""
        data = load_json(root.join(f".gust/branches/{DETACHED_HEAD}.json"))
        if not (isinstance(data, list) and len(data) == 2 and isinstance(data[1], str)):
            raise ProjectParsingError(f"malformed detached head: {data!r}")
        return cls(root, _refs_from_json(data[0]), data[1])

    def last_commit(self) -> CommitRef | None:
        """The newest commit in the detached history, if any."""
        return _newest(self.commits)

    def insert(self, ref: CommitRef) -> None:
        """Append a commit and store the detached history."""
        self.commits.append(ref)
        self.save()

    def save(self) -> None:
        save_json(
            self.store_path,
            [[ref.to_json() for ref in self.commits], self.passed_hash],
        )

    def display(self) -> str:
        """One line per commit, newest first."""
        return _history(self.commits)

    def handle_checkout(self) -> None:
        """Leaving a detached HEAD discards its stored history."""
        self.store_path.unlink()