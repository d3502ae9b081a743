"""HEAD: the branch or detached history new commits go to."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from .branch import Branch, DetachedBranch
from .commit import CommitRef
from .errors import ProjectParsingError
from .paths import RootPath
from .storage import load_json, save_json

DEFAULT_BRANCH = "main"

_DETACHED = "Detached"
_ATTACHED = "Attached"


def _head_path(root: RootPath) -> Path:
    return root.join(".gust/HEAD.json")


@dataclass
class Head:
    """Either a named branch (attached) or a detached commit history."""

    root: RootPath
    branch: Union[Branch, DetachedBranch]

    @property
    def store_path(self) -> Path:
        return _head_path(self.root)

    @property
    def is_detached(self) -> bool:
        return isinstance(self.branch, DetachedBranch)

    @classmethod
    def load(cls, root: RootPath) -> Head:
        """Load HEAD, defaulting to the main branch, and store it back."""
        stored = load_json(_head_path(root), {_ATTACHED: DEFAULT_BRANCH})
        branch: Union[Branch, DetachedBranch]
        if stored == _DETACHED:
            branch = DetachedBranch.load(root)
        elif (
            isinstance(stored, dict)
            and set(stored) == {_ATTACHED}
            and isinstance(stored[_ATTACHED], str)
        ):
            branch = Branch.create(root, stored[_ATTACHED])
        else:
            raise ProjectParsingError(f"malformed HEAD: {stored!r}")
        head = cls(root, branch)
        head.save()
        return head

    def _stored(self) -> Any:
        if isinstance(self.branch, DetachedBranch):
            return _DETACHED
        return {_ATTACHED: self.branch.name}

    def save(self) -> None:
        save_json(self.store_path, self._stored())

    def last_commit(self) -> CommitRef | None:
        return self.branch.last_commit()

    def insert_commit(self, ref: CommitRef) -> None:
        self.branch.insert(ref)

    def display(self) -> str:
        if isinstance(self.branch, DetachedBranch):
            title = f"Commit history of detached HEAD(commit {self.branch.passed_hash}):\n"
        else:
            title = f"Commit history of {self.branch.name} branch:\n"
        return title + self.branch.display()

    def handle_checkout(self) -> None:
        self.branch.handle_checkout()