"""A gust project: working tree, HEAD, staging area and ignore rules."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from .branch import DETACHED_HEAD, Branch, DetachedBranch
from .commit import Commit, CommitRef, FileStatus, create_commit
from .errors import UserError
from .head import Head
from .ignore import IgnoredFile, is_path_ignored, read_ignored
from .paths import GUST_DIR, RootPath, find_project_root, resolve_cli_path
from .staging_area import ChangeType, StagingArea
from .tracked_file import TrackedFile

_PROJECT_DIRS = ("", "blobs", "commits", "branches")


class CheckoutMode(Enum):
    """What the name given to ``checkout`` refers to."""

    BRANCH = "branch"
    COMMIT = "commit"


def init_project(directory: str | os.PathLike[str] | None = None) -> RootPath:
    """Create the ``.gust`` layout in ``directory`` (default: the working directory)."""
    base = Path(directory).absolute() if directory is not None else Path.cwd()
    gust_dir = base / GUST_DIR
    for sub in _PROJECT_DIRS:
        (gust_dir / sub).mkdir()
    return RootPath(base)


@dataclass
class Repository:
    """An opened project and the operations the command line offers on it."""

    root: RootPath
    head: Head
    staging_area: StagingArea
    ignored_files: list[IgnoredFile] = field(default_factory=list)

    @classmethod
    def open(cls, start: str | os.PathLike[str] | None = None) -> Repository:
        """Open the project containing ``start`` (default: the working directory)."""
        root = find_project_root(start)
        head = Head.load(root)
        staging_area = StagingArea.load(root)
        ignored = read_ignored(root)
        return cls(root, head, staging_area, ignored)

    # Staging and committing

    def add(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Stage every changed file that is one of ``paths`` or lies below one."""
        paths = list(paths)
        for file, change in self.changed_files().items():
            absolute_file = self.root.join(file)
            for cli_path in paths:
                absolute_cli = resolve_cli_path(cli_path)
                if self.is_path_ignored(absolute_cli):
                    continue
                if absolute_file == absolute_cli or absolute_file.is_relative_to(absolute_cli):
                    self.staging_area.insert(file, change)

    def remove(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Unstage the given files, or every file below the given directories."""
        for cli_path in paths:
            absolute = resolve_cli_path(cli_path)
            if not self.root.is_inside_root(absolute):
                raise UserError(f"Path {absolute} is not a root path")
            files = self.scan_folder(absolute) if absolute.is_dir() else [absolute]
            for file in files:
                self.staging_area.remove(self.root.relative(file))

    def status(self) -> str:
        """Describe staged and unstaged changes."""
        lines = ["Changes to be committed:"]
        staged = sorted(self.staging_area.items(), key=lambda item: str(item[0]))
        if staged:
            lines.extend(f"  {change.symbol()} {file}" for file, change in staged)
        else:
            lines.append("  No changes")

        lines.append("")
        lines.append("Unstaged changes:")
        unstaged = sorted(
            (
                (file, change)
                for file, change in self.changed_files().items()
                if file not in self.staging_area
            ),
            key=lambda item: str(item[0]),
        )
        if unstaged:
            lines.extend(f"  {change.symbol()} {file}" for file, change in unstaged)
        else:
            lines.append("  No changes")
        return "\n".join(lines)

    def commit(self, message: str = "") -> CommitRef:
        """Record the staged changes as a new commit on HEAD."""
        if len(self.staging_area) == 0:
            raise UserError(
                "Staged changes not found. Use 'gust add' to stage changes before committing"
            )
        base = self.last_commit()
        ref = create_commit(
            self.root,
            base.tree if base is not None else None,
            self.staging_area,
            message,
        )
        self.head.insert_commit(ref)
        self.staging_area.clear()
        return ref

    def info(self) -> str:
        """The commit history of HEAD."""
        return self.head.display()

    # Branches

    def branch(self, name: str | None = None) -> str:
        """Create branch ``name``, or list the branches when no name is given."""
        if name is not None:
            self.create_branch(name)
            return ""
        return "\n".join(self.list_branches())

    def list_branches(self) -> list[str]:
        """Branch names, with the current one marked by ``* ``."""
        lines: list[str] = []
        if isinstance(self.head.branch, DetachedBranch):
            lines.append(f"* HEAD attached at {self.head.branch.passed_hash}")
            current = ""
        else:
            current = self.head.branch.name
        branches_dir = self.root.join(".gust/branches")
        for entry in sorted(branches_dir.iterdir()):
            name = entry.stem
            if name == DETACHED_HEAD:
                continue
            lines.append(f"* {name}" if name == current else name)
        return lines

    def create_branch(self, name: str) -> Branch:
        """Create a branch starting where HEAD currently is."""
        current = self.head.branch
        if isinstance(current, DetachedBranch):
            branch = Branch(self.root, list(current.commits), name)
        else:
            last = current.last_commit()
            if last is None:
                branch = Branch.create(self.root, name)
            else:
                branch = Branch(self.root, [last], name)
        branch.save()
        return branch

    # Checkout

    def checkout(self, name: str, mode: CheckoutMode | None = None) -> None:
        """Switch the working tree and HEAD to a branch or a commit."""
        if self.changed_files():
            raise UserError(
                "There are uncommitted changes in the project. "
                "Commit or stash them before checking out a branch"
            )
        if mode is None:
            raise UserError("A checkout mode must be given: branch or commit")
        if mode is CheckoutMode.BRANCH:
            self._checkout_branch(name)
        else:
            self._checkout_commit(name)

    def _checkout_commit(self, partial_hash: str) -> None:
        full_hash = self._full_commit_hash(partial_hash)
        commit = Commit.load(self.root, full_hash)
        ref = CommitRef(full_hash, commit.metadata)

        self._apply_to_working_tree(commit.tree)
        self.head.handle_checkout()
        detached = DetachedBranch(self.root, [ref], partial_hash)
        detached.save()
        new_head = Head(self.root, detached)
        new_head.save()
        self.head = new_head

    def _full_commit_hash(self, partial_hash: str) -> str:
        commits_dir = self.root.join(".gust/commits")
        found = sorted(
            entry.stem
            for entry in commits_dir.iterdir()
            if entry.stem.startswith(partial_hash)
        )
        if not found:
            raise UserError("Commit not found")
        if len(found) > 1:
            listed = ", ".join(f'"{commit_id}"' for commit_id in found)
            raise UserError(f"Multiple commits found:\n[{listed}]")
        return found[0]

    def _checkout_branch(self, name: str) -> None:
        destination = Branch.load(self.root, name)
        last = destination.last_commit()
        tree = Commit.from_ref(last, self.root).tree if last is not None else {}

        self._apply_to_working_tree(tree)

        new_head = Head(self.root, destination)
        new_head.save()
        self.head.handle_checkout()
        self.head = new_head

    def _apply_to_working_tree(self, target: dict[Path, TrackedFile]) -> None:
        for absolute in self.scan_folder(self.root.path):
            if self.root.relative(absolute) not in target:
                absolute.unlink()
        for path, tracked in target.items():
            blob = self.root.join(f".gust/blobs/{tracked.blob_id}")
            shutil.copy(blob, self.root.join(path))

    # Working tree inspection

    def scan_folder(self, path: str | os.PathLike[str]) -> list[Path]:
        """Every file below ``path`` that is not ignored, skipping ``.gust``."""
        path = Path(path)
        gust_dir = self.root.join(GUST_DIR)
        if path == gust_dir:
            return []
        if path.is_relative_to(gust_dir):
            raise UserError(f"Path {path} is inside .gust")
        if self.is_path_ignored(path):
            return []

        files: list[Path] = []
        for entry in sorted(path.iterdir()):
            if entry.is_dir():
                files.extend(self.scan_folder(entry))
            elif not self.is_path_ignored(entry):
                files.append(entry)
        return files

    def changed_files(self) -> dict[Path, ChangeType]:
        """Working-tree changes relative to HEAD's last commit."""
        commit = self.last_commit()
        changed: dict[Path, ChangeType] = {}

        for file in self.scan_folder(self.root.path):
            relative = self.root.relative(file)
            if commit is None:
                changed[relative] = ChangeType.ADDED
                continue
            status = commit.file_status(relative, file)
            if status is FileStatus.ADDED:
                changed[relative] = ChangeType.ADDED
            elif status is FileStatus.MODIFIED:
                changed[relative] = ChangeType.MODIFIED

        if commit is not None:
            for relative, _ in commit:
                if not self.root.join(relative).exists():
                    changed[relative] = ChangeType.REMOVED
        return changed

    def is_path_ignored(self, path: str | os.PathLike[str]) -> bool:
        return is_path_ignored(Path(path), self.ignored_files)

    def last_commit(self) -> Commit | None:
        """The commit HEAD points to, if any."""
        ref = self.head.last_commit()
        return Commit.from_ref(ref, self.root) if ref is not None else None