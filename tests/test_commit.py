import os
import string
from pathlib import Path

import pytest

from gust.commit import (
    Commit,
    CommitMetadata,
    CommitRef,
    FileStatus,
    create_commit,
)
from gust.errors import ProjectParsingError
from gust.paths import RootPath
from gust.staging_area import ChangeType
from gust.tracked_file import hash_file


@pytest.fixture
def root(tmp_path):
    for sub in ("blobs", "commits", "branches"):
        (tmp_path / ".gust" / sub).mkdir(parents=True)
    return RootPath(tmp_path)


def test_commit_ref_display():
    ref = CommitRef("abc123", CommitMetadata("first"))
    assert ref.display() == "first: abc123"


def test_commit_ref_json_round_trip():
    ref = CommitRef("deadbeef", CommitMetadata("message"))
    data = ref.to_json()
    assert data == {"commit_id": "deadbeef", "metadata": {"name": "message"}}
    assert CommitRef.from_json(data) == ref


def test_commit_ref_malformed_json():
    with pytest.raises(ProjectParsingError):
        CommitRef.from_json({"commit_id": "x"})


def test_create_commit_stores_blob_and_commit(root):
    (root.path / "a.txt").write_text("hello")
    ref = create_commit(root, None, {Path("a.txt"): ChangeType.ADDED}, "first")
    assert ref.metadata.name == "first"
    assert len(ref.commit_id) == 64
    assert set(ref.commit_id) <= set(string.hexdigits)
    assert (root.path / ".gust" / "commits" / f"{ref.commit_id}.json").exists()

    blob_id = hash_file(root.path / "a.txt")
    assert (root.path / ".gust" / "blobs" / blob_id).read_text() == "hello"

    commit = Commit.from_ref(ref, root)
    assert list(commit.tree) == [Path("a.txt")]
    assert commit.tree[Path("a.txt")].blob_id == blob_id
    assert commit.metadata == CommitMetadata("first")


def test_create_commit_is_deterministic(root):
    (root.path / "a.txt").write_text("hello")
    staged = {Path("a.txt"): ChangeType.ADDED}
    first = create_commit(root, None, staged, "same")
    second = create_commit(root, None, staged, "same")
    assert first == second


def test_create_commit_removes_staged_removals(root):
    (root.path / "a.txt").write_text("a")
    (root.path / "b.txt").write_text("b")
    ref = create_commit(
        root,
        None,
        {Path("a.txt"): ChangeType.ADDED, Path("b.txt"): ChangeType.ADDED},
        "both",
    )
    base = Commit.from_ref(ref, root).tree
    (root.path / "b.txt").unlink()
    ref2 = create_commit(root, base, {Path("b.txt"): ChangeType.REMOVED}, "drop b")
    tree = Commit.from_ref(ref2, root).tree
    assert set(tree) == {Path("a.txt")}
    assert tree[Path("a.txt")] == base[Path("a.txt")]


def test_file_status(root):
    target = root.path / "a.txt"
    target.write_text("original")
    ref = create_commit(root, None, {Path("a.txt"): ChangeType.ADDED}, "c")
    commit = Commit.from_ref(ref, root)

    assert commit.file_status(Path("a.txt"), target) is FileStatus.UNCHANGED

    stat = os.stat(target)
    os.utime(target, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
    assert commit.file_status(Path("a.txt"), target) is FileStatus.UNCHANGED

    target.write_text("changed content")
    assert commit.file_status(Path("a.txt"), target) is FileStatus.MODIFIED

    other = root.path / "new.txt"
    other.write_text("new")
    assert commit.file_status(Path("new.txt"), other) is FileStatus.ADDED


def test_save_and_load_round_trip(root):
    (root.path / "f.txt").write_text("data")
    ref = create_commit(root, None, {Path("f.txt"): ChangeType.ADDED}, "m")
    commit = Commit.load(root, ref.commit_id)
    commit.commit_id = "copy"
    commit.save()
    loaded = Commit.load(root, "copy")
    assert loaded.tree == commit.tree
    assert loaded.metadata == commit.metadata
    assert dict(iter(loaded)) == commit.tree


def test_load_missing_commit(root):
    with pytest.raises(FileNotFoundError):
        Commit.load(root, "nope")


def test_from_ref_missing_commit(root):
    with pytest.raises(ProjectParsingError, match="nonexistent commit"):
        Commit.from_ref(CommitRef("nope", CommitMetadata("x")), root)