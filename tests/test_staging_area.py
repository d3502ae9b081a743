import json
from pathlib import Path

import pytest

from gust.paths import RootPath
from gust.staging_area import ChangeType, StagingArea


@pytest.fixture
def root(tmp_path):
    (tmp_path / ".gust").mkdir()
    return RootPath(tmp_path)


def test_symbols():
    assert ChangeType.ADDED.symbol() == "+"
    assert ChangeType.MODIFIED.symbol() == "~"
    assert ChangeType.REMOVED.symbol() == "-"


def test_change_type_values_match_stored_form():
    assert ChangeType("Added") is ChangeType.ADDED
    assert ChangeType("Removed") is ChangeType.REMOVED


def test_load_empty_creates_file(root, tmp_path):
    area = StagingArea.load(root)
    assert len(area) == 0
    assert json.loads((tmp_path / ".gust" / "staging_area.json").read_text()) == {}


def test_insert_persists(root, tmp_path):
    (tmp_path / "a.txt").write_text("x")
    area = StagingArea.load(root)
    area.insert(Path("a.txt"), ChangeType.ADDED)
    reloaded = StagingArea.load(root)
    assert Path("a.txt") in reloaded
    assert dict(reloaded.items()) == {Path("a.txt"): ChangeType.ADDED}


def test_load_drops_vanished_files_but_keeps_removals(root, tmp_path):
    (tmp_path / "kept.txt").write_text("x")
    (tmp_path / "gone.txt").write_text("x")
    area = StagingArea.load(root)
    area.insert("kept.txt", ChangeType.MODIFIED)
    area.insert("gone.txt", ChangeType.ADDED)
    area.insert("deleted.txt", ChangeType.REMOVED)
    (tmp_path / "gone.txt").unlink()
    reloaded = StagingArea.load(root)
    assert dict(reloaded.items()) == {
        Path("kept.txt"): ChangeType.MODIFIED,
        Path("deleted.txt"): ChangeType.REMOVED,
    }


def test_remove_and_remove_missing(root):
    area = StagingArea.load(root)
    area.insert("x", ChangeType.REMOVED)
    area.remove("not-staged")
    assert len(area) == 1
    area.remove("x")
    assert "x" not in area
    assert len(StagingArea.load(root)) == 0


def test_clear(root):
    area = StagingArea.load(root)
    area.insert("a", ChangeType.REMOVED)
    area.insert("b", ChangeType.REMOVED)
    area.clear()
    assert len(area) == 0
    assert len(StagingArea.load(root)) == 0


def test_iter_yields_paths(root):
    area = StagingArea.load(root)
    area.insert("a", ChangeType.REMOVED)
    area.insert("b", ChangeType.REMOVED)
    assert sorted(area) == [Path("a"), Path("b")]