import logging
from datetime import datetime

from MarkdownLens.recent_files import RecentFiles


def test_add_deduplicates_and_limits(tmp_path):
    store = RecentFiles(tmp_path / "recent.yaml", limit=2)
    a, b, c = (tmp_path / name for name in ("a.md", "b.md", "c.md"))
    store.add(a)
    store.add(b)
    store.add(a)
    assert [entry.path for entry in store.entries] == [a.resolve(), b.resolve()]
    store.add(c)
    assert [entry.name for entry in store.entries] == ["c.md", "a.md"]


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "state" / "recent.yaml"
    stamp = datetime(2024, 5, 1, 9, 30)
    store = RecentFiles(path)
    store.add(tmp_path / "notes.md", opened_at=stamp)
    store.save()

    loaded = RecentFiles(path).load()
    assert len(loaded.entries) == 1
    assert loaded.entries[0].path == (tmp_path / "notes.md").resolve()
    assert loaded.entries[0].opened_at == stamp


def test_missing_store_loads_empty(tmp_path):
    assert RecentFiles(tmp_path / "nope.yaml").load().entries == ()


def test_corrupt_store_is_ignored(tmp_path):
    path = tmp_path / "recent.yaml"
    path.write_text("recent: [unclosed", encoding="utf-8")
    assert RecentFiles(path).load().entries == ()
    path.write_text("just a string", encoding="utf-8")
    assert RecentFiles(path).load().entries == ()


def test_empty_store_loads_quietly(tmp_path, caplog):
    path = tmp_path / "recent.yaml"
    path.write_text("", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert RecentFiles(path).load().entries == ()
    assert caplog.records == []
