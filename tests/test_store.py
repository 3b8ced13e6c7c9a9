import json

import pytest

from backend.errors import DesignLockedError
from backend.store import DEFAULT_KEY, JsonFileStore, MemoryStore, ShowRepository
from models.show import Scene, ShowDesign


def repo_with(*shows, lock_signed=True):
    store = MemoryStore()
    repo = ShowRepository(store, lock_signed=lock_signed)
    repo.save_all(list(shows))
    return repo


def test_missing_key_reads_empty():
    assert ShowRepository(MemoryStore()).load_all() == []


@pytest.mark.parametrize("raw", ["not json", "{\"id\": 1}", "42", "null"])
def test_malformed_payload_reads_empty(raw):
    repo = ShowRepository(MemoryStore({DEFAULT_KEY: raw}))
    assert repo.load_all() == []


def test_malformed_records_are_skipped():
    raw = json.dumps([{"id": 1, "title": "Kept"}, {"title": "no id"}, "junk", {"id": "x"}])
    shows = ShowRepository(MemoryStore({DEFAULT_KEY: raw})).load_all()
    assert [s.title for s in shows] == ["Kept"]


def test_persisted_layout_uses_camel_case_array():
    store = MemoryStore()
    design = ShowDesign(id=5, band_size="80", date_needed="2027-03-01",
                        scenes=[Scene(id=9, desc="opener")])
    ShowRepository(store).save_all([design])
    payload = json.loads(store.load(DEFAULT_KEY))
    assert isinstance(payload, list)
    assert payload[0]["bandSize"] == "80"
    assert payload[0]["dateNeeded"] == "2027-03-01"
    assert payload[0]["scenes"] == [{"id": 9, "desc": "opener"}]


def test_save_then_load_keeps_every_field():
    design = ShowDesign(id=7, year=2026, title="Velocity", big_moment="company front",
                        scenes=[Scene(id=1, desc="a"), Scene(id=2, desc="b")], signed=True)
    repo = repo_with(design)
    assert repo.load_all() == [design]


def test_upsert_novel_id_appends():
    repo = repo_with(ShowDesign(id=1, title="One"))
    shows = repo.upsert(ShowDesign(id=2, title="Two"))
    assert [s.id for s in shows] == [1, 2]
    assert repo.load_all() == shows


def test_upsert_existing_id_replaces_in_place():
    repo = repo_with(ShowDesign(id=1, title="One"), ShowDesign(id=2, title="Two"),
                     ShowDesign(id=3, title="Three"))
    repo.upsert(ShowDesign(id=2, title="Deux"))
    shows = repo.load_all()
    assert [s.id for s in shows] == [1, 2, 3]
    assert [s.title for s in shows] == ["One", "Deux", "Three"]


def test_upsert_over_signed_design_is_refused_when_locking():
    repo = repo_with(ShowDesign(id=1, title="Final", signed=True))
    with pytest.raises(DesignLockedError):
        repo.upsert(ShowDesign(id=1, title="Sneaky edit"))
    assert repo.get(1).title == "Final"


def test_upsert_over_signed_design_allowed_when_not_locking():
    repo = repo_with(ShowDesign(id=1, title="Final", signed=True), lock_signed=False)
    repo.upsert(ShowDesign(id=1, title="Rewrite", signed=True))
    assert repo.get(1).title == "Rewrite"


def test_duplicate_ids_in_storage_keep_first():
    raw = json.dumps([{"id": 1, "title": "first"}, {"id": 1, "title": "second"}])
    shows = ShowRepository(MemoryStore({DEFAULT_KEY: raw})).load_all()
    assert [s.title for s in shows] == ["first"]


# ── JsonFileStore ─────────────────────────────────────────────────────────────

def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "designs.json"
    store = JsonFileStore(str(path))
    assert store.load("bandShows") is None
    store.store("bandShows", "[]")
    store.store("other", "x")
    reopened = JsonFileStore(str(path))
    assert reopened.load("bandShows") == "[]"
    assert reopened.load("other") == "x"
    assert list(path.parent.iterdir()) == [path]


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "designs.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileStore(str(path))
    assert store.load("bandShows") is None
    store.store("bandShows", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"bandShows": "[]"}


def test_repository_over_file_store(tmp_path):
    repo = ShowRepository(JsonFileStore(str(tmp_path / "designs.json")))
    repo.upsert(ShowDesign(id=3, title="Urban Myths"))
    again = ShowRepository(JsonFileStore(str(tmp_path / "designs.json")))
    assert [s.title for s in again.load_all()] == ["Urban Myths"]
