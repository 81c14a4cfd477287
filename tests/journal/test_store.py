"""Tests for photojournal.journal.store."""

import json
import random
from datetime import datetime, timedelta

import pytest

from photojournal.core.exceptions import SerializationError, StorageError
from photojournal.journal.models import JournalEntry
from photojournal.journal.store import ENTRIES_KEY, EntryStore, decode_entries, encode_entries


def _random_entries(seed: int, count: int) -> list[JournalEntry]:
    rng = random.Random(seed)
    words = ["", "sun", "beach", "Trip", "note", "émoji ☀", "a,b", "  spaced  "]
    start = datetime(2023, 1, 1)
    return [
        JournalEntry(
            title=rng.choice(words),
            content="\n".join(rng.choices(words, k=rng.randint(0, 4))),
            date=start + timedelta(seconds=rng.randint(0, 10**8), microseconds=rng.randint(0, 999999)),
            image_names=[f"img-{rng.randint(0, 5)}" for _ in range(rng.randint(0, 3))],
            tags=rng.choices(words, k=rng.randint(0, 4)),
        )
        for _ in range(count)
    ]


@pytest.mark.smoke
class TestPersistence:
    def test_missing_key_loads_empty(self, entry_store):
        assert entry_store.load() == []
        assert entry_store.load_result().ok

    @pytest.mark.parametrize("seed", range(5))
    def test_roundtrip(self, preferences, seed):
        entries = _random_entries(seed, count=seed * 3)
        EntryStore(preferences).save(entries)
        assert EntryStore(preferences).load() == entries

    def test_save_twice_is_idempotent(self, preferences):
        entries = _random_entries(42, count=4)
        store = EntryStore(preferences)
        store.save(entries)
        store.save(entries)
        assert EntryStore(preferences).load() == entries

    def test_blob_is_field_tagged_json(self, entry_store, make_entry, preferences):
        entry_store.save([make_entry(tags=["x"])])
        blob = preferences.get(ENTRIES_KEY)
        assert isinstance(blob, str)
        assert json.loads(blob)[0]["tags"] == ["x"]

    def test_corrupt_blob_loads_empty(self, entry_store, preferences):
        preferences.set(ENTRIES_KEY, "{{{ definitely not json")
        assert entry_store.load() == []
        result = entry_store.load_result()
        assert not result.ok
        assert isinstance(result.error, SerializationError)

    def test_schema_mismatch_loads_empty(self, entry_store, preferences):
        preferences.set(ENTRIES_KEY, json.dumps([{"id": "x", "title": "no other fields"}]))
        assert entry_store.load() == []
        assert not entry_store.load_result().ok

    def test_unreadable_preferences_load_empty(self, entry_store, preferences):
        preferences.path.write_text("garbage")
        assert entry_store.load() == []
        assert isinstance(entry_store.load_result().error, StorageError)

    def test_additive_fields_survive(self, entry_store, make_entry, preferences):
        data = make_entry().to_dict()
        data["location"] = "Lisbon"
        preferences.set(ENTRIES_KEY, json.dumps([data]))
        assert [e.title for e in entry_store.load()] == ["Entry"]

    def test_encode_failure_keeps_previous_blob(self, entry_store, make_entry, preferences):
        entry_store.save([make_entry("kept")])
        broken = make_entry("broken")
        broken.date = "not a datetime"
        result = entry_store.save_result([broken])
        assert not result.ok
        assert isinstance(result.error, SerializationError)
        assert not entry_store.save([broken])
        assert [e.title for e in EntryStore(preferences).load()] == ["kept"]

    def test_duplicate_ids_dropped_on_decode(self, make_entry):
        entry = make_entry("first")
        twin = JournalEntry.from_dict({**entry.to_dict(), "title": "second"})
        entries = decode_entries(encode_entries([entry, twin]))
        assert [e.title for e in entries] == ["first"]

    def test_decode_rejects_non_list(self):
        with pytest.raises(SerializationError, match="list"):
            decode_entries('{"id": "x"}')
        with pytest.raises(SerializationError, match="string"):
            decode_entries(b"[]")


class TestMutations:
    def test_create_prepends_and_persists(self, entry_store, preferences):
        older = JournalEntry(title="Older")
        entry_store.add(older)
        entry = JournalEntry(title="Trip", content="Fun day", tags=["beach", "sun"])
        entry_store.add(entry)

        assert entry_store.entries[0] is entry
        reloaded = EntryStore(preferences).load()
        assert [e.title for e in reloaded] == ["Trip", "Older"]
        assert reloaded[0] == entry

    def test_add_duplicate_id_raises(self, entry_store, make_entry):
        entry = make_entry()
        entry_store.add(entry)
        with pytest.raises(ValueError, match="already exists"):
            entry_store.add(entry)

    def test_delete_middle(self, entry_store, preferences):
        entries = [JournalEntry(title=t) for t in ("a", "b", "c")]
        entry_store.save(entries)

        removed = entry_store.delete(entries[1].id)

        assert removed == entries[1]
        assert [e.title for e in entry_store.entries] == ["a", "c"]
        assert [e.title for e in EntryStore(preferences).load()] == ["a", "c"]

    def test_delete_unknown_is_noop(self, entry_store, make_entry):
        entry_store.save([make_entry()])
        assert entry_store.delete("missing") is None
        assert len(entry_store) == 1

    def test_edit_replaces_in_place(self, entry_store, preferences):
        entries = [JournalEntry(title=t) for t in ("a", "b", "c")]
        entry_store.save(entries)
        target = entries[1]

        assert entry_store.update(target.with_changes(title="B!"))

        reloaded = EntryStore(preferences).load()
        assert [e.title for e in reloaded] == ["a", "B!", "c"]
        assert reloaded[1].id == target.id
        assert reloaded[1].date == target.date

    def test_update_unknown_is_noop(self, entry_store, make_entry):
        entry_store.save([make_entry("a")])
        assert not entry_store.update(make_entry("ghost"))
        assert [e.title for e in entry_store.entries] == ["a"]

    def test_get_and_find(self, entry_store):
        entries = [JournalEntry(id="abc-1"), JournalEntry(id="abd-2"), JournalEntry(id="abc")]
        entry_store.save(entries)
        assert entry_store.get("abd-2") is entries[1]
        assert entry_store.get("nope") is None
        assert entry_store.find("abc") == [entries[2]]
        assert entry_store.find("ab") == entries
        assert entry_store.find("abd") == [entries[1]]
        assert entry_store.find("") == []
