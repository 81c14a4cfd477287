"""Entry store, the journal's single source of truth.

Holds the ordered entry list (newest first) for the lifetime of the app and
persists the whole list as one JSON blob under a single preference key.
Every mutation re-persists immediately; last write wins.

Loading is fail-open: a missing key or an undecodable blob both yield an
empty journal. ``load_result`` exposes the decode error, ``load`` logs it
and moves on.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from loguru import logger

from photojournal.core.exceptions import SerializationError, StorageError
from photojournal.core.result import Result
from photojournal.core.storage import PreferenceStore

from .models import JournalEntry

ENTRIES_KEY = "journalEntries"


def encode_entries(entries: Iterable[JournalEntry]) -> str:
    """Serialize entries to the stored blob format."""
    try:
        return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)
    except (AttributeError, TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode entries: {e}") from e


def decode_entries(blob: object) -> list[JournalEntry]:
    """Parse a stored blob back into entries.

    Entries repeating an earlier id are dropped so ids stay unique.

    Raises:
        SerializationError: If the blob is not a JSON list of valid entries.
    """
    if not isinstance(blob, str):
        raise SerializationError(f"Entry blob must be a string, got {type(blob).__name__}")
    try:
        raw = json.loads(blob)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Entry blob is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise SerializationError("Entry blob must hold a list")

    entries: list[JournalEntry] = []
    seen: set[str] = set()
    for item in raw:
        entry = JournalEntry.from_dict(item)
        if entry.id in seen:
            logger.warning(f"Dropping entry with duplicate id {entry.id}")
            continue
        seen.add(entry.id)
        entries.append(entry)
    return entries


class EntryStore:
    """In-memory entry list persisted to a preference store."""

    def __init__(self, preferences: PreferenceStore, key: str = ENTRIES_KEY):
        self.preferences = preferences
        self.key = key
        self.entries: list[JournalEntry] = []

    # -- persistence -------------------------------------------------------

    def load_result(self) -> Result[list[JournalEntry]]:
        """Read and decode the stored list without touching ``self.entries``."""
        try:
            blob = self.preferences.get(self.key)
        except StorageError as e:
            return Result.failure(e)
        if blob is None:
            return Result.success([])
        try:
            return Result.success(decode_entries(blob))
        except SerializationError as e:
            return Result.failure(e)

    def load(self) -> list[JournalEntry]:
        """Replace the in-memory list with the stored one (empty on any failure)."""
        result = self.load_result()
        if not result.ok:
            logger.warning(f"Could not load journal, starting empty: {result.error}")
        self.entries = result.unwrap_or([])
        return self.entries

    def save_result(self, entries: Iterable[JournalEntry] | None = None) -> Result[None]:
        """Make *entries* (default: the current list) canonical and persist them.

        On failure the previously stored blob is left untouched.
        """
        if entries is not None:
            self.entries = list(entries)
        try:
            blob = encode_entries(self.entries)
            self.preferences.set(self.key, blob)
        except (SerializationError, StorageError) as e:
            return Result.failure(e)
        logger.debug(f"Saved {len(self.entries)} entries")
        return Result.success()

    def save(self, entries: Iterable[JournalEntry] | None = None) -> bool:
        """Persist, logging instead of raising. Returns True if the write happened."""
        result = self.save_result(entries)
        if not result.ok:
            logger.warning(f"Journal not saved: {result.error}")
        return result.ok

    # -- lookup ------------------------------------------------------------

    def _index_of(self, entry_id: str) -> int | None:
        for i, entry in enumerate(self.entries):
            if entry.id == entry_id:
                return i
        return None

    def get(self, entry_id: str) -> JournalEntry | None:
        index = self._index_of(entry_id)
        return None if index is None else self.entries[index]

    def find(self, id_prefix: str) -> list[JournalEntry]:
        """Entries whose id starts with *id_prefix* (an exact id matches only itself)."""
        exact = self.get(id_prefix)
        if exact is not None:
            return [exact]
        return [entry for entry in self.entries if entry.id.startswith(id_prefix)] if id_prefix else []

    # -- mutation ----------------------------------------------------------

    def add(self, entry: JournalEntry) -> None:
        """Prepend a new entry and persist."""
        if self._index_of(entry.id) is not None:
            raise ValueError(f"Entry {entry.id} already exists")
        self.entries.insert(0, entry)
        self.save()

    def update(self, entry: JournalEntry) -> bool:
        """Replace the entry with the same id in place and persist.

        Returns False (and changes nothing) if the id is unknown.
        """
        index = self._index_of(entry.id)
        if index is None:
            logger.debug(f"Update ignored, no entry {entry.id}")
            return False
        self.entries[index] = entry
        self.save()
        return True

    def delete(self, entry_id: str) -> JournalEntry | None:
        """Remove the entry with *entry_id* and persist. Unknown ids are a no-op."""
        index = self._index_of(entry_id)
        if index is None:
            logger.debug(f"Delete ignored, no entry {entry_id}")
            return None
        removed = self.entries.pop(index)
        self.save()
        return removed

    def __len__(self) -> int:
        return len(self.entries)
