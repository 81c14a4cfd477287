"""Explicit application state.

``AppState`` owns everything a screen needs (entry list, tag filter, the
open draft, appearance) and exposes the user's actions as methods. Each
action publishes an event on ``self.bus``; a UI subscribes and re-renders
from ``photojournal.app.views``.
"""

from __future__ import annotations

from loguru import logger

from photojournal.core.config import Config
from photojournal.core.events import (
    APPEARANCE_CHANGED,
    DRAFT_CHANGED,
    ENTRIES_CHANGED,
    FILTER_CHANGED,
    Event,
    EventBus,
)
from photojournal.core.exceptions import EntryNotFoundError
from photojournal.core.storage import PreferenceStore
from photojournal.journal.editor import EntryDraft
from photojournal.journal.filtering import filter_entries
from photojournal.journal.images import ImageStore
from photojournal.journal.models import JournalEntry
from photojournal.journal.store import EntryStore

from .settings import Appearance, AppearanceSetting


class AppState:
    """Single-threaded application state and the actions that change it."""

    def __init__(
        self,
        entry_store: EntryStore,
        image_store: ImageStore,
        appearance: AppearanceSetting,
        *,
        bus: EventBus | None = None,
        keep_empty_tags: bool = False,
        cascade_delete: bool = True,
    ):
        self.entry_store = entry_store
        self.image_store = image_store
        self.appearance_setting = appearance
        self.bus = bus or EventBus()
        self.keep_empty_tags = keep_empty_tags
        self.cascade_delete = cascade_delete

        self.selected_tag: str | None = None
        self.draft: EntryDraft | None = None

    @classmethod
    def from_config(cls, config: Config, bus: EventBus | None = None) -> AppState:
        """Wire stores from config and load the journal."""
        settings = config.validated()
        preferences = PreferenceStore(settings.paths.preferences_file)
        state = cls(
            entry_store=EntryStore(preferences),
            image_store=ImageStore(settings.paths.images_dir, jpeg_quality=settings.images.jpeg_quality),
            appearance=AppearanceSetting(preferences),
            bus=bus,
            keep_empty_tags=settings.tags.keep_empty,
            cascade_delete=settings.images.cascade_delete,
        )
        state.refresh()
        return state

    # -- derived -----------------------------------------------------------

    @property
    def entries(self) -> list[JournalEntry]:
        return self.entry_store.entries

    @property
    def visible_entries(self) -> list[JournalEntry]:
        return filter_entries(self.entries, self.selected_tag)

    @property
    def appearance(self) -> Appearance:
        return self.appearance_setting.value

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        return self.entry_store.get(entry_id)

    def resolve_entry(self, id_prefix: str) -> JournalEntry:
        """Find one entry by id or unique id prefix.

        Raises:
            EntryNotFoundError: If nothing, or more than one entry, matches.
        """
        matches = self.entry_store.find(id_prefix)
        if len(matches) != 1:
            reason = "no entry" if not matches else f"{len(matches)} entries"
            raise EntryNotFoundError(f"{reason} matching {id_prefix!r}")
        return matches[0]

    def _emit(self, name: str, **payload) -> None:
        self.bus.emit(Event(name=name, payload=payload, source="state"))

    # -- actions -----------------------------------------------------------

    def refresh(self) -> None:
        """Reload entries and appearance from disk."""
        self.entry_store.load()
        self.appearance_setting.load()
        self._emit(ENTRIES_CHANGED, count=len(self.entries))

    def select_tag(self, tag: str) -> None:
        """Show only entries tagged *tag*, replacing any previous filter."""
        self.selected_tag = tag
        self._emit(FILTER_CHANGED, tag=tag)

    def clear_filter(self) -> None:
        self.selected_tag = None
        self._emit(FILTER_CHANGED, tag=None)

    def begin_new(self) -> EntryDraft:
        self._close_draft()
        self.draft = EntryDraft.new()
        self._emit(DRAFT_CHANGED, editing=None)
        return self.draft

    def begin_edit(self, entry_id: str) -> EntryDraft | None:
        """Open a draft for an existing entry; None if the id is unknown."""
        entry = self.get_entry(entry_id)
        if entry is None:
            logger.debug(f"Cannot edit unknown entry {entry_id}")
            return None
        self._close_draft()
        self.draft = EntryDraft.from_entry(entry)
        self._emit(DRAFT_CHANGED, editing=entry.id)
        return self.draft

    def dismiss_draft(self) -> None:
        if self.draft is None:
            return
        self._close_draft()
        self._emit(DRAFT_CHANGED, editing=None, dismissed=True)

    def _close_draft(self) -> None:
        if self.draft is not None:
            self.draft.dismiss()
        self.draft = None

    def _persist_draft_entry(self, entry: JournalEntry) -> None:
        if self.draft is not None and self.draft.is_editing:
            self.entry_store.update(entry)
        else:
            self.entry_store.add(entry)

    def save_draft(self) -> JournalEntry | None:
        """Commit the open draft and return the saved entry.

        Returns None if no draft is open, or if the entry being edited was
        deleted meanwhile. In that case the draft is dismissed and none of its
        new photos are written.
        """
        draft = self.draft
        if draft is None:
            return None
        if draft.is_editing and self.get_entry(draft.original.id) is None:
            logger.debug(f"Edited entry {draft.original.id} no longer exists, discarding draft")
            self.dismiss_draft()
            return None
        entry = draft.commit(self.image_store, self._persist_draft_entry, keep_empty_tags=self.keep_empty_tags)
        self.draft = None
        self._emit(ENTRIES_CHANGED, count=len(self.entries), saved=entry.id)
        self._emit(DRAFT_CHANGED, editing=None, saved=entry.id)
        return entry

    def delete_entry(self, entry_id: str) -> JournalEntry | None:
        """Delete an entry; with cascade on, also its photos no other entry uses."""
        removed = self.entry_store.delete(entry_id)
        if removed is None:
            return None
        if self.cascade_delete:
            still_used = {name for entry in self.entries for name in entry.image_names}
            self.image_store.delete_many(name for name in dict.fromkeys(removed.image_names) if name not in still_used)
        self._emit(ENTRIES_CHANGED, count=len(self.entries), deleted=entry_id)
        return removed

    def toggle_appearance(self) -> Appearance:
        appearance = self.appearance_setting.toggle()
        self._emit(APPEARANCE_CHANGED, appearance=appearance.value)
        return appearance

    def set_appearance(self, appearance: Appearance) -> Appearance:
        appearance = self.appearance_setting.set(appearance)
        self._emit(APPEARANCE_CHANGED, appearance=appearance.value)
        return appearance

    def prune_images(self) -> list[str]:
        """Delete photo files that no entry references."""
        return self.image_store.prune(self.entries)
