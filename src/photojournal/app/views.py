"""View models: pure projections from state to what a screen shows.

Nothing here mutates state. Photo references are resolved through the image
store; a reference whose file is gone is left out of the view rather than
reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from photojournal.journal.editor import EntryDraft, ExistingImage
from photojournal.journal.images import ImageStore
from photojournal.journal.models import JournalEntry

from .settings import Appearance
from .state import AppState

LIST_TITLE = "Journal"
CARD_TAG_LIMIT = 3
CARD_PREVIEW_LINES = 2
CARD_PREVIEW_CHARS = 160


def format_date(value: datetime) -> str:
    """Long date, e.g. ``October 17, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"


def _preview(text: str, lines: int = CARD_PREVIEW_LINES, limit: int = CARD_PREVIEW_CHARS) -> str:
    kept = "\n".join(text.splitlines()[:lines])
    if len(kept) > limit:
        return kept[: limit - 1].rstrip() + "…"
    if kept != text.rstrip("\n"):
        return kept + "…"
    return kept


@dataclass(frozen=True)
class EntryCard:
    entry_id: str
    title: str
    preview: str
    date_label: str
    cover_image: Path | None
    tags: tuple[str, ...]
    hidden_tag_count: int


@dataclass(frozen=True)
class ListView:
    title: str
    filter_tag: str | None
    cards: tuple[EntryCard, ...]
    appearance: Appearance

    @property
    def filter_banner(self) -> str | None:
        return None if self.filter_tag is None else f"Filtered by: {self.filter_tag}"

    @property
    def is_empty(self) -> bool:
        return not self.cards


@dataclass(frozen=True)
class DetailView:
    entry_id: str
    title: str
    date_label: str
    content: str
    images: tuple[Path, ...]
    tags: tuple[str, ...]
    appearance: Appearance


@dataclass(frozen=True)
class EditorImage:
    label: str
    is_new: bool


@dataclass(frozen=True)
class EditorView:
    heading: str
    title: str
    content: str
    tag_text: str
    images: tuple[EditorImage, ...]
    pending_deletions: int


def project_card(entry: JournalEntry, image_store: ImageStore) -> EntryCard:
    cover = None
    if entry.image_names:
        # Only the first photo is a candidate for the cover.
        cover = image_store.resolve(entry.image_names[0])
    return EntryCard(
        entry_id=entry.id,
        title=entry.title,
        preview=_preview(entry.content),
        date_label=format_date(entry.date),
        cover_image=cover,
        tags=tuple(entry.tags[:CARD_TAG_LIMIT]),
        hidden_tag_count=max(0, len(entry.tags) - CARD_TAG_LIMIT),
    )


def project_list(state: AppState) -> ListView:
    return ListView(
        title=LIST_TITLE,
        filter_tag=state.selected_tag,
        cards=tuple(project_card(entry, state.image_store) for entry in state.visible_entries),
        appearance=state.appearance,
    )


def project_detail(state: AppState, entry_id: str) -> DetailView | None:
    """Detail view for *entry_id*, or None if no such entry exists."""
    entry = state.get_entry(entry_id)
    if entry is None:
        return None
    resolved = (state.image_store.resolve(name) for name in entry.image_names)
    return DetailView(
        entry_id=entry.id,
        title=entry.title,
        date_label=format_date(entry.date),
        content=entry.content,
        images=tuple(path for path in resolved if path is not None),
        tags=tuple(entry.tags),
        appearance=state.appearance,
    )


def project_editor(draft: EntryDraft) -> EditorView:
    images = []
    for i, image in enumerate(draft.images, 1):
        if isinstance(image, ExistingImage):
            images.append(EditorImage(label=image.name, is_new=False))
        else:
            images.append(EditorImage(label=image.label or f"new photo {i}", is_new=True))
    return EditorView(
        heading="Edit Entry" if draft.is_editing else "New Entry",
        title=draft.title,
        content=draft.content,
        tag_text=draft.tag_text,
        images=tuple(images),
        pending_deletions=len(draft.pending_deletions),
    )
