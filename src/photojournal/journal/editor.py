"""Entry editor: the draft behind the create/edit form.

A draft keeps every photo tagged with where it came from: ``ExistingImage``
for a file the entry already references, ``NewImage`` for a photo picked
during this session. Nothing touches the image store until ``commit``:

1. every ``NewImage`` is written (photos that fail to encode are dropped),
2. the final ``image_names`` follow the draft's current image order,
3. the entry is built (new id/date) or updated (id/date kept),
4. ``on_save`` receives it,
5. existing photos the user removed are deleted from the image store.

Deletion runs after ``on_save`` so a crash in between leaves an orphaned
file rather than a dangling reference.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from loguru import logger

from photojournal.core.exceptions import DraftClosedError

from .filtering import format_tags, parse_tags
from .images import ImageInput, ImageStore
from .models import JournalEntry


@dataclass(frozen=True)
class ExistingImage:
    """A photo already in the image store."""

    name: str


@dataclass(frozen=True)
class NewImage:
    """A photo picked in this session, not yet written."""

    data: ImageInput
    label: str = ""


DraftImage = ExistingImage | NewImage


@dataclass
class EntryDraft:
    """Mutable, in-progress state of a create or edit form."""

    title: str = ""
    content: str = ""
    tag_text: str = ""
    images: list[DraftImage] = field(default_factory=list)
    pending_deletions: set[str] = field(default_factory=set)
    original: JournalEntry | None = None
    closed: bool = False

    @classmethod
    def new(cls) -> EntryDraft:
        return cls()

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> EntryDraft:
        return cls(
            title=entry.title,
            content=entry.content,
            tag_text=format_tags(entry.tags),
            images=[ExistingImage(name) for name in entry.image_names],
            original=entry,
        )

    @property
    def is_editing(self) -> bool:
        return self.original is not None

    @property
    def new_image_count(self) -> int:
        return sum(1 for image in self.images if isinstance(image, NewImage))

    # -- mutation ----------------------------------------------------------

    def add_images(self, images: Iterable[ImageInput | NewImage]) -> int:
        """Append picked photos. Returns how many were added (0 once closed)."""
        if self.closed:
            logger.debug("Ignoring images for a closed draft")
            return 0
        added = [image if isinstance(image, NewImage) else NewImage(image) for image in images]
        self.images.extend(added)
        return len(added)

    def remove_image(self, index: int) -> DraftImage | None:
        """Remove the photo at *index*; existing photos are queued for deletion."""
        if self.closed or not 0 <= index < len(self.images):
            return None
        removed = self.images.pop(index)
        if isinstance(removed, ExistingImage):
            self.pending_deletions.add(removed.name)
        return removed

    def dismiss(self) -> None:
        """Close the draft without saving. Later picker results are ignored."""
        self.closed = True

    # -- commit ------------------------------------------------------------

    def _deletions_to_run(self) -> set[str]:
        # A name removed once but still referenced elsewhere in the draft stays.
        kept = {image.name for image in self.images if isinstance(image, ExistingImage)}
        return self.pending_deletions - kept

    def build_entry(self, image_names: list[str], keep_empty_tags: bool = False) -> JournalEntry:
        tags = parse_tags(self.tag_text, keep_empty=keep_empty_tags)
        if self.original is None:
            return JournalEntry(title=self.title, content=self.content, image_names=image_names, tags=tags)
        return self.original.with_changes(
            title=self.title,
            content=self.content,
            image_names=image_names,
            tags=tags,
        )

    def commit(
        self,
        image_store: ImageStore,
        on_save: Callable[[JournalEntry], None],
        *,
        keep_empty_tags: bool = False,
    ) -> JournalEntry:
        """Write new photos, hand the finished entry to *on_save*, then clean up.

        Raises:
            DraftClosedError: If the draft was already committed or dismissed.
        """
        if self.closed:
            raise DraftClosedError("Draft is closed")

        image_names: list[str] = []
        for image in self.images:
            if isinstance(image, ExistingImage):
                image_names.append(image.name)
                continue
            name = image_store.write(image.data)
            if name is not None:
                image_names.append(name)

        entry = self.build_entry(image_names, keep_empty_tags=keep_empty_tags)
        on_save(entry)

        deleted = image_store.delete_many(sorted(self._deletions_to_run()))
        if deleted:
            logger.debug(f"Removed {len(deleted)} image(s) dropped from entry {entry.id}")

        self.closed = True
        return entry
