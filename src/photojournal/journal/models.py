"""Core data model for the journal.

``JournalEntry`` is the only persisted entity. The field-tagged dict form
produced by ``to_dict`` is what the entry store writes; unknown keys are
ignored on the way back in so new optional fields can be added without
wiping existing journals.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from photojournal.core.exceptions import SerializationError


def new_entry_id() -> str:
    """Return a fresh, random entry id."""
    return str(uuid.uuid4())


@dataclass
class JournalEntry:
    """One journal record.

    Attributes:
        id: Unique, immutable key used for lookup, update and delete.
        title: Short text, may be empty.
        content: Body text, may be empty.
        date: Creation timestamp. Edits keep it.
        image_names: Bare filenames in the image store, in display order.
            Duplicates are kept; names whose file is gone are skipped at render time.
        tags: Free-form labels, in the order the user typed them.
    """

    title: str = ""
    content: str = ""
    date: datetime = field(default_factory=datetime.now)
    image_names: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_entry_id)

    def with_changes(self, **changes: Any) -> JournalEntry:
        """Return a copy with *changes* applied. ``id`` and ``date`` cannot change."""
        if "id" in changes or "date" in changes:
            raise ValueError("id and date are immutable")
        return replace(self, **changes)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "date": self.date.isoformat(),
            "imageNames": list(self.image_names),
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Any) -> JournalEntry:
        """Build an entry from its stored form.

        Raises:
            SerializationError: If a required field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise SerializationError(f"Entry must be an object, got {type(data).__name__}")

        try:
            entry_id = data["id"]
            title = data["title"]
            content = data["content"]
            raw_date = data["date"]
            image_names = data["imageNames"]
            tags = data["tags"]
        except KeyError as e:
            raise SerializationError(f"Entry is missing field {e.args[0]!r}") from None

        for name, value in (("id", entry_id), ("title", title), ("content", content), ("date", raw_date)):
            if not isinstance(value, str):
                raise SerializationError(f"Entry field {name!r} must be a string")
        for name, value in (("imageNames", image_names), ("tags", tags)):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise SerializationError(f"Entry field {name!r} must be a list of strings")

        try:
            date = datetime.fromisoformat(raw_date)
        except ValueError as e:
            raise SerializationError(f"Entry date {raw_date!r} is not ISO-8601") from e

        return cls(
            id=entry_id,
            title=title,
            content=content,
            date=date,
            image_names=list(image_names),
            tags=list(tags),
        )

    def __repr__(self) -> str:
        preview = self.title[:30] + "..." if len(self.title) > 30 else self.title
        return f"JournalEntry(id='{self.id[:8]}', title='{preview}', tags={self.tags})"
