"""Journal core: entries, the entry and image stores, drafts and filtering.

Everything here is UI-agnostic; ``photojournal.app`` layers explicit
application state and view models on top.
"""

from .editor import DraftImage, EntryDraft, ExistingImage, NewImage
from .filtering import filter_entries, format_tags, parse_tags, tag_counts
from .images import ImageStore
from .models import JournalEntry
from .store import ENTRIES_KEY, EntryStore

__all__ = [
    "ENTRIES_KEY",
    "DraftImage",
    "EntryDraft",
    "EntryStore",
    "ExistingImage",
    "ImageStore",
    "JournalEntry",
    "NewImage",
    "filter_entries",
    "format_tags",
    "parse_tags",
    "tag_counts",
]
