"""Tag parsing and tag-based filtering."""

from __future__ import annotations

from collections.abc import Sequence

from .models import JournalEntry

TAG_SEPARATOR = ","


def parse_tags(raw: str, keep_empty: bool = False) -> list[str]:
    """Split comma-separated user input into tags.

    Tokens are stripped of surrounding whitespace; order and duplicates are
    kept. Empty tokens are dropped unless *keep_empty* is set, in which case
    ``""`` parses to ``[""]`` and ``"a,,b"`` to ``["a", "", "b"]``.
    """
    tags = [token.strip() for token in raw.split(TAG_SEPARATOR)]
    if keep_empty:
        return tags
    return [tag for tag in tags if tag]


def format_tags(tags: Sequence[str]) -> str:
    """Inverse of ``parse_tags`` for display in an edit form."""
    return ", ".join(tags)


def filter_entries(entries: list[JournalEntry], tag: str | None) -> list[JournalEntry]:
    """Return the entries carrying *tag*, in their original order.

    Matching is exact and case-sensitive. With no tag the input list itself
    is returned.
    """
    if tag is None:
        return entries
    return [entry for entry in entries if entry.has_tag(tag)]


def tag_counts(entries: Sequence[JournalEntry]) -> dict[str, int]:
    """Count entries per tag, keyed in first-seen order.

    An entry listing the same tag twice counts once for it.
    """
    counts: dict[str, int] = {}
    for entry in entries:
        for tag in dict.fromkeys(entry.tags):
            counts[tag] = counts.get(tag, 0) + 1
    return counts
