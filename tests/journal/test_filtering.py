"""Tests for photojournal.journal.filtering."""

import random

import pytest

from photojournal.journal.filtering import filter_entries, format_tags, parse_tags, tag_counts
from photojournal.journal.models import JournalEntry


class TestParseTags:
    def test_trims_and_keeps_order(self):
        assert parse_tags("a, b ,c") == ["a", "b", "c"]

    def test_keeps_duplicates(self):
        assert parse_tags("sun, beach, sun") == ["sun", "beach", "sun"]

    def test_empty_input_drops_empty_token(self):
        assert parse_tags("") == []
        assert parse_tags(" , ,") == []
        assert parse_tags("a,,b") == ["a", "b"]

    def test_keep_empty_preserves_original_behavior(self):
        assert parse_tags("", keep_empty=True) == [""]
        assert parse_tags("a,,b", keep_empty=True) == ["a", "", "b"]

    def test_inner_whitespace_kept(self):
        assert parse_tags("road trip,  new york ") == ["road trip", "new york"]

    def test_format_roundtrip(self):
        tags = ["beach", "sun", "road trip"]
        assert format_tags(tags) == "beach, sun, road trip"
        assert parse_tags(format_tags(tags)) == tags


class TestFilterEntries:
    @pytest.fixture
    def entries(self):
        return [
            JournalEntry(title="one", tags=["beach", "sun"]),
            JournalEntry(title="two", tags=["work"]),
            JournalEntry(title="three", tags=["Beach"]),
            JournalEntry(title="four", tags=["sun", "beach"]),
        ]

    def test_no_tag_returns_list_unchanged(self, entries):
        assert filter_entries(entries, None) is entries

    def test_exact_case_sensitive_match(self, entries):
        assert [e.title for e in filter_entries(entries, "beach")] == ["one", "four"]
        assert [e.title for e in filter_entries(entries, "Beach")] == ["three"]

    def test_unknown_tag_gives_empty(self, entries):
        assert filter_entries(entries, "nope") == []

    def test_empty_tag_matches_only_empty_tags(self, entries):
        entries.append(JournalEntry(title="blank", tags=[""]))
        assert [e.title for e in filter_entries(entries, "")] == ["blank"]

    def test_matches_subsequence_property(self):
        rng = random.Random(7)
        pool = ["a", "b", "c", "d"]
        entries = [JournalEntry(title=str(i), tags=rng.sample(pool, rng.randint(0, 3))) for i in range(40)]
        for tag in pool:
            result = filter_entries(entries, tag)
            expected = [e for e in entries if tag in e.tags]
            assert result == expected
            positions = [entries.index(e) for e in result]
            assert positions == sorted(positions)


class TestTagCounts:
    def test_first_seen_order_and_counts(self):
        entries = [
            JournalEntry(tags=["sun", "beach"]),
            JournalEntry(tags=["work", "sun"]),
            JournalEntry(tags=["sun", "sun"]),
        ]
        assert tag_counts(entries) == {"sun": 3, "beach": 1, "work": 1}
        assert list(tag_counts(entries)) == ["sun", "beach", "work"]

    def test_empty(self):
        assert tag_counts([]) == {}
