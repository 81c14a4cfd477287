"""Tests for photojournal.core.cli.render."""

import io

from rich.console import Console

from photojournal.app.settings import Appearance
from photojournal.app.views import EntryCard
from photojournal.core.cli.render import THEMES, render_card


def _render(renderable, width=60):
    console = Console(file=io.StringIO(), width=width, theme=THEMES[Appearance.LIGHT], color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def _card(title, **kwargs):
    fields = dict(
        entry_id="0123456789abcdef",
        title=title,
        preview="",
        date_label="May 17, 2024",
        cover_image=None,
        tags=(),
        hidden_tag_count=0,
    )
    fields.update(kwargs)
    return EntryCard(**fields)


def test_card_title_clipped_to_one_line():
    output = _render(render_card(_card("Beach day\nwith friends")))
    assert "Beach day…" in output
    assert "with friends" not in output


def test_long_card_title_does_not_wrap():
    output = _render(render_card(_card("word " * 40)), width=40)
    title_lines = [line for line in output.splitlines() if "word" in line]
    assert len(title_lines) == 1


def test_untitled_card_and_tag_overflow():
    output = _render(render_card(_card("", tags=("a", "b", "c"), hidden_tag_count=2)))
    assert "(untitled)" in output
    assert "+2" in output
    assert "01234567" in output
