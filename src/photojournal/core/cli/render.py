"""Rich rendering of view models.

Renderers only read view models; they never look at stores or state.
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from photojournal.app.settings import Appearance
from photojournal.app.views import DetailView, EditorView, EntryCard, ListView

ACCENT = "purple"

THEMES = {
    Appearance.LIGHT: Theme(
        {
            "title": "bold black",
            "muted": "grey42",
            "tag": f"{ACCENT} on grey93",
            "banner": "black on grey85",
            "card": ACCENT,
        }
    ),
    Appearance.DARK: Theme(
        {
            "title": "bold white",
            "muted": "grey62",
            "tag": f"bold {ACCENT} on grey19",
            "banner": "white on grey23",
            "card": "medium_purple",
        }
    ),
}


def make_console(appearance: Appearance) -> Console:
    return Console(theme=THEMES[appearance], highlight=False)


def _tag_line(tags: tuple[str, ...], hidden: int = 0) -> Text:
    line = Text()
    for tag in tags:
        line.append(f" {tag} ", style="tag")
        line.append(" ")
    if hidden:
        line.append(f"+{hidden}", style="muted")
    return line


def _one_line(text: str) -> str:
    lines = text.splitlines()
    if not lines:
        return ""
    return lines[0] + ("…" if len(lines) > 1 else "")


def render_card(card: EntryCard) -> Panel:
    body = []
    if card.cover_image is not None:
        body.append(Text(f"[photo] {card.cover_image.name}", style="muted"))
    body.append(Text(_one_line(card.title) or "(untitled)", style="title", no_wrap=True, overflow="ellipsis"))
    if card.preview:
        body.append(Text(card.preview, style="muted"))
    if card.tags or card.hidden_tag_count:
        body.append(_tag_line(card.tags, card.hidden_tag_count))
    body.append(Text(card.date_label, style="muted"))
    return Panel(Group(*body), title=card.entry_id[:8], title_align="left", border_style="card")


def render_list(console: Console, view: ListView) -> None:
    console.print(Text(view.title, style="title"))
    if view.filter_banner:
        console.print(Text(f" {view.filter_banner}  (clear with: list) ", style="banner"))
    if view.is_empty:
        console.print(Text("No entries yet.", style="muted"))
        return
    for card in view.cards:
        console.print(render_card(card))


def render_detail(console: Console, view: DetailView) -> None:
    body = [Text(view.title or "(untitled)", style="title"), Text(view.date_label, style="muted"), Text("")]
    if view.content:
        body.append(Text(view.content))
    if view.images:
        body.append(Text(""))
        for i, path in enumerate(view.images, 1):
            body.append(Text(f"[photo {i}] {path}", style="muted"))
    if view.tags:
        body.append(Text(""))
        body.append(_tag_line(view.tags))
    console.print(Panel(Group(*body), title=view.entry_id, title_align="left", border_style="card"))


def render_editor(console: Console, view: EditorView) -> None:
    lines = [
        Text(view.heading, style="title"),
        Text(f"Title: {view.title}"),
        Text(f"Tags: {view.tag_text}"),
    ]
    for i, image in enumerate(view.images, 1):
        marker = "new" if image.is_new else "kept"
        lines.append(Text(f"  {i}. {image.label} ({marker})", style="muted"))
    if view.pending_deletions:
        lines.append(Text(f"  {view.pending_deletions} photo(s) will be removed", style="muted"))
    console.print(Group(*lines))
