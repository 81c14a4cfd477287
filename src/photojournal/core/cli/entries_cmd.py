"""Entry commands: list, show, new, edit, delete, tags."""

from __future__ import annotations

import click

from .common import get_state, resolve_entry


def _pick_into(draft, paths: tuple[str, ...]) -> None:
    """Load *paths* off the main thread and apply them to *draft* here."""
    if not paths:
        return
    from photojournal.app.picker import ImagePicker, MainThreadQueue

    dispatcher = MainThreadQueue()
    picker = ImagePicker(dispatcher)
    try:
        picker.pick(draft, paths).result()
    finally:
        picker.shutdown()
    dispatcher.drain()


@click.command("list")
@click.option("--tag", default=None, help="Only show entries with this exact tag.")
@click.pass_context
def list_entries(ctx: click.Context, tag: str | None) -> None:
    """List entries, newest first."""
    from photojournal.app.views import project_list

    from .render import make_console, render_list

    state = get_state(ctx)
    if tag is not None:
        state.select_tag(tag)
    render_list(make_console(state.appearance), project_list(state))


@click.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str) -> None:
    """Show one entry in full."""
    from photojournal.app.views import project_detail

    from .render import make_console, render_detail

    state = get_state(ctx)
    entry = resolve_entry(state, entry_id)
    render_detail(make_console(state.appearance), project_detail(state, entry.id))


@click.command()
@click.option("--title", default="", help="Entry title.")
@click.option("--content", default="", help="Entry text.")
@click.option("--tags", "tag_text", default="", help="Comma-separated tags.")
@click.option(
    "--image", "image_paths", multiple=True, type=click.Path(dir_okay=False), help="Photo to attach (repeatable)."
)
@click.pass_context
def new(ctx: click.Context, title: str, content: str, tag_text: str, image_paths: tuple[str, ...]) -> None:
    """Create a new entry."""
    state = get_state(ctx)
    draft = state.begin_new()
    draft.title = title
    draft.content = content
    draft.tag_text = tag_text
    _pick_into(draft, image_paths)

    entry = state.save_draft()
    click.echo(f"Created {entry.id}")


@click.command()
@click.argument("entry_id")
@click.option("--title", default=None, help="New title.")
@click.option("--content", default=None, help="New text.")
@click.option("--tags", "tag_text", default=None, help="New comma-separated tags.")
@click.option(
    "--add-image", "add_paths", multiple=True, type=click.Path(dir_okay=False), help="Photo to add (repeatable)."
)
@click.option(
    "--remove-image",
    "remove_indexes",
    multiple=True,
    type=click.IntRange(min=1),
    help="1-based photo number, as listed by 'edit --dry-run' (repeatable).",
)
@click.option("--dry-run", is_flag=True, help="Show the resulting draft without saving it.")
@click.pass_context
def edit(
    ctx: click.Context,
    entry_id: str,
    title: str | None,
    content: str | None,
    tag_text: str | None,
    add_paths: tuple[str, ...],
    remove_indexes: tuple[int, ...],
    dry_run: bool,
) -> None:
    """Edit an existing entry. Date and id never change."""
    state = get_state(ctx)
    entry = resolve_entry(state, entry_id)
    draft = state.begin_edit(entry.id)

    if title is not None:
        draft.title = title
    if content is not None:
        draft.content = content
    if tag_text is not None:
        draft.tag_text = tag_text
    for index in sorted(set(remove_indexes), reverse=True):
        if draft.remove_image(index - 1) is None:
            click.echo(f"No photo {index}, skipped.", err=True)
    _pick_into(draft, add_paths)

    if dry_run:
        from photojournal.app.views import project_editor

        from .render import make_console, render_editor

        render_editor(make_console(state.appearance), project_editor(draft))
        state.dismiss_draft()
        return

    saved = state.save_draft()
    if saved is None:
        raise click.ClickException(f"entry {entry.id} was deleted while editing")
    click.echo(f"Updated {saved.id}")


@click.command()
@click.argument("entry_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    state = get_state(ctx)
    entry = resolve_entry(state, entry_id)
    if not yes:
        click.confirm("Are you sure you want to delete this entry?", abort=True)
    state.delete_entry(entry.id)
    click.echo(f"Deleted {entry.id}")


@click.command()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """List every tag with the number of entries using it."""
    from photojournal.journal.filtering import tag_counts

    state = get_state(ctx)
    counts = tag_counts(state.entries)
    if not counts:
        click.echo("No tags yet.")
        return
    for tag, count in counts.items():
        click.echo(f"{tag or '(empty)'}\t{count}")
