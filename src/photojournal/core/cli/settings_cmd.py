"""Settings and maintenance commands: theme, images prune."""

from __future__ import annotations

import click

from .common import get_state


@click.command()
@click.argument("mode", required=False, type=click.Choice(["light", "dark", "toggle"]))
@click.pass_context
def theme(ctx: click.Context, mode: str | None) -> None:
    """Show or change light/dark appearance."""
    from photojournal.app.settings import Appearance

    state = get_state(ctx)
    if mode == "toggle":
        state.toggle_appearance()
    elif mode is not None:
        state.set_appearance(Appearance(mode))
    click.echo(f"Appearance: {state.appearance.value}")


@click.group()
def images() -> None:
    """Manage stored photos."""


@images.command()
@click.option("--dry-run", is_flag=True, help="Only list the files that would be removed.")
@click.pass_context
def prune(ctx: click.Context, dry_run: bool) -> None:
    """Delete photo files that no entry references."""
    state = get_state(ctx)
    if dry_run:
        names = state.image_store.orphans(state.entries)
        verb = "Would remove"
    else:
        names = state.prune_images()
        verb = "Removed"
    for name in names:
        click.echo(name)
    click.echo(f"{verb} {len(names)} orphaned photo(s).")
