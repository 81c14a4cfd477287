"""photojournal CLI: list, show, create, edit and delete journal entries."""

import click

from photojournal import __version__

from .common import setup_cli


@click.group()
@click.version_option(version=__version__, package_name="photojournal")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory holding preferences and photos (default ~/.photojournal).",
)
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, data_dir: str | None, config_file: str | None, verbose: bool) -> None:
    """photojournal: a private journal with photos and tags."""
    setup_cli(ctx, data_dir=data_dir, config_file=config_file, verbose=verbose)


from .entries_cmd import delete, edit, list_entries, new, show, tags
from .settings_cmd import images, theme

main.add_command(list_entries)
main.add_command(show)
main.add_command(new)
main.add_command(edit)
main.add_command(delete)
main.add_command(tags)
main.add_command(theme)
main.add_command(images)
