"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from photojournal.core.config import Config
from photojournal.core.exceptions import ConfigurationError, EntryNotFoundError
from photojournal.core.utils.logging import setup_logging

if TYPE_CHECKING:
    from photojournal.app.state import AppState
    from photojournal.journal.models import JournalEntry

PHOTOJOURNAL_DIR = Path.home() / ".photojournal"
CONFIG_PATH = PHOTOJOURNAL_DIR / "config.yaml"


def load_config(config_file: str | None = None, data_dir: str | None = None) -> Config:
    """Load config from *config_file*, falling back to ~/.photojournal/config.yaml."""
    path = config_file or (str(CONFIG_PATH) if CONFIG_PATH.exists() else None)
    try:
        return Config(config_file=path, data_dir=data_dir)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def setup_cli(ctx: click.Context, *, data_dir: str | None, config_file: str | None, verbose: bool) -> None:
    config = load_config(config_file, data_dir)
    try:
        settings = config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    log_file = settings.logging.file
    if log_file:
        config.ensure_directories()
    setup_logging(
        level="DEBUG" if verbose else settings.logging.level,
        log_file=log_file,
        log_dir=settings.paths.log_dir,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def get_state(ctx: click.Context) -> AppState:
    """Return the AppState for this invocation, loading it on first use."""
    from photojournal.app.state import AppState

    obj = ctx.ensure_object(dict)
    if "state" not in obj:
        config = obj.get("config") or load_config()
        obj["state"] = AppState.from_config(config)
    return obj["state"]


def resolve_entry(state: AppState, id_prefix: str) -> JournalEntry:
    """Look up an entry by id prefix, turning a miss into a CLI error."""
    try:
        return state.resolve_entry(id_prefix)
    except EntryNotFoundError as e:
        raise click.ClickException(str(e.args[0])) from None
