"""Settings and logging setup shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from showroom.application.config import (
    ConfigError,
    PlannerLayoutConfig,
    ShowroomSettings,
    load_layout,
    load_settings,
    settings_from_env,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def resolve_settings(path: Path | None, dry_run: bool = False) -> ShowroomSettings:
    """Load settings from a file (if given), then overlay the environment.

    A dry run always uses the in-memory stores, whatever the file or the
    environment say.
    """
    try:
        settings = load_settings(path) if path is not None else ShowroomSettings()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    settings = settings_from_env(settings)
    if dry_run:
        storage = settings.storage.model_copy(update={"base_url": "", "api_key": ""})
        settings = settings.model_copy(update={"storage": storage})
    return settings


def read_layout(path: Path) -> PlannerLayoutConfig:
    try:
        return load_layout(path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
