"""Typer option aliases for the CLI commands"""

import importlib.metadata
from pathlib import Path
from typing import Annotated

import typer

from fav_downloader.src.interfaces.help_panels import HelpPanels

PACKAGE_NAME = 'fav-media-downloader'


def show_version(value: bool) -> None:  # noqa: FBT001 (typer callback signature)
    """Print installed package version and stop"""
    if value:
        typer.echo(importlib.metadata.version(PACKAGE_NAME))
        raise typer.Exit


SavePathOption = Annotated[
    Path | None,
    typer.Option(
        '--save-path',
        '-s',
        help='Directory to save media into (default: [bold]media[/bold] or value from config.yaml)',
        file_okay=False,
        rich_help_panel=HelpPanels.storage.value,
    ),
]

ScanAllOption = Annotated[
    bool,
    typer.Option(
        '--scan-all',
        help='Scan the whole favorites history instead of the recent 200 favorites',
        rich_help_panel=HelpPanels.actions.value,
    ),
]

VersionOption = Annotated[
    bool,
    typer.Option(
        '--version',
        help='Show version and exit',
        callback=show_version,
        is_eager=True,
    ),
]
