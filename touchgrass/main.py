#!/usr/bin/env python3
"""
Main CLI entry point for touchgrass
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from touchgrass import __build_id__, __version__
from touchgrass.bible.data import BibleData
from touchgrass.bible.palette import build_palette
from touchgrass.bible.verse_ref import VerseRef
from touchgrass.config.constants import (
    APP_DESCRIPTION,
    APP_NAME,
    LOG_FILENAME,
    TOUCHGRASS_CONFIG_DIR,
)
from touchgrass.config.settings import Settings, get_settings_path, load_settings
from touchgrass.exceptions import TouchGrassError
from touchgrass.utils.logging import setup_logging
from touchgrass.utils.output import console, print_json

app = typer.Typer(help=f"{APP_NAME} - {APP_DESCRIPTION}")

_state = {"verbose": False}

DATA_DIR_OPTION = typer.Option(
    None,
    "--data-dir",
    "-d",
    envvar="TOUCHGRASS_DATA_DIR",
    help="Directory with KJV.json, crossrefs.json and topics.json",
)
SETTINGS_OPTION = typer.Option(
    None, "--settings", "-s", envvar="TOUCHGRASS_SETTINGS", help="Settings file to use"
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Touch Grass Bible - a terminal bible reader built around a command palette.

    [bold]Examples:[/bold]

    Read with the palette:
        [cyan]touchgrass read[/cyan]

    Search from the shell:
        [cyan]touchgrass search shepherd[/cyan]
        [cyan]touchgrass search "" --category go-to-verse[/cyan]
    """
    _state["verbose"] = verbose
    setup_logging(verbose=verbose)


def _load(data_dir: Optional[Path], settings_path: Optional[Path]) -> tuple[BibleData, Settings]:
    settings = load_settings(settings_path)
    data = BibleData.load(
        data_dir,
        bookmarks=settings["bookmarks"],
        default_translation=settings["translation"],
    )
    return data, settings


def setup_reader_logging(settings: Settings) -> None:
    """Log to a file while the TUI owns the terminal, if logging is switched on."""
    debug = _state["verbose"] or settings.get("debug", False)
    setup_logging(
        verbose=debug,
        log_file=TOUCHGRASS_CONFIG_DIR / LOG_FILENAME,
        enabled=debug or settings.get("enable_logging", False),
    )


@app.command()
def version():
    """Show touchgrass version"""
    typer.echo(f"touchgrass version {__version__}")
    typer.echo(f"Build ID: {__build_id__}")
    typer.echo(APP_NAME)


@app.command()
def read(
    data_dir: Optional[Path] = DATA_DIR_OPTION,
    settings_path: Optional[Path] = SETTINGS_OPTION,
    verse: Optional[str] = typer.Option(None, "--verse", help='Verse to start on, e.g. "John 3:16"'),
):
    """Open the reader. Press Enter for the command palette."""
    from touchgrass.ui.app import TouchGrassApp

    try:
        data, settings = _load(data_dir, settings_path)
        setup_reader_logging(settings)
        reader = TouchGrassApp(data, settings, settings_path=settings_path or get_settings_path())
        if verse:
            reader.verse = VerseRef.parse(verse)
        reader.run()
    except TouchGrassError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


@app.command()
def search(
    query: str = typer.Argument(..., help="Palette query"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Only this category, e.g. topics or go-to-verse"
    ),
    limit: int = typer.Option(20, "--limit", "-n", min=0, help="Maximum rows to show"),
    verse: Optional[str] = typer.Option(
        None, "--verse", help="Verse the palette is focused on, e.g. \"Ps 23:1\""
    ),
    json_output: bool = typer.Option(False, "--json", help="Output rows as JSON"),
    data_dir: Optional[Path] = DATA_DIR_OPTION,
    settings_path: Optional[Path] = SETTINGS_OPTION,
):
    """Run one palette query and print what it would show."""
    try:
        data, settings = _load(data_dir, settings_path)
        palette = build_palette(data, settings)
        if category and palette.get_category(category) is None:
            keys = ", ".join(c.key for c in palette.categories)
            console.print(
                f"[red]Error: Unknown category '{escape(category)}'. Choose from: {keys}[/red]"
            )
            raise typer.Exit(1)

        patch = {"query": query, "active_category": category, "max_results": limit}
        if verse:
            patch["verse"] = VerseRef.parse(verse)
        palette.open(patch)
    except TouchGrassError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if json_output:
        print_json(
            [
                {
                    "category": section.category.key,
                    "title": item.render.title,
                    "description": item.render.description,
                    "detail": item.render.detail,
                }
                for section in palette.sections
                for item in section.items
            ]
        )
        return

    if not palette.items:
        console.print("[yellow]No results found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Category", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Description", style="dim")
    for section in palette.sections:
        for item in section.items:
            table.add_row(section.title, Text(item.render.title), Text(item.render.description))
    console.print(table)
    console.print(f"\n[dim]{palette.length} result(s)[/dim]")


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
