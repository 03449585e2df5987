"""Operator CLI: python -m drivelibrary <command>."""

from __future__ import annotations

import time
from typing import Optional

import typer

from drivelibrary.config import get_settings
from drivelibrary.errors import DriveLibraryError
from drivelibrary.library import DriveLibrary
from drivelibrary.search import SearchService
from drivelibrary.util.log import setup_logging

app = typer.Typer(
    name="drivelibrary",
    help="Inspect the site structure built from a Google Drive",
    add_completion=False,
)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Google Drive document library."""
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_file=settings.log_file)


def _refreshed_library() -> DriveLibrary:
    library = DriveLibrary(get_settings())
    try:
        library.refresh()
    except DriveLibraryError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    return library


@app.command()
def routes() -> None:
    """Print every site path."""
    library = _refreshed_library()
    for route in sorted(library.get_all_routes()):
        typer.echo(route)


@app.command()
def tags(
    tag: Optional[str] = typer.Argument(None, help="Print the ids carrying this tag"),
) -> None:
    """Print the tag index, or the ids for one tag."""
    library = _refreshed_library()
    if tag:
        for resource_id in library.get_tagged(tag):
            typer.echo(resource_id)
        return

    for name, ids in sorted(library.get_tagged().items()):  # type: ignore[union-attr]
        typer.echo(f"{name}\t{len(ids)}")


@app.command()
def search(query: str = typer.Argument(..., help="Full-text query")) -> None:
    """Full-text search across the configured drive(s)."""
    library = _refreshed_library()
    try:
        hits = SearchService(library).run(query)
    except DriveLibraryError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    for meta in hits:
        typer.echo(f"{meta.path}\t{meta.pretty_name}")


@app.command()
def watch() -> None:
    """Refresh on the configured interval until interrupted."""
    settings = get_settings()
    library = DriveLibrary(settings)
    library.start()
    try:
        while True:
            time.sleep(settings.refresh_interval)
    except KeyboardInterrupt:
        library.stop()


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
