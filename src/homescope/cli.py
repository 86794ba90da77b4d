"""Command line interface for homescope."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from homescope.config import AppConfig
from homescope.errors import BrowseError
from homescope.explorer.listing import list_directory
from homescope.explorer.overview import build_overview
from homescope.explorer.reader import read_file
from homescope.explorer.search import search_tree
from homescope.utils.files import resolve_path
from homescope.web.app import app as web_app
from homescope.web.app import get_config


console = Console()
app = typer.Typer(help="homescope - read-only browser for your home directory")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(root: Optional[Path]) -> AppConfig:
    return AppConfig(root=root) if root is not None else AppConfig()


def _fail(exc: BrowseError) -> NoReturn:
    console.print(f"[red]{exc.message}[/red]")
    raise typer.Exit(code=1)


def _format_size(size: int) -> str:
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


@app.command()
def tree(
    path: str = typer.Argument("", help="Directory relative to the root"),
    depth: int = typer.Option(1, help="Listing depth (1-3)"),
    root: Path = typer.Option(None, "--root", help="Directory to browse"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List one directory, directories first."""
    _setup_logging(verbose)
    config = _load_config(root)
    try:
        target = resolve_path(config.root, path) if path else config.root
        entries = list_directory(target, depth)
    except BrowseError as exc:
        _fail(exc)

    if not entries:
        console.print("[yellow]Empty directory.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Modified")

    for entry in entries:
        name = f"{entry.name}/" if entry.type == "directory" else entry.name
        if entry.type == "directory":
            size = f"{entry.children_count} items"
        else:
            size = _format_size(entry.size)
        modified = entry.modified.strftime("%Y-%m-%d %H:%M") if entry.modified else "-"
        table.add_row(name, entry.type, size, modified)

    console.print(table)


@app.command()
def cat(
    path: str = typer.Argument(..., help="File relative to the root"),
    lines: int = typer.Option(0, help="For JSONL files, show only the last N lines"),
    root: Path = typer.Option(None, "--root", help="Directory to browse"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print a file's contents."""
    _setup_logging(verbose)
    config = _load_config(root)
    try:
        target = resolve_path(config.root, path)
        view = read_file(target, display_path=path, tail=max(0, lines), max_bytes=config.max_file_bytes)
    except BrowseError as exc:
        _fail(exc)

    console.print(view.content, markup=False, highlight=False)
    if view.truncated:
        console.print(f"[yellow]Showing last {lines} lines.[/yellow]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for"),
    content: bool = typer.Option(False, "--content", "-c", help="Search file contents instead of names"),
    root: Path = typer.Option(None, "--root", help="Directory to browse"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search file names or contents beneath the root."""
    _setup_logging(verbose)
    config = _load_config(root)
    results = search_tree(
        config.root,
        query,
        "content" if content else "name",
        max_results=config.max_results,
        max_file_bytes=config.max_search_file_bytes,
        skip_dirs=config.skip_dirs,
    )
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    if content:
        table.add_column("Match")

    for result in results:
        if content:
            snippet = (result.match or "").replace("\n", " ")
            table.add_row(result.path, snippet)
        else:
            table.add_row(result.path)

    console.print(table)
    if len(results) >= config.max_results:
        console.print(f"[yellow]Stopped after {config.max_results} results.[/yellow]")


@app.command()
def overview(
    root: Path = typer.Option(None, "--root", help="Directory to browse"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Summarise the well-known sections of the root."""
    _setup_logging(verbose)
    config = _load_config(root)
    sections, key_files = build_overview(config.root)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Section")
    table.add_column("Description")
    table.add_column("Entries", justify="right")
    table.add_column("Size", justify="right")
    for section in sections:
        table.add_row(section.label, section.description, str(section.count), _format_size(section.total_size_bytes))
    console.print(table)

    for key_file in key_files:
        if key_file.modified is None:
            console.print(f"{key_file.name}: [yellow]missing[/yellow]")
        else:
            console.print(f"{key_file.name}: {_format_size(key_file.size)}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Path = typer.Option(None, "--root", help="Directory to browse"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the HTTP interface."""
    _setup_logging(verbose)
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = _load_config(root)
    if not config.root.is_dir():
        console.print(f"[yellow]Warning: {config.root} is not a directory, requests will fail.[/yellow]")

    web_app.dependency_overrides[get_config] = lambda: config
    console.print(f"Starting web interface on http://{host}:{port} (root: {config.root})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
