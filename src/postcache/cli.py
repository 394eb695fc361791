"""Command line interface for postcache."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postcache.cache.post_cache import PostCache, PostNotFoundError
from postcache.config import AppConfig
from postcache.web.app import create_app

console = Console()
app = typer.Typer(help="postcache - serve HTML posts from a watched directory")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_cache(posts_dir: Path | None) -> PostCache:
    config = AppConfig(posts_dir=posts_dir if posts_dir is not None else AppConfig().posts_dir)
    resolved = config.resolve_posts_dir(Path.cwd())
    try:
        return PostCache(resolved)
    except OSError as exc:
        raise typer.BadParameter(f"Unable to read posts directory {resolved}: {exc}") from exc


@app.command("list")
def list_posts(
    posts_dir: Path = typer.Option(None, "--posts-dir", help="Directory containing HTML posts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the posts found in the directory."""
    _setup_logging(verbose)
    cache = _load_cache(posts_dir)

    documents = cache.get_all()
    if not documents:
        console.print("[yellow]No posts found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("File")

    for document in documents:
        name = document.path.name if document.path is not None else ""
        table.add_row(str(document.id), escape(document.title) or "[dim](untitled)[/dim]", name)

    console.print(table)


@app.command()
def show(
    post_id: int = typer.Argument(..., help="Post id as shown by 'list'"),
    posts_dir: Path = typer.Option(None, "--posts-dir", help="Directory containing HTML posts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the raw body of a single post."""
    _setup_logging(verbose)
    cache = _load_cache(posts_dir)

    try:
        document = cache.get_by_id(post_id)
    except PostNotFoundError:
        console.print(f"[red]Post {post_id} not found.[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{escape(document.title)}[/bold]")
    console.print(document.body, markup=False, highlight=False)


@app.command()
def serve(
    host: str = typer.Option(AppConfig().host, help="Host interface"),
    port: int = typer.Option(AppConfig().port, help="Server port"),
    posts_dir: Path = typer.Option(None, "--posts-dir", help="Directory containing HTML posts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the HTTP server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    _setup_logging(verbose)
    cache = _load_cache(posts_dir)
    web_app = create_app(cache)

    console.print(f"Serving {cache.stats.document_count} posts from {cache.posts_dir} on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
