"""Command-line interface for the Crossref MCP server."""

from __future__ import annotations

import asyncio
import json

import structlog
import typer
from rich.console import Console
from rich.table import Table

from crossref_mcp.log import configure_logging
from crossref_mcp.models import (
    NormalizedWork,
    QueryEnvelope,
    QueryFailed,
    SearchSuccess,
    WorkFound,
    envelope_to_dict,
)
from crossref_mcp.server import build_server
from crossref_mcp.services import ById, ByAuthor, ByTitle, Query, QueryDispatcher
from crossref_mcp.services.dispatcher import DEFAULT_ROWS
from crossref_mcp.settings import Settings, get_settings

console = Console()
app = typer.Typer(help="Crossref MCP Server - search Crossref works by title, author or DOI")
logger = structlog.get_logger(__name__)


def _build_dispatcher(settings: Settings) -> QueryDispatcher:
    return QueryDispatcher(settings)


def _run_query(query: Query) -> QueryEnvelope:
    settings = get_settings()
    configure_logging(settings.log_level)
    dispatcher = _build_dispatcher(settings)
    return asyncio.run(dispatcher.dispatch(query))


def _print_works(works: list[NormalizedWork], title: str) -> None:
    table = Table(title=title)
    table.add_column("DOI")
    table.add_column("Title", overflow="fold")
    table.add_column("Authors", overflow="fold")
    table.add_column("Container")
    table.add_column("Published")
    for work in works:
        table.add_row(
            work.doi or "—",
            work.title or "—",
            ", ".join(author.name for author in work.authors if author.name) or "—",
            work.container or "—",
            work.published.date_string if work.published and work.published.date_string else "—",
        )
    console.print(table)


def _report(envelope: QueryEnvelope, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(envelope_to_dict(envelope), indent=2))
    elif isinstance(envelope, SearchSuccess):
        works = [item for item in envelope.results if isinstance(item, NormalizedWork)]
        _print_works(works, f"Crossref results ({envelope.count})")
    elif isinstance(envelope, WorkFound):
        _print_works([envelope.result], "Crossref work")
    elif isinstance(envelope, QueryFailed):
        console.print(f"[red]{envelope.message}[/red]")
    else:
        console.print(f"[yellow]{envelope.status}[/yellow]: {getattr(envelope, 'message', 'No works found.')}")
    if isinstance(envelope, QueryFailed):
        raise typer.Exit(code=1)


@app.command()
def config(
    json_output: bool = typer.Option(False, "--json", help="Output settings as JSON"),
) -> None:
    """Display the resolved settings."""
    settings = get_settings()
    if json_output:
        typer.echo(settings.model_dump_json(indent=2))
        return
    table = Table(title="Crossref MCP Settings")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def title(
    query: str = typer.Argument(..., help="The title to search for"),
    rows: int = typer.Option(DEFAULT_ROWS, "--rows", "-n", min=1, help="Number of results to return"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw response envelope"),
) -> None:
    """Search Crossref works by title."""
    _report(_run_query(ByTitle(title=query, rows=rows)), json_output)


@app.command()
def author(
    query: str = typer.Argument(..., help="The author name to search for"),
    rows: int = typer.Option(DEFAULT_ROWS, "--rows", "-n", min=1, help="Number of results to return"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw response envelope"),
) -> None:
    """Search Crossref works by author."""
    _report(_run_query(ByAuthor(author=query, rows=rows)), json_output)


@app.command()
def doi(
    identifier: str = typer.Argument(..., help="The DOI to look up, optionally as a doi.org URL"),
    json_output: bool = typer.Option(False, "--json", help="Print the raw response envelope"),
) -> None:
    """Retrieve a single Crossref work by DOI."""
    _report(_run_query(ById(doi=identifier)), json_output)


@app.command()
def serve() -> None:
    """Run the MCP server over stdio."""
    settings = get_settings()
    configure_logging(settings.log_level)
    server = build_server(_build_dispatcher(settings), settings)
    logger.info("server.start", transport="stdio", api_base=settings.api_base)
    server.run()


if __name__ == "__main__":  # pragma: no cover
    app()
