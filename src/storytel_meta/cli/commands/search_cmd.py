# ABOUTME: The `storytel-meta search` command for querying the Storytel catalog.
# ABOUTME: Prints normalized matches as a Rich table or as the JSON match document.

import asyncio
import json

import click
from rich.console import Console
from rich.table import Table

from storytel_meta.cli.options import locale_option
from storytel_meta.metadata.http import StorytelHttpClient
from storytel_meta.metadata.storytel import StorytelProvider
from storytel_meta.metadata.types import SearchResultSet

console = Console()


def _create_http_client() -> StorytelHttpClient:
    """Create the default HTTP client for catalog requests."""
    return StorytelHttpClient()


async def _run_search(query: str, author: str, locale: str) -> SearchResultSet:
    async with _create_http_client() as http_client:
        provider = StorytelProvider(http_client=http_client, locale=locale)
        return await provider.search_books(query, author, locale)


@click.command("search")
@click.argument("query")
@click.option("-a", "--author", default="", help="Author filter (part of the cache key).")
@locale_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw match document.")
def search(query: str, author: str, locale: str, as_json: bool) -> None:
    """Search the Storytel catalog and show normalized metadata."""
    if not query.strip():
        console.print("[red]Error:[/red] query must not be empty")
        raise SystemExit(1)

    results = asyncio.run(_run_search(query, author, locale))

    if as_json:
        click.echo(json.dumps(results.to_dict(), ensure_ascii=False, indent=2))
        return

    if not results.matches:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Subtitle")
    table.add_column("Author")
    table.add_column("Narrator")
    table.add_column("Year", width=5)
    table.add_column("Min", justify="right")

    for match in results.matches:
        table.add_row(
            match.title,
            match.subtitle or "[dim]-[/dim]",
            match.author or "[dim]unknown[/dim]",
            match.narrator or "[dim]-[/dim]",
            match.published_year or "?",
            str(match.duration) if match.duration is not None else "?",
        )

    console.print(table)
    console.print(f"\n[dim]{len(results.matches)} result(s)[/dim]")
