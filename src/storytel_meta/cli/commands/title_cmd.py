# ABOUTME: The `storytel-meta title` command for normalizing a raw catalog title offline.
# ABOUTME: Shows the title/subtitle split the provider would produce.

import click
from rich.console import Console
from rich.table import Table

from storytel_meta.metadata.normalizer import normalize_title

console = Console()


@click.command()
@click.argument("raw_title")
@click.option("-s", "--series", "series_name", default=None, help="Series name from the catalog.")
@click.option("-n", "--order", "series_order", default=None, help="Position within the series.")
def title(raw_title: str, series_name: str | None, series_order: str | None) -> None:
    """Normalize RAW_TITLE into a title and subtitle."""
    result = normalize_title(raw_title, series_name, series_order)

    table = Table(show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Title", result.title or "[dim]empty[/dim]")
    table.add_row("Subtitle", result.subtitle or "[dim]none[/dim]")
    console.print(table)
