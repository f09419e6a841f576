# ABOUTME: CLI package for storytel-meta, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from storytel_meta.cli.commands import search_cmd, title_cmd


@click.group()
@click.version_option(package_name="storytel-meta")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """storytel-meta - search the Storytel catalog and clean up its titles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


cli.add_command(search_cmd.search)
cli.add_command(title_cmd.title)
