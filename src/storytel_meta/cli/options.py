# ABOUTME: Shared Click options for storytel-meta CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --locale.

import click

from storytel_meta.metadata.storytel import DEFAULT_LOCALE

locale_option = click.option(
    "-l",
    "--locale",
    envvar="STORYTEL_LOCALE",
    default=DEFAULT_LOCALE,
    show_default=True,
    help="Storytel request locale (env: STORYTEL_LOCALE).",
)
