# ABOUTME: Title normalization for Storytel catalog titles with embedded series markers.
# ABOUTME: Strips locale marker patterns and splits "Series, Band 3: Title" into title/subtitle.

import re

from storytel_meta.metadata.patterns import ALL_PATTERNS, PatternRule
from storytel_meta.metadata.types import NormalizedTitle

# A trailing segment shorter than this is part of the title, not a subtitle
# (keeps "Catch-22" and "X-Men" intact).
_MIN_SUBTITLE_LENGTH = 3

_SUBTITLE_SEPARATOR_RE = re.compile(r"[:\-]")


def strip_markers(title: str, patterns: tuple[PatternRule, ...] = ALL_PATTERNS) -> str:
    """Run one left-to-right sweep, removing the first match of each pattern.

    This is a single pass, not a fixed-point loop: a pattern that would only
    match after a later pattern strips something is not retried.
    """
    for rule in patterns:
        title = rule.pattern.sub("", title, count=1)
    return title


def _remove_series_name(title: str, series_name: str) -> str:
    """Drop the series name from a title that contains it.

    "Title - Series" and "Title, Series" keep only the leading segment;
    otherwise the first literal occurrence of the name is cut out.
    """
    before_series = re.match(
        rf"^(.+?)[-,]\s*{re.escape(series_name)}", title, re.IGNORECASE
    )
    if before_series:
        return before_series.group(1).strip()
    return title.replace(series_name, "", 1)


def _split_subtitle(title: str) -> tuple[str, str] | None:
    """Split on the first ':' or '-' when the trailing part is long enough."""
    parts = _SUBTITLE_SEPARATOR_RE.split(title, maxsplit=1)
    if len(parts) == 2 and len(parts[1].strip()) >= _MIN_SUBTITLE_LENGTH:
        return parts[0].strip(), parts[1].strip()
    return None


def normalize_title(
    title: str | None,
    series_name: str | None = None,
    series_order: str | None = None,
) -> NormalizedTitle:
    """Clean a raw catalog title into a title and optional subtitle.

    1. Sweep the marker patterns once.
    2. With series info, the subtitle becomes "<series> <order>" and the
       series name is removed from the title.
    3. A ':' or '-' separated tail of 3+ characters becomes the subtitle,
       replacing any series subtitle.
    4. Sweep the marker patterns a second time.
    5. Trim both parts.

    Never raises; a missing title normalizes to an empty string.
    """
    text = strip_markers(title or "")
    subtitle: str | None = None

    if series_name and series_order:
        subtitle = f"{series_name} {series_order}"
        if series_name in text:
            text = _remove_series_name(text, series_name)

    if ":" in text or "-" in text:
        split = _split_subtitle(text)
        if split:
            text, subtitle = split

    text = strip_markers(text).strip()
    if subtitle is not None:
        subtitle = subtitle.strip()
    return NormalizedTitle(title=text, subtitle=subtitle or None)
