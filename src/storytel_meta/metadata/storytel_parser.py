# ABOUTME: Parsing and formatting functions for Storytel API JSON responses.
# ABOUTME: Converts `slb` detail payloads into RawCatalogRecord and then NormalizedMetadata.

import re
from typing import Any

from storytel_meta.metadata.http import MetadataDecodeError
from storytel_meta.metadata.normalizer import normalize_title
from storytel_meta.metadata.types import (
    CatalogBook,
    CatalogEdition,
    NormalizedMetadata,
    RawCatalogRecord,
    SeriesInfo,
    SeriesRef,
)

_COVER_HOST = "https://storytel.com"
_COVER_LOW_RES = "320x320"
_COVER_HIGH_RES = "640x640"

_GENRE_SEPARATOR_RE = re.compile(r"[/,]")
_GENRE_ALIASES = {"Sci-Fi": "Science-Fiction"}

_MS_PER_MINUTE = 60000


def ensure_string(value: Any) -> str:
    """Coerce an API value to a trimmed string; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip()


def _optional_string(value: Any) -> str | None:
    text = ensure_string(value)
    return text or None


def _nested_name(data: dict[str, Any], key: str, field: str) -> Any:
    """Read `data[key][field]` where `data[key]` may be missing or null."""
    nested = data.get(key) or {}
    return nested.get(field) if isinstance(nested, dict) else None


def _object(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _optional_int(value: Any, field: str) -> int | None:
    """Parse a numeric API value; blanks become None.

    Raises:
        MetadataDecodeError: If the value is present but not numeric.
    """
    if not value:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MetadataDecodeError(f"Non-numeric {field}: {value!r}") from exc


def split_genre(genre: str | None) -> list[str]:
    """Split a category title on '/' or ',' into trimmed genre names.

    "Sci-Fi" is spelled out as "Science-Fiction".
    """
    if not genre:
        return []
    genres = []
    for part in _GENRE_SEPARATOR_RE.split(genre):
        trimmed = part.strip()
        genres.append(_GENRE_ALIASES.get(trimmed, trimmed))
    return genres


def upgrade_cover_url(url: str | None) -> str | None:
    """Turn a relative 320x320 cover path into an absolute 640x640 URL."""
    if not url:
        return None
    return f"{_COVER_HOST}{url.replace(_COVER_LOW_RES, _COVER_HIGH_RES, 1)}"


def _parse_book(data: dict[str, Any]) -> CatalogBook:
    raw_series = data.get("series")
    series = [
        SeriesRef(name=entry.get("name"))
        for entry in (raw_series if isinstance(raw_series, list) else [])
        if isinstance(entry, dict)
    ]
    raw_order = data.get("seriesOrder")
    return CatalogBook(
        name=ensure_string(data.get("name")),
        authors=ensure_string(data.get("authorsAsString")),
        language=_optional_string(_nested_name(data, "language", "isoValue")),
        category=_optional_string(_nested_name(data, "category", "title")),
        series=series,
        # A zero or empty order means the book has no usable position.
        series_order=ensure_string(raw_order) if raw_order else None,
        large_cover=_optional_string(data.get("largeCover")),
    )


def _parse_edition(data: dict[str, Any], *, audio: bool) -> CatalogEdition:
    edition = CatalogEdition(
        description=data.get("description"),
        publisher=_nested_name(data, "publisher", "name"),
        release_date=data.get("releaseDateFormat"),
        isbn=data.get("isbn"),
    )
    if audio:
        edition.length_ms = _optional_int(data.get("length"), "length")
        edition.narrator = _optional_string(data.get("narratorAsString"))
    return edition


def parse_book_info(data: dict[str, Any]) -> RawCatalogRecord | None:
    """Parse a getBookInfoForContent response into a RawCatalogRecord.

    Returns None when the payload has no `slb.book` object. Edition entries
    that are not objects are treated as missing.

    Raises:
        MetadataDecodeError: If a field has the wrong type to be usable.
    """
    slb = data.get("slb")
    if not isinstance(slb, dict):
        return None
    book = _object(slb.get("book"))
    if not book:
        return None

    abook = _object(slb.get("abook"))
    ebook = _object(slb.get("ebook"))
    return RawCatalogRecord(
        book=_parse_book(book),
        audiobook=_parse_edition(abook, audio=True) if abook else None,
        ebook=_parse_edition(ebook, audio=False) if ebook else None,
    )


def derive_series(book: CatalogBook) -> SeriesInfo | None:
    """Series info needs both a named series entry and a series order."""
    if not book.series or not book.series_order:
        return None
    name = ensure_string(book.series[0].name)
    if not name:
        return None
    return SeriesInfo(series_name=name, sequence=book.series_order)


def format_book_metadata(
    record: RawCatalogRecord, default_language: str
) -> NormalizedMetadata | None:
    """Map a catalog record to NormalizedMetadata.

    Audiobook edition fields win over ebook edition fields; the ebook is only
    consulted when there is no audiobook edition. Returns None when the record
    has neither edition.
    """
    edition = record.audiobook if record.audiobook is not None else record.ebook
    if edition is None:
        return None

    book = record.book
    series = derive_series(book)
    normalized = normalize_title(
        book.name,
        series.series_name if series else None,
        series.sequence if series else None,
    )

    duration = None
    narrator = None
    if record.audiobook is not None:
        if record.audiobook.length_ms:
            duration = record.audiobook.length_ms // _MS_PER_MINUTE
        narrator = record.audiobook.narrator

    genres = split_genre(book.category)
    release_date = ensure_string(edition.release_date)

    return NormalizedMetadata(
        title=normalized.title,
        subtitle=normalized.subtitle,
        author=book.authors,
        language=book.language or ensure_string(default_language),
        genres=genres or None,
        series=[series] if series else None,
        cover=upgrade_cover_url(book.large_cover),
        duration=duration,
        narrator=narrator,
        description=ensure_string(edition.description),
        publisher=ensure_string(edition.publisher),
        published_year=release_date[:4] or None,
        isbn=ensure_string(edition.isbn),
    )
