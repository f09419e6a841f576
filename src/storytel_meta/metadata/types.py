# ABOUTME: Core data structures for Storytel catalog records and normalized metadata.
# ABOUTME: RawCatalogRecord is the parsed API shape; NormalizedMetadata is the public output.

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SeriesRef:
    """A series reference as listed on a catalog book."""

    name: str | None = None


@dataclass
class CatalogBook:
    """Edition-independent book data from the `slb.book` object."""

    name: str = ""
    authors: str = ""
    language: str | None = None
    category: str | None = None
    series: list[SeriesRef] = field(default_factory=list)
    series_order: str | None = None
    large_cover: str | None = None


@dataclass
class CatalogEdition:
    """An audiobook or ebook edition (`slb.abook` / `slb.ebook`).

    `length_ms` and `narrator` are only ever set on audiobook editions.
    """

    description: str | None = None
    publisher: str | None = None
    release_date: str | None = None
    isbn: str | None = None
    length_ms: int | None = None
    narrator: str | None = None


@dataclass
class RawCatalogRecord:
    """Result of a detail fetch, with optional audiobook and ebook editions."""

    book: CatalogBook
    audiobook: CatalogEdition | None = None
    ebook: CatalogEdition | None = None

    @property
    def is_publishable(self) -> bool:
        """A record needs at least one edition to be turned into metadata."""
        return self.audiobook is not None or self.ebook is not None


@dataclass(frozen=True)
class SeriesInfo:
    """Series name and position derived from a catalog book."""

    series_name: str
    sequence: str

    def to_dict(self) -> dict[str, str]:
        return {"series": self.series_name, "sequence": self.sequence}


@dataclass(frozen=True)
class NormalizedTitle:
    """A cleaned title with an optional subtitle."""

    title: str
    subtitle: str | None = None


@dataclass
class NormalizedMetadata:
    """The cleaned, locale-agnostic record presented to consumers.

    Optional fields stay None when unknown and are left out of `to_dict()`
    entirely, so "unknown" is never confused with an empty string.
    """

    title: str
    author: str
    language: str
    description: str = ""
    publisher: str = ""
    isbn: str = ""
    subtitle: str | None = None
    genres: list[str] | None = None
    series: list[SeriesInfo] | None = None
    cover: str | None = None
    duration: int | None = None
    narrator: str | None = None
    published_year: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Public record with fixed field names; absent optionals are omitted."""
        record: dict[str, Any] = {
            "title": self.title,
            "subtitle": self.subtitle,
            "author": self.author,
            "language": self.language,
            "genres": list(self.genres) if self.genres is not None else None,
            "series": [s.to_dict() for s in self.series] if self.series is not None else None,
            "cover": self.cover,
            "duration": self.duration,
            "narrator": self.narrator,
            "description": self.description,
            "publisher": self.publisher,
            "publishedYear": self.published_year,
            "isbn": self.isbn,
        }
        return {key: value for key, value in record.items() if value is not None}


@dataclass
class SearchResultSet:
    """Normalized matches for one search, in catalog relevance order."""

    matches: list[NormalizedMetadata] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"matches": [m.to_dict() for m in self.matches]}
