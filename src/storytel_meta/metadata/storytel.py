# ABOUTME: Storytel metadata provider implementation.
# ABOUTME: Searches the Storytel catalog, fans out detail fetches, and caches normalized results.

import asyncio
import logging
import re
from typing import Any

from storytel_meta.metadata.cache import CacheKey, SearchCache
from storytel_meta.metadata.http import HttpClient, MetadataDecodeError, MetadataFetchError
from storytel_meta.metadata.storytel_parser import format_book_metadata, parse_book_info
from storytel_meta.metadata.types import NormalizedMetadata, SearchResultSet

logger = logging.getLogger(__name__)

_SEARCH_URL = "https://www.storytel.com/api/search.action"
_BOOK_URL = "https://www.storytel.com/api/getBookInfoForContent.action"

DEFAULT_LOCALE = "en"
MAX_SEARCH_RESULTS = 10

_SUCCESS = "success"
_WHITESPACE_RE = re.compile(r"\s+")


class BookUnavailableError(Exception):
    """Raised when a book cannot be fetched by either identifier kind."""

    def __init__(self, book_id: str, result: str | None) -> None:
        super().__init__(f"Storytel API failed for ID {book_id}. Result: {result}")
        self.book_id = book_id
        self.result = result


def format_query(query: str) -> str:
    """Drop any ':' suffix and join the remaining words with '+'."""
    clean = query.split(":", 1)[0].strip()
    return _WHITESPACE_RE.sub("+", clean)


class StorytelProvider:
    """Metadata provider backed by the Storytel catalog API.

    Uses a dependency-injected HttpClient and an owned (or injected)
    SearchCache. The configured locale is the fallback language for records
    that don't declare one, and the default search locale.
    """

    def __init__(
        self,
        http_client: HttpClient,
        cache: SearchCache | None = None,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._http = http_client
        self._cache = cache if cache is not None else SearchCache()
        self._locale = locale

    @property
    def name(self) -> str:
        return "storytel"

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        self._locale = locale

    async def search_books(
        self, query: str, author: str | None = "", locale: str | None = None
    ) -> SearchResultSet:
        """Search the catalog and return normalized matches.

        Never raises for catalog problems: network failures and undecodable
        responses produce an empty result set. Up to MAX_SEARCH_RESULTS
        candidates are fetched concurrently; failures among them are dropped
        and the rest keep catalog order.
        """
        locale = locale or self._locale
        formatted_query = format_query(query)
        cache_key: CacheKey = (formatted_query, author or "", locale)

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return cached

        logger.info("searchBooks: %s, %s", formatted_query, locale)
        try:
            data = await self._http.post_form(
                _SEARCH_URL, {"q": formatted_query, "request_locale": locale}
            )
        except MetadataDecodeError as exc:
            logger.error("Invalid JSON from Storytel search: %s", exc)
            return SearchResultSet()
        except MetadataFetchError as exc:
            logger.warning("Search failed for %s: %s", formatted_query, exc)
            return SearchResultSet()

        books = data.get("books")
        if not isinstance(books, list):
            return SearchResultSet()

        candidates = books[:MAX_SEARCH_RESULTS]
        logger.info("Found %d books in search results", len(candidates))

        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(self._resolve_candidate(entry, locale))
                for entry in candidates
            ]

        resolved = [task.result() for task in tasks]
        result = SearchResultSet(matches=[m for m in resolved if m is not None])
        self._cache.set(cache_key, result)
        return result

    async def _resolve_candidate(self, entry: Any, locale: str) -> NormalizedMetadata | None:
        """Fetch and format one search hit; None drops it from the results."""
        book = entry.get("book") if isinstance(entry, dict) else None
        book_id = book.get("id") if isinstance(book, dict) else None
        if not book_id:
            return None

        try:
            details = await self.fetch_book_details(str(book_id), locale)
        except BookUnavailableError as exc:
            logger.warning("Skipping search result: %s", exc)
            return None

        try:
            record = parse_book_info(details)
        except MetadataDecodeError as exc:
            logger.warning("Skipping malformed record for ID %s: %s", book_id, exc)
            return None
        if record is None or not record.is_publishable:
            logger.debug("Book %s has no publishable edition", book_id)
            return None
        return format_book_metadata(record, self._locale)

    async def fetch_book_info(
        self, book_id: str, locale: str, param_name: str
    ) -> dict[str, Any] | None:
        """POST one detail request, identifying the book via `param_name`.

        Returns None on any transport, status, or decoding failure.
        """
        logger.debug("fetchBookDetails: %s, %s, %s", book_id, locale, param_name)
        try:
            return await self._http.post_form(
                _BOOK_URL, {param_name: book_id, "request_locale": locale}
            )
        except MetadataFetchError as exc:
            logger.warning("Fetch error for %s (%s): %s", book_id, param_name, exc)
            return None

    async def fetch_book_details(self, book_id: str, locale: str) -> dict[str, Any]:
        """Fetch a catalog record, retrying once with the consumableId parameter.

        Raises:
            BookUnavailableError: If neither identifier kind reports success.
        """
        data = await self.fetch_book_info(book_id, locale, "bookId")
        if data and data.get("result") == _SUCCESS:
            return data

        logger.info("Retrying with consumableId for ID %s...", book_id)
        data = await self.fetch_book_info(book_id, locale, "consumableId")
        if data and data.get("result") == _SUCCESS:
            return data

        raise BookUnavailableError(book_id, data.get("result") if data else None)
