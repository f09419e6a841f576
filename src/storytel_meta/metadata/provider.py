# ABOUTME: MetadataProvider protocol defining the contract for catalog metadata sources.
# ABOUTME: The Storytel provider implements this; hosts depend only on the protocol.

from typing import Protocol, runtime_checkable

from storytel_meta.metadata.types import SearchResultSet


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for catalog search services.

    Implementations return normalized matches for a query and never raise
    for catalog-side failures.
    """

    @property
    def name(self) -> str: ...

    async def search_books(
        self, query: str, author: str | None = "", locale: str | None = None
    ) -> SearchResultSet: ...
