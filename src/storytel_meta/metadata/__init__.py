# ABOUTME: Metadata package for Storytel catalog search and title normalization.
# ABOUTME: Exports the provider, the public record types, and the title normalizer.

from storytel_meta.metadata.normalizer import normalize_title
from storytel_meta.metadata.provider import MetadataProvider
from storytel_meta.metadata.storytel import BookUnavailableError, StorytelProvider
from storytel_meta.metadata.types import NormalizedMetadata, NormalizedTitle, SearchResultSet

__all__ = [
    "BookUnavailableError",
    "MetadataProvider",
    "NormalizedMetadata",
    "NormalizedTitle",
    "SearchResultSet",
    "StorytelProvider",
    "normalize_title",
]
