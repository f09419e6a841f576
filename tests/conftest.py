# ABOUTME: Shared pytest fixtures for storytel-meta tests.
# ABOUTME: Provides a controllable clock and a SearchCache bound to it.

import pytest

from storytel_meta.metadata.cache import SearchCache
from tests.fixtures.clock import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def search_cache(clock: FakeClock) -> SearchCache:
    """A SearchCache with the default TTL that reads time from `clock`."""
    return SearchCache(timer=clock)
