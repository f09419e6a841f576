# ABOUTME: Async HTTP client abstraction for Storytel catalog API calls.
# ABOUTME: Provides form POSTs, retry with backoff, and injectable transport for testing.

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

# The catalog API rejects requests that don't look like they come from a browser.
_USER_AGENT = (
    "Mozilla/5.0 (X11; CrOS x86_64 14541.0.0) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36"
)


class MetadataFetchError(Exception):
    """Raised when an HTTP request to the catalog fails."""


class MetadataDecodeError(MetadataFetchError):
    """Raised when a catalog response body is not valid JSON or has an unusable shape."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for form-encoded POST operations against the catalog API."""

    async def post_form(self, url: str, data: dict[str, str]) -> dict[str, Any]: ...


class StorytelHttpClient:
    """Async HTTP client with retry for catalog API calls.

    Wraps httpx.AsyncClient with optional retry for transient failures
    (429, 5xx). Retries are off by default so a detail lookup makes one POST
    per identifier kind. Requests are not serialized, so callers can fan out.
    """

    def __init__(
        self,
        *,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": _USER_AGENT},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    async def __aenter__(self) -> "StorytelHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post_form(self, url: str, data: dict[str, str]) -> dict[str, Any]:
        """Send a form-encoded POST request with retry.

        Args:
            url: The URL to request.
            data: Form fields, sent as application/x-www-form-urlencoded.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataDecodeError: If the body is not JSON.
            MetadataFetchError: On transport errors, non-retryable HTTP errors,
                or exhausted retries.
        """
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = await self._client.post(url, data=data)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                return _decode_json(url, response)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise MetadataFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")


def _decode_json(url: str, response: httpx.Response) -> dict[str, Any]:
    """Parse a response body, keeping a short excerpt of bad payloads for the log."""
    try:
        body = response.json()
    except ValueError as exc:
        excerpt = response.text[:200]
        raise MetadataDecodeError(f"Invalid JSON from {url}: {excerpt!r}") from exc
    if not isinstance(body, dict):
        raise MetadataDecodeError(f"Unexpected JSON payload from {url}: {type(body).__name__}")
    return body
