# ABOUTME: Unit tests for the async HTTP client abstraction.
# ABOUTME: Tests the HttpClient protocol, form POSTs, retry, and error mapping via MockTransport.

from urllib.parse import parse_qs

import httpx
import pytest

from storytel_meta.metadata.http import (
    HttpClient,
    MetadataDecodeError,
    MetadataFetchError,
    StorytelHttpClient,
)


class FakeTransport(httpx.MockTransport):
    """MockTransport that replays canned responses and records requests."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return len(self.requests)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_storytel_client_satisfies_protocol(self) -> None:
        client = StorytelHttpClient(transport=FakeTransport())
        assert isinstance(client, HttpClient)


class TestStorytelHttpClient:
    """Tests for StorytelHttpClient."""

    @pytest.mark.asyncio
    async def test_post_form_returns_json(self) -> None:
        transport = FakeTransport()
        async with StorytelHttpClient(transport=transport) as client:
            result = await client.post_form("https://example.com/api", {"q": "test"})
        assert result == {"ok": True}

    @pytest.mark.asyncio
    async def test_post_form_sends_form_body(self) -> None:
        transport = FakeTransport()
        async with StorytelHttpClient(transport=transport) as client:
            await client.post_form(
                "https://example.com/api", {"q": "harry+potter", "request_locale": "sv"}
            )
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "q": ["harry+potter"],
            "request_locale": ["sv"],
        }

    @pytest.mark.asyncio
    async def test_browser_user_agent(self) -> None:
        transport = FakeTransport()
        async with StorytelHttpClient(transport=transport) as client:
            await client.post_form("https://example.com/api", {})
        assert transport.requests[0].headers["user-agent"].startswith("Mozilla/5.0")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self) -> None:
        transport = FakeTransport([httpx.Response(200, text="<html>maintenance</html>")])
        async with StorytelHttpClient(transport=transport) as client:
            with pytest.raises(MetadataDecodeError, match="maintenance"):
                await client.post_form("https://example.com/api", {})

    @pytest.mark.asyncio
    async def test_non_object_json_raises_decode_error(self) -> None:
        transport = FakeTransport([httpx.Response(200, json=[1, 2, 3])])
        async with StorytelHttpClient(transport=transport) as client:
            with pytest.raises(MetadataDecodeError):
                await client.post_form("https://example.com/api", {})

    @pytest.mark.asyncio
    async def test_http_error_raises_metadata_fetch_error(self) -> None:
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])
        async with StorytelHttpClient(transport=transport) as client:
            with pytest.raises(MetadataFetchError, match="404"):
                await client.post_form("https://example.com/missing", {})
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error_raises_metadata_fetch_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with StorytelHttpClient(transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(MetadataFetchError, match="connection refused"):
                await client.post_form("https://example.com/api", {})

    @pytest.mark.asyncio
    async def test_retry_on_429(self) -> None:
        transport = FakeTransport(
            [
                httpx.Response(429, json={"error": "rate limited"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        async with StorytelHttpClient(
            transport=transport, max_retries=1, retry_delay=0.0
        ) as client:
            result = await client.post_form("https://example.com/api", {})
        assert result == {"ok": True}
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self) -> None:
        """Each post_form call makes exactly one request unless retries are enabled."""
        transport = FakeTransport([httpx.Response(503, json={"error": "busy"})])
        async with StorytelHttpClient(transport=transport) as client:
            with pytest.raises(MetadataFetchError, match="503"):
                await client.post_form("https://example.com/api", {})
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_exhausted_raises(self) -> None:
        transport = FakeTransport([httpx.Response(500, json={"error": "boom"}) for _ in range(3)])
        async with StorytelHttpClient(
            transport=transport, max_retries=2, retry_delay=0.0
        ) as client:
            with pytest.raises(MetadataFetchError, match="500"):
                await client.post_form("https://example.com/api", {})
        assert transport.call_count == 3
