"""Tests for the fetch engine."""

import asyncio

import aiohttp
import pytest
from urltomarkdown.http import AsyncHttpClient, ContentTooLargeError, HttpResponse
from urltomarkdown.models import FetchFailureKind, FetchOutcome


def make_response(status_code=200, content=b"<p>ok</p>", content_type="text/html; charset=utf-8"):
    return HttpResponse(
        status_code=status_code,
        content=content,
        content_type=content_type,
        headers={"Content-Type": content_type},
        url="https://example.com/page",
    )


class TestFetchOutcome:
    """Tests for FetchOutcome constructors."""

    def test_success(self):
        outcome = FetchOutcome.success("body")
        assert outcome.ok is True
        assert outcome.body == "body"
        assert outcome.failure is None

    def test_failures(self):
        assert FetchOutcome.timeout().failure is FetchFailureKind.TIMEOUT
        assert FetchOutcome.network_error().failure is FetchFailureKind.NETWORK_ERROR
        assert FetchOutcome.network_error().status_code is None

        outcome = FetchOutcome.http_status(404)
        assert outcome.ok is False
        assert outcome.failure is FetchFailureKind.HTTP_STATUS
        assert outcome.status_code == 404


class TestAsyncHttpClientFetch:
    """Tests for AsyncHttpClient.fetch classification."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self, monkeypatch):
        """Test that a 2xx response yields the decoded body."""
        client = AsyncHttpClient()

        async def get(url):
            return make_response(content="<p>Héllo</p>".encode())

        monkeypatch.setattr(client, "get", get)
        outcome = await client.fetch("https://example.com/page")

        assert outcome.ok is True
        assert outcome.body == "<p>Héllo</p>"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 404, 500, 503])
    async def test_non_2xx_status(self, monkeypatch, status):
        """Test that non-2xx statuses are reported with their code."""
        client = AsyncHttpClient()

        async def get(url):
            return make_response(status_code=status)

        monkeypatch.setattr(client, "get", get)
        outcome = await client.fetch("https://example.com/page")

        assert outcome.failure is FetchFailureKind.HTTP_STATUS
        assert outcome.status_code == status
        assert outcome.body is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("reset"),
            aiohttp.ClientPayloadError("truncated"),
            OSError("dns failure"),
            ContentTooLargeError("too big"),
            UnicodeError("encoding with 'idna' codec failed (UnicodeError: label empty or too long)"),
        ],
    )
    async def test_transport_errors(self, monkeypatch, error):
        """Test that transport errors become network errors without a status."""
        client = AsyncHttpClient()

        async def get(url):
            raise error

        monkeypatch.setattr(client, "get", get)
        outcome = await client.fetch("https://example.com/page")

        assert outcome.failure is FetchFailureKind.NETWORK_ERROR
        assert outcome.status_code is None

    @pytest.mark.asyncio
    async def test_deadline_wins_over_late_response(self, monkeypatch):
        """Test that a response completing after the deadline is discarded."""
        client = AsyncHttpClient(timeout=0.05)
        completed = []

        async def get(url):
            await asyncio.sleep(0.2)
            completed.append(url)
            return make_response()

        monkeypatch.setattr(client, "get", get)
        outcome = await client.fetch("https://example.com/slow")

        assert outcome.failure is FetchFailureKind.TIMEOUT
        # The in-flight read was cancelled and never completes
        await asyncio.sleep(0.3)
        assert completed == []

    @pytest.mark.asyncio
    async def test_transport_timeout_is_timeout(self, monkeypatch):
        """Test that the transport's own timeout is classified as a timeout."""
        client = AsyncHttpClient()

        async def get(url):
            raise aiohttp.ServerTimeoutError("read timeout")

        monkeypatch.setattr(client, "get", get)
        outcome = await client.fetch("https://example.com/page")

        assert outcome.failure is FetchFailureKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_get_requires_context(self):
        """Test that get() outside the context manager fails loudly."""
        client = AsyncHttpClient()
        with pytest.raises(RuntimeError):
            await client.get("https://example.com")

    @pytest.mark.asyncio
    async def test_context_manager_manages_session(self):
        """Test that the session is created and closed."""
        client = AsyncHttpClient()
        async with client:
            assert client._session is not None
        assert client._session is None


class TestDecodeContent:
    """Tests for response decoding."""

    def test_declared_charset(self):
        client = AsyncHttpClient()
        content = "Grüße".encode("latin-1")
        assert client._decode_content(content, "text/html; charset=ISO-8859-1") == "Grüße"

    def test_bad_declared_charset_falls_back(self):
        client = AsyncHttpClient()
        assert client._decode_content(b"plain text", "text/html; charset=no-such-codec") == "plain text"

    def test_empty_content(self):
        client = AsyncHttpClient()
        assert client._decode_content(b"", "") == ""
