"""Async HTTP fetch engine with a hard deadline."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Optional

import aiohttp
from charset_normalizer import from_bytes as detect_encoding

from ..models.outcome import FetchOutcome
from .protocols import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (urltomarkdown/1.0)"


class ContentTooLargeError(ValueError):
    """Response body exceeded the configured size limit."""


class AsyncHttpClient:
    """
    Async HTTP client performing one time-bounded GET per fetch.

    Features:
    - A single deadline covering connect, headers and the full body read
    - Typed outcomes instead of exceptions (timeout, network error, status)
    - Content size limits to prevent memory exhaustion
    - Intelligent encoding detection

    There are no retries. When the deadline fires the in-flight request is
    cancelled and whatever it would have produced is discarded.

    Example:
        async with AsyncHttpClient(timeout=15) as client:
            outcome = await client.fetch("https://example.com")
            if outcome.ok:
                print(outcome.body)
    """

    DEFAULT_TIMEOUT = 15.0
    MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_content_size: int = MAX_CONTENT_SIZE,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            timeout: Deadline in seconds for the whole fetch
            max_content_size: Maximum response size in bytes
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or https://)
        """
        self._timeout = timeout
        self._max_content_size = max_content_size
        self._proxy = proxy
        self._user_agent = user_agent or DEFAULT_USER_AGENT

        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(headers={"User-Agent": self._user_agent})
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _decode_content(self, content: bytes, content_type: str) -> str:
        """
        Decode content with intelligent encoding detection.

        Fallback chain:
        1. Content-Type header charset
        2. charset-normalizer detection
        3. UTF-8 with replacement
        """
        encoding = None
        if content_type:
            for part in content_type.split(";"):
                part = part.strip()
                if part.lower().startswith("charset="):
                    encoding = part.split("=", 1)[1].strip().strip("\"'")
                    break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        if content:
            best_match = detect_encoding(content).best()
            if best_match:
                logger.debug(f"Detected encoding: {best_match.encoding}")
                return str(best_match)

        return content.decode("utf-8", errors="replace")

    async def get(self, url: str) -> HttpResponse:
        """
        Perform a single HTTP GET and read the whole body.

        Args:
            url: The URL to fetch

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            aiohttp.ClientError: On transport errors
            ContentTooLargeError: On content size exceeded
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        async with self._session.get(
            url,
            timeout=aiohttp.ClientTimeout(total=self._timeout),
            proxy=self._proxy,
        ) as response:
            content_length = response.headers.get("Content-Length")
            if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
                raise ContentTooLargeError(f"Content too large: {content_length} bytes")

            content = b""
            async for chunk in response.content.iter_chunked(8192):
                content += chunk
                if len(content) > self._max_content_size:
                    raise ContentTooLargeError(f"Content size limit exceeded: >{self._max_content_size} bytes")

            return HttpResponse(
                status_code=response.status,
                content=content,
                content_type=response.headers.get("Content-Type", ""),
                headers=dict(response.headers),
                url=str(response.url),
            )

    async def fetch(self, url: str) -> FetchOutcome:
        """
        Fetch a URL once and classify the result.

        The deadline is enforced around the whole get() call with
        asyncio.wait_for, so a response that would complete after the
        deadline is cancelled and reported as a timeout.

        Args:
            url: The URL to fetch

        Returns:
            FetchOutcome.success with the decoded body, or a typed failure
        """
        try:
            response = await asyncio.wait_for(self.get(url), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching {url} after {self._timeout}s")
            return FetchOutcome.timeout()
        except (aiohttp.ClientError, OSError, ValueError) as e:
            # ValueError covers oversized bodies and IDNA failures on bad hostnames
            logger.warning(f"Network error fetching {url}: {e}")
            return FetchOutcome.network_error()

        if not 200 <= response.status_code < 300:
            logger.warning(f"Got {response.status_code} for {url}")
            return FetchOutcome.http_status(response.status_code)

        logger.debug(f"Fetched {url}: {len(response.content)} bytes")
        return FetchOutcome.success(self._decode_content(response.content, response.content_type))
