"""High-level conversion API used by request handlers and the CLI."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Optional, Union
from urllib.parse import quote

from .batch import BatchConverter, parse_urls
from .conversion.extractor import Region
from .conversion.markdown import DocumentConverter, document_title
from .conversion.sanitize import parse_document
from .delivery import read_outcome
from .http.client import AsyncHttpClient
from .http.protocols import HttpClient
from .models.config import ServiceConfig
from .models.options import ConversionOptions
from .models.outcome import PARSE_FAILURE_MESSAGE, Outcome
from .readers.selector import ignore_post
from .security.url_validator import UrlValidator

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Please specify a valid url query parameter"
MISSING_HTML_MESSAGE = "Please provide a POST parameter called html"

RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST",
    "Access-Control-Expose-Headers": "X-Title",
    "Content-Type": "text/markdown",
}


def response_headers(outcome: Outcome) -> dict[str, str]:
    """Headers to send with an outcome; adds X-Title when a title is known."""
    headers = dict(RESPONSE_HEADERS)
    if outcome.ok and outcome.title:
        headers["X-Title"] = quote(outcome.title, safe="")
    return headers


class UrlToMarkdown:
    """
    Entry point for single, posted and batch conversions.

    Owns the fetch engine for its lifetime. Every method returns an
    Outcome that a web layer can send unchanged with response_headers().

    Example:
        async with UrlToMarkdown(ServiceConfig()) as service:
            outcome = await service.convert_url(
                "https://example.com",
                ConversionOptions.from_query(request.query),
            )
            status, body = outcome.as_response()
    """

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        client: Optional[HttpClient] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            config: Service configuration (defaults when None)
            client: Fetch engine to use instead of an owned AsyncHttpClient
        """
        self.config = config or ServiceConfig()
        self._client = client
        self._owned_client: Optional[AsyncHttpClient] = None
        self._validator = UrlValidator(
            allowed_schemes=set(self.config.validation.allowed_schemes),
            block_private_ips=self.config.validation.block_private_ips,
        )
        self._converter = DocumentConverter()

    async def __aenter__(self) -> UrlToMarkdown:
        if self._client is None:
            network = self.config.network
            self._owned_client = AsyncHttpClient(
                timeout=network.timeout,
                max_content_size=network.max_content_size,
                user_agent=network.user_agent,
                proxy=network.proxy,
            )
            await self._owned_client.__aenter__()
            self._client = self._owned_client
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        if self._owned_client is not None:
            await self._owned_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_client = None
            self._client = None

    @property
    def client(self) -> HttpClient:
        if self._client is None:
            raise RuntimeError("Service not initialized. Use 'async with' context manager.")
        return self._client

    async def convert_url(self, url: str, options: ConversionOptions) -> Outcome:
        """
        Fetch and convert one URL with the strategy its prefix selects.

        Args:
            url: URL to convert
            options: Conversion options

        Returns:
            Outcome of the selected reader, or 400 for an invalid URL
        """
        if not self._validator.is_valid(url):
            return Outcome.failure(400, INVALID_URL_MESSAGE)
        return await read_outcome(url, options, self.client)

    async def convert_html(
        self,
        html: Optional[str],
        url: Optional[str],
        options: ConversionOptions,
    ) -> Outcome:
        """
        Convert markup posted by a client.

        Q&A page URLs are fetched instead of using the posted markup, since
        they need the dual-region reader. Anything else goes through the
        generic document converter.

        Args:
            html: Posted markup
            url: Originating URL, used for link resolution and dispatch
            options: Conversion options

        Returns:
            200 with Markdown, or 400 when markup is missing or unparseable
        """
        if ignore_post(url):
            return await self.convert_url(url or "", options)

        if not html:
            return Outcome.failure(400, MISSING_HTML_MESSAGE)

        try:
            soup = parse_document(html)
            markdown = self._converter.convert(soup, Region.DOCUMENT, options, url or "")
        except Exception as e:
            logger.error(f"Could not parse posted document: {e}")
            return Outcome.failure(400, PARSE_FAILURE_MESSAGE)

        return Outcome.success(markdown, title=document_title(soup))

    async def convert_batch(
        self,
        urls: Union[str, Iterable[str], None],
        options: ConversionOptions,
    ) -> Outcome:
        """
        Convert several URLs into one document.

        Args:
            urls: Whitespace separated string or list of URLs
            options: Conversion options applied to every URL

        Returns:
            Outcome of BatchConverter.run()
        """
        batch = BatchConverter(self.client, self._validator)
        return await batch.run(parse_urls(urls), options)
