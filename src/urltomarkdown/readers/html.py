"""Generic HTML page reader."""

from __future__ import annotations

import logging
from typing import Optional

from ..conversion.extractor import Region
from ..conversion.markdown import DocumentConverter, document_title
from ..conversion.sanitize import parse_document
from ..http.protocols import HttpClient
from ..models.options import ConversionOptions
from ..models.outcome import FAILURE_MESSAGE, Outcome
from .base import fetch_failure

logger = logging.getLogger(__name__)


class HtmlReader:
    """
    Reads any HTML page and converts the whole document.

    Upstream HTTP errors are reported as 502 with the status code,
    timeouts and network errors as 504, and markup that cannot be
    parsed as 400.
    """

    def __init__(self, client: HttpClient, converter: Optional[DocumentConverter] = None):
        self._client = client
        self._converter = converter or DocumentConverter()

    async def read(self, url: str, options: ConversionOptions) -> Outcome:
        outcome = await self._client.fetch(url)
        if not outcome.ok:
            return fetch_failure(outcome, distinguish_status=True)

        try:
            soup = parse_document(outcome.body or "")
            markdown = self._converter.convert(soup, Region.DOCUMENT, options, url)
        except Exception as e:
            logger.error(f"Could not convert {url}: {e}")
            return Outcome.failure(400, FAILURE_MESSAGE)

        return Outcome.success(markdown, title=document_title(soup))
