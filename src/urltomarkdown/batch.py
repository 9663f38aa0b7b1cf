"""Sequential multi-URL conversion with abort on first failure."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Optional, Union

from .delivery import read_markdown
from .http.protocols import HttpClient
from .models.options import ConversionOptions
from .models.outcome import FAILURE_MESSAGE, ExtractionError, Outcome
from .security.url_validator import UrlValidator

logger = logging.getLogger(__name__)

SEPARATOR = "========="
NO_URLS_MESSAGE = "Please provide at least one URL via the urls parameter."
INVALID_URLS_MESSAGE = "Please specify valid URLs. Invalid value: {url}"


def parse_urls(value: Union[str, Iterable[str], None]) -> list[str]:
    """
    Split a urls parameter into individual URLs.

    Accepts a whitespace separated string or a list of such strings.
    Non-string list entries and empty values are dropped.
    """
    if not value:
        return []

    entries = [value] if isinstance(value, str) else [entry for entry in value if isinstance(entry, str)]
    urls: list[str] = []
    for entry in entries:
        urls.extend(part.strip() for part in re.split(r"\s+", entry))
    return [url for url in urls if url]


def format_section(url: str, markdown: str) -> str:
    """Format one provenance section of batch output."""
    return f"{SEPARATOR} {url}\n\n{markdown.strip()}"


class BatchConverter:
    """
    Converts several URLs into one document.

    URLs are validated up front, then read strictly one after another.
    The first failure aborts the batch and nothing produced before it is
    returned.

    Example:
        batch = BatchConverter(client)
        outcome = await batch.run(["https://a.example", "https://b.example"], options)
    """

    def __init__(self, client: HttpClient, validator: Optional[UrlValidator] = None):
        self._client = client
        self._validator = validator or UrlValidator()

    def _first_invalid(self, urls: Sequence[str]) -> Optional[str]:
        for url in urls:
            if not self._validator.is_valid(url):
                return url
        return None

    async def run(self, urls: Sequence[str], options: ConversionOptions) -> Outcome:
        """
        Convert all URLs in order.

        Args:
            urls: URLs to convert
            options: Conversion options applied to every URL

        Returns:
            200 with the joined sections, or the first failure
        """
        if not urls:
            return Outcome.failure(400, NO_URLS_MESSAGE)

        invalid = self._first_invalid(urls)
        if invalid is not None:
            logger.info(f"Rejecting batch, invalid URL: {invalid}")
            return Outcome.failure(400, INVALID_URLS_MESSAGE.format(url=invalid))

        sections: list[str] = []
        try:
            for url in urls:
                markdown = await read_markdown(url, options, self._client)
                sections.append(format_section(url, markdown))
        except ExtractionError as e:
            logger.warning(f"Batch aborted at {url}: {e.status_code}")
            return Outcome.failure(e.status_code, e.body or FAILURE_MESSAGE)
        except Exception as e:
            logger.error(f"Batch failed at {url}: {e}")
            return Outcome.failure(500, FAILURE_MESSAGE)

        logger.debug(f"Converted batch of {len(sections)} URLs")
        return Outcome.success("\n\n".join(sections) + "\n")
