"""Protocol definitions for the fetch engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..models.outcome import FetchOutcome


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response read in full by the fetch engine.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str
    headers: dict[str, str]
    url: str


class HttpClient(Protocol):
    """
    Protocol for the fetch engine used by readers.

    Readers only need a single classified attempt per URL, so the
    protocol exposes fetch() rather than raw request methods. Tests
    substitute an AsyncMock returning canned FetchOutcome values.
    """

    async def fetch(self, url: str) -> FetchOutcome:
        """
        Fetch a URL once within the configured deadline.

        Args:
            url: Absolute URL to retrieve

        Returns:
            FetchOutcome carrying the decoded body or the failure kind
        """
        ...
