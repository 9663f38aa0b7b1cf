"""URL-prefix dispatch to extraction strategies."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..conversion.markdown import DocumentConverter
from ..http.protocols import HttpClient
from .apple import AppleReader
from .base import Reader
from .html import HtmlReader
from .stack import StackReader

APPLE_DEV_PREFIX = "https://developer.apple.com"
STACKOVERFLOW_PREFIX = "https://stackoverflow.com/questions"


class ReaderKind(str, Enum):
    """The fixed set of extraction strategies."""

    GENERIC = "generic"
    STRUCTURED_API = "structured_api"
    DUAL_REGION = "dual_region"


# Evaluated in order; the first literal prefix match wins
PREFIX_RULES: tuple[tuple[str, ReaderKind], ...] = (
    (APPLE_DEV_PREFIX, ReaderKind.STRUCTURED_API),
    (STACKOVERFLOW_PREFIX, ReaderKind.DUAL_REGION),
)


def select_reader_kind(url: str) -> ReaderKind:
    """Pick the strategy for a URL; GENERIC when no prefix matches."""
    for prefix, kind in PREFIX_RULES:
        if url.startswith(prefix):
            return kind
    return ReaderKind.GENERIC


def reader_for_url(
    url: str,
    client: HttpClient,
    converter: Optional[DocumentConverter] = None,
) -> Reader:
    """
    Build the reader for a URL.

    Args:
        url: URL that will be read
        client: Fetch engine shared by all readers of a request
        converter: Optional DocumentConverter for HTML readers

    Returns:
        AppleReader, StackReader or HtmlReader
    """
    kind = select_reader_kind(url)
    if kind is ReaderKind.STRUCTURED_API:
        return AppleReader(client)
    if kind is ReaderKind.DUAL_REGION:
        return StackReader(client, converter)
    return HtmlReader(client, converter)


def ignore_post(url: Optional[str]) -> bool:
    """True when posted markup for this URL must be ignored and the URL fetched instead."""
    if not url:
        return False
    return select_reader_kind(url) is ReaderKind.DUAL_REGION
