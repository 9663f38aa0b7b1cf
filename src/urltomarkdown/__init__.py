"""
urltomarkdown - Convert web pages, Apple documentation and StackOverflow
questions to markdown.

Usage:
    from urltomarkdown import ConversionOptions, UrlToMarkdown

    async with UrlToMarkdown() as service:
        outcome = await service.convert_url(
            "https://example.com",
            ConversionOptions(inline_title=True),
        )
        print(outcome.status_code, outcome.body)
"""

__version__ = "1.0.0"

from .batch import SEPARATOR, BatchConverter, parse_urls
from .delivery import FutureEmitter, deliver, read_markdown
from .http import AsyncHttpClient
from .models import (
    ConversionOptions,
    ExtractionError,
    FetchFailureKind,
    FetchOutcome,
    Outcome,
    ServiceConfig,
)
from .readers import ReaderKind, reader_for_url, select_reader_kind
from .service import RESPONSE_HEADERS, UrlToMarkdown, response_headers

__all__ = [
    "__version__",
    # Core
    "UrlToMarkdown",
    "BatchConverter",
    "AsyncHttpClient",
    # Models
    "ConversionOptions",
    "ServiceConfig",
    "FetchOutcome",
    "FetchFailureKind",
    "Outcome",
    "ExtractionError",
    # Dispatch
    "ReaderKind",
    "reader_for_url",
    "select_reader_kind",
    # Delivery
    "FutureEmitter",
    "deliver",
    "read_markdown",
    # Batch
    "SEPARATOR",
    "parse_urls",
    # Responses
    "RESPONSE_HEADERS",
    "response_headers",
]
