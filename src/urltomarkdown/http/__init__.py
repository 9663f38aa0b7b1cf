"""HTTP fetch engine for urltomarkdown."""

from .client import AsyncHttpClient, ContentTooLargeError
from .protocols import HttpClient, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "ContentTooLargeError",
    "HttpClient",
    "HttpResponse",
]
