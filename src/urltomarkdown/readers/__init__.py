"""Extraction strategies for urltomarkdown."""

from .apple import AppleReader
from .base import Reader, fetch_failure
from .html import HtmlReader
from .selector import (
    APPLE_DEV_PREFIX,
    STACKOVERFLOW_PREFIX,
    ReaderKind,
    ignore_post,
    reader_for_url,
    select_reader_kind,
)
from .stack import EMPTY_ANSWERS_MARKER, StackReader, has_no_answers, merge_answers

__all__ = [
    # Protocols
    "Reader",
    # Implementations
    "AppleReader",
    "HtmlReader",
    "StackReader",
    # Dispatch
    "APPLE_DEV_PREFIX",
    "STACKOVERFLOW_PREFIX",
    "ReaderKind",
    "ignore_post",
    "reader_for_url",
    "select_reader_kind",
    # Helpers
    "EMPTY_ANSWERS_MARKER",
    "fetch_failure",
    "has_no_answers",
    "merge_answers",
]
