"""Content conversion for urltomarkdown (HTML and DocC JSON to Markdown)."""

from .apple_docs import AppleDocConverter, dev_doc_url
from .extractor import MainContentExtractor, Region
from .markdown import DocumentConverter, HtmlToMarkdown, document_title
from .sanitize import parse_document, strip_style_and_script_blocks

__all__ = [
    "AppleDocConverter",
    "DocumentConverter",
    "HtmlToMarkdown",
    "MainContentExtractor",
    "Region",
    "dev_doc_url",
    "document_title",
    "parse_document",
    "strip_style_and_script_blocks",
]
