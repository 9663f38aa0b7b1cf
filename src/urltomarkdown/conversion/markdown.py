"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin

import html2text
from bs4 import BeautifulSoup, Tag

from ..models.options import ConversionOptions
from .extractor import MainContentExtractor, Region

logger = logging.getLogger(__name__)


class HtmlToMarkdown:
    """
    Converts HTML content to clean Markdown.

    Uses html2text with settings tuned for readable documents. A fresh
    html2text.HTML2Text is built for each call, so one instance can be
    shared by concurrent requests with different link settings.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://docs.example.com/page")
    """

    def __init__(
        self,
        body_width: int = 0,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        escape_snob: bool = False,
        mark_code: bool = False,
    ):
        """
        Initialize the Markdown converter.

        Args:
            body_width: Max line width (0 = no wrapping)
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            escape_snob: Escape special Markdown chars
            mark_code: Wrap code blocks in [code] markers
        """
        self._body_width = body_width
        self._ignore_images = ignore_images
        self._ignore_tables = ignore_tables
        self._unicode_snob = unicode_snob
        self._escape_snob = escape_snob
        self._mark_code = mark_code

    def _build_converter(self, url: str, ignore_links: bool) -> html2text.HTML2Text:
        converter = html2text.HTML2Text(baseurl=url)
        converter.body_width = self._body_width

        # Link handling
        converter.ignore_links = ignore_links
        converter.inline_links = True
        converter.wrap_links = False
        converter.protect_links = False

        # Content handling
        converter.ignore_images = self._ignore_images
        converter.ignore_tables = self._ignore_tables
        converter.unicode_snob = self._unicode_snob
        converter.escape_snob = self._escape_snob
        converter.mark_code = self._mark_code
        converter.default_image_alt = ""
        converter.single_line_break = False
        return converter

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        markdown = markdown.strip()
        return markdown + "\n" if markdown else ""

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str = "", ignore_links: bool = False) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links
            ignore_links: Render link text without destinations

        Returns:
            Markdown string, empty when the HTML has no text
        """
        try:
            markdown = self._build_converter(url, ignore_links).handle(html)
            markdown = self._clean_output(markdown)
            if url and not ignore_links:
                markdown = self._fix_relative_links(markdown, url)
            return markdown

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e}")
            # Return plain text as fallback
            soup = BeautifulSoup(html, "html.parser")
            text: str = soup.get_text(separator="\n").strip()
            return text + "\n" if text else ""


def document_title(soup: BeautifulSoup) -> Optional[str]:
    """Return the stripped <title> text of a document, if any."""
    title = soup.find("title")
    if not isinstance(title, Tag):
        return None
    text = title.get_text(strip=True)
    return text or None


class DocumentConverter:
    """
    Converts a parsed document (or one region of it) to Markdown.

    Example:
        converter = DocumentConverter()
        soup = parse_document(html)
        markdown = converter.convert(soup, Region.DOCUMENT, ConversionOptions(), url)
    """

    def __init__(
        self,
        extractor: Optional[MainContentExtractor] = None,
        markdown: Optional[HtmlToMarkdown] = None,
    ):
        self._extractor = extractor or MainContentExtractor()
        self._markdown = markdown or HtmlToMarkdown()

    def convert(
        self,
        soup: BeautifulSoup,
        region: Region,
        options: ConversionOptions,
        url: str = "",
    ) -> str:
        """
        Convert a document tree to Markdown.

        Args:
            soup: Parsed document; it is not modified
            region: Subtree to convert
            options: Conversion options for this pass
            url: Source URL for resolving relative links

        Returns:
            Markdown text; empty for an empty tree or a missing region
        """
        fragment = self._extractor.select_region(soup, region)

        if options.improve_readability:
            fragment = self._extractor.clean(fragment, url, find_main=region is Region.DOCUMENT)
        else:
            self._extractor.resolve_links(fragment, url)

        markdown = self._markdown.convert(str(fragment), url, ignore_links=options.ignore_links)

        if options.inline_title:
            title = document_title(soup)
            if title:
                markdown = f"# {title}\n{markdown}"

        return markdown
