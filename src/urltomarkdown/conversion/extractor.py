"""Region selection and readability cleanup for parsed documents."""

import logging
from enum import Enum
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


class Region(str, Enum):
    """Subtree of a document that a conversion is scoped to."""

    DOCUMENT = ""
    QUESTION = "question"
    ANSWERS = "answers"


# Elements that typically contain main content
CONTENT_SELECTORS = [
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".main-content",
    ".post-content",
    ".article-content",
    ".documentation",
    ".docs-content",
    "#content",
    "#main-content",
    "#documentation",
]

# Elements to remove (navigation, ads, etc.)
REMOVE_SELECTORS = [
    "nav",
    "body > header",
    "footer",
    "aside",
    ".nav",
    ".navbar",
    ".sidebar",
    ".footer",
    ".menu",
    ".advertisement",
    ".ads",
    ".social-share",
    ".related-posts",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    '[aria-hidden="true"]',
    "noscript",
    "iframe",
    "svg",
]

# Document metadata that must not render as text when there is no <body>
HEAD_ELEMENTS = ["head", "title", "meta", "link", "base"]

# Minimum text length for a content container to win over <body>
MIN_CONTENT_LENGTH = 100


class MainContentExtractor:
    """
    Scopes a document tree to a region and strips boilerplate from it.

    The extractor never mutates the tree it is given. select_region()
    returns a re-parsed copy, so one document can be converted several
    times with different regions.

    Example:
        extractor = MainContentExtractor()
        fragment = extractor.select_region(soup, Region.QUESTION)
        fragment = extractor.clean(fragment, "https://example.com/q/1", find_main=False)
    """

    def __init__(
        self,
        content_selectors: Optional[list[str]] = None,
        remove_selectors: Optional[list[str]] = None,
    ):
        """
        Initialize the content extractor.

        Args:
            content_selectors: CSS selectors for main content (overrides defaults)
            remove_selectors: CSS selectors for elements to remove (extends defaults)
        """
        self._content_selectors = content_selectors or CONTENT_SELECTORS
        self._remove_selectors = list(REMOVE_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)

    def select_region(self, soup: BeautifulSoup, region: Region) -> BeautifulSoup:
        """
        Copy the subtree a conversion should run over.

        Args:
            soup: Parsed document
            region: DOCUMENT for the body (or the tree without head metadata),
                otherwise the element with that id

        Returns:
            Independent tree; empty when the region does not exist
        """
        if region is Region.DOCUMENT:
            element = soup.find("body")
            if not isinstance(element, Tag):
                fragment = BeautifulSoup(str(soup), "html.parser")
                for head in fragment.find_all(HEAD_ELEMENTS):
                    head.extract()
                return fragment
        else:
            element = soup.find(id=region.value)
            if not isinstance(element, Tag):
                logger.debug(f"Region #{region.value} not found")
                return BeautifulSoup("", "html.parser")

        return BeautifulSoup(str(element), "html.parser")

    def _find_main_content(self, soup: BeautifulSoup) -> Optional[Tag]:
        """Find the main content element using selectors."""
        for selector in self._content_selectors:
            element = soup.select_one(selector)
            if element and len(element.get_text(strip=True)) > MIN_CONTENT_LENGTH:
                return element
        return None

    def _remove_unwanted(self, element: BeautifulSoup) -> None:
        """Remove navigation, ads, and other unwanted elements."""
        for selector in self._remove_selectors:
            for el in element.select(selector):
                el.decompose()

    def resolve_links(self, element: BeautifulSoup, base_url: str) -> None:
        """Convert relative URLs to absolute URLs in place."""
        if not base_url:
            return

        for tag in element.find_all("a", href=True):
            href = tag["href"]
            if href.startswith("#"):
                continue
            if not href.startswith(("http://", "https://", "//", "mailto:", "tel:")):
                tag["href"] = urljoin(base_url, href)

        for tag in element.find_all(src=True):
            src = tag["src"]
            if not src.startswith(("http://", "https://", "//", "data:")):
                tag["src"] = urljoin(base_url, src)

    def clean(self, fragment: BeautifulSoup, url: str, find_main: bool = True) -> BeautifulSoup:
        """
        Apply readability cleanup to a fragment.

        Args:
            fragment: Tree returned by select_region()
            url: Source URL for resolving relative links
            find_main: Narrow to the main content container first

        Returns:
            Cleaned tree (a new tree when narrowed, otherwise ``fragment``)
        """
        if find_main:
            main_content = self._find_main_content(fragment)
            if main_content is not None:
                fragment = BeautifulSoup(str(main_content), "html.parser")

        self._remove_unwanted(fragment)
        self.resolve_links(fragment, url)
        return fragment
