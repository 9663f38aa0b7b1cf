"""Markup sanitization ahead of tree building."""

import re

from bs4 import BeautifulSoup

_BLOCK_PATTERNS = (
    re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL),
)


def strip_style_and_script_blocks(html: str) -> str:
    """
    Remove <style> and <script> regions from raw markup.

    Removal is repeated until nothing matches, so a region assembled
    from the remains of a removed one is stripped too and the function
    is idempotent.

    Args:
        html: Raw markup

    Returns:
        Markup without style or script regions
    """
    while True:
        stripped = html
        for pattern in _BLOCK_PATTERNS:
            stripped = pattern.sub("", stripped)
        if stripped == html:
            return stripped
        html = stripped


def parse_document(html: str) -> BeautifulSoup:
    """Sanitize markup and build a document tree from it."""
    return BeautifulSoup(strip_style_and_script_blocks(html), "html.parser")
