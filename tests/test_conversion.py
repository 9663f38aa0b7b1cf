"""Tests for sanitization and HTML conversion."""

import pytest
from bs4 import BeautifulSoup
from urltomarkdown.conversion import (
    DocumentConverter,
    HtmlToMarkdown,
    MainContentExtractor,
    Region,
    document_title,
    parse_document,
    strip_style_and_script_blocks,
)
from urltomarkdown.models import ConversionOptions

LONG_TEXT = "This paragraph is long enough to count as the main content of the page. " * 3


class TestStripStyleAndScriptBlocks:
    """Tests for the sanitizer."""

    def test_removes_blocks(self):
        """Test that style and script regions are removed."""
        html = '<p>Keep</p><style>.bad { color: red; }</style><script type="text/javascript">alert("x")</script>'
        result = strip_style_and_script_blocks(html)

        assert result == "<p>Keep</p>"

    def test_case_insensitive_and_multiline(self):
        """Test upper-case tags spanning several lines."""
        html = "<P>Keep</P>\n<SCRIPT>\nvar a = 1;\nvar b = 2;\n</SCRIPT >\n<Style media='all'>\nbody {}\n</Style>"
        result = strip_style_and_script_blocks(html)

        assert "var a" not in result
        assert "body {}" not in result
        assert "<P>Keep</P>" in result

    def test_nested_remnants_removed(self):
        """Test that a block assembled from removed remains is also stripped."""
        html = "<scr<script>x</script>ipt>alert(1)</script><p>ok</p>"
        result = strip_style_and_script_blocks(html)

        assert "alert" not in result
        assert result == "<p>ok</p>"

    @pytest.mark.parametrize(
        "html",
        [
            "<p>plain</p>",
            "<style>a{}</style><p>x</p><script>y()</script>",
            "<scr<script>x</script>ipt>alert(1)</script>",
            "",
        ],
    )
    def test_idempotent(self, html):
        """Test that sanitizing twice equals sanitizing once."""
        once = strip_style_and_script_blocks(html)
        assert strip_style_and_script_blocks(once) == once

    def test_parse_document_sanitizes(self):
        """Test that parse_document never exposes script text."""
        soup = parse_document("<html><body><script>evil()</script><p>Hi</p></body></html>")
        assert "evil" not in soup.get_text()
        assert soup.find("script") is None


class TestMainContentExtractor:
    """Tests for region selection and readability cleanup."""

    def test_select_named_region(self):
        """Test selecting a region by id."""
        soup = parse_document('<div id="question"><p>Q text</p></div><div id="answers"><p>A text</p></div>')
        fragment = MainContentExtractor().select_region(soup, Region.QUESTION)

        assert "Q text" in fragment.get_text()
        assert "A text" not in fragment.get_text()

    def test_missing_region_is_empty(self):
        """Test that a missing region yields an empty tree."""
        soup = parse_document("<p>No regions here</p>")
        fragment = MainContentExtractor().select_region(soup, Region.ANSWERS)

        assert fragment.get_text() == ""

    def test_select_region_copies(self):
        """Test that cleaning a region does not modify the document."""
        soup = parse_document("<body><nav>Menu</nav><p>Body</p></body>")
        extractor = MainContentExtractor()
        fragment = extractor.select_region(soup, Region.DOCUMENT)
        extractor.clean(fragment, "https://example.com")

        assert "Menu" not in fragment.get_text()
        assert soup.find("nav") is not None

    def test_clean_narrows_to_main_content(self):
        """Test extraction from the article element."""
        soup = parse_document(
            f"<body><div class='promo'>Promo banner</div><article><p>{LONG_TEXT}</p></article></body>"
        )
        extractor = MainContentExtractor()
        fragment = extractor.clean(extractor.select_region(soup, Region.DOCUMENT), "https://example.com")

        assert "Promo banner" not in fragment.get_text()
        assert "main content" in fragment.get_text()

    def test_resolves_relative_links(self):
        """Test that relative links are resolved."""
        soup = parse_document('<body><a href="/other-page">Link</a><img src="pic.png"></body>')
        extractor = MainContentExtractor()
        fragment = extractor.clean(extractor.select_region(soup, Region.DOCUMENT), "https://example.com/dir/page")

        assert fragment.find("a")["href"] == "https://example.com/other-page"
        assert fragment.find("img")["src"] == "https://example.com/dir/pic.png"


class TestHtmlToMarkdown:
    """Tests for HtmlToMarkdown converter."""

    def test_converts_headings(self):
        """Test heading conversion."""
        result = HtmlToMarkdown().convert("<h1>Title</h1><h2>Subtitle</h2>", "https://example.com")

        assert "# Title" in result
        assert "## Subtitle" in result

    def test_converts_links(self):
        """Test link conversion."""
        result = HtmlToMarkdown().convert('<a href="https://example.com/page">Link Text</a>', "https://example.com")

        assert "[Link Text](https://example.com/page)" in result

    def test_ignore_links(self):
        """Test that ignored links keep their text only."""
        result = HtmlToMarkdown().convert(
            '<p>See <a href="https://example.com/page">Link Text</a> now</p>',
            "https://example.com",
            ignore_links=True,
        )

        assert "Link Text" in result
        assert "https://example.com/page" not in result

    def test_collapses_blank_lines(self):
        """Test that output has no runs of blank lines."""
        result = HtmlToMarkdown().convert("<p>One</p><br><br><br><br><p>Two</p>")

        assert "\n\n\n" not in result
        assert result.endswith("\n")

    def test_empty_html(self):
        """Test that empty HTML converts to an empty string."""
        assert HtmlToMarkdown().convert("") == ""


class TestDocumentConverter:
    """Tests for DocumentConverter."""

    def test_whole_document(self):
        """Test converting a simple document."""
        soup = parse_document("<html><body><h1>Title</h1><p>Content</p></body></html>")
        result = DocumentConverter().convert(soup, Region.DOCUMENT, ConversionOptions(), "https://example.com")

        assert "# Title" in result
        assert "Content" in result

    def test_inline_title(self):
        """Test that inline_title prepends the document title."""
        soup = parse_document("<html><head><title>My Page</title></head><body><p>Hello</p></body></html>")
        result = DocumentConverter().convert(
            soup, Region.DOCUMENT, ConversionOptions(inline_title=True), "https://example.com"
        )

        assert result.startswith("# My Page\n")
        assert "Hello" in result

    def test_no_inline_title_by_default(self):
        """Test that the title is not inlined by default."""
        soup = parse_document("<html><head><title>My Page</title></head><body><p>Hello</p></body></html>")
        result = DocumentConverter().convert(soup, Region.DOCUMENT, ConversionOptions(), "https://example.com")

        assert "My Page" not in result

    def test_readability_removes_navigation(self):
        """Test that navigation is dropped only when readability is on."""
        html = f"<html><body><nav>Site navigation</nav><article><p>{LONG_TEXT}</p></article></body></html>"
        converter = DocumentConverter()

        clean = converter.convert(parse_document(html), Region.DOCUMENT, ConversionOptions(), "https://example.com")
        raw = converter.convert(
            parse_document(html),
            Region.DOCUMENT,
            ConversionOptions(improve_readability=False),
            "https://example.com",
        )

        assert "Site navigation" not in clean
        assert "main content" in clean
        assert "Site navigation" in raw

    def test_region_scoped(self):
        """Test converting a single region."""
        soup = parse_document('<div id="question"><p>Q text</p></div><div id="answers"><p>A text</p></div>')
        converter = DocumentConverter()

        question = converter.convert(soup, Region.QUESTION, ConversionOptions())
        answers = converter.convert(soup, Region.ANSWERS, ConversionOptions())

        assert "Q text" in question and "A text" not in question
        assert "A text" in answers and "Q text" not in answers

    def test_conversion_does_not_modify_tree(self):
        """Test that converting twice gives the same result."""
        soup = parse_document("<body><nav>Menu</nav><p>Body text</p></body>")
        converter = DocumentConverter()

        first = converter.convert(soup, Region.DOCUMENT, ConversionOptions())
        second = converter.convert(soup, Region.DOCUMENT, ConversionOptions(improve_readability=False))

        assert "Menu" not in first
        assert "Menu" in second

    @pytest.mark.parametrize("region", list(Region))
    def test_empty_document(self, region):
        """Test that an empty tree converts to whitespace only."""
        result = DocumentConverter().convert(
            BeautifulSoup("", "html.parser"), region, ConversionOptions(inline_title=True)
        )
        assert result.strip() == ""

    def test_missing_head_and_body(self):
        """Test a fragment with neither head nor body."""
        result = DocumentConverter().convert(parse_document("<p>just text</p>"), Region.DOCUMENT, ConversionOptions())
        assert "just text" in result

    def test_fragment_title_rendered_once(self):
        """Test that a bodiless fragment's title is not repeated as text."""
        soup = parse_document("<title>T</title><p>hello</p>")
        converter = DocumentConverter()

        inlined = converter.convert(soup, Region.DOCUMENT, ConversionOptions(inline_title=True))
        plain = converter.convert(soup, Region.DOCUMENT, ConversionOptions(improve_readability=False))

        assert inlined == "# T\nhello\n"
        assert "T" not in plain
        assert "hello" in plain

    def test_fragment_head_metadata_dropped(self):
        """Test that head elements of a bodiless document are not converted."""
        soup = parse_document('<head><title>Doc</title><meta name="x" content="y"></head><p>Body text</p>')
        fragment = MainContentExtractor().select_region(soup, Region.DOCUMENT)

        assert fragment.find(["head", "title", "meta"]) is None
        assert "Body text" in fragment.get_text()
        assert soup.find("title") is not None


class TestDocumentTitle:
    """Tests for document_title."""

    def test_title(self):
        assert document_title(parse_document("<title>  Spaced  </title>")) == "Spaced"

    def test_missing_or_blank(self):
        assert document_title(parse_document("<p>x</p>")) is None
        assert document_title(parse_document("<title> </title>")) is None
