"""Markdown rendering of Apple developer documentation JSON (DocC)."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from ..models.options import ConversionOptions

logger = logging.getLogger(__name__)

APPLE_DEV_BASE = "https://developer.apple.com"
APPLE_DOCUMENTATION_PREFIX = APPLE_DEV_BASE + "/documentation"
APPLE_JSON_PREFIX = APPLE_DEV_BASE + "/tutorials/data/documentation"


def dev_doc_url(url: str) -> str:
    """
    Map a documentation page URL to its JSON data URL.

    Example:
        >>> dev_doc_url("https://developer.apple.com/documentation/swiftui/view/")
        'https://developer.apple.com/tutorials/data/documentation/swiftui/view.json'
    """
    parts = urlsplit(url)
    page_url = urlunsplit((parts.scheme, parts.netloc, parts.path.rstrip("/"), "", ""))
    return page_url.replace(APPLE_DOCUMENTATION_PREFIX, APPLE_JSON_PREFIX, 1) + ".json"


class AppleDocConverter:
    """
    Renders a DocC JSON document as Markdown.

    Works directly on the JSON schema: metadata, abstract, declarations,
    content blocks and topic sections. Unknown block types are skipped.

    Example:
        converter = AppleDocConverter()
        markdown = converter.convert(json.loads(body), ConversionOptions())
    """

    def __init__(self, base_url: str = APPLE_DEV_BASE):
        self._base_url = base_url

    def convert(self, doc: dict[str, Any], options: ConversionOptions) -> str:
        """
        Convert a parsed DocC document.

        Args:
            doc: Decoded JSON document
            options: Conversion options (inline_title, ignore_links)

        Returns:
            Markdown text
        """
        references: dict[str, Any] = doc.get("references") or {}
        renderer = _Renderer(references, self._base_url, options.ignore_links)
        parts: list[str] = []

        metadata = doc.get("metadata") or {}
        title = metadata.get("title")
        if options.inline_title and title:
            parts.append(f"# {title}")

        role_heading = metadata.get("roleHeading")
        if role_heading:
            parts.append(f"_{role_heading}_")

        abstract = doc.get("abstract")
        if abstract:
            parts.append(renderer.inline(abstract))

        for section in doc.get("primaryContentSections") or []:
            parts.extend(renderer.section(section))

        for heading, key in (("Topics", "topicSections"), ("See Also", "seeAlsoSections")):
            topic_sections = doc.get(key) or []
            if topic_sections:
                parts.append(f"## {heading}")
                for topic in topic_sections:
                    parts.extend(renderer.topic(topic))

        markdown = "\n\n".join(part for part in parts if part.strip())
        return markdown + "\n" if markdown else ""

    def document_title(self, doc: dict[str, Any]) -> Optional[str]:
        return (doc.get("metadata") or {}).get("title")


class _Renderer:
    """Per-document rendering state."""

    def __init__(self, references: dict[str, Any], base_url: str, ignore_links: bool):
        self._references = references
        self._base_url = base_url
        self._ignore_links = ignore_links

    # Sections

    def section(self, section: dict[str, Any]) -> list[str]:
        kind = section.get("kind")
        if kind == "declarations":
            return [self.declaration(declaration) for declaration in section.get("declarations") or []]
        if kind == "content":
            return self.blocks(section.get("content") or [])
        if kind == "parameters":
            lines = []
            for parameter in section.get("parameters") or []:
                description = " ".join(self.blocks(parameter.get("content") or []))
                lines.append(f"- `{parameter.get('name', '')}`: {description}".rstrip())
            return ["## Parameters", "\n".join(lines)] if lines else []
        logger.debug(f"Skipping section kind {kind!r}")
        return []

    def declaration(self, declaration: dict[str, Any]) -> str:
        code = "".join(token.get("text", "") for token in declaration.get("tokens") or [])
        languages = declaration.get("languages") or ["swift"]
        return f"```{languages[0]}\n{code}\n```"

    def topic(self, topic: dict[str, Any]) -> list[str]:
        parts = []
        if topic.get("title"):
            parts.append(f"### {topic['title']}")
        items = [f"- {self.reference(identifier)}" for identifier in topic.get("identifiers") or []]
        if items:
            parts.append("\n".join(items))
        return parts

    # Blocks

    def blocks(self, blocks: list[dict[str, Any]]) -> list[str]:
        rendered = []
        for block in blocks:
            text = self.block(block)
            if text:
                rendered.append(text)
        return rendered

    def block(self, block: dict[str, Any]) -> str:
        block_type = block.get("type")

        if block_type == "heading":
            level = min(max(int(block.get("level", 2)), 1), 6)
            return f"{'#' * level} {block.get('text', '')}"

        if block_type == "paragraph":
            return self.inline(block.get("inlineContent") or [])

        if block_type == "codeListing":
            code = "\n".join(block.get("code") or [])
            return f"```{block.get('syntax') or ''}\n{code}\n```"

        if block_type in ("unorderedList", "orderedList"):
            lines = []
            for index, item in enumerate(block.get("items") or [], start=1):
                marker = f"{index}." if block_type == "orderedList" else "-"
                text = " ".join(self.blocks(item.get("content") or []))
                lines.append(f"{marker} {text}")
            return "\n".join(lines)

        if block_type == "aside":
            name = block.get("name") or str(block.get("style", "note")).capitalize()
            body = "\n\n".join(self.blocks(block.get("content") or []))
            lines = [f"**{name}**", *body.split("\n")]
            return "\n".join(f"> {line}".rstrip() for line in lines)

        if block_type == "termList":
            lines = []
            for item in block.get("items") or []:
                term = self.inline((item.get("term") or {}).get("inlineContent") or [])
                definition = " ".join(self.blocks((item.get("definition") or {}).get("content") or []))
                lines.append(f"- **{term}**: {definition}")
            return "\n".join(lines)

        if block_type == "table":
            return self.table(block)

        logger.debug(f"Skipping block type {block_type!r}")
        return ""

    def table(self, block: dict[str, Any]) -> str:
        rows = [
            [" ".join(self.blocks(cell)).replace("\n", " ") for cell in row]
            for row in block.get("rows") or []
        ]
        if not rows:
            return ""
        width = max(len(row) for row in rows)
        rows = [row + [""] * (width - len(row)) for row in rows]
        if block.get("header") != "row":
            rows.insert(0, [""] * width)
        lines = [
            "| " + " | ".join(rows[0]) + " |",
            "|" + "|".join(" --- " for _ in range(width)) + "|",
        ]
        lines.extend("| " + " | ".join(row) + " |" for row in rows[1:])
        return "\n".join(lines)

    # Inline content

    def inline(self, content: list[dict[str, Any]]) -> str:
        return "".join(self.inline_item(item) for item in content)

    def inline_item(self, item: dict[str, Any]) -> str:
        item_type = item.get("type")
        if item_type == "text":
            return item.get("text", "")
        if item_type == "codeVoice":
            return f"`{item.get('code', '')}`"
        if item_type in ("emphasis", "newTerm"):
            return f"*{self.inline(item.get('inlineContent') or [])}*"
        if item_type == "strong":
            return f"**{self.inline(item.get('inlineContent') or [])}**"
        if item_type in ("superscript", "subscript", "strikethrough"):
            return self.inline(item.get("inlineContent") or [])
        if item_type == "reference":
            return self.reference(item.get("identifier", ""), active=item.get("isActive", True))
        if item_type == "link":
            title = item.get("title") or item.get("destination", "")
            return self._link(title, item.get("destination"))
        return ""

    def reference(self, identifier: str, active: bool = True) -> str:
        reference = self._references.get(identifier) or {}
        title = reference.get("title") or identifier.rsplit("/", 1)[-1]
        if reference.get("kind") == "symbol":
            title = f"`{title}`"
        destination = reference.get("url") if active else None
        return self._link(title, destination)

    def _link(self, title: str, destination: Optional[str]) -> str:
        if self._ignore_links or not destination:
            return title
        return f"[{title}]({urljoin(self._base_url, destination)})"
