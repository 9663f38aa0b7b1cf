"""Per-request conversion options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field


class ConversionOptions(BaseModel):
    """
    Behavioral switches applied to a single conversion.

    Instances are frozen. Readers that need a variation (for example the
    answers pass of a Q&A page) call derive() and work on the copy.

    Example:
        options = ConversionOptions.from_query({"title": "true", "links": "false"})
        answers_options = options.derive(inline_title=False)
    """

    inline_title: bool = Field(False, description="Prepend the document title as a heading")
    ignore_links: bool = Field(False, description="Render link text without the destination")
    improve_readability: bool = Field(True, description="Strip navigation and boilerplate")

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_query(cls, query: Optional[Mapping[str, Any]]) -> ConversionOptions:
        """
        Build options from the recognized query parameters.

        Args:
            query: Mapping with optional ``title``, ``links`` and ``clean`` keys

        Returns:
            Normalized ConversionOptions
        """
        query = query or {}
        inline_title = False
        ignore_links = False
        improve_readability = True

        title = query.get("title")
        links = query.get("links")
        clean = query.get("clean")

        if title is not None:
            inline_title = title == "true"
        if links is not None:
            ignore_links = links == "false"
        if clean is not None:
            improve_readability = clean != "false"

        return cls(
            inline_title=inline_title,
            ignore_links=ignore_links,
            improve_readability=improve_readability,
        )

    def derive(self, **changes: bool) -> ConversionOptions:
        """Return an independent copy with the given fields replaced."""
        return self.model_copy(update=changes)
