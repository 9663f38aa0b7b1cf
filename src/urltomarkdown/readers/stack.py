"""Reader for StackOverflow question pages."""

from __future__ import annotations

import logging
from typing import Optional

from ..conversion.extractor import Region
from ..conversion.markdown import DocumentConverter, document_title
from ..conversion.sanitize import parse_document
from ..http.protocols import HttpClient
from ..models.options import ConversionOptions
from ..models.outcome import FAILURE_MESSAGE, Outcome
from .base import fetch_failure

logger = logging.getLogger(__name__)

# Text the answers region starts with when a question has no answers
EMPTY_ANSWERS_MARKER = "Your Answer"
ANSWER_HEADING = "\n\n## Answer\n"


def has_no_answers(answers_markdown: str) -> bool:
    """
    True when the answers region only holds the empty-state form.

    The marker may be rendered as a heading, so leading ``#`` marks are
    ignored before the prefix test.
    """
    if answers_markdown.startswith(EMPTY_ANSWERS_MARKER):
        return True
    # html2text renders the form's <h2>Your Answer</h2> as "## Your Answer"
    return answers_markdown.lstrip("#").lstrip().startswith(EMPTY_ANSWERS_MARKER)


def merge_answers(question_markdown: str, answers_markdown: str) -> str:
    """Join the question and answers passes into one document."""
    if has_no_answers(answers_markdown):
        return question_markdown
    return question_markdown + ANSWER_HEADING + answers_markdown


class StackReader:
    """
    Reads a question page as two regions of one parsed document.

    The question is converted with the caller's options, the answers
    with a derived copy that never inlines the title. Any fetch failure
    is reported as 504.
    """

    def __init__(self, client: HttpClient, converter: Optional[DocumentConverter] = None):
        self._client = client
        self._converter = converter or DocumentConverter()

    async def read(self, url: str, options: ConversionOptions) -> Outcome:
        outcome = await self._client.fetch(url)
        if not outcome.ok:
            return fetch_failure(outcome)

        try:
            soup = parse_document(outcome.body or "")
            question = self._converter.convert(soup, Region.QUESTION, options, url)
            answers = self._converter.convert(soup, Region.ANSWERS, options.derive(inline_title=False), url)
        except Exception as e:
            logger.error(f"Could not convert {url}: {e}")
            return Outcome.failure(400, FAILURE_MESSAGE)

        return Outcome.success(merge_answers(question, answers), title=document_title(soup))
