"""Reader for Apple developer documentation."""

from __future__ import annotations

import json
import logging
from typing import Optional

from ..conversion.apple_docs import AppleDocConverter, dev_doc_url
from ..http.protocols import HttpClient
from ..models.options import ConversionOptions
from ..models.outcome import FAILURE_MESSAGE, Outcome
from .base import fetch_failure

logger = logging.getLogger(__name__)


class AppleReader:
    """
    Reads the JSON form of an Apple documentation page.

    Any fetch failure is reported as 504, whatever the upstream status.
    """

    def __init__(self, client: HttpClient, converter: Optional[AppleDocConverter] = None):
        self._client = client
        self._converter = converter or AppleDocConverter()

    async def read(self, url: str, options: ConversionOptions) -> Outcome:
        json_url = dev_doc_url(url)
        outcome = await self._client.fetch(json_url)
        if not outcome.ok:
            return fetch_failure(outcome)

        try:
            doc = json.loads(outcome.body or "")
            if not isinstance(doc, dict):
                raise ValueError(f"expected a JSON object, got {type(doc).__name__}")
            markdown = self._converter.convert(doc, options)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Could not convert documentation JSON from {json_url}: {e}")
            return Outcome.failure(400, FAILURE_MESSAGE)

        return Outcome.success(markdown, title=self._converter.document_title(doc))
