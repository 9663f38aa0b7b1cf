"""Reader protocol and shared failure mapping."""

from __future__ import annotations

from typing import Protocol

from ..models.options import ConversionOptions
from ..models.outcome import FAILURE_MESSAGE, STATUS_CODE_SUFFIX, FetchFailureKind, FetchOutcome, Outcome


class Reader(Protocol):
    """
    Protocol for extraction strategies.

    A reader fetches one URL, converts it and reports the result as an
    Outcome. Failures are values, not exceptions; callers decide how to
    deliver them.
    """

    async def read(self, url: str, options: ConversionOptions) -> Outcome:
        """
        Fetch and convert a URL.

        Args:
            url: Absolute URL to read
            options: Conversion options; never mutated

        Returns:
            Outcome with Markdown on success or a status/body failure
        """
        ...


def fetch_failure(outcome: FetchOutcome, distinguish_status: bool = False) -> Outcome:
    """
    Map a failed fetch to the response shown to the caller.

    Args:
        outcome: Failed FetchOutcome
        distinguish_status: Report upstream HTTP statuses as 502 with the code

    Returns:
        502 for upstream statuses when distinguished, otherwise 504
    """
    if distinguish_status and outcome.failure is FetchFailureKind.HTTP_STATUS:
        return Outcome.failure(502, FAILURE_MESSAGE + STATUS_CODE_SUFFIX.format(code=outcome.status_code))
    return Outcome.failure(504, FAILURE_MESSAGE)
