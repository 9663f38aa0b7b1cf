"""Result types shared by the fetch engine, readers and delivery adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

FAILURE_MESSAGE = "Sorry, could not fetch and convert that URL"
PARSE_FAILURE_MESSAGE = "Could not parse that document"
STATUS_CODE_SUFFIX = " as the website you are trying to convert returned status code {code}"

# Statuses at or above this value are failures
FAILURE_THRESHOLD = 400


class FetchFailureKind(str, Enum):
    """Ways a single fetch can fail."""

    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class FetchOutcome:
    """
    Result of one time-bounded fetch.

    Either ``body`` is set (success) or ``failure`` names what went wrong.
    ``status_code`` is only populated for HTTP_STATUS failures.
    """

    body: Optional[str] = None
    failure: Optional[FetchFailureKind] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @staticmethod
    def success(body: str) -> FetchOutcome:
        return FetchOutcome(body=body)

    @staticmethod
    def timeout() -> FetchOutcome:
        return FetchOutcome(failure=FetchFailureKind.TIMEOUT)

    @staticmethod
    def network_error() -> FetchOutcome:
        return FetchOutcome(failure=FetchFailureKind.NETWORK_ERROR)

    @staticmethod
    def http_status(code: int) -> FetchOutcome:
        return FetchOutcome(failure=FetchFailureKind.HTTP_STATUS, status_code=code)


@dataclass(frozen=True)
class Outcome:
    """
    Result of an extraction, ready to be shown to a caller.

    Attributes:
        status_code: 200 on success, 4xx/5xx on failure
        body: Markdown on success, plain-text explanation on failure
        title: Document title when one was found (successes only)
    """

    status_code: int
    body: str
    title: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code < FAILURE_THRESHOLD

    @staticmethod
    def success(markdown: str, title: Optional[str] = None) -> Outcome:
        return Outcome(status_code=200, body=markdown, title=title)

    @staticmethod
    def failure(status_code: int, body: str = FAILURE_MESSAGE) -> Outcome:
        return Outcome(status_code=status_code, body=body)

    def as_response(self) -> tuple[int, str]:
        return self.status_code, self.body


class ExtractionError(Exception):
    """Raised on the awaitable delivery path when an extraction fails."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"{status_code}: {body}")
        self.status_code = status_code
        self.body = body
