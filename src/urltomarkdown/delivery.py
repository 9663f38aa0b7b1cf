"""Delivery of reader outcomes to push-style and awaitable consumers."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from .http.protocols import HttpClient
from .models.options import ConversionOptions
from .models.outcome import FAILURE_MESSAGE, FAILURE_THRESHOLD, ExtractionError, Outcome
from .readers.selector import reader_for_url

logger = logging.getLogger(__name__)


class Emitter(Protocol):
    """A push-style sink that accepts one status and body."""

    def emit(self, status_code: int, body: str) -> None: ...


class FutureEmitter:
    """
    Emitter that settles an awaitable exactly once.

    The first emit() decides the result: statuses below 400 resolve
    with the body, anything else raises ExtractionError from result().
    Later calls are ignored.

    Example:
        emitter = FutureEmitter()
        deliver(outcome, emitter)
        markdown = await emitter.result()
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def emit(self, status_code: int, body: str) -> None:
        if self._future.done():
            logger.debug(f"Ignoring emit({status_code}) after settle")
            return
        if status_code < FAILURE_THRESHOLD:
            self._future.set_result(body)
        else:
            self._future.set_exception(ExtractionError(status_code, body))

    async def result(self) -> str:
        return await self._future


def deliver(outcome: Outcome, emitter: Emitter) -> None:
    """Push an outcome into an emitter."""
    emitter.emit(outcome.status_code, outcome.body)


async def read_outcome(
    url: str,
    options: ConversionOptions,
    client: HttpClient,
) -> Outcome:
    """
    Select the reader for a URL and run it.

    Unexpected exceptions from a reader become a 400 failure, so every
    call produces an Outcome.
    """
    reader = reader_for_url(url, client)
    try:
        return await reader.read(url, options)
    except Exception as e:
        logger.error(f"Reader failed for {url}: {e}")
        return Outcome.failure(400, FAILURE_MESSAGE)


async def read_markdown(
    url: str,
    options: ConversionOptions,
    client: HttpClient,
    emitter: Optional[FutureEmitter] = None,
) -> str:
    """
    Read a URL and return its Markdown.

    Args:
        url: URL to read
        options: Conversion options
        client: Fetch engine
        emitter: Emitter to settle (a new FutureEmitter when omitted)

    Returns:
        Markdown text

    Raises:
        ExtractionError: If the reader reported a failure
    """
    emitter = emitter or FutureEmitter()
    deliver(await read_outcome(url, options, client), emitter)
    return await emitter.result()
