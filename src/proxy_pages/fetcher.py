"""Concurrent, order-preserving download of card images."""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Union

import requests
from requests.adapters import HTTPAdapter

from proxy_pages.errors import FetchError
from proxy_pages.models import FetchedCard, ResolvedCard

log = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8
DEFAULT_TIMEOUT = 30
USER_AGENT = "proxy-pages/0.1.0"

FetchFunction = Union[Callable[[str], bytes], Callable[[str], Awaitable[bytes]]]


class HttpImageFetcher:
    """Downloads image bytes over HTTP with a shared requests session."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        pool_size: int = DEFAULT_CONCURRENCY,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Seconds to wait for each response
            user_agent: User-Agent header sent with every request
            pool_size: Connections kept open per host
            session: Session to use instead of creating one

        """
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        session.headers.update({"User-Agent": user_agent})
        self.session = session

    def __call__(self, uri: str) -> bytes:
        """Fetch ``uri`` and return the response body.

        Raises:
            FetchError: On connection errors, timeouts and non-2xx responses

        """
        try:
            response = self.session.get(uri, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(uri, str(e)) from e
        return response.content

    def close(self) -> None:
        """Close the underlying session and its connections."""
        self.session.close()


async def _call_fetch(fetch: FetchFunction, uri: str) -> bytes:
    """Await coroutine fetchers directly; run plain ones on a worker thread."""
    if inspect.iscoroutinefunction(fetch) or inspect.iscoroutinefunction(
        getattr(fetch, "__call__", None)
    ):
        return await fetch(uri)
    return await asyncio.to_thread(fetch, uri)


async def fetch_card(
    card: ResolvedCard, fetch: FetchFunction, semaphore: asyncio.Semaphore
) -> FetchedCard:
    """Download one card image, turning any failure into a blank card."""
    if not card.image_uri:
        log.warning("No image available for %s", card.label)
        return FetchedCard(card=card)

    async with semaphore:
        log.info("Downloading image for %s", card.label)
        try:
            data = await _call_fetch(fetch, card.image_uri)
        except FetchError as e:
            log.warning("Could not download %s: %s", card.label, e.reason)
            return FetchedCard(card=card)

    return FetchedCard(card=card, data=data)


async def fetch_cards(
    cards: Sequence[ResolvedCard],
    fetch: FetchFunction,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[FetchedCard]:
    """Download images for all cards with at most ``concurrency`` in flight.

    Each card writes its result to the slot matching its position in
    ``cards``, so the output order equals the input order however the
    downloads interleave.

    Args:
        cards: Resolved cards in decklist order
        fetch: Callable returning the bytes at a URI, raising FetchError
            on failure; plain callables run on worker threads
        concurrency: Maximum simultaneous downloads

    Returns:
        One FetchedCard per input card, in input order

    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    semaphore = asyncio.Semaphore(concurrency)
    results: List[Optional[FetchedCard]] = [None] * len(cards)

    async def fetch_into_slot(position: int, card: ResolvedCard) -> None:
        results[position] = await fetch_card(card, fetch, semaphore)

    await asyncio.gather(
        *(fetch_into_slot(position, card) for position, card in enumerate(cards))
    )

    failed = sum(1 for result in results if not result.has_data)
    log.info(
        "Done downloading: %d successful, %d without image",
        len(results) - failed,
        failed,
    )
    return results
