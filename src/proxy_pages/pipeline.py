"""End-to-end decklist to proxy page pipeline."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from proxy_pages.compositor import PageResult, compose_pages
from proxy_pages.database import CardDatabase, load_database
from proxy_pages.decklist import parse_decklist
from proxy_pages.errors import InputMissingError
from proxy_pages.fetcher import DEFAULT_CONCURRENCY, FetchFunction, HttpImageFetcher, fetch_cards
from proxy_pages.models import CardRequest, PageGeometry
from proxy_pages.resolver import resolve_cards

log = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Counts and page results from one pipeline run."""

    requested: int = 0
    missing: int = 0
    resolved: int = 0
    fetched: int = 0
    pages: List[PageResult] = field(default_factory=list)

    @property
    def without_image(self) -> int:
        """Get the number of resolved cards that ended up with no image."""
        return self.resolved - self.fetched

    @property
    def failed_pages(self) -> List[PageResult]:
        """Get the pages that could not be saved."""
        return [page for page in self.pages if not page.saved]


class ProxyPipeline:
    """Turns decklist text into proxy pages on disk."""

    def __init__(
        self,
        database_path: Optional[Path],
        output_dir: Path,
        fetch: Optional[FetchFunction] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
        geometry: Optional[PageGeometry] = None,
    ):
        """Initialize the pipeline.

        Args:
            database_path: Scryfall bulk data file
            output_dir: Directory that receives the page images
            fetch: Image download capability (default: HTTP via requests)
            concurrency: Maximum simultaneous downloads
            geometry: Page layout (default: A4 at 300 DPI, 3x3 cards)

        """
        self.database_path = Path(database_path) if database_path else None
        self.output_dir = Path(output_dir)
        self.fetch = fetch
        self.concurrency = concurrency
        self.geometry = geometry or PageGeometry()

    async def load_inputs(
        self, read_text: Callable[[], Optional[str]]
    ) -> Tuple[CardDatabase, List[CardRequest]]:
        """Load the database and read the decklist at the same time."""

        def read_requests() -> List[CardRequest]:
            text = read_text()
            if text is None:
                raise InputMissingError("No decklist text was supplied")
            requests = parse_decklist(text)
            log.info("Got %d card line(s)", len(requests))
            return requests

        database, requests = await asyncio.gather(
            asyncio.to_thread(load_database, self.database_path),
            asyncio.to_thread(read_requests),
        )
        return database, requests

    async def run(self, read_text: Callable[[], Optional[str]]) -> RunSummary:
        """Run the whole pipeline.

        Args:
            read_text: Returns the raw decklist text

        Returns:
            Summary of what was resolved, downloaded and written

        Raises:
            DatabaseMissingError: If the card database cannot be loaded
            InputMissingError: If there is no decklist text

        """
        database, requests = await self.load_inputs(read_text)
        summary = RunSummary(
            requested=len(requests),
            missing=sum(1 for request in requests if request.name not in database),
        )

        resolved = resolve_cards(database, requests)
        summary.resolved = len(resolved)
        if summary.missing:
            log.info("%d card line(s) not found in the database", summary.missing)

        fetch = self.fetch
        http_fetcher = None
        if fetch is None:
            http_fetcher = HttpImageFetcher(pool_size=self.concurrency)
            fetch = http_fetcher

        log.info("Downloading %d image(s)", len(resolved))
        try:
            fetched = await fetch_cards(resolved, fetch, self.concurrency)
        finally:
            if http_fetcher is not None:
                http_fetcher.close()
        summary.fetched = sum(1 for card in fetched if card.has_data)

        log.info("Generating proxy pages in %s", self.output_dir)
        summary.pages = compose_pages(fetched, self.output_dir, self.geometry)

        log.info(
            "Done: %d page(s) written, %d failed",
            len(summary.pages) - len(summary.failed_pages),
            len(summary.failed_pages),
        )
        return summary

    def build(self, read_text: Callable[[], Optional[str]]) -> RunSummary:
        """Synchronous wrapper around :meth:`run`."""
        return asyncio.run(self.run(read_text))
