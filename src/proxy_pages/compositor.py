"""Lay fetched card images out on printable pages."""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from PIL import Image

from proxy_pages.file_utils import save_image_safe
from proxy_pages.models import FetchedCard, PageGeometry

log = logging.getLogger(__name__)

BACKGROUND = "white"


def expand_copies(cards: Iterable[FetchedCard]) -> List[FetchedCard]:
    """Repeat each card ``quantity`` times, copies kept adjacent."""
    expanded = []
    for card in cards:
        expanded.extend([card] * card.quantity)
    return expanded


def chunk_pages(cards: Sequence[FetchedCard], size: int) -> Iterator[Sequence[FetchedCard]]:
    """Split cards into consecutive groups of ``size``; the last may be short."""
    for start in range(0, len(cards), size):
        yield cards[start:start + size]


def decode_card_image(data: bytes) -> Optional[Image.Image]:
    """Decode PNG bytes, returning None if they are not a readable PNG."""
    try:
        image = Image.open(BytesIO(data), formats=["PNG"])
        image.load()
    except Exception as e:
        # Pillow raises SyntaxError for bad chunks and DecompressionBombError for huge images
        log.debug("Image decode error: %s: %s", type(e).__name__, e)
        return None
    return image


class Page:
    """A single sheet of cards, filled one grid cell at a time."""

    def __init__(self, number: int, geometry: PageGeometry):
        """Start a blank white page numbered ``number``."""
        self.number = number
        self.geometry = geometry
        self.image = Image.new("RGB", geometry.page_size, BACKGROUND)
        self.placed: List[FetchedCard] = []

    @property
    def is_full(self) -> bool:
        """Whether every grid cell has been used."""
        return len(self.placed) >= self.geometry.cards_per_page

    @property
    def filename(self) -> str:
        """Get the output file name, e.g. page-0.png."""
        return f"page-{self.number}.png"

    def place(self, card: FetchedCard) -> None:
        """Draw ``card`` in the next free cell, leaving it blank if unusable."""
        if self.is_full:
            raise ValueError(f"Page {self.number} is already full")

        x, y = self.geometry.position(len(self.placed))
        self.placed.append(card)

        if not card.has_data:
            log.warning("Leaving a blank space for %s: no image data", card.label)
            return

        card_image = decode_card_image(card.data)
        if card_image is None:
            log.warning("Leaving a blank space for %s: could not decode image", card.label)
            return

        log.debug("Putting card %s at (%d, %d)", card.label, x, y)
        # Pasted at native size; anything past the page edge is clipped
        card_image = card_image.convert("RGBA")
        self.image.paste(card_image, (x, y), card_image)

    def save(self, output_dir: Path) -> Optional[Path]:
        """Write the page as PNG, returning its path or None on failure."""
        path = Path(output_dir) / self.filename
        if save_image_safe(self.image, path, f"page {self.number}"):
            return path
        return None


@dataclass
class PageResult:
    """Outcome of building and saving one page."""

    number: int
    card_count: int
    path: Optional[Path] = None

    @property
    def saved(self) -> bool:
        """Whether the page was written to disk."""
        return self.path is not None


def build_page(number: int, cards: Iterable[FetchedCard], geometry: PageGeometry) -> Page:
    """Place ``cards`` in order on a new page."""
    page = Page(number, geometry)
    for card in cards:
        page.place(card)
    return page


def compose_pages(
    cards: Sequence[FetchedCard],
    output_dir: Path,
    geometry: Optional[PageGeometry] = None,
) -> List[PageResult]:
    """Build and save every page for the given cards.

    Args:
        cards: Fetched cards in decklist order
        output_dir: Directory receiving page-0.png, page-1.png, ...
        geometry: Page layout (default: A4 at 300 DPI, 3x3 cards)

    Returns:
        One PageResult per page, in page order

    """
    if geometry is None:
        geometry = PageGeometry()

    expanded = expand_copies(cards)
    results = []

    for number, chunk in enumerate(chunk_pages(expanded, geometry.cards_per_page)):
        log.info("Generating page %d", number)
        page = build_page(number, chunk, geometry)
        path = page.save(output_dir)
        if path is not None:
            log.info("Saved %s", path)
        results.append(PageResult(number=number, card_count=len(chunk), path=path))

    return results
