"""Data models for card requests, catalog entries and page layout."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# Layouts whose two faces are printed as separate cards
FACE_SPLITTING_LAYOUTS = frozenset({"transform", "flip", "meld", "double_faced_token"})


class Face(Enum):
    """Which printed face of a multi-faced card."""

    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class CardRequest:
    """One line of a decklist."""

    name: str
    quantity: int = 1
    explicit_face: Optional[Face] = None


@dataclass(frozen=True)
class CardFace:
    """A single face of a multi-faced catalog card."""

    name: str
    image_uri: Optional[str] = None


@dataclass(frozen=True)
class DatabaseEntry:
    """A catalog record keyed by card name."""

    name: str
    layout: str = "normal"
    primary_image_uri: Optional[str] = None
    faces: Optional[Tuple[CardFace, CardFace]] = None

    @property
    def splits_faces(self) -> bool:
        """Whether each face should be printed as its own card."""
        return self.layout in FACE_SPLITTING_LAYOUTS and self.faces is not None


@dataclass(frozen=True)
class ResolvedCard:
    """A card with the image reference it should be printed from."""

    name: str
    image_uri: Optional[str]
    quantity: int = 1
    face: Optional[Face] = None

    @property
    def label(self) -> str:
        """Get a name for log messages that tells the faces apart."""
        if self.face is None:
            return self.name
        return f"{self.name} ({self.face.value})"


@dataclass(frozen=True)
class FetchedCard:
    """A resolved card with its downloaded image, if any."""

    card: ResolvedCard
    data: Optional[bytes] = field(default=None, repr=False)

    @property
    def has_data(self) -> bool:
        """Whether an image was downloaded for this card."""
        return self.data is not None

    @property
    def name(self) -> str:
        """Get the card name."""
        return self.card.name

    @property
    def label(self) -> str:
        """Get the face-aware name used in log messages."""
        return self.card.label

    @property
    def quantity(self) -> int:
        """Get how many copies to print."""
        return self.card.quantity


@dataclass(frozen=True)
class PageGeometry:
    """Page and card dimensions in pixels.

    Defaults are an A4 sheet and a 63mm x 88mm card, both at 300 DPI,
    with a 3x3 grid centred on the page.
    """

    page_width: int = 2480
    page_height: int = 3508
    card_width: int = 744
    card_height: int = 1039
    columns: int = 3
    rows: int = 3

    @property
    def margin_x(self) -> int:
        """Get the left margin that centres the grid horizontally."""
        return (self.page_width - self.card_width * self.columns) // 2

    @property
    def margin_y(self) -> int:
        """Get the top margin that centres the grid vertically."""
        return (self.page_height - self.card_height * self.rows) // 2

    @property
    def cards_per_page(self) -> int:
        """Get the number of grid cells on a page."""
        return self.columns * self.rows

    @property
    def page_size(self) -> Tuple[int, int]:
        """Get the page size as a (width, height) tuple."""
        return self.page_width, self.page_height

    def position(self, index: int) -> Tuple[int, int]:
        """Get the top-left pixel of grid cell ``index`` on a page.

        Cells fill column by column: 0, 1, 2 run down the first column,
        3, 4, 5 down the second, and so on.
        """
        column = index // self.rows
        row = index % self.rows
        x = self.card_width * column + self.margin_x
        y = self.card_height * row + self.margin_y
        return x, y
