"""Card database built from Scryfall bulk data."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Mapping, Optional

from proxy_pages.errors import DatabaseMissingError
from proxy_pages.models import CardFace, DatabaseEntry

log = logging.getLogger(__name__)

DATABASE_PATTERN = "oracle-cards-*.json"


def _png_uri(image_uris: Optional[Dict]) -> Optional[str]:
    if not image_uris:
        return None
    return image_uris.get("png")


def entry_from_record(record: Dict) -> DatabaseEntry:
    """Build a DatabaseEntry from a Scryfall card object.

    Prefers the card-level PNG image. Cards that only carry images on
    their faces (double-faced cards) use the front face as the primary
    image. Faces are only recorded when every face has its own image.

    Args:
        record: Card object from a Scryfall bulk data file

    Returns:
        The catalog entry for this card

    """
    face_records = record.get("card_faces") or []
    primary = _png_uri(record.get("image_uris"))
    if primary is None and face_records:
        primary = _png_uri(face_records[0].get("image_uris"))

    faces = None
    if len(face_records) >= 2:
        front, back = (
            CardFace(name=face.get("name", ""), image_uri=_png_uri(face.get("image_uris")))
            for face in face_records[:2]
        )
        if front.image_uri and back.image_uri:
            faces = (front, back)

    return DatabaseEntry(
        name=record["name"],
        layout=record.get("layout", "normal"),
        primary_image_uri=primary,
        faces=faces,
    )


class CardDatabase(Mapping[str, DatabaseEntry]):
    """Read-only mapping of exact card name to catalog entry."""

    def __init__(self, entries: Dict[str, DatabaseEntry]):
        """Wrap an already de-duplicated name to entry mapping."""
        self._entries = dict(entries)

    @classmethod
    def from_entries(cls, entries: Iterable[DatabaseEntry]) -> "CardDatabase":
        """Index entries by name; the first entry seen for a name wins."""
        indexed: Dict[str, DatabaseEntry] = {}
        for entry in entries:
            if entry.name in indexed:
                log.debug("Duplicate entry for %s, keeping the first", entry.name)
                continue
            indexed[entry.name] = entry
        return cls(indexed)

    @classmethod
    def from_records(cls, records: Iterable[Dict]) -> "CardDatabase":
        """Build the database from raw Scryfall card objects."""
        return cls.from_entries(entry_from_record(record) for record in records)

    def __getitem__(self, name: str) -> DatabaseEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def find_database_file(directory: Path = Path("."), pattern: str = DATABASE_PATTERN) -> Optional[Path]:
    """Find the newest local bulk data file.

    Scryfall names bulk files with a timestamp, so the last name in
    sorted order is the most recent download.
    """
    matches = sorted(Path(directory).glob(pattern))
    if not matches:
        log.info("No card database matching %s in %s", pattern, directory)
        return None
    return matches[-1]


def load_database(path: Optional[Path]) -> CardDatabase:
    """Load and index a Scryfall bulk data file.

    Args:
        path: Path to the bulk JSON file (a JSON array of card objects)

    Returns:
        The card database

    Raises:
        DatabaseMissingError: If the file is missing or not a card list

    """
    if path is None:
        raise DatabaseMissingError("No card database found")

    path = Path(path)
    log.info("Loading card database from %s, this may take a second", path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        raise DatabaseMissingError(f"Could not load card database '{path}': {e}") from e

    if not isinstance(records, list):
        raise DatabaseMissingError(f"Card database '{path}' is not a list of cards")

    try:
        database = CardDatabase.from_records(records)
    except (KeyError, TypeError, AttributeError) as e:
        raise DatabaseMissingError(f"Card database '{path}' is malformed: {e}") from e

    log.info("Parsed %d cards", len(database))
    return database
