"""Resolve decklist requests to printable card images."""

import logging
from typing import Iterable, List, Mapping

from proxy_pages.models import CardRequest, DatabaseEntry, Face, ResolvedCard

log = logging.getLogger(__name__)


def resolve_request(
    database: Mapping[str, DatabaseEntry], request: CardRequest
) -> List[ResolvedCard]:
    """Resolve one request to zero, one or two printable cards.

    Cards with a face-splitting layout yield the front then the back
    face. Names are matched exactly; a miss is logged and yields nothing.
    """
    entry = database.get(request.name)
    if entry is None:
        log.warning("Card not found: %s", request.name)
        return []

    if entry.splits_faces:
        front, back = entry.faces
        return [
            ResolvedCard(
                name=request.name,
                image_uri=front.image_uri,
                quantity=request.quantity,
                face=Face.FRONT,
            ),
            ResolvedCard(
                name=request.name,
                image_uri=back.image_uri,
                quantity=request.quantity,
                face=Face.BACK,
            ),
        ]

    return [
        ResolvedCard(
            name=request.name,
            image_uri=entry.primary_image_uri,
            quantity=request.quantity,
        )
    ]


def resolve_cards(
    database: Mapping[str, DatabaseEntry], requests: Iterable[CardRequest]
) -> List[ResolvedCard]:
    """Resolve every request, keeping decklist order."""
    resolved = []
    missing = 0

    for request in requests:
        cards = resolve_request(database, request)
        if not cards:
            missing += 1
        resolved.extend(cards)

    if missing:
        log.warning("%d card(s) could not be found in the database", missing)
    log.info("Resolved %d card image(s)", len(resolved))
    return resolved
