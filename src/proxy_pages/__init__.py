"""Proxy Pages: print-ready proxy sheets from a Magic: The Gathering decklist.

This library parses a plain-text decklist, resolves each card against a
Scryfall bulk data file, downloads the card images concurrently and lays
them out nine to a page on A4 sheets at 300 DPI.
"""

from .compositor import Page, PageResult, compose_pages
from .database import CardDatabase, find_database_file, load_database
from .decklist import parse_decklist, read_decklist
from .errors import DatabaseMissingError, FetchError, InputMissingError, ProxyPagesError
from .fetcher import HttpImageFetcher, fetch_cards
from .models import (
    CardFace,
    CardRequest,
    DatabaseEntry,
    Face,
    FetchedCard,
    PageGeometry,
    ResolvedCard,
)
from .pipeline import ProxyPipeline, RunSummary
from .resolver import resolve_cards

__version__ = "0.1.0"

__all__ = [
    # Data models
    "CardFace",
    "CardRequest",
    "DatabaseEntry",
    "Face",
    "FetchedCard",
    "PageGeometry",
    "ResolvedCard",
    # Pipeline stages
    "parse_decklist",
    "read_decklist",
    "CardDatabase",
    "find_database_file",
    "load_database",
    "resolve_cards",
    "HttpImageFetcher",
    "fetch_cards",
    "Page",
    "PageResult",
    "compose_pages",
    "ProxyPipeline",
    "RunSummary",
    # Errors
    "ProxyPagesError",
    "DatabaseMissingError",
    "InputMissingError",
    "FetchError",
]
