"""Parser for the plain-text decklist format.

One card per line::

    4 Lightning Bolt
    4x Lightning Bolt
    Lightning Bolt          # quantity defaults to 1

Blank lines and lines starting with ``#`` or ``//`` are ignored.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple, Optional, TextIO

from proxy_pages.errors import InputMissingError
from proxy_pages.models import CardRequest

log = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "//")
SEPARATORS = ("x", "X")
MAX_QUANTITY = 65535


class TokenKind(Enum):
    """Kinds of token found on a decklist line."""

    QUANTITY = "quantity"
    SEPARATOR = "separator"
    NAME = "name"


class Token(NamedTuple):
    """A piece of a decklist line and what it means."""

    kind: TokenKind
    text: str


def is_comment(line: str) -> bool:
    """Whether a stripped line is a comment."""
    return line.startswith(COMMENT_PREFIXES)


def tokenize_line(line: str) -> List[Token]:
    """Split one decklist line into tokens.

    Comment and blank lines produce no tokens. An ``x`` glued to the
    digits ("3xIsland") is always a separator. After whitespace it only
    counts when whitespace or the end of the line follows it, so
    "3 Xenagos" keeps its name intact.
    """
    text = line.strip()
    if not text or is_comment(text):
        return []

    tokens = []
    pos = 0

    if text[0].isdigit():
        while pos < len(text) and text[pos].isdigit():
            pos += 1
        digits_end = pos
        tokens.append(Token(TokenKind.QUANTITY, text[:pos]))

        while pos < len(text) and text[pos].isspace():
            pos += 1

        if pos < len(text) and text[pos] in SEPARATORS:
            after = pos + 1
            if pos == digits_end or after == len(text) or text[after].isspace():
                tokens.append(Token(TokenKind.SEPARATOR, text[pos]))
                pos = after

    name = text[pos:].strip()
    if name:
        tokens.append(Token(TokenKind.NAME, name))

    return tokens


def parse_quantity(digits: str) -> int:
    """Convert a run of digits to a quantity, defaulting to 1."""
    try:
        quantity = int(digits)
    except ValueError:
        return 1

    if quantity < 1 or quantity > MAX_QUANTITY:
        log.warning("Quantity %s out of range, using 1", digits)
        return 1
    return quantity


def parse_line(line: str) -> Optional[CardRequest]:
    """Parse a single line into a CardRequest, or None if it has no card."""
    quantity = 1
    name = None

    for token in tokenize_line(line):
        if token.kind is TokenKind.QUANTITY:
            quantity = parse_quantity(token.text)
        elif token.kind is TokenKind.NAME:
            name = token.text

    if not name:
        return None
    return CardRequest(name=name, quantity=quantity)


def parse_decklist(text: str) -> List[CardRequest]:
    """Parse a whole decklist, keeping the order of its lines."""
    requests = []
    for line_num, line in enumerate(text.splitlines(), 1):
        request = parse_line(line)
        if request is None:
            continue
        log.debug("Line %d: %d x %s", line_num, request.quantity, request.name)
        requests.append(request)
    return requests


def read_decklist(path: Optional[Path] = None, stream: Optional[TextIO] = None) -> str:
    """Read raw decklist text from a file or a piped stream.

    Args:
        path: Decklist file; takes precedence over the stream
        stream: Text stream to read when no path is given (default: stdin)

    Returns:
        The decklist text, unmodified

    Raises:
        InputMissingError: If the file is missing or no input is piped in

    """
    if path is not None:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise InputMissingError(f"Could not read decklist '{path}': {e}") from e

    if stream is None:
        stream = sys.stdin

    if stream is None or stream.isatty():
        raise InputMissingError("No decklist given: pass --file or pipe one on stdin")

    return stream.read()
